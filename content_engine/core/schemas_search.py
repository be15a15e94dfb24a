"""Pydantic schemas for the search API endpoints."""

from pydantic import BaseModel, Field, field_validator

from content_engine.core.capabilities import Capability
from content_engine.core.schemas_assets import Asset, AssetType


class SearchRequest(BaseModel):
    """Request schema for asset search."""

    query: str = Field(..., description="Visitor query text", min_length=1, max_length=2000)
    limit: int = Field(default=10, description="Total number of assets to return", ge=1, le=50)
    asset_types: list[AssetType] | None = Field(
        default=None, description="Only search assets of these types"
    )
    capability: Capability | None = Field(
        default=None, description="Explicit capability; detected from the query if omitted"
    )

    @field_validator("query")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Query is required")
        return stripped


class AssetResponse(BaseModel):
    """Response schema for a single asset lookup."""

    asset: Asset
