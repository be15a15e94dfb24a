"""Pydantic schemas for content assets, pinning rules and search results."""

from datetime import datetime
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from content_engine.core.capabilities import Capability, is_capability

AssetType = Literal["case_study", "video", "article", "deck", "diagram", "guide"]

MAX_SECONDARY_CAPABILITIES = 2


class AssetMetadata(BaseModel):
    """Derived fields attached to an asset during ingestion and categorization.

    Unknown keys are kept so ingestion can add fields without a schema change.
    Values the search path relies on are normalized here: unknown capability
    tags are dropped and quality scores outside 1-5 are treated as absent.
    """

    model_config = ConfigDict(extra="allow")

    primary_capability: Capability | None = Field(
        default=None, description="Main business capability of the asset"
    )
    secondary_capabilities: list[Capability] = Field(
        default_factory=list, description="Up to two additional capabilities"
    )
    content_type: AssetType | None = Field(
        default=None, description="Content type assigned at categorization"
    )
    is_case_study: bool = Field(default=False, description="Asset is a client case study")
    quality_score: int | None = Field(default=None, description="Quality score 1-5")
    source_file: str | None = None
    ingested_at: str | None = None
    chunk_count: int | None = None
    categorized_at: str | None = None

    @field_validator("primary_capability", mode="before")
    @classmethod
    def _known_primary(cls, v: Any) -> Any:
        return v if is_capability(v) else None

    @field_validator("secondary_capabilities", mode="before")
    @classmethod
    def _known_secondary(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            return []
        known = [item for item in v if is_capability(item)]
        return known[:MAX_SECONDARY_CAPABILITIES]

    @field_validator("content_type", mode="before")
    @classmethod
    def _known_content_type(cls, v: Any) -> Any:
        return v if v in get_args(AssetType) else None

    @field_validator("is_case_study", mode="before")
    @classmethod
    def _coerce_flag(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("true", "1", "yes")
        return bool(v)

    @field_validator("quality_score", mode="before")
    @classmethod
    def _bounded_quality(cls, v: Any) -> int | None:
        if v is None or isinstance(v, bool):
            return None
        try:
            score = float(v)
        except (TypeError, ValueError):
            return None
        return int(score) if 1 <= score <= 5 else None


class Asset(BaseModel):
    """A content item served by the site."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Stable unique asset id")
    type: AssetType = Field(..., description="Asset type")
    title: str = Field(..., description="Display title")
    client: str | None = Field(default=None, description="Client name")
    description: str | None = None
    content: str | None = Field(default=None, description="Full text content")
    metadata: AssetMetadata = Field(default_factory=AssetMetadata)
    thumbnail_url: str | None = None
    source_url: str | None = None
    pdf_url: str | None = None
    vimeo_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        return str(v) if v is not None else v

    @field_validator("metadata", mode="before")
    @classmethod
    def _empty_metadata(cls, v: Any) -> Any:
        return v if v is not None else {}

    @property
    def is_case_study(self) -> bool:
        """True when typed as a case study or flagged as one in metadata."""
        return (
            self.type == "case_study"
            or self.metadata.content_type == "case_study"
            or self.metadata.is_case_study
        )


class PinningRule(BaseModel):
    """Manual keyword override forcing an asset into results."""

    model_config = ConfigDict(extra="ignore")

    keyword: str = Field(..., description="Case-insensitive substring to look for in queries")
    asset_id: str = Field(..., description="Asset to pin when the keyword matches")
    priority: int = Field(default=0, description="Higher priority pins come first")
    id: str | None = None
    created_at: datetime | None = None

    @field_validator("asset_id", "id", mode="before")
    @classmethod
    def _uuid_as_str(cls, v: Any) -> Any:
        return str(v) if v is not None else v

    def matches(self, query: str) -> bool:
        """Return True if the rule keyword occurs in the query (case-insensitive)."""
        if not self.keyword.strip():
            return False
        return self.keyword.lower() in query.lower()


class SearchResult(BaseModel):
    """One ranked asset from vector search."""

    asset: Asset
    similarity: float = Field(..., description="Boosted similarity score (0-1)")
    chunk_text: str = Field(default="", description="Chunk text that matched the query")


class PinnedSearchResult(BaseModel):
    """Pinned assets plus ranked search results for one query."""

    pinned: list[Asset] = Field(default_factory=list)
    searched: list[SearchResult] = Field(default_factory=list)
    detected_capability: Capability | None = None

    @property
    def assets(self) -> list[Asset]:
        """Pinned assets followed by searched assets, in render order."""
        return [*self.pinned, *(result.asset for result in self.searched)]
