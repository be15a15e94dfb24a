"""Asset search and lookup endpoints."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from content_engine.core.logging import get_logger, log_with_context
from content_engine.core.schemas_assets import PinnedSearchResult
from content_engine.core.schemas_search import AssetResponse, SearchRequest
from content_engine.core.search import AssetSearchService
from content_engine.db.assets import AssetStore

logger = get_logger(__name__)

router = APIRouter()


def get_search_service(request: Request) -> AssetSearchService:
    """Search service built at startup by the application lifespan."""
    return request.app.state.search_service


def get_asset_store(request: Request) -> AssetStore:
    """Asset store built at startup by the application lifespan."""
    return request.app.state.asset_store


@router.post("/search", response_model=PinnedSearchResult)
async def search(
    request: SearchRequest,
    service: AssetSearchService = Depends(get_search_service),
) -> PinnedSearchResult:
    """
    Search assets for a visitor query, pinned assets first.

    An empty result is a valid response meaning no relevant content.

    Raises:
        HTTPException: If the search fails outside the degraded paths
    """
    try:
        result = await service.search_with_pinning(
            request.query,
            limit=request.limit,
            asset_types=request.asset_types,
            capability=request.capability,
        )
    except Exception as e:
        log_with_context(logger, logging.ERROR, f"Search failed: {e}", query=request.query[:50])
        raise HTTPException(status_code=500, detail="Search failed") from e

    log_with_context(
        logger,
        logging.INFO,
        f"Search served {len(result.pinned)} pinned and {len(result.searched)} searched assets",
        capability=result.detected_capability,
        asset_ids=[asset.id for asset in result.assets],
    )
    return result


@router.get("/assets/{asset_id}", response_model=AssetResponse)
async def get_asset(
    asset_id: str,
    store: AssetStore = Depends(get_asset_store),
) -> AssetResponse:
    """
    Get a single asset by id.

    Raises:
        HTTPException: 404 if the asset does not exist, 500 on store errors
    """
    try:
        asset = await asyncio.to_thread(store.get_asset, asset_id)
    except Exception as e:
        logger.error(f"Error fetching asset {asset_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error") from e

    if asset is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return AssetResponse(asset=asset)
