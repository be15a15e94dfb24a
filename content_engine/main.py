"""FastAPI application entry point."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from content_engine.api import router as api_router
from content_engine.core.config import get_settings
from content_engine.core.embeddings import EmbeddingProvider
from content_engine.core.logging import get_logger, log_with_context
from content_engine.core.search import AssetSearchService
from content_engine.db.supabase_client import create_supabase

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build external clients once and share them for the process lifetime."""
    settings = get_settings()
    supabase = create_supabase(settings)

    service = AssetSearchService.from_clients(supabase, EmbeddingProvider.from_settings(), settings)
    app.state.search_service = service
    app.state.asset_store = service.pinning.store
    await asyncio.to_thread(service.vector_store.negotiate, settings.EMBEDDING_DIM)
    log_with_context(logger, logging.INFO, "Content engine started", env=settings.CONTENT_ENGINE_ENV)
    yield


app = FastAPI(
    title="Content Engine",
    description="Asset retrieval and ranking for the marketing site",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


app.include_router(api_router, prefix="/v1", tags=["v1"])
