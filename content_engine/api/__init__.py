"""API router for v1 endpoints."""

from fastapi import APIRouter

from content_engine.api import search

router = APIRouter()

router.include_router(search.router, tags=["search"])
