"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from clarity.api.routers.cache import router as cache_router
from clarity.api.routers.snapshot import router as snapshot_router

api_router = APIRouter()

api_router.include_router(snapshot_router, tags=["snapshot"])
api_router.include_router(cache_router, prefix="/cache", tags=["cache"])
