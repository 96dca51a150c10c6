"""Cache management endpoints."""

import logging

from fastapi import APIRouter, Depends

from clarity.api.dependencies import get_pipeline
from clarity.api.models import CacheStatsResponse
from clarity.orchestrator.pipeline import SnapshotPipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=CacheStatsResponse)
async def get_cache_stats(
    pipeline: SnapshotPipeline = Depends(get_pipeline),
) -> CacheStatsResponse:
    """Return response cache hit/miss statistics."""
    return CacheStatsResponse.from_stats(pipeline.cache.get_stats())


@router.delete("")
async def clear_cache(
    pipeline: SnapshotPipeline = Depends(get_pipeline),
) -> dict[str, str]:
    """Invalidate every cached snapshot."""
    logger.warning("Snapshot cache cleared via API request")
    pipeline.clear_cache()
    return {"message": "Cache cleared successfully", "status": "success"}
