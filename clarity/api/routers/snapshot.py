"""Snapshot and health endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from clarity.api.dependencies import get_pipeline
from clarity.api.models import ClaritySnapshotRequest, ClaritySnapshotResponse, HealthResponse
from clarity.config.settings import Settings, get_settings
from clarity.orchestrator.pipeline import SnapshotPipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/clarity-snapshot",
    response_model=ClaritySnapshotResponse,
    response_model_exclude_none=True,
)
async def clarity_snapshot(
    request: ClaritySnapshotRequest,
    pipeline: SnapshotPipeline = Depends(get_pipeline),
) -> ClaritySnapshotResponse:
    """Classify intake selections and return the three-pane snapshot."""
    try:
        return await pipeline.process(
            request.selections.to_selections(),
            request.enrichment_request(),
            business_label=request.business_name,
            business_id=request.business_id,
        )
    except Exception as e:
        logger.error("Error processing clarity snapshot request: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error") from e


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Health check."""
    return HealthResponse(status="healthy", version=settings.app_version)
