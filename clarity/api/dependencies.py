"""FastAPI dependencies."""

from fastapi import Request

from clarity.orchestrator.pipeline import SnapshotPipeline


def get_pipeline(request: Request) -> SnapshotPipeline:
    """The pipeline built during application startup."""
    return request.app.state.pipeline
