"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from clarity.api.routers import api_router
from clarity.config.settings import Settings, get_settings
from clarity.infrastructure.cache.bounded_cache import BoundedCache
from clarity.infrastructure.logging.logger import setup_logging
from clarity.orchestrator.pipeline import SnapshotPipeline
from clarity.services.enrichment.enricher import Enricher
from clarity.services.narrative.generator import LLMNarrator, Narrator, ProfileNarrator
from clarity.services.scoring.scorer import SignalScorer

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Validate optional configuration at startup."""
    if not settings.anthropic_api_key:
        logger.warning("No anthropic_api_key configured, narrative panes come from archetype profiles")


def build_narrator(settings: Settings) -> Narrator:
    if settings.anthropic_api_key:
        return LLMNarrator(settings)
    return ProfileNarrator()


def build_pipeline(settings: Settings) -> SnapshotPipeline:
    """Wire one pipeline with its own cache, scorer, enricher and narrator."""
    return SnapshotPipeline(
        settings=settings,
        cache=BoundedCache(
            max_size=settings.response_cache_max_size,
            ttl_seconds=settings.response_cache_ttl,
        ),
        scorer=SignalScorer(),
        enricher=Enricher(settings),
        narrator=build_narrator(settings),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    _validate_startup_config(settings)
    app.state.pipeline = build_pipeline(settings)

    yield
    logger.info("Shutting down %s", settings.app_name)
    await app.state.pipeline.close()


app = FastAPI(
    title=settings.app_name,
    description="Clarity Snapshot classification and enrichment service",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.include_router(api_router, prefix="/api")
