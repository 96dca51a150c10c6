"""Tests for the HTTP endpoints (snapshot, health, cache)."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from clarity.api.dependencies import get_pipeline
from clarity.app import app
from clarity.config.constants import SourceKind
from clarity.infrastructure.cache.bounded_cache import BoundedCache
from clarity.orchestrator.pipeline import SnapshotPipeline
from clarity.services.enrichment.enricher import Enricher
from clarity.services.narrative.generator import ProfileNarrator
from clarity.services.scoring.scorer import SignalScorer


async def _no_evidence(client, ref):
    return None


@pytest.fixture
def pipeline(settings):
    return SnapshotPipeline(
        settings=settings,
        cache=BoundedCache(),
        scorer=SignalScorer(),
        enricher=Enricher(
            settings,
            extractors={kind: _no_evidence for kind in SourceKind},
            client_factory=lambda: httpx.AsyncClient(
                transport=httpx.MockTransport(lambda request: httpx.Response(200))
            ),
        ),
        narrator=ProfileNarrator(),
    )


@pytest.fixture
def client(pipeline):
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    yield TestClient(app)
    app.dependency_overrides.clear()


# ==========================================
#  HEALTH & CACHE
# ==========================================


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_cache_stats(client, selections_payload):
    client.post("/api/clarity-snapshot", json={"selections": selections_payload})
    response = client.get("/api/cache/stats")
    assert response.status_code == 200
    body = response.json()
    assert body["size"] == 1
    assert body["max_size"] == 100


def test_cache_clear(client, pipeline, selections_payload):
    client.post("/api/clarity-snapshot", json={"selections": selections_payload})
    response = client.delete("/api/cache")
    assert response.status_code == 200
    assert response.json()["status"] == "success"
    assert len(pipeline.cache) == 0


def test_cache_clear_on_empty_cache(client):
    response = client.delete("/api/cache")
    assert response.status_code == 200


# ==========================================
#  SNAPSHOT
# ==========================================


def test_snapshot_success(client, selections_payload):
    response = client.post(
        "/api/clarity-snapshot",
        json={"selections": selections_payload, "businessName": "Acme Plumbing"},
    )
    assert response.status_code == 200
    body = response.json()

    classification = body["classification"]
    assert classification["topArchetype"] == "growing_without_systems"
    assert classification["stage"] == "transitional"
    assert "selections-only" in classification["flags"]
    assert 0 <= classification["confidence"] <= 100

    assert set(body["panes"]) >= {"whatsHappening", "whatItCosts", "whatToFixFirst"}
    assert "evidenceNuggets" not in body
    assert body["metadata"]["cacheHit"] is False
    assert "enrichmentTimeMs" not in body["metadata"]


def test_snapshot_repeat_is_cache_hit(client, selections_payload):
    first = client.post("/api/clarity-snapshot", json={"selections": selections_payload}).json()
    second = client.post("/api/clarity-snapshot", json={"selections": selections_payload}).json()

    assert second["metadata"]["cacheHit"] is True
    assert second["classification"] == first["classification"]
    assert second["panes"] == first["panes"]


def test_snapshot_with_references_reports_enrichment(client, selections_payload):
    response = client.post(
        "/api/clarity-snapshot",
        json={"selections": selections_payload, "websiteUrl": "acme.com"},
    )
    body = response.json()
    assert response.status_code == 200
    assert "enrichment-empty" in body["classification"]["flags"]
    assert "enrichmentTimeMs" in body["metadata"]


def test_snapshot_rejects_empty_channels(client, selections_payload):
    selections_payload["presenceChannels"] = []
    response = client.post("/api/clarity-snapshot", json={"selections": selections_payload})
    assert response.status_code == 422


def test_snapshot_rejects_unknown_value(client, selections_payload):
    selections_payload["teamShape"] = "army"
    response = client.post("/api/clarity-snapshot", json={"selections": selections_payload})
    assert response.status_code == 422


def test_snapshot_rejects_missing_field(client, selections_payload):
    del selections_payload["businessFeeling"]
    response = client.post("/api/clarity-snapshot", json={"selections": selections_payload})
    assert response.status_code == 422


def test_snapshot_unexpected_error_is_500(selections_payload):
    failing = MagicMock()
    failing.process = AsyncMock(side_effect=RuntimeError("boom"))
    app.dependency_overrides[get_pipeline] = lambda: failing
    try:
        response = TestClient(app).post(
            "/api/clarity-snapshot", json={"selections": selections_payload}
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
