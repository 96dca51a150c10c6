"""Tests for the time-boxed enricher."""

import asyncio
from unittest.mock import MagicMock

import httpx
import pytest

from clarity.config.constants import Relevance, SourceKind
from clarity.services.enrichment.enricher import Enricher
from clarity.services.enrichment.models import (
    EnrichmentRequest,
    EvidenceNugget,
    evidence_strength,
)


def _client_factory():
    return httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))


def _returning(kind, relevance, content, delay=0.0):
    async def extract(client, ref):
        if delay:
            await asyncio.sleep(delay)
        return EvidenceNugget(source_kind=kind, relevance=relevance, content=content)

    return extract


async def _failing(client, ref):
    raise httpx.ConnectError("connection refused")


ALL_REFS = EnrichmentRequest(
    website_ref="acme.com",
    listing_ref="https://maps.example.com/acme",
    social_ref="https://facebook.com/acme",
)


@pytest.mark.asyncio
async def test_no_references_returns_immediately(settings):
    factory = MagicMock(side_effect=AssertionError("no client should be created"))
    enricher = Enricher(settings, client_factory=factory)

    result = await enricher.enrich(EnrichmentRequest(website_ref="  "))

    assert result.nuggets == []
    assert result.timed_out is False
    factory.assert_not_called()


@pytest.mark.asyncio
async def test_all_sources_failing_returns_empty(settings):
    enricher = Enricher(
        settings,
        extractors={kind: _failing for kind in SourceKind},
        client_factory=_client_factory,
    )

    result = await enricher.enrich(ALL_REFS)

    assert result.nuggets == []
    assert result.duration_ms <= settings.enrichment_deadline * 1000 + 250


@pytest.mark.asyncio
async def test_results_in_source_order(settings):
    enricher = Enricher(
        settings,
        extractors={
            SourceKind.WEBSITE: _returning(SourceKind.WEBSITE, Relevance.HIGH, "site", 0.05),
            SourceKind.LISTING: _returning(SourceKind.LISTING, Relevance.MEDIUM, "listing"),
            SourceKind.SOCIAL: _returning(SourceKind.SOCIAL, Relevance.LOW, "social", 0.02),
        },
        client_factory=_client_factory,
    )

    result = await enricher.enrich(ALL_REFS)

    assert [n.source_kind for n in result.nuggets] == [
        SourceKind.WEBSITE,
        SourceKind.LISTING,
        SourceKind.SOCIAL,
    ]
    assert result.timed_out is False


@pytest.mark.asyncio
async def test_deadline_keeps_partial_results(settings):
    enricher = Enricher(
        settings,
        extractors={
            SourceKind.WEBSITE: _returning(SourceKind.WEBSITE, Relevance.HIGH, "site"),
            SourceKind.LISTING: _returning(SourceKind.LISTING, Relevance.MEDIUM, "slow", 10.0),
            SourceKind.SOCIAL: _failing,
        },
        client_factory=_client_factory,
    )

    result = await enricher.enrich(ALL_REFS)

    assert [n.content for n in result.nuggets] == ["site"]
    assert result.timed_out is True
    assert result.duration_ms < settings.enrichment_deadline * 1000 + 500


@pytest.mark.asyncio
async def test_only_supplied_references_are_fetched(settings):
    calls = []

    async def record(client, ref):
        calls.append(ref)
        return None

    enricher = Enricher(
        settings,
        extractors={kind: record for kind in SourceKind},
        client_factory=_client_factory,
    )

    result = await enricher.enrich(EnrichmentRequest(listing_ref="https://maps.example.com/x"))

    assert calls == ["https://maps.example.com/x"]
    assert result.nuggets == []


def test_evidence_strength_sums_and_caps():
    high = EvidenceNugget(SourceKind.WEBSITE, Relevance.HIGH, "a")
    medium = EvidenceNugget(SourceKind.LISTING, Relevance.MEDIUM, "b")
    low = EvidenceNugget(SourceKind.SOCIAL, Relevance.LOW, "c")

    assert evidence_strength([]) == 0.0
    assert evidence_strength([low]) == pytest.approx(0.1)
    assert evidence_strength([medium, low]) == pytest.approx(0.4)
    assert evidence_strength([high, medium, low]) == pytest.approx(0.9)
    assert evidence_strength([high, high, medium]) == 1.0
