"""Time-boxed, non-blocking enrichment orchestrator."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping

import httpx

from clarity.config.constants import SourceKind
from clarity.config.settings import Settings
from clarity.services.enrichment.models import EnrichmentRequest, EnrichmentResult, EvidenceNugget
from clarity.services.enrichment.sources import EvidenceSources

logger = logging.getLogger(__name__)

Extractor = Callable[[httpx.AsyncClient, str], Awaitable[EvidenceNugget | None]]


class Enricher:
    """Gathers evidence nuggets from every supplied reference under one deadline.

    All sources start together and race a single shared timer. Whatever has
    completed when the timer fires is kept; the rest is cancelled and its
    results discarded. ``enrich`` never raises.
    """

    def __init__(
        self,
        settings: Settings,
        extractors: Mapping[SourceKind, Extractor] | None = None,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ):
        self.settings = settings
        self.deadline = settings.enrichment_deadline
        if extractors is None:
            sources = EvidenceSources(snippet_max_chars=settings.snippet_max_chars)
            extractors = {kind: sources.for_kind(kind) for kind in SourceKind}
        self._extractors = dict(extractors)
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"User-Agent": self.settings.enrichment_user_agent},
            follow_redirects=True,
            timeout=self.settings.enrichment_source_timeout,
        )

    async def _safe_extract(
        self, kind: SourceKind, ref: str, client: httpx.AsyncClient
    ) -> EvidenceNugget | None:
        extractor = self._extractors.get(kind)
        if extractor is None:
            return None
        try:
            return await extractor(client, ref)
        except Exception as e:
            logger.warning("%s extraction failed for %r: %s", kind.value, ref, e)
            return None

    async def _gather(self, refs: dict[SourceKind, str]) -> tuple[list[EvidenceNugget], bool]:
        async with self._client_factory() as client:
            tasks = {
                kind: asyncio.create_task(self._safe_extract(kind, ref, client))
                for kind, ref in refs.items()
            }
            done, pending = await asyncio.wait(tasks.values(), timeout=self.deadline)
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        nuggets = []
        for task in tasks.values():
            if task in done and not task.cancelled():
                nugget = task.result()
                if nugget is not None:
                    nuggets.append(nugget)
        return nuggets, bool(pending)

    async def enrich(self, request: EnrichmentRequest) -> EnrichmentResult:
        """
        Collect evidence from the supplied references.

        Args:
            request: Website, listing and social references (any may be absent)

        Returns:
            EnrichmentResult with the nuggets that arrived before the deadline
        """
        refs = request.references()
        if not refs:
            return EnrichmentResult()

        start_time = time.perf_counter()
        try:
            nuggets, timed_out = await self._gather(refs)
        except Exception as e:
            logger.error("Unexpected enrichment error: %s", e, exc_info=True)
            nuggets, timed_out = [], False
        duration_ms = (time.perf_counter() - start_time) * 1000

        if timed_out:
            logger.warning(
                "Enrichment deadline of %.1fs reached, keeping %d of %d sources",
                self.deadline,
                len(nuggets),
                len(refs),
            )
        logger.info(
            "Enrichment completed in %.0fms (%d nuggets from %d references)",
            duration_ms,
            len(nuggets),
            len(refs),
        )
        return EnrichmentResult(nuggets=nuggets, duration_ms=duration_ms, timed_out=timed_out)
