"""Snapshot pipeline orchestrator."""

import asyncio
import logging
import time

from clarity.api.models import ClaritySnapshotResponse, SnapshotMetadata
from clarity.api.response import build_response
from clarity.config.constants import PipelineStep
from clarity.config.settings import Settings
from clarity.infrastructure.cache.bounded_cache import BoundedCache
from clarity.infrastructure.logging.logger import StructuredLogger
from clarity.orchestrator.fingerprint import build_fingerprint
from clarity.orchestrator.state import SnapshotState
from clarity.orchestrator.step_timer import timed_step
from clarity.services.enrichment.enricher import Enricher
from clarity.services.enrichment.models import EnrichmentRequest, evidence_strength
from clarity.services.narrative.generator import Narrator, ProfileNarrator
from clarity.services.narrative.models import SnapshotPanes
from clarity.services.scoring.models import Classification, Selections
from clarity.services.scoring.scorer import SignalScorer

logger = logging.getLogger(__name__)


class SnapshotPipeline:
    """Orchestrates one Clarity Snapshot request.

    Steps: cache lookup, scoring pass 1, time-boxed enrichment, scoring pass 2
    (only when evidence arrived), narrative, cache write. A cache hit returns
    the stored response with ``cache_hit`` set and nothing else changed.
    """

    def __init__(
        self,
        settings: Settings,
        cache: BoundedCache[ClaritySnapshotResponse],
        scorer: SignalScorer,
        enricher: Enricher,
        narrator: Narrator,
    ):
        self.settings = settings
        self.cache = cache
        self.scorer = scorer
        self.enricher = enricher
        self.narrator = narrator
        self.fallback_narrator = ProfileNarrator()
        self.step_logger = StructuredLogger(__name__)

    async def close(self) -> None:
        """Release the narrator's client."""
        try:
            await self.narrator.close()
            logger.info("Pipeline resources closed")
        except Exception as e:
            logger.error("Error closing pipeline resources: %s", e, exc_info=True)

    def clear_cache(self) -> None:
        self.cache.clear()

    async def _step_enrichment(
        self, state: SnapshotState, classification: Classification
    ) -> Classification:
        """Gather evidence and re-score when any arrived; otherwise keep pass 1."""
        with timed_step(PipelineStep.ENRICHMENT, self.step_logger) as step:
            result = await self.enricher.enrich(state.enrichment_request)
            step.set_result(
                {
                    "nuggets": len(result.nuggets),
                    "timed_out": result.timed_out,
                }
            )
        state.nuggets = list(result.nuggets)
        state.enrichment_time_ms = result.duration_ms

        if not state.nuggets:
            return classification

        state.evidence_strength = evidence_strength(state.nuggets)
        with timed_step(PipelineStep.RESCORING, self.step_logger) as step:
            rescored = self.scorer.score(
                state.selections,
                state.evidence_strength,
                references_supplied=True,
            )
            step.set_result(
                {
                    "evidence_strength": state.evidence_strength,
                    "confidence": rescored.confidence,
                }
            )
        state.scoring_time_ms += step.elapsed_ms
        return rescored

    async def _step_narrative(
        self, state: SnapshotState, classification: Classification
    ) -> SnapshotPanes:
        try:
            return await asyncio.wait_for(
                self.narrator.generate_panes(
                    classification,
                    nuggets=state.nuggets or None,
                    business_label=state.business_label,
                ),
                timeout=self.settings.narrative_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Narrative generation exceeded %.1fs, using profile panes",
                self.settings.narrative_timeout,
            )
        except Exception as e:
            self.step_logger.log_error(
                PipelineStep.NARRATIVE.value, e, {"fingerprint": state.fingerprint}
            )
        return self.fallback_narrator.build(classification)

    async def process(
        self,
        selections: Selections,
        enrichment_request: EnrichmentRequest | None = None,
        business_label: str | None = None,
        business_id: str | None = None,
    ) -> ClaritySnapshotResponse:
        """
        Produce a snapshot for one set of selections.

        Args:
            selections: Validated intake answers
            enrichment_request: Optional website, listing and social references
            business_label: Display name passed to the narrative only
            business_id: Caller identifier, part of the cache fingerprint

        Returns:
            ClaritySnapshotResponse
        """
        start_time = time.perf_counter()
        state = SnapshotState(
            selections=selections,
            enrichment_request=enrichment_request or EnrichmentRequest(),
            business_label=business_label,
            business_id=business_id,
        )
        state.fingerprint = build_fingerprint(
            selections, state.enrichment_request, business_id
        )

        with timed_step(PipelineStep.CACHE_LOOKUP, self.step_logger) as step:
            cached = self.cache.get(state.fingerprint)
            step.set_result({"fingerprint": state.fingerprint, "hit": cached is not None})
        if cached is not None:
            return cached.as_cache_hit()

        has_references = state.enrichment_request.has_references
        with timed_step(PipelineStep.SCORING, self.step_logger) as step:
            classification = self.scorer.score(
                selections, 0.0, references_supplied=has_references
            )
            step.set_result(
                {
                    "stage": classification.stage.value,
                    "top_archetype": classification.top_archetype.value,
                    "confidence": classification.confidence,
                    "flags": list(classification.flags),
                }
            )
        state.scoring_time_ms = step.elapsed_ms

        if has_references:
            classification = await self._step_enrichment(state, classification)
        state.classification = classification

        with timed_step(PipelineStep.NARRATIVE, self.step_logger) as step:
            panes = await self._step_narrative(state, classification)
            step.set_result({"correction_prompt": panes.correction_prompt is not None})
        state.panes = panes

        metadata = SnapshotMetadata(
            total_execution_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
            scoring_time_ms=round(state.scoring_time_ms, 2),
            enrichment_time_ms=(
                round(state.enrichment_time_ms, 2)
                if state.enrichment_time_ms is not None
                else None
            ),
            cache_hit=False,
            version=self.settings.snapshot_version,
        )
        response = build_response(classification, panes, state.nuggets, metadata)

        with timed_step(PipelineStep.CACHE_WRITE, self.step_logger) as step:
            self.cache.set(state.fingerprint, response)
            step.set_result({"cache_size": len(self.cache)})

        return response
