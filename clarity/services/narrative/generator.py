"""Narrative pane generators."""

import logging
from typing import Protocol

from anthropic import AsyncAnthropic
from pydantic import ValidationError

from clarity.config.archetypes import get_profile
from clarity.config.constants import (
    CORRECTION_PROMPT_THRESHOLD,
    CORRECTION_QUESTION,
    MAX_WHAT_IT_COSTS,
    MAX_WHAT_TO_FIX_FIRST,
    MAX_WHATS_HAPPENING,
)
from clarity.config.prompts import build_narrative_prompt, build_narrative_system_prompt
from clarity.config.settings import Settings
from clarity.infrastructure.llm.client import create_anthropic_client, run_completion
from clarity.services.enrichment.models import EvidenceNugget
from clarity.services.narrative.models import CorrectionPrompt, SnapshotPanes
from clarity.services.scoring.models import Classification
from clarity.utils.json_parser import JSONParser

logger = logging.getLogger(__name__)


class Narrator(Protocol):
    """Anything that turns a classification into panes."""

    async def generate_panes(
        self,
        classification: Classification,
        nuggets: list[EvidenceNugget] | None = None,
        business_label: str | None = None,
    ) -> SnapshotPanes: ...

    async def close(self) -> None: ...


def build_correction_prompt(classification: Classification) -> CorrectionPrompt | None:
    """Top vs runner-up prompt, only when confidence is below the threshold."""
    if classification.confidence >= CORRECTION_PROMPT_THRESHOLD:
        return None
    top = get_profile(classification.top_archetype)
    runner_up = get_profile(classification.runner_up_archetype)
    return CorrectionPrompt(
        question=CORRECTION_QUESTION,
        option_a=top.recognition_signals[0],
        option_b=runner_up.recognition_signals[0],
    )


class ProfileNarrator:
    """Builds panes straight from the archetype profiles. Never fails."""

    def build(self, classification: Classification) -> SnapshotPanes:
        profile = get_profile(classification.top_archetype)
        return SnapshotPanes(
            whats_happening=list(profile.recognition_signals[:MAX_WHATS_HAPPENING]),
            what_it_costs=list(profile.typical_costs[:2]),
            what_to_fix_first=list(profile.first_fixes[:1]),
            correction_prompt=build_correction_prompt(classification),
        )

    async def generate_panes(
        self,
        classification: Classification,
        nuggets: list[EvidenceNugget] | None = None,
        business_label: str | None = None,
    ) -> SnapshotPanes:
        return self.build(classification)

    async def close(self) -> None:
        return None


class LLMNarrator:
    """Generates panes with Claude, falling back to profile panes on any failure."""

    def __init__(self, settings: Settings, client: AsyncAnthropic | None = None):
        self.settings = settings
        self.client = client or create_anthropic_client(settings)
        self.fallback = ProfileNarrator()

    async def close(self) -> None:
        await self.client.close()

    async def generate_panes(
        self,
        classification: Classification,
        nuggets: list[EvidenceNugget] | None = None,
        business_label: str | None = None,
    ) -> SnapshotPanes:
        """
        Generate panes for a classification.

        Args:
            classification: Scored classification
            nuggets: Evidence nuggets, if any arrived
            business_label: Optional business name supplied by the caller

        Returns:
            SnapshotPanes with pane limits enforced
        """
        user_prompt = build_narrative_prompt(
            classification,
            get_profile(classification.top_archetype),
            get_profile(classification.runner_up_archetype),
            nuggets=nuggets,
            business_label=business_label,
        )

        try:
            text = await run_completion(
                self.client,
                model=self.settings.narrative_model,
                system_prompt=build_narrative_system_prompt(),
                user_prompt=user_prompt,
                max_tokens=self.settings.narrative_max_tokens,
                temperature=self.settings.narrative_temperature,
                max_retries=self.settings.narrative_max_retries,
            )
        except Exception as e:
            logger.error("Narrative generation failed: %s", e, exc_info=True)
            return self.fallback.build(classification)

        try:
            panes = SnapshotPanes.model_validate(JSONParser.extract_json(text))
        except ValidationError as e:
            logger.warning("Narrative response did not match the pane schema: %s", e)
            return self.fallback.build(classification)

        if not panes.whats_happening or not panes.what_to_fix_first:
            logger.warning("Narrative response had empty panes, using profile panes")
            return self.fallback.build(classification)

        return self._enforce_limits(panes, classification)

    @staticmethod
    def _enforce_limits(panes: SnapshotPanes, classification: Classification) -> SnapshotPanes:
        correction = panes.correction_prompt
        if classification.confidence >= CORRECTION_PROMPT_THRESHOLD:
            correction = None
        elif correction is None:
            correction = build_correction_prompt(classification)
        return SnapshotPanes(
            whats_happening=panes.whats_happening[:MAX_WHATS_HAPPENING],
            what_it_costs=panes.what_it_costs[:MAX_WHAT_IT_COSTS],
            what_to_fix_first=panes.what_to_fix_first[:MAX_WHAT_TO_FIX_FIRST],
            correction_prompt=correction,
        )
