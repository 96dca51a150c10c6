"""
Prompt builders for the narrative panes.
"""

from clarity.config.archetypes import ArchetypeProfile
from clarity.config.constants import (
    CORRECTION_PROMPT_THRESHOLD,
    CORRECTION_QUESTION,
)
from clarity.services.enrichment.models import EvidenceNugget
from clarity.services.scoring.models import Classification


def build_narrative_system_prompt() -> str:
    """System prompt for the "Quiet Founder" narrative voice."""
    return """You are a business clarity specialist using the "Quiet Founder" voice.

**Your Role:**
Generate short, grounded recognition statements for small business owners based on their operational patterns.

**Voice Guidelines:**
- NO hype, NO scolding, NO generic advice
- Plain language (8th grade reading level)
- Short sentences
- Specific to their situation
- No brand or tool mentions unless they appear in the evidence
- Avoid: "free audit", "optimize", "leverage", "synergy", "game-changing"

**Output Format:**
Three panes:

**whats_happening (3 bullets max)**
- Describe what you see in their operations
- Use evidence if provided

**what_it_costs (2-3 bullets)**
- Concrete costs: time, money, opportunity
- Quantify when possible (e.g., "10-15 hours/week", "30% of leads")

**what_to_fix_first (1-2 actions max)**
- ONE specific action they can start this week
- Doable without buying anything first

Return ONLY valid JSON with the keys whats_happening, what_it_costs, what_to_fix_first
and, when asked for it, correction_prompt."""


def _bullets(items: tuple[str, ...] | list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def build_narrative_prompt(
    classification: Classification,
    top_profile: ArchetypeProfile,
    runner_up_profile: ArchetypeProfile,
    nuggets: list[EvidenceNugget] | None = None,
    business_label: str | None = None,
) -> str:
    """User prompt describing one classification."""
    confidence = classification.confidence
    parts = [
        f"Generate Clarity Snapshot panes for a {classification.stage.value} stage business.",
        "",
        "**Classification:**",
        f"- Top Archetype: {classification.top_archetype.value} ({top_profile.short_name})",
        f"- Runner-Up: {classification.runner_up_archetype.value} ({runner_up_profile.short_name})",
        f"- Confidence: {confidence}%",
        f"- Key Flags: {', '.join(classification.flags)}",
        "",
        "**Archetype Profile (Top):**",
        top_profile.get_all_info_as_string(),
    ]

    if nuggets:
        parts += [
            "",
            "**Evidence from Online Presence:**",
            _bullets([f"[{n.source_kind.value}] {n.content}" for n in nuggets]),
        ]

    if business_label:
        parts += ["", f"Business Name: {business_label}"]

    parts += [
        "",
        "Generate the 3 panes using the archetype profile as a guide.",
        "Be specific to this business stage and signals.",
    ]

    if confidence < CORRECTION_PROMPT_THRESHOLD:
        parts += [
            "",
            f"**IMPORTANT:** Confidence is {confidence}%, below {CORRECTION_PROMPT_THRESHOLD}%.",
            'You MUST include a "correction_prompt" object with:',
            f'- question: "{CORRECTION_QUESTION}"',
            f"- option_a: short description from {classification.top_archetype.value}",
            f"- option_b: short description from {classification.runner_up_archetype.value}",
        ]

    return "\n".join(parts)
