"""Narrative pane generation."""

from clarity.services.narrative.generator import LLMNarrator, Narrator, ProfileNarrator
from clarity.services.narrative.models import CorrectionPrompt, SnapshotPanes

__all__ = [
    "CorrectionPrompt",
    "LLMNarrator",
    "Narrator",
    "ProfileNarrator",
    "SnapshotPanes",
]
