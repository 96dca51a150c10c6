"""Standardized response builder for ClaritySnapshotResponse."""

from clarity.api.models import (
    ClassificationModel,
    ClaritySnapshotResponse,
    EvidenceNuggetModel,
    SnapshotMetadata,
)
from clarity.services.enrichment.models import EvidenceNugget
from clarity.services.narrative.models import SnapshotPanes
from clarity.services.scoring.models import Classification


def build_response(
    classification: Classification,
    panes: SnapshotPanes,
    nuggets: list[EvidenceNugget],
    metadata: SnapshotMetadata,
) -> ClaritySnapshotResponse:
    """Build a validated response. ``evidenceNuggets`` is omitted when nothing arrived."""
    return ClaritySnapshotResponse(
        panes=panes,
        classification=ClassificationModel.from_classification(classification),
        evidence_nuggets=[EvidenceNuggetModel.from_nugget(n) for n in nuggets] or None,
        metadata=metadata,
    )
