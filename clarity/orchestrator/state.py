"""Pipeline state model."""

from dataclasses import dataclass, field

from clarity.services.enrichment.models import EnrichmentRequest, EvidenceNugget
from clarity.services.narrative.models import SnapshotPanes
from clarity.services.scoring.models import Classification, Selections


@dataclass
class SnapshotState:
    """State object passed through the pipeline."""

    # Input
    selections: Selections
    enrichment_request: EnrichmentRequest
    business_label: str | None = None
    business_id: str | None = None
    fingerprint: str = ""

    # Scoring
    classification: Classification | None = None
    scoring_time_ms: float = 0.0

    # Enrichment
    nuggets: list[EvidenceNugget] = field(default_factory=list)
    enrichment_time_ms: float | None = None
    evidence_strength: float = 0.0

    # Narrative
    panes: SnapshotPanes | None = None
