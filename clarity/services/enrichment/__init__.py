"""Evidence enrichment service."""

from clarity.services.enrichment.enricher import Enricher
from clarity.services.enrichment.models import (
    EnrichmentRequest,
    EnrichmentResult,
    EvidenceNugget,
    evidence_strength,
)

__all__ = [
    "Enricher",
    "EnrichmentRequest",
    "EnrichmentResult",
    "EvidenceNugget",
    "evidence_strength",
]
