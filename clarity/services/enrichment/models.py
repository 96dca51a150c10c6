"""Enrichment service models."""

from dataclasses import dataclass, field

from clarity.config.constants import RELEVANCE_CONTRIBUTION, Relevance, SourceKind


@dataclass(frozen=True)
class EvidenceNugget:
    """A short piece of externally sourced evidence about the business."""

    source_kind: SourceKind
    relevance: Relevance
    content: str


@dataclass(frozen=True)
class EnrichmentRequest:
    """Reference identifiers to gather evidence from. All optional."""

    website_ref: str | None = None
    listing_ref: str | None = None
    social_ref: str | None = None

    def references(self) -> dict[SourceKind, str]:
        """Supplied references keyed by source, blanks dropped."""
        refs = {
            SourceKind.WEBSITE: self.website_ref,
            SourceKind.LISTING: self.listing_ref,
            SourceKind.SOCIAL: self.social_ref,
        }
        return {kind: ref.strip() for kind, ref in refs.items() if ref and ref.strip()}

    @property
    def has_references(self) -> bool:
        return bool(self.references())


@dataclass(frozen=True)
class EnrichmentResult:
    """Nuggets gathered before the deadline."""

    nuggets: list[EvidenceNugget] = field(default_factory=list)
    duration_ms: float = 0.0
    timed_out: bool = False


def evidence_strength(nuggets: list[EvidenceNugget]) -> float:
    """Sum relevance contributions across nuggets, capped at 1.0."""
    total = sum(RELEVANCE_CONTRIBUTION[Relevance(n.relevance)] for n in nuggets)
    return min(1.0, total)
