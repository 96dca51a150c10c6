"""Request/Response models for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from clarity.config.constants import (
    Archetype,
    BusinessFeeling,
    CallHandling,
    InvoicingMethod,
    PresenceChannel,
    Relevance,
    SchedulingMethod,
    SourceKind,
    Stage,
    TeamShape,
)
from clarity.services.enrichment.models import EnrichmentRequest, EvidenceNugget
from clarity.services.narrative.models import SnapshotPanes
from clarity.services.scoring.models import Classification, Selections


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SelectionsPayload(CamelModel):
    """The six intake answers."""

    presence_channels: list[PresenceChannel] = Field(..., min_length=1)
    team_shape: TeamShape
    scheduling: SchedulingMethod
    invoicing: InvoicingMethod
    call_handling: CallHandling
    business_feeling: BusinessFeeling

    def to_selections(self) -> Selections:
        return Selections(
            presence_channels=frozenset(self.presence_channels),
            team_shape=self.team_shape,
            scheduling=self.scheduling,
            invoicing=self.invoicing,
            call_handling=self.call_handling,
            business_feeling=self.business_feeling,
        )


class ClaritySnapshotRequest(CamelModel):
    """Request model for the snapshot endpoint."""

    selections: SelectionsPayload
    business_name: str | None = Field(None, max_length=200, description="Display label only")
    website_url: str | None = Field(None, max_length=2048)
    listing_url: str | None = Field(None, max_length=2048)
    social_url: str | None = Field(None, max_length=2048)
    business_id: str | None = Field(None, max_length=200)

    def enrichment_request(self) -> EnrichmentRequest:
        return EnrichmentRequest(
            website_ref=self.website_url,
            listing_ref=self.listing_url,
            social_ref=self.social_url,
        )


class ClassificationModel(CamelModel):
    """Serialised classification."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    stage: Stage
    top_archetype: Archetype
    runner_up_archetype: Archetype
    archetype_probabilities: dict[Archetype, float]
    confidence: int = Field(..., ge=0, le=100)
    flags: list[str]
    evidence_strength: float = Field(..., ge=0.0, le=1.0)

    @classmethod
    def from_classification(cls, classification: Classification) -> "ClassificationModel":
        return cls(
            stage=classification.stage,
            top_archetype=classification.top_archetype,
            runner_up_archetype=classification.runner_up_archetype,
            archetype_probabilities=dict(classification.archetype_probabilities),
            confidence=classification.confidence,
            flags=list(classification.flags),
            evidence_strength=classification.evidence_strength,
        )


class EvidenceNuggetModel(CamelModel):
    """Serialised evidence nugget."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    source_kind: SourceKind
    relevance: Relevance
    content: str

    @classmethod
    def from_nugget(cls, nugget: EvidenceNugget) -> "EvidenceNuggetModel":
        return cls(source_kind=nugget.source_kind, relevance=nugget.relevance, content=nugget.content)


class SnapshotMetadata(CamelModel):
    """Timing and provenance for one response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    total_execution_time_ms: float
    scoring_time_ms: float
    enrichment_time_ms: float | None = None
    cache_hit: bool = False
    version: str


class ClaritySnapshotResponse(CamelModel):
    """Response model for the snapshot endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    panes: SnapshotPanes
    classification: ClassificationModel
    evidence_nuggets: list[EvidenceNuggetModel] | None = None
    metadata: SnapshotMetadata

    def as_cache_hit(self) -> "ClaritySnapshotResponse":
        """Copy of this response with only ``metadata.cache_hit`` set."""
        return self.model_copy(
            update={"metadata": self.metadata.model_copy(update={"cache_hit": True})}
        )


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")


class CacheStatsResponse(BaseModel):
    """Response cache statistics."""

    size: int
    max_size: int
    ttl_seconds: float
    hits: int
    misses: int
    evictions: int
    hit_rate: float

    @classmethod
    def from_stats(cls, stats: dict[str, Any]) -> "CacheStatsResponse":
        return cls(**{name: stats[name] for name in cls.model_fields})
