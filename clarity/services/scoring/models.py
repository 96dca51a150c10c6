"""Scoring service models."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from clarity.config.constants import (
    Archetype,
    BusinessFeeling,
    CallHandling,
    InvoicingMethod,
    PresenceChannel,
    SchedulingMethod,
    SelectionField,
    Stage,
    TeamShape,
)

_CHANNEL_ORDER = {channel: i for i, channel in enumerate(PresenceChannel)}


@dataclass(frozen=True)
class Selections:
    """Validated intake answers.

    Values are coerced to their enums on construction, so an unknown value
    raises ``ValueError`` here rather than reaching the scorer.
    """

    presence_channels: frozenset[PresenceChannel]
    team_shape: TeamShape
    scheduling: SchedulingMethod
    invoicing: InvoicingMethod
    call_handling: CallHandling
    business_feeling: BusinessFeeling

    def __post_init__(self) -> None:
        channels = frozenset(PresenceChannel(c) for c in self.presence_channels)
        if not channels:
            raise ValueError("presence_channels must contain at least one channel")
        object.__setattr__(self, "presence_channels", channels)
        object.__setattr__(self, "team_shape", TeamShape(self.team_shape))
        object.__setattr__(self, "scheduling", SchedulingMethod(self.scheduling))
        object.__setattr__(self, "invoicing", InvoicingMethod(self.invoicing))
        object.__setattr__(self, "call_handling", CallHandling(self.call_handling))
        object.__setattr__(self, "business_feeling", BusinessFeeling(self.business_feeling))

    @property
    def sorted_channels(self) -> tuple[PresenceChannel, ...]:
        """Presence channels in declaration order, independent of input order."""
        return tuple(sorted(self.presence_channels, key=_CHANNEL_ORDER.__getitem__))

    @property
    def has_no_digital_presence(self) -> bool:
        return self.presence_channels == frozenset({PresenceChannel.NONE})

    def iter_fields(self) -> Iterator[tuple[SelectionField, tuple[Any, ...]]]:
        """Yield each field with its selected values, in scoring order."""
        yield SelectionField.PRESENCE_CHANNELS, self.sorted_channels
        yield SelectionField.TEAM_SHAPE, (self.team_shape,)
        yield SelectionField.SCHEDULING, (self.scheduling,)
        yield SelectionField.INVOICING, (self.invoicing,)
        yield SelectionField.CALL_HANDLING, (self.call_handling,)
        yield SelectionField.BUSINESS_FEELING, (self.business_feeling,)


@dataclass(frozen=True)
class Classification:
    """Result of scoring a set of selections."""

    stage: Stage
    top_archetype: Archetype
    runner_up_archetype: Archetype
    archetype_probabilities: dict[Archetype, float]
    confidence: int
    flags: tuple[str, ...] = ()
    evidence_strength: float = 0.0
