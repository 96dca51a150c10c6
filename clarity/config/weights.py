"""
Hand-authored scoring weights for every (intake field, selected value) pair.

Stage contributions are signed; archetype contributions are non-negative so the
archetype accumulator can be normalised by its sum. The business feeling is the
strongest signal, so its values carry twice the magnitude of the other fields.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from clarity.config.constants import (
    Archetype,
    BusinessFeeling,
    CallHandling,
    Flag,
    InvoicingMethod,
    PresenceChannel,
    SchedulingMethod,
    SelectionField,
    Stage,
    TeamShape,
)

A = Archetype


@dataclass(frozen=True)
class SelectionWeights:
    """Contribution vector of a single selected value."""

    operator: float = 0.0
    transitional: float = 0.0
    managed: float = 0.0
    archetypes: Mapping[Archetype, float] = field(default_factory=dict)
    flags: tuple[str, ...] = ()
    distinctive: bool = False

    def stage_vector(self) -> dict[Stage, float]:
        return {
            Stage.OPERATOR: self.operator,
            Stage.TRANSITIONAL: self.transitional,
            Stage.MANAGED: self.managed,
        }


WeightTable = Mapping[tuple[SelectionField, str], SelectionWeights]


_PRESENCE: dict[PresenceChannel, SelectionWeights] = {
    PresenceChannel.WEBSITE: SelectionWeights(
        operator=-0.2, transitional=0.3, managed=0.4,
        archetypes={A.STABLE_BUT_STAGNANT: 0.1, A.TOOL_HEAVY_INSIGHT_LIGHT: 0.1},
        flags=("online-presence",),
    ),
    PresenceChannel.LISTING: SelectionWeights(
        operator=-0.1, transitional=0.2, managed=0.3,
        archetypes={A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.15},
        flags=("reputation-visible",),
    ),
    PresenceChannel.SOCIAL: SelectionWeights(
        operator=0.0, transitional=0.1, managed=0.1,
        archetypes={A.MARKETING_LED_CHAOS: 0.2},
        flags=("social-active",),
    ),
    PresenceChannel.WORD_OF_MOUTH: SelectionWeights(
        operator=0.4, transitional=0.1, managed=-0.2,
        archetypes={A.REACTIVE_SOLO_OPERATOR: 0.3, A.GROWING_WITHOUT_SYSTEMS: 0.2},
        flags=("referral-dependent",),
        distinctive=True,
    ),
    PresenceChannel.NONE: SelectionWeights(
        operator=0.4, transitional=0.0, managed=-0.4,
        archetypes={A.REACTIVE_SOLO_OPERATOR: 0.2, A.GROWING_WITHOUT_SYSTEMS: 0.2},
        flags=("visibility-low",),
        distinctive=True,
    ),
}

_TEAM: dict[TeamShape, SelectionWeights] = {
    TeamShape.SOLO: SelectionWeights(
        operator=1.0, transitional=-0.3, managed=-0.8,
        archetypes={
            A.REACTIVE_SOLO_OPERATOR: 0.5,
            A.INCONSISTENT_PROCESS_INCONSISTENT_CASH: 0.2,
        },
        flags=("solo-operator", "scale-ceiling"),
        distinctive=True,
    ),
    TeamShape.SMALL_CREW: SelectionWeights(
        operator=0.2, transitional=0.6, managed=-0.2,
        archetypes={A.GROWING_WITHOUT_SYSTEMS: 0.4, A.DELEGATION_WITHOUT_VISIBILITY: 0.2},
        flags=("small-team", "delegation-starting"),
    ),
    TeamShape.GROWING_TEAM: SelectionWeights(
        operator=-0.5, transitional=0.7, managed=0.3,
        archetypes={
            A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.3,
            A.DELEGATION_WITHOUT_VISIBILITY: 0.3,
        },
        flags=("growing-team", "systems-needed"),
    ),
    TeamShape.OFFICE_PLUS_FIELD: SelectionWeights(
        operator=-0.7, transitional=0.3, managed=0.8,
        archetypes={
            A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.4,
            A.TOOL_HEAVY_INSIGHT_LIGHT: 0.2,
        },
        flags=("structured-org", "office-operations"),
        distinctive=True,
    ),
    TeamShape.FLUCTUATES: SelectionWeights(
        operator=0.1, transitional=0.4, managed=-0.3,
        archetypes={
            A.INCONSISTENT_PROCESS_INCONSISTENT_CASH: 0.5,
            A.MARKETING_LED_CHAOS: 0.2,
        },
        flags=("staffing-unpredictable", "demand-volatility"),
        distinctive=True,
    ),
}

_SCHEDULING: dict[SchedulingMethod, SelectionWeights] = {
    SchedulingMethod.MEMORY: SelectionWeights(
        operator=0.8, transitional=-0.2, managed=-0.6,
        archetypes={A.REACTIVE_SOLO_OPERATOR: 0.4, A.GROWING_WITHOUT_SYSTEMS: 0.3},
        flags=("manual-scheduling", "no-system"),
        distinctive=True,
    ),
    SchedulingMethod.PHONE: SelectionWeights(
        operator=0.5, transitional=0.1, managed=-0.4,
        archetypes={A.REACTIVE_SOLO_OPERATOR: 0.3, A.GROWING_WITHOUT_SYSTEMS: 0.2},
        flags=("ad-hoc-scheduling", "communication-chaos"),
        distinctive=True,
    ),
    SchedulingMethod.CALENDAR_APP: SelectionWeights(
        operator=-0.1, transitional=0.3, managed=0.2,
        archetypes={A.TOOL_HEAVY_INSIGHT_LIGHT: 0.2},
        flags=("basic-digital-tools",),
    ),
    SchedulingMethod.JOB_SOFTWARE: SelectionWeights(
        operator=-0.4, transitional=0.2, managed=0.6,
        archetypes={
            A.TOOL_HEAVY_INSIGHT_LIGHT: 0.3,
            A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.2,
        },
        flags=("job-management-system", "structured-ops"),
        distinctive=True,
    ),
    SchedulingMethod.SOMEONE_ELSE: SelectionWeights(
        operator=-0.6, transitional=0.3, managed=0.7,
        archetypes={
            A.DELEGATION_WITHOUT_VISIBILITY: 0.4,
            A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.2,
        },
        flags=("delegated-scheduling", "potential-blind-spots"),
        distinctive=True,
    ),
}

_INVOICING: dict[InvoicingMethod, SelectionWeights] = {
    InvoicingMethod.PAPER: SelectionWeights(
        operator=0.8, transitional=-0.1, managed=-0.7,
        archetypes={
            A.REACTIVE_SOLO_OPERATOR: 0.4,
            A.INCONSISTENT_PROCESS_INCONSISTENT_CASH: 0.3,
        },
        flags=("manual-invoicing", "cash-flow-risk", "no-tracking"),
        distinctive=True,
    ),
    InvoicingMethod.ACCOUNTING_APP: SelectionWeights(
        operator=0.0, transitional=0.4, managed=0.3,
        archetypes={A.TOOL_HEAVY_INSIGHT_LIGHT: 0.2, A.STABLE_BUT_STAGNANT: 0.1},
        flags=("basic-accounting", "financial-tracking"),
    ),
    InvoicingMethod.JOB_SOFTWARE: SelectionWeights(
        operator=-0.3, transitional=0.3, managed=0.5,
        archetypes={
            A.TOOL_HEAVY_INSIGHT_LIGHT: 0.3,
            A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.2,
        },
        flags=("integrated-invoicing", "operational-system"),
        distinctive=True,
    ),
    InvoicingMethod.INCONSISTENT: SelectionWeights(
        operator=0.4, transitional=0.2, managed=-0.5,
        archetypes={
            A.INCONSISTENT_PROCESS_INCONSISTENT_CASH: 0.5,
            A.GROWING_WITHOUT_SYSTEMS: 0.3,
        },
        flags=("process-inconsistency", "cash-flow-unpredictable"),
        distinctive=True,
    ),
}

_CALLS: dict[CallHandling, SelectionWeights] = {
    CallHandling.PERSONAL_PHONE: SelectionWeights(
        operator=0.7, transitional=0.0, managed=-0.6,
        archetypes={
            A.REACTIVE_SOLO_OPERATOR: 0.4,
            A.INCONSISTENT_PROCESS_INCONSISTENT_CASH: 0.2,
        },
        flags=("owner-bottleneck", "no-separation"),
        distinctive=True,
    ),
    CallHandling.BUSINESS_PHONE: SelectionWeights(
        operator=0.1, transitional=0.3, managed=0.1,
        archetypes={A.STABLE_BUT_STAGNANT: 0.1},
        flags=("basic-business-setup",),
    ),
    CallHandling.VOICEMAIL: SelectionWeights(
        operator=0.5, transitional=0.1, managed=-0.4,
        archetypes={A.REACTIVE_SOLO_OPERATOR: 0.3, A.MARKETING_LED_CHAOS: 0.3},
        flags=("lead-handling-risk", "delayed-callbacks"),
        distinctive=True,
    ),
    CallHandling.MISSED_CALLS_OFTEN: SelectionWeights(
        operator=0.3, transitional=0.3, managed=-0.3,
        archetypes={
            A.MARKETING_LED_CHAOS: 0.5,
            A.REACTIVE_SOLO_OPERATOR: 0.3,
            A.INCONSISTENT_PROCESS_INCONSISTENT_CASH: 0.2,
        },
        flags=("lead-handling-risk", "capacity-issue", "revenue-leak"),
        distinctive=True,
    ),
    CallHandling.SOMEONE_SCREENS: SelectionWeights(
        operator=-0.5, transitional=0.4, managed=0.5,
        archetypes={
            A.DELEGATION_WITHOUT_VISIBILITY: 0.3,
            A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.2,
        },
        flags=("delegated-intake", "call-screening"),
        distinctive=True,
    ),
}

_FEELING: dict[BusinessFeeling, SelectionWeights] = {
    BusinessFeeling.OVERWHELMED: SelectionWeights(
        operator=1.2, transitional=0.4, managed=-0.6,
        archetypes={
            A.REACTIVE_SOLO_OPERATOR: 1.0,
            A.GROWING_WITHOUT_SYSTEMS: 0.4,
            A.INCONSISTENT_PROCESS_INCONSISTENT_CASH: 0.2,
        },
        flags=("overload-high", "no-strategic-time"),
        distinctive=True,
    ),
    BusinessFeeling.BUSY_NO_PROGRESS: SelectionWeights(
        operator=1.0, transitional=0.6, managed=-0.6,
        archetypes={A.REACTIVE_SOLO_OPERATOR: 1.0, A.STABLE_BUT_STAGNANT: 0.6},
        flags=("treadmill-syndrome", "no-growth", "overload-high"),
        distinctive=True,
    ),
    BusinessFeeling.STUCK_IN_DAY_TO_DAY: SelectionWeights(
        operator=0.8, transitional=0.8, managed=-0.4,
        archetypes={
            A.REACTIVE_SOLO_OPERATOR: 0.8,
            A.GROWING_WITHOUT_SYSTEMS: 0.6,
            A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.4,
        },
        flags=("tactical-trap", "no-strategic-time"),
        distinctive=True,
    ),
    BusinessFeeling.DONT_TRUST_NUMBERS: SelectionWeights(
        operator=0.4, transitional=0.6, managed=0.2,
        archetypes={
            A.TOOL_HEAVY_INSIGHT_LIGHT: 1.2,
            A.DELEGATION_WITHOUT_VISIBILITY: 0.6,
            A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.6,
        },
        flags=("data-quality-issue", "insight-gap", "decision-paralysis"),
        distinctive=True,
    ),
    BusinessFeeling.REACTIVE_ALL_THE_TIME: SelectionWeights(
        operator=1.2, transitional=0.4, managed=-0.8,
        archetypes={
            A.REACTIVE_SOLO_OPERATOR: 1.0,
            A.MARKETING_LED_CHAOS: 0.8,
            A.INCONSISTENT_PROCESS_INCONSISTENT_CASH: 0.6,
        },
        flags=("reactive-mode", "no-planning", "firefighting"),
        distinctive=True,
    ),
    BusinessFeeling.SOMETHING_OFF_CANT_NAME: SelectionWeights(
        operator=0.2, transitional=0.6, managed=0.4,
        archetypes={
            A.TOOL_HEAVY_INSIGHT_LIGHT: 0.6,
            A.DELEGATION_WITHOUT_VISIBILITY: 0.8,
            A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.6,
            A.STABLE_BUT_STAGNANT: 0.4,
        },
        flags=("intuition-warning", "visibility-low", "metrics-needed"),
    ),
    BusinessFeeling.STEADY_BUT_FLAT: SelectionWeights(
        operator=0.0, transitional=0.4, managed=0.6,
        archetypes={A.STABLE_BUT_STAGNANT: 1.0, A.BUSY_PROFESSIONALIZED_BUT_BLIND: 0.2},
        flags=("no-growth", "comfort-zone"),
        distinctive=True,
    ),
}


def _build_table() -> WeightTable:
    table: dict[tuple[SelectionField, str], SelectionWeights] = {}
    sections = (
        (SelectionField.PRESENCE_CHANNELS, _PRESENCE),
        (SelectionField.TEAM_SHAPE, _TEAM),
        (SelectionField.SCHEDULING, _SCHEDULING),
        (SelectionField.INVOICING, _INVOICING),
        (SelectionField.CALL_HANDLING, _CALLS),
        (SelectionField.BUSINESS_FEELING, _FEELING),
    )
    for selection_field, entries in sections:
        for value, weights in entries.items():
            table[(selection_field, value.value)] = weights
    return MappingProxyType(table)


WEIGHT_TABLE: WeightTable = _build_table()

# Fixed increments applied when an edge flag fires
FLAG_INCREMENTS: Mapping[Flag, SelectionWeights] = MappingProxyType(
    {
        Flag.NO_DIGITAL_PRESENCE: SelectionWeights(
            operator=0.3,
            archetypes={A.REACTIVE_SOLO_OPERATOR: 0.2},
        ),
    }
)
