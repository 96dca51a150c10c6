"""
Constants, enums, and static values.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class PresenceChannel(str, Enum):
    """Where customers find the business (multi-select)."""

    WEBSITE = "website"
    LISTING = "listing"
    SOCIAL = "social"
    WORD_OF_MOUTH = "word_of_mouth"
    NONE = "none"


class TeamShape(str, Enum):
    """Team structure."""

    SOLO = "solo"
    SMALL_CREW = "small_crew"
    GROWING_TEAM = "growing_team"
    OFFICE_PLUS_FIELD = "office_plus_field"
    FLUCTUATES = "fluctuates"


class SchedulingMethod(str, Enum):
    """How jobs get scheduled."""

    MEMORY = "memory"
    PHONE = "phone"
    CALENDAR_APP = "calendar_app"
    JOB_SOFTWARE = "job_software"
    SOMEONE_ELSE = "someone_else"


class InvoicingMethod(str, Enum):
    """How work gets billed."""

    PAPER = "paper"
    ACCOUNTING_APP = "accounting_app"
    JOB_SOFTWARE = "job_software"
    INCONSISTENT = "inconsistent"


class CallHandling(str, Enum):
    """How inbound calls are answered."""

    PERSONAL_PHONE = "personal_phone"
    BUSINESS_PHONE = "business_phone"
    VOICEMAIL = "voicemail"
    MISSED_CALLS_OFTEN = "missed_calls_often"
    SOMEONE_SCREENS = "someone_screens"


class BusinessFeeling(str, Enum):
    """The owner's subjective read on the business."""

    OVERWHELMED = "overwhelmed"
    BUSY_NO_PROGRESS = "busy_no_progress"
    STUCK_IN_DAY_TO_DAY = "stuck_in_day_to_day"
    DONT_TRUST_NUMBERS = "dont_trust_numbers"
    REACTIVE_ALL_THE_TIME = "reactive_all_the_time"
    SOMETHING_OFF_CANT_NAME = "something_off_cant_name"
    STEADY_BUT_FLAT = "steady_but_flat"


class Stage(str, Enum):
    """Maturity stage, lowest first. Declaration order is the tie-break priority."""

    OPERATOR = "operator"
    TRANSITIONAL = "transitional"
    MANAGED = "managed"


class Archetype(str, Enum):
    """Business archetypes. Declaration order is the tie-break priority."""

    REACTIVE_SOLO_OPERATOR = "reactive_solo_operator"
    GROWING_WITHOUT_SYSTEMS = "growing_without_systems"
    TOOL_HEAVY_INSIGHT_LIGHT = "tool_heavy_insight_light"
    DELEGATION_WITHOUT_VISIBILITY = "delegation_without_visibility"
    MARKETING_LED_CHAOS = "marketing_led_chaos"
    BUSY_PROFESSIONALIZED_BUT_BLIND = "busy_professionalized_but_blind"
    INCONSISTENT_PROCESS_INCONSISTENT_CASH = "inconsistent_process_inconsistent_cash"
    STABLE_BUT_STAGNANT = "stable_but_stagnant"


class SelectionField(str, Enum):
    """Intake fields, in scoring order."""

    PRESENCE_CHANNELS = "presence_channels"
    TEAM_SHAPE = "team_shape"
    SCHEDULING = "scheduling"
    INVOICING = "invoicing"
    CALL_HANDLING = "call_handling"
    BUSINESS_FEELING = "business_feeling"


class SourceKind(str, Enum):
    """External evidence sources."""

    WEBSITE = "website"
    LISTING = "listing"
    SOCIAL = "social"


class Relevance(str, Enum):
    """Relevance of an evidence nugget."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Flag(str, Enum):
    """Edge-condition flags raised by the scorer itself (not the weight table)."""

    NO_DIGITAL_PRESENCE = "no-digital-presence"
    LOW_SIGNAL = "low-signal"
    AMBIGUOUS_ARCHETYPE = "ambiguous-archetype"
    ENRICHMENT_EMPTY = "enrichment-empty"
    SELECTIONS_ONLY = "selections-only"


# Evidence strength contribution per nugget (summed, capped at 1.0)
RELEVANCE_CONTRIBUTION: dict[Relevance, float] = {
    Relevance.HIGH: 0.5,
    Relevance.MEDIUM: 0.3,
    Relevance.LOW: 0.1,
}

# Confidence shaping
CONFIDENCE_FLOOR = 15.0
MARGIN_POINTS = 50.0
MARGIN_SATURATION = 0.30
DISTINCTIVE_POINTS = 15.0
EVIDENCE_WEIGHT = 20.0
AMBIGUITY_EPSILON = 0.02

# Panes
CORRECTION_PROMPT_THRESHOLD = 65
CORRECTION_QUESTION = "Which describes your situation better?"
MAX_WHATS_HAPPENING = 3
MAX_WHAT_IT_COSTS = 3
MAX_WHAT_TO_FIX_FIRST = 2

CACHE_KEY_PREFIX = "clarity_snapshot"


class PipelineStep(str, Enum):
    """Snapshot pipeline steps."""

    CACHE_LOOKUP = "cache_lookup"
    SCORING = "scoring"
    ENRICHMENT = "enrichment"
    RESCORING = "rescoring"
    NARRATIVE = "narrative"
    CACHE_WRITE = "cache_write"


class PipelineStepDescription(str, Enum):
    """Snapshot pipeline step descriptions."""

    CACHE_LOOKUP = "Look up a previously computed snapshot for this fingerprint"
    SCORING = "Score the intake selections without external evidence"
    ENRICHMENT = "Gather evidence from the supplied website, listing and social references"
    RESCORING = "Re-score the selections with the gathered evidence strength"
    NARRATIVE = "Generate the narrative panes for the classification"
    CACHE_WRITE = "Store the computed snapshot"


def log_pipeline_step(step: PipelineStep) -> None:
    """Log the start of a pipeline step with its description."""
    description = PipelineStepDescription[step.name]
    logger.info("%s: %s", step.value, description.value)
