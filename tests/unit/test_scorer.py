"""Tests for the signal scorer."""

import itertools
import time
from dataclasses import fields

import pytest

from clarity.api.models import ClassificationModel
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
from clarity.config.weights import SelectionWeights
from clarity.services.scoring.models import Selections
from clarity.services.scoring.scorer import SignalScorer


@pytest.fixture
def scorer():
    return SignalScorer()


def _selections(channels, team, scheduling, invoicing, calls, feeling):
    return Selections(
        presence_channels=frozenset(channels),
        team_shape=team,
        scheduling=scheduling,
        invoicing=invoicing,
        call_handling=calls,
        business_feeling=feeling,
    )


# ==========================================
#  ARCHETYPE SCENARIOS
# ==========================================


def test_reactive_solo_operator(scorer, reactive_solo_selections):
    result = scorer.score(reactive_solo_selections)
    assert result.top_archetype == Archetype.REACTIVE_SOLO_OPERATOR
    assert result.stage == Stage.OPERATOR
    assert result.confidence > 50
    assert "solo-operator" in result.flags
    assert "no-system" in result.flags


def test_growing_without_systems(scorer):
    result = scorer.score(
        _selections(
            ["website", "word_of_mouth"], "small_crew", "phone", "inconsistent",
            "business_phone", "stuck_in_day_to_day",
        )
    )
    assert result.top_archetype == Archetype.GROWING_WITHOUT_SYSTEMS
    assert result.stage == Stage.TRANSITIONAL
    assert "small-team" in result.flags


def test_tool_heavy_insight_light(scorer):
    result = scorer.score(
        _selections(
            ["website", "listing"], "growing_team", "job_software", "job_software",
            "someone_screens", "dont_trust_numbers",
        )
    )
    assert result.top_archetype == Archetype.TOOL_HEAVY_INSIGHT_LIGHT
    assert "data-quality-issue" in result.flags


def test_marketing_led_chaos(scorer):
    result = scorer.score(
        _selections(
            ["website", "social", "listing"], "small_crew", "calendar_app", "accounting_app",
            "missed_calls_often", "reactive_all_the_time",
        )
    )
    assert result.top_archetype == Archetype.MARKETING_LED_CHAOS
    assert "lead-handling-risk" in result.flags
    assert "capacity-issue" in result.flags


def test_delegation_without_visibility(scorer):
    result = scorer.score(
        _selections(
            ["website"], "growing_team", "someone_else", "job_software",
            "someone_screens", "something_off_cant_name",
        )
    )
    assert result.top_archetype == Archetype.DELEGATION_WITHOUT_VISIBILITY
    assert "delegated-scheduling" in result.flags
    assert "potential-blind-spots" in result.flags


def test_no_digital_presence(scorer, no_presence_selections):
    result = scorer.score(no_presence_selections)
    assert result.stage == Stage.OPERATOR
    assert result.top_archetype == Archetype.REACTIVE_SOLO_OPERATOR
    assert "no-digital-presence" in result.flags
    assert "selections-only" in result.flags
    assert "enrichment-empty" not in result.flags


def test_none_mixed_with_channels_is_not_no_presence(scorer):
    result = scorer.score(
        _selections(
            ["none", "website"], "fluctuates", "phone", "inconsistent",
            "missed_calls_often", "reactive_all_the_time",
        )
    )
    assert "no-digital-presence" not in result.flags
    assert result.top_archetype != result.runner_up_archetype
    probabilities = result.archetype_probabilities
    assert probabilities[result.top_archetype] >= probabilities[result.runner_up_archetype]


# ==========================================
#  INVARIANTS
# ==========================================


def test_probabilities_sum_to_one(scorer, reactive_solo_selections):
    result = scorer.score(reactive_solo_selections)
    assert set(result.archetype_probabilities) == set(Archetype)
    assert abs(sum(result.archetype_probabilities.values()) - 1.0) < 1e-9
    assert all(p >= 0 for p in result.archetype_probabilities.values())


def test_top_is_highest_probability(scorer, reactive_solo_selections):
    result = scorer.score(reactive_solo_selections)
    top_p = result.archetype_probabilities[result.top_archetype]
    assert top_p == max(result.archetype_probabilities.values())


def test_deterministic_and_order_insensitive(scorer):
    channels = ["website", "listing", "social", "word_of_mouth"]
    first = scorer.score(
        _selections(channels, "office_plus_field", "job_software", "job_software",
                    "someone_screens", "dont_trust_numbers")
    )
    second = scorer.score(
        _selections(list(reversed(channels)), "office_plus_field", "job_software",
                    "job_software", "someone_screens", "dont_trust_numbers")
    )
    assert first == second
    assert first.flags == tuple(sorted(first.flags))


def test_confidence_bounds(scorer, reactive_solo_selections):
    low = scorer.score(reactive_solo_selections, 0.0)
    high = scorer.score(reactive_solo_selections, 1.0)
    assert 0 <= low.confidence <= 100
    assert 0 <= high.confidence <= 100


def test_confidence_monotone_in_evidence(scorer, reactive_solo_selections):
    previous = -1
    for strength in (0.0, 0.1, 0.3, 0.5, 0.8, 1.0):
        confidence = scorer.score(reactive_solo_selections, strength).confidence
        assert confidence >= previous
        previous = confidence


def test_evidence_raises_confidence(scorer):
    selections = _selections(
        ["word_of_mouth"], "solo", "memory", "paper", "personal_phone", "busy_no_progress"
    )
    without = scorer.score(selections, 0.0)
    with_evidence = scorer.score(selections, 0.8, references_supplied=True)
    assert with_evidence.confidence > without.confidence


def test_evidence_strength_is_clamped(scorer, reactive_solo_selections):
    assert scorer.score(reactive_solo_selections, 5.0).evidence_strength == 1.0
    assert scorer.score(reactive_solo_selections, -1.0).evidence_strength == 0.0


def test_enrichment_empty_vs_selections_only(scorer, reactive_solo_selections):
    supplied = scorer.score(reactive_solo_selections, 0.0, references_supplied=True)
    assert "enrichment-empty" in supplied.flags
    assert "selections-only" not in supplied.flags

    corroborated = scorer.score(reactive_solo_selections, 0.5, references_supplied=True)
    assert "enrichment-empty" not in corroborated.flags
    assert "selections-only" not in corroborated.flags


def test_scoring_under_50ms(scorer):
    selections = _selections(
        ["website", "social"], "small_crew", "calendar_app", "accounting_app",
        "business_phone", "stuck_in_day_to_day",
    )
    scorer.score(selections)
    start = time.perf_counter()
    for _ in range(100):
        scorer.score(selections, 0.3)
    average_ms = (time.perf_counter() - start) * 1000 / 100
    assert average_ms < 50


# ==========================================
#  EXHAUSTIVE SWEEP
# ==========================================


def _all_channel_sets():
    channels = list(PresenceChannel)
    for size in range(1, len(channels) + 1):
        yield from itertools.combinations(channels, size)


def test_invariants_hold_for_every_selection(scorer):
    checked = 0
    for channels, team, scheduling, invoicing, calls, feeling in itertools.product(
        list(_all_channel_sets()),
        TeamShape,
        SchedulingMethod,
        InvoicingMethod,
        CallHandling,
        BusinessFeeling,
    ):
        selections = _selections(channels, team, scheduling, invoicing, calls, feeling)
        weak = scorer.score(selections, 0.2, references_supplied=True)
        strong = scorer.score(selections, 0.8, references_supplied=True)

        probabilities = weak.archetype_probabilities
        assert abs(sum(probabilities.values()) - 1.0) < 1e-9, selections
        assert all(0.0 <= p <= 1.0 for p in probabilities.values()), selections
        assert probabilities[weak.top_archetype] == max(probabilities.values()), selections
        assert weak.top_archetype != weak.runner_up_archetype, selections
        others = [p for a, p in probabilities.items() if a != weak.top_archetype]
        assert probabilities[weak.runner_up_archetype] == max(others), selections
        assert "low-signal" not in weak.flags, selections
        assert 0 <= weak.confidence <= strong.confidence <= 100, selections
        checked += 1

    assert checked == 31 * 5 * 5 * 4 * 5 * 7


# ==========================================
#  EDGE CONDITIONS (injected tables)
# ==========================================


def test_zero_table_falls_back_to_uniform(reactive_solo_selections):
    scorer = SignalScorer(weights={}, flag_increments={})
    result = scorer.score(reactive_solo_selections)

    assert "low-signal" in result.flags
    expected = 1.0 / len(Archetype)
    assert all(abs(p - expected) < 1e-12 for p in result.archetype_probabilities.values())
    assert result.top_archetype == Archetype.REACTIVE_SOLO_OPERATOR
    assert result.runner_up_archetype == Archetype.GROWING_WITHOUT_SYSTEMS
    assert result.stage == Stage.OPERATOR
    assert result.confidence == 15


def test_ties_resolve_by_declaration_order(reactive_solo_selections):
    weights = {
        (SelectionField.TEAM_SHAPE, "solo"): SelectionWeights(
            operator=1.0,
            transitional=1.0,
            archetypes={
                Archetype.STABLE_BUT_STAGNANT: 0.5,
                Archetype.GROWING_WITHOUT_SYSTEMS: 0.5,
            },
        ),
    }
    result = SignalScorer(weights=weights, flag_increments={}).score(reactive_solo_selections)

    assert result.top_archetype == Archetype.GROWING_WITHOUT_SYSTEMS
    assert result.runner_up_archetype == Archetype.STABLE_BUT_STAGNANT
    assert result.stage == Stage.OPERATOR
    assert "ambiguous-archetype" in result.flags


def test_negative_archetype_weights_are_clamped(reactive_solo_selections):
    weights = {
        (SelectionField.TEAM_SHAPE, "solo"): SelectionWeights(
            operator=1.0,
            archetypes={
                Archetype.REACTIVE_SOLO_OPERATOR: 1.0,
                Archetype.STABLE_BUT_STAGNANT: -2.0,
            },
        ),
    }
    result = SignalScorer(weights=weights, flag_increments={}).score(reactive_solo_selections)

    assert result.archetype_probabilities[Archetype.STABLE_BUT_STAGNANT] == 0.0
    assert result.archetype_probabilities[Archetype.REACTIVE_SOLO_OPERATOR] == 1.0
    assert "low-signal" not in result.flags


def test_margin_saturates_confidence(reactive_solo_selections):
    weights = {
        (SelectionField.TEAM_SHAPE, "solo"): SelectionWeights(
            operator=1.0,
            archetypes={Archetype.REACTIVE_SOLO_OPERATOR: 1.0},
            distinctive=True,
        ),
    }
    result = SignalScorer(weights=weights, flag_increments={}).score(reactive_solo_selections)
    # floor 15 + full margin 50 + one distinctive field of six (2.5)
    assert result.confidence == 68


def test_selections_reject_unknown_values():
    with pytest.raises(ValueError):
        _selections(["billboard"], "solo", "memory", "paper", "personal_phone", "overwhelmed")
    with pytest.raises(ValueError):
        _selections([], "solo", "memory", "paper", "personal_phone", "overwhelmed")


def test_every_classification_field_is_serialised(scorer, reactive_solo_selections):
    result = scorer.score(reactive_solo_selections)
    model = ClassificationModel.from_classification(result)

    assert {f.name for f in fields(result)} == set(ClassificationModel.model_fields)
    assert model.confidence == result.confidence
    assert model.flags == list(result.flags)
