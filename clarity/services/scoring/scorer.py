"""Deterministic signal scorer.

Maps intake selections to a maturity stage, an archetype probability
distribution, a confidence percentage and a set of behavioural flags. No I/O
and no state is mutated after construction, so one instance can serve
concurrent requests.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Mapping

import numpy as np

from clarity.config.constants import (
    AMBIGUITY_EPSILON,
    CONFIDENCE_FLOOR,
    DISTINCTIVE_POINTS,
    EVIDENCE_WEIGHT,
    MARGIN_POINTS,
    MARGIN_SATURATION,
    Archetype,
    Flag,
    SelectionField,
    Stage,
)
from clarity.config.weights import FLAG_INCREMENTS, WEIGHT_TABLE, SelectionWeights, WeightTable
from clarity.services.scoring.models import Classification, Selections

logger = logging.getLogger(__name__)

_STAGES: tuple[Stage, ...] = tuple(Stage)
_ARCHETYPES: tuple[Archetype, ...] = tuple(Archetype)
_SCORING_BUDGET_MS = 50.0


@dataclass(frozen=True)
class _CompiledWeights:
    stages: np.ndarray
    archetypes: np.ndarray
    flags: tuple[str, ...]
    distinctive: bool


def _compile(key: object, weights: SelectionWeights) -> _CompiledWeights:
    stage_vector = weights.stage_vector()
    stages = np.array([stage_vector[s] for s in _STAGES], dtype=float)
    archetypes = np.array([weights.archetypes.get(a, 0.0) for a in _ARCHETYPES], dtype=float)
    if (archetypes < 0).any():
        logger.warning("Negative archetype weights for %s clamped to zero", key)
        archetypes = np.clip(archetypes, 0.0, None)
    stages.setflags(write=False)
    archetypes.setflags(write=False)
    return _CompiledWeights(stages, archetypes, tuple(weights.flags), weights.distinctive)


def _rank(values: np.ndarray) -> list[int]:
    """Indices by descending value; ties resolve by declaration order."""
    return sorted(range(len(values)), key=lambda i: (-float(values[i]), i))


class SignalScorer:
    """Scores selections against a fixed weight table."""

    def __init__(
        self,
        weights: WeightTable = WEIGHT_TABLE,
        flag_increments: Mapping[Flag, SelectionWeights] = FLAG_INCREMENTS,
    ):
        self._table = {key: _compile(key, w) for key, w in weights.items()}
        self._increments = {flag: _compile(flag, w) for flag, w in flag_increments.items()}

    def score(
        self,
        selections: Selections,
        evidence_strength: float = 0.0,
        *,
        references_supplied: bool = False,
    ) -> Classification:
        """
        Classify selections.

        Args:
            selections: Validated intake answers
            evidence_strength: Corroborating evidence in [0, 1]; values outside are clamped
            references_supplied: Whether the caller supplied any reference identifiers

        Returns:
            Classification with stage, ranked archetypes, confidence and flags
        """
        start_time = time.perf_counter()
        evidence_strength = min(1.0, max(0.0, float(evidence_strength)))

        stage_acc = np.zeros(len(_STAGES))
        archetype_acc = np.zeros(len(_ARCHETYPES))
        flags: set[str] = set()
        distinctive = 0

        for selection_field, values in selections.iter_fields():
            field_distinctive = False
            for value in values:
                entry = self._table.get((selection_field, value.value))
                if entry is None:
                    logger.warning(
                        "No weights for %s=%s, skipping", selection_field.value, value.value
                    )
                    continue
                stage_acc += entry.stages
                archetype_acc += entry.archetypes
                flags.update(entry.flags)
                field_distinctive = field_distinctive or entry.distinctive
            if field_distinctive:
                distinctive += 1

        if selections.has_no_digital_presence:
            flags.add(Flag.NO_DIGITAL_PRESENCE.value)
            increment = self._increments.get(Flag.NO_DIGITAL_PRESENCE)
            if increment is not None:
                stage_acc += increment.stages
                archetype_acc += increment.archetypes

        total = float(archetype_acc.sum())
        if total > 0:
            probabilities = archetype_acc / total
        else:
            logger.warning("Archetype scores sum to zero, falling back to uniform distribution")
            probabilities = np.full(len(_ARCHETYPES), 1.0 / len(_ARCHETYPES))
            flags.add(Flag.LOW_SIGNAL.value)

        ranking = _rank(probabilities)
        top, runner_up = ranking[0], ranking[1]
        stage = _STAGES[_rank(stage_acc)[0]]

        margin = float(probabilities[top] - probabilities[runner_up])
        if margin < AMBIGUITY_EPSILON:
            flags.add(Flag.AMBIGUOUS_ARCHETYPE.value)

        base_confidence = (
            CONFIDENCE_FLOOR
            + MARGIN_POINTS * min(1.0, margin / MARGIN_SATURATION)
            + DISTINCTIVE_POINTS * distinctive / len(SelectionField)
        )
        confidence = int(round(min(100.0, base_confidence + evidence_strength * EVIDENCE_WEIGHT)))

        if evidence_strength == 0.0:
            flags.add(
                Flag.ENRICHMENT_EMPTY.value if references_supplied else Flag.SELECTIONS_ONLY.value
            )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        if elapsed_ms > _SCORING_BUDGET_MS:
            logger.warning(
                "Scoring took %.2fms (target: <%.0fms)", elapsed_ms, _SCORING_BUDGET_MS
            )

        return Classification(
            stage=stage,
            top_archetype=_ARCHETYPES[top],
            runner_up_archetype=_ARCHETYPES[runner_up],
            archetype_probabilities={
                a: float(probabilities[i]) for i, a in enumerate(_ARCHETYPES)
            },
            confidence=confidence,
            flags=tuple(sorted(flags)),
            evidence_strength=evidence_strength,
        )
