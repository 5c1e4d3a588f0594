"""Per-set volume attribution across primary, secondary and tertiary muscles.

A set's volume (reps x weight) is split between the tiers that have at least
one muscle, proportional to fixed tier weights, then evenly across the
muscles inside each tier. Empty tiers take no share, so the full set volume
is always attributed as long as any tier is populated.
"""

from __future__ import annotations

from .models import CompletedSet, Exercise

PRIMARY_WEIGHT = 60
SECONDARY_WEIGHT = 30
TERTIARY_WEIGHT = 10


def _tiers(exercise: Exercise) -> tuple[tuple[int, tuple[str, ...]], ...]:
    return (
        (PRIMARY_WEIGHT, exercise.primary_muscle_ids),
        (SECONDARY_WEIGHT, exercise.secondary_muscle_ids),
        (TERTIARY_WEIGHT, exercise.tertiary_muscle_ids),
    )


def total_points(exercise: Exercise) -> int:
    """Sum of tier weights for tiers with at least one muscle id."""
    return sum(weight for weight, muscle_ids in _tiers(exercise) if muscle_ids)


def distribute(completed_set: CompletedSet, exercise: Exercise) -> dict[str, float]:
    """Return muscle_id -> attributed volume for one completed set.

    The caller resolves ``exercise`` from ``completed_set.exercise_id``.
    Zero set volume or an exercise without muscles yields an empty mapping.
    Negative reps or weight are not rejected and flow through the arithmetic.
    """
    set_volume = completed_set.volume
    if set_volume == 0 or not exercise.muscle_ids:
        return {}

    points = total_points(exercise)

    result: dict[str, float] = {}
    for tier_weight, muscle_ids in _tiers(exercise):
        if not muscle_ids:
            continue
        per_muscle = (set_volume * (tier_weight / points)) / len(muscle_ids)
        for muscle_id in muscle_ids:
            result[muscle_id] = result.get(muscle_id, 0.0) + per_muscle
    return result
