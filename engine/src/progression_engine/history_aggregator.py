"""Time-keyed volume accumulation over a workout history.

Two attribution schemes coexist and are intentionally not reconciled:

- per muscle: each set is split across the exercise's muscle tiers
  (see volume_distribution)
- per overall group: each exercise's session total goes, unsplit, to the
  exercise's single overall muscle group label

Sets whose exercise cannot be resolved are skipped, never raised on.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Iterable

from .models import (
    CompletedSet,
    CompletedWorkoutWithSets,
    Exercise,
    ExerciseLookup,
    MuscleLookup,
)
from .volume_distribution import distribute

logger = logging.getLogger(__name__)

VolumeKey = tuple[datetime, str]


def _resolve_exercise(completed_set: CompletedSet, lookup: ExerciseLookup) -> Exercise | None:
    if completed_set.exercise_id is None:
        return None
    return lookup(completed_set.exercise_id)


def _note_anomaly(completed_set: CompletedSet) -> None:
    if completed_set.actual_reps < 0 or completed_set.actual_weight < 0:
        logger.debug(
            "Negative reps/weight in set %s (reps=%s, weight=%s)",
            completed_set.set_id,
            completed_set.actual_reps,
            completed_set.actual_weight,
            extra={"progression_set_id": completed_set.set_id},
        )


def aggregate_volume_by_muscle(
    history: Iterable[CompletedWorkoutWithSets],
    lookup: ExerciseLookup,
) -> dict[VolumeKey, float]:
    """Accumulate tiered per-muscle volume keyed by (completion_date, muscle_id)."""
    totals: dict[VolumeKey, float] = defaultdict(float)
    skipped = 0

    for session in history:
        workout_date = session.completion_date
        for completed_set in session.sets:
            exercise = _resolve_exercise(completed_set, lookup)
            if exercise is None:
                skipped += 1
                continue
            _note_anomaly(completed_set)
            for muscle_id, volume in distribute(completed_set, exercise).items():
                totals[(workout_date, muscle_id)] += volume

    if skipped:
        logger.debug(
            "Skipped %d set(s) with unresolved exercise",
            skipped,
            extra={"progression_skipped_sets": skipped},
        )
    return dict(totals)


def summarize_session_by_overall_group(
    session: CompletedWorkoutWithSets,
    lookup: ExerciseLookup,
) -> dict[str, float]:
    """Return overall_muscle_group -> volume for a single session.

    Volume is first summed per exercise, then each exercise total is credited
    to that exercise's overall group. Exercises with a blank group label or
    that cannot be resolved do not contribute.
    """
    per_exercise: dict[str, float] = defaultdict(float)
    exercises: dict[str, Exercise] = {}

    for completed_set in session.sets:
        exercise = _resolve_exercise(completed_set, lookup)
        if exercise is None:
            continue
        _note_anomaly(completed_set)
        exercises[exercise.exercise_id] = exercise
        per_exercise[exercise.exercise_id] += completed_set.volume

    by_group: dict[str, float] = defaultdict(float)
    for exercise_id, volume in per_exercise.items():
        group = exercises[exercise_id].overall_muscle_group.strip()
        if not group:
            continue
        by_group[group] += volume
    return dict(by_group)


def aggregate_volume_by_overall_group(
    history: Iterable[CompletedWorkoutWithSets],
    lookup: ExerciseLookup,
) -> dict[VolumeKey, float]:
    """Accumulate flat per-group volume keyed by (completion_date, group)."""
    totals: dict[VolumeKey, float] = defaultdict(float)
    for session in history:
        for group, volume in summarize_session_by_overall_group(session, lookup).items():
            totals[(session.completion_date, group)] += volume
    return dict(totals)


def aggregate_volume_by_muscle_group(
    accumulated: dict[VolumeKey, float],
    muscles: MuscleLookup,
) -> dict[VolumeKey, float]:
    """Roll per-muscle accumulation up to each muscle's overall group label."""
    totals: dict[VolumeKey, float] = defaultdict(float)
    for (workout_date, muscle_id), volume in accumulated.items():
        muscle = muscles(muscle_id)
        if muscle is None:
            continue
        group = muscle.overall_muscle_group.strip()
        if not group:
            continue
        totals[(workout_date, group)] += volume
    return dict(totals)
