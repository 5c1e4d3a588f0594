"""Heaviest weight lifted per session for one exercise."""

from __future__ import annotations

from typing import Iterable

from .models import CompletedWorkoutWithSets, MaxLiftDataPoint


def extract_max_lift(
    history: Iterable[CompletedWorkoutWithSets],
    exercise_id: str,
) -> list[MaxLiftDataPoint]:
    """Return one (completion_date, max_weight) point per session, oldest first.

    Sessions without a set for ``exercise_id`` contribute nothing. Sessions
    sharing a date each keep their own point.
    """
    points: list[MaxLiftDataPoint] = []
    for session in history:
        weights = [s.actual_weight for s in session.sets if s.exercise_id == exercise_id]
        if not weights:
            continue
        points.append(MaxLiftDataPoint(date=session.completion_date, max_weight=max(weights)))
    points.sort(key=lambda p: p.date)
    return points
