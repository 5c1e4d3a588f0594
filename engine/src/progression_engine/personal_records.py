"""Personal record updates produced by finishing a session.

A set beats the standing record when it is heavier, or equally heavy with
more reps. Weight always wins over reps.
"""

from __future__ import annotations

from dataclasses import replace

from .models import CompletedWorkoutWithSets, Exercise, ExerciseLookup, PersonalRecord


def _beats(weight: float, reps: int, record: tuple[float, int]) -> bool:
    best_weight, best_reps = record
    if weight > best_weight:
        return True
    return weight == best_weight and reps > best_reps


def personal_record_updates(
    session: CompletedWorkoutWithSets,
    lookup: ExerciseLookup,
) -> dict[str, PersonalRecord]:
    """Return exercise_id -> new record, for exercises whose record improved."""
    current: dict[str, tuple[float, int]] = {}
    updated: set[str] = set()

    for completed_set in session.sets:
        if completed_set.exercise_id is None:
            continue
        exercise = lookup(completed_set.exercise_id)
        if exercise is None:
            continue
        record = current.get(exercise.exercise_id, (exercise.max_weight, exercise.max_reps))
        if _beats(completed_set.actual_weight, completed_set.actual_reps, record):
            current[exercise.exercise_id] = (completed_set.actual_weight, completed_set.actual_reps)
            updated.add(exercise.exercise_id)

    return {
        exercise_id: PersonalRecord(
            exercise_id=exercise_id,
            max_weight=current[exercise_id][0],
            max_reps=current[exercise_id][1],
        )
        for exercise_id in sorted(updated)
    }


def apply_personal_records(exercise: Exercise, record: PersonalRecord) -> Exercise:
    if record.exercise_id != exercise.exercise_id:
        raise ValueError(
            f"record for {record.exercise_id!r} does not belong to {exercise.exercise_id!r}"
        )
    return replace(exercise, max_weight=record.max_weight, max_reps=record.max_reps)
