"""Core data models for the progression engine.

Everything here is an immutable value. History snapshots are owned by the
caller; the engine only reads them and builds fresh outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable


@dataclass(frozen=True)
class Muscle:
    muscle_id: str
    name: str
    overall_muscle_group: str
    is_user_added: bool = False


@dataclass(frozen=True)
class Exercise:
    """Exercise catalog entry with tiered muscle involvement.

    The three tier tuples are expected to be disjoint. An exercise without any
    muscle ids contributes no per-muscle volume.
    """

    exercise_id: str
    name: str
    primary_muscle_ids: tuple[str, ...] = ()
    secondary_muscle_ids: tuple[str, ...] = ()
    tertiary_muscle_ids: tuple[str, ...] = ()
    overall_muscle_group: str = ""  # coarse label, e.g. "Push"
    max_weight: float = 0.0
    max_reps: int = 0

    @property
    def muscle_ids(self) -> tuple[str, ...]:
        return self.primary_muscle_ids + self.secondary_muscle_ids + self.tertiary_muscle_ids


@dataclass(frozen=True)
class CompletedSet:
    set_id: str
    completed_workout_id: str
    exercise_id: str | None  # None once the exercise was deleted
    set_number: int
    actual_reps: int
    actual_weight: float

    @property
    def volume(self) -> float:
        return self.actual_reps * self.actual_weight


@dataclass(frozen=True)
class CompletedWorkout:
    workout_id: str
    workout_name: str
    completion_date: datetime
    duration_in_minutes: int = 0


@dataclass(frozen=True)
class CompletedWorkoutWithSets:
    """One completed session paired with the sets performed in it."""

    completed_workout: CompletedWorkout
    sets: tuple[CompletedSet, ...] = field(default_factory=tuple)

    @property
    def completion_date(self) -> datetime:
        return self.completed_workout.completion_date

    @property
    def workout_id(self) -> str:
        return self.completed_workout.workout_id


@dataclass(frozen=True)
class ChartDataPoint:
    date: datetime
    volume: float


@dataclass(frozen=True)
class ChartDataSet:
    name: str
    points: tuple[ChartDataPoint, ...] = ()


@dataclass(frozen=True)
class MaxLiftDataPoint:
    date: datetime
    max_weight: float


@dataclass(frozen=True)
class PersonalRecord:
    exercise_id: str
    max_weight: float
    max_reps: int


ExerciseLookup = Callable[[str], "Exercise | None"]
MuscleLookup = Callable[[str], "Muscle | None"]
NameLookup = Callable[[str], "str | None"]


def exercise_lookup(exercises: Iterable[Exercise]) -> ExerciseLookup:
    """Index an exercise catalog by id. Unknown ids resolve to None."""
    by_id = {ex.exercise_id: ex for ex in exercises}
    return by_id.get


def muscle_lookup(muscles: Iterable[Muscle]) -> MuscleLookup:
    by_id = {m.muscle_id: m for m in muscles}
    return by_id.get


def muscle_name_lookup(muscles: Iterable[Muscle]) -> NameLookup:
    """Resolve muscle ids to display names. Unknown ids resolve to None."""
    by_id = {m.muscle_id: m.name for m in muscles}
    return by_id.get
