"""Versioned JSON snapshot contract (progression_snapshot.v1).

A snapshot bundles the muscle catalog, the exercise catalog and the completed
workout history so a host can hand the engine data exported from any store.
Only structure is validated here. Reps and weight are not range-checked,
although NaN and infinite weights are refused. Naive completion dates are
read as UTC.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from .models import (
    ChartDataSet,
    CompletedSet,
    CompletedWorkout,
    CompletedWorkoutWithSets,
    Exercise,
    MaxLiftDataPoint,
    Muscle,
    PersonalRecord,
)

CONTRACT_VERSION_V1 = "progression_snapshot.v1"


class SnapshotError(Exception):
    def __init__(
        self,
        *,
        code: str,
        message: str,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.field = field


def _normalize_non_empty(value: str, *, field_name: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(f"{field_name} must not be empty")
    return normalized


def _normalize_id_list(values: list[str]) -> list[str]:
    seen: list[str] = []
    for value in values:
        cleaned = value.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


class MuscleV1(BaseModel):
    id: str
    name: str
    overall_muscle_group: str = ""
    is_user_added: bool = False

    @field_validator("id", "name")
    @classmethod
    def validate_required_text(cls, value: str, info: ValidationInfo) -> str:
        return _normalize_non_empty(value, field_name=info.field_name)

    @field_validator("overall_muscle_group")
    @classmethod
    def normalize_group(cls, value: str) -> str:
        return value.strip()


class ExerciseV1(BaseModel):
    id: str
    name: str
    primary_muscle_ids: list[str] = Field(default_factory=list)
    secondary_muscle_ids: list[str] = Field(default_factory=list)
    tertiary_muscle_ids: list[str] = Field(default_factory=list)
    overall_muscle_group: str = ""
    max_weight: float = Field(default=0.0, allow_inf_nan=False)
    max_reps: int = 0

    @field_validator("id", "name")
    @classmethod
    def validate_required_text(cls, value: str, info: ValidationInfo) -> str:
        return _normalize_non_empty(value, field_name=info.field_name)

    @field_validator("primary_muscle_ids", "secondary_muscle_ids", "tertiary_muscle_ids")
    @classmethod
    def normalize_muscle_ids(cls, value: list[str]) -> list[str]:
        return _normalize_id_list(value)

    @field_validator("overall_muscle_group")
    @classmethod
    def normalize_group(cls, value: str) -> str:
        return value.strip()


class CompletedSetV1(BaseModel):
    id: str
    exercise_id: str | None = None
    set_number: int
    actual_reps: int
    actual_weight: float = Field(allow_inf_nan=False)

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        return _normalize_non_empty(value, field_name="id")

    @field_validator("exercise_id")
    @classmethod
    def normalize_exercise_id(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class CompletedWorkoutV1(BaseModel):
    id: str
    workout_name: str
    completion_date: datetime
    duration_in_minutes: int = Field(default=0, ge=0)
    sets: list[CompletedSetV1] = Field(default_factory=list)

    @field_validator("id", "workout_name")
    @classmethod
    def validate_required_text(cls, value: str, info: ValidationInfo) -> str:
        return _normalize_non_empty(value, field_name=info.field_name)

    @field_validator("completion_date")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are read as UTC so every date in a snapshot compares.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class SnapshotV1(BaseModel):
    contract_version: str = CONTRACT_VERSION_V1
    muscles: list[MuscleV1] = Field(default_factory=list)
    exercises: list[ExerciseV1] = Field(default_factory=list)
    history: list[CompletedWorkoutV1] = Field(default_factory=list)

    @field_validator("contract_version")
    @classmethod
    def validate_contract_version(cls, value: str) -> str:
        if value.strip() != CONTRACT_VERSION_V1:
            raise ValueError(f"contract_version must be {CONTRACT_VERSION_V1}")
        return CONTRACT_VERSION_V1


@dataclass(frozen=True)
class Snapshot:
    muscles: tuple[Muscle, ...]
    exercises: tuple[Exercise, ...]
    history: tuple[CompletedWorkoutWithSets, ...]

    def session(self, workout_id: str) -> CompletedWorkoutWithSets | None:
        for session in self.history:
            if session.workout_id == workout_id:
                return session
        return None


def validate_snapshot_payload(payload: dict[str, Any]) -> SnapshotV1:
    return SnapshotV1.model_validate(payload)


def _first_error_field(exc: ValidationError) -> str | None:
    errors = exc.errors()
    if not errors:
        return None
    return ".".join(str(part) for part in errors[0].get("loc", ())) or None


def snapshot_from_model(model: SnapshotV1) -> Snapshot:
    muscles = tuple(
        Muscle(
            muscle_id=m.id,
            name=m.name,
            overall_muscle_group=m.overall_muscle_group,
            is_user_added=m.is_user_added,
        )
        for m in model.muscles
    )
    exercises = tuple(
        Exercise(
            exercise_id=e.id,
            name=e.name,
            primary_muscle_ids=tuple(e.primary_muscle_ids),
            secondary_muscle_ids=tuple(e.secondary_muscle_ids),
            tertiary_muscle_ids=tuple(e.tertiary_muscle_ids),
            overall_muscle_group=e.overall_muscle_group,
            max_weight=e.max_weight,
            max_reps=e.max_reps,
        )
        for e in model.exercises
    )
    history = tuple(
        CompletedWorkoutWithSets(
            completed_workout=CompletedWorkout(
                workout_id=w.id,
                workout_name=w.workout_name,
                completion_date=w.completion_date,
                duration_in_minutes=w.duration_in_minutes,
            ),
            sets=tuple(
                CompletedSet(
                    set_id=s.id,
                    completed_workout_id=w.id,
                    exercise_id=s.exercise_id,
                    set_number=s.set_number,
                    actual_reps=s.actual_reps,
                    actual_weight=s.actual_weight,
                )
                for s in w.sets
            ),
        )
        for w in model.history
    )
    return Snapshot(muscles=muscles, exercises=exercises, history=history)


def parse_snapshot(payload: Any) -> Snapshot:
    """Validate a decoded JSON payload and convert it to engine models."""
    if not isinstance(payload, dict):
        raise SnapshotError(
            code="snapshot_contract_violation",
            message="snapshot must be a JSON object",
        )
    try:
        model = validate_snapshot_payload(payload)
    except ValidationError as exc:
        raise SnapshotError(
            code="snapshot_contract_violation",
            message=str(exc),
            field=_first_error_field(exc),
        ) from exc
    return snapshot_from_model(model)


def load_snapshot(path: str | Path) -> Snapshot:
    """Read and validate a snapshot file."""
    snapshot_path = Path(path)
    try:
        raw = snapshot_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(
            code="snapshot_unreadable",
            message=f"cannot read snapshot {snapshot_path}: {exc}",
        ) from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SnapshotError(
            code="snapshot_invalid_json",
            message=f"snapshot {snapshot_path} is not valid JSON: {exc.msg} (line {exc.lineno})",
        ) from exc
    return parse_snapshot(payload)


# --- Output serialisation ---


def _round(value: float) -> float:
    return round(value, 2)


def dump_series(datasets: Iterable[ChartDataSet]) -> list[dict[str, Any]]:
    return [
        {
            "name": dataset.name,
            "points": [
                {"date": point.date.isoformat(), "volume": _round(point.volume)}
                for point in dataset.points
            ],
        }
        for dataset in datasets
    ]


def dump_max_lift(points: Iterable[MaxLiftDataPoint]) -> list[dict[str, Any]]:
    return [{"date": p.date.isoformat(), "max_weight": _round(p.max_weight)} for p in points]


def dump_records(records: dict[str, PersonalRecord]) -> list[dict[str, Any]]:
    return [
        {
            "exercise_id": record.exercise_id,
            "max_weight": _round(record.max_weight),
            "max_reps": record.max_reps,
        }
        for record in records.values()
    ]
