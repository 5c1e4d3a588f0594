"""Turn accumulated (date, key) -> volume maps into chart-ready series."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Literal

from .history_aggregator import (
    VolumeKey,
    aggregate_volume_by_muscle,
    aggregate_volume_by_muscle_group,
    aggregate_volume_by_overall_group,
)
from .models import (
    ChartDataPoint,
    ChartDataSet,
    CompletedWorkoutWithSets,
    Exercise,
    Muscle,
    NameLookup,
    exercise_lookup,
    muscle_lookup,
    muscle_name_lookup,
)

UNKNOWN_SERIES_NAME = "Unknown"

TrendDirection = Literal["up", "down", "flat"]


@dataclass(frozen=True)
class Trend:
    direction: TrendDirection
    delta: float


def build_series(
    accumulated: dict[VolumeKey, float],
    name_lookup: NameLookup | None = None,
) -> list[ChartDataSet]:
    """Group accumulated volume by key into one date-ordered series per key.

    With a ``name_lookup`` the key is resolved to a display name, falling back
    to ``UNKNOWN_SERIES_NAME``. Without one the key is used as the name.
    Series come back sorted by (name, key) so the output is deterministic even
    when several keys resolve to the same name.
    """
    by_key: dict[str, list[tuple[datetime, float]]] = defaultdict(list)
    for (workout_date, key), volume in accumulated.items():
        by_key[key].append((workout_date, volume))

    named: list[tuple[str, str, ChartDataSet]] = []
    for key, entries in by_key.items():
        if name_lookup is None:
            name = key
        else:
            name = name_lookup(key) or UNKNOWN_SERIES_NAME
        entries.sort(key=lambda entry: entry[0])
        points = tuple(ChartDataPoint(date=d, volume=v) for d, v in entries)
        named.append((name, key, ChartDataSet(name=name, points=points)))

    named.sort(key=lambda item: (item[0], item[1]))
    return [dataset for _, _, dataset in named]


def build_muscle_series(
    history: Iterable[CompletedWorkoutWithSets],
    exercises: Iterable[Exercise],
    muscles: Iterable[Muscle],
) -> list[ChartDataSet]:
    accumulated = aggregate_volume_by_muscle(history, exercise_lookup(exercises))
    return build_series(accumulated, muscle_name_lookup(muscles))


def build_muscle_group_series(
    history: Iterable[CompletedWorkoutWithSets],
    exercises: Iterable[Exercise],
    muscles: Iterable[Muscle],
) -> list[ChartDataSet]:
    accumulated = aggregate_volume_by_muscle(history, exercise_lookup(exercises))
    return build_series(aggregate_volume_by_muscle_group(accumulated, muscle_lookup(muscles)))


def build_overall_group_series(
    history: Iterable[CompletedWorkoutWithSets],
    exercises: Iterable[Exercise],
) -> list[ChartDataSet]:
    return build_series(aggregate_volume_by_overall_group(history, exercise_lookup(exercises)))


def series_trend(dataset: ChartDataSet) -> Trend:
    """Compare the last two points of a series."""
    if len(dataset.points) < 2:
        return Trend(direction="flat", delta=0.0)
    delta = dataset.points[-1].volume - dataset.points[-2].volume
    if delta > 0:
        return Trend(direction="up", delta=delta)
    if delta < 0:
        return Trend(direction="down", delta=delta)
    return Trend(direction="flat", delta=0.0)
