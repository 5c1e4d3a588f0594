"""Muscle-volume attribution and progression aggregation for workout history."""

from .history_aggregator import (
    aggregate_volume_by_muscle,
    aggregate_volume_by_muscle_group,
    aggregate_volume_by_overall_group,
    summarize_session_by_overall_group,
)
from .max_lift import extract_max_lift
from .models import (
    ChartDataPoint,
    ChartDataSet,
    CompletedSet,
    CompletedWorkout,
    CompletedWorkoutWithSets,
    Exercise,
    MaxLiftDataPoint,
    Muscle,
    PersonalRecord,
    exercise_lookup,
    muscle_lookup,
    muscle_name_lookup,
)
from .personal_records import apply_personal_records, personal_record_updates
from .series_builder import (
    UNKNOWN_SERIES_NAME,
    build_muscle_group_series,
    build_muscle_series,
    build_overall_group_series,
    build_series,
    series_trend,
)
from .time_frames import TimeFrame, apply_time_frame
from .volume_distribution import distribute

__all__ = [
    "ChartDataPoint",
    "ChartDataSet",
    "CompletedSet",
    "CompletedWorkout",
    "CompletedWorkoutWithSets",
    "Exercise",
    "MaxLiftDataPoint",
    "Muscle",
    "PersonalRecord",
    "TimeFrame",
    "UNKNOWN_SERIES_NAME",
    "aggregate_volume_by_muscle",
    "aggregate_volume_by_muscle_group",
    "aggregate_volume_by_overall_group",
    "apply_personal_records",
    "apply_time_frame",
    "build_muscle_group_series",
    "build_muscle_series",
    "build_overall_group_series",
    "build_series",
    "distribute",
    "exercise_lookup",
    "extract_max_lift",
    "muscle_lookup",
    "muscle_name_lookup",
    "personal_record_updates",
    "series_trend",
    "summarize_session_by_overall_group",
]
