"""Calendar bucketing for volume series (daily, monthly, yearly, all time)."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from enum import Enum
from typing import Iterable

from .models import ChartDataPoint, ChartDataSet


class TimeFrame(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    ALL_TIME = "all_time"

    @classmethod
    def parse(cls, value: str) -> "TimeFrame":
        normalized = value.strip().lower().replace("-", "_")
        for member in cls:
            if member.value == normalized:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"time frame must be one of: {allowed}")


def bucket_start(moment: datetime, time_frame: TimeFrame) -> datetime:
    """Midnight at the start of the day, month or year containing ``moment``."""
    if time_frame is TimeFrame.ALL_TIME:
        return moment
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    if time_frame is TimeFrame.DAILY:
        return midnight
    if time_frame is TimeFrame.MONTHLY:
        return midnight.replace(day=1)
    return midnight.replace(month=1, day=1)


def _bucket_points(points: Iterable[ChartDataPoint], time_frame: TimeFrame) -> tuple[ChartDataPoint, ...]:
    buckets: dict[datetime, float] = defaultdict(float)
    for point in points:
        buckets[bucket_start(point.date, time_frame)] += point.volume
    return tuple(ChartDataPoint(date=d, volume=buckets[d]) for d in sorted(buckets))


def apply_time_frame(datasets: Iterable[ChartDataSet], time_frame: TimeFrame) -> list[ChartDataSet]:
    """Sum each series' points per calendar bucket; ALL_TIME leaves them as is."""
    if time_frame is TimeFrame.ALL_TIME:
        return list(datasets)
    return [
        ChartDataSet(name=dataset.name, points=_bucket_points(dataset.points, time_frame))
        for dataset in datasets
    ]
