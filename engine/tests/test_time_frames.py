"""Tests for calendar bucketing of volume series."""

from datetime import datetime, timezone

import pytest

from progression_engine.models import ChartDataPoint, ChartDataSet
from progression_engine.time_frames import TimeFrame, apply_time_frame, bucket_start

from .factories import day


def _series() -> list[ChartDataSet]:
    return [
        ChartDataSet(
            name="Pectoralis Major",
            points=(
                ChartDataPoint(day(5, month=1, hour=7), 100.0),
                ChartDataPoint(day(5, month=1, hour=18), 50.0),
                ChartDataPoint(day(20, month=1), 25.0),
                ChartDataPoint(day(3, month=2), 10.0),
                ChartDataPoint(day(3, month=2, year=2027), 1.0),
            ),
        )
    ]


class TestTimeFrameParse:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("daily", TimeFrame.DAILY),
            ("Monthly", TimeFrame.MONTHLY),
            (" yearly ", TimeFrame.YEARLY),
            ("all-time", TimeFrame.ALL_TIME),
            ("all_time", TimeFrame.ALL_TIME),
        ],
    )
    def test_accepts_known_values(self, raw, expected):
        assert TimeFrame.parse(raw) is expected

    def test_rejects_unknown(self):
        with pytest.raises(ValueError, match="time frame must be one of"):
            TimeFrame.parse("weekly")


class TestBucketStart:
    def test_daily_keeps_tz(self):
        moment = datetime(2026, 3, 14, 17, 45, 12, tzinfo=timezone.utc)
        assert bucket_start(moment, TimeFrame.DAILY) == datetime(2026, 3, 14, tzinfo=timezone.utc)

    def test_monthly(self):
        moment = datetime(2026, 3, 14, 17, 45)
        assert bucket_start(moment, TimeFrame.MONTHLY) == datetime(2026, 3, 1)

    def test_yearly(self):
        moment = datetime(2026, 3, 14, 17, 45)
        assert bucket_start(moment, TimeFrame.YEARLY) == datetime(2026, 1, 1)

    def test_all_time_is_identity(self):
        moment = datetime(2026, 3, 14, 17, 45)
        assert bucket_start(moment, TimeFrame.ALL_TIME) is moment


class TestApplyTimeFrame:
    def test_all_time_unchanged(self):
        series = _series()
        assert apply_time_frame(series, TimeFrame.ALL_TIME) == series

    def test_daily_merges_same_day_sessions(self):
        (result,) = apply_time_frame(_series(), TimeFrame.DAILY)
        assert [p.volume for p in result.points] == [150.0, 25.0, 10.0, 1.0]
        assert result.points[0].date == datetime(2026, 1, 5, tzinfo=timezone.utc)

    def test_monthly(self):
        (result,) = apply_time_frame(_series(), TimeFrame.MONTHLY)
        assert [(p.date.year, p.date.month) for p in result.points] == [(2026, 1), (2026, 2), (2027, 2)]
        assert [p.volume for p in result.points] == [175.0, 10.0, 1.0]

    def test_yearly(self):
        (result,) = apply_time_frame(_series(), TimeFrame.YEARLY)
        assert [p.volume for p in result.points] == [185.0, 1.0]
        assert result.name == "Pectoralis Major"

    def test_preserves_series_order(self):
        series = [ChartDataSet("b", (ChartDataPoint(day(1), 1.0),)), ChartDataSet("a", ())]
        assert [ds.name for ds in apply_time_frame(series, TimeFrame.MONTHLY)] == ["b", "a"]
