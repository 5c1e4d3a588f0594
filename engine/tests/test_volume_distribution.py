"""Tests for per-set tiered volume distribution."""

import pytest

from progression_engine.volume_distribution import (
    PRIMARY_WEIGHT,
    SECONDARY_WEIGHT,
    TERTIARY_WEIGHT,
    distribute,
    total_points,
)

from .factories import make_exercise, make_set


class TestTotalPoints:
    def test_all_tiers(self):
        ex = make_exercise(primary=("a",), secondary=("b",), tertiary=("c",))
        assert total_points(ex) == PRIMARY_WEIGHT + SECONDARY_WEIGHT + TERTIARY_WEIGHT == 100

    def test_empty_tertiary_excluded(self):
        ex = make_exercise(primary=("a",), secondary=("b", "c"))
        assert total_points(ex) == 90

    def test_only_tertiary(self):
        ex = make_exercise(primary=(), tertiary=("c",))
        assert total_points(ex) == 10

    def test_no_muscles(self):
        assert total_points(make_exercise(primary=())) == 0


class TestDistribute:
    def test_worked_example(self):
        # 10 x 100 = 1000; 1 primary, 2 secondary, tertiary empty -> 90 points
        ex = make_exercise(primary=("chest",), secondary=("triceps", "front_delt"))
        result = distribute(make_set("bench_press", 10, 100.0), ex)
        assert result["chest"] == pytest.approx(666.6667, rel=1e-6)
        assert result["triceps"] == pytest.approx(166.6667, rel=1e-6)
        assert result["front_delt"] == pytest.approx(166.6667, rel=1e-6)
        assert set(result) == {"chest", "triceps", "front_delt"}

    def test_full_tiers_split_60_30_10(self):
        ex = make_exercise(primary=("a",), secondary=("b",), tertiary=("c",))
        result = distribute(make_set("bench_press", 10, 10.0), ex)
        assert result == pytest.approx({"a": 60.0, "b": 30.0, "c": 10.0})

    def test_single_tier_gets_everything(self):
        ex = make_exercise(primary=(), secondary=("b",))
        result = distribute(make_set("bench_press", 5, 20.0), ex)
        assert result == pytest.approx({"b": 100.0})

    def test_even_split_within_tier(self):
        ex = make_exercise(primary=("a", "b", "c", "d"))
        result = distribute(make_set("bench_press", 4, 25.0), ex)
        assert result == pytest.approx({"a": 25.0, "b": 25.0, "c": 25.0, "d": 25.0})

    def test_zero_reps_returns_empty(self):
        ex = make_exercise(primary=("a",))
        assert distribute(make_set("bench_press", 0, 100.0), ex) == {}

    def test_zero_weight_returns_empty(self):
        ex = make_exercise(primary=("a",))
        assert distribute(make_set("bench_press", 8, 0.0), ex) == {}

    def test_no_muscles_returns_empty(self):
        ex = make_exercise(primary=())
        assert distribute(make_set("bench_press", 10, 1e12), ex) == {}

    def test_muscle_in_two_tiers_sums(self):
        ex = make_exercise(primary=("a",), secondary=("a", "b"))
        result = distribute(make_set("bench_press", 9, 10.0), ex)
        # 90 volume, 90 points: a gets 60 + 15, b gets 15
        assert result == pytest.approx({"a": 75.0, "b": 15.0})

    def test_negative_weight_flows_through(self):
        ex = make_exercise(primary=("a",), secondary=("b",))
        result = distribute(make_set("bench_press", 10, -9.0), ex)
        assert result == pytest.approx({"a": -60.0, "b": -30.0})

    def test_conservation(self):
        ex = make_exercise(primary=("a", "b"), secondary=("c",), tertiary=("d", "e", "f"))
        result = distribute(make_set("bench_press", 7, 82.5), ex)
        assert sum(result.values()) == pytest.approx(7 * 82.5)
