"""Tests for per-exercise analytics."""

import pandas as pd
import pytest

from recoverystats.const import STATUS_COLORS
from recoverystats.exercise_stats import (
    build_target_map,
    compute_exercise_stats,
    estimate_1rm,
    list_exercises,
    summarize_progress,
)
from recoverystats.models import ExercisePerformanceEntry, ExerciseSet


def _session(date, exercise_name, sets, target_muscle="Chest") -> ExercisePerformanceEntry:
    return ExercisePerformanceEntry(
        date=date,
        target_muscle=target_muscle,
        exercise_name=exercise_name,
        sets=[ExerciseSet(weight=w, reps=r) for w, r in sets],
    )


def _bench_history():
    return [
        _session("2024-03-08", "Bench Press", [(105, 3), (90, 8)]),
        _session("2024-03-01", "Bench Press", [(100, 5), (0, 10), (80, 0)]),
        _session("2024-03-05", "Squat", [(140, 5)], target_muscle="Legs"),
    ]


def test_epley():
    assert estimate_1rm(100, 0) == 100
    assert estimate_1rm(100, 30) == 200
    assert estimate_1rm(90, 8) == pytest.approx(114.0)


def test_exercise_stats_aggregates_sessions():
    stats = compute_exercise_stats(_bench_history(), "Bench Press")

    assert stats.session_count == 2
    assert stats.max_1rm == pytest.approx(100 * (1 + 5 / 30))
    assert stats.max_volume == pytest.approx(105 * 3 + 90 * 8)
    # Zero-weight and zero-rep sets are ignored
    assert stats.total_reps == 5 + 3 + 8


def test_progression_is_chronological_with_running_record():
    progression = compute_exercise_stats(_bench_history(), "Bench Press").progression

    assert list(progression["date"]) == [
        pd.Timestamp("2024-03-01", tz="UTC"),
        pd.Timestamp("2024-03-08", tz="UTC"),
    ]
    assert list(progression["estimated_1rm"]) == [117, 116]
    assert list(progression["record_1rm"]) == [117, 117]


def test_sessions_without_weighted_sets_are_left_out_of_progression():
    history = [
        _session("2024-03-01", "Pull Up", [(0, 10), (0, 8)]),
        _session("2024-03-03", "Pull Up", [(10, 6)]),
    ]
    stats = compute_exercise_stats(history, "Pull Up")

    assert stats.session_count == 2
    assert len(stats.progression) == 1
    assert stats.total_reps == 6


def test_unknown_exercise_gives_empty_stats():
    stats = compute_exercise_stats(_bench_history(), "Deadlift")

    assert stats.session_count == 0
    assert stats.max_1rm == 0
    assert stats.progression.empty


def test_summarize_progress():
    summary = summarize_progress([100, 110, 105])

    assert summary.start == 100
    assert summary.current == 105
    assert summary.change == 5
    assert summary.percentage_change == pytest.approx(5.0)
    assert summary.all_time_high == 110


def test_summarize_progress_edge_cases():
    assert summarize_progress([]) is None
    assert summarize_progress([0, 50]).percentage_change == 0.0


def test_target_map_highlights_primary_and_secondaries():
    target_map = build_target_map("Chest", ["Delts", "Triceps"])

    assert list(target_map) == ["Chest", "Delts", "Triceps"]
    assert target_map["Chest"].status == "FATIGUED"
    assert target_map["Chest"].color == STATUS_COLORS["FATIGUED"]
    assert target_map["Delts"].status == "RECOVERING"
    assert target_map["Triceps"].recovery_percentage == 50


def test_target_map_keeps_primary_when_repeated_as_secondary():
    target_map = build_target_map("Quads", ["Quads", "Glutes"])
    assert target_map["Quads"].status == "FATIGUED"
    assert len(target_map) == 2


def test_list_exercises():
    assert list_exercises(_bench_history()) == ["Bench Press", "Squat"]
