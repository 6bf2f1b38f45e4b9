"""Tests for the Plotly figures built from reports and exercise analytics."""

import pandas as pd

from recoverystats.const import STATUS_COLORS
from recoverystats.exercise_stats import build_target_map, compute_exercise_stats
from recoverystats.models import ExercisePerformanceEntry, ExerciseSet
from recoverystats.recovery import estimate_recovery
from recoverystats.visualizations import RecoveryVisualizer

NOW = pd.Timestamp("2024-06-01 12:00", tz="UTC")


def _report():
    history = [ExercisePerformanceEntry(date=NOW - pd.Timedelta(hours=2), target_muscle="Legs")]
    return estimate_recovery(history, now=NOW)


def test_recovery_chart_has_one_bar_per_muscle():
    fig = RecoveryVisualizer(_report()).create_recovery_chart()

    bars = fig.data[0]
    assert len(bars.y) == 11
    # Ascending from the bottom: most fatigued at the top of the chart
    assert list(bars.x) == sorted(bars.x, reverse=True)
    quads_idx = list(bars.y).index("Quads")
    assert list(bars.marker.color)[quads_idx] == STATUS_COLORS["FATIGUED"]


def test_readiness_gauge_shows_global_readiness():
    report = _report()
    fig = RecoveryVisualizer(report).create_readiness_gauge()
    assert fig.data[0].value == report.global_readiness


def test_figures_need_a_report():
    viz = RecoveryVisualizer()
    assert viz.create_recovery_chart() is None
    assert viz.create_readiness_gauge() is None


def test_exercise_progression_chart():
    history = [
        ExercisePerformanceEntry(
            date=f"2024-05-{day:02d}",
            exercise_name="Squat",
            sets=[ExerciseSet(weight=weight, reps=5)],
        )
        for day, weight in [(1, 100), (4, 110), (8, 105)]
    ]
    stats = compute_exercise_stats(history, "Squat")
    fig = RecoveryVisualizer().create_exercise_progression_chart(stats, "Squat")

    assert [trace.name for trace in fig.data] == ["Session e1RM", "e1RM Record"]
    assert list(fig.data[1].y) == [117, 128, 128]
    assert "Squat" in fig.layout.title.text


def test_exercise_progression_chart_without_data():
    stats = compute_exercise_stats([], "Squat")
    assert RecoveryVisualizer().create_exercise_progression_chart(stats, "Squat") is None


def test_target_map_chart():
    fig = RecoveryVisualizer().create_target_map_chart(build_target_map("Chest", ["Triceps"]))

    assert list(fig.data[0].x) == ["Chest", "Triceps"]
    assert list(fig.data[0].text) == ["Primary", "Secondary"]
    assert RecoveryVisualizer().create_target_map_chart({}) is None
