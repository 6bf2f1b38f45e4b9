"""
Per-exercise analytics: estimated 1RM progression, best session volume and
totals, plus the synthesized status map used to highlight an exercise's
target muscles.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import pandas as pd

from .models import ExercisePerformanceEntry, MuscleStatus
from .recovery import parse_timestamp, round_half_up


def estimate_1rm(weight: float, reps: int) -> float:
    """Epley formula."""
    return weight * (1 + reps / 30)


@dataclass(frozen=True)
class ExerciseStats:
    max_1rm: float
    max_volume: float
    total_reps: int
    session_count: int
    progression: pd.DataFrame


@dataclass(frozen=True)
class ProgressSummary:
    current: float
    start: float
    change: float
    percentage_change: float
    all_time_high: float


def list_exercises(history: Iterable[ExercisePerformanceEntry]) -> list[str]:
    return sorted({e.exercise_name for e in history if e.exercise_name})


def compute_exercise_stats(
    history: Iterable[ExercisePerformanceEntry],
    exercise_name: str,
) -> ExerciseStats:
    """
    Aggregate every logged session of `exercise_name`.

    Only sets with positive weight and reps count. `progression` holds one row
    per session with a positive estimated 1RM (rounded), in chronological
    order, with the running record alongside.
    """
    sessions = [
        (parse_timestamp(e.date), e)
        for e in history
        if e.exercise_name == exercise_name
    ]
    sessions = [(ts, e) for ts, e in sessions if not pd.isna(ts)]
    sessions.sort(key=lambda item: item[0])

    max_1rm = 0.0
    max_volume = 0.0
    total_reps = 0
    points = []

    for ts, entry in sessions:
        session_1rm = 0.0
        session_volume = 0.0
        for s in entry.sets:
            if s.weight > 0 and s.reps > 0:
                session_1rm = max(session_1rm, estimate_1rm(s.weight, s.reps))
                session_volume += s.weight * s.reps
                total_reps += s.reps

        max_1rm = max(max_1rm, session_1rm)
        max_volume = max(max_volume, session_volume)

        if session_1rm > 0:
            points.append({'date': ts, 'estimated_1rm': round_half_up(session_1rm)})

    progression = pd.DataFrame(points, columns=['date', 'estimated_1rm']).astype({'estimated_1rm': 'int64'})
    progression['record_1rm'] = progression['estimated_1rm'].cummax()

    return ExerciseStats(
        max_1rm=max_1rm,
        max_volume=max_volume,
        total_reps=total_reps,
        session_count=len(sessions),
        progression=progression,
    )


def summarize_progress(values: Iterable[float]) -> Optional[ProgressSummary]:
    """Start / current / best of a chronologically ordered series."""
    values = list(values)
    if not values:
        return None

    start = values[0]
    current = values[-1]
    change = current - start
    return ProgressSummary(
        current=current,
        start=start,
        change=change,
        percentage_change=(change / start) * 100 if start != 0 else 0.0,
        all_time_high=max(values),
    )


def build_target_map(target_muscle: str, secondary_muscles: Iterable[str] = ()) -> dict[str, MuscleStatus]:
    """Status map highlighting an exercise's muscles: primary FATIGUED, secondaries RECOVERING."""
    target_map = {
        target_muscle: MuscleStatus(
            name=target_muscle, last_trained=None, recovery_percentage=0, hours_since=0.0
        )
    }
    for muscle in secondary_muscles:
        if muscle == target_muscle:
            continue
        target_map[muscle] = MuscleStatus(
            name=muscle, last_trained=None, recovery_percentage=50, hours_since=0.0
        )
    return target_map
