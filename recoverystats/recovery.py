"""
Muscle recovery estimation.

Turns a workout history into per-muscle recovery status, a global readiness
score and a training recommendation. Everything is recomputed from scratch on
each call; nothing is cached or mutated between calls.
"""
import logging
import math

import pandas as pd

from .const import (
    DEFAULT_RECOVERY_HOURS,
    GENERIC_MAPPING,
    NEVER_TRAINED_HOURS,
    RECOMMENDATION_FULLY_RECOVERED,
    RECOMMENDATION_OTHER,
    RECOMMENDATION_RULES,
    RECOMMENDATION_SYSTEMIC,
    RECOVERY_HOURS,
    SYSTEMIC_FATIGUE_THRESHOLD,
    TRACKED_MUSCLES,
    UNKNOWN_MUSCLE,
)
from .models import MuscleStatus, RecoveryReport, rank_fatigued

logger = logging.getLogger(__name__)


def parse_timestamp(value):
    """Parse to a UTC Timestamp. Naive values are taken as UTC; garbage gives NaT."""
    if value is None:
        return pd.NaT
    ts = pd.to_datetime(value, utc=True, errors='coerce')
    return ts if not pd.isna(ts) else pd.NaT


def round_half_up(value):
    return int(math.floor(value + 0.5))


def expand_target(target_muscle):
    """Generic target ("Legs") -> specific muscles. Unmapped names map to themselves."""
    if not isinstance(target_muscle, str) or not target_muscle:
        target_muscle = UNKNOWN_MUSCLE
    return GENERIC_MAPPING.get(target_muscle, (target_muscle,))


def required_recovery_hours(muscle):
    return RECOVERY_HOURS.get(muscle, DEFAULT_RECOVERY_HOURS)


def recovery_percentage(hours_since, required_hours):
    return min(100, round_half_up(hours_since / required_hours * 100))


def resolve_last_trained(history):
    """
    Most recent training time per specific muscle.

    The result may contain muscles outside TRACKED_MUSCLES (e.g. 'LowerBack',
    'Unknown'). Entries whose date cannot be parsed are skipped.
    """
    entries = list(history)
    frame = pd.DataFrame({
        'date': [parse_timestamp(e.date) for e in entries],
        'target_muscle': [e.target_muscle for e in entries],
    })

    invalid = frame['date'].isna()
    if invalid.any():
        logger.warning("Skipping %d history entries with unparseable dates", int(invalid.sum()))
        frame = frame[~invalid]

    if frame.empty:
        return {}

    frame = frame.assign(muscle=frame['target_muscle'].map(expand_target)).explode('muscle')
    return frame.groupby('muscle')['date'].max().to_dict()


def build_muscle_status(name, last_trained, now):
    if last_trained is None or pd.isna(last_trained):
        return MuscleStatus(
            name=name,
            last_trained=None,
            recovery_percentage=100,
            hours_since=NEVER_TRAINED_HOURS,
        )

    # Future-dated entries count as just trained
    hours_since = max(0.0, (now - last_trained).total_seconds() / 3600)
    return MuscleStatus(
        name=name,
        last_trained=last_trained,
        recovery_percentage=recovery_percentage(hours_since, required_recovery_hours(name)),
        hours_since=hours_since,
    )


def recommend(fatigued_muscles, global_readiness):
    """Pick the recommendation text. `fatigued_muscles` is sorted most fatigued first."""
    if global_readiness < SYSTEMIC_FATIGUE_THRESHOLD:
        return RECOMMENDATION_SYSTEMIC

    if not fatigued_muscles:
        return RECOMMENDATION_FULLY_RECOVERED

    worst = fatigued_muscles[0]
    for names, text in RECOMMENDATION_RULES:
        if worst.name in names:
            return text
    return RECOMMENDATION_OTHER.format(name=worst.name)


class RecoveryEstimator:
    def __init__(self, now=None):
        self.now = now

    def _resolve_now(self):
        if self.now is None:
            return pd.Timestamp.now(tz='UTC')
        now = parse_timestamp(self.now)
        if pd.isna(now):
            raise ValueError(f"Invalid reference time: {self.now!r}")
        return now

    def compute(self, history):
        """
        Estimate recovery for every tracked muscle.

        Args:
            history: iterable of ExercisePerformanceEntry, in any order.

        Returns:
            RecoveryReport
        """
        now = self._resolve_now()
        last_trained = resolve_last_trained(history)

        muscle_status = {
            name: build_muscle_status(name, last_trained.get(name), now)
            for name in TRACKED_MUSCLES
        }

        percentages = [m.recovery_percentage for m in muscle_status.values()]
        global_readiness = round_half_up(sum(percentages) / len(percentages))

        fatigued = rank_fatigued(muscle_status.values())

        report = RecoveryReport(
            muscle_status=muscle_status,
            global_readiness=global_readiness,
            recommendation=recommend(fatigued, global_readiness),
            fatigued_count=len(fatigued),
        )
        logger.debug(
            "Recovery computed: readiness=%d fatigued=%d",
            report.global_readiness, report.fatigued_count
        )
        return report


def estimate_recovery(history, now=None):
    return RecoveryEstimator(now=now).compute(history)
