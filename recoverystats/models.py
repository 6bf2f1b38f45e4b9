from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import pandas as pd

from .const import (
    FATIGUED,
    READY,
    READY_THRESHOLD,
    RECOVERING,
    RECOVERING_THRESHOLD,
    STATUS_COLORS,
)


def classify_recovery(recovery_percentage: float) -> str:
    """Map a recovery percentage to FATIGUED / RECOVERING / READY."""
    if recovery_percentage < RECOVERING_THRESHOLD:
        return FATIGUED
    if recovery_percentage < READY_THRESHOLD:
        return RECOVERING
    return READY


def rank_fatigued(statuses) -> list:
    """Muscles that are not READY, most fatigued first. Ties keep input order."""
    return sorted(
        (m for m in statuses if m.status != READY),
        key=lambda m: m.recovery_percentage,
    )


@dataclass
class ExerciseSet:
    weight: float = 0.0
    reps: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> ExerciseSet:
        weight = data.get('weight')
        reps = data.get('reps')
        return cls(
            weight=float(weight) if weight is not None else 0.0,
            reps=int(reps) if reps is not None else 0,
        )


@dataclass
class ExercisePerformanceEntry:
    """One exercise as performed in one workout."""

    date: Any
    target_muscle: Optional[str] = None
    sets: list[ExerciseSet] = field(default_factory=list)
    exercise_name: str = ''
    id: Optional[str] = None
    completed_workout_id: Optional[str] = None
    best_set_estimated_1rm: Optional[float] = None
    is_pr: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> ExercisePerformanceEntry:
        """Build an entry from the camelCase export shape."""
        return cls(
            date=data.get('date'),
            target_muscle=data.get('targetMuscle'),
            sets=[ExerciseSet.from_dict(s) for s in data.get('sets') or []],
            exercise_name=data.get('exerciseName', ''),
            id=data.get('id'),
            completed_workout_id=data.get('completedWorkoutId'),
            best_set_estimated_1rm=data.get('bestSetEstimated1RM'),
            is_pr=bool(data.get('isPR', False)),
        )

    def to_dict(self) -> dict:
        date = self.date.isoformat() if hasattr(self.date, 'isoformat') else self.date
        return {
            'id': self.id,
            'date': date,
            'completedWorkoutId': self.completed_workout_id,
            'exerciseName': self.exercise_name,
            'targetMuscle': self.target_muscle,
            'sets': [{'weight': s.weight, 'reps': s.reps} for s in self.sets],
            'bestSetEstimated1RM': self.best_set_estimated_1rm,
            'isPR': self.is_pr,
        }


@dataclass(frozen=True)
class MuscleStatus:
    name: str
    last_trained: Optional[pd.Timestamp]
    recovery_percentage: int
    hours_since: float

    @property
    def status(self) -> str:
        return classify_recovery(self.recovery_percentage)

    @property
    def color(self) -> str:
        return STATUS_COLORS[self.status]

    def as_dict(self) -> dict:
        return {
            'name': self.name,
            'lastTrained': self.last_trained.isoformat() if self.last_trained is not None else None,
            'recoveryPercentage': self.recovery_percentage,
            'hoursSince': self.hours_since,
            'status': self.status,
            'color': self.color,
        }


@dataclass(frozen=True)
class RecoveryReport:
    muscle_status: dict[str, MuscleStatus]
    global_readiness: int
    recommendation: str
    fatigued_count: int

    @property
    def fatigued_muscles(self) -> list[MuscleStatus]:
        return rank_fatigued(self.muscle_status.values())

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {
                'muscle': m.name,
                'last_trained': m.last_trained,
                'hours_since': m.hours_since,
                'recovery_percentage': m.recovery_percentage,
                'status': m.status,
                'color': m.color,
            }
            for m in self.muscle_status.values()
        ]
        return pd.DataFrame(
            rows,
            columns=['muscle', 'last_trained', 'hours_since', 'recovery_percentage', 'status', 'color'],
        )

    def as_dict(self) -> dict:
        return {
            'muscleStatus': {name: m.as_dict() for name, m in self.muscle_status.items()},
            'globalReadiness': self.global_readiness,
            'recommendation': self.recommendation,
            'fatiguedCount': self.fatigued_count,
        }
