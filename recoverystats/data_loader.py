import json
import logging
from pathlib import Path

import pandas as pd

from .const import HEVY_DATETIME_FORMAT
from .exercise_stats import estimate_1rm
from .models import ExercisePerformanceEntry, ExerciseSet

logger = logging.getLogger(__name__)

REQUIRED_WORKOUT_COLUMNS = ('start_time', 'exercise_title', 'reps')


class HistoryLoadError(ValueError):
    """A history file exists but its structure is unusable."""


class WorkoutHistoryLoader:
    def __init__(self, data_dir='data'):
        self.data_dir = Path(data_dir)
        self.workout_data = None
        self.exercise_database = None
        self.excluded_exercises = None
        self.entries = None

    def load_all(self):
        """
        Loads the exercise database and the workout history.

        The per-set CSV export is preferred; the JSON entry list is used when
        no CSV is present.
        """
        self.load_exercise_database(self.data_dir / 'exercise_database.json')

        csv_path = self.data_dir / 'workout_data.csv'
        json_path = self.data_dir / 'performance_history.json'
        if json_path.exists() and not csv_path.exists():
            self.load_performance_json(json_path)
        else:
            self.load_workout_data(csv_path)
            self.process_data()
            self.entries = self.to_performance_entries()

        logger.info("Loaded %d performance entries from %s", len(self.entries), self.data_dir)
        return self.entries

    def load_exercise_database(self, json_path):
        json_path = Path(json_path)
        if not json_path.exists():
            logger.warning("Exercise database not found at %s", json_path)
            self.exercise_database = {}
            self.excluded_exercises = set()
            return

        with open(json_path, 'r') as f:
            data = json.load(f)

        self.exercise_database = data.get('exercises', {})
        self.excluded_exercises = set(data.get('excluded_exercises', []))

    def load_workout_data(self, csv_path):
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"Workout data not found at {csv_path}")

        self.workout_data = pd.read_csv(csv_path)

        missing = [c for c in REQUIRED_WORKOUT_COLUMNS if c not in self.workout_data.columns]
        if missing:
            raise HistoryLoadError(f"{csv_path} is missing columns: {', '.join(missing)}")

        self.workout_data['start_time'] = pd.to_datetime(
            self.workout_data['start_time'], format=HEVY_DATETIME_FORMAT, errors='coerce'
        )
        bad_dates = int(self.workout_data['start_time'].isna().sum())
        if bad_dates:
            logger.warning("%d rows in %s have an unparseable start_time", bad_dates, csv_path)

        if 'weight_kg' not in self.workout_data.columns:
            self.workout_data['weight_kg'] = 0.0

        # Clean numeric columns
        for col in ['weight_kg', 'reps']:
            self.workout_data[col] = pd.to_numeric(self.workout_data[col], errors='coerce')

    def load_performance_json(self, json_path):
        json_path = Path(json_path)
        if not json_path.exists():
            raise FileNotFoundError(f"Performance history not found at {json_path}")

        with open(json_path, 'r') as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise HistoryLoadError(f"{json_path} must contain a list of entries")

        entries = [ExercisePerformanceEntry.from_dict(item) for item in data]
        excluded = self.excluded_exercises or set()
        entries = [e for e in entries if e.exercise_name not in excluded]

        # Fill missing targets from the exercise database
        for entry in entries:
            if not entry.target_muscle:
                entry.target_muscle = self.get_exercise_meta(entry.exercise_name).get('target_muscle')

        self.entries = entries

    def get_exercise_meta(self, exercise_name):
        if not self.exercise_database:
            return {}
        return self.exercise_database.get(exercise_name, {})

    def process_data(self):
        """Drop excluded exercises and warmups, attach target muscles, compute set volume."""
        if self.workout_data is None:
            return

        # 1. Filter excluded exercises
        if self.excluded_exercises:
            self.workout_data = self.workout_data[
                ~self.workout_data['exercise_title'].isin(self.excluded_exercises)
            ].copy()

        # 2. Filter warmup sets
        if 'set_type' in self.workout_data.columns:
            self.workout_data = self.workout_data[
                self.workout_data['set_type'] != 'warmup'
            ].copy()

        # 3. Enrich with Exercise Database Metadata
        def get_meta(exercise, field, default):
            return self.get_exercise_meta(exercise).get(field, default)

        self.workout_data['target_muscle'] = self.workout_data['exercise_title'].apply(
            lambda x: get_meta(x, 'target_muscle', None)
        )

        unknown = self.workout_data.loc[
            self.workout_data['target_muscle'].isna(), 'exercise_title'
        ].unique()
        if len(unknown) > 0:
            logger.warning(
                "%d exercises have no target muscle in the exercise database: %s",
                len(unknown), ', '.join(unknown)
            )

        # 4. Volume: Weight * Reps
        self.workout_data['volume'] = (
            self.workout_data['weight_kg'].fillna(0) * self.workout_data['reps'].fillna(0)
        )

    def to_performance_entries(self):
        """One entry per (workout, exercise), sets in logged order."""
        if self.workout_data is None or self.workout_data.empty:
            return []

        entries = []
        grouped = self.workout_data.groupby(['start_time', 'exercise_title'], sort=True)
        for (start_time, exercise), rows in grouped:
            sets = [
                ExerciseSet(
                    weight=float(w) if pd.notna(w) else 0.0,
                    reps=int(r) if pd.notna(r) else 0,
                )
                for w, r in zip(rows['weight_kg'], rows['reps'])
            ]
            best_1rm = max(
                (estimate_1rm(s.weight, s.reps) for s in sets if s.weight > 0 and s.reps > 0),
                default=None,
            )
            target = rows['target_muscle'].iloc[0]
            workout_id = start_time.strftime('%Y%m%d%H%M')

            entries.append(ExercisePerformanceEntry(
                date=start_time,
                target_muscle=target if isinstance(target, str) else None,
                sets=sets,
                exercise_name=exercise,
                id=f"{workout_id}_{exercise}",
                completed_workout_id=workout_id,
                best_set_estimated_1rm=best_1rm,
            ))
        return entries
