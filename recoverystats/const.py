# Tracked muscles, in display order
TRACKED_MUSCLES = (
    'Chest', 'Lats', 'Traps', 'Quads', 'Hamstrings', 'Glutes',
    'Calves', 'Delts', 'Biceps', 'Triceps', 'Abs'
)

# Generic Target -> Specific Muscles
# 'LowerBack' is resolved but not part of TRACKED_MUSCLES
GENERIC_MAPPING = {
    'Chest': ('Chest',),
    'Back': ('Lats', 'Traps', 'LowerBack'),
    'Legs': ('Quads', 'Hamstrings', 'Glutes', 'Calves'),
    'Shoulders': ('Delts',),
    'Arms': ('Biceps', 'Triceps'),
    'Biceps': ('Biceps',),
    'Triceps': ('Triceps',),
    'Abs': ('Abs',),
    'Core': ('Abs',),
}

UNKNOWN_MUSCLE = 'Unknown'

# Hours until fully recovered, looked up by the muscle's own name
RECOVERY_HOURS = {
    'Chest': 48,
    'Back': 48,
    'Legs': 72,
    'Quads': 72,
    'Hamstrings': 72,
    'Calves': 48,
    'Shoulders': 48,
    'Biceps': 24,
    'Triceps': 24,
    'Abs': 24,
    'Glutes': 48,
}
DEFAULT_RECOVERY_HOURS = 48

# Sentinel for muscles with no recorded training
NEVER_TRAINED_HOURS = 999

FATIGUED = 'FATIGUED'
RECOVERING = 'RECOVERING'
READY = 'READY'

# Lower bounds (inclusive) of each status
RECOVERING_THRESHOLD = 50
READY_THRESHOLD = 90

STATUS_COLORS = {
    FATIGUED: '#FF453A',    # Red
    RECOVERING: '#FFD60A',  # Yellow
    READY: '#30D158',       # Green
}

SYSTEMIC_FATIGUE_THRESHOLD = 40

RECOMMENDATION_FULLY_RECOVERED = (
    "You are fully recovered. Perfect day for a heavy compound session or testing PRs."
)
RECOMMENDATION_LEGS = "Legs are fatigued. Consider an Upper Body Push or Pull focus today."
RECOMMENDATION_PUSH = "Push muscles need rest. Good day for Legs or Back."
RECOMMENDATION_BACK = "Back is recovering. Focus on Pushing movements or Legs."
RECOMMENDATION_OTHER = "Your {name} is recovering. Focus on other muscle groups."
RECOMMENDATION_SYSTEMIC = (
    "Systemic fatigue is high. Consider an Active Recovery day, light cardio, or complete rest."
)

# Worst muscle -> recommendation, checked in order
RECOMMENDATION_RULES = (
    (('Quads', 'Hamstrings'), RECOMMENDATION_LEGS),
    (('Chest', 'Delts'), RECOMMENDATION_PUSH),
    (('Lats',), RECOMMENDATION_BACK),
)

# Hevy export format: "10 Oct 2023, 12:00"
HEVY_DATETIME_FORMAT = '%d %b %Y, %H:%M'
