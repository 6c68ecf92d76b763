"""
Configuration constants for the periodization engine.

All adjustable parameters are centralized here for easy tuning.
Percentages of max are expressed as fractions (0.85 = 85%).
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# GOAL LIMITS
# =============================================================================

MIN_MAX_VALUE: Final[float] = 1.0  # Smallest accepted current/target max
MIN_TIMEFRAME_WEEKS: Final[int] = 4
MAX_TIMEFRAME_WEEKS: Final[int] = 52
DEFAULT_TIMEFRAME_WEEKS: Final[int] = 16
MIN_TRAINING_DAYS: Final[int] = 1
MAX_TRAINING_DAYS: Final[int] = 7
DEFAULT_TRAINING_DAYS: Final[int] = 3
MIN_MAX_REPS: Final[int] = 1
MAX_MAX_REPS: Final[int] = 20

# =============================================================================
# GOAL FEASIBILITY
# =============================================================================

# Expected relative progress over the reference horizon, by experience
BASE_PROGRESS: Final[dict[str, float]] = {
    "beginner": 0.20,
    "intermediate": 0.15,
    "advanced": 0.10,
}
REFERENCE_HORIZON_WEEKS: Final[int] = 16
MAX_TIMEFRAME_FACTOR: Final[float] = 1.5
MAX_RELATIVE_INCREASE: Final[float] = 0.50  # Above this the goal is over-ambitious
NO_PROGRESS_SUGGESTION_FACTOR: Final[float] = 1.1
OVERAMBITIOUS_SUGGESTION_FACTOR: Final[float] = 1.3

# =============================================================================
# DELOAD CADENCE
# =============================================================================

DELOAD_EVERY_WEEKS: Final[int] = 4
DELOAD_EVERY_WEEKS_BEGINNER: Final[int] = 6
BLOCK_DELOAD_EVERY_WEEKS: Final[int] = 4

# =============================================================================
# PHASE SPLITS (fraction of the timeframe)
# =============================================================================

LINEAR_BUILD_FRACTION: Final[float] = 0.6
UNDULATING_INTENSIFY_AFTER: Final[float] = 0.75
BLOCK_ACCUMULATION_FRACTION: Final[float] = 0.5
BLOCK_INTENSIFICATION_FRACTION: Final[float] = 0.3


# =============================================================================
# FIXED SESSION PRESCRIPTIONS
# =============================================================================

@dataclass(frozen=True)
class SessionTemplate:
    """A fixed sets × reps @ intensity prescription."""

    sets: int
    reps: int
    intensity: float  # Fraction of current max
    rpe: float
    label: str = ""


DELOAD_SESSION: Final[SessionTemplate] = SessionTemplate(
    sets=2, reps=5, intensity=0.60, rpe=5, label="Deload"
)

# Linear progression ramps (value at progress 0 and slope over the plan)
LINEAR_BUILD_REPS_START: Final[int] = 8
LINEAR_BUILD_REPS_DROP: Final[int] = 5
LINEAR_BUILD_REPS_FLOOR: Final[int] = 3
LINEAR_BUILD_INTENSITY_START: Final[float] = 0.65
LINEAR_BUILD_INTENSITY_RISE: Final[float] = 0.25
LINEAR_BUILD_RPE_START: Final[float] = 6.0
LINEAR_INTENSIFY_REPS_START: Final[int] = 5
LINEAR_INTENSIFY_REPS_DROP: Final[int] = 3
LINEAR_INTENSIFY_REPS_FLOOR: Final[int] = 1
LINEAR_INTENSIFY_INTENSITY_START: Final[float] = 0.80
LINEAR_INTENSIFY_INTENSITY_RISE: Final[float] = 0.15
LINEAR_INTENSIFY_RPE_START: Final[float] = 7.0
LINEAR_RPE_RISE: Final[float] = 2.0

# Daily undulating rotation: Heavy, Volume, Intensity
UNDULATING_PATTERNS: Final[list[SessionTemplate]] = [
    SessionTemplate(sets=3, reps=5, intensity=0.85, rpe=8, label="Heavy"),
    SessionTemplate(sets=4, reps=8, intensity=0.70, rpe=7, label="Volume"),
    SessionTemplate(sets=2, reps=3, intensity=0.90, rpe=9, label="Intensity"),
]
UNDULATING_INTENSITY_RISE: Final[float] = 0.10
UNDULATING_INTENSITY_CAP: Final[float] = 0.95

BLOCK_SESSIONS: Final[dict[str, SessionTemplate]] = {
    "build": SessionTemplate(sets=4, reps=8, intensity=0.70, rpe=7, label="Accumulation"),
    "intensify": SessionTemplate(sets=3, reps=3, intensity=0.87, rpe=8, label="Intensification"),
}

TEST_INTENSITY: Final[float] = 1.0
TEST_RPE: Final[float] = 10

# =============================================================================
# LOADING
# =============================================================================

LOAD_ROUNDING_INCREMENT: Final[float] = 5  # Unit-agnostic plate increment
WARMUP_LADDER: Final[list[float]] = [0.4, 0.5, 0.6, 0.7, 0.8]
WARMUP_LIGHT_THRESHOLD: Final[float] = 0.6  # Rungs at or below get more reps
WARMUP_LIGHT_REPS: Final[int] = 5
WARMUP_HEAVY_REPS: Final[int] = 3

# =============================================================================
# ADVANCED ENGINE: PHASES AND INTENSITY
# =============================================================================

ACCUMULATION_END: Final[float] = 0.60  # Fraction of timeframe
INTENSIFICATION_END: Final[float] = 0.85

PHASE_BASE_INTENSITY: Final[float] = 0.70
PHASE_INTENSITY_RISE: Final[float] = 0.25
ACCUMULATION_INTENSITY_CAP: Final[float] = 0.80
INTENSIFICATION_INTENSITY_BUMP: Final[float] = 0.10
INTENSIFICATION_INTENSITY_CAP: Final[float] = 0.95
REALIZATION_INTENSITY: Final[float] = 0.95

OPTIMAL_BASE_SETS: Final[dict[str, int]] = {
    "hypertrophy": 4,
    "strength": 5,
    "power": 6,
}
PHASE_SET_MULTIPLIER: Final[dict[str, float]] = {
    "accumulation": 1.2,
    "intensification": 1.0,
    "realization": 0.8,
}

# Rotation order for DUP-HPS
HPS_ROTATION: Final[list[str]] = ["hypertrophy", "power", "strength"]

# =============================================================================
# ADVANCED ENGINE: READINESS
# =============================================================================

RPE_FLOOR: Final[float] = 6.0
RPE_ADJUSTMENT_SCALE: Final[float] = 2.0  # RPE points per unit of adjustment
LOW_READINESS_PERCENT: Final[float] = 70.0  # Below this, coaching notes warn

# (lower bound, multiplier) pairs checked top-down; normalized 0–1 scale
READINESS_ADJUSTMENT_BANDS: Final[list[tuple[float, float]]] = [
    (0.8, 1.1),
    (0.6, 1.0),
    (0.4, 0.85),
]
READINESS_ADJUSTMENT_FLOOR: Final[float] = 0.7

# (lower bound, recommendation, multiplier); 1–10 scale
READINESS_ESTIMATE_BANDS: Final[list[tuple[float, str, float]]] = [
    (8.0, "proceed", 1.1),
    (6.0, "proceed", 1.0),
    (4.0, "reduce", 0.85),
]
READINESS_ESTIMATE_FLOOR: Final[tuple[str, float]] = ("deload", 0.7)

# =============================================================================
# VELOCITY-BASED TRAINING
# =============================================================================

VBT_BASE_VELOCITY: Final[float] = 0.5  # m/s
VBT_PHASE_VELOCITY_OFFSET: Final[dict[str, float]] = {
    "accumulation": 0.1,
    "intensification": 0.0,
    "realization": -0.1,
}
VBT_WARMUP_INTENSITIES: Final[list[float]] = [0.4, 0.5, 0.6, 0.7]
VBT_WARMUP_REPS: Final[list[int]] = [5, 3, 2, 1]
VBT_WARMUP_VELOCITY_STEP: Final[float] = 0.1
VBT_REST_PERIODS: Final[list[int]] = [180, 240]
VBT_SESSION_MINUTES: Final[int] = 40

# Simplified load-velocity line: v = intercept - slope * intensity
LOAD_VELOCITY_INTERCEPT: Final[float] = 1.3
LOAD_VELOCITY_SLOPE: Final[float] = 0.7

DEFAULT_VELOCITY_LOSS: Final[float] = 20

# =============================================================================
# TRAINING TEMPLATES
# =============================================================================

TRAINING_TEMPLATES: Final[dict[str, dict]] = {
    "powerlifting": {
        "name": "Powerlifting Focus",
        "description": "Designed for bench press, squat, and deadlift progression",
        "method": "linear",
        "training_days": 3,
        "exercises": ["Bench Press", "Squat", "Deadlift"],
    },
    "general_strength": {
        "name": "General Strength",
        "description": "All-around strength development",
        "method": "undulating",
        "training_days": 4,
        "exercises": ["Bench Press", "Squat", "Deadlift", "Overhead Press"],
    },
    "bodybuilding": {
        "name": "Bodybuilding Focus",
        "description": "Higher volume for muscle growth",
        "method": "block",
        "training_days": 5,
        "exercises": ["Bench Press", "Squat", "Deadlift", "Overhead Press", "Barbell Row"],
    },
}


def deload_cadence(experience: str, method: str) -> int:
    """
    Weeks between deloads.

    Block plans always deload on the fixed 4-week cadence; the other
    methods give beginners a longer stretch between deloads.

    Args:
        experience: beginner / intermediate / advanced
        method: linear / undulating / block

    Returns:
        Deload cadence in weeks
    """
    if method == "block":
        return BLOCK_DELOAD_EVERY_WEEKS
    if experience == "beginner":
        return DELOAD_EVERY_WEEKS_BEGINNER
    return DELOAD_EVERY_WEEKS
