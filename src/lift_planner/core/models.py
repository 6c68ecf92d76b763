"""
Data models for lift-planner.

All core dataclasses representing goals, readiness readings, and the
plans produced by the two planners.  Inputs validate themselves in
__post_init__ and raise ValidationError naming the offending field;
out-of-range values are rejected, never clamped.
"""

import math
from dataclasses import dataclass, field
from typing import Literal, Union

from .config import (
    DEFAULT_TIMEFRAME_WEEKS,
    DEFAULT_TRAINING_DAYS,
    DEFAULT_VELOCITY_LOSS,
    MAX_MAX_REPS,
    MAX_TIMEFRAME_WEEKS,
    MAX_TRAINING_DAYS,
    MIN_MAX_REPS,
    MIN_MAX_VALUE,
    MIN_TIMEFRAME_WEEKS,
    MIN_TRAINING_DAYS,
)

ExperienceLevel = Literal["beginner", "intermediate", "advanced"]
PeriodizationMethod = Literal["linear", "undulating", "block"]
WeekType = Literal["build", "intensify", "deload", "test"]

AthleteLevel = Literal["novice", "intermediate", "advanced", "elite"]
Recoverability = Literal["low", "average", "high"]
AutoregulationMethod = Literal["rpe", "velocity_loss", "readiness"]
PeriodizationModel = Literal[
    "linear", "dup_hps", "dup_hsp", "block_conjugate", "vbt_autoregulated"
]
PrimaryAdaptation = Literal[
    "maximal_strength",
    "power_development",
    "hypertrophy",
    "strength_endurance",
    "sport_specific",
]
TrainingPhase = Literal["accumulation", "intensification", "realization"]
SessionFocus = Literal["hypertrophy", "power", "strength", "vbt_autoregulated"]
Recommendation = Literal["proceed", "reduce", "deload"]

EXPERIENCE_LEVELS = ("beginner", "intermediate", "advanced")
PERIODIZATION_METHODS = ("linear", "undulating", "block")
WEEK_TYPES = ("build", "intensify", "deload", "test")
ATHLETE_LEVELS = ("novice", "intermediate", "advanced", "elite")
RECOVERABILITY_LEVELS = ("low", "average", "high")
AUTOREGULATION_METHODS = ("rpe", "velocity_loss", "readiness")
PERIODIZATION_MODELS = ("linear", "dup_hps", "dup_hsp", "block_conjugate", "vbt_autoregulated")
PRIMARY_ADAPTATIONS = (
    "maximal_strength",
    "power_development",
    "hypertrophy",
    "strength_endurance",
    "sport_specific",
)
TRAINING_PHASES = ("accumulation", "intensification", "realization")
SESSION_FOCUSES = ("hypertrophy", "power", "strength", "vbt_autoregulated")

# Literal markers used where a prescription is decided live by velocity feedback
AUTOREGULATED = "autoregulated"
VELOCITY_GUIDED = "velocity_guided"

Reps = Union[int, tuple[int, ...]]


class ValidationError(ValueError):
    """Raised when a model field is missing, mistyped, or out of range."""

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(f"{field_name}: {message}")
        self.field = field_name


# ---------------------------------------------------------------------------
# Field checks shared by the models
# ---------------------------------------------------------------------------

def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_text(name: str, value) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(name, f"must be a non-empty string, got {value!r}")


def _check_number(name: str, value, low: float | None = None, high: float | None = None) -> None:
    if not _is_number(value):
        raise ValidationError(name, f"must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(name, f"must be finite, got {value}")
    if low is not None and value < low:
        raise ValidationError(name, f"must be >= {low}, got {value}")
    if high is not None and value > high:
        raise ValidationError(name, f"must be <= {high}, got {value}")


def _check_int(name: str, value, low: int, high: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(name, f"must be an integer, got {value!r}")
    _check_number(name, value, low, high)


def _check_choice(name: str, value, choices: tuple) -> None:
    if value not in choices:
        raise ValidationError(name, f"must be one of {choices}, got {value!r}")


# ---------------------------------------------------------------------------
# Mesocycle planner
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TrainingGoal:
    """
    A long-horizon strength goal for one lift.

    current_max / target_max are unit-agnostic (use the same unit for
    both).  current_max_reps is the rep count the current max was lifted
    for; 1 means a true one-rep max.
    """

    exercise: str
    current_max: float
    target_max: float
    current_max_reps: int = 1
    timeframe: int = DEFAULT_TIMEFRAME_WEEKS  # weeks
    training_days: int = DEFAULT_TRAINING_DAYS
    experience: ExperienceLevel = "intermediate"
    method: PeriodizationMethod = "linear"

    def __post_init__(self) -> None:
        """Validate goal fields."""
        _check_text("exercise", self.exercise)
        _check_number("current_max", self.current_max, low=MIN_MAX_VALUE)
        _check_number("target_max", self.target_max, low=MIN_MAX_VALUE)
        _check_int("current_max_reps", self.current_max_reps, MIN_MAX_REPS, MAX_MAX_REPS)
        _check_int("timeframe", self.timeframe, MIN_TIMEFRAME_WEEKS, MAX_TIMEFRAME_WEEKS)
        _check_int("training_days", self.training_days, MIN_TRAINING_DAYS, MAX_TRAINING_DAYS)
        _check_choice("experience", self.experience, EXPERIENCE_LEVELS)
        _check_choice("method", self.method, PERIODIZATION_METHODS)

    @property
    def estimated_one_rep_max(self) -> float:
        """Brzycki estimate of the true 1RM behind current_max."""
        from .overload import calculate_one_rep_max

        return calculate_one_rep_max(self.current_max, self.current_max_reps)


@dataclass(frozen=True)
class Session:
    """One day's prescription within a mesocycle week."""

    day: int  # 1-based within the week
    sets: int
    reps: Reps
    intensity: float  # Fraction of current max
    rpe: float
    notes: str = ""

    def __post_init__(self) -> None:
        """Validate session prescription."""
        if self.day < 1:
            raise ValidationError("day", f"must be >= 1, got {self.day}")
        if self.sets < 1:
            raise ValidationError("sets", f"must be positive, got {self.sets}")
        if not 0 < self.intensity <= 1.0:
            raise ValidationError("intensity", f"must be in (0, 1.0], got {self.intensity}")

    @property
    def total_reps(self) -> int:
        """Reps across all sets."""
        if isinstance(self.reps, int):
            return self.sets * self.reps
        return sum(self.reps)


@dataclass(frozen=True)
class Week:
    """A week of sessions tagged with its role in the mesocycle."""

    week: int  # 1-based
    type: WeekType
    sessions: tuple[Session, ...] = ()

    def __post_init__(self) -> None:
        """Validate week data."""
        if self.week < 1:
            raise ValidationError("week", f"must be >= 1, got {self.week}")
        _check_choice("type", self.type, WEEK_TYPES)


@dataclass(frozen=True)
class Mesocycle:
    """
    A complete multi-week periodized program.

    projected_max is what the plan is realistically expected to reach,
    which may be below target_max.
    """

    id: str
    name: str
    exercise: str
    start_date: str  # ISO format: YYYY-MM-DD
    end_date: str
    current_max: float
    target_max: float
    projected_max: int
    weeks: tuple[Week, ...] = ()

    def week_types(self) -> list[str]:
        """Week-type tags in order."""
        return [w.type for w in self.weeks]


@dataclass(frozen=True)
class GoalValidation:
    """Outcome of a goal feasibility check."""

    realistic: bool
    reason: str | None = None
    suggestion: int | None = None


@dataclass(frozen=True)
class WarmupSet:
    weight: float
    reps: int


@dataclass(frozen=True)
class SessionLoads:
    """Concrete loads for a session: working weight plus warm-up ramp."""

    working_weight: float
    warmup_sets: tuple[WarmupSet, ...] = ()
    working_volume: float = 0.0


# ---------------------------------------------------------------------------
# Advanced periodization engine
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AdvancedTrainingParams:
    """
    Parameters for single-session prescriptions.

    Periodization models other than dup_hps and vbt_autoregulated are
    accepted and run the dup_hps rotation.
    """

    exercise: str
    current_max: float
    target_max: float
    timeframe: int = DEFAULT_TIMEFRAME_WEEKS
    enable_vbt: bool = False
    autoregulation_method: AutoregulationMethod = "rpe"
    target_velocity_loss: float = DEFAULT_VELOCITY_LOSS  # percent
    periodization_model: PeriodizationModel = "dup_hps"
    experience_level: AthleteLevel = "intermediate"
    recoverability: Recoverability = "average"
    training_age: float = 2  # years
    primary_adaptation: PrimaryAdaptation = "maximal_strength"

    def __post_init__(self) -> None:
        """Validate advanced parameters."""
        _check_text("exercise", self.exercise)
        _check_number("current_max", self.current_max, low=MIN_MAX_VALUE)
        _check_number("target_max", self.target_max, low=MIN_MAX_VALUE)
        _check_int("timeframe", self.timeframe, MIN_TIMEFRAME_WEEKS, MAX_TIMEFRAME_WEEKS)
        if not isinstance(self.enable_vbt, bool):
            raise ValidationError("enable_vbt", f"must be a boolean, got {self.enable_vbt!r}")
        _check_choice("autoregulation_method", self.autoregulation_method, AUTOREGULATION_METHODS)
        _check_number("target_velocity_loss", self.target_velocity_loss, low=5, high=40)
        _check_choice("periodization_model", self.periodization_model, PERIODIZATION_MODELS)
        _check_choice("experience_level", self.experience_level, ATHLETE_LEVELS)
        _check_choice("recoverability", self.recoverability, RECOVERABILITY_LEVELS)
        _check_number("training_age", self.training_age, low=0, high=20)
        _check_choice("primary_adaptation", self.primary_adaptation, PRIMARY_ADAPTATIONS)


@dataclass(frozen=True)
class ReadinessFactors:
    """
    Same-day subjective readiness, each axis rated 1–10.

    stress_level and muscle_soreness are bad when high; the other three
    are good when high.
    """

    sleep_quality: float
    stress_level: float
    energy_level: float
    muscle_soreness: float
    motivation: float

    def __post_init__(self) -> None:
        for name in ("sleep_quality", "stress_level", "energy_level", "muscle_soreness", "motivation"):
            _check_number(name, getattr(self, name), low=1, high=10)


@dataclass(frozen=True)
class ReadinessEstimate:
    score: float  # 1–10 scale
    recommendation: Recommendation
    adjustment: float


@dataclass(frozen=True)
class PerformanceRecord:
    """A recent set outcome supplied as context for session generation."""

    exercise: str
    rpe: float
    velocity_loss: float | None = None


@dataclass(frozen=True)
class VelocityWarmupStep:
    intensity: float
    velocity: float  # m/s
    reps: int


@dataclass(frozen=True)
class VBTProtocol:
    """How a velocity-guided session is loaded and stopped."""

    warmup_velocities: tuple[VelocityWarmupStep, ...]
    load_selection: str = VELOCITY_GUIDED
    stop_criteria: str = "velocity_loss"
    feedback_type: str = "real_time"


@dataclass(frozen=True)
class ExercisePrescription:
    """
    Prescription for one exercise in a session.

    sets / reps may be the literal "autoregulated" (continue until the stop
    criterion) and intensity may be "velocity_guided" for VBT sessions.
    """

    name: str
    sets: int | str
    reps: tuple[int, ...] | str
    intensity: float | str
    rest_periods: tuple[int, ...]  # seconds, later sets may rest longer
    notes: str = ""
    rpe_target: float | None = None
    velocity_loss_target: float | None = None
    velocity_target: float | None = None  # m/s
    tempo: str | None = None  # eccentric-pause-concentric-pause


@dataclass(frozen=True)
class WorkoutSession:
    """A single next-session prescription from the advanced engine."""

    type: SessionFocus
    phase: TrainingPhase
    exercises: tuple[ExercisePrescription, ...]
    estimated_duration: int  # minutes
    focus: str
    total_volume: float = 0  # Filled in by the caller from actual performance
    vbt_protocol: VBTProtocol | None = None
    coaching_notes: str = ""
    scientific_rationale: str = ""

    @property
    def main_exercise(self) -> ExercisePrescription:
        return self.exercises[0]


# ---------------------------------------------------------------------------
# Progressive overload tracking
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoggedSet:
    """A performed set."""

    weight: float
    reps: int
    rpe: float | None = None


@dataclass(frozen=True)
class LoggedWorkout:
    """Sets performed for one exercise on one date."""

    date: str  # ISO format: YYYY-MM-DD
    sets: tuple[LoggedSet, ...] = field(default_factory=tuple)
    name: str = ""


@dataclass(frozen=True)
class ProgressPoint:
    date: str
    max_weight: float
    total_volume: float
    max_one_rep_max: float


@dataclass(frozen=True)
class PersonalRecords:
    weight_pr: bool
    reps_pr: bool
    volume_pr: bool
    one_rep_max_pr: bool

    def any(self) -> bool:
        return self.weight_pr or self.reps_pr or self.volume_pr or self.one_rep_max_pr
