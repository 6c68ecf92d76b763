"""
Mesocycle planning for lift-planner.

Turns a TrainingGoal (current max → target max over N weeks) into a
deterministic week-by-week program using linear, daily undulating, or
block periodization.  The only time source is the injected clock, so
the same goal and clock always produce the same plan.
"""

import logging
import math
from collections.abc import Callable
from datetime import datetime, timedelta

from .config import (
    BASE_PROGRESS,
    BLOCK_ACCUMULATION_FRACTION,
    BLOCK_INTENSIFICATION_FRACTION,
    BLOCK_SESSIONS,
    DELOAD_SESSION,
    LINEAR_BUILD_FRACTION,
    LINEAR_BUILD_INTENSITY_RISE,
    LINEAR_BUILD_INTENSITY_START,
    LINEAR_BUILD_REPS_DROP,
    LINEAR_BUILD_REPS_FLOOR,
    LINEAR_BUILD_REPS_START,
    LINEAR_BUILD_RPE_START,
    LINEAR_INTENSIFY_INTENSITY_RISE,
    LINEAR_INTENSIFY_INTENSITY_START,
    LINEAR_INTENSIFY_REPS_DROP,
    LINEAR_INTENSIFY_REPS_FLOOR,
    LINEAR_INTENSIFY_REPS_START,
    LINEAR_INTENSIFY_RPE_START,
    LINEAR_RPE_RISE,
    LOAD_ROUNDING_INCREMENT,
    MAX_RELATIVE_INCREASE,
    MAX_TIMEFRAME_FACTOR,
    NO_PROGRESS_SUGGESTION_FACTOR,
    OVERAMBITIOUS_SUGGESTION_FACTOR,
    REFERENCE_HORIZON_WEEKS,
    TEST_INTENSITY,
    TEST_RPE,
    UNDULATING_INTENSIFY_AFTER,
    UNDULATING_INTENSITY_CAP,
    UNDULATING_INTENSITY_RISE,
    UNDULATING_PATTERNS,
    WARMUP_HEAVY_REPS,
    WARMUP_LADDER,
    WARMUP_LIGHT_REPS,
    WARMUP_LIGHT_THRESHOLD,
    deload_cadence,
)
from .models import (
    GoalValidation,
    Mesocycle,
    Reps,
    Session,
    SessionLoads,
    TrainingGoal,
    WarmupSet,
    Week,
    WeekType,
)
from .overload import round_half_up, round_to_increment

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _fmt_number(value: float) -> str:
    """225.0 → "225", 102.5 → "102.5"."""
    return f"{value:g}"


class MesocyclePlanner:
    """
    Multi-week planner for a single strength goal.

    Callers should check validate_goal() before generate_mesocycle();
    generation itself never re-validates, so an infeasible goal still
    yields a plan that simply stops short of the target.
    """

    def __init__(self, goal: TrainingGoal, clock: Clock | None = None) -> None:
        self.goal = goal
        self._clock: Clock = clock or datetime.now

    # ------------------------------------------------------------------
    # Feasibility
    # ------------------------------------------------------------------

    def expected_progress(self) -> float:
        """
        Relative progress expected over the plan.

        base(experience) × min(1.5, timeframe / 16)
        """
        timeframe_factor = min(MAX_TIMEFRAME_FACTOR, self.goal.timeframe / REFERENCE_HORIZON_WEEKS)
        return BASE_PROGRESS[self.goal.experience] * timeframe_factor

    def projected_max(self) -> int:
        """Max the plan is realistically expected to reach."""
        return round_half_up(self.goal.current_max * (1 + self.expected_progress()))

    def validate_goal(self) -> GoalValidation:
        """
        Check whether the goal is realistic.

        Rejection rules, in order:
        1. target ≤ current
        2. projected max falls short of target
        3. requested increase above 50%

        Returns:
            GoalValidation; never raises for an infeasible goal
        """
        current = self.goal.current_max
        target = self.goal.target_max
        projected = self.projected_max()
        requested = (target - current) / current

        if target <= current:
            return GoalValidation(
                realistic=False,
                reason="Target max must be higher than current max",
                # Always strictly above current, even for small maxes
                suggestion=max(
                    round_half_up(current * NO_PROGRESS_SUGGESTION_FACTOR),
                    math.floor(current) + 1,
                ),
            )

        if projected < target:
            return GoalValidation(
                realistic=False,
                reason=(
                    "Target may be too ambitious for the timeframe. "
                    f"Expected progress: {projected}"
                ),
                suggestion=projected,
            )

        if requested > MAX_RELATIVE_INCREASE:
            return GoalValidation(
                realistic=False,
                reason=(
                    f"Target requires more than {int(MAX_RELATIVE_INCREASE * 100)}% strength "
                    "increase - consider a longer timeframe"
                ),
                suggestion=round_half_up(current * OVERAMBITIOUS_SUGGESTION_FACTOR),
            )

        return GoalValidation(realistic=True)

    # ------------------------------------------------------------------
    # Plan generation
    # ------------------------------------------------------------------

    def generate_mesocycle(self) -> Mesocycle:
        """
        Build the full periodized plan.

        Returns:
            Mesocycle with exactly goal.timeframe weeks, the last one a test week
        """
        start = self._clock()
        end = start + timedelta(weeks=self.goal.timeframe)

        method = self.goal.method
        if method == "linear":
            weeks = self._linear_weeks()
        elif method == "undulating":
            weeks = self._undulating_weeks()
        elif method == "block":
            weeks = self._block_weeks()
        else:
            raise ValueError(f"Unsupported periodization method: {method}")

        projected = self.projected_max()
        logger.debug(
            "Generated %s mesocycle for %s: %d weeks, projected max %d",
            method, self.goal.exercise, len(weeks), projected,
        )

        return Mesocycle(
            id=f"mesocycle-{int(start.timestamp() * 1000)}",
            name=(
                f"{self.goal.exercise} - {_fmt_number(self.goal.current_max)}"
                f" to {_fmt_number(self.goal.target_max)}"
            ),
            exercise=self.goal.exercise,
            start_date=start.strftime("%Y-%m-%d"),
            end_date=end.strftime("%Y-%m-%d"),
            current_max=self.goal.current_max,
            target_max=self.goal.target_max,
            projected_max=projected,
            weeks=tuple(weeks),
        )

    def _override_week_type(self, week: int, phase_type: WeekType) -> WeekType:
        """
        Apply the shared test/deload rules on top of a phase's week type.

        The last week is always a test.  Deload weeks fall on the cadence
        but never on the week before the test or the test itself.
        """
        total = self.goal.timeframe
        if week == total:
            return "test"
        cadence = deload_cadence(self.goal.experience, self.goal.method)
        if week % cadence == 0 and week < total - 1:
            return "deload"
        return phase_type

    def _linear_weeks(self) -> list[Week]:
        """Linear periodization: volume first, then intensity."""
        total = self.goal.timeframe
        build_weeks = math.floor(total * LINEAR_BUILD_FRACTION)

        weeks = []
        for week in range(1, total + 1):
            phase_type: WeekType = "build" if week <= build_weeks else "intensify"
            week_type = self._override_week_type(week, phase_type)
            sessions = tuple(
                self._linear_session(day, week, week_type)
                for day in range(1, self.goal.training_days + 1)
            )
            weeks.append(Week(week=week, type=week_type, sessions=sessions))
        return weeks

    def _undulating_weeks(self) -> list[Week]:
        """Daily undulating periodization: Heavy / Volume / Intensity rotation."""
        total = self.goal.timeframe

        weeks = []
        for week in range(1, total + 1):
            phase_type: WeekType = "intensify" if week > total * UNDULATING_INTENSIFY_AFTER else "build"
            week_type = self._override_week_type(week, phase_type)
            sessions = tuple(
                self._undulating_session(day, week, week_type)
                for day in range(1, self.goal.training_days + 1)
            )
            weeks.append(Week(week=week, type=week_type, sessions=sessions))
        return weeks

    def _block_weeks(self) -> list[Week]:
        """Block periodization: accumulation → intensification → realization."""
        total = self.goal.timeframe
        accumulation = math.floor(total * BLOCK_ACCUMULATION_FRACTION)
        intensification = math.floor(total * BLOCK_INTENSIFICATION_FRACTION)

        weeks = []
        for week in range(1, total + 1):
            if week <= accumulation:
                phase_type: WeekType = "build"
            elif week <= accumulation + intensification:
                phase_type = "intensify"
            else:
                # Realization: heavy intensify weeks leading into the test
                phase_type = "intensify"
            week_type = self._override_week_type(week, phase_type)
            sessions = tuple(
                self._block_session(day, week_type)
                for day in range(1, self.goal.training_days + 1)
            )
            weeks.append(Week(week=week, type=week_type, sessions=sessions))
        return weeks

    def _linear_session(self, day: int, week: int, week_type: WeekType) -> Session:
        beginner = self.goal.experience == "beginner"
        progress = week / self.goal.timeframe

        if week_type == "build":
            sets = 3 if beginner else 4
            reps = max(LINEAR_BUILD_REPS_FLOOR, LINEAR_BUILD_REPS_START - math.floor(progress * LINEAR_BUILD_REPS_DROP))
            intensity = LINEAR_BUILD_INTENSITY_START + progress * LINEAR_BUILD_INTENSITY_RISE
            rpe = LINEAR_BUILD_RPE_START + progress * LINEAR_RPE_RISE
        elif week_type == "intensify":
            sets = 2 if beginner else 3
            reps = max(
                LINEAR_INTENSIFY_REPS_FLOOR,
                LINEAR_INTENSIFY_REPS_START - math.floor(progress * LINEAR_INTENSIFY_REPS_DROP),
            )
            intensity = LINEAR_INTENSIFY_INTENSITY_START + progress * LINEAR_INTENSIFY_INTENSITY_RISE
            rpe = LINEAR_INTENSIFY_RPE_START + progress * LINEAR_RPE_RISE
        elif week_type == "deload":
            return self._deload_session(day)
        else:
            return self._test_session(day, sets=1 if beginner else 2)

        intensity = round_half_up(intensity, 2)
        return Session(
            day=day,
            sets=sets,
            reps=reps,
            intensity=intensity,
            rpe=rpe,
            notes=self._session_notes(week_type, sets, reps, intensity),
        )

    def _undulating_session(self, day: int, week: int, week_type: WeekType) -> Session:
        if week_type == "deload":
            return self._deload_session(day)
        if week_type == "test":
            return self._test_session(day, sets=1)

        pattern = UNDULATING_PATTERNS[(day - 1) % len(UNDULATING_PATTERNS)]
        progress = week / self.goal.timeframe
        intensity = min(UNDULATING_INTENSITY_CAP, pattern.intensity + progress * UNDULATING_INTENSITY_RISE)
        weight = round_half_up(self.goal.current_max * intensity)
        return Session(
            day=day,
            sets=pattern.sets,
            reps=pattern.reps,
            intensity=intensity,
            rpe=pattern.rpe,
            notes=(
                f"{pattern.label} day - focus on {pattern.label.lower()}. "
                f"{pattern.sets}x{pattern.reps} @ {weight} ({round_half_up(intensity * 100)}%)"
            ),
        )

    def _block_session(self, day: int, week_type: WeekType) -> Session:
        if week_type == "deload":
            return self._deload_session(day)
        if week_type == "test":
            return self._test_session(day, sets=1)

        template = BLOCK_SESSIONS[week_type]
        weight = round_half_up(self.goal.current_max * template.intensity)
        if week_type == "build":
            cue = "Volume accumulation - focus on technique and work capacity."
        else:
            cue = "Intensification - heavy loads, perfect technique."
        return Session(
            day=day,
            sets=template.sets,
            reps=template.reps,
            intensity=template.intensity,
            rpe=template.rpe,
            notes=f"{cue} {template.sets}x{template.reps} @ {weight} ({round_half_up(template.intensity * 100)}%)",
        )

    def _deload_session(self, day: int) -> Session:
        d = DELOAD_SESSION
        return Session(
            day=day,
            sets=d.sets,
            reps=d.reps,
            intensity=d.intensity,
            rpe=d.rpe,
            notes=self._session_notes("deload", d.sets, d.reps, d.intensity),
        )

    def _test_session(self, day: int, sets: int) -> Session:
        return Session(
            day=day,
            sets=sets,
            reps=1,
            intensity=TEST_INTENSITY,
            rpe=TEST_RPE,
            notes=self._session_notes("test", sets, 1, TEST_INTENSITY),
        )

    def _session_notes(self, week_type: WeekType, sets: int, reps: Reps, intensity: float) -> str:
        """Coaching note with the working weight for this prescription."""
        weight = round_half_up(self.goal.current_max * intensity)
        pct = round_half_up(intensity * 100)
        if week_type == "build":
            return f"Focus on volume and technique. {sets}x{reps} @ {weight} ({pct}%)"
        if week_type == "intensify":
            return (
                f"Heavy singles/doubles. {sets}x{reps} @ {weight} ({pct}%). "
                "Rest 3-5 minutes between sets."
            )
        if week_type == "deload":
            return (
                f"Recovery week. {sets}x{reps} @ {weight} ({pct}%). "
                "Light weight, perfect form. Focus on movement quality."
            )
        return (
            f"Max attempt! Warm up thoroughly. Openers from {weight} ({pct}% of current max), "
            f"attempt new 1RM around {_fmt_number(self.goal.target_max)}."
        )

    # ------------------------------------------------------------------
    # Loads
    # ------------------------------------------------------------------

    def calculate_session_loads(self, intensity: float, sets: int, reps: Reps) -> SessionLoads:
        """
        Concrete weights for a prescription.

        Working weight and every warm-up are rounded to the nearest 5.
        Warm-ups use the rungs of [0.4 … 0.8] strictly below the working
        intensity: 5 reps up to 60%, 3 reps above.

        Args:
            intensity: Fraction of current max
            sets: Working sets
            reps: Reps per set, or per-set reps

        Returns:
            SessionLoads with an ascending warm-up ramp
        """
        current = self.goal.current_max
        working_weight = round_to_increment(current * intensity, LOAD_ROUNDING_INCREMENT)

        warmups = tuple(
            WarmupSet(
                weight=round_to_increment(current * rung, LOAD_ROUNDING_INCREMENT),
                reps=WARMUP_LIGHT_REPS if rung <= WARMUP_LIGHT_THRESHOLD else WARMUP_HEAVY_REPS,
            )
            for rung in WARMUP_LADDER
            if rung < intensity
        )

        total_reps = sets * reps if isinstance(reps, int) else sum(reps)
        return SessionLoads(
            working_weight=working_weight,
            warmup_sets=warmups,
            working_volume=working_weight * total_reps,
        )


def create_mesocycle_planner(goal: TrainingGoal, clock: Clock | None = None) -> MesocyclePlanner:
    """Create a planner for a goal (clock defaults to datetime.now)."""
    return MesocyclePlanner(goal, clock=clock)
