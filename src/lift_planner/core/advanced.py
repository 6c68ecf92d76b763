"""
Advanced periodization engine.

Generates a single next-session prescription from AdvancedTrainingParams:
daily undulating periodization in Hypertrophy → Power → Strength order
(DUP-HPS) or a velocity-autoregulated session, scaled by same-day
readiness and annotated with coaching notes and a rationale.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace

from .config import (
    ACCUMULATION_END,
    ACCUMULATION_INTENSITY_CAP,
    HPS_ROTATION,
    INTENSIFICATION_END,
    INTENSIFICATION_INTENSITY_BUMP,
    INTENSIFICATION_INTENSITY_CAP,
    LOW_READINESS_PERCENT,
    OPTIMAL_BASE_SETS,
    PHASE_BASE_INTENSITY,
    PHASE_INTENSITY_RISE,
    PHASE_SET_MULTIPLIER,
    REALIZATION_INTENSITY,
    RPE_ADJUSTMENT_SCALE,
    RPE_FLOOR,
    VBT_BASE_VELOCITY,
    VBT_PHASE_VELOCITY_OFFSET,
    VBT_REST_PERIODS,
    VBT_SESSION_MINUTES,
)
from .models import (
    AUTOREGULATED,
    VELOCITY_GUIDED,
    AdvancedTrainingParams,
    ExercisePrescription,
    PerformanceRecord,
    ReadinessFactors,
    TrainingPhase,
    VBTProtocol,
    WorkoutSession,
)
from .overload import round_half_up
from .readiness import overall_readiness_percent, readiness_adjustment
from .velocity import VELOCITY_LOSS_TARGETS, linear_load_velocity, vbt_warmup, velocity_loss_to_rpe

logger = logging.getLogger(__name__)

VelocityModel = Callable[[float], float]


class AdvancedPeriodizationEngine:
    """
    Single-session planner with readiness and velocity autoregulation.

    velocity_model maps an intensity (fraction of max) to an expected bar
    velocity in m/s; swap it for a calibrated profile when one exists.
    """

    def __init__(
        self,
        params: AdvancedTrainingParams,
        velocity_model: VelocityModel | None = None,
    ) -> None:
        self.params = params
        self.velocity_model: VelocityModel = velocity_model or linear_load_velocity

    def generate_smart_workout(
        self,
        week_number: int,
        session_number: int,
        readiness: ReadinessFactors | None = None,
        recent_performance: Sequence[PerformanceRecord] | None = None,
    ) -> WorkoutSession:
        """
        Prescribe the next session.

        Args:
            week_number: 1-based week within the timeframe
            session_number: 1-based session count (drives the HPS rotation)
            readiness: Optional same-day readiness reading
            recent_performance: Context only; not used in the prescription

        Returns:
            WorkoutSession with exactly one exercise entry
        """
        if week_number < 1:
            raise ValueError(f"week_number must be >= 1, got {week_number}")
        if session_number < 1:
            raise ValueError(f"session_number must be >= 1, got {session_number}")

        phase = self.determine_training_phase(week_number)
        adjustment = readiness_adjustment(readiness) if readiness is not None else 1.0
        logger.debug(
            "Week %d session %d: phase=%s adjustment=%.2f recent_records=%d",
            week_number, session_number, phase, adjustment, len(recent_performance or ()),
        )

        model = self.params.periodization_model
        if model == "dup_hps":
            session = self._dup_hps_session(week_number, session_number, phase)
        elif model == "vbt_autoregulated":
            session = self._vbt_session(phase)
        else:
            # linear, dup_hsp and block_conjugate run the HPS rotation
            logger.info("Periodization model %r falls back to dup_hps", model)
            session = self._dup_hps_session(week_number, session_number, phase)

        session = apply_readiness_adjustment(session, adjustment)
        return replace(
            session,
            coaching_notes=self._coaching_notes(session, phase, readiness),
            scientific_rationale=self._scientific_rationale(session),
        )

    # ------------------------------------------------------------------
    # Phase math
    # ------------------------------------------------------------------

    def determine_training_phase(self, week: int) -> TrainingPhase:
        """≤60% of the timeframe accumulation, ≤85% intensification, then realization."""
        progress = week / self.params.timeframe
        if progress <= ACCUMULATION_END:
            return "accumulation"
        if progress <= INTENSIFICATION_END:
            return "intensification"
        return "realization"

    def calculate_phase_intensity(self, phase: TrainingPhase, week: int) -> float:
        """
        Base intensity for the week, 70% rising to 95% over the timeframe.

        accumulation: capped at 0.80
        intensification: +0.10, capped at 0.95
        realization: 0.95
        """
        base = PHASE_BASE_INTENSITY + (week / self.params.timeframe) * PHASE_INTENSITY_RISE
        if phase == "accumulation":
            return min(base, ACCUMULATION_INTENSITY_CAP)
        if phase == "intensification":
            return min(base + INTENSIFICATION_INTENSITY_BUMP, INTENSIFICATION_INTENSITY_CAP)
        return REALIZATION_INTENSITY

    @staticmethod
    def determine_optimal_sets(day_type: str, phase: TrainingPhase) -> int:
        """Base sets for the day type scaled by phase (×1.2 / ×1.0 / ×0.8)."""
        return round_half_up(OPTIMAL_BASE_SETS[day_type] * PHASE_SET_MULTIPLIER[phase])

    # ------------------------------------------------------------------
    # Session builders
    # ------------------------------------------------------------------

    def _dup_hps_session(self, week: int, session_number: int, phase: TrainingPhase) -> WorkoutSession:
        day_type = HPS_ROTATION[(session_number - 1) % len(HPS_ROTATION)]
        base_intensity = self.calculate_phase_intensity(phase, week)
        name = self.params.exercise

        if day_type == "hypertrophy":
            exercise = ExercisePrescription(
                name=name,
                sets=self.determine_optimal_sets("hypertrophy", phase),
                reps=(8, 10, 12),
                intensity=base_intensity * 0.7,
                rpe_target=7.5,
                velocity_loss_target=VELOCITY_LOSS_TARGETS["hypertrophy"][1],
                rest_periods=(90, 120, 150),
                tempo="3-1-2-1",
                notes="Focus on muscle tension and mind-muscle connection",
            )
            return WorkoutSession(
                type="hypertrophy",
                phase=phase,
                exercises=(exercise,),
                estimated_duration=45,
                focus="Muscle hypertrophy and metabolic stress",
            )

        if day_type == "power":
            intensity = base_intensity * 0.65
            exercise = ExercisePrescription(
                name=name,
                sets=5,
                reps=(3, 4, 5),
                intensity=intensity,
                rpe_target=6.5,
                velocity_loss_target=VELOCITY_LOSS_TARGETS["power"][1],
                rest_periods=(180, 240),
                tempo="X-0-X-2",
                velocity_target=self.velocity_model(intensity),
                notes="Maximum intent on every rep. Stop set if velocity drops significantly.",
            )
            return WorkoutSession(
                type="power",
                phase=phase,
                exercises=(exercise,),
                estimated_duration=35,
                focus="Rate of force development and neural adaptations",
            )

        exercise = ExercisePrescription(
            name=name,
            sets=4,
            reps=(3, 4, 5),
            intensity=base_intensity * 0.85,
            rpe_target=8.5,
            velocity_loss_target=VELOCITY_LOSS_TARGETS["strength"][1],
            rest_periods=(240, 300),
            tempo="2-1-1-1",
            notes="Focus on technique under heavy load. Grind reps are acceptable.",
        )
        return WorkoutSession(
            type="strength",
            phase=phase,
            exercises=(exercise,),
            estimated_duration=50,
            focus="Maximal strength and neural efficiency",
        )

    def _vbt_session(self, phase: TrainingPhase) -> WorkoutSession:
        target_velocity = VBT_BASE_VELOCITY + VBT_PHASE_VELOCITY_OFFSET[phase]
        velocity_loss = self.params.target_velocity_loss
        exercise = ExercisePrescription(
            name=self.params.exercise,
            sets=AUTOREGULATED,
            reps=AUTOREGULATED,
            intensity=VELOCITY_GUIDED,
            velocity_target=target_velocity,
            velocity_loss_target=velocity_loss,
            rpe_target=velocity_loss_to_rpe(velocity_loss),
            rest_periods=tuple(VBT_REST_PERIODS),
            notes=(
                f"Target velocity: {target_velocity:.2f} m/s. "
                f"Stop set at {velocity_loss:g}% velocity loss."
            ),
        )
        return WorkoutSession(
            type="vbt_autoregulated",
            phase=phase,
            exercises=(exercise,),
            estimated_duration=VBT_SESSION_MINUTES,
            focus="Autoregulated training based on velocity feedback",
            vbt_protocol=VBTProtocol(warmup_velocities=vbt_warmup(target_velocity)),
        )

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def _coaching_notes(
        self,
        session: WorkoutSession,
        phase: TrainingPhase,
        readiness: ReadinessFactors | None,
    ) -> str:
        notes: list[str] = []

        if phase == "accumulation":
            notes.append("ACCUMULATION PHASE: Building work capacity and technical proficiency")
            notes.append("- Focus on movement quality and progressive volume")
            notes.append("- RPE should feel manageable with 2-3 reps in reserve")
        elif phase == "intensification":
            notes.append("INTENSIFICATION PHASE: Neural adaptations and strength gains")
            notes.append("- Higher loads with lower volume - quality over quantity")
            notes.append("- RPE 8-9 is expected, but maintain perfect technique")
        else:
            notes.append("REALIZATION PHASE: Peak strength expression")
            notes.append("- Testing maximal capabilities - demonstrate your gains")
            notes.append("- Full recovery between attempts, perfect technique only")

        if self.params.enable_vbt and session.vbt_protocol is not None:
            notes.append("VELOCITY-BASED TRAINING:")
            notes.append("- Monitor bar speed for each rep - aim for consistent velocity")
            notes.append("- Stop the set when velocity drops below threshold")
            notes.append("- Higher velocity = better neural adaptations")

        if readiness is not None and overall_readiness_percent(readiness) < LOW_READINESS_PERCENT:
            notes.append("READINESS ADJUSTMENT:")
            notes.append("- Training loads reduced based on current readiness")
            notes.append("- Focus on movement quality over intensity today")
            notes.append("- Recovery is part of the process - listen to your body")

        if "dup" in self.params.periodization_model:
            notes.append("DAILY UNDULATING PERIODIZATION:")
            notes.append("- Different stimulus each session prevents accommodation")
            notes.append("- Research shows 2x greater strength gains vs linear progression")

        return "\n".join(notes)

    def _scientific_rationale(self, session: WorkoutSession) -> str:
        rationales: list[str] = []

        model = self.params.periodization_model
        if model == "dup_hps":
            rationales.append(
                "RESEARCH BASIS: HPS configuration shown to be superior to HSP "
                "in powerlifters (Zourdos et al., 2016)"
            )
            rationales.append("- Hypertrophy-Power-Strength sequence optimizes neuromuscular adaptations")
        elif model == "vbt_autoregulated":
            rationales.append(
                "RESEARCH BASIS: VBT provides superior strength gains vs "
                "percentage-based training (Held et al., 2022)"
            )
            rationales.append("- Velocity loss monitoring prevents overreaching while maximizing adaptations")

        exercise = session.main_exercise
        if exercise.velocity_loss_target:
            vl = exercise.velocity_loss_target
            if vl <= 15:
                rationales.append("VELOCITY LOSS: Low VL (<=15%) optimal for power and neural adaptations")
            elif vl <= 25:
                rationales.append("VELOCITY LOSS: Moderate VL (15-25%) optimal for strength gains")
            else:
                rationales.append("VELOCITY LOSS: Higher VL (25%+) creates metabolic stress for hypertrophy")

        rpe = exercise.rpe_target
        if rpe and rpe < 8:
            rationales.append("RPE TARGET: Submaximal loads preserve movement quality and enable consistency")
        elif rpe and rpe >= 8.5:
            rationales.append("RPE TARGET: High RPE develops mental toughness and maximal strength")

        return "\n".join(rationales)


def apply_readiness_adjustment(session: WorkoutSession, adjustment: float) -> WorkoutSession:
    """
    Scale a session by a readiness multiplier.

    Numeric intensities are multiplied; the RPE target drops by
    (1 − adjustment) × 2 with a floor of 6.  An adjustment above 1.0 raises
    the RPE target past its baseline with no ceiling.
    """
    exercises = []
    for exercise in session.exercises:
        intensity = exercise.intensity
        if not isinstance(intensity, str):
            intensity = intensity * adjustment
        rpe = exercise.rpe_target
        if rpe:
            rpe = max(RPE_FLOOR, rpe - (1 - adjustment) * RPE_ADJUSTMENT_SCALE)
        else:
            rpe = None
        exercises.append(replace(exercise, intensity=intensity, rpe_target=rpe))
    return replace(session, exercises=tuple(exercises))


def create_advanced_periodization_engine(
    params: AdvancedTrainingParams,
    velocity_model: VelocityModel | None = None,
) -> AdvancedPeriodizationEngine:
    """Create an engine for the given parameters."""
    return AdvancedPeriodizationEngine(params, velocity_model=velocity_model)
