"""
Integration tests for the lift-planner planning engines.

Each test exercises a full pipeline: TrainingGoal → MesocyclePlanner, or
AdvancedTrainingParams (+ readiness) → AdvancedPeriodizationEngine.
Hand-computed expected values are included in comments.

Scenario matrix exercised:
  methods    : linear, undulating, block
  experience : beginner, intermediate, advanced
  timeframe  : 4 – 52 weeks
  days/week  : 1 – 7
"""

from datetime import datetime, timezone

import pytest

from lift_planner.core.advanced import (
    AdvancedPeriodizationEngine,
    apply_readiness_adjustment,
    create_advanced_periodization_engine,
)
from lift_planner.core.mesocycle import MesocyclePlanner, create_mesocycle_planner
from lift_planner.core.models import (
    AdvancedTrainingParams,
    ExercisePrescription,
    PerformanceRecord,
    ReadinessFactors,
    TrainingGoal,
    WorkoutSession,
)

START = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


# ===========================================================================
# Helpers
# ===========================================================================

def _fixed_clock():
    return START


def _goal(
    current_max: float = 225,
    target_max: float = 250,
    timeframe: int = 16,
    training_days: int = 3,
    experience: str = "intermediate",
    method: str = "linear",
) -> TrainingGoal:
    return TrainingGoal(
        exercise="Bench Press",
        current_max=current_max,
        target_max=target_max,
        timeframe=timeframe,
        training_days=training_days,
        experience=experience,
        method=method,
    )


def _planner(**kwargs) -> MesocyclePlanner:
    return create_mesocycle_planner(_goal(**kwargs), clock=_fixed_clock)


def _params(
    periodization_model: str = "dup_hps",
    timeframe: int = 12,
    enable_vbt: bool = False,
    target_velocity_loss: float = 20,
) -> AdvancedTrainingParams:
    return AdvancedTrainingParams(
        exercise="Squat",
        current_max=315,
        target_max=350,
        timeframe=timeframe,
        enable_vbt=enable_vbt,
        target_velocity_loss=target_velocity_loss,
        periodization_model=periodization_model,
    )


def _uniform_readiness(x: float) -> ReadinessFactors:
    """Oriented axes all equal x, so the normalized score is x / 10."""
    return ReadinessFactors(
        sleep_quality=x,
        stress_level=11 - x,
        energy_level=x,
        muscle_soreness=11 - x,
        motivation=x,
    )


ALL_METHODS = ["linear", "undulating", "block"]
ALL_EXPERIENCE = ["beginner", "intermediate", "advanced"]


# ===========================================================================
# Mesocycle structure
# ===========================================================================

class TestMesocycleStructure:

    @pytest.mark.parametrize("method", ALL_METHODS)
    @pytest.mark.parametrize("experience", ALL_EXPERIENCE)
    @pytest.mark.parametrize("timeframe", [4, 5, 9, 13, 16, 24, 52])
    def test_week_count_and_final_test(self, method, experience, timeframe):
        mesocycle = _planner(method=method, experience=experience, timeframe=timeframe).generate_mesocycle()

        assert len(mesocycle.weeks) == timeframe
        assert [w.week for w in mesocycle.weeks] == list(range(1, timeframe + 1))
        assert mesocycle.weeks[-1].type == "test"
        assert mesocycle.week_types().count("test") == 1

    @pytest.mark.parametrize("method", ALL_METHODS)
    @pytest.mark.parametrize("experience", ALL_EXPERIENCE)
    @pytest.mark.parametrize("timeframe", [5, 9, 13, 17, 25])
    def test_no_deload_before_the_test(self, method, experience, timeframe):
        # Timeframes where T-1 falls on a 4-week cadence
        mesocycle = _planner(method=method, experience=experience, timeframe=timeframe).generate_mesocycle()
        assert mesocycle.weeks[-2].type != "deload"

    @pytest.mark.parametrize("method", ALL_METHODS)
    @pytest.mark.parametrize("days", [1, 3, 5, 7])
    def test_sessions_per_week(self, method, days):
        mesocycle = _planner(method=method, training_days=days).generate_mesocycle()

        for week in mesocycle.weeks:
            assert [s.day for s in week.sessions] == list(range(1, days + 1))

    def test_linear_intermediate_16_weeks(self):
        # build ≤ floor(0.6 × 16) = 9; deload every 4th week; 16 = test
        types = _planner(method="linear").generate_mesocycle().week_types()

        assert types == [
            "build", "build", "build", "deload",
            "build", "build", "build", "deload",
            "build", "intensify", "intensify", "deload",
            "intensify", "intensify", "intensify", "test",
        ]

    def test_linear_beginner_deloads_every_6_weeks(self):
        types = _planner(method="linear", experience="beginner").generate_mesocycle().week_types()

        deloads = [i + 1 for i, t in enumerate(types) if t == "deload"]
        assert deloads == [6, 12]

    def test_undulating_beginner_deloads_every_6_weeks(self):
        # Undulating follows the experience cadence, not the fixed 4 of block
        types = _planner(method="undulating", experience="beginner").generate_mesocycle().week_types()

        assert [i + 1 for i, t in enumerate(types) if t == "deload"] == [6, 12]

    def test_undulating_16_weeks(self):
        # intensify after 0.75 × 16 = 12
        types = _planner(method="undulating").generate_mesocycle().week_types()

        assert [i + 1 for i, t in enumerate(types) if t == "deload"] == [4, 8, 12]
        assert [i + 1 for i, t in enumerate(types) if t == "intensify"] == [13, 14, 15]

    def test_block_16_weeks(self):
        # accumulation floor(0.5 × 16) = 8, intensification floor(0.3 × 16) = 4,
        # realization 13-15 trains as intensify
        types = _planner(method="block").generate_mesocycle().week_types()

        assert types == [
            "build", "build", "build", "deload",
            "build", "build", "build", "deload",
            "intensify", "intensify", "intensify", "deload",
            "intensify", "intensify", "intensify", "test",
        ]

    def test_block_beginner_keeps_4_week_cadence(self):
        types = _planner(method="block", experience="beginner").generate_mesocycle().week_types()
        assert [i + 1 for i, t in enumerate(types) if t == "deload"] == [4, 8, 12]

    def test_four_week_plan(self):
        # Week 3 = T-1 cannot deload; week 4 is the test
        types = _planner(timeframe=4).generate_mesocycle().week_types()
        assert types == ["build", "build", "intensify", "test"]


# ===========================================================================
# Mesocycle sessions
# ===========================================================================

class TestMesocycleSessions:

    def test_linear_first_build_session(self):
        # progress 1/16 = 0.0625
        # reps = max(3, 8 − floor(0.3125)) = 8
        # intensity = 0.65 + 0.0625 × 0.25 = 0.665625 → 0.67
        # rpe = 6 + 0.0625 × 2 = 6.125
        session = _planner().generate_mesocycle().weeks[0].sessions[0]

        assert session.sets == 4
        assert session.reps == 8
        assert session.intensity == pytest.approx(0.67)
        assert session.rpe == pytest.approx(6.125)
        # 225 × 0.67 = 150.75 → 151
        assert session.notes == "Focus on volume and technique. 4x8 @ 151 (67%)"

    def test_linear_beginner_build_uses_three_sets(self):
        session = _planner(experience="beginner").generate_mesocycle().weeks[0].sessions[0]
        assert session.sets == 3

    def test_linear_intensify_session(self):
        # week 10 of 16: progress 0.625
        # reps = max(1, 5 − floor(1.875)) = 4
        # intensity = 0.80 + 0.625 × 0.15 = 0.89375 → 0.89
        # rpe = 7 + 0.625 × 2 = 8.25
        week = _planner().generate_mesocycle().weeks[9]
        session = week.sessions[0]

        assert week.type == "intensify"
        assert session.sets == 3
        assert session.reps == 4
        assert session.intensity == pytest.approx(0.89)
        assert session.rpe == pytest.approx(8.25)
        assert "Rest 3-5 minutes" in session.notes

    def test_deload_session(self):
        session = _planner().generate_mesocycle().weeks[3].sessions[0]

        assert (session.sets, session.reps, session.rpe) == (2, 5, 5)
        assert session.intensity == pytest.approx(0.60)
        # 225 × 0.6 = 135
        assert session.notes.startswith("Recovery week. 2x5 @ 135 (60%).")

    @pytest.mark.parametrize(
        "method, experience, sets",
        [
            ("linear", "intermediate", 2),
            ("linear", "beginner", 1),
            ("undulating", "intermediate", 1),
            ("block", "advanced", 1),
        ],
    )
    def test_test_week_sessions(self, method, experience, sets):
        week = _planner(method=method, experience=experience).generate_mesocycle().weeks[-1]

        for session in week.sessions:
            assert session.sets == sets
            assert session.reps == 1
            assert session.intensity == 1.0
            assert session.rpe == 10
            assert "attempt new 1RM around 250" in session.notes

    def test_undulating_rotation(self):
        week = _planner(method="undulating", training_days=4).generate_mesocycle().weeks[0]
        labels = [s.notes.split(" day")[0] for s in week.sessions]

        # Heavy, Volume, Intensity, then wraps
        assert labels == ["Heavy", "Volume", "Intensity", "Heavy"]
        assert [(s.sets, s.reps, s.rpe) for s in week.sessions[:3]] == [(3, 5, 8), (4, 8, 7), (2, 3, 9)]

    def test_undulating_intensity_rises_and_caps(self):
        weeks = _planner(method="undulating").generate_mesocycle().weeks
        # week 1 heavy: 0.85 + (1/16) × 0.10 = 0.85625
        heavy = weeks[0].sessions[0]
        assert heavy.intensity == pytest.approx(0.85625)
        # 225 × 0.85625 = 192.66 → 193; 85.625% → 86%
        assert heavy.notes.endswith("3x5 @ 193 (86%)")
        # week 15 intensity day: 0.90 + 0.09375 = 0.99375 → cap 0.95
        assert weeks[14].sessions[2].intensity == pytest.approx(0.95)

    def test_block_sessions(self):
        weeks = _planner(method="block").generate_mesocycle().weeks
        build = weeks[0].sessions[0]
        intensify = weeks[8].sessions[0]

        assert (build.sets, build.reps, build.intensity, build.rpe) == (4, 8, 0.70, 7)
        assert (intensify.sets, intensify.reps, intensify.intensity, intensify.rpe) == (3, 3, 0.87, 8)
        # 225 × 0.87 = 195.75 → 196
        assert intensify.notes.endswith("3x3 @ 196 (87%)")

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_every_note_carries_a_weight(self, method):
        for week in _planner(method=method).generate_mesocycle().weeks:
            for session in week.sessions:
                assert " @ " in session.notes or "Openers from " in session.notes


# ===========================================================================
# Mesocycle metadata and determinism
# ===========================================================================

class TestMesocycleMetadata:

    def test_dates_and_name(self):
        mesocycle = _planner().generate_mesocycle()

        assert mesocycle.start_date == "2026-01-05"
        # + 16 weeks = 112 days
        assert mesocycle.end_date == "2026-04-27"
        assert mesocycle.name == "Bench Press - 225 to 250"
        assert mesocycle.exercise == "Bench Press"
        assert mesocycle.id == f"mesocycle-{int(START.timestamp() * 1000)}"

    def test_projected_max(self):
        # 225 × (1 + 0.15 × min(1.5, 16/16)) = 258.75 → 259
        assert _planner().generate_mesocycle().projected_max == 259

    def test_fractional_max_in_name(self):
        mesocycle = _planner(current_max=102.5, target_max=110).generate_mesocycle()
        assert mesocycle.name == "Bench Press - 102.5 to 110"

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_same_goal_and_clock_same_plan(self, method):
        a = _planner(method=method).generate_mesocycle()
        b = _planner(method=method).generate_mesocycle()
        assert a == b


# ===========================================================================
# Goal validation
# ===========================================================================

class TestGoalValidation:

    def test_ambitious_goal(self):
        # 0.15 × min(1.5, 12/16) = 0.1125; 225 × 1.1125 = 250.31 → 250 < 275
        result = _planner(target_max=275, timeframe=12).validate_goal()

        assert not result.realistic
        assert result.suggestion == 250
        assert "Expected progress: 250" in result.reason

    @pytest.mark.parametrize(
        "current, expected",
        [
            (1, 2),        # 1.1 → 1, raised to 2
            (2, 3),        # 2.2 → 2, raised to 3
            (3, 4),
            (4, 5),        # 4.4 → 4, raised to 5
            (4.5, 5),      # 4.95 → 5
            (102.5, 113),  # 112.75 → 113
            (225, 248),    # 247.5 → 248
        ],
    )
    def test_target_not_above_current(self, current, expected):
        result = _planner(current_max=current, target_max=current).validate_goal()

        assert not result.realistic
        assert result.reason == "Target max must be higher than current max"
        assert result.suggestion == expected
        assert result.suggestion > current

    def test_target_below_current(self):
        result = _planner(current_max=3, target_max=1).validate_goal()
        assert result.suggestion == 4

    @pytest.mark.parametrize("experience", ALL_EXPERIENCE)
    @pytest.mark.parametrize("timeframe", [4, 16, 52])
    def test_more_than_50_percent_is_unrealistic(self, experience, timeframe):
        # Best case is beginner over 52 weeks: 100 × 1.30 = 130 < 151, so the
        # projection check rejects the goal before the 50% cap is consulted
        result = _planner(
            current_max=100, target_max=151, timeframe=timeframe, experience=experience
        ).validate_goal()

        assert result.realistic is False
        assert "Expected progress" in result.reason
        assert result.suggestion <= 130

    def test_realistic_goal(self):
        result = _planner(current_max=200, target_max=220).validate_goal()

        assert result.realistic
        assert result.reason is None
        assert result.suggestion is None

    def test_timeframe_factor_caps_at_1_5(self):
        # beginner, 52 weeks: 0.20 × 1.5 = 0.30 → 100 → 130
        planner = _planner(current_max=100, target_max=130, timeframe=52, experience="beginner")

        assert planner.expected_progress() == pytest.approx(0.30)
        assert planner.projected_max() == 130
        assert planner.validate_goal().realistic

    @pytest.mark.parametrize(
        "experience, expected",
        [("beginner", 0.20), ("intermediate", 0.15), ("advanced", 0.10)],
    )
    def test_expected_progress_by_experience(self, experience, expected):
        assert _planner(experience=experience).expected_progress() == pytest.approx(expected)

    def test_unrealistic_goal_still_generates(self):
        mesocycle = _planner(target_max=400).generate_mesocycle()

        assert len(mesocycle.weeks) == 16
        assert mesocycle.projected_max < mesocycle.target_max


# ===========================================================================
# Session loads
# ===========================================================================

class TestSessionLoads:

    def test_loads_with_warmups(self):
        # 200 × 0.8 = 160; rungs below 0.8: 80, 100, 120 (×5), 140 (×3)
        loads = _planner(current_max=200, target_max=220).calculate_session_loads(0.8, 3, 5)

        assert loads.working_weight == 160
        assert [(w.weight, w.reps) for w in loads.warmup_sets] == [
            (80, 5), (100, 5), (120, 5), (140, 3),
        ]
        assert loads.working_volume == 160 * 15

    def test_rounds_to_nearest_5(self):
        # 225 × 0.67 = 150.75 → 150; 225 × 0.5 = 112.5 → 115
        loads = _planner().calculate_session_loads(0.67, 4, 8)

        assert loads.working_weight == 150
        assert [w.weight for w in loads.warmup_sets] == [90, 115, 135]

    def test_no_warmups_below_lightest_rung(self):
        loads = _planner().calculate_session_loads(0.4, 2, 5)
        assert loads.warmup_sets == ()

    def test_per_set_reps(self):
        # 5 + 3 + 1 = 9 reps
        loads = _planner(current_max=200, target_max=220).calculate_session_loads(0.9, 3, (5, 3, 1))
        assert loads.working_volume == 180 * 9

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_every_planned_load_is_a_multiple_of_5(self, method):
        planner = _planner(current_max=227.5, target_max=240, method=method)
        for week in planner.generate_mesocycle().weeks:
            for s in week.sessions:
                loads = planner.calculate_session_loads(s.intensity, s.sets, s.reps)
                assert loads.working_weight % 5 == 0
                assert all(w.weight % 5 == 0 for w in loads.warmup_sets)
                weights = [w.weight for w in loads.warmup_sets]
                assert weights == sorted(weights)


# ===========================================================================
# Advanced engine: phases
# ===========================================================================

class TestTrainingPhase:

    @pytest.mark.parametrize(
        "week, phase",
        [
            (1, "accumulation"),
            (7, "accumulation"),       # 7/12 = 0.583
            (8, "intensification"),    # 0.667
            (10, "intensification"),   # 0.833
            (11, "realization"),       # 0.917
            (12, "realization"),
        ],
    )
    def test_phase_boundaries(self, week, phase):
        engine = create_advanced_periodization_engine(_params())
        assert engine.determine_training_phase(week) == phase

    def test_phase_intensity(self):
        engine = create_advanced_periodization_engine(_params(timeframe=16))

        # 0.70 + (1/16) × 0.25 = 0.715625
        assert engine.calculate_phase_intensity("accumulation", 1) == pytest.approx(0.715625)
        # 0.70 + (9/16) × 0.25 = 0.840625 → cap 0.80
        assert engine.calculate_phase_intensity("accumulation", 9) == pytest.approx(0.80)
        # 0.70 + 0.15625 + 0.10 = 0.95625 → cap 0.95
        assert engine.calculate_phase_intensity("intensification", 10) == pytest.approx(0.95)
        assert engine.calculate_phase_intensity("realization", 15) == pytest.approx(0.95)

    @pytest.mark.parametrize(
        "day_type, phase, sets",
        [
            ("hypertrophy", "accumulation", 5),   # 4 × 1.2 = 4.8
            ("hypertrophy", "realization", 3),    # 4 × 0.8 = 3.2
            ("strength", "intensification", 5),
            ("strength", "realization", 4),
            ("power", "accumulation", 7),         # 6 × 1.2 = 7.2
        ],
    )
    def test_optimal_sets(self, day_type, phase, sets):
        assert AdvancedPeriodizationEngine.determine_optimal_sets(day_type, phase) == sets


# ===========================================================================
# Advanced engine: DUP-HPS sessions
# ===========================================================================

class TestDupHps:

    def test_rotation(self):
        engine = create_advanced_periodization_engine(_params())
        types = [engine.generate_smart_workout(1, n).type for n in range(1, 7)]
        assert types == ["hypertrophy", "power", "strength"] * 2

    def test_hypertrophy_session(self):
        # base = 0.70 + (1/12) × 0.25 = 0.7208; × 0.7 = 0.5046
        session = create_advanced_periodization_engine(_params()).generate_smart_workout(1, 1)
        ex = session.main_exercise

        assert len(session.exercises) == 1
        assert session.phase == "accumulation"
        assert session.estimated_duration == 45
        assert ex.name == "Squat"
        assert ex.sets == 5
        assert ex.reps == (8, 10, 12)
        assert ex.intensity == pytest.approx(0.720833 * 0.7, abs=1e-5)
        assert ex.rpe_target == 7.5
        assert ex.velocity_loss_target == 35
        assert ex.rest_periods == (90, 120, 150)
        assert ex.tempo == "3-1-2-1"
        assert ex.velocity_target is None

    def test_power_session_velocity(self):
        # intensity 0.720833 × 0.65 = 0.468542; v = 1.3 − 0.7 × 0.468542 = 0.97202
        session = create_advanced_periodization_engine(_params()).generate_smart_workout(1, 2)
        ex = session.main_exercise

        assert session.type == "power"
        assert session.estimated_duration == 35
        assert ex.sets == 5
        assert ex.velocity_loss_target == 15
        assert ex.rpe_target == 6.5
        assert ex.velocity_target == pytest.approx(0.97202, abs=1e-5)

    def test_custom_velocity_model(self):
        engine = create_advanced_periodization_engine(_params(), velocity_model=lambda i: 1.0)
        assert engine.generate_smart_workout(1, 2).main_exercise.velocity_target == 1.0

    def test_strength_session(self):
        session = create_advanced_periodization_engine(_params()).generate_smart_workout(1, 3)
        ex = session.main_exercise

        assert session.type == "strength"
        assert session.estimated_duration == 50
        assert ex.sets == 4
        assert ex.reps == (3, 4, 5)
        assert ex.intensity == pytest.approx(0.720833 * 0.85, abs=1e-5)
        assert ex.velocity_loss_target == 25
        assert ex.rpe_target == 8.5

    @pytest.mark.parametrize("model", ["linear", "dup_hsp", "block_conjugate"])
    def test_other_models_fall_back_to_hps(self, model):
        expected = create_advanced_periodization_engine(_params()).generate_smart_workout(5, 2)
        session = create_advanced_periodization_engine(_params(periodization_model=model)).generate_smart_workout(5, 2)

        assert session.type == expected.type
        assert session.exercises == expected.exercises

    @pytest.mark.parametrize("week, session_number", [(0, 1), (1, 0), (-3, 2)])
    def test_rejects_non_positive_counters(self, week, session_number):
        engine = create_advanced_periodization_engine(_params())
        with pytest.raises(ValueError):
            engine.generate_smart_workout(week, session_number)

    def test_recent_performance_does_not_change_prescription(self):
        engine = create_advanced_periodization_engine(_params())
        records = [PerformanceRecord(exercise="Squat", rpe=9.5, velocity_loss=35)]

        assert engine.generate_smart_workout(3, 1, recent_performance=records) == engine.generate_smart_workout(3, 1)


# ===========================================================================
# Advanced engine: VBT sessions
# ===========================================================================

class TestVbtSession:

    def test_accumulation_session(self):
        engine = create_advanced_periodization_engine(_params(periodization_model="vbt_autoregulated", enable_vbt=True))
        session = engine.generate_smart_workout(1, 1)
        ex = session.main_exercise

        assert session.type == "vbt_autoregulated"
        assert session.estimated_duration == 40
        assert ex.sets == "autoregulated"
        assert ex.reps == "autoregulated"
        assert ex.intensity == "velocity_guided"
        # 0.5 + 0.1 in accumulation
        assert ex.velocity_target == pytest.approx(0.6)
        assert ex.velocity_loss_target == 20
        assert ex.rpe_target == 8
        assert ex.rest_periods == (180, 240)
        assert "Stop set at 20% velocity loss" in ex.notes

        protocol = session.vbt_protocol
        assert protocol is not None
        assert [s.velocity for s in protocol.warmup_velocities] == pytest.approx([1.0, 0.9, 0.8, 0.7])
        assert protocol.stop_criteria == "velocity_loss"
        assert "VELOCITY-BASED TRAINING:" in session.coaching_notes

    def test_realization_velocity(self):
        engine = create_advanced_periodization_engine(_params(periodization_model="vbt_autoregulated"))
        assert engine.generate_smart_workout(12, 1).main_exercise.velocity_target == pytest.approx(0.4)

    @pytest.mark.parametrize("velocity_loss, rpe", [(10, 7), (15, 8), (30, 9), (40, 10)])
    def test_rpe_from_velocity_loss(self, velocity_loss, rpe):
        engine = create_advanced_periodization_engine(
            _params(periodization_model="vbt_autoregulated", target_velocity_loss=velocity_loss)
        )
        assert engine.generate_smart_workout(1, 1).main_exercise.rpe_target == rpe

    def test_vbt_notes_need_flag(self):
        engine = create_advanced_periodization_engine(_params(periodization_model="vbt_autoregulated"))
        assert "VELOCITY-BASED TRAINING" not in engine.generate_smart_workout(1, 1).coaching_notes

    def test_low_readiness_keeps_velocity_guided_intensity(self):
        # score 0.3 → ×0.7; RPE 8 − 0.3 × 2 = 7.4
        engine = create_advanced_periodization_engine(_params(periodization_model="vbt_autoregulated"))
        ex = engine.generate_smart_workout(1, 1, readiness=_uniform_readiness(3)).main_exercise

        assert ex.intensity == "velocity_guided"
        assert ex.rpe_target == pytest.approx(7.4)


# ===========================================================================
# Advanced engine: readiness
# ===========================================================================

class TestReadinessScaling:

    def test_high_readiness(self):
        # score 0.9 → ×1.1; RPE 7.5 − (1 − 1.1) × 2 = 7.7
        engine = create_advanced_periodization_engine(_params())
        base = engine.generate_smart_workout(1, 1).main_exercise
        ex = engine.generate_smart_workout(1, 1, readiness=_uniform_readiness(9)).main_exercise

        assert ex.intensity == pytest.approx(base.intensity * 1.1)
        assert ex.rpe_target == pytest.approx(7.7)

    def test_low_readiness(self):
        # score 0.3 → ×0.7; RPE 7.5 − 0.6 = 6.9
        engine = create_advanced_periodization_engine(_params())
        base = engine.generate_smart_workout(1, 1).main_exercise
        session = engine.generate_smart_workout(1, 1, readiness=_uniform_readiness(3))

        assert session.main_exercise.intensity == pytest.approx(base.intensity * 0.7)
        assert session.main_exercise.rpe_target == pytest.approx(6.9)
        assert "READINESS ADJUSTMENT:" in session.coaching_notes

    def test_rpe_floor(self):
        # power RPE 6.5 − 0.6 = 5.9 → floor 6
        engine = create_advanced_periodization_engine(_params())
        ex = engine.generate_smart_workout(1, 2, readiness=_uniform_readiness(3)).main_exercise
        assert ex.rpe_target == 6

    def test_neutral_readiness_changes_nothing(self):
        # score 0.7 → ×1.0; readiness 70% is not below the warning line
        engine = create_advanced_periodization_engine(_params())
        base = engine.generate_smart_workout(1, 1)
        session = engine.generate_smart_workout(1, 1, readiness=_uniform_readiness(7))

        assert session.exercises == base.exercises
        assert "READINESS ADJUSTMENT" not in session.coaching_notes

    def test_missing_rpe_stays_missing(self):
        session = WorkoutSession(
            type="strength",
            phase="accumulation",
            exercises=(
                ExercisePrescription(name="Squat", sets=3, reps=(5,), intensity=0.8, rest_periods=(180,)),
            ),
            estimated_duration=30,
            focus="test",
        )
        ex = apply_readiness_adjustment(session, 0.85).main_exercise

        assert ex.rpe_target is None
        assert ex.intensity == pytest.approx(0.68)


# ===========================================================================
# Advanced engine: notes and rationale
# ===========================================================================

class TestAnnotations:

    @pytest.mark.parametrize(
        "week, header",
        [
            (1, "ACCUMULATION PHASE"),
            (9, "INTENSIFICATION PHASE"),
            (12, "REALIZATION PHASE"),
        ],
    )
    def test_phase_header(self, week, header):
        session = create_advanced_periodization_engine(_params()).generate_smart_workout(week, 1)
        assert session.coaching_notes.startswith(header)

    def test_dup_notes(self):
        session = create_advanced_periodization_engine(_params()).generate_smart_workout(1, 1)
        assert "DAILY UNDULATING PERIODIZATION:" in session.coaching_notes

        vbt = create_advanced_periodization_engine(_params(periodization_model="vbt_autoregulated"))
        assert "DAILY UNDULATING" not in vbt.generate_smart_workout(1, 1).coaching_notes

    @pytest.mark.parametrize(
        "session_number, expected",
        [
            (1, ["Zourdos", "Higher VL", "Submaximal"]),   # hypertrophy: VL 35, RPE 7.5
            (2, ["Zourdos", "Low VL", "Submaximal"]),      # power: VL 15, RPE 6.5
            (3, ["Zourdos", "Moderate VL", "High RPE"]),   # strength: VL 25, RPE 8.5
        ],
    )
    def test_rationale(self, session_number, expected):
        session = create_advanced_periodization_engine(_params()).generate_smart_workout(1, session_number)
        for fragment in expected:
            assert fragment in session.scientific_rationale

    def test_vbt_rationale(self):
        engine = create_advanced_periodization_engine(_params(periodization_model="vbt_autoregulated"))
        rationale = engine.generate_smart_workout(1, 1).scientific_rationale

        assert "Held et al., 2022" in rationale
        assert "Moderate VL" in rationale
        assert "RPE TARGET" not in rationale  # RPE 8 is neither < 8 nor ≥ 8.5

    def test_fallback_model_has_no_research_basis(self):
        engine = create_advanced_periodization_engine(_params(periodization_model="linear"))
        assert "RESEARCH BASIS" not in engine.generate_smart_workout(1, 1).scientific_rationale
