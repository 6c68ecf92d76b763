"""
JSON serialization for planner inputs and outputs.

Handles conversion between dataclasses and JSON-compatible dicts.  Input
dicts may use snake_case keys or the camelCase keys used by web clients
(currentMax, trainingDays, ...).
"""

import json
from dataclasses import fields
from typing import Any

from ..core.models import (
    AdvancedTrainingParams,
    ExercisePrescription,
    GoalValidation,
    Mesocycle,
    ReadinessEstimate,
    ReadinessFactors,
    Session,
    SessionLoads,
    TrainingGoal,
    ValidationError,
    Week,
    WorkoutSession,
)

# camelCase aliases accepted on input
_KEY_ALIASES: dict[str, str] = {
    "currentMax": "current_max",
    "targetMax": "target_max",
    "currentMaxReps": "current_max_reps",
    "trainingDays": "training_days",
    "enableVBT": "enable_vbt",
    "autoregulationMethod": "autoregulation_method",
    "targetVelocityLoss": "target_velocity_loss",
    "periodizationModel": "periodization_model",
    "experienceLevel": "experience_level",
    "trainingAge": "training_age",
    "primaryAdaptation": "primary_adaptation",
    "sleepQuality": "sleep_quality",
    "stressLevel": "stress_level",
    "energyLevel": "energy_level",
    "muscleSoreness": "muscle_soreness",
    "musclesoreness": "muscle_soreness",
}

__all__ = [
    "ValidationError",
    "dict_to_advanced_params",
    "dict_to_readiness",
    "dict_to_training_goal",
    "goal_validation_to_dict",
    "load_json_file",
    "mesocycle_to_dict",
    "readiness_estimate_to_dict",
    "session_loads_to_dict",
    "to_json",
    "workout_session_to_dict",
]


def _normalize_keys(data: dict[str, Any], model: type, name: str) -> dict[str, Any]:
    """
    Map aliases to field names and reject unknown keys.

    Raises:
        ValidationError: If data is not a dict or carries unknown keys
    """
    if not isinstance(data, dict):
        raise ValidationError(name, f"expected an object, got {type(data).__name__}")
    allowed = {f.name for f in fields(model)}
    result: dict[str, Any] = {}
    for key, value in data.items():
        field_name = _KEY_ALIASES.get(key, key)
        if field_name not in allowed:
            raise ValidationError(field_name, f"unknown field for {name}")
        result[field_name] = value
    return result


def _build(model: type, data: dict[str, Any], name: str):
    kwargs = _normalize_keys(data, model, name)
    try:
        return model(**kwargs)
    except TypeError as e:
        # Missing required fields
        raise ValidationError(name, str(e)) from e


def dict_to_training_goal(data: dict[str, Any]) -> TrainingGoal:
    """
    Convert dict to TrainingGoal.

    Raises:
        ValidationError: If data is invalid
    """
    return _build(TrainingGoal, data, "training_goal")


def dict_to_advanced_params(data: dict[str, Any]) -> AdvancedTrainingParams:
    """
    Convert dict to AdvancedTrainingParams.

    Raises:
        ValidationError: If data is invalid
    """
    return _build(AdvancedTrainingParams, data, "advanced_params")


def dict_to_readiness(data: dict[str, Any]) -> ReadinessFactors:
    """
    Convert dict to ReadinessFactors.

    Raises:
        ValidationError: If data is invalid
    """
    return _build(ReadinessFactors, data, "readiness")


def session_to_dict(session: Session) -> dict[str, Any]:
    return {
        "day": session.day,
        "sets": session.sets,
        "reps": session.reps if isinstance(session.reps, int) else list(session.reps),
        "intensity": session.intensity,
        "rpe": session.rpe,
        "notes": session.notes,
    }


def week_to_dict(week: Week) -> dict[str, Any]:
    return {
        "week": week.week,
        "type": week.type,
        "sessions": [session_to_dict(s) for s in week.sessions],
    }


def mesocycle_to_dict(mesocycle: Mesocycle) -> dict[str, Any]:
    """
    Convert Mesocycle to JSON-compatible dict.

    Args:
        mesocycle: Mesocycle to convert

    Returns:
        Dict representation
    """
    return {
        "id": mesocycle.id,
        "name": mesocycle.name,
        "exercise": mesocycle.exercise,
        "start_date": mesocycle.start_date,
        "end_date": mesocycle.end_date,
        "current_max": mesocycle.current_max,
        "target_max": mesocycle.target_max,
        "projected_max": mesocycle.projected_max,
        "weeks": [week_to_dict(w) for w in mesocycle.weeks],
    }


def exercise_prescription_to_dict(exercise: ExercisePrescription) -> dict[str, Any]:
    """Convert ExercisePrescription to dict, omitting unset optional fields."""
    data: dict[str, Any] = {
        "name": exercise.name,
        "sets": exercise.sets,
        "reps": exercise.reps if isinstance(exercise.reps, str) else list(exercise.reps),
        "intensity": exercise.intensity,
        "rest_periods": list(exercise.rest_periods),
        "notes": exercise.notes,
    }
    for key in ("rpe_target", "velocity_loss_target", "velocity_target", "tempo"):
        value = getattr(exercise, key)
        if value is not None:
            data[key] = value
    return data


def workout_session_to_dict(session: WorkoutSession) -> dict[str, Any]:
    """
    Convert WorkoutSession to JSON-compatible dict.

    Args:
        session: WorkoutSession to convert

    Returns:
        Dict representation
    """
    data: dict[str, Any] = {
        "type": session.type,
        "phase": session.phase,
        "exercises": [exercise_prescription_to_dict(e) for e in session.exercises],
        "total_volume": session.total_volume,
        "estimated_duration": session.estimated_duration,
        "focus": session.focus,
        "coaching_notes": session.coaching_notes,
        "scientific_rationale": session.scientific_rationale,
    }
    if session.vbt_protocol is not None:
        protocol = session.vbt_protocol
        data["vbt_protocol"] = {
            "warmup_velocities": [
                {"intensity": s.intensity, "velocity": s.velocity, "reps": s.reps}
                for s in protocol.warmup_velocities
            ],
            "load_selection": protocol.load_selection,
            "stop_criteria": protocol.stop_criteria,
            "feedback_type": protocol.feedback_type,
        }
    return data


def goal_validation_to_dict(result: GoalValidation) -> dict[str, Any]:
    data: dict[str, Any] = {"realistic": result.realistic}
    if result.reason is not None:
        data["reason"] = result.reason
    if result.suggestion is not None:
        data["suggestion"] = result.suggestion
    return data


def session_loads_to_dict(loads: SessionLoads) -> dict[str, Any]:
    return {
        "working_weight": loads.working_weight,
        "warmup_sets": [{"weight": w.weight, "reps": w.reps} for w in loads.warmup_sets],
        "working_volume": loads.working_volume,
    }


def readiness_estimate_to_dict(estimate: ReadinessEstimate) -> dict[str, Any]:
    return {
        "score": estimate.score,
        "recommendation": estimate.recommendation,
        "adjustment": estimate.adjustment,
    }


def to_json(data: dict[str, Any]) -> str:
    """Pretty-print a serialized dict."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def load_json_file(path) -> dict[str, Any]:
    """
    Read a JSON object from disk.

    Raises:
        ValidationError: If the file cannot be read or is not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError("file", f"invalid JSON in {path}: {e}") from e
    except FileNotFoundError as e:
        raise ValidationError("file", f"not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError("file", f"cannot read {path}: {e}") from e
