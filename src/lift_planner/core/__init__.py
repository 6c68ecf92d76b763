"""
Periodization core for lift-planner.

Pure computation only: goals and readiness readings in, plans out.
"""

from .advanced import AdvancedPeriodizationEngine, create_advanced_periodization_engine
from .mesocycle import MesocyclePlanner, create_mesocycle_planner
from .models import (
    AdvancedTrainingParams,
    Mesocycle,
    ReadinessFactors,
    TrainingGoal,
    ValidationError,
    WorkoutSession,
)
from .readiness import estimate_training_readiness
from .velocity import calculate_optimal_velocity_loss, convert_rpe_to_velocity_loss

__all__ = [
    "AdvancedPeriodizationEngine",
    "AdvancedTrainingParams",
    "Mesocycle",
    "MesocyclePlanner",
    "ReadinessFactors",
    "TrainingGoal",
    "ValidationError",
    "WorkoutSession",
    "calculate_optimal_velocity_loss",
    "convert_rpe_to_velocity_loss",
    "create_advanced_periodization_engine",
    "create_mesocycle_planner",
    "estimate_training_readiness",
]
