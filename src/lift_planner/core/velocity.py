"""
Velocity-based training tables and conversions.

Velocity values are estimates from static tables and a simplified
load-velocity line, not measured signals.
"""

from typing import Final, Literal

from .config import (
    DEFAULT_VELOCITY_LOSS,
    LOAD_VELOCITY_INTERCEPT,
    LOAD_VELOCITY_SLOPE,
    VBT_WARMUP_INTENSITIES,
    VBT_WARMUP_REPS,
    VBT_WARMUP_VELOCITY_STEP,
)
from .models import ValidationError, VelocityWarmupStep

VelocityAdaptation = Literal["power", "strength", "hypertrophy", "endurance"]

# Velocity-loss ranges (percent) that favour each adaptation
VELOCITY_LOSS_TARGETS: Final[dict[str, tuple[float, float]]] = {
    "power": (5, 15),
    "strength": (15, 25),
    "hypertrophy": (20, 35),
    "endurance": (30, 50),
}

# RPE → (velocity loss %, description)
RPE_VELOCITY_MAPPING: Final[dict[int, tuple[float, str]]] = {
    6: (5, "Could do 4+ more reps"),
    7: (10, "Could do 2-3 more reps"),
    8: (20, "Could do 1-2 more reps"),
    9: (30, "Could do 1 more rep"),
    10: (40, "Maximal effort"),
}


def calculate_optimal_velocity_loss(adaptation: VelocityAdaptation) -> float:
    """
    Midpoint of the velocity-loss range for an adaptation.

    Args:
        adaptation: power / strength / hypertrophy / endurance

    Returns:
        Target velocity loss in percent (e.g. strength → 20)

    Raises:
        ValidationError: If the adaptation is unknown
    """
    if adaptation not in VELOCITY_LOSS_TARGETS:
        raise ValidationError(
            "adaptation",
            f"must be one of {tuple(VELOCITY_LOSS_TARGETS)}, got {adaptation!r}",
        )
    low, high = VELOCITY_LOSS_TARGETS[adaptation]
    return (low + high) / 2


def convert_rpe_to_velocity_loss(rpe: float) -> float:
    """
    Look up the velocity loss expected at an RPE.

    Only whole RPE values 6–10 are mapped; anything else (including
    half-points) falls back to the default of 20%.
    """
    entry = RPE_VELOCITY_MAPPING.get(rpe)  # type: ignore[call-overload]
    if entry is None:
        return DEFAULT_VELOCITY_LOSS
    return entry[0]


def velocity_loss_to_rpe(velocity_loss: float) -> float:
    """
    RPE implied by a velocity-loss threshold.

    ≤ 10% → 7, ≤ 20% → 8, ≤ 30% → 9, otherwise 10.
    """
    if velocity_loss <= 10:
        return 7
    if velocity_loss <= 20:
        return 8
    if velocity_loss <= 30:
        return 9
    return 10


def linear_load_velocity(intensity: float) -> float:
    """
    Simplified load-velocity line: v = 1.3 − 0.7 × intensity (m/s).

    A placeholder approximation for main barbell lifts, not a calibrated
    individual profile.  The advanced engine accepts any callable with
    this signature in its place.
    """
    return LOAD_VELOCITY_INTERCEPT - intensity * LOAD_VELOCITY_SLOPE


def vbt_warmup(target_velocity: float) -> tuple[VelocityWarmupStep, ...]:
    """
    Warm-up ladder approaching the working velocity.

    Each rung is 0.1 m/s slower than the one before, ending 0.1 m/s above
    the target: 0.4 → +0.4 m/s × 5, 0.5 → +0.3 × 3, 0.6 → +0.2 × 2,
    0.7 → +0.1 × 1.
    """
    rungs = len(VBT_WARMUP_INTENSITIES)
    return tuple(
        VelocityWarmupStep(
            intensity=intensity,
            velocity=target_velocity + VBT_WARMUP_VELOCITY_STEP * (rungs - i),
            reps=reps,
        )
        for i, (intensity, reps) in enumerate(zip(VBT_WARMUP_INTENSITIES, VBT_WARMUP_REPS))
    )
