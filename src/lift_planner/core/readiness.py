"""
Daily readiness scoring.

Two independent scorings of the same five subjective axes are kept on
purpose, each with its own scale and bands:

- readiness_adjustment(): normalized 0–1 score → load multiplier, used by
  the advanced engine when generating a session.
- estimate_training_readiness(): 1–10 score → recommendation + multiplier,
  a standalone utility for callers.

Stress and soreness are inverted (11 − value) before averaging so that
higher is always better.
"""

from .config import (
    READINESS_ADJUSTMENT_BANDS,
    READINESS_ADJUSTMENT_FLOOR,
    READINESS_ESTIMATE_BANDS,
    READINESS_ESTIMATE_FLOOR,
)
from .models import ReadinessEstimate, ReadinessFactors


def readiness_adjustment(factors: ReadinessFactors) -> float:
    """
    Load multiplier for the advanced engine.

    score = mean(sleep, 11 − stress, energy, 11 − soreness, motivation) / 10

    score ≥ 0.8 → 1.1, ≥ 0.6 → 1.0, ≥ 0.4 → 0.85, else 0.7.
    A step function, not continuous.

    Args:
        factors: Same-day readiness reading

    Returns:
        Multiplier applied to intensity (1.0 = neutral)
    """
    axes = [
        factors.sleep_quality,
        11 - factors.stress_level,
        factors.energy_level,
        11 - factors.muscle_soreness,
        factors.motivation,
    ]
    score = (sum(axes) / len(axes)) / 10

    for lower_bound, multiplier in READINESS_ADJUSTMENT_BANDS:
        if score >= lower_bound:
            return multiplier
    return READINESS_ADJUSTMENT_FLOOR


def estimate_training_readiness(factors: ReadinessFactors) -> ReadinessEstimate:
    """
    Standalone readiness estimate on the 1–10 scale.

    score ≥ 8 → proceed (1.1), ≥ 6 → proceed (1.0), ≥ 4 → reduce (0.85),
    else deload (0.7).

    Args:
        factors: Same-day readiness reading

    Returns:
        ReadinessEstimate with the raw 1–10 score
    """
    score = (
        factors.sleep_quality
        + (11 - factors.stress_level)
        + factors.energy_level
        + (11 - factors.muscle_soreness)
        + factors.motivation
    ) / 5

    for lower_bound, recommendation, adjustment in READINESS_ESTIMATE_BANDS:
        if score >= lower_bound:
            return ReadinessEstimate(score=score, recommendation=recommendation, adjustment=adjustment)
    recommendation, adjustment = READINESS_ESTIMATE_FLOOR
    return ReadinessEstimate(score=score, recommendation=recommendation, adjustment=adjustment)


def overall_readiness_percent(factors: ReadinessFactors) -> float:
    """Readiness as a 10–100 percentage (mean of the oriented axes × 10)."""
    axes = [
        factors.sleep_quality,
        11 - factors.stress_level,
        factors.energy_level,
        11 - factors.muscle_soreness,
        factors.motivation,
    ]
    return (sum(axes) / len(axes)) * 10
