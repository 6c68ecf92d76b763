"""
Progressive overload formulas.

Rounding helpers used by the planners plus the strength-tracking math
(estimated 1RM, volume, RPE averages, next-weight suggestions and
personal-record detection) applied to logged workouts.
"""

import math
from collections.abc import Sequence

from .models import LoggedSet, LoggedWorkout, PersonalRecords, ProgressPoint

# Next-load multipliers keyed on last session's RPE
EASY_RPE: float = 6
MODERATE_RPE: float = 8
EASY_INCREASE: float = 1.05
MODERATE_INCREASE: float = 1.025
DEFAULT_INCREASE: float = 1.025  # No RPE logged


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round with ties going up (2.5 → 3), unlike Python's banker's rounding.

    Args:
        value: Number to round
        ndigits: Decimal places to keep

    Returns:
        Rounded value (an int when ndigits is 0)
    """
    factor = 10 ** ndigits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if ndigits == 0 else rounded


def round_to_increment(value: float, increment: float = 5) -> float:
    """Round to the nearest multiple of increment (ties go up)."""
    return round_half_up(value / increment) * increment


def calculate_one_rep_max(weight: float, reps: int) -> float:
    """
    Estimate a one-rep max with the Brzycki formula.

    1RM = weight × 36 / (37 − reps)

    Args:
        weight: Load lifted
        reps: Reps completed with that load

    Returns:
        Estimated 1RM (0 for no reps, weight itself for a single)
    """
    if reps <= 0:
        return 0
    if reps == 1:
        return weight
    return weight * (36 / (37 - reps))


def calculate_total_volume(sets: Sequence[LoggedSet]) -> float:
    """Sum of weight × reps over all sets."""
    return sum(s.weight * s.reps for s in sets)


def calculate_average_rpe(sets: Sequence[LoggedSet]) -> float | None:
    """Mean RPE of the sets that recorded one; None if none did."""
    rpes = [s.rpe for s in sets if s.rpe is not None]
    if not rpes:
        return None
    return sum(rpes) / len(rpes)


def suggest_weight_increase(weight: float, rpe: float | None) -> float:
    """
    Suggest the next working weight from the last session's effort.

    RPE ≤ 6 → +5%, RPE ≤ 8 → +2.5%, harder → hold.  Without an RPE a
    modest +2.5% is assumed.
    """
    if rpe is None:
        return weight * DEFAULT_INCREASE
    if rpe <= EASY_RPE:
        return weight * EASY_INCREASE
    if rpe <= MODERATE_RPE:
        return weight * MODERATE_INCREASE
    return weight


def exercise_progress(history: Sequence[LoggedWorkout]) -> list[ProgressPoint]:
    """
    Per-workout progress metrics in chronological order.

    Args:
        history: Logged workouts for one exercise (any order)

    Returns:
        One ProgressPoint per workout that has at least one set
    """
    points: list[ProgressPoint] = []
    for workout in sorted(history, key=lambda w: w.date):
        if not workout.sets:
            continue
        points.append(
            ProgressPoint(
                date=workout.date,
                max_weight=max(s.weight for s in workout.sets),
                total_volume=calculate_total_volume(workout.sets),
                max_one_rep_max=max(calculate_one_rep_max(s.weight, s.reps) for s in workout.sets),
            )
        )
    return points


def identify_personal_records(
    current: LoggedWorkout,
    history: Sequence[LoggedWorkout],
) -> PersonalRecords:
    """
    Compare a workout's best set metrics against all earlier sets.

    Only history entries with the same exercise name count.  The first
    time an exercise is logged every category is a record.
    """
    previous = [s for w in history if w.name == current.name for s in w.sets]
    if not previous:
        return PersonalRecords(True, True, True, True)
    if not current.sets:
        return PersonalRecords(False, False, False, False)

    cur = _best_set_metrics(current.sets)
    prev = _best_set_metrics(previous)
    return PersonalRecords(*(c > p for c, p in zip(cur, prev)))


def _best_set_metrics(sets: Sequence[LoggedSet]) -> tuple[float, int, float, float]:
    """Best (weight, reps, set volume, estimated 1RM) across sets."""
    return (
        max(s.weight for s in sets),
        max(s.reps for s in sets),
        max(s.weight * s.reps for s in sets),
        max(calculate_one_rep_max(s.weight, s.reps) for s in sets),
    )
