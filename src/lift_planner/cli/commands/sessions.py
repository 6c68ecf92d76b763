"""Session commands: session, readiness, velocity, one-rep-max."""

import math
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.advanced import create_advanced_periodization_engine
from ...core.models import AdvancedTrainingParams, ReadinessFactors, ValidationError
from ...core.overload import calculate_one_rep_max, suggest_weight_increase
from ...core.readiness import estimate_training_readiness
from ...core.velocity import (
    RPE_VELOCITY_MAPPING,
    calculate_optimal_velocity_loss,
    convert_rpe_to_velocity_loss,
)
from ...io.serializers import (
    dict_to_advanced_params,
    load_json_file,
    readiness_estimate_to_dict,
    to_json,
    workout_session_to_dict,
)
from .. import views
from ..app import JsonOption, WeeksOption, app

ScoreOption = Optional[float]


def _readiness_from_options(
    sleep: float | None,
    stress: float | None,
    energy: float | None,
    soreness: float | None,
    motivation: float | None,
) -> ReadinessFactors | None:
    """
    Build a readiness reading when any factor is given.

    Raises:
        ValidationError: If only some of the five factors were given
    """
    values = {
        "sleep_quality": sleep,
        "stress_level": stress,
        "energy_level": energy,
        "muscle_soreness": soreness,
        "motivation": motivation,
    }
    given = [k for k, v in values.items() if v is not None]
    if not given:
        return None
    missing = [k for k, v in values.items() if v is None]
    if missing:
        raise ValidationError("readiness", f"all five factors are required, missing {missing}")
    return ReadinessFactors(**values)  # type: ignore[arg-type]


@app.command()
def session(
    exercise: Annotated[Optional[str], typer.Option("--exercise", "-e", help="Lift name")] = None,
    current_max: Annotated[Optional[float], typer.Option("--current-max", "-c", help="Current max")] = None,
    target_max: Annotated[Optional[float], typer.Option("--target-max", "-t", help="Target max")] = None,
    weeks: WeeksOption = 16,
    model: Annotated[
        str,
        typer.Option("--model", "-m", help="dup_hps, vbt_autoregulated, linear, dup_hsp, block_conjugate"),
    ] = "dup_hps",
    vbt: Annotated[bool, typer.Option("--vbt", help="Enable velocity-based training cues")] = False,
    velocity_loss: Annotated[
        float, typer.Option("--velocity-loss", help="Velocity-loss stop threshold %, 5-40")
    ] = 20,
    level: Annotated[
        str, typer.Option("--level", help="novice, intermediate, advanced or elite")
    ] = "intermediate",
    params_file: Annotated[
        Optional[Path],
        typer.Option("--params-file", "-p", help="JSON file holding the training parameters"),
    ] = None,
    week: Annotated[int, typer.Option("--week", help="Current week number (1-based)")] = 1,
    session_number: Annotated[int, typer.Option("--session", "-n", help="Session number (1-based)")] = 1,
    sleep: Annotated[ScoreOption, typer.Option("--sleep", help="Sleep quality 1-10")] = None,
    stress: Annotated[ScoreOption, typer.Option("--stress", help="Stress level 1-10")] = None,
    energy: Annotated[ScoreOption, typer.Option("--energy", help="Energy level 1-10")] = None,
    soreness: Annotated[ScoreOption, typer.Option("--soreness", help="Muscle soreness 1-10")] = None,
    motivation: Annotated[ScoreOption, typer.Option("--motivation", help="Motivation 1-10")] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Prescribe the next session with the advanced periodization engine.

    Pass all five readiness factors to scale the session to how you feel today.
    """
    try:
        if params_file is not None:
            params = dict_to_advanced_params(load_json_file(params_file))
        else:
            if exercise is None or current_max is None or target_max is None:
                raise ValidationError(
                    "params",
                    "--exercise, --current-max and --target-max are required without --params-file",
                )
            params = AdvancedTrainingParams(
                exercise=exercise,
                current_max=current_max,
                target_max=target_max,
                timeframe=weeks,
                enable_vbt=vbt,
                target_velocity_loss=velocity_loss,
                periodization_model=model,  # type: ignore[arg-type]
                experience_level=level,  # type: ignore[arg-type]
            )
        readiness = _readiness_from_options(sleep, stress, energy, soreness, motivation)
        engine = create_advanced_periodization_engine(params)
        workout = engine.generate_smart_workout(
            week_number=week,
            session_number=session_number,
            readiness=readiness,
        )
    except ValueError as e:
        # ValidationError plus out-of-range week/session numbers
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(to_json(workout_session_to_dict(workout)))
        return

    views.print_workout_session(workout)


@app.command()
def readiness(
    sleep: Annotated[float, typer.Option("--sleep", help="Sleep quality 1-10")],
    stress: Annotated[float, typer.Option("--stress", help="Stress level 1-10")],
    energy: Annotated[float, typer.Option("--energy", help="Energy level 1-10")],
    soreness: Annotated[float, typer.Option("--soreness", help="Muscle soreness 1-10")],
    motivation: Annotated[float, typer.Option("--motivation", help="Motivation 1-10")],
    json_out: JsonOption = False,
) -> None:
    """
    Estimate today's training readiness from five 1-10 ratings.
    """
    try:
        factors = ReadinessFactors(
            sleep_quality=sleep,
            stress_level=stress,
            energy_level=energy,
            muscle_soreness=soreness,
            motivation=motivation,
        )
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    estimate = estimate_training_readiness(factors)

    if json_out:
        print(to_json(readiness_estimate_to_dict(estimate)))
        return

    views.console.print(views.format_readiness_display(estimate))


@app.command()
def velocity(
    adaptation: Annotated[
        Optional[str],
        typer.Option("--adaptation", "-a", help="power, strength, hypertrophy or endurance"),
    ] = None,
    rpe: Annotated[Optional[int], typer.Option("--rpe", help="RPE to convert to velocity loss")] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Velocity-loss targets: optimal loss for an adaptation and/or the loss at an RPE.
    """
    if adaptation is None and rpe is None:
        views.print_error("Give --adaptation and/or --rpe.")
        raise typer.Exit(1)

    output: dict = {}
    try:
        if adaptation is not None:
            output["optimal_velocity_loss"] = calculate_optimal_velocity_loss(adaptation)  # type: ignore[arg-type]
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    if rpe is not None:
        output["rpe_velocity_loss"] = convert_rpe_to_velocity_loss(rpe)

    if json_out:
        print(to_json(output))
        return

    if "optimal_velocity_loss" in output:
        views.console.print(
            f"Optimal velocity loss for {adaptation}: [bold]{output['optimal_velocity_loss']:g}%[/bold]"
        )
    if "rpe_velocity_loss" in output:
        entry = RPE_VELOCITY_MAPPING.get(rpe)  # type: ignore[arg-type]
        described = f" ({entry[1]})" if entry is not None else " (unmapped RPE, default)"
        views.console.print(
            f"RPE {rpe} ≈ [bold]{output['rpe_velocity_loss']:g}%[/bold] velocity loss{described}"
        )


@app.command("one-rep-max")
def one_rep_max(
    weight: Annotated[float, typer.Option("--weight", help="Weight lifted")],
    reps: Annotated[int, typer.Option("--reps", "-r", help="Reps completed (1-20)")],
    rpe: Annotated[Optional[float], typer.Option("--rpe", help="RPE of the set")] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Estimate a 1RM (Brzycki) and suggest the next working weight.
    """
    if not math.isfinite(weight) or weight <= 0:
        views.print_error("--weight must be a positive number")
        raise typer.Exit(1)
    if not 1 <= reps <= 20:
        views.print_error("--reps must be between 1 and 20")
        raise typer.Exit(1)

    estimate = calculate_one_rep_max(weight, reps)
    next_weight = suggest_weight_increase(weight, rpe)

    if json_out:
        print(to_json({"one_rep_max": round(estimate, 1), "next_weight": round(next_weight, 1)}))
        return

    views.console.print(f"Estimated 1RM: [bold]{estimate:.1f}[/bold]")
    views.console.print(f"Suggested next working weight: [bold]{next_weight:.1f}[/bold]")
