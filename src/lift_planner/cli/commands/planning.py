"""Planning commands: validate, plan, loads, templates."""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.engine.config_loader import load_training_templates
from ...core.mesocycle import create_mesocycle_planner
from ...core.models import TrainingGoal, ValidationError
from ...io.serializers import (
    dict_to_training_goal,
    goal_validation_to_dict,
    load_json_file,
    mesocycle_to_dict,
    session_loads_to_dict,
    to_json,
)
from .. import views
from ..app import CurrentMaxOption, JsonOption, WeeksOption, app

ExperienceOption = Annotated[
    str,
    typer.Option("--experience", "-x", help="beginner, intermediate or advanced"),
]
MethodOption = Annotated[
    Optional[str],
    typer.Option("--method", "-m", help="linear, undulating or block (default: linear)"),
]
DaysOption = Annotated[
    Optional[int],
    typer.Option("--days", "-d", help="Training days per week, 1-7 (default: 3)"),
]
GoalFileOption = Annotated[
    Optional[Path],
    typer.Option("--goal-file", "-g", help="JSON file holding the training goal"),
]


def _build_goal(
    exercise: str | None,
    current_max: float | None,
    target_max: float | None,
    current_max_reps: int,
    weeks: int,
    days: int | None,
    experience: str,
    method: str | None,
    template: str | None = None,
    goal_file: Path | None = None,
) -> TrainingGoal:
    """
    Assemble a TrainingGoal from a JSON file or CLI options.

    A template fills in method and days unless they were given explicitly.

    Raises:
        ValidationError: On missing or invalid values
    """
    if goal_file is not None:
        return dict_to_training_goal(load_json_file(goal_file))

    if exercise is None or current_max is None or target_max is None:
        raise ValidationError(
            "goal", "--exercise, --current-max and --target-max are required without --goal-file"
        )

    if template is not None:
        templates = load_training_templates()
        if template not in templates:
            raise ValidationError(
                "template", f"unknown template {template!r}; choose from {sorted(templates)}"
            )
        tpl = templates[template]
        method = method or tpl["method"]
        days = days or tpl["training_days"]

    return TrainingGoal(
        exercise=exercise,
        current_max=current_max,
        target_max=target_max,
        current_max_reps=current_max_reps,
        timeframe=weeks,
        training_days=days if days is not None else 3,
        experience=experience,  # type: ignore[arg-type]
        method=method or "linear",  # type: ignore[arg-type]
    )


def _parse_start_date(start_date: str | None):
    """Return a fixed clock for --start-date, or None for the wall clock."""
    if start_date is None:
        return None
    try:
        fixed = datetime.strptime(start_date, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError("start_date", f"invalid date {start_date!r}, expected YYYY-MM-DD") from e
    return lambda: fixed


@app.command()
def validate(
    exercise: Annotated[Optional[str], typer.Option("--exercise", "-e", help="Lift name")] = None,
    current_max: Annotated[Optional[float], typer.Option("--current-max", "-c", help="Current max")] = None,
    target_max: Annotated[Optional[float], typer.Option("--target-max", "-t", help="Target max")] = None,
    current_max_reps: Annotated[int, typer.Option("--reps", "-r", help="Reps the current max was lifted for")] = 1,
    weeks: WeeksOption = 16,
    days: DaysOption = None,
    experience: ExperienceOption = "intermediate",
    method: MethodOption = None,
    goal_file: GoalFileOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Check whether a strength goal is realistic for its timeframe.

    Exits with code 2 when the goal is unrealistic.
    """
    try:
        goal = _build_goal(
            exercise, current_max, target_max, current_max_reps, weeks, days,
            experience, method, goal_file=goal_file,
        )
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    planner = create_mesocycle_planner(goal)
    result = planner.validate_goal()

    if json_out:
        print(to_json({**goal_validation_to_dict(result), "projected_max": planner.projected_max()}))
    else:
        views.console.print(
            f"{goal.exercise}: {goal.current_max:g} → {goal.target_max:g}"
            f" in {goal.timeframe} weeks ({goal.experience});"
            f" projected max {planner.projected_max()}"
        )
        views.print_goal_validation(result)

    if not result.realistic:
        raise typer.Exit(2)


@app.command()
def plan(
    exercise: Annotated[Optional[str], typer.Option("--exercise", "-e", help="Lift name")] = None,
    current_max: Annotated[Optional[float], typer.Option("--current-max", "-c", help="Current max")] = None,
    target_max: Annotated[Optional[float], typer.Option("--target-max", "-t", help="Target max")] = None,
    current_max_reps: Annotated[int, typer.Option("--reps", "-r", help="Reps the current max was lifted for")] = 1,
    weeks: WeeksOption = 16,
    days: DaysOption = None,
    experience: ExperienceOption = "intermediate",
    method: MethodOption = None,
    template: Annotated[
        Optional[str],
        typer.Option("--template", help="Template key (see 'templates'); sets method and days"),
    ] = None,
    start_date: Annotated[
        Optional[str],
        typer.Option("--start-date", "-s", help="Plan start date YYYY-MM-DD (default: today)"),
    ] = None,
    goal_file: GoalFileOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Generate even if the goal is unrealistic"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Generate a periodized mesocycle for a strength goal.

    The goal is validated first; an unrealistic goal is refused unless
    --force is given, in which case the plan simply stops short of it.
    """
    try:
        goal = _build_goal(
            exercise, current_max, target_max, current_max_reps, weeks, days,
            experience, method, template=template, goal_file=goal_file,
        )
        clock = _parse_start_date(start_date)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    planner = create_mesocycle_planner(goal, clock=clock)
    result = planner.validate_goal()
    if not result.realistic:
        if not force:
            views.print_goal_validation(result)
            views.print_info("Use --force to generate the plan anyway.")
            raise typer.Exit(1)
        if not json_out:
            views.print_warning(f"{result.reason} (generating anyway)")

    mesocycle = planner.generate_mesocycle()

    if json_out:
        print(to_json(mesocycle_to_dict(mesocycle)))
        return

    views.print_mesocycle(mesocycle, goal)


@app.command()
def loads(
    current_max: CurrentMaxOption,
    intensity: Annotated[float, typer.Option("--intensity", "-i", help="Fraction of max, e.g. 0.8")],
    sets: Annotated[int, typer.Option("--sets", help="Working sets")] = 3,
    reps: Annotated[int, typer.Option("--reps", "-r", help="Reps per working set")] = 5,
    json_out: JsonOption = False,
) -> None:
    """
    Working weight and warm-up ramp for an intensity.
    """
    try:
        goal = TrainingGoal(exercise="lift", current_max=current_max, target_max=current_max)
        if not 0 < intensity <= 1.0:
            raise ValidationError("intensity", f"must be in (0, 1.0], got {intensity}")
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    result = create_mesocycle_planner(goal).calculate_session_loads(intensity, sets, reps)

    if json_out:
        print(to_json(session_loads_to_dict(result)))
        return

    views.print_session_loads(result, sets, reps)


@app.command()
def templates(json_out: JsonOption = False) -> None:
    """
    List training templates (built-in plus ~/.lift-planner/templates.yaml).
    """
    try:
        available = load_training_templates()
    except ValidationError as e:
        views.print_error(f"Invalid template config: {e}")
        raise typer.Exit(1)

    if json_out:
        print(to_json(available))
        return

    views.print_templates(available)
