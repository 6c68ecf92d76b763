"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of plans and prescriptions.
"""

from rich.console import Console
from rich.table import Table

from ..core.models import (
    GoalValidation,
    Mesocycle,
    ReadinessEstimate,
    SessionLoads,
    TrainingGoal,
    WorkoutSession,
)

console = Console()

WEEK_TYPE_STYLES: dict[str, str] = {
    "build": "green",
    "intensify": "yellow",
    "deload": "cyan",
    "test": "bold red",
}

RECOMMENDATION_STYLES: dict[str, str] = {
    "proceed": "green",
    "reduce": "yellow",
    "deload": "red",
}


def _fmt_reps(reps) -> str:
    if isinstance(reps, str):
        return reps
    if isinstance(reps, int):
        return str(reps)
    return "/".join(str(r) for r in reps)


def _fmt_pct(intensity) -> str:
    if isinstance(intensity, str):
        return intensity
    return f"{intensity * 100:.0f}%"


def format_mesocycle_table(mesocycle: Mesocycle) -> Table:
    """
    Create a Rich table with one row per session.

    Args:
        mesocycle: Plan to display

    Returns:
        Rich Table object
    """
    table = Table(title=mesocycle.name, show_lines=False)

    table.add_column("Wk", justify="right", style="dim", width=3)
    table.add_column("Type")
    table.add_column("Day", justify="right")
    table.add_column("Sets x Reps", justify="right")
    table.add_column("%1RM", justify="right")
    table.add_column("Weight", justify="right", style="bold")
    table.add_column("RPE", justify="right")
    table.add_column("Notes", overflow="fold")

    for week in mesocycle.weeks:
        style = WEEK_TYPE_STYLES.get(week.type, "")
        for i, session in enumerate(week.sessions):
            table.add_row(
                str(week.week) if i == 0 else "",
                f"[{style}]{week.type}[/{style}]" if i == 0 else "",
                str(session.day),
                f"{session.sets}x{_fmt_reps(session.reps)}",
                _fmt_pct(session.intensity),
                f"{mesocycle.current_max * session.intensity:.0f}",
                f"{session.rpe:.1f}",
                session.notes,
            )

    return table


def print_mesocycle(mesocycle: Mesocycle, goal: TrainingGoal) -> None:
    """Print plan header and session table."""
    console.print(
        f"[bold cyan]{mesocycle.exercise}[/bold cyan]"
        f"  {mesocycle.start_date} → {mesocycle.end_date}"
        f"  ({len(mesocycle.weeks)} weeks, {goal.method}, {goal.training_days} days/week)"
    )
    console.print(
        f"Current max {mesocycle.current_max:g} · target {mesocycle.target_max:g}"
        f" · projected [bold]{mesocycle.projected_max}[/bold]"
    )
    if goal.current_max_reps > 1:
        console.print(
            f"[dim]Current max was a {goal.current_max_reps}-rep set;"
            f" estimated 1RM {goal.estimated_one_rep_max:.1f}[/dim]"
        )
    console.print(format_mesocycle_table(mesocycle))


def print_goal_validation(result: GoalValidation) -> None:
    if result.realistic:
        print_success("Goal looks realistic.")
        return
    print_warning(result.reason or "Goal is not realistic.")
    if result.suggestion is not None:
        print_info(f"Suggested target: {result.suggestion}")


def print_session_loads(loads: SessionLoads, sets: int, reps) -> None:
    table = Table(title="Session loads")
    table.add_column("Set", style="dim")
    table.add_column("Weight", justify="right", style="bold")
    table.add_column("Reps", justify="right")

    for i, warmup in enumerate(loads.warmup_sets, 1):
        table.add_row(f"warm-up {i}", f"{warmup.weight:g}", str(warmup.reps))
    table.add_row(
        f"[bold]working x{sets}[/bold]",
        f"{loads.working_weight:g}",
        _fmt_reps(reps),
    )
    console.print(table)
    console.print(f"Working volume: {loads.working_volume:g}")


def print_workout_session(session: WorkoutSession) -> None:
    """Print a next-session prescription with its notes."""
    ex = session.main_exercise
    console.print(
        f"[bold cyan]{ex.name}[/bold cyan] · [magenta]{session.type}[/magenta]"
        f" ({session.phase}, ~{session.estimated_duration} min)"
    )
    console.print(f"Focus: {session.focus}")

    table = Table(show_header=True, header_style="dim")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Intensity", justify="right")
    table.add_column("RPE", justify="right")
    table.add_column("VL%", justify="right")
    table.add_column("Velocity", justify="right")
    table.add_column("Rest (s)", justify="right")
    table.add_column("Tempo")
    table.add_row(
        str(ex.sets),
        _fmt_reps(ex.reps),
        _fmt_pct(ex.intensity),
        f"{ex.rpe_target:.1f}" if ex.rpe_target is not None else "-",
        f"{ex.velocity_loss_target:g}" if ex.velocity_loss_target is not None else "-",
        f"{ex.velocity_target:.2f} m/s" if ex.velocity_target is not None else "-",
        "/".join(str(r) for r in ex.rest_periods),
        ex.tempo or "-",
    )
    console.print(table)
    console.print(f"[dim]{ex.notes}[/dim]")

    if session.vbt_protocol is not None:
        console.print("[bold]Warm-up velocities[/bold]")
        for step in session.vbt_protocol.warmup_velocities:
            console.print(f"  {step.intensity * 100:.0f}% × {step.reps} @ {step.velocity:.2f} m/s")

    if session.coaching_notes:
        console.print()
        console.print(session.coaching_notes)
    if session.scientific_rationale:
        console.print()
        console.print(f"[italic]{session.scientific_rationale}[/italic]")


def format_readiness_display(estimate: ReadinessEstimate) -> str:
    """
    Format a readiness estimate as a text block.

    Args:
        estimate: ReadinessEstimate to display

    Returns:
        Formatted string
    """
    style = RECOMMENDATION_STYLES.get(estimate.recommendation, "")
    return "\n".join(
        [
            "Readiness",
            f"- Score: {estimate.score:.1f} / 10",
            f"- Recommendation: [{style}]{estimate.recommendation}[/{style}]",
            f"- Load multiplier: x{estimate.adjustment:g}",
        ]
    )


def print_templates(templates: dict[str, dict]) -> None:
    table = Table(title="Training templates")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Method", style="magenta")
    table.add_column("Days", justify="right")
    table.add_column("Exercises")

    for key, tpl in templates.items():
        table.add_row(
            key,
            tpl.get("name", key),
            tpl["method"],
            str(tpl["training_days"]),
            ", ".join(tpl.get("exercises", [])),
        )
    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
