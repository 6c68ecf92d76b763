"""Shared Typer app object and shared option types."""

from typing import Annotated

import typer

CurrentMaxOption = Annotated[
    float,
    typer.Option("--current-max", "-c", help="Current max (any unit, e.g. lbs)"),
]
WeeksOption = Annotated[
    int,
    typer.Option("--weeks", "-w", help="Timeframe in weeks (4-52)"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="lift-planner",
    help="Periodized strength planning: mesocycles, next-session prescriptions, readiness.",
    no_args_is_help=True,
)
