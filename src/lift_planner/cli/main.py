"""
CLI entry point using Typer.

Commands:
- validate: Check whether a goal is realistic
- plan: Generate a periodized mesocycle
- loads: Working weight and warm-up ramp for an intensity
- templates: List training templates
- session: Prescribe the next session (advanced engine)
- readiness: Score today's readiness
- velocity: Velocity-loss targets
- one-rep-max: Estimate a 1RM and the next working weight
"""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from .app import app
from .commands import planning, sessions  # noqa: F401  (registers commands)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """
    Periodized strength planning: mesocycles, next-session prescriptions, readiness.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    app()
