"""
Failure reporting.

Renders ResolutionFailure attempt lists as rich tables so a failed test
shows which strategies ran, in what order, and why each one missed.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .errors import ResolutionFailure, ShadowElementNotFound


def _truncate(value: str, limit: int = 100) -> str:
    if len(value) > limit:
        return value[: limit - 3] + "..."
    return value


def render_resolution_failure(failure: ResolutionFailure) -> Table:
    """
    Build a table of every strategy attempt in a failure.

    Args:
        failure: The raised ResolutionFailure (or subclass)

    Returns:
        Rich Table renderable, one row per attempt in attempt order
    """
    table = Table(title=type(failure).__name__, title_justify="left", expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Strategy", style="bold")
    table.add_column("Kind")
    table.add_column("Result")
    table.add_column("Time", justify="right")
    table.add_column("Error", style="red")

    for index, attempt in enumerate(failure.attempts, start=1):
        table.add_row(
            str(index),
            _truncate(attempt.strategy.description, 60),
            attempt.strategy.kind.value,
            "[green]✓[/green]" if attempt.success else "[red]✗[/red]",
            f"{attempt.duration_ms}ms",
            _truncate(attempt.error or ""),
        )

    if isinstance(failure, ShadowElementNotFound):
        for index, tier in enumerate(failure.tried, start=len(failure.attempts) + 1):
            table.add_row(str(index), tier, "shadow", "[red]✗[/red]", "", failure.selector)

    return table


def print_resolution_failure(
    failure: ResolutionFailure,
    console: Optional[Console] = None,
) -> None:
    """Print the failure message and its attempt table."""
    console = console or Console(stderr=True)
    console.print(
        Panel(
            str(failure).splitlines()[0],
            title="[RESOLUTION FAILURE]",
            title_align="left",
            border_style="red",
            padding=(0, 1),
        )
    )
    console.print(render_resolution_failure(failure))
