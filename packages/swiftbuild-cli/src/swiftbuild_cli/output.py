"""Rich console output utilities for swiftbuild-cli.

Colored status lines and the declared-output table. Respects NO_COLOR and the
global ``--no-color`` flag.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from swiftbuild_core.compiler.models import GenerationPlan

_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console honoring ``no_color`` and NO_COLOR."""
    disabled = no_color or _force_no_color
    return Console(force_terminal=False if disabled else None, no_color=disabled)


# Default console instance
console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with a green checkmark.

    Example:
        >>> success("Reconciled 3 outputs")
        ✓ Reconciled 3 outputs
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with a red X."""
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with a yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def print_plan_table(plan: GenerationPlan) -> None:
    """Print the declared outputs and actions of ``plan`` as tables."""
    outputs = Table(title=f"Declared outputs for {plan.target.label} ({plan.plugin_name})")
    outputs.add_column("#", justify="right")
    outputs.add_column("Path", overflow="fold")
    for index, handle in enumerate(plan.declared_outputs, start=1):
        outputs.add_row(str(index), handle.path)
    console.print(outputs)

    actions = Table(title="Actions")
    actions.add_column("#", justify="right")
    actions.add_column("Type")
    actions.add_column("Mnemonic")
    for index, action in enumerate(plan.actions, start=1):
        actions.add_row(str(index), action.type, getattr(action, "mnemonic", None) or "-")
    console.print(actions)


def set_no_color(no_color: bool) -> None:
    """Replace the module-level console to enable or disable colors."""
    global console
    console = create_console(no_color=no_color)
