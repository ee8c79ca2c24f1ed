"""swiftbuild schema command - Export JSON Schema."""

from __future__ import annotations

from pathlib import Path

import click

from swiftbuild_cli.errors import EXIT_SYSTEM_ERROR, CLIError
from swiftbuild_cli.output import success


@click.group()
def schema() -> None:
    """Manage JSON Schema for IDE support and host executors.

    **Commands:**

    - `swiftbuild schema export` - Export CompilerConfig (swiftbuild.yaml) JSON Schema
    - `swiftbuild schema export-plan` - Export GenerationPlan JSON Schema
    """
    pass


@schema.command("export")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default="./schemas/swiftbuild.schema.json",
    help="Output path [default: ./schemas/swiftbuild.schema.json]",
)
def export_schema(output_path: str) -> None:
    """Export the swiftbuild.yaml JSON Schema.

    Examples:

        swiftbuild schema export

        swiftbuild schema export --output custom/path/schema.json
    """
    from swiftbuild_core import export_compiler_config_schema

    output = Path(output_path)
    try:
        export_compiler_config_schema(output)
    except PermissionError:
        raise CLIError(f"Cannot write to: {output_path}", exit_code=EXIT_SYSTEM_ERROR) from None

    success(f"Schema exported to {output}")


@schema.command("export-plan")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default="./schemas/generation-plan.schema.json",
    help="Output path [default: ./schemas/generation-plan.schema.json]",
)
def export_plan_schema(output_path: str) -> None:
    """Export the GenerationPlan JSON Schema.

    Examples:

        swiftbuild schema export-plan --output build/plan.schema.json
    """
    from swiftbuild_core import export_generation_plan_schema

    output = Path(output_path)
    try:
        export_generation_plan_schema(output)
    except PermissionError:
        raise CLIError(f"Cannot write to: {output_path}", exit_code=EXIT_SYSTEM_ERROR) from None

    success(f"Plan schema exported to {output}")
