"""CLI entry point for swiftbuild.

The main group loads its commands lazily so ``swiftbuild --help`` does not
import pydantic models or the planner.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from swiftbuild_cli import __version__
from swiftbuild_cli.output import set_no_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that imports a command's module only when it is invoked.

    Attributes:
        lazy_subcommands: Mapping of command names to ``module.attribute`` paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"plan": "swiftbuild_cli.commands.plan.plan"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return the sorted names of registered and lazy commands."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, importing it on first use.

        Args:
            ctx: Click context.
            cmd_name: Name of the command to get.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "plan": "swiftbuild_cli.commands.plan.plan",
    "path": "swiftbuild_cli.commands.path.path",
    "reconcile": "swiftbuild_cli.commands.reconcile.reconcile",
    "schema": "swiftbuild_cli.commands.schema.schema",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="swiftbuild")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
def cli() -> None:
    """swiftbuild - derived paths and protoc plugin actions for Swift targets.

    **Getting Started:**

    - `swiftbuild path module --target //app:Lib --module-name Lib` - Compute an artifact path
    - `swiftbuild plan --compiler swift --target //app:protos -s app/a.proto` - Plan generation
    - `swiftbuild reconcile TMP GEN GEN/a.pb.swift` - Copy or fill declared outputs
    - `swiftbuild schema export` - Export JSON Schema for swiftbuild.yaml
    """
    pass


if __name__ == "__main__":
    cli()
