"""swiftbuild reconcile command - Copy or fill declared outputs."""

from __future__ import annotations

import click

from swiftbuild_cli.errors import handle_swiftbuild_error
from swiftbuild_cli.output import success


@click.command("reconcile")
@click.argument("temporary_directory", type=click.Path(file_okay=False))
@click.argument("permanent_directory", type=click.Path(file_okay=False))
@click.argument("declared_paths", nargs=-1, required=True)
def reconcile(
    temporary_directory: str,
    permanent_directory: str,
    declared_paths: tuple[str, ...],
) -> None:
    """Copy generated files out of a scratch directory.

    Every DECLARED_PATH is copied from TEMPORARY_DIRECTORY when the plugin
    generated it, and created empty otherwise. Relative paths are taken
    relative to PERMANENT_DIRECTORY. Running the command twice gives the
    same result.

    Examples:

        swiftbuild reconcile out/tmp out/gen a/b.pb.swift a/c.pb.swift
    """
    # Import here to avoid heavy imports at CLI startup
    from swiftbuild_core import SwiftBuildError, apply_reconciliation

    try:
        written = apply_reconciliation(temporary_directory, permanent_directory, declared_paths)
    except SwiftBuildError as e:
        handle_swiftbuild_error(e)

    success(f"Reconciled {len(written)} outputs into {permanent_directory}")
