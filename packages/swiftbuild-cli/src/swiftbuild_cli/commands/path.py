"""swiftbuild path command - Compute a derived artifact path."""

from __future__ import annotations

import click

from swiftbuild_cli.errors import CLIError, handle_swiftbuild_error

# Kept in sync with swiftbuild_core.planner.ArtifactKind; listed here so
# --help does not import the planner.
ARTIFACT_KIND_NAMES = (
    "ast",
    "autolink_flags",
    "const_values_file",
    "derived_output_file_map",
    "doc",
    "executable",
    "generated_header",
    "indexstore_directory",
    "interface",
    "intermediate_bc_file",
    "intermediate_const_values_file",
    "intermediate_object_file",
    "module",
    "module_map",
    "modulewrap_object",
    "output_file_map",
    "precompiled_module",
    "private_interface",
    "reexport_modules_src",
    "source_info",
    "static_archive",
    "symbol_graph_directory",
    "test_runner_script",
    "vfs_overlay",
    "whole_module_object_file",
)


@click.command("path")
@click.argument("kind", type=click.Choice(ARTIFACT_KIND_NAMES))
@click.option(
    "-t",
    "--target",
    "target_label",
    required=True,
    help="Target label, e.g. //app:Lib",
)
@click.option(
    "--add-target-name",
    is_flag=True,
    default=False,
    help="Inject the target name into the path.",
)
@click.option(
    "--qualifier",
    default=None,
    help="Segment injected instead of the target name (implies --add-target-name)",
)
@click.option("--module-name", default=None, help="Module name, for module artifacts")
@click.option(
    "--source",
    "source_path",
    default=None,
    help="Source file, for per-source artifacts (e.g. app/Sources/Foo.swift)",
)
@click.option("--link-name", default=None, help="Static archive name without 'lib'")
@click.option("--alwayslink", is_flag=True, default=False, help="Use the .lo archive extension.")
@click.option("--header-name", default=None, help="Generated header name (must end in .h)")
def path(
    kind: str,
    target_label: str,
    add_target_name: bool,
    qualifier: str | None,
    module_name: str | None,
    source_path: str | None,
    link_name: str | None,
    alwayslink: bool,
    header_name: str | None,
) -> None:
    """Print the derived output path of an artifact.

    The path is relative to the target's output directory.

    Examples:

        swiftbuild path module -t //app:Lib --module-name Lib

        swiftbuild path intermediate_object_file -t //app:Lib --source "app/My File.swift"

        swiftbuild path indexstore_directory -t //app:Lib --add-target-name
    """
    # Import here to avoid heavy imports at CLI startup
    from pydantic import ValidationError as PydanticValidationError

    from swiftbuild_core import (
        FileHandle,
        NamingPolicy,
        PathPlanner,
        SwiftBuildError,
        TargetIdentity,
    )

    try:
        target = TargetIdentity.from_label(target_label)
        naming_policy = NamingPolicy(
            add_target_name=add_target_name,
            qualifier=qualifier,
        )
        source = (
            FileHandle(path=source_path, owner=target.package) if source_path is not None else None
        )
        derived = PathPlanner(target, naming_policy).path(
            kind,
            module_name=module_name,
            source=source,
            link_name=link_name,
            alwayslink=alwayslink,
            header_name=header_name,
        )
    except SwiftBuildError as e:
        handle_swiftbuild_error(e)
    except PydanticValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise CLIError(f"Invalid input: {messages}") from None
    except ValueError as e:
        raise CLIError(str(e)) from None

    click.echo(derived)
