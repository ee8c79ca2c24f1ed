"""swiftbuild plan command - Plan proto code generation for a target."""

from __future__ import annotations

from pathlib import Path

import click

from swiftbuild_cli.errors import (
    EXIT_SYSTEM_ERROR,
    CLIError,
    handle_swiftbuild_error,
    handle_validation_error,
    handle_yaml_error,
)
from swiftbuild_cli.output import print_plan_table, success


def _parse_pairs(values: tuple[str, ...], option: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for value in values:
        key, sep, item = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{value}'", param_hint=option)
        pairs[key] = item
    return pairs


def _parse_module_mappings(values: tuple[str, ...]) -> dict[str, list[str]]:
    """Group MODULE=a.proto,b.proto values by module, merging repeats."""
    mappings: dict[str, list[str]] = {}
    for value in values:
        module, sep, paths = value.partition("=")
        if not sep or not module:
            raise click.BadParameter(
                f"expected MODULE=PATHS, got '{value}'", param_hint="--module-mapping"
            )
        merged = mappings.setdefault(module, [])
        for path in paths.split(","):
            if path and path not in merged:
                merged.append(path)
    return mappings


@click.command("plan")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to swiftbuild.yaml [default: discovered]",
)
@click.option(
    "-p",
    "--compiler",
    "compiler_name",
    default="swift",
    show_default=True,
    help="Compiler name from swiftbuild.yaml",
)
@click.option(
    "-t",
    "--target",
    "target_label",
    required=True,
    help="Target label, e.g. //app/protos:messages",
)
@click.option(
    "-s",
    "--source",
    "sources",
    multiple=True,
    help="Proto source as IMPORT_PATH[=FILE_PATH] (repeatable)",
)
@click.option(
    "-d",
    "--descriptor-set",
    "descriptor_sets",
    multiple=True,
    help="Transitive descriptor set file (repeatable)",
)
@click.option(
    "-O",
    "--option",
    "options",
    multiple=True,
    help="Plugin option as KEY=VALUE (repeatable)",
)
@click.option(
    "--module-mapping",
    "module_mappings",
    multiple=True,
    help="MODULE=a.proto,b.proto mapping written for the plugin (repeatable)",
)
@click.option(
    "--output-root",
    default=None,
    help="Output root for declared files [default: bazel-out/bin]",
)
@click.option(
    "--table",
    is_flag=True,
    default=False,
    help="Print declared outputs and actions as tables instead of JSON.",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the plan JSON to a file instead of stdout",
)
def plan(
    config_path: str | None,
    compiler_name: str,
    target_label: str,
    sources: tuple[str, ...],
    descriptor_sets: tuple[str, ...],
    options: tuple[str, ...],
    module_mappings: tuple[str, ...],
    output_root: str | None,
    table: bool,
    output_path: str | None,
) -> None:
    """Plan Swift code generation for a proto target.

    Declares every file the plugin could generate and prints the actions
    that produce them. Nothing is executed.

    Examples:

        swiftbuild plan -t //app:protos -s app/a.proto -s app/b.proto

        swiftbuild plan -p grpc -t //app:protos -s app/a.proto -O Visibility=Public

        swiftbuild plan -t //app:protos -s a.proto=app/a.proto -o plan.json
    """
    caller_options = _parse_pairs(options, "--option")
    mapping_paths = _parse_module_mappings(module_mappings)

    # Import here to avoid heavy imports at CLI startup
    import yaml
    from pydantic import ValidationError as PydanticValidationError

    from swiftbuild_core import (
        ConfigResolver,
        DeclaredFileSystem,
        FileHandle,
        ModuleMapping,
        ProtoInfo,
        SourceDescriptor,
        SwiftBuildError,
        SwiftProtoCompiler,
        TargetIdentity,
    )
    from swiftbuild_core.planner import DEFAULT_OUTPUT_ROOT

    config_source = config_path or "swiftbuild.yaml"
    try:
        target = TargetIdentity.from_label(target_label)
        config = ConfigResolver().load(
            path=Path(config_path) if config_path else None,
            use_cache=False,
        )
        plugin_spec = config.get_compiler(compiler_name)

        proto_info = ProtoInfo(
            sources=tuple(
                SourceDescriptor.from_path(*source.split("=", 1), owner=target.label)
                for source in sources
            ),
            transitive_descriptor_sets=tuple(FileHandle(path=d) for d in descriptor_sets),
        )
        mappings = [
            ModuleMapping(module_name=module, proto_file_paths=tuple(paths))
            for module, paths in mapping_paths.items()
        ]
        file_system = DeclaredFileSystem(
            output_root=output_root or DEFAULT_OUTPUT_ROOT,
            package=target.package,
        )
        generation_plan = SwiftProtoCompiler(plugin_spec).compile(
            target,
            [proto_info],
            additional_options=caller_options,
            module_mappings=mappings,
            file_system=file_system,
        )
    except FileNotFoundError as e:
        raise CLIError(str(e), exit_code=EXIT_SYSTEM_ERROR) from None
    except yaml.YAMLError as e:
        handle_yaml_error(e, config_source)
    except PydanticValidationError as e:
        handle_validation_error(e, config_source)
    except SwiftBuildError as e:
        handle_swiftbuild_error(e)
    except ValueError as e:
        raise CLIError(str(e)) from None

    if output_path is not None:
        output = Path(output_path)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(generation_plan.model_dump_json(indent=2))
        except PermissionError:
            raise CLIError(f"Cannot write to: {output_path}", exit_code=EXIT_SYSTEM_ERROR) from None
        success(f"Planned {len(generation_plan.declared_outputs)} outputs to {output}")
    elif table:
        print_plan_table(generation_plan)
    else:
        click.echo(generation_plan.model_dump_json(indent=2))
