"""Action graph construction for proto code generation.

Given a plugin, its resolved options and a set of proto sources, the builder
declares every file the plugin could generate and emits the actions that
guarantee each of them exists:

1. write the module mapping side file
2. run protoc with the plugin into a scratch directory
3. reconcile the scratch directory with the declared outputs

When nothing is eligible for generation, a single placeholder is declared
and one directory-creation action produces it; protoc is not run.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable, Sequence

from swiftbuild_core.compiler.models import GENERATOR_MNEMONIC, GenerationPlan, ResolvedOptions
from swiftbuild_core.compiler.module_mappings import ModuleMapping, module_mapping_write_action
from swiftbuild_core.compiler.reconciliation import ReconciliationStage
from swiftbuild_core.errors import AmbiguousImportPathError, InvalidConfigurationError
from swiftbuild_core.planner.file_system import DeclaredFileSystem, FileSystem
from swiftbuild_core.schemas.actions import Action, RunAction, RunShellAction
from swiftbuild_core.schemas.files import FileHandle, ProtoInfo, SourceDescriptor
from swiftbuild_core.schemas.plugin_spec import (
    FILE_NAMING_OPTION,
    MODULE_MAPPINGS_OPTION,
    FileNaming,
    PluginSpec,
)
from swiftbuild_core.schemas.target import TargetIdentity

logger = logging.getLogger(__name__)

PERMANENT_DIRECTORY_NAME = "gen"
TEMPORARY_DIRECTORY_NAME = "tmp"
EMPTY_PLACEHOLDER_NAME = "Empty.swift"

# Creates the scratch directory and the empty placeholder in one action
_MAKE_PLACEHOLDER_COMMAND = 'mkdir -p "$1" && mkdir -p "$(dirname "$2")" && : > "$2"'


def replace_extension(path: str, suffix: str) -> str:
    """Replace the extension of ``path`` with ``suffix``."""
    return posixpath.splitext(path)[0] + suffix


def apply_file_naming(path: str, file_naming: FileNaming | str) -> str:
    """Apply a ``FileNaming`` option value to an output-relative path.

    Raises:
        InvalidConfigurationError: If ``file_naming`` is not a known value.
    """
    try:
        naming = FileNaming(file_naming)
    except ValueError:
        raise InvalidConfigurationError(
            f"Unknown file naming plugin option: {file_naming}",
            field_path=FILE_NAMING_OPTION,
            value=str(file_naming),
        ) from None

    if naming is FileNaming.path_to_underscores:
        return path.replace("/", "_")
    if naming is FileNaming.drop_path:
        return posixpath.basename(path)
    return path


def generated_file_path(import_path: str, suffix: str, file_naming: FileNaming | str) -> str:
    """Return the output-relative path of the file generated for ``import_path``.

    Example:
        >>> generated_file_path("a/b/c.proto", ".pb.swift", "PathToUnderscores")
        'a_b_c.pb.swift'
    """
    return apply_file_naming(replace_extension(import_path, suffix), file_naming)


def collect_sources(
    proto_infos: Iterable[ProtoInfo],
    bundled_proto_paths: Iterable[str] = (),
) -> dict[str, SourceDescriptor]:
    """De-duplicate sources by import path, skipping bundled protos.

    Returns:
        Sources keyed by import path, in first-seen order.

    Raises:
        AmbiguousImportPathError: If one import path is backed by two files.
    """
    bundled = frozenset(bundled_proto_paths)
    sources: dict[str, SourceDescriptor] = {}
    for proto_info in proto_infos:
        for source in proto_info.sources:
            path = source.import_path
            if path in bundled:
                continue
            existing = sources.get(path)
            if existing is not None:
                if existing.file.path != source.file.path:
                    raise AmbiguousImportPathError(
                        import_path=path,
                        first_path=existing.file.path,
                        second_path=source.file.path,
                    )
                continue
            sources[path] = source
    return sources


def collect_descriptor_sets(proto_infos: Iterable[ProtoInfo]) -> list[FileHandle]:
    """Merge the transitive descriptor sets, keeping first-seen order."""
    seen: dict[str, FileHandle] = {}
    for proto_info in proto_infos:
        for descriptor_set in proto_info.transitive_descriptor_sets:
            seen.setdefault(descriptor_set.path, descriptor_set)
    return list(seen.values())


def _as_proto_infos(inputs: Iterable[ProtoInfo | SourceDescriptor]) -> list[ProtoInfo]:
    proto_infos: list[ProtoInfo] = []
    loose: list[SourceDescriptor] = []
    for item in inputs:
        if isinstance(item, ProtoInfo):
            proto_infos.append(item)
        else:
            loose.append(item)
    if loose:
        proto_infos.append(ProtoInfo(sources=tuple(loose)))
    return proto_infos


class ActionGraphBuilder:
    """Builds the declared outputs and actions for one generation request.

    The builder holds no state between calls; every ``build`` works on data
    owned by the calling build unit.

    Attributes:
        file_system: Where outputs, scratch directories and scripts are declared.

    Example:
        >>> builder = ActionGraphBuilder(DeclaredFileSystem(package="app"))
        >>> plan = builder.build(target, spec, resolved, [proto_info])
        >>> plan.output_paths
        ['bazel-out/bin/app/protos/gen/a/b.pb.swift']
    """

    def __init__(self, file_system: FileSystem) -> None:
        self.file_system = file_system

    def build(
        self,
        target: TargetIdentity,
        plugin_spec: PluginSpec,
        resolved_options: ResolvedOptions,
        proto_infos: Sequence[ProtoInfo | SourceDescriptor],
        module_mappings: Iterable[ModuleMapping] = (),
    ) -> GenerationPlan:
        """Declare outputs and emit actions for ``plugin_spec`` over ``proto_infos``.

        Args:
            target: Build unit identity.
            plugin_spec: The plugin to run.
            resolved_options: Options produced by PluginConfigResolver.
            proto_infos: Proto libraries, or loose source descriptors.
            module_mappings: Cross-module import mappings for the plugin.

        Returns:
            GenerationPlan with the declared outputs and ordered actions.

        Raises:
            AmbiguousImportPathError: Two files share an import path.
            InvalidConfigurationError: Unknown ``FileNaming`` value, or two
                sources map to the same generated file.
        """
        plugin_name = plugin_spec.plugin_name
        file_naming = resolved_options.file_naming
        infos = _as_proto_infos(proto_infos)

        permanent_relative = posixpath.join(target.name, PERMANENT_DIRECTORY_NAME)
        temporary_directory = self.file_system.declare_directory(
            posixpath.join(target.name, plugin_name, TEMPORARY_DIRECTORY_NAME)
        )

        sources = collect_sources(infos, plugin_spec.bundled_proto_paths)
        descriptor_sets = collect_descriptor_sets(infos)

        declared_outputs: list[FileHandle] = []
        owners: dict[str, str] = {}
        for import_path in sources:
            for suffix in plugin_spec.suffixes:
                relative = generated_file_path(import_path, suffix, file_naming)
                if relative in owners:
                    raise InvalidConfigurationError(
                        f"Protos {owners[relative]} and {import_path} both generate {relative}",
                        field_path=FILE_NAMING_OPTION,
                        value=file_naming.value,
                    )
                owners[relative] = import_path
                declared_outputs.append(
                    self.file_system.declare_file(posixpath.join(permanent_relative, relative))
                )

        if not declared_outputs:
            return self._build_placeholder(target, plugin_name, temporary_directory)

        first = declared_outputs[0].path
        permanent_directory = first[: -len("/" + next(iter(owners)))]

        mappings_file, write_mappings = module_mapping_write_action(
            self.file_system, target, plugin_name, module_mappings
        )
        generate = self._generator_action(
            plugin_spec,
            resolved_options,
            temporary_directory,
            mappings_file,
            descriptor_sets,
            list(sources),
        )
        expand_script, run_script = ReconciliationStage(
            self.file_system, target, plugin_name
        ).reconcile(
            temporary_directory,
            permanent_directory,
            declared_outputs,
            template=plugin_spec.copy_sources_template,
        )

        actions: list[Action] = [write_mappings, generate, expand_script, run_script]
        logger.info(
            "Planned %d outputs from %d protos for %s with plugin %s",
            len(declared_outputs),
            len(sources),
            target.label,
            plugin_name,
        )
        return GenerationPlan(
            target=target,
            plugin_name=plugin_name,
            declared_outputs=tuple(declared_outputs),
            actions=tuple(actions),
            temporary_directory=temporary_directory,
            permanent_directory=permanent_directory,
            import_paths=tuple(sources),
        )

    def _build_placeholder(
        self,
        target: TargetIdentity,
        plugin_name: str,
        temporary_directory: FileHandle,
    ) -> GenerationPlan:
        placeholder = self.file_system.declare_file(
            posixpath.join(target.name, PERMANENT_DIRECTORY_NAME, EMPTY_PLACEHOLDER_NAME)
        )
        make_directory = RunShellAction(
            command=_MAKE_PLACEHOLDER_COMMAND,
            arguments=(temporary_directory.path, placeholder.path),
            outputs=(temporary_directory, placeholder),
        )
        logger.info(
            "No eligible protos for %s with plugin %s; declaring placeholder %s",
            target.label,
            plugin_name,
            placeholder.path,
        )
        return GenerationPlan(
            target=target,
            plugin_name=plugin_name,
            declared_outputs=(placeholder,),
            actions=(make_directory,),
            temporary_directory=temporary_directory,
            permanent_directory=posixpath.dirname(placeholder.path),
        )

    def _generator_action(
        self,
        plugin_spec: PluginSpec,
        resolved_options: ResolvedOptions,
        temporary_directory: FileHandle,
        mappings_file: FileHandle,
        descriptor_sets: list[FileHandle],
        import_paths: list[str],
    ) -> RunAction:
        name = plugin_spec.plugin_name
        arguments = [
            f"--plugin=protoc-gen-{name}={plugin_spec.plugin.path}",
            *resolved_options.to_flags(name),
            f"--{name}_opt={MODULE_MAPPINGS_OPTION}={mappings_file.path}",
            f"--{name}_out={temporary_directory.path}",
            "--descriptor_set_in=" + ":".join(d.path for d in descriptor_sets),
            *import_paths,
        ]
        return RunAction(
            executable=plugin_spec.protoc,
            arguments=tuple(arguments),
            inputs=(plugin_spec.protoc, plugin_spec.plugin, mappings_file, *descriptor_sets),
            outputs=(temporary_directory,),
            mnemonic=GENERATOR_MNEMONIC,
            progress_message=f"Generating protos into {temporary_directory.path}",
            params_file=FileHandle(path=f"{temporary_directory.path}.params"),
        )


def build(
    target: TargetIdentity,
    plugin_spec: PluginSpec,
    resolved_options: ResolvedOptions,
    proto_infos: Sequence[ProtoInfo | SourceDescriptor],
    *,
    file_system: FileSystem | None = None,
    module_mappings: Iterable[ModuleMapping] = (),
) -> tuple[tuple[FileHandle, ...], tuple[Action, ...]]:
    """Return the declared output set and action sequence for one request.

    Uses a DeclaredFileSystem rooted at the target's package when no
    ``file_system`` is given.
    """
    fs = file_system or DeclaredFileSystem(package=target.package)
    plan = ActionGraphBuilder(fs).build(
        target, plugin_spec, resolved_options, proto_infos, module_mappings
    )
    return plan.declared_outputs, plan.actions
