"""SwiftProtoCompiler: plan Swift code generation from proto libraries.

Ties the pieces together for one plugin:
PluginConfigResolver → ActionGraphBuilder → GenerationPlan, optionally
submitted to a host ActionRunner.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

from swiftbuild_core.compiler.action_graph import ActionGraphBuilder
from swiftbuild_core.compiler.option_resolver import PluginConfigResolver
from swiftbuild_core.compiler.runner import submit_plan
from swiftbuild_core.planner.file_system import DeclaredFileSystem

if TYPE_CHECKING:
    from swiftbuild_core.compiler.models import GenerationPlan
    from swiftbuild_core.compiler.module_mappings import ModuleMapping
    from swiftbuild_core.compiler.runner import ActionRunner
    from swiftbuild_core.planner.file_system import FileSystem
    from swiftbuild_core.schemas.files import ProtoInfo, SourceDescriptor
    from swiftbuild_core.schemas.plugin_spec import PluginSpec
    from swiftbuild_core.schemas.target import TargetIdentity

logger = logging.getLogger(__name__)


class SwiftProtoCompiler:
    """Compile proto libraries to Swift sources with one protoc plugin.

    The compiler is built once per plugin and may be shared by any number of
    build units; it keeps no per-request state.

    Example:
        >>> compiler = SwiftProtoCompiler(spec)
        >>> plan = compiler.compile(
        ...     TargetIdentity.from_label("//app:protos"),
        ...     [proto_info],
        ...     additional_options={"Visibility": "Public"},
        ... )
        >>> plan.output_paths
        ['bazel-out/bin/app/protos/gen/app/messages.pb.swift']
    """

    def __init__(self, plugin_spec: PluginSpec) -> None:
        """Initialize the compiler.

        Args:
            plugin_spec: The plugin this compiler runs.
        """
        self.plugin_spec = plugin_spec
        self.option_resolver = PluginConfigResolver(plugin_spec)

    def compile(
        self,
        target: TargetIdentity,
        proto_infos: Sequence[ProtoInfo | SourceDescriptor],
        additional_options: Mapping[str, str] | None = None,
        module_mappings: Iterable[ModuleMapping] = (),
        file_system: FileSystem | None = None,
        runner: ActionRunner | None = None,
    ) -> GenerationPlan:
        """Plan generation for ``target``.

        Args:
            target: Build unit identity.
            proto_infos: Proto libraries (or loose sources) to compile.
            additional_options: Caller options overlaid on the plugin defaults.
            module_mappings: Cross-module mappings written for the plugin.
            file_system: Declaration backend. Defaults to a DeclaredFileSystem
                rooted at the target's package.
            runner: When given, every planned action is submitted to it.

        Returns:
            GenerationPlan for the request.

        Raises:
            AmbiguousImportPathError: Two files share an import path.
            InvalidConfigurationError: Bad ``FileNaming`` or colliding outputs.
        """
        resolved = self.option_resolver.resolve(additional_options)
        fs = file_system or DeclaredFileSystem(package=target.package)

        plan = ActionGraphBuilder(fs).build(
            target,
            self.plugin_spec,
            resolved,
            proto_infos,
            module_mappings,
        )

        if runner is not None:
            submit_plan(plan, runner)

        return plan
