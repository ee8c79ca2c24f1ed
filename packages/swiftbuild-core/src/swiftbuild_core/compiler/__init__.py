"""Compiler module for swiftbuild.

- SwiftProtoCompiler: plan generation for one plugin
- PluginConfigResolver: resolve plugin options
- ActionGraphBuilder: declared outputs and actions
- ReconciliationStage / apply_reconciliation: copy-or-fill protocol
- ActionRunner / RecordingActionRunner / submit_plan: host hand-off
- ConfigResolver: load swiftbuild.yaml
- GenerationPlan / ResolvedOptions: output models
"""

from __future__ import annotations

from swiftbuild_core.compiler.action_graph import (
    EMPTY_PLACEHOLDER_NAME,
    PERMANENT_DIRECTORY_NAME,
    TEMPORARY_DIRECTORY_NAME,
    ActionGraphBuilder,
    apply_file_naming,
    build,
    collect_sources,
    generated_file_path,
)
from swiftbuild_core.compiler.compiler import SwiftProtoCompiler
from swiftbuild_core.compiler.config_resolver import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    CONFIG_SEARCH_PATHS,
    ConfigResolver,
)
from swiftbuild_core.compiler.models import (
    GENERATOR_MNEMONIC,
    RECONCILE_MNEMONIC,
    GenerationPlan,
    ResolvedOptions,
)
from swiftbuild_core.compiler.module_mappings import ModuleMapping, render_module_mappings
from swiftbuild_core.compiler.option_resolver import PluginConfigResolver, resolve_plugin_options
from swiftbuild_core.compiler.reconciliation import (
    ReconciliationStage,
    apply_reconciliation,
    default_copy_sources_template,
    read_copy_sources_template,
)
from swiftbuild_core.compiler.runner import (
    ActionRunner,
    RecordingActionRunner,
    submit_action,
    submit_plan,
)

__all__: list[str] = [
    "SwiftProtoCompiler",
    "PluginConfigResolver",
    "resolve_plugin_options",
    "ActionGraphBuilder",
    "build",
    "apply_file_naming",
    "collect_sources",
    "generated_file_path",
    "EMPTY_PLACEHOLDER_NAME",
    "PERMANENT_DIRECTORY_NAME",
    "TEMPORARY_DIRECTORY_NAME",
    "ReconciliationStage",
    "apply_reconciliation",
    "default_copy_sources_template",
    "read_copy_sources_template",
    "ModuleMapping",
    "render_module_mappings",
    "ActionRunner",
    "RecordingActionRunner",
    "submit_action",
    "submit_plan",
    "ConfigResolver",
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_NAME",
    "CONFIG_SEARCH_PATHS",
    "GenerationPlan",
    "ResolvedOptions",
    "GENERATOR_MNEMONIC",
    "RECONCILE_MNEMONIC",
]
