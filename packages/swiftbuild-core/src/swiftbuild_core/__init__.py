"""swiftbuild-core: derived path planning and proto generation actions.

This package provides:
- PathPlanner / derived_path: deterministic paths for every artifact kind
- PluginConfigResolver: allow-list filtered plugin options
- ActionGraphBuilder / SwiftProtoCompiler: declared outputs and actions
- ReconciliationStage: guarantees every declared output exists
- CompilerConfig / ConfigResolver: swiftbuild.yaml loading
"""

from __future__ import annotations

__version__ = "0.1.0"

from swiftbuild_core.compiler import (
    ActionGraphBuilder,
    ActionRunner,
    ConfigResolver,
    GenerationPlan,
    ModuleMapping,
    PluginConfigResolver,
    ReconciliationStage,
    RecordingActionRunner,
    ResolvedOptions,
    SwiftProtoCompiler,
    apply_reconciliation,
    build,
    resolve_plugin_options,
    submit_plan,
)
from swiftbuild_core.errors import (
    AmbiguousImportPathError,
    ConfigNotFoundError,
    InvalidConfigurationError,
    InvalidHeaderExtensionError,
    IOFailureError,
    SwiftBuildError,
)
from swiftbuild_core.export import (
    export_compiler_config_schema,
    export_generation_plan_schema,
)
from swiftbuild_core.planner import (
    ArtifactKind,
    DeclaredFileSystem,
    FileSystem,
    PathPlanner,
    derived_path,
)
from swiftbuild_core.schemas import (
    CompilerConfig,
    FileHandle,
    FileNaming,
    NamingPolicy,
    PluginSpec,
    ProtoInfo,
    SourceDescriptor,
    TargetIdentity,
)

__all__ = [
    "__version__",
    # Planner
    "ArtifactKind",
    "PathPlanner",
    "derived_path",
    "FileSystem",
    "DeclaredFileSystem",
    # Compiler
    "SwiftProtoCompiler",
    "PluginConfigResolver",
    "resolve_plugin_options",
    "ActionGraphBuilder",
    "build",
    "ReconciliationStage",
    "apply_reconciliation",
    "ModuleMapping",
    "ActionRunner",
    "RecordingActionRunner",
    "submit_plan",
    "ConfigResolver",
    "GenerationPlan",
    "ResolvedOptions",
    # Errors
    "SwiftBuildError",
    "AmbiguousImportPathError",
    "InvalidHeaderExtensionError",
    "InvalidConfigurationError",
    "IOFailureError",
    "ConfigNotFoundError",
    # JSON Schema exports
    "export_compiler_config_schema",
    "export_generation_plan_schema",
    # Schema models
    "TargetIdentity",
    "NamingPolicy",
    "FileHandle",
    "SourceDescriptor",
    "ProtoInfo",
    "PluginSpec",
    "FileNaming",
    "CompilerConfig",
]
