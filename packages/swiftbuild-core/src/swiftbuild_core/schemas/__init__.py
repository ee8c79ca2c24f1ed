"""Schema definitions for swiftbuild.

Identity and naming:
- TargetIdentity: build unit name and package
- NamingPolicy: target-name injection into derived paths

Files and sources:
- FileHandle, SourceDescriptor, ProtoInfo

Plugins and configuration:
- PluginSpec, FileNaming, CompilerConfig

Actions:
- RunAction, RunShellAction, ExpandTemplateAction, WriteAction, Action
"""

from __future__ import annotations

from swiftbuild_core.schemas.actions import (
    Action,
    ExpandTemplateAction,
    RunAction,
    RunShellAction,
    WriteAction,
)
from swiftbuild_core.schemas.compiler_config import CONFIG_VERSION, CompilerConfig
from swiftbuild_core.schemas.files import FileHandle, ProtoInfo, SourceDescriptor
from swiftbuild_core.schemas.plugin_spec import (
    DEFAULT_BUNDLED_PROTO_PATHS,
    FILE_NAMING_OPTION,
    MODULE_MAPPINGS_OPTION,
    FileNaming,
    PluginSpec,
)
from swiftbuild_core.schemas.target import NamingPolicy, TargetIdentity

__all__: list[str] = [
    "TargetIdentity",
    "NamingPolicy",
    "FileHandle",
    "SourceDescriptor",
    "ProtoInfo",
    "PluginSpec",
    "FileNaming",
    "DEFAULT_BUNDLED_PROTO_PATHS",
    "FILE_NAMING_OPTION",
    "MODULE_MAPPINGS_OPTION",
    "CompilerConfig",
    "CONFIG_VERSION",
    "Action",
    "RunAction",
    "RunShellAction",
    "ExpandTemplateAction",
    "WriteAction",
]
