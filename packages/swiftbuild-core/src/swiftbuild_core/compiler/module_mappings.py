"""Module mapping side file for swift-protobuf plugins.

The plugin reads this file (``--{name}_opt=ProtoPathModuleMappings={file}``)
to learn which Swift module provides the generated code for protos owned by
other targets, so it can emit the right ``import`` statements. The format is
the text encoding of swift-protobuf's ``SwiftProtobuf_GenSwift_ModuleMappings``
message:

    mapping {
      module_name: "Greeter"
      proto_file_path: "greeter/greeter.proto"
    }
"""

from __future__ import annotations

import json
import posixpath
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from swiftbuild_core.planner.file_system import FileSystem
from swiftbuild_core.schemas.actions import WriteAction
from swiftbuild_core.schemas.files import FileHandle
from swiftbuild_core.schemas.target import TargetIdentity

MODULE_MAPPINGS_FILE_NAME = "module_mappings.asciipb"


class ModuleMapping(BaseModel):
    """Proto import paths whose generated code lives in ``module_name``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    module_name: str = Field(..., min_length=1)
    proto_file_paths: tuple[str, ...] = ()


def _quote(value: str) -> str:
    # JSON string escaping is a valid subset of text-format string escaping
    return json.dumps(value)


def render_module_mappings(module_mappings: Iterable[ModuleMapping]) -> str:
    """Render mappings in text format, one block per module, sorted by module name."""
    blocks: list[str] = []
    for mapping in sorted(module_mappings, key=lambda m: m.module_name):
        lines = ["mapping {", f"  module_name: {_quote(mapping.module_name)}"]
        lines.extend(
            f"  proto_file_path: {_quote(path)}" for path in sorted(set(mapping.proto_file_paths))
        )
        lines.append("}")
        blocks.append("\n".join(lines))
    return "\n".join(blocks) + ("\n" if blocks else "")


def module_mapping_write_action(
    file_system: FileSystem,
    target: TargetIdentity,
    plugin_name: str,
    module_mappings: Iterable[ModuleMapping],
) -> tuple[FileHandle, WriteAction]:
    """Declare the mapping file for (target, plugin) and the action writing it.

    The file lives next to the plugin's scratch directory so two plugins
    generating for the same target never write the same path.
    """
    mappings_file = file_system.declare_file(
        posixpath.join(target.name, plugin_name, MODULE_MAPPINGS_FILE_NAME)
    )
    action = WriteAction(output=mappings_file, content=render_module_mappings(module_mappings))
    return mappings_file, action
