"""Derived artifact path planning.

- ArtifactKind: closed enumeration of artifact kinds
- derived_path / declare: pure path computation and declaration
- PathPlanner: the same, bound to one build unit
- FileSystem / DeclaredFileSystem: declaration interface and implementation
"""

from __future__ import annotations

from swiftbuild_core.planner.artifact_kinds import (
    DIRECTORY_KINDS,
    MODULE_KINDS,
    PER_SOURCE_KINDS,
    ArtifactKind,
)
from swiftbuild_core.planner.file_system import (
    DEFAULT_OUTPUT_ROOT,
    DeclaredFileSystem,
    FileSystem,
)
from swiftbuild_core.planner.path_planner import (
    SPACE_SENTINEL,
    PathPlanner,
    declare,
    default_path,
    derived_path,
    intermediate_frontend_file_path,
    validate_generated_header_name,
)

__all__: list[str] = [
    "ArtifactKind",
    "DIRECTORY_KINDS",
    "MODULE_KINDS",
    "PER_SOURCE_KINDS",
    "FileSystem",
    "DeclaredFileSystem",
    "DEFAULT_OUTPUT_ROOT",
    "PathPlanner",
    "SPACE_SENTINEL",
    "declare",
    "default_path",
    "derived_path",
    "intermediate_frontend_file_path",
    "validate_generated_header_name",
]
