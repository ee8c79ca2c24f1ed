"""Closed enumeration of derived artifact kinds."""

from __future__ import annotations

from enum import Enum


class ArtifactKind(str, Enum):
    """Every artifact the compilation pipeline derives from a target.

    Per-source kinds are computed from a source file; module kinds from the
    module name; the rest from the target name alone.
    """

    # Per-source intermediate frontend outputs
    ast = "ast"
    intermediate_bc_file = "intermediate_bc_file"
    intermediate_object_file = "intermediate_object_file"
    intermediate_const_values_file = "intermediate_const_values_file"

    # Module artifacts
    module = "module"
    doc = "doc"
    interface = "interface"
    private_interface = "private_interface"
    source_info = "source_info"

    # Target-level artifacts
    autolink_flags = "autolink_flags"
    executable = "executable"
    indexstore_directory = "indexstore_directory"
    module_map = "module_map"
    modulewrap_object = "modulewrap_object"
    precompiled_module = "precompiled_module"
    reexport_modules_src = "reexport_modules_src"
    static_archive = "static_archive"
    output_file_map = "output_file_map"
    derived_output_file_map = "derived_output_file_map"
    symbol_graph_directory = "symbol_graph_directory"
    vfs_overlay = "vfs_overlay"
    whole_module_object_file = "whole_module_object_file"
    const_values_file = "const_values_file"
    test_runner_script = "test_runner_script"
    generated_header = "generated_header"


PER_SOURCE_KINDS = frozenset(
    {
        ArtifactKind.ast,
        ArtifactKind.intermediate_bc_file,
        ArtifactKind.intermediate_object_file,
        ArtifactKind.intermediate_const_values_file,
    }
)

MODULE_KINDS = frozenset(
    {
        ArtifactKind.module,
        ArtifactKind.doc,
        ArtifactKind.interface,
        ArtifactKind.private_interface,
        ArtifactKind.source_info,
    }
)

DIRECTORY_KINDS = frozenset(
    {
        ArtifactKind.indexstore_directory,
        ArtifactKind.symbol_graph_directory,
    }
)
