"""Derived artifact path planning for swiftbuild.

Every function here is pure: it computes a relative POSIX path from a
TargetIdentity, a NamingPolicy and kind-specific arguments, and never touches
the filesystem. ``declare`` is the only entry point that talks to a
FileSystem, and it does so after the path is fully computed.

Templates (``t`` = target name, ``m`` = module name):

    ast                              {t}_objs/{src_dir}/{src_base}.ast
    intermediate_object_file         {t}_objs/{src_dir}/{src_base}.o
    module                           {m}.swiftmodule
    static_archive                   lib{link_name}.a  (.lo when alwayslink)
    indexstore_directory             {t}.indexstore/
    ...

With target-name injection enabled, files gain a ``{segment}/`` prefix and
directories a ``{segment}_`` infix.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from swiftbuild_core.errors import InvalidConfigurationError, InvalidHeaderExtensionError
from swiftbuild_core.planner.artifact_kinds import DIRECTORY_KINDS, ArtifactKind
from swiftbuild_core.schemas.target import NamingPolicy, TargetIdentity

if TYPE_CHECKING:
    from swiftbuild_core.planner.file_system import FileSystem
    from swiftbuild_core.schemas.files import FileHandle

logger = logging.getLogger(__name__)

# Spaces in source paths are encoded permanently in on-disk artifact names
SPACE_SENTINEL = "__SPACE__"

GENERATED_HEADER_EXTENSION = ".h"

_DEFAULT_NAMING_POLICY = NamingPolicy()


@dataclass(frozen=True)
class PathRequest:
    """Arguments available to an artifact template.

    Attributes:
        target: Build unit identity.
        module_name: Module name, for module kinds.
        source: Source file, for per-source kinds.
        link_name: Library name without ``lib`` prefix, for static archives.
        alwayslink: Use the ``.lo`` archive extension.
        header_name: Requested generated header file name.
    """

    target: TargetIdentity
    module_name: str | None = None
    source: FileHandle | None = None
    link_name: str | None = None
    alwayslink: bool = False
    header_name: str | None = None

    def require_module_name(self) -> str:
        if not self.module_name:
            raise InvalidConfigurationError(
                "A module name is required for this artifact",
                field_path="module_name",
            )
        return self.module_name

    def require_source(self) -> FileHandle:
        if self.source is None:
            raise InvalidConfigurationError(
                "A source file is required for this artifact",
                field_path="source",
            )
        return self.source


def intermediate_frontend_file_path(target_name: str, source: FileHandle) -> tuple[str, str]:
    """Return the directory and safe basename for a source's intermediate outputs.

    The directory is ``{target_name}_objs`` joined with the source's
    owner-relative directory. Spaces become ``__SPACE__``.

    Args:
        target_name: Name of the target being built.
        source: Source file being compiled.

    Returns:
        Tuple of (directory, basename).
    """
    objs_dir = f"{target_name}_objs"
    owner_rel_path = source.owner_relative_path.replace(" ", SPACE_SENTINEL)
    safe_name = posixpath.basename(owner_rel_path)
    return posixpath.join(objs_dir, posixpath.dirname(owner_rel_path)), safe_name


def _per_source(extension: str) -> Callable[[PathRequest], str]:
    def template(request: PathRequest) -> str:
        dirname, basename = intermediate_frontend_file_path(
            request.target.name, request.require_source()
        )
        return posixpath.join(dirname, f"{basename}.{extension}")

    return template


def _per_module(extension: str) -> Callable[[PathRequest], str]:
    def template(request: PathRequest) -> str:
        return f"{request.require_module_name()}.{extension}"

    return template


def _per_target(pattern: str) -> Callable[[PathRequest], str]:
    def template(request: PathRequest) -> str:
        return pattern.format(target=request.target.name)

    return template


def _static_archive(request: PathRequest) -> str:
    link_name = request.link_name or request.target.name
    extension = "lo" if request.alwayslink else "a"
    return f"lib{link_name}.{extension}"


def _generated_header(request: PathRequest) -> str:
    header_name = request.header_name
    if header_name is None:
        header_name = f"{request.require_module_name()}-Swift.h"
    return validate_generated_header_name(header_name)


def validate_generated_header_name(header_name: str) -> str:
    """Return ``header_name`` if it has a ``.h`` extension.

    Raises:
        InvalidHeaderExtensionError: For any other extension.
    """
    extension = posixpath.splitext(header_name)[1]
    if extension != GENERATED_HEADER_EXTENSION:
        raise InvalidHeaderExtensionError(header_name)
    return header_name


_TEMPLATES: dict[ArtifactKind, Callable[[PathRequest], str]] = {
    ArtifactKind.ast: _per_source("ast"),
    ArtifactKind.intermediate_bc_file: _per_source("bc"),
    ArtifactKind.intermediate_object_file: _per_source("o"),
    ArtifactKind.intermediate_const_values_file: _per_source("swiftconstvalues"),
    ArtifactKind.module: _per_module("swiftmodule"),
    ArtifactKind.doc: _per_module("swiftdoc"),
    ArtifactKind.interface: _per_module("swiftinterface"),
    ArtifactKind.private_interface: _per_module("private.swiftinterface"),
    ArtifactKind.source_info: _per_module("swiftsourceinfo"),
    ArtifactKind.autolink_flags: _per_target("{target}.autolink"),
    ArtifactKind.executable: _per_target("{target}"),
    ArtifactKind.indexstore_directory: _per_target("{target}.indexstore"),
    ArtifactKind.module_map: _per_target("{target}.swift.modulemap"),
    ArtifactKind.modulewrap_object: _per_target("{target}.modulewrap.o"),
    ArtifactKind.precompiled_module: _per_target("{target}.swift.pcm"),
    ArtifactKind.reexport_modules_src: _per_target("{target}_exports.swift"),
    ArtifactKind.static_archive: _static_archive,
    ArtifactKind.output_file_map: _per_target("{target}.output_file_map.json"),
    ArtifactKind.derived_output_file_map: _per_target("{target}.derived_output_file_map.json"),
    ArtifactKind.symbol_graph_directory: _per_target("{target}.symbolgraphs"),
    ArtifactKind.vfs_overlay: _per_target("{target}.vfsoverlay.yaml"),
    ArtifactKind.whole_module_object_file: _per_target("{target}.o"),
    ArtifactKind.const_values_file: _per_target("{target}.swiftconstvalues"),
    ArtifactKind.test_runner_script: _per_target("{target}.test-runner.sh"),
    ArtifactKind.generated_header: _generated_header,
}

_unmapped = set(ArtifactKind) - set(_TEMPLATES)
if _unmapped:
    raise RuntimeError(f"Artifact kinds without a path template: {sorted(_unmapped)}")


def default_path(
    target: TargetIdentity,
    basename: str,
    naming_policy: NamingPolicy = _DEFAULT_NAMING_POLICY,
) -> str:
    """Apply the naming policy to an arbitrary file basename."""
    segment = naming_policy.segment(target)
    if segment is None:
        return basename
    return posixpath.join(segment, basename)


def _apply_naming_policy(
    path: str,
    target: TargetIdentity,
    naming_policy: NamingPolicy,
    is_directory: bool,
) -> str:
    segment = naming_policy.segment(target)
    if segment is None:
        return path
    if is_directory:
        return f"{segment}_{path}"
    return posixpath.join(segment, path)


def derived_path(
    kind: ArtifactKind | str,
    target: TargetIdentity,
    naming_policy: NamingPolicy = _DEFAULT_NAMING_POLICY,
    *,
    module_name: str | None = None,
    source: FileHandle | None = None,
    link_name: str | None = None,
    alwayslink: bool = False,
    header_name: str | None = None,
) -> str:
    """Compute the relative output path of an artifact.

    Args:
        kind: Artifact kind (enum member or its value).
        target: Build unit identity.
        naming_policy: Target-name injection policy.
        module_name: Module name, required by module kinds.
        source: Source file, required by per-source kinds.
        link_name: Static archive name; defaults to the target name.
        alwayslink: Use the ``.lo`` archive extension.
        header_name: Generated header name; defaults to ``{module_name}-Swift.h``.

    Returns:
        Relative POSIX path.

    Raises:
        InvalidConfigurationError: If the kind is unknown or a required
            argument is missing.
        InvalidHeaderExtensionError: If a generated header is not ``.h``.

    Example:
        >>> derived_path(ArtifactKind.module, TargetIdentity(name="Lib"), module_name="Lib")
        'Lib.swiftmodule'
    """
    try:
        artifact_kind = ArtifactKind(kind)
    except ValueError:
        raise InvalidConfigurationError(
            f"Unknown artifact kind '{kind}'",
            field_path="kind",
            value=str(kind),
        ) from None

    request = PathRequest(
        target=target,
        module_name=module_name,
        source=source,
        link_name=link_name,
        alwayslink=alwayslink,
        header_name=header_name,
    )
    path = _TEMPLATES[artifact_kind](request)
    return _apply_naming_policy(
        path,
        target,
        naming_policy,
        is_directory=artifact_kind in DIRECTORY_KINDS,
    )


def declare(
    kind: ArtifactKind | str,
    file_system: FileSystem,
    target: TargetIdentity,
    naming_policy: NamingPolicy = _DEFAULT_NAMING_POLICY,
    **kwargs: object,
) -> FileHandle:
    """Compute an artifact path and declare it through ``file_system``.

    Directory kinds are declared with ``declare_directory``.
    """
    path = derived_path(kind, target, naming_policy, **kwargs)  # type: ignore[arg-type]
    if ArtifactKind(kind) in DIRECTORY_KINDS:
        return file_system.declare_directory(path)
    return file_system.declare_file(path)


class PathPlanner:
    """Path planning bound to one build unit.

    Attributes:
        target: Build unit identity.
        naming_policy: Target-name injection policy.

    Example:
        >>> planner = PathPlanner(TargetIdentity(name="App"), NamingPolicy(add_target_name=True))
        >>> planner.path(ArtifactKind.executable)
        'App/App'
    """

    def __init__(
        self,
        target: TargetIdentity,
        naming_policy: NamingPolicy | None = None,
    ) -> None:
        self.target = target
        self.naming_policy = naming_policy or _DEFAULT_NAMING_POLICY

    def path(self, kind: ArtifactKind | str, **kwargs: object) -> str:
        """Return the relative path of ``kind`` for this build unit."""
        return derived_path(kind, self.target, self.naming_policy, **kwargs)  # type: ignore[arg-type]

    def declare(
        self,
        kind: ArtifactKind | str,
        file_system: FileSystem,
        **kwargs: object,
    ) -> FileHandle:
        """Declare ``kind`` for this build unit through ``file_system``."""
        handle = declare(kind, file_system, self.target, self.naming_policy, **kwargs)
        logger.debug("Declared %s for %s at %s", kind, self.target.label, handle.path)
        return handle
