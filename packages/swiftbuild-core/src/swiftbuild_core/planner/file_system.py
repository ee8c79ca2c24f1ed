"""FileSystem interface consumed by the planner and action graph builder.

The host build system owns the real implementation. DeclaredFileSystem is a
self-contained implementation that maps declared paths under an output root
and remembers every declaration, used by the CLI and by tests.
"""

from __future__ import annotations

import logging
import posixpath
from typing import Protocol, runtime_checkable

from swiftbuild_core.errors import InvalidConfigurationError
from swiftbuild_core.schemas.files import FileHandle

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_ROOT = "bazel-out/bin"


@runtime_checkable
class FileSystem(Protocol):
    """Declares files and directories that actions will produce."""

    def declare_file(self, path: str) -> FileHandle:
        """Declare a file at ``path`` relative to the owning package."""
        ...

    def declare_directory(self, path: str) -> FileHandle:
        """Declare a directory at ``path`` relative to the owning package."""
        ...


class DeclaredFileSystem:
    """FileSystem that resolves declarations to ``{output_root}/{package}/{path}``.

    Declaring the same path twice with the same kind returns the same handle;
    declaring it once as a file and once as a directory is an error.

    Attributes:
        output_root: Root of the build output tree.
        package: Package owning every declaration.
        declared: Declared handles keyed by full path, in declaration order.

    Example:
        >>> fs = DeclaredFileSystem(package="app")
        >>> fs.declare_file("gen/a.pb.swift").path
        'bazel-out/bin/app/gen/a.pb.swift'
    """

    def __init__(self, output_root: str = DEFAULT_OUTPUT_ROOT, package: str = "") -> None:
        self.output_root = output_root.rstrip("/")
        self.package = package.strip("/")
        self.declared: dict[str, FileHandle] = {}

    def _resolve(self, path: str) -> str:
        if not path or path.startswith("/"):
            raise InvalidConfigurationError(
                f"Declared paths must be relative (got '{path}')",
                field_path="path",
                value=path,
            )
        return posixpath.normpath(posixpath.join(self.output_root, self.package, path))

    def _declare(self, path: str, is_directory: bool) -> FileHandle:
        full_path = self._resolve(path)
        existing = self.declared.get(full_path)
        if existing is not None:
            if existing.is_directory != is_directory:
                raise InvalidConfigurationError(
                    f"'{full_path}' declared as both a file and a directory",
                    field_path="path",
                    value=path,
                )
            return existing

        handle = FileHandle(path=full_path, owner=self.package, is_directory=is_directory)
        self.declared[full_path] = handle
        logger.debug("Declared %s %s", "directory" if is_directory else "file", full_path)
        return handle

    def declare_file(self, path: str) -> FileHandle:
        return self._declare(path, is_directory=False)

    def declare_directory(self, path: str) -> FileHandle:
        return self._declare(path, is_directory=True)

    def files(self) -> list[FileHandle]:
        """Return every declared file, in declaration order."""
        return [handle for handle in self.declared.values() if not handle.is_directory]
