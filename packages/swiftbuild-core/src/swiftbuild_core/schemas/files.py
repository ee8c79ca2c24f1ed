"""File handle and proto source models for swiftbuild.

This module defines:
- FileHandle: a source file or a file/directory declared through a FileSystem
- SourceDescriptor: a proto source keyed by its import path
- ProtoInfo: one proto library's sources and descriptor sets
"""

from __future__ import annotations

import posixpath

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileHandle(BaseModel):
    """A file or directory known to the build.

    Attributes:
        path: Workspace or output-root relative POSIX path.
        owner: Package that owns the file. Used to compute owner-relative paths.
        is_directory: True for declared directories.

    Example:
        >>> src = FileHandle(path="app/Sources/My File.swift", owner="app")
        >>> src.owner_relative_path
        'Sources/My File.swift'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(
        ...,
        min_length=1,
        description="POSIX path of the file",
    )
    owner: str = Field(
        default="",
        description="Owning package path",
    )
    is_directory: bool = Field(
        default=False,
        description="Whether the handle names a directory",
    )

    @field_validator("owner")
    @classmethod
    def validate_owner(cls, v: str) -> str:
        """Normalize the owner to have no leading or trailing slash."""
        return v.strip("/")

    @property
    def basename(self) -> str:
        """Final path segment."""
        return posixpath.basename(self.path)

    @property
    def dirname(self) -> str:
        """Parent directory of the path."""
        return posixpath.dirname(self.path)

    @property
    def owner_relative_path(self) -> str:
        """Path relative to the owning package.

        Files outside the owner's directory are returned unchanged.
        """
        if self.owner and self.path.startswith(self.owner + "/"):
            return self.path[len(self.owner) + 1 :]
        return self.path


class SourceDescriptor(BaseModel):
    """A proto source as seen by the generator.

    Two descriptors with the same ``import_path`` backed by different file
    paths are an ambiguous import and abort planning.

    Attributes:
        import_path: Path protoc uses to import the file (e.g. ``a/b.proto``).
        file: Backing file handle.
        owner: Label of the library that contributed the source.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    import_path: str = Field(
        ...,
        min_length=1,
        description="Import path of the proto file",
    )
    file: FileHandle = Field(
        ...,
        description="Backing file",
    )
    owner: str = Field(
        default="",
        description="Label of the contributing library",
    )

    @field_validator("import_path")
    @classmethod
    def validate_import_path(cls, v: str) -> str:
        """Import paths are relative and normalized."""
        if v.startswith("/"):
            msg = f"Import path must be relative (got '{v}')"
            raise ValueError(msg)
        normalized = posixpath.normpath(v)
        if normalized.startswith(".."):
            msg = f"Import path escapes its root (got '{v}')"
            raise ValueError(msg)
        return normalized

    @classmethod
    def from_path(
        cls,
        import_path: str,
        file_path: str | None = None,
        owner: str = "",
    ) -> SourceDescriptor:
        """Build a descriptor whose backing file defaults to the import path."""
        return cls(
            import_path=import_path,
            file=FileHandle(path=file_path or import_path),
            owner=owner,
        )


class ProtoInfo(BaseModel):
    """Sources and descriptor sets contributed by one proto library.

    Attributes:
        sources: Proto sources to generate code for, dependencies included.
        transitive_descriptor_sets: Descriptor set files passed to protoc.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sources: tuple[SourceDescriptor, ...] = Field(
        default=(),
        description="Proto sources, dependencies included",
    )
    transitive_descriptor_sets: tuple[FileHandle, ...] = Field(
        default=(),
        description="Descriptor set files for protoc's --descriptor_set_in",
    )
