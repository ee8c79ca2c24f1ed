"""Target identity and naming policy models for swiftbuild.

This module defines the two records every derived path is computed from:
- TargetIdentity: the build unit's name and owning package
- NamingPolicy: whether the target name is injected into output paths
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TargetIdentity(BaseModel):
    """Identity of the build unit that owns every derived artifact.

    Attributes:
        name: Target name (the part after ``:`` in a label).
        package: Owning package path, relative to the workspace root.

    Example:
        >>> target = TargetIdentity.from_label("//app/protos:messages")
        >>> target.name
        'messages'
        >>> target.label
        '//app/protos:messages'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        ...,
        min_length=1,
        description="Target name",
    )
    package: str = Field(
        default="",
        description="Owning package path relative to the workspace root",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that would escape their output directory."""
        if v in (".", "..") or v.startswith("/"):
            msg = f"Invalid target name '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("package")
    @classmethod
    def validate_package(cls, v: str) -> str:
        """Normalize the package to have no leading or trailing slash."""
        return v.strip("/")

    @property
    def label(self) -> str:
        """Render the canonical ``//package:name`` label."""
        return f"//{self.package}:{self.name}"

    @classmethod
    def from_label(cls, label: str) -> TargetIdentity:
        """Parse a label such as ``//pkg/sub:name`` or ``//pkg/sub``.

        A label without ``:`` names the target after the last package segment.

        Args:
            label: Label string.

        Returns:
            Parsed TargetIdentity.

        Raises:
            ValueError: If the label is empty or has no name.
        """
        text = label.strip()
        if text.startswith("//"):
            text = text[2:]
        if ":" in text:
            package, name = text.split(":", 1)
        else:
            package, name = text, text.rsplit("/", 1)[-1]
        if not name:
            msg = f"Label '{label}' does not name a target"
            raise ValueError(msg)
        return cls(name=name, package=package)


class NamingPolicy(BaseModel):
    """Controls injection of a target-specific segment into derived paths.

    When ``add_target_name`` or ``qualifier`` is set, every derived file gains a
    ``{segment}/`` prefix and every derived directory a ``{segment}_`` infix.
    This is the single mechanism that keeps two targets writing same-named
    artifacts into a shared output root apart.

    Attributes:
        add_target_name: Inject the target-specific segment.
        qualifier: Segment to inject instead of the target name. Setting it
            implies ``add_target_name``.

    Example:
        >>> NamingPolicy(add_target_name=True).segment(TargetIdentity(name="lib"))
        'lib'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    add_target_name: bool = Field(
        default=False,
        description="Inject the target name into every derived path",
    )
    qualifier: str | None = Field(
        default=None,
        min_length=1,
        description="Segment injected instead of the target name",
    )

    @field_validator("qualifier")
    @classmethod
    def validate_qualifier(cls, v: str | None) -> str | None:
        """Qualifiers become a single path segment."""
        if v is not None and "/" in v:
            msg = f"Naming qualifier must be a single path segment (got '{v}')"
            raise ValueError(msg)
        return v

    @property
    def injects_segment(self) -> bool:
        """Whether derived paths gain a target-specific segment."""
        return self.add_target_name or self.qualifier is not None

    def segment(self, target: TargetIdentity) -> str | None:
        """Return the segment to inject for ``target``, or None when disabled."""
        if not self.injects_segment:
            return None
        return self.qualifier or target.name
