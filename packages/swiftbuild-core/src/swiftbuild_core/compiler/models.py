"""Compiler output models for swiftbuild.

This module defines the records produced while planning a generation request:
- ResolvedOptions: the final option set passed to a plugin
- GenerationPlan: declared outputs plus the ordered action sequence

Both are computed fresh for every build unit and discarded once the host has
consumed the action graph.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from swiftbuild_core.errors import InvalidConfigurationError
from swiftbuild_core.schemas.actions import Action, RunAction
from swiftbuild_core.schemas.files import FileHandle
from swiftbuild_core.schemas.plugin_spec import FILE_NAMING_OPTION, FileNaming
from swiftbuild_core.schemas.target import TargetIdentity

GENERATOR_MNEMONIC = "SwiftProtocGen"
RECONCILE_MNEMONIC = "CopySwiftSources"


class ResolvedOptions(BaseModel):
    """Plugin options after overlaying caller values and filtering.

    Only the final value per key is meaningful; flag serialization sorts keys
    so command lines are stable across runs.

    Attributes:
        options: Option name to value.

    Example:
        >>> resolved = ResolvedOptions(options={"Visibility": "Internal"})
        >>> resolved.to_flags("swift")
        ['--swift_opt=Visibility=Internal']
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    options: dict[str, str] = Field(
        default_factory=dict,
        description="Final plugin option values",
    )

    def __getitem__(self, key: str) -> str:
        return self.options[key]

    def __contains__(self, key: object) -> bool:
        return key in self.options

    def __len__(self) -> int:
        return len(self.options)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.options.get(key, default)

    @property
    def file_naming(self) -> FileNaming:
        """The ``FileNaming`` option, defaulting to FullPath.

        Raises:
            InvalidConfigurationError: If the value is not a known FileNaming.
        """
        value = self.options.get(FILE_NAMING_OPTION, FileNaming.full_path.value)
        try:
            return FileNaming(value)
        except ValueError:
            raise InvalidConfigurationError(
                f"Unknown file naming plugin option: {value}",
                field_path=FILE_NAMING_OPTION,
                value=value,
            ) from None

    def to_flags(self, plugin_name: str) -> list[str]:
        """Format each option as ``--{plugin_name}_opt={key}={value}``."""
        return [
            f"--{plugin_name}_opt={key}={value}"
            for key, value in sorted(self.options.items())
        ]


class GenerationPlan(BaseModel):
    """Declared outputs and actions for one (target, plugin) generation request.

    Attributes:
        target: Build unit identity.
        plugin_name: Plugin the plan was built for.
        declared_outputs: Every file the host is told to expect. All of them
            exist once the actions have run.
        actions: Ordered actions producing the declared outputs.
        temporary_directory: Scratch directory the generator writes into.
        permanent_directory: Directory holding the declared outputs.
        import_paths: De-duplicated import paths passed to the generator.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    target: TargetIdentity
    plugin_name: str
    declared_outputs: tuple[FileHandle, ...] = Field(..., min_length=1)
    actions: tuple[Action, ...] = Field(..., min_length=1)
    temporary_directory: FileHandle
    permanent_directory: str
    import_paths: tuple[str, ...] = ()

    @property
    def invokes_generator(self) -> bool:
        """Whether the plan runs the generator at all."""
        return any(
            isinstance(action, RunAction) and action.mnemonic == GENERATOR_MNEMONIC
            for action in self.actions
        )

    @property
    def output_paths(self) -> list[str]:
        """Paths of the declared outputs."""
        return [handle.path for handle in self.declared_outputs]
