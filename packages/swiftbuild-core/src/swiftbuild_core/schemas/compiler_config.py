"""Root schema for swiftbuild.yaml.

CompilerConfig names every proto compiler plugin available to a workspace:

    version: "1.0.0"
    compilers:
      swift:
        protoc: tools/protoc
        plugin: tools/protoc-gen-swift
        plugin_name: swift
        plugin_option_allowlist: [Visibility, FileNaming]
        plugin_options: {Visibility: Public}
        suffixes: [.pb.swift]
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from swiftbuild_core.errors import InvalidConfigurationError
from swiftbuild_core.schemas.plugin_spec import PluginSpec

CONFIG_VERSION = "1.0.0"


class CompilerConfig(BaseModel):
    """Workspace-level compiler plugin configuration.

    Attributes:
        version: Schema version of the document.
        compilers: Plugin specs keyed by compiler name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(
        default=CONFIG_VERSION,
        pattern=r"^\d+\.\d+\.\d+$",
        description="Configuration schema version",
    )
    compilers: dict[str, PluginSpec] = Field(
        default_factory=dict,
        description="Plugin specs keyed by compiler name",
    )

    @field_validator("compilers", mode="before")
    @classmethod
    def validate_compiler_names(cls, v: object) -> object:
        """Compiler names must be non-empty."""
        if isinstance(v, dict):
            for name in v:
                if not isinstance(name, str) or not name.strip():
                    msg = f"Invalid compiler name: {name!r}"
                    raise ValueError(msg)
        return v

    @classmethod
    def from_yaml(cls, path: Path) -> CompilerConfig:
        """Load CompilerConfig from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            pydantic.ValidationError: If validation fails.
        """
        if not path.exists():
            raise FileNotFoundError(f"Compiler config not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}

        return cls.model_validate(data)

    def get_compiler(self, name: str) -> PluginSpec:
        """Return the plugin spec registered as ``name``.

        Raises:
            InvalidConfigurationError: If no compiler has that name.
        """
        try:
            return self.compilers[name]
        except KeyError:
            available = ", ".join(sorted(self.compilers)) or "none"
            raise InvalidConfigurationError(
                f"Compiler '{name}' not found. Available: {available}",
            ) from None
