"""Action models emitted by the action graph builder.

Each model is the recorded shape of one ActionRunner call. The core never
executes anything itself; a host executor consumes these records.

Discriminated on ``type``:
- RunAction: run an executable with declared inputs and outputs
- RunShellAction: run a shell command
- ExpandTemplateAction: expand a template file into an output file
- WriteAction: write literal content to an output file
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from swiftbuild_core.schemas.files import FileHandle


class RunAction(BaseModel):
    """Run an executable.

    Attributes:
        executable: The program to run.
        arguments: Command-line arguments.
        inputs: Files the action reads.
        outputs: Files and directories the action must produce.
        mnemonic: Short action category (e.g. ``SwiftProtocGen``).
        progress_message: Human-readable progress line.
        params_file: When set, arguments are written one per line to this
            file and the command line is ``@{params_file}``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["run"] = "run"
    executable: FileHandle
    arguments: tuple[str, ...] = ()
    inputs: tuple[FileHandle, ...] = ()
    outputs: tuple[FileHandle, ...] = Field(..., min_length=1)
    mnemonic: str | None = None
    progress_message: str | None = None
    params_file: FileHandle | None = None

    def command_line(self) -> list[str]:
        """Return the argv the host should execute."""
        if self.params_file is not None:
            return [self.executable.path, f"@{self.params_file.path}"]
        return [self.executable.path, *self.arguments]


class RunShellAction(BaseModel):
    """Run a shell command; ``$1``.. are bound to ``arguments``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["run_shell"] = "run_shell"
    command: str = Field(..., min_length=1)
    arguments: tuple[str, ...] = ()
    outputs: tuple[FileHandle, ...] = Field(..., min_length=1)


class ExpandTemplateAction(BaseModel):
    """Expand ``template`` into ``output`` by literal placeholder substitution."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["expand_template"] = "expand_template"
    template: str
    substitutions: dict[str, str] = Field(default_factory=dict)
    output: FileHandle
    is_executable: bool = False

    def expand(self, template_text: str) -> str:
        """Apply the substitutions to ``template_text``."""
        for placeholder, value in self.substitutions.items():
            template_text = template_text.replace(placeholder, value)
        return template_text


class WriteAction(BaseModel):
    """Write literal content to ``output``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["write"] = "write"
    output: FileHandle
    content: str = ""
    is_executable: bool = False


Action = Annotated[
    Union[RunAction, RunShellAction, ExpandTemplateAction, WriteAction],
    Field(discriminator="type"),
]
