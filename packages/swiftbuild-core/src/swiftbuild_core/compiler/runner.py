"""ActionRunner interface and plan submission.

The host build system supplies the real ActionRunner. The core only decides
which calls to make: ``submit_plan`` replays a GenerationPlan's recorded
actions, in order, against any runner. RecordingActionRunner captures calls
as action models and is what the CLI and tests submit to.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from swiftbuild_core.compiler.models import GenerationPlan
from swiftbuild_core.schemas.actions import (
    Action,
    ExpandTemplateAction,
    RunAction,
    RunShellAction,
    WriteAction,
)
from swiftbuild_core.schemas.files import FileHandle

logger = logging.getLogger(__name__)


@runtime_checkable
class ActionRunner(Protocol):
    """Registers actions with the host build system."""

    def run(
        self,
        executable: FileHandle,
        arguments: Sequence[str],
        inputs: Sequence[FileHandle],
        outputs: Sequence[FileHandle],
        mnemonic: str | None = None,
        progress_message: str | None = None,
        params_file: FileHandle | None = None,
    ) -> None: ...

    def run_shell(
        self,
        command: str,
        arguments: Sequence[str],
        outputs: Sequence[FileHandle],
    ) -> None: ...

    def expand_template(
        self,
        template: str,
        substitutions: Mapping[str, str],
        output: FileHandle,
        is_executable: bool = False,
    ) -> None: ...

    def write(self, output: FileHandle, content: str, is_executable: bool = False) -> None: ...


class RecordingActionRunner:
    """ActionRunner that records every call as an action model.

    Attributes:
        actions: Recorded actions, in call order.
    """

    def __init__(self) -> None:
        self.actions: list[Action] = []

    def run(
        self,
        executable: FileHandle,
        arguments: Sequence[str],
        inputs: Sequence[FileHandle],
        outputs: Sequence[FileHandle],
        mnemonic: str | None = None,
        progress_message: str | None = None,
        params_file: FileHandle | None = None,
    ) -> None:
        self.actions.append(
            RunAction(
                executable=executable,
                arguments=tuple(arguments),
                inputs=tuple(inputs),
                outputs=tuple(outputs),
                mnemonic=mnemonic,
                progress_message=progress_message,
                params_file=params_file,
            )
        )

    def run_shell(
        self,
        command: str,
        arguments: Sequence[str],
        outputs: Sequence[FileHandle],
    ) -> None:
        self.actions.append(
            RunShellAction(command=command, arguments=tuple(arguments), outputs=tuple(outputs))
        )

    def expand_template(
        self,
        template: str,
        substitutions: Mapping[str, str],
        output: FileHandle,
        is_executable: bool = False,
    ) -> None:
        self.actions.append(
            ExpandTemplateAction(
                template=template,
                substitutions=dict(substitutions),
                output=output,
                is_executable=is_executable,
            )
        )

    def write(self, output: FileHandle, content: str, is_executable: bool = False) -> None:
        self.actions.append(WriteAction(output=output, content=content, is_executable=is_executable))

    def outputs(self) -> list[FileHandle]:
        """Every output registered so far."""
        produced: list[FileHandle] = []
        for action in self.actions:
            if isinstance(action, (RunAction, RunShellAction)):
                produced.extend(action.outputs)
            else:
                produced.append(action.output)
        return produced


def submit_action(action: Action, runner: ActionRunner) -> None:
    """Register one recorded action with ``runner``."""
    if isinstance(action, RunAction):
        runner.run(
            action.executable,
            action.arguments,
            action.inputs,
            action.outputs,
            mnemonic=action.mnemonic,
            progress_message=action.progress_message,
            params_file=action.params_file,
        )
    elif isinstance(action, RunShellAction):
        runner.run_shell(action.command, action.arguments, action.outputs)
    elif isinstance(action, ExpandTemplateAction):
        runner.expand_template(
            action.template,
            action.substitutions,
            action.output,
            is_executable=action.is_executable,
        )
    elif isinstance(action, WriteAction):
        runner.write(action.output, action.content, is_executable=action.is_executable)
    else:
        raise TypeError(f"Unsupported action type: {type(action).__name__}")


def submit_plan(plan: GenerationPlan, runner: ActionRunner) -> None:
    """Register every action of ``plan`` with ``runner``, in order."""
    for action in plan.actions:
        submit_action(action, runner)
    logger.debug(
        "Submitted %d actions for %s (%s)",
        len(plan.actions),
        plan.target.label,
        plan.plugin_name,
    )
