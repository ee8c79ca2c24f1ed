"""CLI error handling for swiftbuild-cli.

Wraps swiftbuild-core exceptions in user-friendly messages with
sysexits-style exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError
from rich.markup import escape

from swiftbuild_cli.output import error
from swiftbuild_core.errors import ConfigNotFoundError, IOFailureError, SwiftBuildError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Invalid configuration or planner input
EXIT_SYSTEM_ERROR = 2  # Missing files, write failures


class CLIError(click.ClickException):
    """CLI exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting."""
        error(escape(self.format_message()))


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format a pydantic validation error as one line per field.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - compilers.swift.suffixes: Field required"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]
    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")
    return "\n".join(lines)


def handle_yaml_error(err: Exception, file_path: str) -> NoReturn:
    """Raise a CLIError describing a YAML syntax error, with its position."""
    error_msg = str(err)
    if hasattr(err, "problem_mark") and err.problem_mark is not None:
        mark = err.problem_mark
        error_msg = (
            f"YAML syntax error at line {mark.line + 1}, column {mark.column + 1}: "
            f"{err.problem}"  # type: ignore[attr-defined]
        )
    raise CLIError(f"Invalid YAML in {file_path}: {error_msg}")


def handle_validation_error(err: PydanticValidationError, source: str) -> NoReturn:
    """Raise a CLIError listing every invalid field of ``source``."""
    raise CLIError(f"Invalid configuration in {source}:\n{format_pydantic_error(err)}")


def handle_swiftbuild_error(err: SwiftBuildError) -> NoReturn:
    """Raise a CLIError for a core error, choosing the exit code by type."""
    exit_code = EXIT_USER_ERROR
    if isinstance(err, (IOFailureError, ConfigNotFoundError)):
        exit_code = EXIT_SYSTEM_ERROR
    raise CLIError(err.user_message, exit_code=exit_code) from err
