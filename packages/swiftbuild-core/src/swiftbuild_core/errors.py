"""Custom exception hierarchy for swiftbuild-core.

This module defines the exception classes raised while planning a build unit:
- SwiftBuildError: Base exception for all swiftbuild errors
- AmbiguousImportPathError: Two proto sources share an import path
- InvalidHeaderExtensionError: Generated header is not a ``.h`` file
- InvalidConfigurationError: Unknown option value or incomplete planner input
- IOFailureError: Reconciliation could not write a declared output
- ConfigNotFoundError: swiftbuild.yaml could not be located

Every error is fatal for the build unit being constructed. None of them touch
state shared with other build units, so sibling units are unaffected.

User-facing messages are safe to display; technical details are logged
through structlog and never included in ``str(error)``.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class SwiftBuildError(Exception):
    """Base exception for swiftbuild.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details. Logged, never shown.

    Example:
        >>> raise SwiftBuildError(
        ...     "Planning failed",
        ...     internal_details="declared 0 outputs for //app:protos",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize SwiftBuildError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "swiftbuild_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class AmbiguousImportPathError(SwiftBuildError):
    """Raised when two different proto files resolve to the same import path.

    Attributes:
        import_path: The shared import path.
        first_path: Path of the file registered first.
        second_path: Path of the conflicting file.

    Example:
        >>> raise AmbiguousImportPathError(
        ...     import_path="a/b.proto",
        ...     first_path="x/a/b.proto",
        ...     second_path="y/a/b.proto",
        ... )
    """

    def __init__(
        self,
        import_path: str,
        first_path: str,
        second_path: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        user_message = (
            f"proto files {second_path} and {first_path} have the same "
            f"import path, {import_path}"
        )
        super().__init__(user_message, internal_details=internal_details)

        self.import_path = import_path
        self.first_path = first_path
        self.second_path = second_path


class InvalidHeaderExtensionError(SwiftBuildError):
    """Raised when a generated header name does not end in ``.h``.

    Attributes:
        header_name: The rejected header name.
    """

    def __init__(self, header_name: str, *, internal_details: str | None = None) -> None:
        user_message = (
            "The generated header for a Swift module must have a '.h' "
            f"extension (got '{header_name}')."
        )
        super().__init__(user_message, internal_details=internal_details)

        self.header_name = header_name


class InvalidConfigurationError(SwiftBuildError):
    """Raised when planner or plugin configuration is unusable.

    Use this exception when:
    - The ``FileNaming`` plugin option has an unknown value
    - A path kind is requested without its required arguments
    - A configuration file parses but cannot be used

    Attributes:
        field_path: Name of the offending option or argument (if known).
        value: The rejected value (if any).
    """

    def __init__(
        self,
        user_message: str,
        *,
        field_path: str | None = None,
        value: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        if field_path:
            user_message = f"{user_message} (field '{field_path}')"
        super().__init__(user_message, internal_details=internal_details)

        self.field_path = field_path
        self.value = value


class IOFailureError(SwiftBuildError):
    """Raised when reconciliation cannot write a declared output.

    Not retried here; retries belong to the host executor.

    Attributes:
        path: The declared path that could not be written.
    """

    def __init__(self, path: str, *, internal_details: str | None = None) -> None:
        super().__init__(
            f"Cannot write declared output: {path}",
            internal_details=internal_details,
        )

        self.path = path


class ConfigNotFoundError(SwiftBuildError):
    """Raised when swiftbuild.yaml cannot be found in any search path.

    Attributes:
        searched: The locations that were checked, in order.
    """

    def __init__(self, searched: list[str], *, internal_details: str | None = None) -> None:
        searched_str = ", ".join(searched) if searched else "none"
        super().__init__(
            f"Compiler configuration not found. Searched: {searched_str}",
            internal_details=internal_details,
        )

        self.searched = searched
