"""Unit tests for CLI error handling."""

from __future__ import annotations

import pytest
import yaml
from pydantic import BaseModel, ValidationError

from swiftbuild_cli.errors import (
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    CLIError,
    format_pydantic_error,
    handle_swiftbuild_error,
    handle_validation_error,
    handle_yaml_error,
)
from swiftbuild_core.errors import (
    ConfigNotFoundError,
    InvalidConfigurationError,
    IOFailureError,
)


class _Sample(BaseModel):
    name: str
    count: int


def _validation_error() -> ValidationError:
    try:
        _Sample.model_validate({"count": "many"})
    except ValidationError as e:
        return e
    raise AssertionError("validation unexpectedly succeeded")


class TestCLIError:
    """Tests for CLIError."""

    def test_default_exit_code(self) -> None:
        assert CLIError("bad").exit_code == EXIT_USER_ERROR

    def test_custom_exit_code(self) -> None:
        assert CLIError("bad", exit_code=EXIT_SYSTEM_ERROR).exit_code == 2

    def test_show_tolerates_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        CLIError("[unclosed tag [/bold]").show()
        assert "unclosed tag" in capsys.readouterr().out


class TestFormatPydanticError:
    """Tests for format_pydantic_error."""

    def test_lists_each_field(self) -> None:
        message = format_pydantic_error(_validation_error())
        assert message.startswith("Validation failed:")
        assert "  - name:" in message
        assert "  - count:" in message


class TestHandlers:
    """Tests for the raise-only handlers."""

    def test_handle_validation_error(self) -> None:
        with pytest.raises(CLIError, match="Invalid configuration in swiftbuild.yaml"):
            handle_validation_error(_validation_error(), "swiftbuild.yaml")

    def test_handle_yaml_error_position(self) -> None:
        try:
            yaml.safe_load("a: [b\n")
        except yaml.YAMLError as e:
            with pytest.raises(CLIError, match="line") as exc_info:
                handle_yaml_error(e, "swiftbuild.yaml")
            assert exc_info.value.exit_code == EXIT_USER_ERROR
        else:
            pytest.fail("YAML unexpectedly parsed")

    def test_handle_plain_error(self) -> None:
        with pytest.raises(CLIError, match="Invalid YAML in x.yaml: boom"):
            handle_yaml_error(ValueError("boom"), "x.yaml")

    @pytest.mark.parametrize(
        ("error", "exit_code"),
        [
            (InvalidConfigurationError("bad"), EXIT_USER_ERROR),
            (IOFailureError("gen/a.swift"), EXIT_SYSTEM_ERROR),
            (ConfigNotFoundError(["swiftbuild.yaml"]), EXIT_SYSTEM_ERROR),
        ],
    )
    def test_handle_swiftbuild_error(self, error: Exception, exit_code: int) -> None:
        with pytest.raises(CLIError) as exc_info:
            handle_swiftbuild_error(error)  # type: ignore[arg-type]
        assert exc_info.value.exit_code == exit_code
        assert exc_info.value.message == str(error)
