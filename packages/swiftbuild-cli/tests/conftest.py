"""Shared test fixtures for swiftbuild-cli tests.

Provides CliRunner fixtures and swiftbuild.yaml helpers for testing CLI
commands.
"""

from __future__ import annotations

import sys
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import structlog
from click.testing import CliRunner

if TYPE_CHECKING:
    from collections.abc import Callable

SWIFTBUILD_YAML_FILENAME = "swiftbuild.yaml"

VALID_SWIFTBUILD_YAML = """\
version: "1.0.0"
compilers:
  swift:
    protoc: tools/protoc
    plugin: tools/protoc-gen-swift
    plugin_name: swift
    plugin_option_allowlist: [Visibility, FileNaming]
    plugin_options:
      Visibility: Public
    suffixes: [.pb.swift]
  grpc:
    protoc: tools/protoc
    plugin: tools/protoc-gen-grpc-swift
    plugin_name: grpc-swift
    plugin_option_allowlist: [Visibility, Client, Server]
    suffixes: [.grpc.swift]
"""


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SWIFTBUILD_CONFIG out of the tests."""
    monkeypatch.delenv("SWIFTBUILD_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def create_swiftbuild_yaml(isolated_runner: CliRunner) -> Callable[..., Path]:
    """Factory fixture to create swiftbuild.yaml files with custom content.

    Returns:
        Function that writes the given content (default: a valid config).
    """

    def _create(
        content: str = VALID_SWIFTBUILD_YAML,
        filename: str = SWIFTBUILD_YAML_FILENAME,
    ) -> Path:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _create
