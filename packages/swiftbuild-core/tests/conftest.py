"""Shared pytest fixtures for swiftbuild-core tests.

This module provides the plugin specs, targets and proto libraries used
across unit and integration tests.
"""

from __future__ import annotations

import sys
from collections.abc import Generator
from typing import Any

import pytest
import structlog

from swiftbuild_core.compiler.config_resolver import ConfigResolver
from swiftbuild_core.planner.file_system import DeclaredFileSystem
from swiftbuild_core.schemas import (
    FileHandle,
    PluginSpec,
    ProtoInfo,
    SourceDescriptor,
    TargetIdentity,
)


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture(autouse=True)
def clear_config_cache() -> Generator[None, None, None]:
    """Keep parsed swiftbuild.yaml files from leaking between tests."""
    ConfigResolver.clear_cache()
    yield
    ConfigResolver.clear_cache()


@pytest.fixture
def sample_plugin_spec_dict() -> dict[str, Any]:
    """Return a protoc-gen-swift plugin spec as it appears in swiftbuild.yaml."""
    return {
        "protoc": "tools/protoc",
        "plugin": "tools/protoc-gen-swift",
        "plugin_name": "swift",
        "plugin_option_allowlist": ["Visibility", "FileNaming", "ImplementationOnlyImports"],
        "plugin_options": {"Visibility": "Public"},
        "suffixes": [".pb.swift"],
    }


@pytest.fixture
def swift_plugin_spec(sample_plugin_spec_dict: dict[str, Any]) -> PluginSpec:
    """Return the protoc-gen-swift plugin spec."""
    return PluginSpec.model_validate(sample_plugin_spec_dict)


@pytest.fixture
def grpc_plugin_spec() -> PluginSpec:
    """Return a protoc-gen-grpc-swift plugin spec with two suffixes."""
    return PluginSpec(
        protoc=FileHandle(path="tools/protoc"),
        plugin=FileHandle(path="tools/protoc-gen-grpc-swift"),
        plugin_name="grpc-swift",
        plugin_option_allowlist=frozenset({"Visibility", "Client", "Server", "FileNaming"}),
        plugin_options={"Client": "true", "Server": "true"},
        suffixes=(".grpc.swift", ".client.swift"),
    )


@pytest.fixture
def target() -> TargetIdentity:
    """Return the target owning the generated sources."""
    return TargetIdentity(name="protos", package="app")


@pytest.fixture
def file_system() -> DeclaredFileSystem:
    """Return a DeclaredFileSystem rooted at the sample target's package."""
    return DeclaredFileSystem(package="app")


@pytest.fixture
def proto_info() -> ProtoInfo:
    """Return a proto library with two sources and one descriptor set."""
    return ProtoInfo(
        sources=(
            SourceDescriptor.from_path("app/messages.proto", owner="//app:messages_proto"),
            SourceDescriptor.from_path("app/nested/types.proto", owner="//app:messages_proto"),
        ),
        transitive_descriptor_sets=(FileHandle(path="bazel-out/bin/app/messages_proto.bin"),),
    )
