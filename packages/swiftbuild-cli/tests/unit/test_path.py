"""Unit tests for the path command."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from swiftbuild_cli.commands.path import ARTIFACT_KIND_NAMES
from swiftbuild_cli.main import cli


class TestPathCommand:
    """Tests for swiftbuild path."""

    def test_kind_names_match_planner(self) -> None:
        from swiftbuild_core.planner import ArtifactKind

        assert set(ARTIFACT_KIND_NAMES) == {kind.value for kind in ArtifactKind}

    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (["module", "--module-name", "Lib"], "Lib.swiftmodule"),
            (["static_archive", "--alwayslink"], "libLib.lo"),
            (["static_archive", "--link-name", "core"], "libcore.a"),
            (["executable", "--add-target-name"], "Lib/Lib"),
            (["indexstore_directory", "--add-target-name"], "Lib_Lib.indexstore"),
            (["executable", "--qualifier", "Lib_ios"], "Lib_ios/Lib"),
            (["generated_header", "--module-name", "Lib"], "Lib-Swift.h"),
            (
                ["intermediate_object_file", "--source", "app/My File.swift"],
                "Lib_objs/My__SPACE__File.swift.o",
            ),
        ],
    )
    def test_prints_path(self, cli_runner: CliRunner, args: list[str], expected: str) -> None:
        result = cli_runner.invoke(cli, ["path", *args, "-t", "//app:Lib"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == expected

    def test_invalid_header_extension(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["path", "generated_header", "-t", "//app:Lib", "--header-name", "Foo.hpp"]
        )
        assert result.exit_code == 1
        assert "Foo.hpp" in result.output

    def test_missing_module_name(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["path", "module", "-t", "//app:Lib"])
        assert result.exit_code == 1
        assert "module_name" in result.output

    def test_unknown_kind(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["path", "dylib", "-t", "//app:Lib"])
        assert result.exit_code == 2

    def test_invalid_label(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["path", "executable", "-t", "//app:"])
        assert result.exit_code == 1

    def test_invalid_qualifier(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["path", "executable", "-t", "//app:Lib", "--qualifier", "a/b"]
        )
        assert result.exit_code == 1
        assert "qualifier" in result.output
