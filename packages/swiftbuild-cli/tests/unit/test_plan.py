"""Unit tests for the plan command."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from click.testing import CliRunner

from swiftbuild_cli.main import cli


class TestPlanCommand:
    """Tests for swiftbuild plan."""

    def test_prints_plan_json(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli, ["plan", "-t", "//app:protos", "-s", "app/a.proto", "-s", "app/b/c.proto"]
        )

        assert result.exit_code == 0, result.output
        plan = json.loads(result.output)
        assert [h["path"] for h in plan["declared_outputs"]] == [
            "bazel-out/bin/app/protos/gen/app/a.pb.swift",
            "bazel-out/bin/app/protos/gen/app/b/c.pb.swift",
        ]
        assert [a["type"] for a in plan["actions"]] == ["write", "run", "expand_template", "run"]

    def test_options_and_descriptor_sets(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli,
            [
                "plan",
                "-t",
                "//app:protos",
                "-s",
                "a/b/c.proto=third_party/a/b/c.proto",
                "-d",
                "deps.bin",
                "-O",
                "FileNaming=PathToUnderscores",
                "-O",
                "Unknown=dropped",
            ],
        )

        assert result.exit_code == 0, result.output
        plan = json.loads(result.output)
        assert plan["declared_outputs"][0]["path"].endswith("/gen/a_b_c.pb.swift")
        arguments = plan["actions"][1]["arguments"]
        assert "--swift_opt=FileNaming=PathToUnderscores" in arguments
        assert "--descriptor_set_in=deps.bin" in arguments
        assert not any("Unknown" in argument for argument in arguments)

    def test_module_mapping(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli,
            [
                "plan",
                "-t",
                "//app:protos",
                "-s",
                "app/a.proto",
                "--module-mapping",
                "Shared=shared/x.proto,shared/y.proto",
            ],
        )

        assert result.exit_code == 0, result.output
        content = json.loads(result.output)["actions"][0]["content"]
        assert 'module_name: "Shared"' in content
        assert 'proto_file_path: "shared/y.proto"' in content

    def test_repeated_module_mapping_merges_paths(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli,
            [
                "plan",
                "-t",
                "//app:protos",
                "-s",
                "app/a.proto",
                "--module-mapping",
                "Shared=shared/x.proto",
                "--module-mapping",
                "Shared=shared/y.proto,shared/x.proto",
            ],
        )

        assert result.exit_code == 0, result.output
        content = json.loads(result.output)["actions"][0]["content"]
        assert content.count('module_name: "Shared"') == 1
        assert content.count('proto_file_path: "shared/x.proto"') == 1
        assert 'proto_file_path: "shared/y.proto"' in content

    def test_malformed_module_mapping(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli,
            ["plan", "-t", "//app:protos", "-s", "app/a.proto", "--module-mapping", "Shared"],
        )

        assert result.exit_code == 2
        assert "MODULE=PATHS" in result.output

    def test_no_sources_plans_placeholder(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli, ["plan", "-t", "//app:protos", "-s", "google/protobuf/any.proto"]
        )

        assert result.exit_code == 0, result.output
        plan = json.loads(result.output)
        assert [h["path"] for h in plan["declared_outputs"]] == [
            "bazel-out/bin/app/protos/gen/Empty.swift"
        ]
        assert [a["type"] for a in plan["actions"]] == ["run_shell"]

    def test_select_compiler_and_output_root(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli,
            ["plan", "-p", "grpc", "-t", "//app:protos", "-s", "svc/x.proto", "--output-root", "out"],
        )

        assert result.exit_code == 0, result.output
        plan = json.loads(result.output)
        assert plan["plugin_name"] == "grpc-swift"
        assert plan["declared_outputs"][0]["path"] == "out/app/protos/gen/svc/x.grpc.swift"

    def test_write_to_file(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli, ["plan", "-t", "//app:protos", "-s", "app/a.proto", "-o", "build/plan.json"]
        )

        assert result.exit_code == 0, result.output
        assert "Planned 1 outputs" in result.output
        plan = json.loads(Path("build/plan.json").read_text())
        assert plan["target"] == {"name": "protos", "package": "app"}

    def test_table_output(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli, ["plan", "-t", "//app:protos", "-s", "app/a.proto", "--table"]
        )

        assert result.exit_code == 0, result.output
        assert "SwiftProtocGen" in result.output
        assert "CopySwiftSources" in result.output

    def test_explicit_config_path(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml(filename="tools/compilers.yaml")
        result = isolated_runner.invoke(
            cli, ["plan", "-c", "tools/compilers.yaml", "-t", "//app:protos", "-s", "a.proto"]
        )
        assert result.exit_code == 0, result.output

    def test_missing_config(self, isolated_runner: CliRunner) -> None:
        result = isolated_runner.invoke(
            cli, ["plan", "-c", "missing.yaml", "-t", "//app:protos", "-s", "a.proto"]
        )
        assert result.exit_code == 2

    def test_unknown_compiler(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli, ["plan", "-p", "kotlin", "-t", "//app:protos", "-s", "a.proto"]
        )
        assert result.exit_code == 1
        assert "kotlin" in result.output

    def test_invalid_yaml(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml("compilers: [unclosed\n")
        result = isolated_runner.invoke(cli, ["plan", "-t", "//app:protos", "-s", "a.proto"])
        assert result.exit_code == 1
        assert "YAML" in result.output

    def test_invalid_config(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml("compilers:\n  swift:\n    plugin_name: swift\n")
        result = isolated_runner.invoke(cli, ["plan", "-t", "//app:protos", "-s", "a.proto"])
        assert result.exit_code == 1
        assert "suffixes" in result.output

    def test_ambiguous_import_path(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli,
            ["plan", "-t", "//app:protos", "-s", "a.proto=x/a.proto", "-s", "a.proto=y/a.proto"],
        )
        assert result.exit_code == 1
        assert "x/a.proto" in result.output

    def test_unknown_file_naming(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli, ["plan", "-t", "//app:protos", "-s", "a.proto", "-O", "FileNaming=Flatten"]
        )
        assert result.exit_code == 1
        assert "Flatten" in result.output

    def test_malformed_option(
        self,
        isolated_runner: CliRunner,
        create_swiftbuild_yaml: Callable[..., Path],
    ) -> None:
        create_swiftbuild_yaml()
        result = isolated_runner.invoke(
            cli, ["plan", "-t", "//app:protos", "-s", "a.proto", "-O", "Visibility"]
        )
        assert result.exit_code == 2

    def test_target_required(self, isolated_runner: CliRunner) -> None:
        result = isolated_runner.invoke(cli, ["plan", "-s", "a.proto"])
        assert result.exit_code == 2
