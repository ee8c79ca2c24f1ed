"""Unit tests for ConfigResolver."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from swiftbuild_core.compiler import CONFIG_ENV_VAR, CONFIG_FILE_NAME, ConfigResolver
from swiftbuild_core.errors import ConfigNotFoundError


@pytest.fixture
def config_file(tmp_path: Path, sample_plugin_spec_dict: dict[str, Any]) -> Path:
    path = tmp_path / CONFIG_FILE_NAME
    path.write_text(yaml.safe_dump({"compilers": {"swift": sample_plugin_spec_dict}}))
    return path


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestConfigResolver:
    """Tests for swiftbuild.yaml discovery and caching."""

    def test_explicit_path(self, config_file: Path) -> None:
        config = ConfigResolver().load(path=config_file)
        assert config.get_compiler("swift").plugin_name == "swift"

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ConfigResolver().load(path=tmp_path / "missing.yaml")

    def test_search_paths(self, config_file: Path, tmp_path: Path) -> None:
        resolver = ConfigResolver(search_paths=(tmp_path / "empty", tmp_path))
        assert "swift" in resolver.load().compilers

    def test_environment_variable(
        self,
        config_file: Path,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        resolver = ConfigResolver(search_paths=(tmp_path / "empty",))
        assert "swift" in resolver.load().compilers

    def test_environment_variable_missing_file(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.yaml"))
        with pytest.raises(ConfigNotFoundError, match="nope.yaml"):
            ConfigResolver(search_paths=(tmp_path,)).load()

    def test_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError) as exc_info:
            ConfigResolver(search_paths=(tmp_path,)).load()
        assert exc_info.value.searched == [str(tmp_path / CONFIG_FILE_NAME)]

    def test_cached(self, config_file: Path) -> None:
        first = ConfigResolver().load(path=config_file)
        config_file.write_text("compilers: {}\n")
        assert ConfigResolver().load(path=config_file) is first

    def test_cache_bypass_and_clear(self, config_file: Path) -> None:
        ConfigResolver().load(path=config_file)
        config_file.write_text("compilers: {}\n")

        assert ConfigResolver().load(path=config_file, use_cache=False).compilers == {}

        ConfigResolver.clear_cache()
        assert ConfigResolver().load(path=config_file).compilers == {}
