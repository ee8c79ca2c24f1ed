"""Compiler configuration resolver for swiftbuild.

This module handles loading swiftbuild.yaml:
- Explicit path override
- Environment variable override (SWIFTBUILD_CONFIG)
- Discovery in standard locations
- Caching of parsed configuration
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import ClassVar

from swiftbuild_core.errors import ConfigNotFoundError
from swiftbuild_core.schemas.compiler_config import CompilerConfig

logger = logging.getLogger(__name__)

# Environment variable pointing at a swiftbuild.yaml file
CONFIG_ENV_VAR = "SWIFTBUILD_CONFIG"

# Standard configuration file name
CONFIG_FILE_NAME = "swiftbuild.yaml"

# Standard locations to search for swiftbuild.yaml
CONFIG_SEARCH_PATHS = (
    Path("."),
    Path(".swiftbuild"),
    Path.home() / ".swiftbuild",
)


class ConfigResolver:
    """Resolves compiler configuration from files and environment.

    Attributes:
        search_paths: Ordered directories searched for swiftbuild.yaml.

    Example:
        >>> config = ConfigResolver().load()
        >>> spec = config.get_compiler("swift")

        >>> # Load from explicit path
        >>> config = ConfigResolver().load(path=Path("tools/swiftbuild.yaml"))
    """

    _cache: ClassVar[dict[str, CompilerConfig]] = {}

    def __init__(self, search_paths: tuple[Path, ...] | None = None) -> None:
        self.search_paths = search_paths or CONFIG_SEARCH_PATHS

    def _find_config_file(self) -> Path:
        """Find swiftbuild.yaml.

        Order:
        1. $SWIFTBUILD_CONFIG
        2. {search_path}/swiftbuild.yaml for each search path

        Raises:
            ConfigNotFoundError: If no file is found.
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            candidate = Path(env_path)
            if candidate.exists():
                logger.debug("Using %s from %s", candidate, CONFIG_ENV_VAR)
                return candidate
            raise ConfigNotFoundError([str(candidate)])

        for base_path in self.search_paths:
            candidate = base_path / CONFIG_FILE_NAME
            if candidate.exists():
                logger.debug("Found %s at %s", CONFIG_FILE_NAME, candidate)
                return candidate

        raise ConfigNotFoundError([str(p / CONFIG_FILE_NAME) for p in self.search_paths])

    def load(self, path: Path | None = None, use_cache: bool = True) -> CompilerConfig:
        """Load compiler configuration.

        Args:
            path: Explicit swiftbuild.yaml path. Discovered when None.
            use_cache: Reuse a previously parsed file.

        Returns:
            Validated CompilerConfig.

        Raises:
            ConfigNotFoundError: If discovery finds nothing.
            FileNotFoundError: If an explicit path does not exist.
            pydantic.ValidationError: If the file is invalid.
        """
        resolved_path = path.resolve() if path is not None else self._find_config_file().resolve()
        cache_key = str(resolved_path)

        if use_cache and cache_key in self._cache:
            logger.debug("Using cached compiler config from %s", resolved_path)
            return self._cache[cache_key]

        logger.info("Loading compiler configuration from %s", resolved_path)
        config = CompilerConfig.from_yaml(resolved_path)
        self._cache[cache_key] = config
        return config

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the configuration cache."""
        cls._cache.clear()
        logger.debug("Compiler config cache cleared")
