"""Plugin option resolution for swiftbuild.

Overlays caller-supplied options on a plugin's defaults and drops every key
the plugin does not allow. Dropping is silent on purpose: one option set is
routinely shared between plugins with different capabilities (e.g.
protoc-gen-swift and protoc-gen-grpc-swift), so an unknown key is not a
mistake.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from swiftbuild_core.compiler.models import ResolvedOptions
from swiftbuild_core.schemas.plugin_spec import PluginSpec

logger = logging.getLogger(__name__)


class PluginConfigResolver:
    """Resolves the option set passed to one plugin.

    Attributes:
        plugin_spec: The plugin whose defaults and allow-list apply.

    Example:
        >>> resolver = PluginConfigResolver(spec)
        >>> resolver.resolve({"Visibility": "Internal", "Unknown": "x"}).options
        {'Visibility': 'Internal'}
    """

    def __init__(self, plugin_spec: PluginSpec) -> None:
        self.plugin_spec = plugin_spec
        self._allowed = plugin_spec.plugin_option_allowlist

    def _overlay(self, options: dict[str, str], source: Mapping[str, str], origin: str) -> None:
        for key, value in source.items():
            if key not in self._allowed:
                logger.debug(
                    "Dropping %s option %s for plugin %s (not allow-listed)",
                    origin,
                    key,
                    self.plugin_spec.plugin_name,
                )
                continue
            options[key] = value

    def resolve(self, caller_options: Mapping[str, str] | None = None) -> ResolvedOptions:
        """Overlay ``caller_options`` on the plugin defaults.

        Args:
            caller_options: Options supplied by the requesting target. These
                win over defaults.

        Returns:
            ResolvedOptions containing only allow-listed keys.
        """
        options: dict[str, str] = {}
        self._overlay(options, self.plugin_spec.plugin_options, "default")
        self._overlay(options, caller_options or {}, "caller")
        return ResolvedOptions(options=options)


def resolve_plugin_options(
    plugin_spec: PluginSpec,
    caller_options: Mapping[str, str] | None = None,
) -> ResolvedOptions:
    """Resolve the option set for ``plugin_spec``. See PluginConfigResolver."""
    return PluginConfigResolver(plugin_spec).resolve(caller_options)
