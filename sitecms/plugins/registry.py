"""
Plugin Registry

PluginRegistry: the fixed set of content plugins known to the process,
looked up by system name.

A registry is built once at startup from an explicit list and never changes
afterwards, so it can be shared across requests without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sitecms.plugins.base import ContentPlugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """
    Immutable, ordered mapping of system name to content plugin.

    Iteration follows registration order.
    """

    def __init__(self, plugins: Iterable[ContentPlugin] = ()) -> None:
        registered: dict[str, ContentPlugin] = {}
        for plugin in plugins:
            name = plugin.meta.system_name
            if name in registered:
                raise ValueError(f"Duplicate plugin system name: {name}")
            registered[name] = plugin
            logger.info("Plugin registered: %s v%s", name, plugin.meta.version)
        self._plugins = MappingProxyType(registered)

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, system_name: str) -> ContentPlugin | None:
        """Return the plugin with this exact (case-sensitive) system name, or None."""
        return self._plugins.get(system_name)

    def all_plugins(self) -> list[ContentPlugin]:
        """Return all registered plugins in registration order."""
        return list(self._plugins.values())

    def is_registered(self, system_name: str) -> bool:
        return system_name in self._plugins

    def system_names(self) -> list[str]:
        return list(self._plugins.keys())

    def __len__(self) -> int:
        return len(self._plugins)

    def __iter__(self) -> Iterator[ContentPlugin]:
        return iter(self._plugins.values())

    def __contains__(self, system_name: object) -> bool:
        return system_name in self._plugins
