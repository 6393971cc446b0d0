"""
Plugin Loader

Builds the process-wide PluginRegistry from the fixed list of built-in
content plugins and exposes it to request handlers.

There is no discovery step: adding a plugin means adding its class to
BUILTIN_PLUGINS.
"""

from __future__ import annotations

import logging

from fastapi import Request

from sitecms.plugins.base import ContentPlugin
from sitecms.plugins.page_plugin import PageManagementPlugin
from sitecms.plugins.product_plugin import ProductManagementPlugin
from sitecms.plugins.registry import PluginRegistry
from sitecms.plugins.travel_plugin import TravelManagementPlugin

logger = logging.getLogger(__name__)

# ── Built-in plugins, in registration order ──────────────────────────────────
BUILTIN_PLUGINS: tuple[type[ContentPlugin], ...] = (
    PageManagementPlugin,
    ProductManagementPlugin,
    TravelManagementPlugin,
)


def build_plugin_registry(
    plugin_classes: tuple[type[ContentPlugin], ...] = BUILTIN_PLUGINS,
) -> PluginRegistry:
    """Instantiate each plugin class once and return a new immutable registry."""
    registry = PluginRegistry(plugin_class() for plugin_class in plugin_classes)
    logger.info(
        "Plugin initialisation complete: %d plugins loaded (%s)",
        len(registry),
        ", ".join(registry.system_names()),
    )
    return registry


def get_plugin_registry(request: Request) -> PluginRegistry:
    """FastAPI dependency: the registry attached to the application at creation."""
    return request.app.state.plugin_registry
