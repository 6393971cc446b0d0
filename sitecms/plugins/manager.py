"""
Plugin Manager

Resolves which registered content plugins are switched on for a site and
aggregates their payloads into the site's published JSON document.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from sitecms.exceptions import PluginNotFoundError
from sitecms.models.plugin import Plugin, SitePlugin

if TYPE_CHECKING:
    from sitecms.plugins.base import ContentPlugin
    from sitecms.plugins.registry import PluginRegistry
    from sitecms.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class PluginManager:
    """Per-request facade over the process-wide registry and the request's UnitOfWork."""

    def __init__(self, registry: PluginRegistry, uow: UnitOfWork):
        self.registry = registry
        self.uow = uow

    def all_plugins(self) -> list[ContentPlugin]:
        return self.registry.all_plugins()

    def get_plugin(self, system_name: str) -> ContentPlugin | None:
        return self.registry.get(system_name)

    async def get_enabled_plugins_for_site(self, site_id: int) -> list[ContentPlugin]:
        """
        Registered plugins with a live, enabled SitePlugin row for this site.

        The catalog row links the enablement to a system name; enablements whose
        catalog row is gone, or whose system name is no longer registered, are
        skipped. Result order follows the registry.
        """
        site_plugins = await self.uow.repository(SitePlugin).find(
            SitePlugin.site_id == site_id,
            SitePlugin.is_enabled.is_(True),
        )
        if not site_plugins:
            return []

        plugin_ids = {sp.plugin_id for sp in site_plugins}
        catalog = await self.uow.repository(Plugin).find(Plugin.id.in_(plugin_ids))
        enabled_names = set()
        for plugin in catalog:
            if self.registry.is_registered(plugin.system_name):
                enabled_names.add(plugin.system_name)
            else:
                logger.warning("Site %s has unregistered plugin %s enabled; skipping", site_id, plugin.system_name)

        return [plugin for plugin in self.registry if plugin.meta.system_name in enabled_names]

    async def generate_site_json(self, site_id: int) -> str:
        """
        Aggregate every enabled plugin's content into one JSON object.

        Keys are system names; a site with nothing enabled yields "{}". Any
        plugin failure propagates and no partial document is returned.
        """
        plugins = await self.get_enabled_plugins_for_site(site_id)

        document: dict[str, Any] = {}
        for plugin in plugins:
            document[plugin.meta.system_name] = await plugin.get_content(site_id, self.uow)

        logger.debug("Site %s JSON built from %d plugin(s)", site_id, len(document))
        return json.dumps(document, indent=2)

    async def generate_plugin_json(self, site_id: int, system_name: str) -> str:
        """Content of a single plugin for a site, whether or not it is enabled there."""
        plugin = self.get_plugin(system_name)
        if plugin is None:
            raise PluginNotFoundError(system_name)
        return await plugin.generate_json(site_id, self.uow)
