"""
Site Plugin Service

Per-site plugin enablement: switching a plugin on or off for a site and
storing the plugin's opaque configuration string for that site.

All functions accept an injected UnitOfWork and commit their own changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from sitecms.config import settings
from sitecms.database import utcnow
from sitecms.exceptions import PluginNotFoundError, SiteNotFoundError, SitePluginNotFoundError
from sitecms.models.plugin import Plugin, SitePlugin
from sitecms.models.site import Site

if TYPE_CHECKING:
    from sitecms.plugins.registry import PluginRegistry
    from sitecms.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def _find_site_plugin(site_id: int, plugin_id: int, uow: UnitOfWork) -> SitePlugin | None:
    """The live (non-deleted) association row for a site/plugin pair, if any."""
    return await uow.repository(SitePlugin).find_first(
        SitePlugin.site_id == site_id,
        SitePlugin.plugin_id == plugin_id,
    )


async def _validate(
    plugin: Plugin | None, configuration: str | None, registry: PluginRegistry | None
) -> None:
    if registry is None or plugin is None:
        return
    provider = registry.get(plugin.system_name)
    if provider is not None:
        await provider.validate_configuration(configuration)


def _stamp(site_plugin: SitePlugin, actor: str) -> None:
    site_plugin.updated_at = utcnow()
    site_plugin.updated_by = actor


async def enable_plugin(
    site_id: int,
    plugin_id: int,
    uow: UnitOfWork,
    configuration: str | None = None,
    registry: PluginRegistry | None = None,
    actor: str | None = None,
) -> SitePlugin:
    """
    Enable a catalog plugin for a site, creating the association on first use.

    The stored configuration is always replaced, also when `configuration` is
    None. Calling this repeatedly leaves exactly one row behind.

    Raises:
        SiteNotFoundError: the site does not exist or is soft-deleted.
        PluginNotFoundError: the catalog plugin does not exist or is soft-deleted.
        InvalidPluginConfigurationError: the registered plugin rejected `configuration`.
    """
    actor = actor or settings.system_actor

    site = await uow.repository(Site).get_by_id(site_id)
    if site is None:
        raise SiteNotFoundError(site_id)

    plugin = await uow.repository(Plugin).get_by_id(plugin_id)
    if plugin is None:
        raise PluginNotFoundError(plugin_id)

    await _validate(plugin, configuration, registry)

    site_plugin = await _find_site_plugin(site_id, plugin_id, uow)
    if site_plugin is not None:
        site_plugin.is_enabled = True
        site_plugin.configuration = configuration
        _stamp(site_plugin, actor)
        await uow.repository(SitePlugin).update(site_plugin)
        await uow.save_changes()
        logger.info("Plugin enabled: site_id=%d plugin_id=%d", site_id, plugin_id)
        return site_plugin

    site_plugin = SitePlugin(
        site_id=site_id,
        plugin_id=plugin_id,
        is_enabled=True,
        configuration=configuration,
        created_by=actor,
        updated_by=actor,
    )
    await uow.repository(SitePlugin).add(site_plugin)
    try:
        await uow.save_changes()
    except IntegrityError:
        # Another request created the association first; apply ours on top of it
        await uow.rollback()
        logger.warning(
            "Concurrent enable for site_id=%d plugin_id=%d, retrying as update", site_id, plugin_id
        )
        site_plugin = await _find_site_plugin(site_id, plugin_id, uow)
        if site_plugin is None:
            raise
        site_plugin.is_enabled = True
        site_plugin.configuration = configuration
        _stamp(site_plugin, actor)
        await uow.save_changes()

    logger.info("Plugin enabled: site_id=%d plugin_id=%d", site_id, plugin_id)
    return site_plugin


async def disable_plugin(
    site_id: int,
    plugin_id: int,
    uow: UnitOfWork,
    actor: str | None = None,
) -> SitePlugin:
    """
    Disable a plugin for a site. Never creates an association.

    Raises:
        SitePluginNotFoundError: the plugin was never associated with the site.
    """
    site_plugin = await _find_site_plugin(site_id, plugin_id, uow)
    if site_plugin is None:
        raise SitePluginNotFoundError(site_id, plugin_id)

    site_plugin.is_enabled = False
    _stamp(site_plugin, actor or settings.system_actor)
    await uow.repository(SitePlugin).update(site_plugin)
    await uow.save_changes()

    logger.info("Plugin disabled: site_id=%d plugin_id=%d", site_id, plugin_id)
    return site_plugin


async def set_plugin_configuration(
    site_id: int,
    plugin_id: int,
    configuration: str | None,
    uow: UnitOfWork,
    registry: PluginRegistry | None = None,
    actor: str | None = None,
) -> SitePlugin:
    """
    Replace the configuration of an existing association; `is_enabled` is untouched.

    Raises:
        SitePluginNotFoundError: the plugin was never associated with the site.
        InvalidPluginConfigurationError: the registered plugin rejected `configuration`.
    """
    site_plugin = await _find_site_plugin(site_id, plugin_id, uow)
    if site_plugin is None:
        raise SitePluginNotFoundError(site_id, plugin_id)

    plugin = await uow.repository(Plugin).get_by_id(plugin_id)
    await _validate(plugin, configuration, registry)

    site_plugin.configuration = configuration
    _stamp(site_plugin, actor or settings.system_actor)
    await uow.repository(SitePlugin).update(site_plugin)
    await uow.save_changes()

    logger.info("Plugin configuration updated: site_id=%d plugin_id=%d", site_id, plugin_id)
    return site_plugin


async def list_site_plugins(site_id: int, uow: UnitOfWork) -> list[tuple[SitePlugin, Plugin | None]]:
    """
    Every live association of a site, paired with its catalog plugin.

    The plugin is None when its catalog row has been soft-deleted.
    """
    site_plugins = await uow.repository(SitePlugin).find(SitePlugin.site_id == site_id)
    if not site_plugins:
        return []

    plugins = await uow.repository(Plugin).find(Plugin.id.in_({sp.plugin_id for sp in site_plugins}))
    by_id = {plugin.id: plugin for plugin in plugins}
    return [(sp, by_id.get(sp.plugin_id)) for sp in site_plugins]
