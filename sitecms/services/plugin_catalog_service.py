"""
Plugin Catalog Service

Keeps the `plugins` table in step with the registered content plugins so
that enablement rows have a catalog entry to point at. Run once at startup
and on demand from the admin sync route.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sitecms.config import settings
from sitecms.database import utcnow
from sitecms.models.plugin import Plugin

if TYPE_CHECKING:
    from sitecms.plugins.registry import PluginRegistry
    from sitecms.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PluginSyncResult:
    added: int
    updated: int
    total: int


async def sync_plugins(registry: PluginRegistry, uow: UnitOfWork, actor: str | None = None) -> PluginSyncResult:
    """
    Upsert one catalog row per registered plugin, matched by system name.

    Missing rows are inserted active; existing rows get their name and
    description refreshed when they drift from the plugin's metadata. Rows
    for plugins that are no longer registered are left alone, and so are
    soft-deleted rows: a deleted catalog entry stays deleted.
    """
    actor = actor or settings.system_actor
    repo = uow.repository(Plugin)

    existing = {plugin.system_name: plugin for plugin in await repo.get_all(include_deleted=True)}

    added = updated = 0
    for content_plugin in registry:
        meta = content_plugin.meta
        row = existing.get(meta.system_name)

        if row is None:
            await repo.add(
                Plugin(
                    name=meta.display_name,
                    system_name=meta.system_name,
                    description=meta.description,
                    is_active=True,
                    created_by=actor,
                )
            )
            added += 1
            continue

        if row.is_deleted:
            logger.warning("Catalog row for plugin %s is soft-deleted; not restoring it", meta.system_name)
            continue

        if row.name != meta.display_name or row.description != meta.description:
            row.name = meta.display_name
            row.description = meta.description
            row.updated_at = utcnow()
            row.updated_by = actor
            updated += 1

    await uow.save_changes()

    result = PluginSyncResult(added=added, updated=updated, total=len(registry))
    logger.info("Plugin catalog synced: added=%d updated=%d total=%d", result.added, result.updated, result.total)
    return result


async def list_catalog_plugins(uow: UnitOfWork) -> Sequence[Plugin]:
    """Every live catalog row, in id order."""
    return await uow.repository(Plugin).get_all()
