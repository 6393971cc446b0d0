"""
Plugin Administration Routes

Read routes are public; enable/disable/configure/sync require the admin role.

GET  /api/plugins                                       → registered plugins
GET  /api/plugins/database                              → catalog rows
GET  /api/plugins/{system_name}                         → single registered plugin
GET  /api/plugins/site/{site_id}                        → a site's plugin associations
POST /api/plugins/site/{site_id}/enable/{plugin_id}     → enable for a site
POST /api/plugins/site/{site_id}/disable/{plugin_id}    → disable for a site
PUT  /api/plugins/site/{site_id}/plugin/{plugin_id}/config → replace site configuration
POST /api/plugins/sync                                  → sync catalog with the registry
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from sitecms.auth import CurrentUser, require_role
from sitecms.config import settings
from sitecms.exceptions import PluginNotFoundError
from sitecms.plugins.base import ContentPlugin  # noqa: TC001
from sitecms.plugins.loader import get_plugin_registry
from sitecms.plugins.registry import PluginRegistry  # noqa: TC001
from sitecms.repositories.unit_of_work import UnitOfWork, get_unit_of_work
from sitecms.services import plugin_catalog_service, site_plugin_service

router = APIRouter(tags=["Plugins"])
logger = logging.getLogger(__name__)

require_admin = require_role([settings.admin_role])


# ── Pydantic schemas ───────────────────────────────────────────────────────────


class PluginConfigurationRequest(BaseModel):
    configuration: str | None = None


class PluginResponse(BaseModel):
    system_name: str
    display_name: str
    description: str
    version: str


class CatalogPluginResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    system_name: str
    description: str | None = None
    is_active: bool


class SitePluginResponse(BaseModel):
    id: int
    plugin_id: int
    plugin_name: str | None = None
    system_name: str | None = None
    is_enabled: bool
    configuration: str | None = None


class MessageResponse(BaseModel):
    message: str


class SyncResponse(MessageResponse):
    added: int
    updated: int
    total: int


# ── Helpers ────────────────────────────────────────────────────────────────────


def _build_response(plugin: ContentPlugin) -> PluginResponse:
    return PluginResponse(
        system_name=plugin.meta.system_name,
        display_name=plugin.meta.display_name,
        description=plugin.meta.description,
        version=plugin.meta.version,
    )


def _get_or_404(system_name: str, registry: PluginRegistry) -> ContentPlugin:
    plugin = registry.get(system_name)
    if plugin is None:
        raise PluginNotFoundError(system_name)
    return plugin


# ── Catalog routes ─────────────────────────────────────────────────────────────


@router.get("", response_model=list[PluginResponse])
async def list_plugins(
    registry: PluginRegistry = Depends(get_plugin_registry),
) -> list[PluginResponse]:
    """List all registered plugins in registration order."""
    return [_build_response(p) for p in registry.all_plugins()]


@router.get("/database", response_model=list[CatalogPluginResponse])
async def list_database_plugins(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> list[CatalogPluginResponse]:
    """List the plugin catalog as stored in the database."""
    plugins = await plugin_catalog_service.list_catalog_plugins(uow)
    return [CatalogPluginResponse.model_validate(p) for p in plugins]


@router.post("/sync", response_model=SyncResponse)
async def sync_plugins(
    registry: PluginRegistry = Depends(get_plugin_registry),
    uow: UnitOfWork = Depends(get_unit_of_work),
    current_user: CurrentUser = Depends(require_admin),
) -> SyncResponse:
    """Bring the catalog in line with the registered plugins (admin)."""
    result = await plugin_catalog_service.sync_plugins(registry, uow, actor=current_user.username)
    return SyncResponse(
        message="Plugins synchronized successfully",
        added=result.added,
        updated=result.updated,
        total=result.total,
    )


@router.get("/{system_name}", response_model=PluginResponse)
async def get_plugin(
    system_name: str,
    registry: PluginRegistry = Depends(get_plugin_registry),
) -> PluginResponse:
    """Get a single registered plugin by system name (case-sensitive)."""
    return _build_response(_get_or_404(system_name, registry))


# ── Per-site routes ────────────────────────────────────────────────────────────


@router.get("/site/{site_id}", response_model=list[SitePluginResponse])
async def list_site_plugins(
    site_id: int,
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> list[SitePluginResponse]:
    """List a site's plugin associations, enabled or not."""
    rows = await site_plugin_service.list_site_plugins(site_id, uow)
    return [
        SitePluginResponse(
            id=sp.id,
            plugin_id=sp.plugin_id,
            plugin_name=plugin.name if plugin else None,
            system_name=plugin.system_name if plugin else None,
            is_enabled=sp.is_enabled,
            configuration=sp.configuration,
        )
        for sp, plugin in rows
    ]


@router.post("/site/{site_id}/enable/{plugin_id}", response_model=MessageResponse)
async def enable_plugin(
    site_id: int,
    plugin_id: int,
    request: PluginConfigurationRequest | None = None,
    registry: PluginRegistry = Depends(get_plugin_registry),
    uow: UnitOfWork = Depends(get_unit_of_work),
    current_user: CurrentUser = Depends(require_admin),
) -> MessageResponse:
    """Enable a plugin for a site, optionally with a configuration (admin)."""
    await site_plugin_service.enable_plugin(
        site_id,
        plugin_id,
        uow,
        configuration=request.configuration if request else None,
        registry=registry,
        actor=current_user.username,
    )
    return MessageResponse(message="Plugin enabled successfully")


@router.post("/site/{site_id}/disable/{plugin_id}", response_model=MessageResponse)
async def disable_plugin(
    site_id: int,
    plugin_id: int,
    uow: UnitOfWork = Depends(get_unit_of_work),
    current_user: CurrentUser = Depends(require_admin),
) -> MessageResponse:
    """Disable a plugin for a site (admin)."""
    await site_plugin_service.disable_plugin(site_id, plugin_id, uow, actor=current_user.username)
    return MessageResponse(message="Plugin disabled successfully")


@router.put("/site/{site_id}/plugin/{plugin_id}/config", response_model=MessageResponse)
async def update_plugin_configuration(
    site_id: int,
    plugin_id: int,
    request: PluginConfigurationRequest,
    registry: PluginRegistry = Depends(get_plugin_registry),
    uow: UnitOfWork = Depends(get_unit_of_work),
    current_user: CurrentUser = Depends(require_admin),
) -> MessageResponse:
    """Replace a site's configuration for a plugin (admin)."""
    await site_plugin_service.set_plugin_configuration(
        site_id,
        plugin_id,
        request.configuration,
        uow,
        registry=registry,
        actor=current_user.username,
    )
    return MessageResponse(message="Plugin configuration updated successfully")
