"""
Published Content Routes

GET /api/content/site/{site_id}                       → aggregated JSON of every enabled plugin
GET /api/content/export/{site_id}                     → typed site export
GET /api/content/site/{site_id}/plugin/{system_name}  → JSON of a single plugin

All routes require an authenticated user.
"""

import logging

from fastapi import APIRouter, Depends, Response

from sitecms.auth import CurrentUser, get_current_user
from sitecms.plugins.loader import get_plugin_registry
from sitecms.plugins.manager import PluginManager
from sitecms.plugins.registry import PluginRegistry
from sitecms.repositories.unit_of_work import UnitOfWork, get_unit_of_work
from sitecms.schemas.export import SiteExport
from sitecms.services.export_service import export_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Content"])


def get_plugin_manager(
    registry: PluginRegistry = Depends(get_plugin_registry),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> PluginManager:
    return PluginManager(registry, uow)


@router.get("/site/{site_id}")
async def get_site_content(
    site_id: int,
    manager: PluginManager = Depends(get_plugin_manager),
    current_user: CurrentUser = Depends(get_current_user),
) -> Response:
    site_json = await manager.generate_site_json(site_id)
    return Response(content=site_json, media_type="application/json")


@router.get("/export/{site_id}", response_model=SiteExport)
async def export_site(
    site_id: int,
    uow: UnitOfWork = Depends(get_unit_of_work),
    current_user: CurrentUser = Depends(get_current_user),
) -> SiteExport:
    """Typed export of a site; 404 when the site does not exist."""
    logger.info("Site export requested: site_id=%d by %s", site_id, current_user.username)
    return await export_service.export_site(site_id, uow)


@router.get("/site/{site_id}/plugin/{system_name}")
async def get_plugin_content(
    site_id: int,
    system_name: str,
    manager: PluginManager = Depends(get_plugin_manager),
    current_user: CurrentUser = Depends(get_current_user),
) -> Response:
    plugin_json = await manager.generate_plugin_json(site_id, system_name)
    return Response(content=plugin_json, media_type="application/json")
