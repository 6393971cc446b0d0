"""
Page Management Plugin

Publishes a site's pages with their ordered content blocks and the images
and files attached to each page.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import selectinload

from sitecms.models.media import EntityType
from sitecms.models.page import Page
from sitecms.plugins.base import ContentPlugin, PluginMeta

if TYPE_CHECKING:
    from sitecms.repositories.unit_of_work import UnitOfWork

_META = PluginMeta(
    system_name="PageManagement",
    display_name="Page Management",
    description="Manage website pages with content, images, and files",
    version="1.0.0",
)


class PageManagementPlugin(ContentPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    async def get_content(self, site_id: int, uow: UnitOfWork) -> list[dict[str, Any]]:
        pages = await uow.repository(Page).find(
            Page.site_id == site_id,
            Page.is_published.is_(True),
            options=[selectinload(Page.contents)],
        )

        result = []
        for page in pages:
            attachments = await self._load_attachments(uow, EntityType.PAGE, page.id)
            result.append(
                {
                    "page_id": page.page_id,
                    "title": page.title,
                    "description": page.description,
                    **attachments,
                    # Page.contents is ordered by PageContent.order
                    "contents": [
                        {"content_id": block.content_id, "content": block.content} for block in page.contents
                    ],
                }
            )
        return result
