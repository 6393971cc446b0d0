"""
Travel Management Plugin

Publishes destinations with their own images/files and the nested list of
tours offered there. Tours carry their own publish flag: an unpublished tour
is dropped even when its destination is published, and tours of an
unpublished destination are never reached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import selectinload

from sitecms.models.media import EntityType
from sitecms.models.travel import Destination
from sitecms.plugins.base import ContentPlugin, PluginMeta

if TYPE_CHECKING:
    from sitecms.repositories.unit_of_work import UnitOfWork

_META = PluginMeta(
    system_name="TravelManagement",
    display_name="Travel Management",
    description="Manage destinations and tours",
    version="1.0.0",
)


class TravelManagementPlugin(ContentPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    async def get_content(self, site_id: int, uow: UnitOfWork) -> list[dict[str, Any]]:
        destinations = await uow.repository(Destination).find(
            Destination.site_id == site_id,
            Destination.is_published.is_(True),
            options=[selectinload(Destination.tours)],
        )

        result = []
        for destination in destinations:
            tours = []
            for tour in destination.tours:
                if not tour.is_published:
                    continue
                tour_attachments = await self._load_attachments(uow, EntityType.TOUR, tour.id)
                tours.append(
                    {
                        "tour_id": tour.tour_id,
                        "name": tour.name,
                        "description": tour.description,
                        "price": float(tour.price),
                        **tour_attachments,
                    }
                )

            attachments = await self._load_attachments(uow, EntityType.DESTINATION, destination.id)
            result.append(
                {
                    "destination_id": destination.destination_id,
                    "destination": destination.name,
                    "description": destination.description,
                    "tours": tours,
                    **attachments,
                }
            )
        return result
