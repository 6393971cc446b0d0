"""
Export Service

Builds the typed SiteExport document for a single site: its published
pages, its products, its published destinations with their tours, and the
media attached to the site itself.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import selectinload

from sitecms.database import utcnow
from sitecms.exceptions import SiteNotFoundError
from sitecms.models.media import EntityType, File, Image
from sitecms.models.page import Page
from sitecms.models.product import Product
from sitecms.models.site import Site
from sitecms.models.travel import Destination
from sitecms.schemas.export import (
    DestinationExport,
    MediaExport,
    PageContentExport,
    PageExport,
    ProductExport,
    SiteExport,
    TourExport,
)

if TYPE_CHECKING:
    from sitecms.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_CONTENT_TYPE = "image/*"
DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"


class SiteExportService:
    """Service for exporting a site as a typed document"""

    @staticmethod
    async def export_site(site_id: int, uow: UnitOfWork) -> SiteExport:
        """
        Export a site.

        Args:
            site_id: Site primary key
            uow: Unit of work for the current request

        Returns:
            SiteExport document

        Raises:
            SiteNotFoundError: the site does not exist or is soft-deleted
        """
        site = await uow.repository(Site).get_by_id(site_id)
        if site is None:
            raise SiteNotFoundError(site_id)

        export = SiteExport(
            site_id=site.id,
            name=site.name,
            domain=site.domain,
            exported_at=utcnow(),
            pages=await SiteExportService._export_pages(site_id, uow),
            products=await SiteExportService._export_products(site_id, uow),
            destinations=await SiteExportService._export_destinations(site_id, uow),
            media=await SiteExportService._export_media(site_id, uow),
        )

        logger.info(
            "Site %d exported: %d pages, %d products, %d destinations, %d media",
            site_id,
            len(export.pages),
            len(export.products),
            len(export.destinations),
            len(export.media),
        )
        return export

    @staticmethod
    async def _export_pages(site_id: int, uow: UnitOfWork) -> list[PageExport]:
        pages = await uow.repository(Page).find(
            Page.site_id == site_id,
            Page.is_published.is_(True),
            options=[selectinload(Page.contents)],
        )
        return [
            PageExport(
                id=page.id,
                title=page.title,
                slug=page.page_id,
                is_published=page.is_published,
                contents=[
                    PageContentExport(key=block.content_id, value=block.content, content_type="HTML")
                    for block in page.contents
                ],
            )
            for page in pages
        ]

    @staticmethod
    async def _export_products(site_id: int, uow: UnitOfWork) -> list[ProductExport]:
        # Unpublished products are exported too, unlike pages and destinations
        products = await uow.repository(Product).find(Product.site_id == site_id)
        return [
            ProductExport(
                id=product.id,
                name=product.name,
                description=product.description or "",
                price=float(product.price),
                image_url=None,
            )
            for product in products
        ]

    @staticmethod
    async def _export_destinations(site_id: int, uow: UnitOfWork) -> list[DestinationExport]:
        destinations = await uow.repository(Destination).find(
            Destination.site_id == site_id,
            Destination.is_published.is_(True),
            options=[selectinload(Destination.tours)],
        )
        return [
            DestinationExport(
                id=destination.id,
                name=destination.name,
                description=destination.description,
                location=destination.destination_id,
                is_published=destination.is_published,
                # every live tour, published or not
                tours=[
                    TourExport(
                        id=tour.id,
                        name=tour.name,
                        description=tour.description,
                        price=float(tour.price),
                        duration=0,
                    )
                    for tour in destination.tours
                ],
            )
            for destination in destinations
        ]

    @staticmethod
    async def _export_media(site_id: int, uow: UnitOfWork) -> list[MediaExport]:
        images = await uow.repository(Image).find(
            Image.entity_type == EntityType.SITE.value,
            Image.entity_id == site_id,
        )
        files = await uow.repository(File).find(
            File.entity_type == EntityType.SITE.value,
            File.entity_id == site_id,
        )

        media = [
            MediaExport(
                id=image.id,
                site_id=site_id,
                file_name=image.title or image.image_id,
                file_path=image.location,
                file_url=image.location,
                content_type=image.mime_type or DEFAULT_IMAGE_CONTENT_TYPE,
                file_size=image.file_size or 0,
                file_type="Image",
                uploaded_at=image.created_at,
            )
            for image in images
        ]
        media.extend(
            MediaExport(
                id=file.id,
                site_id=site_id,
                file_name=file.title or file.file_id,
                file_path=file.location,
                file_url=file.location,
                content_type=file.mime_type or DEFAULT_FILE_CONTENT_TYPE,
                file_size=file.file_size or 0,
                file_type="File",
                uploaded_at=file.created_at,
            )
            for file in files
        )
        return media


# Singleton instance
export_service = SiteExportService()
