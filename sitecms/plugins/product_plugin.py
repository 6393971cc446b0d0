"""Product Management Plugin: published products with their images and files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sitecms.models.media import EntityType
from sitecms.models.product import Product
from sitecms.plugins.base import ContentPlugin, PluginMeta

if TYPE_CHECKING:
    from sitecms.repositories.unit_of_work import UnitOfWork

_META = PluginMeta(
    system_name="ProductManagement",
    display_name="Product Management",
    description="Manage products with images and files",
    version="1.0.0",
)


class ProductManagementPlugin(ContentPlugin):
    @property
    def meta(self) -> PluginMeta:
        return _META

    async def get_content(self, site_id: int, uow: UnitOfWork) -> list[dict[str, Any]]:
        products = await uow.repository(Product).find(
            Product.site_id == site_id,
            Product.is_published.is_(True),
        )

        result = []
        for product in products:
            attachments = await self._load_attachments(uow, EntityType.PRODUCT, product.id)
            result.append(
                {
                    "product_id": product.product_id,
                    "name": product.name,
                    "description": product.description,
                    "price": float(product.price),
                    **attachments,
                }
            )
        return result
