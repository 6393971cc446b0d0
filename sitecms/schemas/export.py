"""
Site Export Schemas

Typed document describing everything a site publishes, used by the site
export endpoint and by external tooling that imports sites.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class PageContentExport(BaseModel):
    key: str
    value: str
    content_type: str = "HTML"


class PageExport(BaseModel):
    id: int
    title: str
    slug: str
    is_published: bool
    contents: list[PageContentExport] = Field(default_factory=list)


class ProductExport(BaseModel):
    id: int
    name: str
    description: str = ""
    price: float
    image_url: str | None = None


class TourExport(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: float
    duration: int = 0


class DestinationExport(BaseModel):
    id: int
    name: str
    description: str | None = None
    location: str
    is_published: bool
    tours: list[TourExport] = Field(default_factory=list)


class MediaExport(BaseModel):
    """Image or file attached directly to the site"""

    id: int
    site_id: int
    file_name: str
    file_path: str
    file_url: str
    content_type: str
    file_size: int
    file_type: Literal["Image", "File"]
    uploaded_at: datetime


class SiteExport(BaseModel):
    site_id: int
    name: str
    domain: str
    exported_at: datetime
    pages: list[PageExport] = Field(default_factory=list)
    products: list[ProductExport] = Field(default_factory=list)
    destinations: list[DestinationExport] = Field(default_factory=list)
    media: list[MediaExport] = Field(default_factory=list)
