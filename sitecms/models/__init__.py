from .media import EntityType, File, Image
from .page import Page, PageContent
from .plugin import Plugin, SitePlugin
from .product import Product
from .site import Site
from .travel import Destination, Tour

__all__ = [
    "Destination",
    "EntityType",
    "File",
    "Image",
    "Page",
    "PageContent",
    "Plugin",
    "Product",
    "Site",
    "SitePlugin",
    "Tour",
]
