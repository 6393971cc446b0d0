from .export import (
    DestinationExport,
    MediaExport,
    PageContentExport,
    PageExport,
    ProductExport,
    SiteExport,
    TourExport,
)

# Define the public API of this module
__all__ = [
    "DestinationExport",
    "MediaExport",
    "PageContentExport",
    "PageExport",
    "ProductExport",
    "SiteExport",
    "TourExport",
]
