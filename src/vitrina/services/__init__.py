"""
Servicios de aplicación.

Orquestan repositorios, Storage y los motores de catálogo e imágenes.
"""

from vitrina.services.catalog_service import (
    CatalogPage,
    CatalogService,
    CatalogSnapshot,
    rows_to_listings,
)
from vitrina.services.admin_service import ListingAdminService, UploadedFile
from vitrina.services.contact_service import ContactService

__all__ = [
    "CatalogPage",
    "CatalogService",
    "CatalogSnapshot",
    "rows_to_listings",
    "ListingAdminService",
    "UploadedFile",
    "ContactService",
]
