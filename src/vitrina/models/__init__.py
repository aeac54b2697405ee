"""
Modelos de datos del sistema.

- Listing / ListingImage: snapshot de lectura del store remoto
- ListingDraft / ListingUpdate: escritura desde el panel admin
- FilterCriteria / CatalogBounds: estado de los filtros del catálogo
"""

from vitrina.models.values import Exact, Override, NumericOrDisplay, numeric_or_display
from vitrina.models.image import ListingImage
from vitrina.models.listing import (
    Listing,
    ListingDraft,
    ListingUpdate,
    NUMERIC_FIELDS,
)
from vitrina.models.criteria import (
    Bucket,
    CatalogBounds,
    FilterCriteria,
    parse_bucket,
)
from vitrina.models.contact import ContactMessage

__all__ = [
    # Valores
    "Exact",
    "Override",
    "NumericOrDisplay",
    "numeric_or_display",
    # Inmuebles
    "Listing",
    "ListingDraft",
    "ListingUpdate",
    "ListingImage",
    "NUMERIC_FIELDS",
    # Filtros
    "Bucket",
    "CatalogBounds",
    "FilterCriteria",
    "parse_bucket",
    # Contacto
    "ContactMessage",
]
