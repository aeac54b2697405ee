"""
Serialización de inmuebles para el sitio y el panel admin.

Los textos de exhibición (Override) se muestran literales; los valores
exactos se formatean.
"""

from typing import Optional

from vitrina.config import (
    BEDROOM_BUCKETS,
    PARKING_BUCKETS,
    PROPERTY_STATUSES,
    PROPERTY_TYPES,
)
from vitrina.models import CatalogBounds, Exact, Listing, ListingImage, NUMERIC_FIELDS
from vitrina.presentation.formatting import (
    format_currency,
    format_currency_full,
    format_currency_short,
)


def type_label(value: str) -> str:
    return PROPERTY_TYPES.get(value, value)


def status_label(value: str) -> str:
    return PROPERTY_STATUSES.get(value, value)


def price_text(listing: Listing) -> str:
    """Precio completo ("R$ 850.000") o el texto cargado."""
    if isinstance(listing.price, Exact):
        return format_currency_full(listing.price.value)
    return listing.price.display()


def price_compact(listing: Listing) -> str:
    """Precio abreviado ("R$ 850 mil") o el texto cargado."""
    if isinstance(listing.price, Exact):
        return format_currency(listing.price.value)
    return listing.price.display()


def listing_card(listing: Listing) -> dict:
    """Tarjeta del catálogo."""
    images = [img.image_url for img in listing.sorted_images()]
    return {
        "id": listing.id,
        "title": listing.title,
        "type": listing.type,
        "type_label": type_label(listing.type),
        "location": listing.location,
        "status": listing.status,
        "status_label": status_label(listing.status),
        "is_featured": listing.is_featured,
        "price": price_text(listing),
        "bedrooms": listing.bedrooms.display(),
        "bathrooms": listing.bathrooms.display(),
        "parking": listing.parking.display(),
        "area": listing.area.display(),
        "cover": images[0] if images else None,
        "images": images,
    }


def listing_detail(listing: Listing) -> dict:
    """Página de detalle: la tarjeta más descripción y precio abreviado."""
    detail = listing_card(listing)
    detail.update(
        {
            "description": listing.description,
            "price_compact": price_compact(listing),
            "created_at": listing.created_at,
        }
    )
    return detail


def image_entry(image: ListingImage) -> dict:
    return {
        "id": image.id,
        "image_url": image.image_url,
        "is_primary": image.is_primary,
        "display_order": image.display_order,
    }


def _raw_value(listing: Listing, field: str) -> tuple[Optional[float], Optional[str]]:
    value = getattr(listing, field)
    if isinstance(value, Exact):
        return value.value, None
    return None, value.display()


def admin_listing(listing: Listing) -> dict:
    """
    Vista del panel admin: valores crudos para el formulario de edición
    e imágenes con su orden.
    """
    data = {
        "id": listing.id,
        "title": listing.title,
        "description": listing.description,
        "type": listing.type,
        "location": listing.location,
        "status": listing.status,
        "is_featured": listing.is_featured,
        "created_at": listing.created_at,
        "cover": listing.primary_image_url,
        "images": [image_entry(img) for img in listing.sorted_images()],
    }
    for field in NUMERIC_FIELDS:
        value, label = _raw_value(listing, field)
        data[field] = value
        data[f"{field}_label"] = label
    return data


def filter_options(bounds: CatalogBounds) -> dict:
    """Opciones de los selects del catálogo y etiquetas de los sliders."""
    return {
        "locations": list(bounds.locations),
        "types": [{"value": value, "label": label} for value, label in PROPERTY_TYPES.items()],
        "statuses": [
            {"value": value, "label": label} for value, label in PROPERTY_STATUSES.items()
        ],
        "bedrooms": list(BEDROOM_BUCKETS),
        "parking": list(PARKING_BUCKETS),
        "price_labels": [
            format_currency_short(bounds.min_price),
            format_currency_short(bounds.max_price),
        ],
    }
