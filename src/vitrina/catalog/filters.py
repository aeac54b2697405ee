"""
Motor de filtrado del catálogo.

Opera en memoria sobre el snapshot ya traído del store:
- filter_listings: AND de todos los criterios activos
- compute_bounds: límites de precio/área y localidades para los controles

Los campos con texto de exhibición (Override) no participan de los
filtros numéricos: el criterio se da por cumplido para ese campo.
"""

from typing import Iterable, Optional, Union

from vitrina.config import ALL
from vitrina.models import Bucket, CatalogBounds, Exact, FilterCriteria, Listing, Override
from vitrina.models.criteria import (
    DEFAULT_MAX_AREA,
    DEFAULT_MAX_PRICE,
    DEFAULT_MIN_AREA,
    DEFAULT_MIN_PRICE,
)

NumericValue = Union[Exact, Override]


def filter_listings(listings: list[Listing], criteria: FilterCriteria) -> list[Listing]:
    """
    Devuelve los listings que cumplen todos los criterios.

    Conserva el orden de entrada (upstream viene por created_at desc).
    Un rango con min > max simplemente no deja pasar nada.
    """
    term = criteria.search_term.strip().lower()
    bedrooms = criteria.bedrooms_bucket
    parking = criteria.parking_bucket

    results = []
    for listing in listings:
        # Búsqueda por ID o título
        if term and term not in listing.id.lower() and term not in listing.title.lower():
            continue

        # Selects exactos
        if criteria.location != ALL and listing.location != criteria.location:
            continue
        if criteria.type != ALL and listing.type != criteria.type:
            continue
        if criteria.status != ALL and listing.status != criteria.status:
            continue

        # Buckets
        if not _matches_bucket(listing.bedrooms, bedrooms):
            continue
        if not _matches_bucket(listing.parking, parking):
            continue

        # Rangos inclusivos
        if not _in_range(listing.price, criteria.price_range):
            continue
        if not _in_range(listing.area, criteria.area_range):
            continue

        results.append(listing)

    return results


def compute_bounds(listings: list[Listing]) -> CatalogBounds:
    """
    Calcula los límites de los sliders y la lista de localidades.

    Sin listings (o sin valores positivos para un campo) se usan los
    rangos por defecto, así los controles son usables antes de los datos.
    """
    if not listings:
        return CatalogBounds()

    min_price, max_price = _span(
        _positive_values(listing.price for listing in listings),
        DEFAULT_MIN_PRICE,
        DEFAULT_MAX_PRICE,
    )
    min_area, max_area = _span(
        _positive_values(listing.area for listing in listings),
        DEFAULT_MIN_AREA,
        DEFAULT_MAX_AREA,
    )
    locations = sorted({listing.location for listing in listings if listing.location.strip()})

    return CatalogBounds(
        min_price=min_price,
        max_price=max_price,
        min_area=min_area,
        max_area=max_area,
        locations=locations,
    )


def _matches_bucket(value: NumericValue, bucket: Optional[Bucket]) -> bool:
    if bucket is None:
        return True
    if isinstance(value, Override):
        return True
    return bucket.accepts(value.value)


def _in_range(value: NumericValue, bounds: Optional[tuple[float, float]]) -> bool:
    if bounds is None:
        return True
    if isinstance(value, Override):
        return True
    low, high = bounds
    return low <= value.value <= high


def _positive_values(values: Iterable[NumericValue]) -> list[float]:
    return [v.value for v in values if isinstance(v, Exact) and v.value > 0]


def _span(values: list[float], floor: float, default_max: float) -> tuple[float, float]:
    if not values:
        return floor, default_max
    return max(floor, min(values)), max(values)
