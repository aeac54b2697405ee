"""
Servicio del catálogo público.

Trae el snapshot de inmuebles del store y aplica el motor de filtrado.
Cada llamada hace su propio fetch: no hay estado compartido entre
requests, así un resultado viejo nunca pisa uno nuevo.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from pydantic import ValidationError

from vitrina.catalog import compute_bounds, filter_listings
from vitrina.database import PropertyRepository
from vitrina.errors import ListingNotFoundError
from vitrina.models import CatalogBounds, FilterCriteria, Listing

logger = structlog.get_logger()


@dataclass
class CatalogPage:
    """Resultado de aplicar filtros sobre un snapshot."""

    listings: list[Listing]
    total: int
    bounds: CatalogBounds
    criteria: FilterCriteria


@dataclass
class CatalogSnapshot:
    """Inmuebles de un fetch y sus límites dinámicos."""

    listings: list[Listing]
    bounds: CatalogBounds

    def apply(self, criteria: Optional[FilterCriteria] = None) -> CatalogPage:
        """Filtra el snapshot; sin criterios usa los límites completos."""
        criteria = criteria or FilterCriteria.for_bounds(self.bounds)
        return CatalogPage(
            listings=filter_listings(self.listings, criteria),
            total=len(self.listings),
            bounds=self.bounds,
            criteria=criteria,
        )


def rows_to_listings(rows: list[dict]) -> list[Listing]:
    """Convierte filas a Listing; una fila malformada se descarta con warning."""
    listings = []
    for row in rows:
        try:
            listings.append(Listing.from_row(row))
        except ValidationError as e:
            logger.warning(
                "Fila de inmueble inválida",
                property_id=row.get("id"),
                error=str(e),
            )
    return listings


class CatalogService:
    """Consultas del sitio público."""

    def __init__(self, property_repo: Optional[PropertyRepository] = None):
        self.property_repo = property_repo or PropertyRepository()

    def snapshot(self, only_available: bool = True) -> CatalogSnapshot:
        """Fetch de inmuebles (más nuevos primero) y cálculo de límites."""
        listings = rows_to_listings(self.property_repo.list_all(only_available=only_available))
        return CatalogSnapshot(listings=listings, bounds=compute_bounds(listings))

    def browse(
        self,
        criteria: Optional[FilterCriteria] = None,
        only_available: bool = True,
    ) -> CatalogPage:
        """Catálogo filtrado."""
        page = self.snapshot(only_available=only_available).apply(criteria)
        logger.info(
            "Catálogo filtrado",
            total=page.total,
            shown=len(page.listings),
        )
        return page

    def featured(self, limit: int = 3) -> list[Listing]:
        """Destacados para la home."""
        return rows_to_listings(self.property_repo.list_featured(limit=limit))

    def get_listing(self, property_id: str) -> Listing:
        """
        Detalle de un inmueble.

        Raises:
            ListingNotFoundError: si no existe
        """
        row = self.property_repo.get_by_id(property_id)
        if not row:
            raise ListingNotFoundError(property_id)
        return Listing.from_row(row)
