"""
Criterios de filtrado del catálogo y límites dinámicos de los rangos.

Los criterios viven solo en la sesión del visitante; no se persisten.
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from vitrina.config import ALL

# Rango por defecto mientras no hay datos
DEFAULT_MIN_PRICE = 0.0
DEFAULT_MAX_PRICE = 50_000_000.0
DEFAULT_MIN_AREA = 0.0
DEFAULT_MAX_AREA = 1000.0


@dataclass(frozen=True)
class Bucket:
    """Bucket de quartos/vagas: cantidad exacta o "N+" (N o más)."""

    count: int
    open_ended: bool = False

    def accepts(self, value: float) -> bool:
        if self.open_ended:
            return value >= self.count
        return value == self.count


def parse_bucket(value: Optional[str]) -> Optional[Bucket]:
    """
    Interpreta "2" o "4+". El centinela (o vacío) significa sin restricción.

    Raises:
        ValueError: si el texto no es un bucket válido
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == ALL:
        return None
    open_ended = text.endswith("+")
    digits = text[:-1] if open_ended else text
    if not digits.isdigit():
        raise ValueError(f"Bucket inválido: {value!r}")
    return Bucket(count=int(digits), open_ended=open_ended)


@dataclass(frozen=True)
class CatalogBounds:
    """Límites para inicializar los sliders de precio y área."""

    min_price: float = DEFAULT_MIN_PRICE
    max_price: float = DEFAULT_MAX_PRICE
    min_area: float = DEFAULT_MIN_AREA
    max_area: float = DEFAULT_MAX_AREA
    locations: list[str] = field(default_factory=list)

    @property
    def price_range(self) -> tuple[float, float]:
        return (self.min_price, self.max_price)

    @property
    def area_range(self) -> tuple[float, float]:
        return (self.min_area, self.max_area)

    def to_dict(self) -> dict:
        return {
            "min_price": self.min_price,
            "max_price": self.max_price,
            "min_area": self.min_area,
            "max_area": self.max_area,
            "locations": list(self.locations),
        }


class FilterCriteria(BaseModel):
    """
    Filtros elegidos por el visitante.

    Cada campo arranca en "sin restricción": `ALL` para selects y buckets,
    "" para la búsqueda y None para los rangos.
    """

    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    location: str = ALL
    type: str = ALL
    status: str = ALL
    bedrooms: str = ALL
    parking: str = ALL
    price_range: Optional[tuple[float, float]] = None
    area_range: Optional[tuple[float, float]] = None

    @field_validator("location", "type", "status", mode="before")
    @classmethod
    def _blank_is_all(cls, value: Optional[str]) -> str:
        if value is None or not str(value).strip():
            return ALL
        return str(value)

    @field_validator("bedrooms", "parking", mode="before")
    @classmethod
    def _valid_bucket(cls, value: Optional[str]) -> str:
        if value is None or not str(value).strip():
            return ALL
        parse_bucket(value)
        return str(value).strip()

    @field_validator("search_term", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Optional[str]) -> str:
        return "" if value is None else str(value)

    @property
    def bedrooms_bucket(self) -> Optional[Bucket]:
        return parse_bucket(self.bedrooms)

    @property
    def parking_bucket(self) -> Optional[Bucket]:
        return parse_bucket(self.parking)

    @classmethod
    def for_bounds(cls, bounds: CatalogBounds) -> "FilterCriteria":
        """Criterios limpios con los rangos en los límites del catálogo."""
        return cls(price_range=bounds.price_range, area_range=bounds.area_range)

    def reset_ranges(self, bounds: CatalogBounds) -> "FilterCriteria":
        """Reubica los rangos cuando cambian los límites (p. ej. tras un fetch)."""
        return self.model_copy(
            update={"price_range": bounds.price_range, "area_range": bounds.area_range}
        )

    def has_active_filters(self, bounds: CatalogBounds) -> bool:
        """True si algún filtro restringe algo respecto del catálogo completo."""
        return (
            self.search_term != ""
            or self.location != ALL
            or self.type != ALL
            or self.status != ALL
            or self.bedrooms != ALL
            or self.parking != ALL
            or (self.price_range is not None and self.price_range != bounds.price_range)
            or (self.area_range is not None and self.area_range != bounds.area_range)
        )
