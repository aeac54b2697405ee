"""
Catálogo público.

Filtrado en memoria sobre el snapshot de inmuebles y cálculo de
límites para los controles de rango.
"""

from vitrina.catalog.filters import filter_listings, compute_bounds

__all__ = [
    "filter_listings",
    "compute_bounds",
]
