"""
Presentación de inmuebles: formato de moneda y tarjetas JSON.
"""

from vitrina.presentation.formatting import (
    format_currency,
    format_currency_short,
    format_currency_full,
    format_number_pt_br,
)
from vitrina.presentation.cards import (
    admin_listing,
    filter_options,
    image_entry,
    listing_card,
    listing_detail,
    status_label,
    type_label,
)

__all__ = [
    "format_currency",
    "format_currency_short",
    "format_currency_full",
    "format_number_pt_br",
    "admin_listing",
    "filter_options",
    "image_entry",
    "listing_card",
    "listing_detail",
    "status_label",
    "type_label",
]
