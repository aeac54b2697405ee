"""
Formato de valores en reales para el sitio.

Ejemplos:
    format_currency(500000)        -> "R$ 500 mil"
    format_currency(1200000)       -> "R$ 1,2 milhão" / "R$ 1,2 milhões"
    format_currency_short(850000)  -> "R$ 850k"
    format_currency_full(850000)   -> "R$ 850.000"
"""

from decimal import ROUND_HALF_UP, Decimal


def format_number_pt_br(value: float) -> str:
    """Número con separador de miles "." y decimales "," (hasta 3)."""
    rounded = round(value, 3)
    if rounded == int(rounded):
        text = f"{int(rounded):,}"
    else:
        text = f"{rounded:,.3f}".rstrip("0")
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def _compact(value: float) -> str:
    if value % 1 == 0:
        return f"{value:.0f}"
    # Los empates (1,25) redondean hacia arriba
    rounded = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return str(rounded).replace(".", ",")


def format_currency(value: float) -> str:
    """Formato de marketing: "R$ 500 mil", "R$ 2 milhões"."""
    if value == 0:
        return "R$ 0"

    abs_value = abs(value)

    if abs_value >= 1_000_000:
        millions = value / 1_000_000
        unit = "milhão" if millions in (1, -1) else "milhões"
        return f"R$ {_compact(millions)} {unit}"

    if abs_value >= 1000:
        return f"R$ {_compact(value / 1000)} mil"

    return f"R$ {format_number_pt_br(value)}"


def format_currency_short(value: float) -> str:
    """Versión corta para las etiquetas del slider: "R$ 1,5M", "R$ 850k"."""
    if value == 0:
        return "R$ 0"

    abs_value = abs(value)

    if abs_value >= 1_000_000:
        return f"R$ {_compact(value / 1_000_000)}M"

    if abs_value >= 1000:
        return f"R$ {_compact(value / 1000)}k"

    return f"R$ {value:g}"


def format_currency_full(value: float) -> str:
    """Valor completo sin abreviar: "R$ 1.250.000"."""
    return f"R$ {format_number_pt_br(value)}"
