"""
Valores numéricos con texto alternativo.

Cada campo numérico de un inmueble (precio, quartos, banheiros, vagas,
área) puede venir con un texto de exhibición cargado por la corredora,
por ejemplo "3 ou 4". Ese texto se muestra tal cual y los filtros
numéricos no lo interpretan.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Exact(BaseModel):
    """Valor numérico exacto: participa de filtros y rangos."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["exact"] = "exact"
    value: float = 0.0

    def display(self) -> str:
        if self.value == int(self.value):
            return str(int(self.value))
        return f"{self.value:g}"


class Override(BaseModel):
    """Texto de exhibición: se muestra literal y queda fuera de los filtros."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["override"] = "override"
    text: str

    def display(self) -> str:
        return self.text


NumericOrDisplay = Annotated[Union[Exact, Override], Field(discriminator="kind")]


def _to_float(value: Any) -> float:
    """Convierte a float; None o basura cuentan como 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(str(value).strip())
    except (ValueError, TypeError):
        return 0.0


def numeric_or_display(value: Any, label: Optional[str] = None) -> Union[Exact, Override]:
    """
    Construye el valor de un campo a partir de la columna numérica
    y su columna `<campo>_label`.

    Si hay texto (no vacío) gana el texto.
    """
    if label is not None and str(label).strip():
        return Override(text=str(label).strip())
    return Exact(value=_to_float(value))
