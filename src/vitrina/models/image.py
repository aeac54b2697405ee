"""
Imágenes de un inmueble.

La imagen en la posición 0 es la portada (`is_primary`).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ListingImage(BaseModel):
    """Fila de la tabla `property_images`."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="UUID generado por Supabase")
    property_id: Optional[str] = Field(None, description="FK al inmueble")
    image_url: str = Field(..., description="URL pública en Storage")
    is_primary: bool = Field(default=False, description="Portada del inmueble")
    display_order: Optional[int] = Field(None, description="Posición (0 = portada)")

    @property
    def position(self) -> int:
        """Posición efectiva: un `display_order` nulo cuenta como 0."""
        return self.display_order or 0

    def order_patch(self) -> dict:
        """Campos que se escriben al persistir un reordenamiento."""
        return {
            "display_order": self.display_order,
            "is_primary": self.is_primary,
        }

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return self.model_dump(exclude={"id"})
