"""
Modelo de inmueble.

`Listing` es la vista de lectura (snapshot de una consulta);
`ListingDraft` y `ListingUpdate` validan lo que carga el admin.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vitrina.config import AVAILABLE_STATUS
from vitrina.models.image import ListingImage
from vitrina.models.values import Exact, NumericOrDisplay, numeric_or_display

PropertyType = Literal["apartamento", "casa", "cobertura", "terreno", "comercial"]
PropertyStatus = Literal["disponivel", "vendido", "alugado"]

# Campos numéricos que admiten texto de exhibición en `<campo>_label`
NUMERIC_FIELDS = ("price", "bedrooms", "bathrooms", "parking", "area")


class Listing(BaseModel):
    """
    Inmueble tal como lo devuelve el store remoto.

    Inmutable: cada fetch produce un snapshot nuevo.
    """

    model_config = ConfigDict(frozen=True)

    # Identificación
    id: str = Field(..., description="UUID del inmueble")
    user_id: Optional[str] = Field(None, description="Admin que lo cargó")

    # Contenido
    title: str = Field(default="", description="Título del anuncio")
    description: Optional[str] = Field(None, description="Descripción libre")
    type: str = Field(default="", description="apartamento, casa, cobertura, terreno, comercial")
    location: str = Field(default="", description="Barrio / ciudad")
    status: str = Field(default=AVAILABLE_STATUS, description="disponivel, vendido, alugado")
    is_featured: bool = Field(default=False, description="Destacado en la home")

    # Valores numéricos (o texto de exhibición)
    price: NumericOrDisplay = Field(default_factory=Exact)
    bedrooms: NumericOrDisplay = Field(default_factory=Exact)
    bathrooms: NumericOrDisplay = Field(default_factory=Exact)
    parking: NumericOrDisplay = Field(default_factory=Exact)
    area: NumericOrDisplay = Field(default_factory=Exact)

    # Media
    images: list[ListingImage] = Field(default_factory=list)

    # Metadatos
    created_at: Optional[str] = Field(None, description="Timestamp ISO de alta")

    @classmethod
    def from_row(cls, row: dict) -> "Listing":
        """
        Construye un Listing desde una fila de `properties`.

        Acepta la subcolección embebida `property_images` del select.
        """
        data = {
            key: row.get(key)
            for key in ("id", "user_id", "title", "description", "type", "location", "created_at")
            if row.get(key) is not None
        }
        data["id"] = str(row.get("id", ""))
        if row.get("status"):
            data["status"] = row["status"]
        data["is_featured"] = bool(row.get("is_featured"))

        for field in NUMERIC_FIELDS:
            data[field] = numeric_or_display(row.get(field), row.get(f"{field}_label"))

        images = row.get("property_images") or []
        data["images"] = [ListingImage(**img) for img in images]
        return cls(**data)

    def sorted_images(self) -> list[ListingImage]:
        """Imágenes ordenadas por `display_order` (nulo = 0)."""
        return sorted(self.images, key=lambda img: img.position)

    @property
    def primary_image_url(self) -> Optional[str]:
        """URL de la portada: la marcada primaria o, si no hay, la primera."""
        for img in self.images:
            if img.is_primary:
                return img.image_url
        ordered = self.sorted_images()
        return ordered[0].image_url if ordered else None


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ListingDraft(BaseModel):
    """Alta de un inmueble desde el panel admin."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=3, description="Título (mínimo 3 caracteres)")
    description: Optional[str] = None
    type: PropertyType
    location: str = Field(..., min_length=3, description="Localización obligatoria")
    status: PropertyStatus = AVAILABLE_STATUS
    is_featured: bool = False

    price: float = Field(..., gt=0, description="Precio positivo")
    bedrooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    parking: int = Field(0, ge=0)
    area: float = Field(..., gt=0, description="Área positiva")

    # Textos de exhibición opcionales
    price_label: Optional[str] = None
    bedrooms_label: Optional[str] = None
    bathrooms_label: Optional[str] = None
    parking_label: Optional[str] = None
    area_label: Optional[str] = None

    @field_validator(
        "description",
        "price_label",
        "bedrooms_label",
        "bathrooms_label",
        "parking_label",
        "area_label",
    )
    @classmethod
    def _strip_optional(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)

    def to_db_dict(self, user_id: Optional[str] = None) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        data = self.model_dump()
        data["user_id"] = user_id
        data["created_at"] = datetime.now(timezone.utc).isoformat()
        return data


class ListingUpdate(BaseModel):
    """Edición parcial: solo se escriben los campos enviados."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=3)
    description: Optional[str] = None
    type: Optional[PropertyType] = None
    location: Optional[str] = Field(None, min_length=3)
    status: Optional[PropertyStatus] = None
    is_featured: Optional[bool] = None

    price: Optional[float] = Field(None, gt=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    parking: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, gt=0)

    price_label: Optional[str] = None
    bedrooms_label: Optional[str] = None
    bathrooms_label: Optional[str] = None
    parking_label: Optional[str] = None
    area_label: Optional[str] = None

    @field_validator(
        "description",
        "price_label",
        "bedrooms_label",
        "bathrooms_label",
        "parking_label",
        "area_label",
    )
    @classmethod
    def _strip_optional(cls, value: Optional[str]) -> Optional[str]:
        # "" borra el texto de exhibición
        return _blank_to_none(value)

    def to_db_dict(self) -> dict:
        """Solo los campos presentes en el request."""
        return self.model_dump(exclude_unset=True)
