"""Mensaje del formulario de contacto."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class ContactMessage(BaseModel):
    """Consulta enviada desde el sitio público."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=120, description="Nombre completo")
    email: str = Field(
        ...,
        max_length=254,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        description="E-mail de respuesta",
    )
    phone: str = Field(..., min_length=8, max_length=30, description="Teléfono")
    message: str = Field(..., min_length=1, max_length=2000, description="Mensaje")
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="Timestamp de envío ISO",
    )

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return self.model_dump()
