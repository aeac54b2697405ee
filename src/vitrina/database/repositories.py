"""
Repositorios para operaciones CRUD en Supabase.

Cada repositorio maneja una tabla/entidad específica.
"""

from typing import Optional

import structlog
from tenacity import Retrying, stop_after_attempt, wait_exponential

from vitrina.config import AVAILABLE_STATUS, get_settings
from vitrina.database.supabase_client import get_supabase_client, SupabaseClient
from vitrina.models import ContactMessage, ListingImage

logger = structlog.get_logger()


class BaseRepository:
    """Clase base para repositorios."""

    def __init__(self, client: Optional[SupabaseClient] = None):
        self._client = client or get_supabase_client()

    @property
    def client(self) -> SupabaseClient:
        return self._client


class PropertyRepository(BaseRepository):
    """Repositorio de inmuebles (properties)."""

    TABLE = "properties"
    SELECT_WITH_IMAGES = "*, property_images(id, image_url, is_primary, display_order)"

    def list_all(self, only_available: bool = False) -> list[dict]:
        """
        Obtiene todos los inmuebles con sus imágenes, más nuevos primero.

        Args:
            only_available: restringe a status = disponivel (catálogo público)
        """
        query = self.client.table(self.TABLE).select(self.SELECT_WITH_IMAGES)
        if only_available:
            query = query.eq("status", AVAILABLE_STATUS)

        response = query.order("created_at", desc=True).execute()
        logger.debug(
            "Inmuebles obtenidos",
            total=len(response.data),
            only_available=only_available,
        )
        return response.data

    def list_featured(self, limit: int = 3) -> list[dict]:
        """Inmuebles disponibles marcados como destacados."""
        response = (
            self.client.table(self.TABLE)
            .select(self.SELECT_WITH_IMAGES)
            .eq("status", AVAILABLE_STATUS)
            .eq("is_featured", True)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data

    def get_by_id(self, property_id: str) -> Optional[dict]:
        """Obtiene un inmueble por su UUID, con imágenes."""
        response = (
            self.client.table(self.TABLE)
            .select(self.SELECT_WITH_IMAGES)
            .eq("id", property_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def create(self, data: dict) -> dict:
        """
        Inserta un nuevo inmueble.

        Returns:
            El registro insertado con su ID
        """
        response = self.client.table(self.TABLE).insert(data).execute()
        created = response.data[0] if response.data else {}
        logger.info(
            "Inmueble creado",
            property_id=created.get("id"),
            title=data.get("title"),
        )
        return created

    def update(self, property_id: str, data: dict) -> Optional[dict]:
        """Actualiza campos de un inmueble. None si no existe."""
        response = (
            self.client.table(self.TABLE)
            .update(data)
            .eq("id", property_id)
            .execute()
        )
        logger.info("Inmueble actualizado", property_id=property_id, fields=sorted(data))
        return response.data[0] if response.data else None

    def delete(self, property_id: str) -> bool:
        """Elimina un inmueble. True si existía."""
        response = (
            self.client.table(self.TABLE)
            .delete()
            .eq("id", property_id)
            .execute()
        )
        logger.info("Inmueble eliminado", property_id=property_id)
        return len(response.data) > 0


class PropertyImageRepository(BaseRepository):
    """
    Repositorio de imágenes (property_images).

    Las escrituras de orden se reintentan con backoff exponencial;
    agotados los intentos, la excepción original se propaga.
    """

    TABLE = "property_images"

    def __init__(
        self,
        client: Optional[SupabaseClient] = None,
        retry_attempts: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ):
        super().__init__(client)
        settings = get_settings()
        self.retry_attempts = retry_attempts or settings.write_retry_attempts
        self.retry_backoff = (
            settings.write_retry_backoff if retry_backoff is None else retry_backoff
        )

    def list_for_property(self, property_id: str) -> list[dict]:
        """Imágenes de un inmueble ordenadas por display_order."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("property_id", property_id)
            .order("display_order")
            .execute()
        )
        return response.data

    def create_many(self, images: list[ListingImage]) -> list[dict]:
        """Inserta imágenes nuevas y devuelve las filas con sus IDs."""
        if not images:
            return []
        response = (
            self.client.table(self.TABLE)
            .insert([img.to_db_dict() for img in images])
            .execute()
        )
        logger.info(
            "Imágenes registradas",
            property_id=images[0].property_id,
            count=len(images),
        )
        return response.data

    def update_image_order(self, images: list[ListingImage]) -> None:
        """
        Persiste display_order e is_primary, una escritura por imagen.

        No hay transacción: cada fila es atómica por separado.
        """
        for img in images:
            self._write_order(img)
        logger.info("Orden de imágenes guardado", count=len(images))

    def _write_order(self, image: ListingImage) -> None:
        retrying = Retrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_backoff, max=10),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                try:
                    (
                        self.client.table(self.TABLE)
                        .update(image.order_patch())
                        .eq("id", image.id)
                        .execute()
                    )
                except Exception as e:
                    logger.warning(
                        "Error guardando orden de imagen",
                        image_id=image.id,
                        attempt=attempt.retry_state.attempt_number,
                        error=str(e),
                    )
                    raise

    def delete(self, image_id: str) -> bool:
        """Elimina una imagen. True si existía."""
        response = (
            self.client.table(self.TABLE)
            .delete()
            .eq("id", image_id)
            .execute()
        )
        logger.info("Imagen eliminada", image_id=image_id)
        return len(response.data) > 0

    def delete_for_property(self, property_id: str) -> list[dict]:
        """Elimina todas las imágenes de un inmueble y devuelve las filas borradas."""
        response = (
            self.client.table(self.TABLE)
            .delete()
            .eq("property_id", property_id)
            .execute()
        )
        return response.data


class UserRoleRepository(BaseRepository):
    """Repositorio de roles (user_roles)."""

    TABLE = "user_roles"

    def is_admin(self, user_id: str) -> bool:
        """Verifica si el usuario tiene rol admin."""
        response = (
            self.client.table(self.TABLE)
            .select("role")
            .eq("user_id", user_id)
            .eq("role", "admin")
            .limit(1)
            .execute()
        )
        return len(response.data) > 0


class ContactMessageRepository(BaseRepository):
    """Repositorio de mensajes de contacto."""

    TABLE = "contact_messages"

    def create(self, message: ContactMessage) -> dict:
        """Registra un mensaje recibido desde el sitio."""
        response = self.client.table(self.TABLE).insert(message.to_db_dict()).execute()
        logger.info("Mensaje de contacto registrado", email=message.email)
        return response.data[0] if response.data else {}
