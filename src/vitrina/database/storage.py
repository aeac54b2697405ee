"""
Storage de fotos de inmuebles.

Los objetos se guardan como `<property_id>/<uuid>.<ext>` en el bucket
configurado y se exponen por URL pública.
"""

import mimetypes
import uuid
from pathlib import PurePosixPath
from typing import Optional

import structlog

from vitrina.config import get_settings
from vitrina.database.supabase_client import get_supabase_client, SupabaseClient
from vitrina.errors import StorageUploadError

logger = structlog.get_logger()


class ImageStorage:
    """Sube y borra fotos en Supabase Storage."""

    def __init__(
        self,
        client: Optional[SupabaseClient] = None,
        bucket: Optional[str] = None,
    ):
        self._client = client or get_supabase_client()
        self.bucket = bucket or get_settings().storage_bucket

    def upload(
        self,
        property_id: str,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Sube una foto y devuelve su URL pública.

        Raises:
            StorageUploadError: si Storage rechaza el archivo
        """
        extension = PurePosixPath(filename).suffix.lower() or ".jpg"
        path = f"{property_id}/{uuid.uuid4().hex}{extension}"
        content_type = content_type or mimetypes.guess_type(filename)[0] or "image/jpeg"

        bucket = self._client.storage_bucket(self.bucket)
        try:
            bucket.upload(path, data, {"content-type": content_type})
        except Exception as e:
            logger.error(
                "Error subiendo imagen",
                property_id=property_id,
                filename=filename,
                error=str(e),
            )
            raise StorageUploadError(f"No se pudo subir {filename}: {e}") from e

        url = bucket.get_public_url(path)
        logger.info("Imagen subida", property_id=property_id, path=path)
        return url

    def remove(self, urls: list[str]) -> None:
        """Borra los objetos de las URLs dadas (ignora URLs de otro bucket)."""
        paths = [path for path in map(self.path_from_url, urls) if path]
        if not paths:
            return
        self._client.storage_bucket(self.bucket).remove(paths)
        logger.info("Objetos eliminados de Storage", count=len(paths))

    def path_from_url(self, url: str) -> Optional[str]:
        """Extrae el path del objeto de una URL pública del bucket."""
        marker = f"/object/public/{self.bucket}/"
        if marker not in url:
            return None
        path = url.split(marker, 1)[1].split("?", 1)[0]
        return path or None
