"""
Servicio del panel admin.

Alta, edición y baja de inmuebles; subida, reordenamiento y borrado
de imágenes. Toda operación exige una sesión de administrador.

Flujo de reordenamiento:
1. Leer las imágenes actuales del store (ordenadas)
2. Aplicar la operación del motor de secuenciación (pura)
3. Persistir el orden completo; si falla, ImageOrderWriteError con
   el orden pendiente para reintentar tal cual
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from vitrina.auth import SessionContext
from vitrina.database import ImageStorage, PropertyImageRepository, PropertyRepository
from vitrina.errors import ImageOrderWriteError, ListingNotFoundError, StorageUploadError
from vitrina.images import (
    Direction,
    append_new,
    apply_order,
    index_of,
    move_adjacent,
    promote_to_first,
    remove_image,
    sort_images,
)
from vitrina.models import Listing, ListingDraft, ListingImage, ListingUpdate
from vitrina.services.catalog_service import rows_to_listings

logger = structlog.get_logger()


@dataclass
class UploadedFile:
    """Archivo recibido del formulario admin."""

    filename: str
    data: bytes
    content_type: Optional[str] = None


class ListingAdminService:
    """Operaciones de escritura sobre inmuebles e imágenes."""

    def __init__(
        self,
        property_repo: Optional[PropertyRepository] = None,
        image_repo: Optional[PropertyImageRepository] = None,
        storage: Optional[ImageStorage] = None,
    ):
        self.property_repo = property_repo or PropertyRepository()
        self.image_repo = image_repo or PropertyImageRepository()
        self.storage = storage or ImageStorage()

    # Inmuebles

    def list_listings(self, session: SessionContext) -> list[Listing]:
        """Todos los inmuebles, cualquier status, más nuevos primero."""
        session.require_admin()
        return rows_to_listings(self.property_repo.list_all(only_available=False))

    def get_listing(self, property_id: str) -> Listing:
        row = self.property_repo.get_by_id(property_id)
        if not row:
            raise ListingNotFoundError(property_id)
        return Listing.from_row(row)

    def create_listing(
        self,
        draft: ListingDraft,
        session: SessionContext,
        files: Optional[list[UploadedFile]] = None,
    ) -> Listing:
        """Crea el inmueble y, si vienen fotos, las sube en orden."""
        user_id = session.require_admin()
        row = self.property_repo.create(draft.to_db_dict(user_id=user_id))
        property_id = row["id"]

        if files:
            self.upload_images(property_id, files, session)

        return self.get_listing(property_id)

    def update_listing(
        self, property_id: str, update: ListingUpdate, session: SessionContext
    ) -> Listing:
        """Edita solo los campos enviados."""
        session.require_admin()
        data = update.to_db_dict()
        if data and self.property_repo.update(property_id, data) is None:
            raise ListingNotFoundError(property_id)
        return self.get_listing(property_id)

    def delete_listing(self, property_id: str, session: SessionContext) -> None:
        """Borra imágenes, inmueble y los objetos en Storage."""
        session.require_admin()
        listing = self.get_listing(property_id)

        self.image_repo.delete_for_property(property_id)
        self.property_repo.delete(property_id)
        self._remove_objects([img.image_url for img in listing.images], property_id)

    # Imágenes

    def list_images(self, property_id: str) -> list[ListingImage]:
        rows = self.image_repo.list_for_property(property_id)
        return sort_images([ListingImage(**row) for row in rows])

    def upload_images(
        self,
        property_id: str,
        files: list[UploadedFile],
        session: SessionContext,
    ) -> list[ListingImage]:
        """
        Sube fotos y las agrega al final del orden actual.

        Returns:
            La lista completa de imágenes del inmueble, ordenada
        """
        session.require_admin()
        if not self.property_repo.get_by_id(property_id):
            raise ListingNotFoundError(property_id)

        current = self.list_images(property_id)
        uploaded = []
        try:
            for f in files:
                url = self.storage.upload(property_id, f.data, f.filename, f.content_type)
                uploaded.append(ListingImage(property_id=property_id, image_url=url))
        except StorageUploadError:
            # Lo ya subido no llega a registrarse
            if uploaded:
                self._remove_objects([img.image_url for img in uploaded], property_id)
            raise

        sequenced = append_new(current, uploaded)
        created = self.image_repo.create_many(sequenced[len(current):])
        logger.info(
            "Imágenes agregadas",
            property_id=property_id,
            count=len(created),
        )
        return sort_images(current + [ListingImage(**row) for row in created])

    def move_image(
        self,
        property_id: str,
        image_id: str,
        direction: Direction,
        session: SessionContext,
    ) -> list[ListingImage]:
        """Sube o baja una imagen una posición."""
        session.require_admin()
        current = self._images_with(property_id, image_id)
        reordered = move_adjacent(current, index_of(current, image_id), direction)
        return self._commit_order(property_id, current, reordered)

    def promote_image(
        self, property_id: str, image_id: str, session: SessionContext
    ) -> list[ListingImage]:
        """Define la imagen como portada (posición 0)."""
        session.require_admin()
        current = self._images_with(property_id, image_id)
        reordered = promote_to_first(current, image_id)
        return self._commit_order(property_id, current, reordered)

    def remove_image(
        self, property_id: str, image_id: str, session: SessionContext
    ) -> list[ListingImage]:
        """Borra una imagen y renumera las restantes."""
        session.require_admin()
        current = self._images_with(property_id, image_id)
        removed = current[index_of(current, image_id)]

        self.image_repo.delete(image_id)
        self._remove_objects([removed.image_url], property_id)

        remaining = [img for img in current if img.id != image_id]
        return self._commit_order(property_id, remaining, remove_image(current, image_id))

    def apply_order(
        self, property_id: str, image_ids: list[str], session: SessionContext
    ) -> list[ListingImage]:
        """
        Persiste un orden explícito. Es el camino de reintento tras un
        ImageOrderWriteError: se reenvían los IDs de `pending`.
        """
        session.require_admin()
        current = self.list_images(property_id)
        reordered = apply_order(current, image_ids)
        return self._commit_order(property_id, current, reordered, force=True)

    def _images_with(self, property_id: str, image_id: str) -> list[ListingImage]:
        current = self.list_images(property_id)
        if index_of(current, image_id) is None:
            raise ListingNotFoundError(property_id, image_id=image_id)
        return current

    def _commit_order(
        self,
        property_id: str,
        before: list[ListingImage],
        after: list[ListingImage],
        force: bool = False,
    ) -> list[ListingImage]:
        if after == before and not force:
            return after

        try:
            self.image_repo.update_image_order(after)
        except Exception as e:
            logger.error(
                "No se pudo persistir el orden de imágenes",
                property_id=property_id,
                error=str(e),
            )
            raise ImageOrderWriteError(property_id, pending=after, cause=e) from e

        logger.info("Orden de imágenes actualizado", property_id=property_id)
        return after

    def _remove_objects(self, urls: list[str], property_id: str) -> None:
        # Un objeto huérfano en Storage no invalida el borrado de las filas
        try:
            self.storage.remove(urls)
        except Exception as e:
            logger.warning(
                "No se pudieron borrar objetos de Storage",
                property_id=property_id,
                count=len(urls),
                error=str(e),
            )
