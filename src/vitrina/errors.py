"""
Errores de dominio.

Los servicios traducen fallas del store remoto a esta jerarquía;
la capa web la mapea a códigos HTTP.
"""

from typing import Optional


class VitrinaError(Exception):
    """Error base del sistema."""


class ListingNotFoundError(VitrinaError):
    """El inmueble (o una de sus imágenes) no existe."""

    def __init__(self, property_id: str, image_id: Optional[str] = None):
        self.property_id = property_id
        self.image_id = image_id
        if image_id:
            message = f"Imagen {image_id} no encontrada en el inmueble {property_id}"
        else:
            message = f"Inmueble no encontrado: {property_id}"
        super().__init__(message)


class AuthenticationError(VitrinaError):
    """Credenciales inválidas o sesión inexistente."""


class PermissionDeniedError(VitrinaError):
    """El usuario está autenticado pero no es administrador."""


class StorageUploadError(VitrinaError):
    """Falló la subida de un archivo al bucket."""


class ImageOrderWriteError(VitrinaError):
    """
    Falló la persistencia de un nuevo orden de imágenes.

    Es recuperable: `pending` es el orden que se intentó escribir y
    puede reenviarse tal cual. El orden persistido anteriormente sigue
    vigente hasta que una escritura confirme el nuevo.
    """

    def __init__(self, property_id: str, pending: list, cause: Optional[Exception] = None):
        self.property_id = property_id
        self.pending = pending
        self.cause = cause
        super().__init__(
            f"No se pudo guardar el orden de imágenes del inmueble {property_id}: {cause}"
        )
