"""
Módulo de base de datos.

Provee acceso a Supabase (tablas, Storage) y operaciones CRUD.
"""

from vitrina.database.supabase_client import (
    get_supabase_client,
    get_auth_client,
    SupabaseClient,
)
from vitrina.database.repositories import (
    PropertyRepository,
    PropertyImageRepository,
    UserRoleRepository,
    ContactMessageRepository,
)
from vitrina.database.storage import ImageStorage

__all__ = [
    "get_supabase_client",
    "get_auth_client",
    "SupabaseClient",
    "PropertyRepository",
    "PropertyImageRepository",
    "UserRoleRepository",
    "ContactMessageRepository",
    "ImageStorage",
]
