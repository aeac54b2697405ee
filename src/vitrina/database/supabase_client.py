"""
Cliente de Supabase.

Singleton para conexión a la base de datos, Storage y Auth.
"""

from functools import lru_cache

import structlog
from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions

from vitrina.config import get_settings

logger = structlog.get_logger()


class SupabaseClient:
    """Wrapper del cliente de Supabase con métodos de utilidad."""

    def __init__(self, client: Client):
        self._client = client

    @property
    def client(self) -> Client:
        """Acceso directo al cliente de Supabase."""
        return self._client

    @property
    def auth(self):
        """Cliente de Auth (sesiones, usuarios)."""
        return self._client.auth

    def table(self, name: str):
        """Acceso a una tabla específica."""
        return self._client.table(name)

    def storage_bucket(self, name: str):
        """Acceso a un bucket de Storage."""
        return self._client.storage.from_(name)


def _require_credentials(settings) -> None:
    if not settings.supabase_url or not settings.supabase_key:
        raise ValueError(
            "SUPABASE_URL y SUPABASE_KEY son requeridos. "
            "Configura las variables de entorno."
        )


@lru_cache
def get_supabase_client() -> SupabaseClient:
    """
    Obtiene el cliente de datos (singleton cacheado).

    Returns:
        SupabaseClient configurado

    Raises:
        ValueError: Si las credenciales no están configuradas
    """
    settings = get_settings()
    _require_credentials(settings)

    # Usar service key si está disponible para operaciones admin
    key = settings.supabase_service_key or settings.supabase_key

    client = create_client(settings.supabase_url, key)
    logger.info("Cliente de Supabase inicializado", url=settings.supabase_url)

    return SupabaseClient(client)


@lru_cache
def get_auth_client() -> SupabaseClient:
    """
    Cliente con la anon key para login de usuarios.

    Separado del cliente de datos: un login cambia la sesión del cliente
    que lo ejecuta y las consultas admin deben seguir con la service key.
    """
    settings = get_settings()
    _require_credentials(settings)

    client = create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
    logger.info("Cliente de Auth inicializado", url=settings.supabase_url)

    return SupabaseClient(client)
