"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Encontrar la raíz del proyecto (donde está el .env)
# config.py -> vitrina/ -> src/ -> project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase
    supabase_url: str = Field(..., description="URL del proyecto Supabase")
    supabase_key: str = Field(..., description="Anon key de Supabase")
    supabase_service_key: Optional[str] = Field(
        None, description="Service role key para operaciones admin"
    )
    storage_bucket: str = Field(
        "property-images", description="Bucket de Storage para las fotos"
    )

    # Telegram (avisos de contacto a la corredora)
    telegram_bot_token: Optional[str] = Field(None, description="Token del bot de Telegram")
    agent_chat_id: Optional[int] = Field(
        None, description="Chat de Telegram que recibe los mensajes de contacto"
    )

    # Datos de contacto publicados en el sitio
    agent_phone: str = Field("(11) 99618-8216", description="Teléfono visible")
    agent_whatsapp: str = Field("5511996188216", description="Número para wa.me")
    agent_email: str = Field("contato@example.com", description="E-mail de contacto")
    agent_address: str = Field(
        "Alphaville, Santana de Parnaíba, SP, Brasil",
        description="Dirección de la oficina",
    )

    # Servidor web
    web_listen: str = Field("0.0.0.0", description="Host de escucha del sitio")
    web_port: int = Field(8080, description="Puerto del sitio")

    # Reintentos de escritura remota
    write_retry_attempts: int = Field(
        3, ge=1, description="Intentos por escritura de orden de imágenes"
    )
    write_retry_backoff: float = Field(
        1.0, ge=0.0, description="Multiplicador del backoff exponencial (segundos)"
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()


# Constantes del sistema

# Valor centinela: "sin restricción" en selects y buckets
ALL = "all"

PROPERTY_TYPES = {
    "apartamento": "Apartamento",
    "casa": "Casa",
    "cobertura": "Cobertura",
    "terreno": "Terreno",
    "comercial": "Comercial",
}

PROPERTY_STATUSES = {
    "disponivel": "Disponível",
    "vendido": "Vendido",
    "alugado": "Alugado",
}

AVAILABLE_STATUS = "disponivel"

BEDROOM_BUCKETS = ["1", "2", "3", "4+"]

PARKING_BUCKETS = ["1", "2", "3+"]
