"""
Middlewares del sitio.

- error_middleware: traduce errores de dominio a respuestas JSON
- session_middleware: resuelve la sesión del token Bearer

Los servicios son sincrónicos (supabase-py, reintentos con tenacity);
los handlers los llaman con asyncio.to_thread para no frenar el loop.
"""

import asyncio
from typing import Optional

from aiohttp import web
from pydantic import ValidationError

from vitrina.errors import (
    AuthenticationError,
    ImageOrderWriteError,
    ListingNotFoundError,
    PermissionDeniedError,
    StorageUploadError,
)
from vitrina.presentation import image_entry
from vitrina.web.keys import AUTH_SERVICE, SESSION


def json_error(status: int, error: str, message: str, **extra) -> web.Response:
    return web.json_response({"error": error, "message": message, **extra}, status=status)


def bearer_token(request: web.Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def json_object(request: web.Request) -> dict:
    """Cuerpo JSON del request; solo se aceptan objetos."""
    body = await request.json()
    if not isinstance(body, dict):
        raise ValueError("El cuerpo debe ser un objeto JSON")
    return body


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except ValidationError as e:
        return json_error(
            400,
            "validation_error",
            "Datos inválidos",
            details=e.errors(include_url=False, include_context=False, include_input=False),
        )
    except ListingNotFoundError as e:
        return json_error(404, "not_found", str(e))
    except AuthenticationError as e:
        return json_error(401, "unauthenticated", str(e))
    except PermissionDeniedError as e:
        return json_error(403, "forbidden", str(e))
    except ImageOrderWriteError as e:
        # Recuperable: el cliente reenvía `pending` a PUT .../images/order
        return json_error(
            503,
            "image_order_not_saved",
            "No se pudo guardar el nuevo orden. Intentá de nuevo.",
            retryable=True,
            pending=[image_entry(img) for img in e.pending],
        )
    except StorageUploadError as e:
        return json_error(502, "storage_error", str(e))
    except ValueError as e:
        return json_error(400, "bad_request", str(e))


@web.middleware
async def session_middleware(request: web.Request, handler) -> web.StreamResponse:
    auth = request.app[AUTH_SERVICE]
    request[SESSION] = await asyncio.to_thread(auth.resolve, bearer_token(request))
    return await handler(request)
