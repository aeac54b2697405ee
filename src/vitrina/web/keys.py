"""Claves tipadas para los servicios guardados en la aplicación aiohttp."""

from aiohttp import web

from vitrina.auth import AuthService, SessionContext
from vitrina.services import CatalogService, ContactService, ListingAdminService

CATALOG_SERVICE = web.AppKey("catalog_service", CatalogService)
ADMIN_SERVICE = web.AppKey("admin_service", ListingAdminService)
CONTACT_SERVICE = web.AppKey("contact_service", ContactService)
AUTH_SERVICE = web.AppKey("auth_service", AuthService)

# Clave del request donde el middleware deja la sesión resuelta
SESSION = web.RequestKey("session", SessionContext)


def get_session(request: web.Request) -> SessionContext:
    return request.get(SESSION, SessionContext.unresolved())
