"""
Aplicación aiohttp del sitio.

Arma la app con los servicios inyectados (o los de producción por
defecto), los middlewares de errores y sesión y las rutas.
"""

from typing import Optional

from aiohttp import web

from vitrina.auth import AuthService
from vitrina.services import CatalogService, ContactService, ListingAdminService
from vitrina.web import admin, public
from vitrina.web.keys import ADMIN_SERVICE, AUTH_SERVICE, CATALOG_SERVICE, CONTACT_SERVICE
from vitrina.web.middlewares import error_middleware, session_middleware

# Fotos de hasta 20 MB por request
MAX_UPLOAD_SIZE = 20 * 1024 * 1024


def create_app(
    catalog_service: Optional[CatalogService] = None,
    admin_service: Optional[ListingAdminService] = None,
    contact_service: Optional[ContactService] = None,
    auth_service: Optional[AuthService] = None,
) -> web.Application:
    app = web.Application(
        middlewares=[error_middleware, session_middleware],
        client_max_size=MAX_UPLOAD_SIZE,
    )
    app[CATALOG_SERVICE] = catalog_service or CatalogService()
    app[ADMIN_SERVICE] = admin_service or ListingAdminService()
    app[CONTACT_SERVICE] = contact_service or ContactService()
    app[AUTH_SERVICE] = auth_service or AuthService()

    app.add_routes(public.routes)
    app.add_routes(admin.routes)
    return app
