"""
Rutas del sitio público: catálogo, detalle, destacados, contacto y login.
"""

import asyncio
from typing import Mapping, Optional

from aiohttp import web

from vitrina.models import CatalogBounds, ContactMessage, FilterCriteria
from vitrina.presentation import filter_options, listing_card, listing_detail
from vitrina.web.keys import AUTH_SERVICE, CATALOG_SERVICE, CONTACT_SERVICE, get_session
from vitrina.web.middlewares import bearer_token, json_error, json_object

routes = web.RouteTableDef()

_TRUE_VALUES = {"1", "true", "yes", "sim", "si"}


def _float_param(query: Mapping[str, str], name: str) -> Optional[float]:
    value = query.get(name)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Parámetro numérico inválido: {name}={value!r}") from None


def _range_param(
    query: Mapping[str, str],
    low_key: str,
    high_key: str,
    default: tuple[float, float],
) -> Optional[tuple[float, float]]:
    low = _float_param(query, low_key)
    high = _float_param(query, high_key)
    if low is None and high is None:
        return None
    # Un extremo ausente toma el límite del catálogo
    return (default[0] if low is None else low, default[1] if high is None else high)


def criteria_from_query(query: Mapping[str, str], bounds: CatalogBounds) -> FilterCriteria:
    """
    Arma los criterios a partir del query string.

    Parámetros: search, location, type, status, bedrooms, parking,
    min_price, max_price, min_area, max_area.
    """
    return FilterCriteria(
        search_term=query.get("search", ""),
        location=query.get("location"),
        type=query.get("type"),
        status=query.get("status"),
        bedrooms=query.get("bedrooms"),
        parking=query.get("parking"),
        price_range=_range_param(query, "min_price", "max_price", bounds.price_range),
        area_range=_range_param(query, "min_area", "max_area", bounds.area_range),
    )


@routes.get("/health")
async def health(request: web.Request) -> web.Response:
    return web.Response(text="OK")


@routes.get("/api/properties")
async def list_properties(request: web.Request) -> web.Response:
    """Catálogo filtrado con los límites dinámicos de los sliders."""
    only_available = request.query.get("include_unavailable", "").lower() not in _TRUE_VALUES
    snapshot = await asyncio.to_thread(
        request.app[CATALOG_SERVICE].snapshot, only_available=only_available
    )
    criteria = criteria_from_query(request.query, snapshot.bounds)
    page = snapshot.apply(criteria)

    return web.json_response({
        "items": [listing_card(listing) for listing in page.listings],
        "count": len(page.listings),
        "total": page.total,
        "bounds": page.bounds.to_dict(),
        "options": filter_options(page.bounds),
        "has_active_filters": criteria.has_active_filters(page.bounds),
    })


@routes.get("/api/properties/featured")
async def featured_properties(request: web.Request) -> web.Response:
    limit = max(1, int(request.query.get("limit", "3")))
    listings = await asyncio.to_thread(request.app[CATALOG_SERVICE].featured, limit=limit)
    return web.json_response({"items": [listing_card(listing) for listing in listings]})


@routes.get("/api/properties/{property_id}")
async def property_detail(request: web.Request) -> web.Response:
    listing = await asyncio.to_thread(
        request.app[CATALOG_SERVICE].get_listing, request.match_info["property_id"]
    )
    return web.json_response(listing_detail(listing))


@routes.get("/api/contact")
async def contact_info(request: web.Request) -> web.Response:
    return web.json_response(request.app[CONTACT_SERVICE].contact_info())


@routes.post("/api/contact")
async def submit_contact(request: web.Request) -> web.Response:
    message = ContactMessage(**await json_object(request))
    result = await request.app[CONTACT_SERVICE].submit(message)
    return web.json_response(result, status=201)


@routes.post("/api/auth/login")
async def login(request: web.Request) -> web.Response:
    body = await json_object(request)
    email = body.get("email", "")
    password = body.get("password", "")
    if not email or not password:
        return json_error(400, "bad_request", "E-mail y contraseña son obligatorios")

    token, session = await asyncio.to_thread(request.app[AUTH_SERVICE].sign_in, email, password)
    return web.json_response({"access_token": token, "session": session.to_dict()})


@routes.post("/api/auth/logout")
async def logout(request: web.Request) -> web.Response:
    token = bearer_token(request)
    if token and get_session(request).is_authenticated:
        await asyncio.to_thread(request.app[AUTH_SERVICE].sign_out, token)
    return web.Response(status=204)


@routes.get("/api/auth/session")
async def current_session(request: web.Request) -> web.Response:
    return web.json_response(get_session(request).to_dict())
