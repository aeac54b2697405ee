"""
Rutas del panel admin.

Todas exigen un token Bearer de un usuario con rol admin. Los errores
de dominio los traduce error_middleware.
"""

import asyncio

from aiohttp import web

from vitrina.auth import SessionContext
from vitrina.models import ListingDraft, ListingUpdate
from vitrina.presentation import admin_listing, image_entry
from vitrina.services import UploadedFile
from vitrina.web.keys import ADMIN_SERVICE, get_session
from vitrina.web.middlewares import json_object

routes = web.RouteTableDef()

IMAGE_FIELD = "images"


def _admin(request: web.Request) -> SessionContext:
    session = get_session(request)
    session.require_admin()
    return session


def _images_response(images) -> web.Response:
    return web.json_response({"images": [image_entry(img) for img in images]})


async def _read_multipart(request: web.Request) -> tuple[dict, list[UploadedFile]]:
    """Separa campos de texto y archivos de un formulario multipart."""
    form = await request.post()
    fields = {}
    files = []
    for name, value in form.items():
        if isinstance(value, web.FileField):
            if name == IMAGE_FIELD:
                files.append(UploadedFile(
                    filename=value.filename,
                    data=value.file.read(),
                    content_type=value.content_type,
                ))
        elif value != "":
            fields[name] = value
    return fields, files


@routes.get("/api/admin/properties")
async def admin_list(request: web.Request) -> web.Response:
    listings = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].list_listings, get_session(request)
    )
    return web.json_response({"items": [admin_listing(listing) for listing in listings]})


@routes.post("/api/admin/properties")
async def admin_create(request: web.Request) -> web.Response:
    """Alta de inmueble. Acepta JSON o multipart con fotos en `images`."""
    session = _admin(request)
    if request.content_type.startswith("multipart/"):
        fields, files = await _read_multipart(request)
    else:
        fields, files = await json_object(request), []

    listing = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].create_listing, ListingDraft(**fields), session, files=files
    )
    return web.json_response(admin_listing(listing), status=201)


@routes.get("/api/admin/properties/{property_id}")
async def admin_get(request: web.Request) -> web.Response:
    _admin(request)
    listing = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].get_listing, request.match_info["property_id"]
    )
    return web.json_response(admin_listing(listing))


@routes.patch("/api/admin/properties/{property_id}")
async def admin_update(request: web.Request) -> web.Response:
    session = _admin(request)
    update = ListingUpdate(**await json_object(request))
    listing = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].update_listing,
        request.match_info["property_id"],
        update,
        session,
    )
    return web.json_response(admin_listing(listing))


@routes.delete("/api/admin/properties/{property_id}")
async def admin_delete(request: web.Request) -> web.Response:
    session = _admin(request)
    await asyncio.to_thread(
        request.app[ADMIN_SERVICE].delete_listing, request.match_info["property_id"], session
    )
    return web.Response(status=204)


@routes.get("/api/admin/properties/{property_id}/images")
async def admin_images(request: web.Request) -> web.Response:
    _admin(request)
    images = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].list_images, request.match_info["property_id"]
    )
    return _images_response(images)


@routes.post("/api/admin/properties/{property_id}/images")
async def admin_upload(request: web.Request) -> web.Response:
    session = _admin(request)
    _, files = await _read_multipart(request)
    if not files:
        raise ValueError(f"No se recibieron archivos en el campo '{IMAGE_FIELD}'")

    images = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].upload_images,
        request.match_info["property_id"],
        files,
        session,
    )
    return _images_response(images)


@routes.put("/api/admin/properties/{property_id}/images/order")
async def admin_apply_order(request: web.Request) -> web.Response:
    """Persiste un orden completo. Reintento tras un 503 de reordenamiento."""
    session = _admin(request)
    body = await json_object(request)
    image_ids = body.get("image_ids")
    if not isinstance(image_ids, list):
        raise ValueError("image_ids debe ser una lista")

    images = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].apply_order,
        request.match_info["property_id"],
        [str(i) for i in image_ids],
        session,
    )
    return _images_response(images)


@routes.post("/api/admin/properties/{property_id}/images/{image_id}/move")
async def admin_move(request: web.Request) -> web.Response:
    session = _admin(request)
    body = await json_object(request)
    direction = body.get("direction")
    if direction not in ("up", "down"):
        raise ValueError("direction debe ser 'up' o 'down'")

    images = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].move_image,
        request.match_info["property_id"],
        request.match_info["image_id"],
        direction,
        session,
    )
    return _images_response(images)


@routes.post("/api/admin/properties/{property_id}/images/{image_id}/promote")
async def admin_promote(request: web.Request) -> web.Response:
    session = _admin(request)
    images = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].promote_image,
        request.match_info["property_id"],
        request.match_info["image_id"],
        session,
    )
    return _images_response(images)


@routes.delete("/api/admin/properties/{property_id}/images/{image_id}")
async def admin_remove_image(request: web.Request) -> web.Response:
    session = _admin(request)
    images = await asyncio.to_thread(
        request.app[ADMIN_SERVICE].remove_image,
        request.match_info["property_id"],
        request.match_info["image_id"],
        session,
    )
    return _images_response(images)
