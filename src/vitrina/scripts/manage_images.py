"""
Script de mantenimiento de las imágenes de un inmueble.

Usa la service key de Supabase, así que corre con permisos de admin.

Uso:
    python -m vitrina.scripts.manage_images list <property_id>
    python -m vitrina.scripts.manage_images move <property_id> <image_id> up|down
    python -m vitrina.scripts.manage_images promote <property_id> <image_id>
    python -m vitrina.scripts.manage_images remove <property_id> <image_id>
    python -m vitrina.scripts.manage_images renumber <property_id>
    python -m vitrina.scripts.manage_images order <property_id> <image_id>...
"""

import argparse
import sys

import structlog

from vitrina.auth import SessionContext
from vitrina.errors import ImageOrderWriteError, VitrinaError
from vitrina.log import configure_logging
from vitrina.services import ListingAdminService

logger = structlog.get_logger()

CLI_SESSION = SessionContext.authenticated(user_id="cli", email=None, is_admin=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Administra el orden de las imágenes de un inmueble"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="Lista las imágenes en orden")
    list_cmd.add_argument("property_id")

    move_cmd = sub.add_parser("move", help="Mueve una imagen una posición")
    move_cmd.add_argument("property_id")
    move_cmd.add_argument("image_id")
    move_cmd.add_argument("direction", choices=["up", "down"])

    promote_cmd = sub.add_parser("promote", help="Define la imagen como portada")
    promote_cmd.add_argument("property_id")
    promote_cmd.add_argument("image_id")

    remove_cmd = sub.add_parser("remove", help="Borra una imagen")
    remove_cmd.add_argument("property_id")
    remove_cmd.add_argument("image_id")

    renumber_cmd = sub.add_parser(
        "renumber", help="Reescribe el orden actual como 0..n-1"
    )
    renumber_cmd.add_argument("property_id")

    order_cmd = sub.add_parser("order", help="Persiste un orden explícito de IDs")
    order_cmd.add_argument("property_id")
    order_cmd.add_argument("image_ids", nargs="+")

    return parser


def run_command(args: argparse.Namespace, service: ListingAdminService) -> list:
    """Ejecuta el subcomando y devuelve las imágenes resultantes."""
    pid = args.property_id

    if args.command == "list":
        return service.list_images(pid)
    if args.command == "move":
        return service.move_image(pid, args.image_id, args.direction, CLI_SESSION)
    if args.command == "promote":
        return service.promote_image(pid, args.image_id, CLI_SESSION)
    if args.command == "remove":
        return service.remove_image(pid, args.image_id, CLI_SESSION)
    if args.command == "renumber":
        current = service.list_images(pid)
        return service.apply_order(pid, [img.id for img in current], CLI_SESSION)
    if args.command == "order":
        return service.apply_order(pid, args.image_ids, CLI_SESSION)

    raise ValueError(f"Comando desconocido: {args.command}")


def print_images(images: list) -> None:
    for img in images:
        marker = "*" if img.position == 0 else " "
        print(f"{marker} {img.position:>3}  {img.id}  {img.image_url}")


def main():
    """Entry point del script."""
    args = build_parser().parse_args()
    configure_logging()

    try:
        images = run_command(args, ListingAdminService())
        print_images(images)
        sys.exit(0)
    except ImageOrderWriteError as e:
        logger.error(
            "Orden no guardado; reintentar con el comando order",
            property_id=e.property_id,
            pending=[img.id for img in e.pending],
        )
        sys.exit(1)
    except VitrinaError as e:
        logger.error("Operación rechazada", command=args.command, error=str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrumpido por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal", command=args.command, error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
