"""
Script para levantar la API del sitio.

Uso:
    python -m vitrina.scripts.run_web
"""

import asyncio
import sys

import structlog
from aiohttp import web

from vitrina.config import get_settings
from vitrina.log import configure_logging
from vitrina.web import create_app

logger = structlog.get_logger()


async def run_server(listen: str, port: int):
    """Sirve la app hasta que se interrumpa el proceso."""
    app = create_app()

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host=listen, port=port)

    try:
        await site.start()
        logger.info(
            "API activa",
            listen=listen,
            port=port,
            health_path="/health",
        )
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


def main():
    """Entry point del servidor."""
    configure_logging()
    logger.info("Iniciando API de Vitrina...")

    try:
        settings = get_settings()
        asyncio.run(run_server(listen=settings.web_listen, port=settings.web_port))
    except KeyboardInterrupt:
        logger.info("Servidor detenido por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal en servidor", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
