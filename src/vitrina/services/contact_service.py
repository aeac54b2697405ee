"""
Servicio del formulario de contacto.

Guarda el mensaje y avisa a la corredora por Telegram.
"""

import asyncio
from typing import Optional

import structlog

from vitrina.config import get_settings
from vitrina.database import ContactMessageRepository
from vitrina.models import ContactMessage
from vitrina.notifications import AgentNotifier

logger = structlog.get_logger()


class ContactService:
    """Recepción de consultas del sitio público."""

    def __init__(
        self,
        repo: Optional[ContactMessageRepository] = None,
        notifier: Optional[AgentNotifier] = None,
    ):
        self.repo = repo or ContactMessageRepository()
        self.notifier = notifier or AgentNotifier()

    async def submit(self, message: ContactMessage) -> dict:
        """
        Registra la consulta y notifica.

        Un fallo del aviso no invalida el mensaje guardado.
        """
        stored = await asyncio.to_thread(self.repo.create, message)
        notified = await self.notifier.send_contact_notification(message)
        logger.info(
            "Consulta recibida",
            message_id=stored.get("id"),
            notified=notified,
        )
        return {"id": stored.get("id"), "notified": notified}

    def contact_info(self) -> dict:
        """Datos de contacto publicados en el sitio."""
        settings = get_settings()
        whatsapp = settings.agent_whatsapp
        return {
            "phone": settings.agent_phone,
            "phone_link": f"tel:+{whatsapp}",
            "whatsapp_link": f"https://wa.me/{whatsapp}",
            "email": settings.agent_email,
            "email_link": f"mailto:{settings.agent_email}",
            "address": settings.agent_address,
        }
