"""
Avisos a la corredora por Telegram.

Cada mensaje del formulario de contacto llega al chat configurado
con un botón para responder por WhatsApp.
"""

import re
from typing import Optional

import structlog
from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.helpers import escape_markdown

from vitrina.config import get_settings
from vitrina.models import ContactMessage

logger = structlog.get_logger()


def _digits(phone: str) -> str:
    return re.sub(r"\D", "", phone)


class AgentNotifier:
    """Envía notificaciones al chat de la corredora."""

    def __init__(
        self,
        token: Optional[str] = None,
        chat_id: Optional[int] = None,
        bot: Optional[Bot] = None,
    ):
        settings = get_settings()
        self.token = token or settings.telegram_bot_token
        self.chat_id = chat_id if chat_id is not None else settings.agent_chat_id
        self.bot = bot

    @property
    def enabled(self) -> bool:
        """Hay token y chat configurados (o un bot inyectado)."""
        return self.chat_id is not None and (self.bot is not None or bool(self.token))

    def build_message(self, contact: ContactMessage) -> str:
        return (
            f"📩 *Nova mensagem pelo site*\n\n"
            f"👤 {escape_markdown(contact.name)}\n"
            f"📧 {escape_markdown(contact.email)}\n"
            f"📞 {escape_markdown(contact.phone)}\n\n"
            f"📝 {escape_markdown(contact.message)}"
        )

    async def send_contact_notification(self, contact: ContactMessage) -> bool:
        """
        Envía el mensaje de contacto al chat de la corredora.

        Returns:
            True si se envió correctamente
        """
        if not self.enabled:
            logger.info("Aviso por Telegram deshabilitado")
            return False

        if not self.bot:
            self.bot = Bot(self.token)

        phone = _digits(contact.phone)
        keyboard = [
            [
                InlineKeyboardButton("💬 Responder no WhatsApp", url=f"https://wa.me/{phone}"),
            ]
        ]

        try:
            await self.bot.send_message(
                chat_id=self.chat_id,
                text=self.build_message(contact),
                parse_mode="Markdown",
                reply_markup=InlineKeyboardMarkup(keyboard),
            )
            logger.info("Aviso de contacto enviado", chat_id=self.chat_id)
            return True

        except Exception as e:
            logger.error(
                "Error enviando aviso de contacto",
                chat_id=self.chat_id,
                error=str(e),
            )
            return False
