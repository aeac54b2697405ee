"""Tests del formulario de contacto y el aviso por Telegram."""

from unittest.mock import AsyncMock

import pytest

from vitrina.config import get_settings
from vitrina.models import ContactMessage
from vitrina.notifications import AgentNotifier
from vitrina.services import ContactService


@pytest.fixture
def message():
    return ContactMessage(
        name="Ana_Souza",
        email="ana@example.com",
        phone="+55 (11) 98888-7777",
        message="Tenho interesse na *cobertura*.",
    )


@pytest.mark.asyncio
async def test_submit_stores_and_notifies(fake_db, contact_repo, message):
    bot = AsyncMock()
    service = ContactService(contact_repo, AgentNotifier(token="t", chat_id=42, bot=bot))

    result = await service.submit(message)

    assert result["notified"] is True
    assert result["id"] == fake_db.tables["contact_messages"][0]["id"]
    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == 42
    assert "Ana\\_Souza" in kwargs["text"]
    assert "\\*cobertura\\*" in kwargs["text"]
    button = kwargs["reply_markup"].inline_keyboard[0][0]
    assert button.url == "https://wa.me/5511988887777"


@pytest.mark.asyncio
async def test_submit_without_telegram_config(fake_db, contact_repo, message):
    service = ContactService(contact_repo, AgentNotifier())

    result = await service.submit(message)

    assert result["notified"] is False
    assert len(fake_db.tables["contact_messages"]) == 1


@pytest.mark.asyncio
async def test_notification_failure_keeps_message(fake_db, contact_repo, message):
    bot = AsyncMock()
    bot.send_message.side_effect = RuntimeError("telegram down")
    service = ContactService(contact_repo, AgentNotifier(token="t", chat_id=42, bot=bot))

    result = await service.submit(message)

    assert result["notified"] is False
    assert len(fake_db.tables["contact_messages"]) == 1


def test_contact_info_from_settings(monkeypatch, contact_repo):
    monkeypatch.setenv("AGENT_WHATSAPP", "5511900000000")
    monkeypatch.setenv("AGENT_EMAIL", "vendas@vitrina.com")
    get_settings.cache_clear()

    info = ContactService(contact_repo, AgentNotifier()).contact_info()

    assert info["whatsapp_link"] == "https://wa.me/5511900000000"
    assert info["phone_link"] == "tel:+5511900000000"
    assert info["email_link"] == "mailto:vendas@vitrina.com"
