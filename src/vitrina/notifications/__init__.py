"""
Notificaciones a la corredora.
"""

from vitrina.notifications.telegram_notifier import AgentNotifier

__all__ = [
    "AgentNotifier",
]
