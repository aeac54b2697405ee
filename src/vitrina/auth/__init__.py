"""
Autenticación del panel admin.

Sesiones explícitas (SessionContext) resueltas contra Supabase Auth.
"""

from vitrina.auth.session import AuthService, SessionContext, SessionStatus

__all__ = [
    "AuthService",
    "SessionContext",
    "SessionStatus",
]
