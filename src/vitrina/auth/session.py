"""
Sesión de usuario explícita.

En lugar de chequear nulos dispersos, cada request recibe un
SessionContext con estado tri-valuado:

- UNRESOLVED: todavía no se consultó Auth
- ANONYMOUS: sin sesión válida
- AUTHENTICATED: usuario identificado; `is_admin` ya resuelto
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from vitrina.database import (
    get_auth_client,
    get_supabase_client,
    SupabaseClient,
    UserRoleRepository,
)
from vitrina.errors import AuthenticationError, PermissionDeniedError

logger = structlog.get_logger()


class SessionStatus(str, Enum):
    UNRESOLVED = "unresolved"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class SessionContext:
    """Quién hace el request y qué puede hacer."""

    status: SessionStatus = SessionStatus.UNRESOLVED
    user_id: Optional[str] = None
    email: Optional[str] = None
    # None = no resuelto todavía
    is_admin: Optional[bool] = None

    @classmethod
    def unresolved(cls) -> "SessionContext":
        return cls()

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls(status=SessionStatus.ANONYMOUS, is_admin=False)

    @classmethod
    def authenticated(
        cls, user_id: str, email: Optional[str], is_admin: bool
    ) -> "SessionContext":
        return cls(
            status=SessionStatus.AUTHENTICATED,
            user_id=user_id,
            email=email,
            is_admin=is_admin,
        )

    @property
    def is_resolved(self) -> bool:
        return self.status != SessionStatus.UNRESOLVED

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED

    def require_admin(self) -> str:
        """
        Devuelve el user_id si la sesión es de un admin.

        Raises:
            AuthenticationError: sin sesión (o sin resolver)
            PermissionDeniedError: usuario sin rol admin
        """
        if not self.is_authenticated or not self.user_id:
            raise AuthenticationError("Se requiere iniciar sesión")
        if not self.is_admin:
            raise PermissionDeniedError("Se requiere rol de administrador")
        return self.user_id

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "user_id": self.user_id,
            "email": self.email,
            "is_admin": self.is_admin,
        }


class AuthService:
    """Login, logout y resolución de sesiones contra Supabase Auth."""

    def __init__(
        self,
        auth_client: Optional[SupabaseClient] = None,
        data_client: Optional[SupabaseClient] = None,
        role_repo: Optional[UserRoleRepository] = None,
    ):
        self._auth_client = auth_client or get_auth_client()
        self._data_client = data_client or get_supabase_client()
        self.role_repo = role_repo or UserRoleRepository(self._data_client)

    def sign_in(self, email: str, password: str) -> tuple[str, SessionContext]:
        """
        Inicia sesión con e-mail y contraseña.

        Returns:
            (access_token, SessionContext)

        Raises:
            AuthenticationError: credenciales inválidas
        """
        try:
            response = self._auth_client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.warning("Login rechazado", email=email, error=str(e))
            raise AuthenticationError("E-mail o contraseña inválidos") from e

        if not response.session or not response.user:
            raise AuthenticationError("E-mail o contraseña inválidos")

        user = response.user
        context = SessionContext.authenticated(
            user_id=user.id,
            email=user.email,
            is_admin=self._check_admin(user.id),
        )
        logger.info("Login exitoso", user_id=user.id, is_admin=context.is_admin)
        return response.session.access_token, context

    def resolve(self, access_token: Optional[str]) -> SessionContext:
        """
        Resuelve la sesión de un request a partir del token Bearer.

        Un token ausente o inválido da una sesión anónima, nunca un error.
        """
        if not access_token:
            return SessionContext.anonymous()

        try:
            response = self._auth_client.auth.get_user(access_token)
        except Exception as e:
            logger.info("Token no válido", error=str(e))
            return SessionContext.anonymous()

        user = response.user if response else None
        if not user:
            return SessionContext.anonymous()

        return SessionContext.authenticated(
            user_id=user.id,
            email=user.email,
            is_admin=self._check_admin(user.id),
        )

    def sign_out(self, access_token: str) -> None:
        """Revoca la sesión del token dado."""
        self._data_client.auth.admin.sign_out(access_token)
        logger.info("Sesión cerrada")

    def _check_admin(self, user_id: str) -> bool:
        # Un error consultando roles cuenta como "no admin"
        try:
            return self.role_repo.is_admin(user_id)
        except Exception as e:
            logger.error("Error verificando rol admin", user_id=user_id, error=str(e))
            return False
