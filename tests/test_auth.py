"""Tests de sesiones y AuthService."""

import pytest

from vitrina.auth import SessionContext, SessionStatus
from vitrina.errors import AuthenticationError, PermissionDeniedError


def test_session_tri_state():
    unresolved = SessionContext.unresolved()
    anonymous = SessionContext.anonymous()

    assert not unresolved.is_resolved
    assert unresolved.is_admin is None
    assert anonymous.is_resolved
    assert anonymous.is_admin is False
    assert not anonymous.is_authenticated


def test_require_admin():
    admin = SessionContext.authenticated(user_id="u1", email="a@b.com", is_admin=True)
    user = SessionContext.authenticated(user_id="u2", email="c@d.com", is_admin=False)

    assert admin.require_admin() == "u1"
    with pytest.raises(PermissionDeniedError):
        user.require_admin()
    with pytest.raises(AuthenticationError):
        SessionContext.unresolved().require_admin()


def test_sign_in_admin(fake_db, auth_service):
    user_id = fake_db.auth.add_user("admin@vitrina.com", "secret123")
    fake_db.grant_admin(user_id)

    token, session = auth_service.sign_in("admin@vitrina.com", "secret123")

    assert token in fake_db.auth.tokens
    assert session.status == SessionStatus.AUTHENTICATED
    assert session.is_admin is True
    assert session.to_dict()["user_id"] == user_id


def test_sign_in_wrong_password(fake_db, auth_service):
    fake_db.auth.add_user("admin@vitrina.com", "secret123")
    with pytest.raises(AuthenticationError):
        auth_service.sign_in("admin@vitrina.com", "wrong")


def test_resolve_tokens(auth_service, admin_token, visitor_token):
    assert auth_service.resolve(admin_token).is_admin is True
    assert auth_service.resolve(visitor_token).is_admin is False
    assert auth_service.resolve(None).status == SessionStatus.ANONYMOUS
    assert auth_service.resolve("garbage").status == SessionStatus.ANONYMOUS


def test_role_lookup_failure_means_not_admin(fake_db, auth_service, admin_token):
    fake_db.fail("user_roles", "select")
    session = auth_service.resolve(admin_token)

    assert session.is_authenticated
    assert session.is_admin is False


def test_sign_out_revokes_token(fake_db, auth_service, admin_token):
    auth_service.sign_out(admin_token)
    assert auth_service.resolve(admin_token).status == SessionStatus.ANONYMOUS
