"""Tests for the session guard decision."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from storefront.core.modules.access.guard import Allow, Deny, authorize
from storefront.core.modules.session.models import Session

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=UTC)
LOGIN_URL = "/api/v1/auth/login"


def make_session(user_name="alice", expires_in=timedelta(minutes=2)):
    return Session(
        auth_token="token",
        user_id=uuid4(),
        user_name=user_name,
        created_at=NOW,
        expires_at=NOW + expires_in,
    )


class TestAuthorize:
    def test_live_session_is_allowed(self):
        session = make_session()
        assert authorize(session, NOW, LOGIN_URL) == Allow(session=session)

    def test_missing_session_is_denied(self):
        assert authorize(None, NOW, LOGIN_URL) == Deny(redirect_to=LOGIN_URL)

    def test_expired_session_is_denied(self):
        session = make_session(expires_in=timedelta(seconds=-1))
        assert isinstance(authorize(session, NOW, LOGIN_URL), Deny)

    def test_session_expiring_exactly_now_is_denied(self):
        session = make_session(expires_in=timedelta(0))
        assert isinstance(authorize(session, NOW, LOGIN_URL), Deny)

    def test_session_without_principal_is_denied(self):
        session = make_session(user_name="")
        assert authorize(session, NOW, LOGIN_URL) == Deny(redirect_to=LOGIN_URL)
