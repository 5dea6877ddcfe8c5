"""Session management models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import BaseModel, Field

from storefront.core.db import MongoModel
from storefront.core.modules.user.models import LoginEvent
from storefront.utils import now

AuthToken = NewType("AuthToken", str)


class Session(MongoModel):
    """Authenticated principal behind an opaque token.

    Carries a snapshot of the user taken at login time.
    Indexed on auth_token - unique, user_id, expires_at (TTL).
    """

    auth_token: str
    user_id: UUID
    user_name: str
    email: str | None = None
    login_history: list[LoginEvent] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=now)
    expires_at: datetime

    def is_expired(self, at: datetime) -> bool:
        return self.expires_at <= at


class SessionUserView(BaseModel):
    """Logged-in user as recorded in the session (API representation)."""

    user_name: str = Field(..., description="User name")
    email: str | None = Field(None, description="Email address")
    login_history: list[LoginEvent] = Field(default_factory=list, description="Logins up to this session, oldest first")

    @classmethod
    def from_session(cls, session: Session) -> "SessionUserView":
        return cls(user_name=session.user_name, email=session.email, login_history=session.login_history)
