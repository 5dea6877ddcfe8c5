from datetime import datetime

from pydantic import BaseModel, Field

from storefront.core.db import MongoModel
from storefront.utils import now


class LoginEvent(BaseModel):
    """One successful authentication."""

    date_time: datetime = Field(default_factory=now, description="When the user logged in")
    user_agent: str = Field("", description="Client User-Agent string, may be empty")


class User(MongoModel):
    """Registered account with credentials and login history.

    Indexed on user_name - unique.
    """

    user_name: str  # Immutable after creation
    password_hash: str  # bcrypt hash
    email: str | None = None
    login_history: list[LoginEvent] = Field(default_factory=list)  # Append-only, oldest first

