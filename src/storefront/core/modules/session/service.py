import secrets
from datetime import timedelta
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from storefront.core.core import Service
from storefront.core.modules.session.models import AuthToken, Session
from storefront.core.modules.user.models import User
from storefront.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Server-side session store with absolute and sliding expiry."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("auth_token", 1)], unique=True)
        await self._collection.create_index([("user_id", 1)])
        # MongoDB drops documents once expires_at has passed
        await self._collection.create_index([("expires_at", 1)], expireAfterSeconds=0)

    @property
    def duration(self) -> timedelta:
        return timedelta(seconds=self.core.config.session_duration)

    @property
    def active_duration(self) -> timedelta:
        return timedelta(seconds=self.core.config.session_active_duration)

    async def create_session(self, user: User) -> Session:
        """Open a session for a freshly authenticated user."""
        created_at = now()
        session = Session(
            auth_token=AuthToken(secrets.token_urlsafe(32)),
            user_id=user.id,
            user_name=user.user_name,
            email=user.email,
            login_history=user.login_history,
            created_at=created_at,
            expires_at=created_at + self.duration,
        )
        await self._collection.insert_one(session.to_mongo())
        logger.debug("session_created", user_name=user.user_name, expires_at=session.expires_at.isoformat())
        return session

    async def get_session(self, auth_token: AuthToken) -> Session | None:
        """Get the stored session for a token, expired or not."""
        return Session.from_mongo(await self._collection.find_one({"auth_token": auth_token}))

    async def touch_session(self, session: Session) -> Session:
        """Slide the expiry forward when less than the active duration remains."""
        current = now()
        if session.expires_at - current >= self.active_duration:
            return session
        expires_at = current + self.active_duration
        await self._collection.update_one({"_id": session.id}, {"$set": {"expires_at": expires_at}})
        return session.model_copy(update={"expires_at": expires_at})

    async def invalidate_session(self, auth_token: AuthToken) -> None:
        """Delete a session immediately. Unknown tokens are ignored."""
        result = await self._collection.delete_one({"auth_token": auth_token})
        if result.deleted_count:
            logger.debug("session_invalidated")
