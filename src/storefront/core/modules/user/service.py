from typing import Any

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from storefront.core.core import Service
from storefront.core.modules.user.models import LoginEvent, User
from storefront.errors import DuplicateError, NotFoundError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Credential store: user accounts and their login history.

    Every write touches a single user document, so each call is all-or-nothing.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create the unique index that guards user names."""
        await self._collection.create_index([("user_name", 1)], unique=True)
        logger.debug("user_service_started")

    async def create_user(self, user_name: str, password_hash: str, email: str | None) -> User:
        """Insert a new user. Never overwrites an existing one.

        Raises:
            DuplicateError: If the user name is already registered
        """
        user = User(user_name=user_name, password_hash=password_hash, email=email)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise DuplicateError(f"User '{user_name}' already exists") from e
        logger.info("user_created", user_name=user_name)
        return user

    async def find_by_user_name(self, user_name: str) -> User:
        """Get user by user name.

        Raises:
            NotFoundError: If no such user exists
        """
        user = User.from_mongo(await self._collection.find_one({"user_name": user_name}))
        if user is None:
            raise NotFoundError(f"User '{user_name}' not found")
        return user

    async def append_login_event(self, user_name: str, event: LoginEvent) -> User:
        """Atomically push a login event onto the user's history.

        Returns the user as stored after the append.

        Raises:
            NotFoundError: If no such user exists
        """
        doc = await self._collection.find_one_and_update(
            {"user_name": user_name},
            {"$push": {"login_history": event.model_dump()}},
            return_document=ReturnDocument.AFTER,
        )
        user = User.from_mongo(doc)
        if user is None:
            raise NotFoundError(f"User '{user_name}' not found")
        return user
