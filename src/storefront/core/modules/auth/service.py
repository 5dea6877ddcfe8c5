from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from storefront.core.core import Service
from storefront.core.modules.user.models import LoginEvent, User
from storefront.core.modules.user.password import PasswordHasher
from storefront.errors import AuthError, AuthErrorKind, DuplicateError, NotFoundError
from storefront.utils import now

logger = structlog.get_logger(__name__)


class AuthService(Service):
    """Registration and login on top of the credential store.

    Holds no state between calls; everything lives in the user collection.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._hasher: PasswordHasher | None = None

    @property
    def hasher(self) -> PasswordHasher:
        if self._hasher is None:
            self._hasher = PasswordHasher(self.core.config.password_hash_rounds)
        return self._hasher

    async def register(self, user_name: str, password: str, password2: str, email: str | None) -> None:
        """Create an account.

        Raises:
            AuthError: PASSWORD_MISMATCH, USER_NAME_TAKEN or REGISTRATION_FAILED
        """
        if password != password2:
            raise AuthError(AuthErrorKind.PASSWORD_MISMATCH, "Passwords do not match", user_name)

        password_hash = await self.hasher.hash(password)
        try:
            await self.core.services.user.create_user(user_name, password_hash, email)
        except DuplicateError as e:
            raise AuthError(AuthErrorKind.USER_NAME_TAKEN, "User Name already taken", user_name) from e
        except PyMongoError as e:
            logger.warning("registration_failed", user_name=user_name, error=str(e))
            raise AuthError(AuthErrorKind.REGISTRATION_FAILED, f"Error creating the user: {e}", user_name) from e

    async def login(self, user_name: str, password: str, user_agent: str) -> User:
        """Check credentials and record the login.

        Returns the user with the new login event already appended.

        Raises:
            AuthError: USER_NOT_FOUND, INVALID_CREDENTIALS or HISTORY_UPDATE_FAILED
        """
        try:
            user = await self.core.services.user.find_by_user_name(user_name)
        except NotFoundError as e:
            raise AuthError(AuthErrorKind.USER_NOT_FOUND, f"Unable to find user: {user_name}", user_name) from e

        if not await self.hasher.verify(password, user.password_hash):
            logger.info("login_rejected", user_name=user_name)
            raise AuthError(AuthErrorKind.INVALID_CREDENTIALS, f"Incorrect Password for user: {user_name}", user_name)

        event = LoginEvent(date_time=now(), user_agent=user_agent)
        try:
            user = await self.core.services.user.append_login_event(user_name, event)
        except (PyMongoError, NotFoundError) as e:
            logger.warning("login_history_update_failed", user_name=user_name, error=str(e))
            raise AuthError(
                AuthErrorKind.HISTORY_UPDATE_FAILED, f"Error updating login history: {e}", user_name
            ) from e

        logger.info("user_logged_in", user_name=user_name, login_count=len(user.login_history))
        return user
