from storefront.core.core import Service
from storefront.core.modules.access.guard import Allow, Deny, authorize
from storefront.core.modules.session.models import AuthToken, Session
from storefront.errors import AuthenticationError
from storefront.logging import bind_user
from storefront.utils import now


class AccessService(Service):
    async def check(self, auth_token: AuthToken | None) -> Allow | Deny:
        """Look up the token's session and run the guard over it."""
        session = await self.core.services.session.get_session(auth_token) if auth_token else None
        return authorize(session, now(), self.core.config.login_url)

    async def ensure_authenticated(self, auth_token: AuthToken | None) -> Session:
        """Return the live session behind the token, sliding its expiry.

        Raises:
            AuthenticationError: If the guard denies access
        """
        match await self.check(auth_token):
            case Allow(session=session):
                bind_user(session.user_name)
                return await self.core.services.session.touch_session(session)
            case Deny(redirect_to=redirect_to):
                raise AuthenticationError("Login required", redirect_to=redirect_to)
