from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from storefront.app import App
from storefront.core.modules.session.models import AuthToken

AUTH_COOKIE_NAME = "auth_token"

# Security schemes
bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name=AUTH_COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> AuthToken | None:
    """Read the session token from the Authorization Bearer header or the cookie.

    Validation is left to the App facade, which runs the session guard.
    """
    if credentials and credentials.scheme.lower() == "bearer":
        return AuthToken(credentials.credentials)
    if token_cookie:
        return AuthToken(token_cookie)
    return None


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken | None, Depends(get_auth_token)]
