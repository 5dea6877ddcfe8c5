from typing import Annotated

from fastapi import APIRouter, Header, Response
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from storefront.core.modules.session.models import SessionUserView
from storefront.web.deps import AUTH_COOKIE_NAME, AppDep, AuthTokenDep
from storefront.web.openapi import AuthErrorResponse

router = APIRouter(tags=["auth"])

ITEMS_PATH = "/api/v1/items"


class RegisterRequest(BaseModel):
    """Account registration request."""

    user_name: str = Field(..., min_length=1, description="Unique user name")
    password: str = Field(..., min_length=1, description="Password")
    password2: str = Field(..., description="Password confirmation, must equal password")
    email: str | None = Field(None, description="Email address (optional)")

    model_config = {
        "json_schema_extra": {
            "examples": [{"user_name": "alice", "password": "p1", "password2": "p1", "email": "a@x.com"}]
        }
    }


class RegisterResponse(BaseModel):
    """Registration confirmation."""

    message: str = Field(..., description="Confirmation message")
    user_name: str = Field(..., description="Registered user name")


class LoginRequest(BaseModel):
    """Authentication request."""

    user_name: str = Field(..., description="User name for authentication")
    password: str = Field(..., description="Password for authentication")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Session token for subsequent requests")
    user: SessionUserView = Field(..., description="Logged-in user with login history")
    redirect_to: str = Field(ITEMS_PATH, description="Where the client should go next")


@router.post(
    "/auth/register",
    summary="Register account",
    description="Create a new user account. Password and confirmation must match and the user name must be unused.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "User created"},
        400: {"model": AuthErrorResponse, "description": "Passwords do not match"},
        409: {"model": AuthErrorResponse, "description": "User name already taken"},
        500: {"model": AuthErrorResponse, "description": "User could not be created"},
    },
)
async def register(register_data: RegisterRequest, app: AppDep) -> RegisterResponse:
    await app.register(register_data.user_name, register_data.password, register_data.password2, register_data.email)
    return RegisterResponse(message="User created", user_name=register_data.user_name)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with user name and password. Records the login and opens a session.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": AuthErrorResponse, "description": "Unknown user or wrong password"},
        500: {"model": AuthErrorResponse, "description": "Login history could not be updated"},
    },
)
async def login(
    login_data: LoginRequest,
    app: AppDep,
    response: Response,
    user_agent: Annotated[str, Header()] = "",
) -> LoginResponse:
    session = await app.login(login_data.user_name, login_data.password, user_agent)

    # Browser-session cookie: expiry, including the sliding extension, is enforced server-side
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=session.auth_token,
        httponly=True,
        samesite="lax",
        secure=False,  # Set to True in production with HTTPS
    )

    return LoginResponse(token=session.auth_token, user=SessionUserView.from_session(session))


@router.api_route(
    "/auth/logout",
    methods=["GET", "POST"],
    summary="End session",
    description="Invalidate the current session and redirect to the site root.",
    operation_id="logout",
    status_code=303,
    response_class=RedirectResponse,
    responses={303: {"description": "Logged out, redirecting to /"}},
)
async def logout(app: AppDep, auth_token: AuthTokenDep) -> RedirectResponse:
    await app.logout(auth_token)
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie(AUTH_COOKIE_NAME)
    return response
