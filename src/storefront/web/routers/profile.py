from fastapi import APIRouter

from storefront.core.modules.session.models import SessionUserView
from storefront.core.modules.user.models import LoginEvent
from storefront.web.deps import AppDep, AuthTokenDep
from storefront.web.openapi import LoginRequiredResponse

router = APIRouter(tags=["profile"])


@router.get(
    "/profile",
    summary="Get current user",
    description="Get the user recorded in the current session.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": LoginRequiredResponse, "description": "Not logged in"},
    },
)
async def get_profile(app: AppDep, auth_token: AuthTokenDep) -> SessionUserView:
    return await app.get_current_user(auth_token)


@router.get(
    "/profile/history",
    summary="Get login history",
    description="Get the user's login history as of the current session's login, oldest first.",
    operation_id="getLoginHistory",
    responses={
        200: {"description": "Login events"},
        401: {"model": LoginRequiredResponse, "description": "Not logged in"},
    },
)
async def get_login_history(app: AppDep, auth_token: AuthTokenDep) -> list[LoginEvent]:
    return await app.get_login_history(auth_token)
