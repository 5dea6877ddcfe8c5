from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

# Endpoints reachable without a session
PUBLIC_ENDPOINTS = {
    ("POST", "/api/v1/auth/register"),
    ("POST", "/api/v1/auth/login"),
    ("GET", "/api/v1/auth/logout"),
    ("POST", "/api/v1/auth/logout"),
    ("GET", "/api/v1/shop"),
    ("GET", "/api/v1/shop/{item_id}"),
    ("GET", "/api/v1/item/{item_id}"),
    ("GET", "/health"),
    ("GET", "/"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Storefront API",
            version="0.1.0",
            summary="Shop catalog with a session-protected back office",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Session token from /auth/login (preferred)",
            },
            "AuthTokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": "auth_token",
                "description": "Session token stored in cookie by /auth/login",
            },
        }

        # Applied globally, then removed from public endpoints
        openapi_schema["security"] = [
            {"BearerAuth": []},
            {"AuthTokenCookie": []},
        ]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Item 'c0ffee00-0000-0000-0000-000000000000' not found", "type": "not_found"},
                {"message": "Category name is required", "type": "validation_error"},
            ]
        }
    }


class LoginRequiredResponse(ErrorResponse):
    """Returned when a protected endpoint is called without a live session."""

    redirect_to: str | None = Field(None, description="Login entry point")


class AuthErrorResponse(ErrorResponse):
    """Registration or login failure, echoing the submitted user name."""

    user_name: str = Field("", description="User name that was submitted")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Passwords do not match", "type": "password_mismatch", "user_name": "alice"},
                {"message": "Incorrect Password for user: alice", "type": "invalid_credentials", "user_name": "alice"},
            ]
        }
    }
