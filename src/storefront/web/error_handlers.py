import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from storefront.errors import (
    AccessDeniedError,
    AuthenticationError,
    AuthError,
    AuthErrorKind,
    DuplicateError,
    NotFoundError,
    UploadError,
    ValidationError,
)

logger = logging.getLogger(__name__)

AUTH_ERROR_STATUS_CODES = {
    AuthErrorKind.PASSWORD_MISMATCH: 400,
    AuthErrorKind.USER_NAME_TAKEN: 409,
    AuthErrorKind.REGISTRATION_FAILED: 500,
    AuthErrorKind.USER_NOT_FOUND: 401,
    AuthErrorKind.INVALID_CREDENTIALS: 401,
    AuthErrorKind.HISTORY_UPDATE_FAILED: 500,
}


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, **extra: str | None
) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content: dict[str, str | None] = {"message": message}
    if error_type:
        content["type"] = error_type
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthError):
        # Echo the submitted user name so the client can refill its form
        return create_json_error_response(
            AUTH_ERROR_STATUS_CODES[exc.kind], str(exc), exc.kind.value, user_name=exc.user_name
        )
    if isinstance(exc, AuthenticationError):
        return create_json_error_response(401, str(exc), "authentication_error", redirect_to=exc.redirect_to)

    if isinstance(exc, AccessDeniedError):
        status_code = 403
        error_type = "access_denied"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, DuplicateError):
        status_code = 409
        error_type = "duplicate"
    elif isinstance(exc, UploadError):
        status_code = 502
        error_type = "upload_error"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    else:
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
