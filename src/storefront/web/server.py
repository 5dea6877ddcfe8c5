from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from storefront.app import App
from storefront.config import Config
from storefront.errors import UserError
from storefront.logging import clear_request_context
from storefront.web.error_handlers import general_exception_handler, user_error_handler
from storefront.web.openapi import set_custom_openapi
from storefront.web.routers import (
    auth_router,
    categories_router,
    items_router,
    profile_router,
    shop_router,
)

API_PREFIX = "/api/v1"


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """Open the database for the lifetime of the server; a failure aborts startup."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Storefront API",
        lifespan=lifespan,
        openapi_tags=[],
    )

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def reset_log_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        clear_request_context()
        return await call_next(request)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse(f"{API_PREFIX}/shop")

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(profile_router, prefix=API_PREFIX)
    app.include_router(shop_router, prefix=API_PREFIX)
    app.include_router(items_router, prefix=API_PREFIX)
    app.include_router(categories_router, prefix=API_PREFIX)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
