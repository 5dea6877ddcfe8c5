from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from storefront.config import Config

if TYPE_CHECKING:
    from storefront.core.modules.access.service import AccessService
    from storefront.core.modules.auth.service import AuthService
    from storefront.core.modules.category.service import CategoryService
    from storefront.core.modules.item.service import ItemService
    from storefront.core.modules.media.service import MediaService
    from storefront.core.modules.session.service import SessionService
    from storefront.core.modules.user.service import UserService

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that builds every service against one database."""

    user: UserService
    auth: AuthService
    session: SessionService
    access: AccessService
    category: CategoryService
    item: ItemService
    media: MediaService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._services: list[Service] = []
        self._database = database

        # (attribute_name, module_path, class_name), started in this order
        service_configs = [
            ("user", "storefront.core.modules.user.service", "UserService"),
            ("auth", "storefront.core.modules.auth.service", "AuthService"),
            ("session", "storefront.core.modules.session.service", "SessionService"),
            ("access", "storefront.core.modules.access.service", "AccessService"),
            ("category", "storefront.core.modules.category.service", "CategoryService"),
            ("item", "storefront.core.modules.item.service", "ItemService"),
            ("media", "storefront.core.modules.media.service", "MediaService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances.

    The database handle lives exactly as long as `lifespan()`: opened on
    entry, closed on exit. Pass `mongo_client` to use an already constructed
    client instead of one built from `config.database_url`.
    """

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config, mongo_client: AsyncMongoClient[dict[str, Any]] | None = None) -> None:
        self.config = config
        if mongo_client is None:
            mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
        self.mongo_client = mongo_client
        self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Check the database is reachable, then start services.

        Any failure here propagates so the server refuses to start.
        """
        await self.database.command("ping")
        await self.services.start_all()
        logger.info("core_started", database=self.database.name)

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        await self.mongo_client.aclose()
