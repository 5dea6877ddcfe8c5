from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any
from uuid import UUID

from pymongo import AsyncMongoClient

from storefront.config import Config
from storefront.core.core import Core
from storefront.core.modules.category.models import Category
from storefront.core.modules.item.models import Item, ShopView
from storefront.core.modules.session.models import AuthToken, Session, SessionUserView
from storefront.core.modules.user.models import LoginEvent


class App:
    """Facade for all application operations, checks the session before delegating to Core."""

    def __init__(self, config: Config, mongo_client: AsyncMongoClient[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, mongo_client)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    async def register(self, user_name: str, password: str, password2: str, email: str | None) -> None:
        """Create a new account."""
        await self._core.services.auth.register(user_name, password, password2, email)

    async def login(self, user_name: str, password: str, user_agent: str) -> Session:
        """Authenticate user, record the login and open a session."""
        user = await self._core.services.auth.login(user_name, password, user_agent)
        return await self._core.services.session.create_session(user)

    async def logout(self, auth_token: AuthToken | None) -> None:
        """Invalidate the session immediately, whatever time it had left."""
        if auth_token:
            await self._core.services.session.invalidate_session(auth_token)

    async def get_current_user(self, auth_token: AuthToken | None) -> SessionUserView:
        """Get the logged-in user as recorded in the session."""
        session = await self._core.services.access.ensure_authenticated(auth_token)
        return SessionUserView.from_session(session)

    async def get_login_history(self, auth_token: AuthToken | None) -> list[LoginEvent]:
        """Get the login history snapshot taken when the session was opened."""
        session = await self._core.services.access.ensure_authenticated(auth_token)
        return session.login_history

    # === Public shop ===
    async def get_shop(self, category_id: UUID | None = None) -> ShopView:
        """Get published items, optionally only one category's, and all categories."""
        if category_id is not None:
            items = await self._core.services.item.get_published_items_by_category(category_id)
        else:
            items = await self._core.services.item.get_published_items()
        categories = await self._core.services.category.get_categories()
        return ShopView(items=items, categories=categories)

    async def get_shop_item(self, item_id: UUID) -> ShopView:
        """Get one item alongside the regular shop listing."""
        item = await self._core.services.item.get_item(item_id)
        shop = await self.get_shop()
        return shop.model_copy(update={"item": item})

    async def get_item(self, item_id: UUID) -> Item:
        return await self._core.services.item.get_item(item_id)

    # === Catalog administration ===
    async def get_items(
        self, auth_token: AuthToken | None, category_id: UUID | None = None, min_date: datetime | None = None
    ) -> list[Item]:
        """List items filtered by category or else by minimum post date (requires login)."""
        await self._core.services.access.ensure_authenticated(auth_token)
        if category_id is not None:
            return await self._core.services.item.get_items_by_category(category_id)
        if min_date is not None:
            return await self._core.services.item.get_items_by_min_date(min_date)
        return await self._core.services.item.get_all_items()

    async def add_item(
        self,
        auth_token: AuthToken | None,
        title: str,
        body: str | None,
        price: float | None,
        published: bool,
        category_id: UUID | None,
        image_content: bytes = b"",
        image_filename: str = "",
    ) -> Item:
        """Upload the feature image if any, then create the item (requires login)."""
        await self._core.services.access.ensure_authenticated(auth_token)
        feature_image = await self._core.services.media.upload_image(image_content, image_filename)
        return await self._core.services.item.add_item(title, body, price, published, category_id, feature_image)

    async def delete_item(self, auth_token: AuthToken | None, item_id: UUID) -> None:
        await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.item.delete_item(item_id)

    async def get_categories(self, auth_token: AuthToken | None) -> list[Category]:
        await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.category.get_categories()

    async def add_category(self, auth_token: AuthToken | None, name: str) -> Category:
        await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.category.add_category(name)

    async def delete_category(self, auth_token: AuthToken | None, category_id: UUID) -> None:
        """Delete a category, detaching its items (requires login)."""
        await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.category.delete_category(category_id)
