from datetime import datetime
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from storefront.core.core import Service
from storefront.core.modules.item.models import Item
from storefront.errors import NotFoundError, ValidationError
from storefront.utils import empty_to_none, now

logger = structlog.get_logger(__name__)


class ItemService(Service):
    """Service for managing catalog items."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("items")

    async def on_start(self) -> None:
        await self._collection.create_index([("category_id", 1)])
        await self._collection.create_index([("published", 1)])
        await self._collection.create_index([("post_date", -1)])

    async def _find(self, query: dict[str, Any]) -> list[Item]:
        return await Item.list_cursor(self._collection.find(query))

    async def get_all_items(self) -> list[Item]:
        return await self._find({})

    async def get_published_items(self) -> list[Item]:
        return await self._find({"published": True})

    async def get_published_items_by_category(self, category_id: UUID) -> list[Item]:
        return await self._find({"published": True, "category_id": category_id})

    async def get_items_by_category(self, category_id: UUID) -> list[Item]:
        return await self._find({"category_id": category_id})

    async def get_items_by_min_date(self, min_date: datetime) -> list[Item]:
        """Get items posted on or after `min_date`."""
        return await self._find({"post_date": {"$gte": min_date}})

    async def get_item(self, item_id: UUID) -> Item:
        """Get an item by ID."""
        item = Item.from_mongo(await self._collection.find_one({"_id": item_id}))
        if item is None:
            raise NotFoundError(f"Item '{item_id}' not found")
        return item

    async def add_item(
        self,
        title: str,
        body: str | None,
        price: float | None,
        published: bool,
        category_id: UUID | None,
        feature_image: str = "",
    ) -> Item:
        """Create an item stamped with the current time.

        Raises:
            ValidationError: If the title is blank or the category does not exist
        """
        clean_title = empty_to_none(title)
        if clean_title is None:
            raise ValidationError("Item title is required")
        if category_id is not None and not await self.core.services.category.has_category(category_id):
            raise ValidationError(f"Category '{category_id}' does not exist")

        item = Item(
            title=clean_title,
            body=empty_to_none(body),
            price=price,
            published=bool(published),
            post_date=now(),
            feature_image=feature_image,
            category_id=category_id,
        )
        await self._collection.insert_one(item.to_mongo())
        logger.info("item_added", item_id=str(item.id), title=item.title, published=item.published)
        return item

    async def delete_item(self, item_id: UUID) -> None:
        result = await self._collection.delete_one({"_id": item_id})
        if result.deleted_count != 1:
            raise NotFoundError("Unable to Remove Item / Item not found")
        logger.info("item_deleted", item_id=str(item_id))

    async def detach_category(self, category_id: UUID) -> int:
        """Clear the category of every item filed under it, returning how many changed."""
        result = await self._collection.update_many({"category_id": category_id}, {"$set": {"category_id": None}})
        return result.modified_count
