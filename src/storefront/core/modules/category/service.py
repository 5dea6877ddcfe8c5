from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from storefront.core.core import Service
from storefront.core.modules.category.models import Category
from storefront.errors import NotFoundError, ValidationError
from storefront.utils import empty_to_none

logger = structlog.get_logger(__name__)


class CategoryService(Service):
    """Service for managing shop categories."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("categories")

    async def get_categories(self) -> list[Category]:
        return await Category.list_cursor(self._collection.find())

    async def has_category(self, category_id: UUID) -> bool:
        return await self._collection.count_documents({"_id": category_id}, limit=1) > 0

    async def add_category(self, name: str) -> Category:
        """Create a category. Blank names are rejected."""
        clean_name = empty_to_none(name)
        if clean_name is None:
            raise ValidationError("Category name is required")
        category = Category(name=clean_name)
        await self._collection.insert_one(category.to_mongo())
        logger.info("category_added", category_id=str(category.id), name=category.name)
        return category

    async def delete_category(self, category_id: UUID) -> None:
        """Delete a category and detach the items filed under it."""
        result = await self._collection.delete_one({"_id": category_id})
        if result.deleted_count != 1:
            raise NotFoundError("Unable to Remove Category / Category not found")
        detached = await self.core.services.item.detach_category(category_id)
        logger.info("category_deleted", category_id=str(category_id), detached_items=detached)
