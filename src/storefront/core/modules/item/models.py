"""Catalog item models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from storefront.core.db import MongoModel
from storefront.core.modules.category.models import Category
from storefront.utils import now


class Item(MongoModel):
    """Product listed in the shop.

    Indexed on category_id, published, post_date.
    """

    title: str
    body: str | None = None
    price: float | None = None
    published: bool = False  # Only published items appear in the shop
    post_date: datetime = Field(default_factory=now)
    feature_image: str = ""  # Media host URL, empty when no image was uploaded
    category_id: UUID | None = None


class ShopView(BaseModel):
    """Public shop page: published items, categories and optionally one focused item."""

    items: list[Item] = Field(default_factory=list, description="Published items")
    categories: list[Category] = Field(default_factory=list, description="All categories")
    item: Item | None = Field(None, description="Item being viewed, if any")
