"""Tests for category and item services."""

from datetime import timedelta
from uuid import uuid4

import pytest

from storefront.errors import NotFoundError, ValidationError
from storefront.utils import now


class TestCategoryService:
    @pytest.mark.asyncio
    async def test_add_and_list(self, core):
        await core.services.category.add_category("Shoes")
        await core.services.category.add_category("Hats")

        names = {category.name for category in await core.services.category.get_categories()}
        assert names == {"Shoes", "Hats"}

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, core):
        with pytest.raises(ValidationError):
            await core.services.category.add_category("   ")

    @pytest.mark.asyncio
    async def test_delete_unknown_category(self, core):
        with pytest.raises(NotFoundError, match="Category not found"):
            await core.services.category.delete_category(uuid4())

    @pytest.mark.asyncio
    async def test_delete_detaches_items(self, core):
        shoes = await core.services.category.add_category("Shoes")
        item = await core.services.item.add_item("Boot", None, 10.0, True, shoes.id)

        await core.services.category.delete_category(shoes.id)

        assert await core.services.category.get_categories() == []
        assert (await core.services.item.get_item(item.id)).category_id is None


class TestItemService:
    @pytest.mark.asyncio
    async def test_add_item_stamps_post_date(self, core):
        before = now()
        item = await core.services.item.add_item("Boot", "Leather", 99.5, True, None)

        assert item.post_date >= before
        assert item.feature_image == ""
        assert (await core.services.item.get_item(item.id)).title == "Boot"

    @pytest.mark.asyncio
    async def test_blank_fields(self, core):
        """Test that a blank body is stored as missing and a blank title is rejected."""
        item = await core.services.item.add_item("Boot", "", None, False, None)
        assert item.body is None

        with pytest.raises(ValidationError):
            await core.services.item.add_item("", "body", None, False, None)

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, core):
        with pytest.raises(ValidationError, match="does not exist"):
            await core.services.item.add_item("Boot", None, None, True, uuid4())

    @pytest.mark.asyncio
    async def test_published_filters(self, core):
        shoes = await core.services.category.add_category("Shoes")
        hats = await core.services.category.add_category("Hats")
        await core.services.item.add_item("Boot", None, None, True, shoes.id)
        await core.services.item.add_item("Sandal", None, None, False, shoes.id)
        await core.services.item.add_item("Cap", None, None, True, hats.id)

        assert len(await core.services.item.get_all_items()) == 3
        assert {i.title for i in await core.services.item.get_published_items()} == {"Boot", "Cap"}
        assert {i.title for i in await core.services.item.get_items_by_category(shoes.id)} == {"Boot", "Sandal"}
        assert [i.title for i in await core.services.item.get_published_items_by_category(shoes.id)] == ["Boot"]

    @pytest.mark.asyncio
    async def test_items_by_min_date(self, core):
        item = await core.services.item.add_item("Boot", None, None, True, None)

        assert await core.services.item.get_items_by_min_date(item.post_date - timedelta(days=1)) == [item]
        assert await core.services.item.get_items_by_min_date(item.post_date + timedelta(days=1)) == []

    @pytest.mark.asyncio
    async def test_empty_listing_is_empty_list(self, core):
        assert await core.services.item.get_published_items() == []

    @pytest.mark.asyncio
    async def test_delete(self, core):
        item = await core.services.item.add_item("Boot", None, None, True, None)

        await core.services.item.delete_item(item.id)

        with pytest.raises(NotFoundError):
            await core.services.item.get_item(item.id)
        with pytest.raises(NotFoundError, match="Item not found"):
            await core.services.item.delete_item(item.id)
