"""Public shop endpoints, no session required."""

from uuid import UUID

from fastapi import APIRouter

from storefront.core.modules.item.models import Item, ShopView
from storefront.web.deps import AppDep
from storefront.web.openapi import ErrorResponse

router = APIRouter(tags=["shop"])


@router.get(
    "/shop",
    summary="Browse the shop",
    description="Get published items, optionally limited to one category, together with all categories.",
    operation_id="getShop",
    responses={200: {"description": "Shop listing"}},
)
async def get_shop(app: AppDep, category_id: UUID | None = None) -> ShopView:
    return await app.get_shop(category_id)


@router.get(
    "/shop/{item_id}",
    summary="View shop item",
    description="Get one item together with the regular shop listing.",
    operation_id="getShopItem",
    responses={
        200: {"description": "Shop listing focused on one item"},
        404: {"model": ErrorResponse, "description": "Item not found"},
    },
)
async def get_shop_item(item_id: UUID, app: AppDep) -> ShopView:
    return await app.get_shop_item(item_id)


@router.get(
    "/item/{item_id}",
    summary="Get item",
    description="Get a single item by ID.",
    operation_id="getItem",
    responses={
        200: {"description": "Item"},
        404: {"model": ErrorResponse, "description": "Item not found"},
    },
)
async def get_item(item_id: UUID, app: AppDep) -> Item:
    return await app.get_item(item_id)
