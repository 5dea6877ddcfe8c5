from datetime import UTC, date, datetime, time
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, UploadFile

from storefront.core.modules.item.models import Item
from storefront.web.deps import AppDep, AuthTokenDep
from storefront.web.openapi import ErrorResponse, LoginRequiredResponse

router = APIRouter(tags=["items"])


@router.get(
    "/items",
    summary="List items",
    description=(
        "Get all items, published or not. `category_id` limits the list to one category; "
        "otherwise `min_date` limits it to items posted on or after that day (UTC)."
    ),
    operation_id="listItems",
    responses={
        200: {"description": "List of items"},
        401: {"model": LoginRequiredResponse, "description": "Not logged in"},
    },
)
async def list_items(
    app: AppDep, auth_token: AuthTokenDep, category_id: UUID | None = None, min_date: date | None = None
) -> list[Item]:
    min_datetime = datetime.combine(min_date, time.min, tzinfo=UTC) if min_date else None
    return await app.get_items(auth_token, category_id, min_datetime)


@router.post(
    "/items",
    summary="Add item",
    description="Create an item from form fields. An optional `feature_image` file is uploaded to the media host first.",
    operation_id="addItem",
    status_code=201,
    responses={
        201: {"description": "Item created"},
        400: {"model": ErrorResponse, "description": "Invalid item data"},
        401: {"model": LoginRequiredResponse, "description": "Not logged in"},
        502: {"model": ErrorResponse, "description": "Image upload failed"},
    },
)
async def add_item(
    app: AppDep,
    auth_token: AuthTokenDep,
    title: Annotated[str, Form()],
    body: Annotated[str | None, Form()] = None,
    price: Annotated[float | None, Form()] = None,
    published: Annotated[bool, Form()] = False,
    category_id: Annotated[UUID | None, Form()] = None,
    feature_image: Annotated[UploadFile | None, File()] = None,
) -> Item:
    content = b""
    filename = ""
    if feature_image is not None:
        content = await feature_image.read()
        filename = feature_image.filename or "image"
    return await app.add_item(auth_token, title, body, price, published, category_id, content, filename)


@router.delete(
    "/items/{item_id}",
    summary="Delete item",
    description="Delete an item by ID.",
    operation_id="deleteItem",
    status_code=204,
    responses={
        204: {"description": "Item deleted"},
        401: {"model": LoginRequiredResponse, "description": "Not logged in"},
        404: {"model": ErrorResponse, "description": "Item not found"},
    },
)
async def delete_item(item_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_item(auth_token, item_id)
