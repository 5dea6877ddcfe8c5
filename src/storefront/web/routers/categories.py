from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from storefront.core.modules.category.models import Category
from storefront.web.deps import AppDep, AuthTokenDep
from storefront.web.openapi import ErrorResponse, LoginRequiredResponse

router = APIRouter(tags=["categories"])


class CreateCategoryRequest(BaseModel):
    """Request to create a category."""

    name: str = Field(..., description="Category name")


@router.get(
    "/categories",
    summary="List categories",
    description="Get all categories.",
    operation_id="listCategories",
    responses={
        200: {"description": "List of categories"},
        401: {"model": LoginRequiredResponse, "description": "Not logged in"},
    },
)
async def list_categories(app: AppDep, auth_token: AuthTokenDep) -> list[Category]:
    return await app.get_categories(auth_token)


@router.post(
    "/categories",
    summary="Add category",
    description="Create a new category.",
    operation_id="addCategory",
    status_code=201,
    responses={
        201: {"description": "Category created"},
        400: {"model": ErrorResponse, "description": "Blank category name"},
        401: {"model": LoginRequiredResponse, "description": "Not logged in"},
    },
)
async def add_category(req: CreateCategoryRequest, app: AppDep, auth_token: AuthTokenDep) -> Category:
    return await app.add_category(auth_token, req.name)


@router.delete(
    "/categories/{category_id}",
    summary="Delete category",
    description="Delete a category. Items filed under it are kept without a category.",
    operation_id="deleteCategory",
    status_code=204,
    responses={
        204: {"description": "Category deleted"},
        401: {"model": LoginRequiredResponse, "description": "Not logged in"},
        404: {"model": ErrorResponse, "description": "Category not found"},
    },
)
async def delete_category(category_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_category(auth_token, category_id)
