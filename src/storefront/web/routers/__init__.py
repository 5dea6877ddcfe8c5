from storefront.web.routers.auth import router as auth_router
from storefront.web.routers.categories import router as categories_router
from storefront.web.routers.items import router as items_router
from storefront.web.routers.profile import router as profile_router
from storefront.web.routers.shop import router as shop_router

__all__ = [
    "auth_router",
    "categories_router",
    "items_router",
    "profile_router",
    "shop_router",
]
