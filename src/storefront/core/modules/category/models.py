from storefront.core.db import MongoModel


class Category(MongoModel):
    """Shop category that items can be filed under."""

    name: str
