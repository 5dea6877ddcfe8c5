from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor


class MongoModel(BaseModel):
    """Document stored in MongoDB, keyed by a UUID kept under `_id`."""

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Dump the model for insertion, with `id` stored as `_id`."""
        data = self.model_dump()
        data["_id"] = data.pop("id")
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Drain a cursor into model instances."""
        return [cls.model_validate(doc) async for doc in cursor]

    @classmethod
    def from_mongo(cls, doc: dict[str, Any] | None) -> Self | None:
        if doc is None:
            return None
        return cls.model_validate(doc)
