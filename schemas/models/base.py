"""
Base model for MongoDB document models.

Documents are only ever inserted, never read back, so the base carries just
the `_id` mapping and the insert-side conversion.
"""

from __future__ import annotations

from typing import Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class MongoBaseModel(BaseModel):
    """Stores the MongoDB _id as `id`; MongoDB assigns it on insert."""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    id: Optional[ObjectId] = Field(default=None, alias="_id")

    def to_mongo(self) -> dict:
        """Return a dict ready for insert_one(), leaving out an unset `_id`."""
        data = self.model_dump(by_alias=True)
        if data.get("_id") is None:
            data.pop("_id", None)
        return data
