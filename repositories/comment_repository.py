"""MongoDB access for the `comments` collection."""

from __future__ import annotations

from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection

from schemas.models.comment import CommentDoc
from shared.logging import get_logger

log = get_logger(__name__)


class CommentRepository:
    def __init__(self, collection: AsyncCollection) -> None:
        self._col = collection

    async def insert(self, doc: CommentDoc) -> ObjectId:
        try:
            result = await self._col.insert_one(doc.to_mongo())
        except Exception as e:
            log.error(
                "comment_insert_failed",
                post_id=doc.post_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        return result.inserted_id
