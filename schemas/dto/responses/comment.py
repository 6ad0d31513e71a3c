"""
Response DTOs for comment endpoints.

CommentResponse — POST /comments (201)
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from schemas.models.comment import CommentDoc


class CommentResponse(BaseModel):
    """Public view of a stored comment. Email and remote address are withheld."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    post_id: str
    author: str
    content: str
    created_at: datetime

    @classmethod
    def from_doc(cls, doc: CommentDoc) -> "CommentResponse":
        return cls(
            id=str(doc.id),
            post_id=doc.post_id,
            author=doc.author,
            content=doc.content,
            created_at=doc.created_at,
        )
