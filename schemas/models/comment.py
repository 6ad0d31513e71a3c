"""
Comment document model.

Maps to the `comments` MongoDB collection. A document is only ever written
after the submission passed reCAPTCHA verification.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from schemas.models.base import MongoBaseModel


class CommentDoc(MongoBaseModel):
    """Document model for the `comments` collection."""

    post_id: str
    author: str
    email: Optional[str] = None
    content: str
    remote_address: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
