"""
Request DTOs for comment endpoints.

CommentCreateRequest — POST /comments (form-encoded, like a classic comment form)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Form field the reCAPTCHA widget writes its token into
RECAPTCHA_RESPONSE_FIELD = "g-recaptcha-response"


class CommentCreateRequest(BaseModel):
    """Comment fields of POST /comments. The captcha token is read separately."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    post_id: str = Field(min_length=1, max_length=200)
    author: str = Field(min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=254)
    content: str = Field(min_length=1, max_length=10_000)

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email_is_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v
