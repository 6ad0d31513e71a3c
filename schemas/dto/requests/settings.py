"""
Request DTOs for the admin settings endpoints.

CredentialsUpdateRequest — PUT /admin/settings/recaptcha
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CredentialsUpdateRequest(BaseModel):
    """Fields left as None are not touched."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    site_key: Optional[str] = None
    secret_key: Optional[str] = None
