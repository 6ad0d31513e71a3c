"""Process-local credential store, used when Redis is not configured."""

from typing import Optional

from schemas.models.verification import CredentialKey


class InMemoryCredentialStore:
    def __init__(self, initial: Optional[dict[CredentialKey, str]] = None) -> None:
        self._values: dict[CredentialKey, str] = {
            key: value for key, value in (initial or {}).items() if value
        }

    async def get(self, key: CredentialKey) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: CredentialKey, value: str) -> None:
        self._values[key] = value
