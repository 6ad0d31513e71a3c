"""CredentialStore protocol — the gate's configuration source.

get() returns None for a key that was never configured; absence is a normal
state, never an error. set() performs no authorization of its own.
"""

from typing import Optional, Protocol

from schemas.models.verification import CredentialKey


class CredentialStore(Protocol):
    async def get(self, key: CredentialKey) -> Optional[str]: ...

    async def set(self, key: CredentialKey, value: str) -> None: ...
