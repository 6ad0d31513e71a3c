"""Redis-backed credential store.

One plain string key per option so the values are easy to inspect with
redis-cli. Keys never expire.
"""

from typing import Optional

import redis.asyncio as aioredis

from errors import ServiceUnavailableError
from schemas.models.verification import CredentialKey
from shared.logging import get_logger

log = get_logger(__name__)


class RedisCredentialStore:
    def __init__(
        self, redis_client: aioredis.Redis, prefix: str = "recaptcha_comments"
    ) -> None:
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, key: CredentialKey) -> str:
        return f"{self._prefix}:option:{key.option_name}"

    async def get(self, key: CredentialKey) -> Optional[str]:
        # A failed read looks like "not configured", so the gate fails closed
        try:
            raw = await self._redis.get(self._key(key))
        except Exception as e:
            log.error("credential_store_get_error", option=key.value, error=str(e))
            return None
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return raw or None

    async def set(self, key: CredentialKey, value: str) -> None:
        try:
            await self._redis.set(self._key(key), value)
        except Exception as e:
            log.error("credential_store_set_error", option=key.value, error=str(e))
            raise ServiceUnavailableError(
                "Settings could not be saved, please try again later"
            ) from e
        log.info("credential_updated", option=key.value)

    async def seed_missing(self, values: dict[CredentialKey, str]) -> None:
        """Write values for keys that have never been set. Existing keys win."""
        for key, value in values.items():
            if not value:
                continue
            try:
                created = await self._redis.set(self._key(key), value, nx=True)
            except Exception as e:
                log.error("credential_store_seed_error", option=key.value, error=str(e))
                continue
            if created:
                log.info("credential_seeded", option=key.value)
