"""
Health check endpoint.

GET /health — checks MongoDB, Redis and the reCAPTCHA configuration.
Rules:
- MongoDB failure → "unhealthy" (503) — comments cannot be stored without it.
- Redis failure or absence → "degraded" (200) — credentials fall back to the
  process-local store.
- No secret key → "degraded" (200) — every submission is being rejected.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dependencies import get_credential_store, get_db, get_redis
from infrastructure.credentials.protocol import CredentialStore
from schemas.dto.responses.common import HealthResponse
from services.credentials_service import load_credentials

router = APIRouter(tags=["health"])


async def _check_mongodb(db) -> str:
    try:
        await db.client.admin.command("ping")
    except Exception:
        return "error"
    return "ok"


async def _check_redis(redis) -> str:
    if redis is None:
        return "not_configured"
    try:
        await redis.ping()
    except Exception:
        return "error"
    return "ok"


async def _check_recaptcha(store: CredentialStore) -> str:
    credentials = await load_credentials(store)
    return "ok" if credentials.is_configured else "not_configured"


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db=Depends(get_db),
    redis=Depends(get_redis),
    store: CredentialStore = Depends(get_credential_store),
) -> JSONResponse:
    checks: dict[str, str] = {
        "mongodb": await _check_mongodb(db),
        "redis": await _check_redis(redis),
        "recaptcha": await _check_recaptcha(store),
    }

    if checks["mongodb"] != "ok":
        overall = "unhealthy"
    elif checks["redis"] != "ok" or checks["recaptcha"] != "ok":
        overall = "degraded"
    else:
        overall = "healthy"

    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(
        status_code=status_code,
        content={"status": overall, "checks": checks},
    )
