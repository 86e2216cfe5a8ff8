import logging

import httpx
from fastapi import Depends, Header, HTTPException

from waki.libs.schemas import AppSettings, get_settings

LOGGER = logging.getLogger(__name__)


async def _lookup_user_id(token: str, settings: AppSettings) -> str | None:
    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{settings.supabase_url.rstrip('/')}/auth/v1/user",
                headers={"Authorization": f"Bearer {token}", "apikey": settings.supabase_anon_key},
                timeout=settings.auth_timeout_seconds,
            )
    except httpx.HTTPError as exc:
        LOGGER.warning("identity lookup failed: %s", exc)
        return None
    if response.status_code != 200:
        return None
    payload = response.json()
    if isinstance(payload, dict) and payload.get("id"):
        return payload["id"]
    return None


async def get_current_user_id(
    authorization: str | None = Header(default=None),
    settings: AppSettings = Depends(get_settings),
) -> str:
    if authorization and authorization.startswith("Bearer "):
        user_id = await _lookup_user_id(authorization.split(" ", 1)[1], settings)
        if user_id:
            return user_id

    if settings.demo_mode and settings.demo_user_id:
        return settings.demo_user_id

    raise HTTPException(status_code=401, detail="Unauthenticated")
