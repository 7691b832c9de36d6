# heymies/entrypoints/api/deps.py
from __future__ import annotations

import secrets

from fastapi import Depends, Header, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from ...adapters.repos.profiles import ProfileRepository
from ...config import settings
from ...db import get_session
from ...models import ProfileRole

ADMIN_REALM = 'Basic realm="HeyMies Admin"'

_basic = HTTPBasic(auto_error=False)


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    if settings.API_KEY:
        if not x_api_key or x_api_key != settings.API_KEY:
            raise HTTPException(status_code=401, detail="Invalid API key")


def require_admin(credentials: HTTPBasicCredentials | None = Depends(_basic)) -> str:
    if not settings.ADMIN_USER or not settings.ADMIN_PASS:
        raise HTTPException(status_code=500, detail="Admin credentials not configured")

    ok = credentials is not None and (
        secrets.compare_digest(credentials.username.encode(), settings.ADMIN_USER.encode())
        and secrets.compare_digest(credentials.password.encode(), settings.ADMIN_PASS.encode())
    )
    if not ok:
        raise HTTPException(status_code=401, detail="Auth required", headers={"WWW-Authenticate": ADMIN_REALM})
    return credentials.username


def current_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> str:
    """Caller identity, set by the upstream auth provider."""
    uid = (x_user_id or "").strip()
    if not uid:
        raise HTTPException(status_code=401, detail="Sign in required")
    return uid


async def require_crm_user(
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
) -> str:
    """
    Signed-in agent or private seller. Buyers, and callers who never signed up, are turned away.
    """
    profile = await ProfileRepository(session).get(user_id)
    if profile is None:
        raise HTTPException(status_code=403, detail="Profile missing")
    if profile.role == ProfileRole.buyer:
        raise HTTPException(status_code=403, detail="Agents and sellers only")
    return user_id


async def reject_buyers(
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
) -> str:
    profile = await ProfileRepository(session).get(user_id)
    if profile is not None and profile.role == ProfileRole.buyer:
        raise HTTPException(status_code=403, detail="Agents and sellers only")
    return user_id
