# heymies/entrypoints/api/routers/health.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ....config import settings
from ....db import db_ok
from ....integrations.services.outbox import count_due_events
from ....service_layer.jobruns import latest_run, run_summary
from ..deps import get_session, require_api_key

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready", dependencies=[Depends(require_api_key)])
async def ready(session: AsyncSession = Depends(get_session)) -> dict[str, Any]:
    """
    Readiness for the deploy check: database reachable, which outbound services are
    configured, how many emails are waiting and how the last dispatch went.
    """
    if not await db_ok(session):
        return {"status": "degraded", "db": False}

    return {
        "status": "ok",
        "db": True,
        "email_configured": bool(settings.RESEND_API_KEY and settings.EMAIL_FROM),
        "ai_configured": bool(settings.OPENAI_API_KEY),
        "emails_due": await count_due_events(session),
        "last_dispatch": run_summary(await latest_run(session)),
    }


@router.get("/debug/routes", dependencies=[Depends(require_api_key)])
def debug_routes(request: Request) -> dict[str, Any]:
    """
    Lists what this server has mounted, e.g. "['POST'] /calculators/bond".
    """
    routes = sorted(
        f"{sorted(r.methods)} {r.path}" if getattr(r, "methods", None) else r.path
        for r in request.app.routes
        if getattr(r, "path", None)
    )
    return {"count": len(routes), "routes": routes}
