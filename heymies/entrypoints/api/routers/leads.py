# heymies/entrypoints/api/routers/leads.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ....adapters.repos.leads import LeadRepository
from ....models import Lead, LeadEvent
from ....schemas import (
    EarlyAccessIn,
    LeadDetailOut,
    LeadEventOut,
    LeadNoteCreate,
    LeadOut,
    LeadStatusUpdate,
    OkResponse,
)
from ....service_layer.use_cases.leads import (
    add_lead_note,
    capture_early_access_lead,
    get_lead_with_events,
    update_lead_status,
)
from ..deps import get_session, require_crm_user

log = logging.getLogger(__name__)

router = APIRouter(tags=["leads"])


def lead_out(lead: Lead) -> LeadOut:
    return LeadOut(
        id=lead.id,
        email=lead.email,
        source=lead.source,
        tag=lead.tag,
        full_name=lead.full_name,
        phone=lead.phone,
        message=lead.message,
        status=lead.status.value,
        score=lead.score,
        created_at=lead.created_at,
    )


def event_out(ev: LeadEvent) -> LeadEventOut:
    return LeadEventOut(
        id=ev.id,
        event_type=ev.event_type.value,
        body=ev.body,
        actor_id=ev.actor_id,
        created_at=ev.created_at,
    )


@router.post("/leads", response_model=OkResponse)
async def early_access(body: EarlyAccessIn, session: AsyncSession = Depends(get_session)):
    try:
        await capture_early_access_lead(session, body.email, body.source)
        await session.commit()
    except ValueError as e:
        return JSONResponse({"ok": False, "error": str(e)}, status_code=400)
    except SQLAlchemyError:
        await session.rollback()
        log.exception("early-access lead insert failed")
        return JSONResponse({"ok": False, "error": "DB error"}, status_code=500)
    return OkResponse(ok=True)


@router.get("/leads", response_model=list[LeadOut], dependencies=[Depends(require_crm_user)])
async def list_leads(
    q: str | None = Query(default=None),
    limit: int = Query(200, ge=1, le=200),
    session: AsyncSession = Depends(get_session),
) -> list[LeadOut]:
    rows = await LeadRepository(session).list_recent(q=q, limit=limit)
    return [lead_out(r) for r in rows]


@router.get("/leads/{lead_id}", response_model=LeadDetailOut, dependencies=[Depends(require_crm_user)])
async def lead_detail(lead_id: int, session: AsyncSession = Depends(get_session)) -> LeadDetailOut:
    try:
        lead, events = await get_lead_with_events(session, lead_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return LeadDetailOut(lead=lead_out(lead), events=[event_out(ev) for ev in events])


@router.post("/leads/{lead_id}/status", response_model=LeadOut)
async def set_lead_status(
    lead_id: int,
    body: LeadStatusUpdate,
    user_id: str = Depends(require_crm_user),
    session: AsyncSession = Depends(get_session),
) -> LeadOut:
    try:
        lead = await update_lead_status(session, lead_id, body.status, actor_id=user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await session.commit()
    return lead_out(lead)


@router.post("/leads/{lead_id}/notes", response_model=LeadEventOut)
async def add_note(
    lead_id: int,
    body: LeadNoteCreate,
    user_id: str = Depends(require_crm_user),
    session: AsyncSession = Depends(get_session),
) -> LeadEventOut:
    try:
        ev = await add_lead_note(session, lead_id, body.body, actor_id=user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await session.commit()
    return event_out(ev)
