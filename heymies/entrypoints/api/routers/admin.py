# heymies/entrypoints/api/routers/admin.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ....adapters.repos.agents import AgentRepository
from ....adapters.repos.leads import LeadRepository
from ....domain.parsing import clean_str
from ....schemas import AdminAgentPatch, AdminIdBody, AdminLeadPatch, AgentOut, LeadOut, OkResponse
from ....service_layer.use_cases.agents import moderate_agent
from ..deps import get_session, require_admin
from .leads import lead_out

log = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _fail(error: str, status_code: int) -> JSONResponse:
    return JSONResponse({"ok": False, "error": error}, status_code=status_code)


async def _commit(session: AsyncSession, what: str):
    try:
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        log.exception("admin %s failed", what)
        return _fail("DB error", 500)
    return OkResponse(ok=True)


@router.get("/leads", response_model=list[LeadOut])
async def admin_leads(session: AsyncSession = Depends(get_session)) -> list[LeadOut]:
    rows = await LeadRepository(session).list_recent(limit=200)
    return [lead_out(r) for r in rows]


@router.get("/agents", response_model=list[AgentOut])
async def admin_agents(session: AsyncSession = Depends(get_session)) -> list[AgentOut]:
    rows = await AgentRepository(session).list_recent(limit=200)
    return [AgentOut.model_validate(r) for r in rows]


@router.patch("/leads", response_model=OkResponse)
async def tag_lead(body: AdminLeadPatch, session: AsyncSession = Depends(get_session)):
    if not body.id:
        return _fail("Missing id", 400)
    await LeadRepository(session).set_tag(body.id, clean_str(body.tag))
    return await _commit(session, "lead tag")


@router.delete("/leads", response_model=OkResponse)
async def delete_lead(body: AdminIdBody, session: AsyncSession = Depends(get_session)):
    if not body.id:
        return _fail("Missing id", 400)
    await LeadRepository(session).delete(body.id)
    return await _commit(session, "lead delete")


@router.patch("/agents", response_model=OkResponse)
async def set_agent_status(body: AdminAgentPatch, session: AsyncSession = Depends(get_session)):
    try:
        await moderate_agent(session, body.id, body.status)
    except ValueError as e:
        return _fail(str(e), 400)
    return await _commit(session, "agent status")


@router.delete("/agents", response_model=OkResponse)
async def delete_agent(body: AdminIdBody, session: AsyncSession = Depends(get_session)):
    if not body.id:
        return _fail("Missing id", 400)
    await AgentRepository(session).delete(body.id)
    return await _commit(session, "agent delete")
