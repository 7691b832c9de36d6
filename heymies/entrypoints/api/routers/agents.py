# heymies/entrypoints/api/routers/agents.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ....schemas import AgentAccountOut, AgentApplyIn, AgentSignupIn, OkResponse
from ....service_layer.use_cases.agents import apply_as_agent, signup_agent
from ..deps import current_user_id, get_session

log = logging.getLogger(__name__)

router = APIRouter(tags=["agents"])


@router.post("/agents/apply", response_model=OkResponse)
async def agent_apply(body: AgentApplyIn, session: AsyncSession = Depends(get_session)):
    try:
        await apply_as_agent(session, body)
        await session.commit()
    except ValueError as e:
        return JSONResponse({"ok": False, "error": str(e)}, status_code=400)
    except SQLAlchemyError:
        await session.rollback()
        log.exception("agent application insert failed")
        return JSONResponse({"ok": False, "error": "DB error"}, status_code=500)
    return OkResponse(ok=True)


@router.post("/agents/signup", response_model=AgentAccountOut)
async def agent_signup(
    body: AgentSignupIn,
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
) -> AgentAccountOut:
    try:
        account = await signup_agent(session, user_id, body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    await session.commit()
    return AgentAccountOut.model_validate(account)
