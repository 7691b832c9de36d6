# heymies/entrypoints/api/routers/jobs.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, require_api_key
from ....jobs.dispatch import run_dispatch
from ....schemas import DispatchResult
from ....service_layer.jobruns import finish_job_fail, finish_job_success, latest_run, run_summary, start_job

router = APIRouter(tags=["jobs"], dependencies=[Depends(require_api_key)])


@router.post("/jobs/dispatch", response_model=DispatchResult)
async def dispatch_outbox(
    batch_size: int = Query(50, ge=1, le=500),
    session: AsyncSession = Depends(get_session),
) -> DispatchResult:
    """Deliver queued emails now instead of waiting for the scheduler."""
    jr = await start_job(session, "dispatch_api", meta={"trigger": "api", "batch_size": batch_size})
    try:
        result = await run_dispatch(session=session, batch_size=batch_size)
        await finish_job_success(session, jr, result)
        await session.commit()
        return DispatchResult(**result)
    except Exception as e:
        await finish_job_fail(session, jr, e)
        await session.commit()
        raise


@router.get("/jobs/dispatch/last")
async def last_dispatch(session: AsyncSession = Depends(get_session)) -> dict[str, Any]:
    return {"run": run_summary(await latest_run(session))}
