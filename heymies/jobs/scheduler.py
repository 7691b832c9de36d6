# heymies/jobs/scheduler.py
from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from ..config import settings
from ..db import async_session
from ..integrations.services.outbox import count_due_events, dispatch_pending_events
from ..service_layer.jobruns import finish_job_fail, finish_job_success, start_job

log = logging.getLogger(__name__)


async def run_dispatch_quiet() -> dict | None:
    """
    Quiet-by-default posture:
    - If email is not configured, do nothing.
    - If there are no due outbox events, do nothing.
    """
    if not settings.RESEND_API_KEY:
        return None  # QUIET

    async with async_session() as session:
        due = await count_due_events(session)
    if due == 0:
        return None  # QUIET

    # do actual dispatch outside the count transaction
    async with async_session() as session:
        jr = await start_job(session, "dispatch_scheduled", meta={"trigger": "interval", "due": due})
        try:
            res = await dispatch_pending_events(session=session)
            await finish_job_success(session, jr, res)
            await session.commit()
        except Exception as e:
            await finish_job_fail(session, jr, e)
            await session.commit()
            log.exception("scheduled dispatch failed")
            raise
    if res["failed"]:
        log.warning("scheduled dispatch: %d delivered, %d failed", res["delivered"], res["failed"])
    return res


def build_scheduler() -> AsyncIOScheduler:
    sched = AsyncIOScheduler()

    # coroutine job: awaited on the scheduler loop, failures logged by apscheduler
    sched.add_job(
        run_dispatch_quiet,
        id="outbox_dispatch",
        max_instances=1,
        coalesce=True,
        trigger="interval",
        minutes=int(settings.SCHED_DISPATCH_INTERVAL_MINUTES),
    )

    return sched
