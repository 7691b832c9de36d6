# heymies/service_layer/jobruns.py
from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import JobRun, JobRunStatus

DISPATCH_JOBS = ("dispatch_api", "dispatch_scheduled")


async def start_job(session: AsyncSession, job_name: str, meta: dict[str, Any] | None = None) -> JobRun:
    jr = JobRun(
        job_name=job_name,
        started_at=datetime.utcnow(),
        status=JobRunStatus.running,
        meta_json=json.dumps(meta) if meta else None,
    )
    session.add(jr)
    await session.flush()
    return jr


async def finish_job_success(session: AsyncSession, jr: JobRun, summary: dict[str, Any]) -> None:
    jr.status = JobRunStatus.success
    jr.finished_at = datetime.utcnow()
    jr.summary_json = json.dumps(summary)
    jr.error = None
    await session.flush()


async def finish_job_fail(session: AsyncSession, jr: JobRun, err: Exception) -> None:
    jr.status = JobRunStatus.failed
    jr.finished_at = datetime.utcnow()
    jr.error = f"{type(err).__name__}: {err}"
    await session.flush()


async def latest_run(session: AsyncSession, job_names: tuple[str, ...] = DISPATCH_JOBS) -> JobRun | None:
    stmt = select(JobRun).where(JobRun.job_name.in_(job_names)).order_by(desc(JobRun.started_at), desc(JobRun.id)).limit(1)
    return (await session.execute(stmt)).scalars().first()


def run_summary(jr: JobRun | None) -> dict[str, Any] | None:
    """Compact view of a job run for status endpoints."""
    if jr is None:
        return None
    return {
        "job_name": jr.job_name,
        "status": jr.status.value,
        "started_at": jr.started_at.isoformat(),
        "finished_at": jr.finished_at.isoformat() if jr.finished_at else None,
        "meta": json.loads(jr.meta_json) if jr.meta_json else None,
        "summary": json.loads(jr.summary_json) if jr.summary_json else None,
        "error": jr.error,
    }
