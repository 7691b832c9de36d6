from __future__ import annotations

import json
import logging
import random
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...models import OutboxEvent, OutboxStatus
from ..base import EmailSink, SinkDeliveryResult
from ..email import ResendEmailSink

log = logging.getLogger(__name__)

EMAIL_TOPIC = "email.send"


async def enqueue_email(
    session: AsyncSession,
    *,
    to: list[str],
    subject: str,
    html: str,
    from_addr: str | None = None,
) -> OutboxEvent:
    """
    Queue one email. Does NOT commit: the email is sent only if the caller's transaction lands.
    """
    ev = OutboxEvent(
        topic=EMAIL_TOPIC,
        payload_json=json.dumps(
            {"from": from_addr or settings.EMAIL_FROM, "to": to, "subject": subject, "html": html},
            ensure_ascii=False,
        ),
        status=OutboxStatus.pending,
        attempts=0,
        last_error=None,
        next_attempt_at=None,
    )
    session.add(ev)
    await session.flush()
    return ev


def _default_sink() -> EmailSink | None:
    sink = ResendEmailSink()
    return sink if sink.client.is_configured() else None


def compute_backoff_seconds(attempts_after_increment: int) -> float:
    """
    Exponential backoff with jitter.
    attempts_after_increment: 1,2,3,... (after we increment attempts)
    """
    base = float(settings.OUTBOX_BACKOFF_BASE_S)
    exp = base * (2 ** max(0, attempts_after_increment - 1))
    capped = min(exp, float(settings.OUTBOX_BACKOFF_CAP_S))
    jitter = random.uniform(0.0, min(base, capped))
    return capped + jitter


async def count_due_events(session: AsyncSession, now: datetime | None = None) -> int:
    now = now or datetime.utcnow()
    rows = (
        await session.execute(
            select(OutboxEvent.id)
            .where(OutboxEvent.status == OutboxStatus.pending)
            .where(or_(OutboxEvent.next_attempt_at.is_(None), OutboxEvent.next_attempt_at <= now))
        )
    ).all()
    return len(rows)


async def dispatch_pending_events(
    session: AsyncSession,
    sink: EmailSink | None = None,
    batch_size: int | None = None,
    max_attempts: int | None = None,
) -> dict[str, Any]:
    """
    Deliver due outbox emails.
    Quiet-by-default:
      - If email is not configured (no sink), returns immediately without touching events.
    Reliability:
      - Exponential backoff + jitter on failures, stored in next_attempt_at.
      - Marks as failed once max attempts is reached.
    """
    batch_size = batch_size or int(settings.OUTBOX_BATCH_SIZE)
    max_attempts = max_attempts or int(settings.OUTBOX_MAX_ATTEMPTS)

    sink = sink or _default_sink()
    if sink is None:
        return {"delivered": 0, "failed": 0, "events": 0, "skipped_no_sink": 1}

    now = datetime.utcnow()

    stmt = (
        select(OutboxEvent)
        .where(OutboxEvent.topic == EMAIL_TOPIC)
        .where(OutboxEvent.status == OutboxStatus.pending)
        .where(OutboxEvent.attempts < max_attempts)
        .where(or_(OutboxEvent.next_attempt_at.is_(None), OutboxEvent.next_attempt_at <= now))
        .order_by(OutboxEvent.id.asc())
        .limit(batch_size)
    )
    events = (await session.execute(stmt)).scalars().all()

    delivered = 0
    failed = 0

    for ev in events:
        try:
            res = await sink.deliver(json.loads(ev.payload_json))
        except Exception as e:
            # a raising sink is one failed attempt
            log.exception("outbox event %s: sink raised", ev.id)
            res = SinkDeliveryResult(ok=False, error=f"{type(e).__name__}: {e}")

        ev.attempts += 1
        ev.last_error = res.error
        ev.updated_at = datetime.utcnow()

        if res.ok:
            ev.status = OutboxStatus.delivered
            ev.delivered_at = datetime.utcnow()
            ev.next_attempt_at = None
            delivered += 1
        elif ev.attempts >= max_attempts:
            ev.status = OutboxStatus.failed
            ev.next_attempt_at = None
            failed += 1
            log.error("outbox event %s failed permanently after %d attempts: %s", ev.id, ev.attempts, res.error)
        else:
            backoff_s = compute_backoff_seconds(ev.attempts)
            ev.next_attempt_at = datetime.utcnow() + timedelta(seconds=backoff_s)
            log.warning("outbox event %s attempt %d failed, retry in %.0fs", ev.id, ev.attempts, backoff_s)

        await session.flush()

    return {
        "delivered": delivered,
        "failed": failed,
        "events": len(events),
        "skipped_no_sink": 0,
    }
