# heymies/service_layer/use_cases/leads.py
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from ...adapters.repos.leads import LeadRepository
from ...domain.parsing import normalize_email
from ...domain.policies import is_valid_email
from ...models import Lead, LeadEvent, LeadEventType, LeadStatus
from ..notifications import queue_early_access_emails

log = logging.getLogger(__name__)


async def capture_early_access_lead(session: AsyncSession, email: str | None, source: str | None) -> Lead:
    """
    Early-access signup from the marketing site.
    Upserts on email and queues the notify/confirm emails in the same transaction.
    """
    email = normalize_email(email)
    if not is_valid_email(email):
        raise ValueError("Invalid email")
    source = str(source or "website")

    lead, created = await LeadRepository(session).upsert_by_email(email=email, source=source)
    await queue_early_access_emails(session, email=email, source=source)

    log.info("early-access lead %s (id=%s, source=%s)", "created" if created else "refreshed", lead.id, source)
    return lead


async def get_lead_with_events(session: AsyncSession, lead_id: int) -> tuple[Lead, list[LeadEvent]]:
    repo = LeadRepository(session)
    lead = await repo.get(lead_id)
    if not lead:
        raise LookupError(f"Lead {lead_id} not found")
    return lead, await repo.list_events(lead_id)


async def update_lead_status(
    session: AsyncSession,
    lead_id: int,
    status: str,
    actor_id: str | None = None,
) -> Lead:
    """
    Pipeline move (new -> contacted -> ... -> won/lost), logged as a status_change event.
    Any pipeline value may follow any other.
    """
    try:
        new_status = LeadStatus(status)
    except ValueError:
        raise ValueError(f"Invalid status: {status}")

    repo = LeadRepository(session)
    lead = await repo.get(lead_id)
    if not lead:
        raise LookupError(f"Lead {lead_id} not found")

    lead.status = new_status
    lead.updated_at = datetime.utcnow()
    await session.flush()

    await repo.add_event(lead_id, LeadEventType.status_change, f'Status changed to "{new_status.value}".', actor_id)
    log.info("lead %s status -> %s", lead_id, new_status.value)
    return lead


async def add_lead_note(session: AsyncSession, lead_id: int, body: str, actor_id: str | None = None) -> LeadEvent:
    text = (body or "").strip()
    if not text:
        raise ValueError("Note is empty")

    repo = LeadRepository(session)
    if not await repo.get(lead_id):
        raise LookupError(f"Lead {lead_id} not found")
    return await repo.add_event(lead_id, LeadEventType.note, text, actor_id)
