# heymies/service_layer/notifications.py
from __future__ import annotations

import html
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..integrations.services.outbox import enqueue_email
from ..models import Agent

log = logging.getLogger(__name__)

LEAD_NOTIFY_SUBJECT = "New HeyMies early-access lead"
LEAD_CONFIRM_SUBJECT = "You’re on the HeyMies early access list"
AGENT_NOTIFY_SUBJECT = "New agent application (HeyMies)"


def _e(v: object) -> str:
    return html.escape(str(v), quote=True)


async def queue_early_access_emails(session: AsyncSession, *, email: str, source: str) -> int:
    """
    Notify the team and confirm to the lead. Returns how many emails were queued.
    Nothing is queued without a sender address.
    """
    if not settings.EMAIL_FROM:
        log.info("EMAIL_FROM not set; skipping early-access emails")
        return 0

    queued = 0
    if settings.LEAD_NOTIFY_TO:
        await enqueue_email(
            session,
            to=[settings.LEAD_NOTIFY_TO],
            subject=LEAD_NOTIFY_SUBJECT,
            html=f"<p><strong>Email:</strong> {_e(email)}</p><p><strong>Source:</strong> {_e(source)}</p>",
        )
        queued += 1

    await enqueue_email(
        session,
        to=[email],
        subject=LEAD_CONFIRM_SUBJECT,
        html="<p>Thanks — you’re on the list. We’ll email you when onboarding opens.</p><p><strong>HeyMies</strong></p>",
    )
    return queued + 1


async def queue_agent_application_email(session: AsyncSession, agent: Agent) -> bool:
    if not (settings.EMAIL_FROM and settings.LEAD_NOTIFY_TO):
        return False

    rows = [
        ("Name", agent.full_name),
        ("Email", agent.email),
        ("Phone", agent.phone or "-"),
        ("Agency", agent.agency or "-"),
        ("Areas", agent.areas or "-"),
        ("Types", agent.property_types or "-"),
        ("Max/week", agent.max_leads_per_week if agent.max_leads_per_week is not None else "-"),
        ("Preferred time", agent.preferred_contact_time or "-"),
    ]
    body = "\n".join(f"<p><strong>{label}:</strong> {_e(value)}</p>" for label, value in rows)

    await enqueue_email(session, to=[settings.LEAD_NOTIFY_TO], subject=AGENT_NOTIFY_SUBJECT, html=body)
    return True
