# heymies/adapters/repos/leads.py
from __future__ import annotations

from datetime import datetime
from typing import Tuple

from sqlalchemy import delete, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Lead, LeadEvent, LeadEventType


class LeadRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, lead_id: int) -> Lead | None:
        return (await self.session.execute(select(Lead).where(Lead.id == lead_id))).scalars().first()

    async def upsert_by_email(
        self,
        *,
        email: str,
        source: str | None = None,
        full_name: str | None = None,
        phone: str | None = None,
        message: str | None = None,
        score: int | None = None,
    ) -> Tuple[Lead, bool]:
        """
        Upsert a Lead on its natural key (email).
        Fields passed as None leave the stored value alone.
        """
        lead = (await self.session.execute(select(Lead).where(Lead.email == email))).scalars().first()

        was_created = False
        if lead is None:
            lead = Lead(email=email, source=source or "website")
            self.session.add(lead)
            was_created = True
        elif source is not None:
            lead.source = source

        if full_name is not None:
            lead.full_name = full_name
        if phone is not None:
            lead.phone = phone
        if message is not None:
            lead.message = message
        if score is not None:
            lead.score = int(score)

        lead.updated_at = datetime.utcnow()
        await self.session.flush()
        return lead, was_created

    async def list_recent(self, *, q: str | None = None, limit: int = 200) -> list[Lead]:
        stmt = select(Lead).order_by(desc(Lead.created_at), desc(Lead.id)).limit(limit)
        if q and q.strip():
            like = f"%{q.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(func.coalesce(Lead.full_name, "")).like(like),
                    func.lower(Lead.email).like(like),
                    func.lower(func.coalesce(Lead.phone, "")).like(like),
                )
            )
        return list((await self.session.execute(stmt)).scalars().all())

    async def set_tag(self, lead_id: int, tag: str | None) -> None:
        lead = await self.get(lead_id)
        if lead is None:
            return
        lead.tag = tag
        lead.updated_at = datetime.utcnow()
        await self.session.flush()

    async def delete(self, lead_id: int) -> None:
        await self.session.execute(delete(LeadEvent).where(LeadEvent.lead_id == lead_id))
        await self.session.execute(delete(Lead).where(Lead.id == lead_id))
        await self.session.flush()

    async def add_event(
        self,
        lead_id: int,
        event_type: LeadEventType,
        body: str | None,
        actor_id: str | None = None,
    ) -> LeadEvent:
        ev = LeadEvent(lead_id=lead_id, event_type=event_type, body=body, actor_id=actor_id)
        self.session.add(ev)
        await self.session.flush()
        return ev

    async def list_events(self, lead_id: int, limit: int = 200) -> list[LeadEvent]:
        stmt = (
            select(LeadEvent)
            .where(LeadEvent.lead_id == lead_id)
            .order_by(desc(LeadEvent.created_at), desc(LeadEvent.id))
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars().all())
