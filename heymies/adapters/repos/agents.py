# heymies/adapters/repos/agents.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Tuple

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Agent, AgentAccount, AgentStatus


class AgentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert_by_email(self, *, email: str, fields: dict[str, Any]) -> Tuple[Agent, bool]:
        agent = (await self.session.execute(select(Agent).where(Agent.email == email))).scalars().first()

        was_created = False
        if agent is None:
            agent = Agent(email=email)
            self.session.add(agent)
            was_created = True

        for k, v in fields.items():
            setattr(agent, k, v)

        await self.session.flush()
        return agent, was_created

    async def upsert_account(self, *, user_id: str, fields: dict[str, Any]) -> Tuple[AgentAccount, bool]:
        account = (
            await self.session.execute(select(AgentAccount).where(AgentAccount.user_id == user_id))
        ).scalars().first()

        was_created = False
        if account is None:
            account = AgentAccount(user_id=user_id)
            self.session.add(account)
            was_created = True

        for k, v in fields.items():
            setattr(account, k, v)
        account.updated_at = datetime.utcnow()

        await self.session.flush()
        return account, was_created

    async def list_recent(self, limit: int = 200) -> list[Agent]:
        stmt = select(Agent).order_by(desc(Agent.created_at), desc(Agent.id)).limit(limit)
        return list((await self.session.execute(stmt)).scalars().all())

    async def set_status(self, agent_id: int, status: AgentStatus) -> None:
        agent = (await self.session.execute(select(Agent).where(Agent.id == agent_id))).scalars().first()
        if agent is None:
            return
        agent.status = status
        await self.session.flush()

    async def delete(self, agent_id: int) -> None:
        await self.session.execute(delete(Agent).where(Agent.id == agent_id))
        await self.session.flush()
