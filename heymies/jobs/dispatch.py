from sqlalchemy.ext.asyncio import AsyncSession

from ..integrations.base import EmailSink
from ..integrations.services.outbox import dispatch_pending_events


async def run_dispatch(session: AsyncSession, batch_size: int = 50, sink: EmailSink | None = None) -> dict:
    return await dispatch_pending_events(session=session, sink=sink, batch_size=batch_size)
