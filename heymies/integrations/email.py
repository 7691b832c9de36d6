from __future__ import annotations

import logging
from typing import Any

import httpx

from ..adapters.clients.resend_email import ResendClient
from .base import SinkDeliveryResult

log = logging.getLogger(__name__)


class ResendEmailSink:
    def __init__(self, client: ResendClient | None = None) -> None:
        self.client = client or ResendClient()

    async def deliver(self, message: dict[str, Any]) -> SinkDeliveryResult:
        try:
            await self.client.send(
                from_addr=message["from"],
                to=list(message["to"]),
                subject=message["subject"],
                html=message["html"],
            )
            return SinkDeliveryResult(ok=True)
        except httpx.HTTPStatusError as e:
            r = e.response
            return SinkDeliveryResult(ok=False, error=f"HTTP {r.status_code}: {r.text[:500]}")
        except (httpx.HTTPError, KeyError, RuntimeError, ValueError) as e:
            log.warning("email delivery failed: %s", e)
            return SinkDeliveryResult(ok=False, error=str(e))
