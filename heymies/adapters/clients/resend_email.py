# heymies/adapters/clients/resend_email.py
from __future__ import annotations

from typing import Any

import httpx

from ...config import settings
from .http_resilience import resilient_request


class ResendClient:
    """
    Minimal Resend client: POST /emails with from/to/subject/html.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.RESEND_API_KEY
        self.base_url = (base_url or settings.RESEND_BASE_URL).rstrip("/")
        self.transport = transport

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def send(self, *, from_addr: str, to: list[str], subject: str, html: str) -> dict[str, Any]:
        if not self.api_key:
            raise RuntimeError("RESEND_API_KEY is not set")

        resp = await resilient_request(
            "POST",
            f"{self.base_url}/emails",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={"from": from_addr, "to": to, "subject": subject, "html": html},
            transport=self.transport,
        )
        return resp.json()
