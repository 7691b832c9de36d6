# heymies/adapters/clients/openai_text.py
from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import settings
from .http_resilience import resilient_request

log = logging.getLogger(__name__)


def extract_output_text(body: dict[str, Any]) -> str:
    """
    Responses API payloads carry text under output[].content[] (type 'output_text').
    Some SDK-shaped payloads also expose a flat 'output_text'.
    """
    flat = body.get("output_text")
    if isinstance(flat, str):
        return flat.strip()

    parts: list[str] = []
    for item in body.get("output") or []:
        if not isinstance(item, dict):
            continue
        for c in item.get("content") or []:
            if isinstance(c, dict) and c.get("type") == "output_text" and c.get("text"):
                parts.append(c["text"])
    return "".join(parts).strip()


class OpenAITextClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.base_url = (base_url or settings.OPENAI_BASE_URL).rstrip("/")
        self.model = model or settings.OPENAI_MODEL
        self.transport = transport

    async def generate(self, prompt: str, *, temperature: float = 0.6, max_output_tokens: int = 300) -> str:
        if not self.api_key:
            raise RuntimeError("Missing OPENAI_API_KEY in environment")

        resp = await resilient_request(
            "POST",
            f"{self.base_url}/responses",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": self.model,
                "input": prompt,
                "temperature": temperature,
                "max_output_tokens": max_output_tokens,
            },
            # generation is user-facing; one retry at most
            max_retries=1,
            transport=self.transport,
        )
        text = extract_output_text(resp.json())
        if not text:
            log.error("text generation returned an empty response (model=%s)", self.model)
        return text
