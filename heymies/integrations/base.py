from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Any


@dataclass(frozen=True)
class SinkDeliveryResult:
    ok: bool
    error: str | None = None


class EmailSink(Protocol):
    async def deliver(self, message: dict[str, Any]) -> SinkDeliveryResult:
        ...
