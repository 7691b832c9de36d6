# heymies/adapters/clients/http_resilience.py
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

import httpx

from ...config import settings

log = logging.getLogger(__name__)

RETRYABLE_STATUS = (429, 500, 502, 503, 504)


@dataclass
class _CircuitState:
    fails: int = 0
    opened_at: float | None = None


# one breaker per upstream host (email and text generation fail independently)
_CIRCUITS: dict[str, _CircuitState] = {}
_RATE_LOCK = asyncio.Lock()
_LAST_TS = 0.0


def _circuit(url: str) -> _CircuitState:
    host = urlsplit(url).netloc
    return _CIRCUITS.setdefault(host, _CircuitState())


def _circuit_is_open(state: _CircuitState, now: float) -> bool:
    if state.opened_at is None:
        return False
    return (now - state.opened_at) < float(settings.HTTP_CIRCUIT_RESET_S)


def _circuit_on_success(state: _CircuitState) -> None:
    state.fails = 0
    state.opened_at = None


def _circuit_on_failure(state: _CircuitState) -> None:
    state.fails += 1
    if state.fails >= int(settings.HTTP_CIRCUIT_FAIL_THRESHOLD):
        state.opened_at = time.time()


def reset_circuits() -> None:
    _CIRCUITS.clear()


async def _rate_limit() -> None:
    """Very simple per-process limiter."""
    global _LAST_TS
    rps = float(settings.HTTP_RATE_LIMIT_RPS)
    if rps <= 0:
        return
    min_gap = 1.0 / rps
    async with _RATE_LOCK:
        now = time.time()
        wait = (_LAST_TS + min_gap) - now
        if wait > 0:
            await asyncio.sleep(wait)
        _LAST_TS = time.time()


async def resilient_request(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    json: Any | None = None,
    timeout_s: float | None = None,
    max_retries: int | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """
    One outbound call with retries on 429/5xx/timeouts and a per-host circuit breaker.
    Non-retryable 4xx responses raise immediately; exhausted retries re-raise the last error.
    """
    state = _circuit(url)
    if _circuit_is_open(state, time.time()):
        raise httpx.HTTPError(f"circuit_open: refusing external call to {url}")

    await _rate_limit()

    timeout = httpx.Timeout(float(timeout_s if timeout_s is not None else settings.HTTP_TIMEOUT_S))
    retries = int(max_retries if max_retries is not None else settings.HTTP_MAX_RETRIES)
    backoff = float(settings.HTTP_BACKOFF_BASE_S)

    last_exc: Exception | None = None
    for attempt in range(retries + 1):
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                resp = await client.request(method, url, headers=headers, json=json)

            if resp.status_code in RETRYABLE_STATUS:
                raise httpx.HTTPStatusError("retryable_status", request=resp.request, response=resp)

            resp.raise_for_status()
            _circuit_on_success(state)
            return resp
        except httpx.HTTPStatusError as e:
            last_exc = e
            if e.response.status_code not in RETRYABLE_STATUS:
                raise
            _circuit_on_failure(state)
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            last_exc = e
            _circuit_on_failure(state)

        if attempt >= retries:
            break
        log.warning("retrying %s %s after attempt %d: %s", method, url, attempt + 1, last_exc)
        await asyncio.sleep(min(5.0, backoff * (2**attempt)))

    assert last_exc is not None
    raise last_exc
