# tests/test_http_clients.py
import json

import httpx
import pytest

from heymies.adapters.clients.http_resilience import resilient_request
from heymies.adapters.clients.openai_text import OpenAITextClient, extract_output_text
from heymies.adapters.clients.resend_email import ResendClient
from heymies.integrations.email import ResendEmailSink


@pytest.mark.asyncio
async def test_resilient_request_retries_on_503():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503, text="busy")
        return httpx.Response(200, json={"ok": True})

    resp = await resilient_request(
        "GET", "https://upstream.test/x", max_retries=3, transport=httpx.MockTransport(handler)
    )
    assert resp.json() == {"ok": True}
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_resilient_request_does_not_retry_4xx():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(422, json={"message": "bad"})

    with pytest.raises(httpx.HTTPStatusError):
        await resilient_request("POST", "https://upstream.test/x", json={}, transport=httpx.MockTransport(handler))
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_circuit_opens_after_repeated_failures(monkeypatch, _settings):
    monkeypatch.setattr(_settings, "HTTP_CIRCUIT_FAIL_THRESHOLD", 2)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    transport = httpx.MockTransport(handler)
    with pytest.raises(httpx.HTTPStatusError):
        await resilient_request("GET", "https://flaky.test/x", max_retries=1, transport=transport)

    with pytest.raises(httpx.HTTPError, match="circuit_open"):
        await resilient_request("GET", "https://flaky.test/x", max_retries=1, transport=transport)


@pytest.mark.asyncio
async def test_resend_sink_posts_email():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "em_1"})

    client = ResendClient(api_key="re_test", base_url="https://resend.test", transport=httpx.MockTransport(handler))
    res = await ResendEmailSink(client).deliver(
        {"from": "hi@heymies.co.za", "to": ["a@example.com"], "subject": "Hi", "html": "<p>x</p>"}
    )

    assert res.ok is True
    assert seen["url"] == "https://resend.test/emails"
    assert seen["auth"] == "Bearer re_test"
    assert seen["body"]["to"] == ["a@example.com"]


@pytest.mark.asyncio
async def test_resend_sink_reports_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="domain not verified")

    client = ResendClient(api_key="re_test", base_url="https://resend.test", transport=httpx.MockTransport(handler))
    res = await ResendEmailSink(client).deliver({"from": "a@b.c", "to": ["d@e.f"], "subject": "s", "html": "h"})

    assert res.ok is False
    assert res.error == "HTTP 403: domain not verified"


@pytest.mark.asyncio
async def test_resend_sink_reports_unreadable_reply():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    client = ResendClient(api_key="re_test", base_url="https://resend.test", transport=httpx.MockTransport(handler))
    res = await ResendEmailSink(client).deliver({"from": "a@b.c", "to": ["d@e.f"], "subject": "s", "html": "h"})

    assert res.ok is False
    assert res.error


def test_extract_output_text_shapes():
    assert extract_output_text({"output_text": "  hello "}) == "hello"
    body = {
        "output": [
            {"type": "message", "content": [{"type": "output_text", "text": "Spacious "}]},
            {"type": "message", "content": [{"type": "output_text", "text": "home."}, {"type": "refusal"}]},
        ]
    }
    assert extract_output_text(body) == "Spacious home."
    assert extract_output_text({}) == ""


@pytest.mark.asyncio
async def test_openai_client_sends_responses_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"output": [{"content": [{"type": "output_text", "text": "A home."}]}]})

    client = OpenAITextClient(
        api_key="sk-test", base_url="https://llm.test/v1", model="gpt-4.1-mini", transport=httpx.MockTransport(handler)
    )
    text = await client.generate("Describe it")

    assert text == "A home."
    assert seen["url"] == "https://llm.test/v1/responses"
    assert seen["body"] == {"model": "gpt-4.1-mini", "input": "Describe it", "temperature": 0.6, "max_output_tokens": 300}


@pytest.mark.asyncio
async def test_openai_client_requires_key():
    with pytest.raises(RuntimeError, match="Missing OPENAI_API_KEY"):
        await OpenAITextClient(api_key=None).generate("x")
