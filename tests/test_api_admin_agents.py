# tests/test_api_admin_agents.py
import pytest
from sqlalchemy import select

from heymies.models import Agent, AgentStatus, OutboxEvent

ADMIN = ("admin", "s3cret")


@pytest.fixture
def admin_creds(monkeypatch, _settings):
    monkeypatch.setattr(_settings, "ADMIN_USER", ADMIN[0])
    monkeypatch.setattr(_settings, "ADMIN_PASS", ADMIN[1])
    return ADMIN


@pytest.mark.asyncio
async def test_admin_not_configured(client):
    r = await client.get("/admin/leads", auth=ADMIN)
    assert r.status_code == 500
    assert r.json()["detail"] == "Admin credentials not configured"


@pytest.mark.asyncio
async def test_admin_requires_basic_auth(client, admin_creds):
    r = await client.get("/admin/leads")
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == 'Basic realm="HeyMies Admin"'

    r = await client.get("/admin/leads", auth=("admin", "wrong"))
    assert r.status_code == 401

    r = await client.get("/admin/leads", auth=admin_creds)
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.asyncio
async def test_admin_tag_and_delete_lead(client, admin_creds):
    await client.post("/leads", json={"email": "tagme@example.com"})
    lead_id = (await client.get("/admin/leads", auth=admin_creds)).json()[0]["id"]

    r = await client.patch("/admin/leads", json={"tag": "hot"}, auth=admin_creds)
    assert r.status_code == 400
    assert r.json() == {"ok": False, "error": "Missing id"}

    r = await client.patch("/admin/leads", json={"id": lead_id, "tag": "hot"}, auth=admin_creds)
    assert r.json() == {"ok": True, "error": None}
    assert (await client.get("/admin/leads", auth=admin_creds)).json()[0]["tag"] == "hot"

    await client.patch("/admin/leads", json={"id": lead_id, "tag": ""}, auth=admin_creds)
    assert (await client.get("/admin/leads", auth=admin_creds)).json()[0]["tag"] is None

    # unknown id is a no-op
    r = await client.request("DELETE", "/admin/leads", json={"id": 12345}, auth=admin_creds)
    assert r.json()["ok"] is True

    r = await client.request("DELETE", "/admin/leads", json={"id": lead_id}, auth=admin_creds)
    assert r.json()["ok"] is True
    assert (await client.get("/admin/leads", auth=admin_creds)).json() == []


@pytest.mark.asyncio
async def test_agent_apply_validation(client):
    r = await client.post("/agents/apply", json={"email": "a@example.com"})
    assert r.status_code == 400
    assert r.json() == {"ok": False, "error": "Name required"}

    r = await client.post("/agents/apply", json={"full_name": "Lerato", "email": "lerato"})
    assert r.status_code == 400
    assert r.json()["error"] == "Valid email required"


@pytest.mark.asyncio
async def test_agent_apply_negative_capacity_is_blank(client, async_session_maker):
    body = {"full_name": "Lerato", "email": "lerato@agency.co.za", "max_leads_per_week": "-5"}
    assert (await client.post("/agents/apply", json=body)).status_code == 200

    async with async_session_maker() as session:
        agent = (await session.execute(select(Agent))).scalars().one()
    assert agent.max_leads_per_week is None


@pytest.mark.asyncio
async def test_agent_apply_upserts_and_moderation(client, async_session_maker, admin_creds, monkeypatch, _settings):
    monkeypatch.setattr(_settings, "EMAIL_FROM", "hello@heymies.co.za")
    monkeypatch.setattr(_settings, "LEAD_NOTIFY_TO", "team@heymies.co.za")

    body = {
        "full_name": "  Lerato Dlamini ",
        "email": "Lerato@Agency.co.za",
        "agency": "Coastal Realty",
        "areas": "Umhlanga, Ballito",
        "max_leads_per_week": "abc",
    }
    assert (await client.post("/agents/apply", json=body)).status_code == 200

    agents = (await client.get("/admin/agents", auth=admin_creds)).json()
    assert len(agents) == 1
    agent = agents[0]
    assert agent["full_name"] == "Lerato Dlamini"
    assert agent["email"] == "lerato@agency.co.za"
    assert agent["max_leads_per_week"] is None
    assert agent["status"] == "pending"

    r = await client.patch("/admin/agents", json={"id": agent["id"], "status": "banned"}, auth=admin_creds)
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid status"

    r = await client.patch("/admin/agents", json={"id": agent["id"], "status": "approved"}, auth=admin_creds)
    assert r.json()["ok"] is True

    # re-applying resets to pending
    body["max_leads_per_week"] = 15
    assert (await client.post("/agents/apply", json=body)).status_code == 200

    async with async_session_maker() as session:
        rows = (await session.execute(select(Agent))).scalars().all()
        assert len(rows) == 1
        assert rows[0].status == AgentStatus.pending
        assert rows[0].max_leads_per_week == 15

        outbox = (await session.execute(select(OutboxEvent))).scalars().all()
        assert len(outbox) == 2
        assert "Coastal Realty" in outbox[0].payload_json

    r = await client.request("DELETE", "/admin/agents", json={"id": agent["id"]}, auth=admin_creds)
    assert r.json()["ok"] is True
    assert (await client.get("/admin/agents", auth=admin_creds)).json() == []
