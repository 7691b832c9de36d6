# tests/conftest.py
import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from heymies.adapters.clients.http_resilience import reset_circuits
from heymies.config import settings
from heymies.db import get_session
from heymies.entrypoints.fastapi_app import create_app
from heymies.models import Base, Listing, ListingStatus, Profile, ProfileRole, SaleType


@pytest.fixture(autouse=True)
def _settings(monkeypatch):
    """
    Deterministic settings per test: no outbound keys, no admin creds,
    no throttling or backoff sleeps.
    """
    for key in (
        "API_KEY",
        "ADMIN_USER",
        "ADMIN_PASS",
        "RESEND_API_KEY",
        "EMAIL_FROM",
        "LEAD_NOTIFY_TO",
        "OPENAI_API_KEY",
    ):
        monkeypatch.setattr(settings, key, None)
    monkeypatch.setattr(settings, "HTTP_RATE_LIMIT_RPS", 0.0)
    monkeypatch.setattr(settings, "HTTP_BACKOFF_BASE_S", 0.0)
    reset_circuits()
    yield settings
    reset_circuits()


@pytest.fixture
async def engine():
    """
    Fresh in-memory DB per test. StaticPool makes all connections share the same
    in-memory database for the lifetime of this engine fixture.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def async_session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=True)


@pytest.fixture
async def client(async_session_maker):
    app = create_app()

    async def _session_override():
        async with async_session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = _session_override

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def listings(async_session_maker):
    """Four listings: three active (two sale, one rent) and one inactive."""
    rows = [
        Listing(
            agent_id="agent-1",
            title="Garden cottage",
            sale_type=SaleType.sale,
            listing_type="house",
            suburb="Durbanville",
            city="Cape Town",
            province="Western Cape",
            price=1_500_000,
            bedrooms=2,
            bathrooms=1,
        ),
        Listing(
            agent_id="agent-1",
            title="Sea-view apartment",
            sale_type=SaleType.sale,
            listing_type="apartment",
            suburb="Sea Point",
            city="Cape Town",
            province="Western Cape",
            price=4_200_000,
            bedrooms=3,
            bathrooms=2,
        ),
        Listing(
            agent_id="agent-2",
            title="Townhouse to let",
            sale_type=SaleType.rent,
            listing_type="townhouse",
            suburb="Umhlanga",
            city="Durban",
            province="KwaZulu-Natal",
            price_per_month=18_500,
            deposit=37_000,
            bedrooms=3,
            bathrooms=2,
        ),
        Listing(
            agent_id="agent-2",
            title="Old listing",
            status=ListingStatus.inactive,
            sale_type=SaleType.sale,
            listing_type="house",
            suburb="Rondebosch",
            city="Cape Town",
            province="Western Cape",
            price=2_000_000,
            bedrooms=4,
        ),
    ]
    async with async_session_maker() as session:
        session.add_all(rows)
        await session.commit()
    return rows


@pytest.fixture
async def agent_headers(async_session_maker):
    """Signed-in agent "agent-1" with an agent profile."""
    async with async_session_maker() as session:
        session.add(Profile(user_id="agent-1", role=ProfileRole.agent, full_name="Lerato Dube"))
        await session.commit()
    return {"X-User-Id": "agent-1"}
