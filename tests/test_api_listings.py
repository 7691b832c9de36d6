# tests/test_api_listings.py
import pytest

from heymies.models import Profile, ProfileRole

NEW_SALE = {
    "sale_type": "sale",
    "listing_type": "house",
    "title": "Renovated family home",
    "suburb": "Bryanston",
    "city": "Johannesburg",
    "province": "Gauteng",
    "price": "R 3 950 000",
    "bedrooms": "4",
    "bathrooms": "3",
    "features": ["pool"],
}


def _as(user_id):
    return {"X-User-Id": user_id}


@pytest.mark.asyncio
async def test_search_defaults_to_active_newest_first(client, listings):
    res = (await client.get("/listings")).json()
    assert res["total"] == 3
    assert res["page"] == 1
    assert res["page_size"] == 12
    assert res["has_more"] is False
    assert "Old listing" not in [r["title"] for r in res["rows"]]


@pytest.mark.asyncio
async def test_search_filters(client, listings):
    res = (await client.get("/listings", params={"mode": "rent"})).json()
    assert [r["title"] for r in res["rows"]] == ["Townhouse to let"]

    res = (await client.get("/listings", params={"mode": "buy", "q": "cape", "sort": "price_asc"})).json()
    assert [r["title"] for r in res["rows"]] == ["Garden cottage", "Sea-view apartment"]

    res = (await client.get("/listings", params={"mode": "buy", "price_max": 2_000_000})).json()
    assert [r["title"] for r in res["rows"]] == ["Garden cottage"]

    res = (await client.get("/listings", params={"mode": "rent", "price_min": 20_000})).json()
    assert res["total"] == 0

    res = (await client.get("/listings", params={"beds_min": 3, "sort": "price_desc", "mode": "buy"})).json()
    assert [r["title"] for r in res["rows"]] == ["Sea-view apartment"]

    res = (await client.get("/listings", params=[("types", "apartment"), ("types", "townhouse")])).json()
    assert sorted(r["listing_type"] for r in res["rows"]) == ["apartment", "townhouse"]


@pytest.mark.asyncio
async def test_search_paging_and_clamp(client, listings):
    res = (await client.get("/listings", params={"page_size": 2, "page": 1})).json()
    assert len(res["rows"]) == 2
    assert res["has_more"] is True

    res = (await client.get("/listings", params={"page_size": 2, "page": 2})).json()
    assert len(res["rows"]) == 1
    assert res["has_more"] is False

    res = (await client.get("/listings", params={"page_size": 500, "page": 0})).json()
    assert res["page_size"] == 50
    assert res["page"] == 1


@pytest.mark.asyncio
async def test_get_listing_only_active(client, listings):
    assert (await client.get(f"/listings/{listings[0].id}")).status_code == 200
    assert (await client.get(f"/listings/{listings[3].id}")).status_code == 404
    assert (await client.get("/listings/9999")).status_code == 404


@pytest.mark.asyncio
async def test_create_listing_validation(client):
    assert (await client.post("/listings", json=NEW_SALE)).status_code == 401

    r = await client.post("/listings", json={**NEW_SALE, "title": " "}, headers=_as("agent-9"))
    assert r.status_code == 400
    assert r.json()["detail"] == "Title is required."

    r = await client.post("/listings", json={**NEW_SALE, "city": ""}, headers=_as("agent-9"))
    assert r.json()["detail"] == "Suburb, City, and Province are required."

    r = await client.post("/listings", json={**NEW_SALE, "price": ""}, headers=_as("agent-9"))
    assert r.json()["detail"] == "Sale price is required."

    r = await client.post("/listings", json={**NEW_SALE, "sale_type": "rent", "price": None}, headers=_as("agent-9"))
    assert r.json()["detail"] == "Rent per month is required."


@pytest.mark.asyncio
async def test_create_sale_listing_generates_description(client):
    r = await client.post("/listings", json=NEW_SALE, headers=_as("agent-9"))
    assert r.status_code == 200
    listing = r.json()

    assert listing["agent_id"] == "agent-9"
    assert listing["status"] == "active"
    assert listing["price"] == 3_950_000
    assert listing["price_per_month"] is None
    assert listing["description"].startswith("House • 4 bedroom, 3 bathroom in Bryanston, Johannesburg, Gauteng.")
    assert "Asking price: R 3 950 000." in listing["description"]


@pytest.mark.asyncio
async def test_create_rent_listing_keeps_rent_fields(client):
    body = {
        **NEW_SALE,
        "sale_type": "rent",
        "price": "18500",
        "deposit": "37000",
        "available_from": "2026-12-01",
        "description": "Our own words.",
    }
    listing = (await client.post("/listings", json=body, headers=_as("agent-9"))).json()

    assert listing["price"] is None
    assert listing["price_per_month"] == 18_500
    assert listing["deposit"] == 37_000
    assert listing["available_from"] == "2026-12-01"
    assert listing["description"] == "Our own words."


@pytest.mark.asyncio
async def test_owner_only_edit_and_soft_delete(client, listings):
    mine = listings[0].id  # owned by agent-1

    r = await client.patch(f"/listings/{mine}", json={"title": "Hijacked"}, headers=_as("agent-2"))
    assert r.status_code == 403
    assert (await client.delete(f"/listings/{mine}", headers=_as("agent-2"))).status_code == 403

    r = await client.patch(f"/listings/{mine}", json={"title": "Garden cottage, new roof", "price": "1 450 000"}, headers=_as("agent-1"))
    assert r.status_code == 200
    assert r.json()["title"] == "Garden cottage, new roof"
    assert r.json()["price"] == 1_450_000

    r = await client.patch(f"/listings/{mine}", json={"title": ""}, headers=_as("agent-1"))
    assert r.status_code == 400

    dash = (await client.get("/dashboard/listings", headers=_as("agent-1"))).json()
    assert len(dash) == 2

    r = await client.delete(f"/listings/{mine}", headers=_as("agent-1"))
    assert r.status_code == 200
    assert r.json()["status"] == "inactive"

    dash = (await client.get("/dashboard/listings", headers=_as("agent-1"))).json()
    assert [d["title"] for d in dash] == ["Sea-view apartment"]
    assert (await client.get(f"/listings/{mine}")).status_code == 404

    assert (await client.patch("/listings/9999", json={}, headers=_as("agent-1"))).status_code == 404


@pytest.mark.asyncio
async def test_buyers_cannot_manage_listings(client, async_session_maker, listings):
    async with async_session_maker() as session:
        session.add(Profile(user_id="user-thandi", role=ProfileRole.buyer))
        await session.commit()
    me = _as("user-thandi")

    assert (await client.post("/listings", json=NEW_SALE, headers=me)).status_code == 403
    assert (await client.get("/dashboard/listings", headers=me)).status_code == 403
    assert (await client.patch(f"/listings/{listings[0].id}", json={"title": "x"}, headers=me)).status_code == 403
    assert (await client.post("/listings", json=NEW_SALE)).status_code == 401
