# tests/test_api_buyers.py
import pytest

SIGNUP = {
    "user_id": "user-thandi",
    "full_name": "Thandi Mokoena",
    "phone": "082 555 1234",
    "email": "Thandi@Example.com",
    "budget_min": "1000000",
    "budget_max": "",
    "property_types": ["House", "Townhouse"],
    "areas": ["Durbanville"],
    "bedrooms_min": "3+",
    "bathrooms_min": "2+",
    "preapproved": "Yes",
    "timeline": "0-3 months",
    "selling_property": "No",
    "popia_consent": True,
}


def _as(user_id):
    return {"X-User-Id": user_id}


@pytest.mark.asyncio
async def test_buyer_signup_scores_lead(client):
    r = await client.post("/buyers/signup", json=SIGNUP, headers=_as("user-thandi"))
    assert r.status_code == 200
    buyer = r.json()
    assert buyer["email"] == "thandi@example.com"
    assert buyer["phone"] == "0825551234"
    assert buyer["bedrooms_min"] == 3
    assert buyer["lead_score"] == 90


@pytest.mark.asyncio
async def test_buyer_signup_validation_message(client):
    r = await client.post("/buyers/signup", json={**SIGNUP, "popia_consent": False}, headers=_as("user-thandi"))
    assert r.status_code == 400
    assert r.json()["detail"] == "You must accept POPIA consent to continue."

    r = await client.post("/buyers/signup", json={**SIGNUP, "property_types": []}, headers=_as("user-thandi"))
    assert r.json()["detail"] == "Please select at least one property type."


@pytest.mark.asyncio
async def test_profile_update_recomputes_score(client):
    await client.post("/buyers/signup", json=SIGNUP, headers=_as("user-thandi"))

    profile = {k: v for k, v in SIGNUP.items() if k != "user_id"}
    profile.update({"timeline": "Just browsing", "selling_property": "Yes"})
    r = await client.put("/buyers/user-thandi", json=profile, headers=_as("user-thandi"))
    assert r.status_code == 200
    # 90 - 25 - 5
    assert r.json()["lead_score"] == 60

    r = await client.get("/buyers/user-thandi", headers=_as("user-thandi"))
    assert r.json()["timeline"] == "Just browsing"


@pytest.mark.asyncio
async def test_profile_created_on_first_update(client):
    r = await client.get("/buyers/user-new", headers=_as("user-new"))
    assert r.status_code == 404

    r = await client.put("/buyers/user-new", json={"full_name": "New Buyer"}, headers=_as("user-new"))
    assert r.status_code == 200
    assert r.json()["lead_score"] == 0


@pytest.mark.asyncio
async def test_profile_is_private(client):
    await client.post("/buyers/signup", json=SIGNUP, headers=_as("user-thandi"))
    assert (await client.get("/buyers/user-thandi")).status_code == 401
    assert (await client.get("/buyers/user-thandi", headers=_as("someone-else"))).status_code == 403


@pytest.mark.asyncio
async def test_saved_enquiry_viewing_dashboard(client, listings):
    await client.post("/buyers/signup", json=SIGNUP, headers=_as("user-thandi"))
    me = _as("user-thandi")
    sale_id = listings[0].id
    other_id = listings[1].id
    inactive_id = listings[3].id

    r1 = await client.post("/buyers/user-thandi/saved", json={"listing_id": sale_id}, headers=me)
    r2 = await client.post("/buyers/user-thandi/saved", json={"listing_id": sale_id}, headers=me)
    assert r1.status_code == 200
    assert r1.json()["id"] == r2.json()["id"]

    r = await client.post("/buyers/user-thandi/saved", json={"listing_id": inactive_id}, headers=me)
    assert r.status_code == 404

    r = await client.post("/buyers/user-thandi/enquiries", json={"listing_id": other_id}, headers=me)
    assert r.status_code == 200
    assert r.json()["status"] == "Open"
    assert r.json()["last_message"] == "New enquiry created."

    r = await client.post(
        "/buyers/user-thandi/viewings",
        json={"listing_id": other_id, "scheduled_for": "2026-11-07T10:00:00"},
        headers=me,
    )
    assert r.status_code == 200
    assert r.json()["status"] == "Scheduled"

    dash = (await client.get("/buyers/user-thandi/dashboard", headers=me)).json()
    assert dash["buyer"]["user_id"] == "user-thandi"
    assert [s["listing"]["title"] for s in dash["saved"]] == ["Garden cottage"]
    assert dash["enquiries"][0]["status"] == "Viewing scheduled"
    assert dash["enquiries"][0]["last_message"] == "Viewing scheduled."
    assert dash["viewings"][0]["listing_id"] == other_id

    saved_id = r1.json()["id"]
    r = await client.delete(f"/buyers/user-thandi/saved/{saved_id}", headers=me)
    assert r.json() == {"ok": True, "error": None}
    dash = (await client.get("/buyers/user-thandi/dashboard", headers=me)).json()
    assert dash["saved"] == []


@pytest.mark.asyncio
async def test_cannot_unsave_another_buyers_item(client, listings):
    await client.post("/buyers/signup", json=SIGNUP, headers=_as("user-thandi"))
    await client.post(
        "/buyers/signup", json={**SIGNUP, "user_id": "user-ben", "email": "ben@example.com"}, headers=_as("user-ben")
    )

    r = await client.post("/buyers/user-ben/saved", json={"listing_id": listings[0].id}, headers=_as("user-ben"))
    ben_saved = r.json()["id"]

    r = await client.delete(f"/buyers/user-thandi/saved/{ben_saved}", headers=_as("user-thandi"))
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_signup_is_bound_to_the_caller(client):
    r = await client.post("/buyers/signup", json=SIGNUP, headers=_as("user-thandi"))
    assert r.status_code == 200

    # anonymous
    assert (await client.post("/buyers/signup", json=SIGNUP)).status_code == 401

    # someone else naming Thandi's id
    mallory = {**SIGNUP, "full_name": "Mallory", "email": "mallory@evil.com"}
    r = await client.post("/buyers/signup", json=mallory, headers=_as("user-mallory"))
    assert r.status_code == 403

    buyer = (await client.get("/buyers/user-thandi", headers=_as("user-thandi"))).json()
    assert buyer["full_name"] == "Thandi Mokoena"
    assert buyer["email"] == "thandi@example.com"


@pytest.mark.asyncio
async def test_signup_without_user_id_uses_caller(client):
    body = {k: v for k, v in SIGNUP.items() if k != "user_id"}
    r = await client.post("/buyers/signup", json=body, headers=_as("user-zanele"))
    assert r.status_code == 200
    assert r.json()["user_id"] == "user-zanele"


@pytest.mark.asyncio
async def test_agent_cannot_sign_up_as_buyer(client, agent_headers):
    body = {k: v for k, v in SIGNUP.items() if k != "user_id"}
    r = await client.post("/buyers/signup", json=body, headers=agent_headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Account is already registered as agent"
