# heymies/service_layer/demo_seed.py
from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..adapters.repos.profiles import ProfileRepository
from ..domain.listing_copy import ListingFacts, build_listing_description
from ..models import Listing, ListingStatus, ProfileRole, SaleType

DEMO_AGENT_ID = "demo-agent"

DEMO_LISTINGS: list[dict[str, Any]] = [
    {
        "title": "Family home with garden and pool",
        "sale_type": SaleType.sale,
        "listing_type": "house",
        "suburb": "Durbanville",
        "city": "Cape Town",
        "province": "Western Cape",
        "price": 3_450_000,
        "bedrooms": 4,
        "bathrooms": 2.5,
        "garages": 2,
        "floor_size_m2": 260,
        "erf_size_m2": 780,
        "features": ["pool", "garden", "solar"],
    },
    {
        "title": "Lock-up-and-go apartment near the Gautrain",
        "sale_type": SaleType.sale,
        "listing_type": "apartment",
        "suburb": "Rosebank",
        "city": "Johannesburg",
        "province": "Gauteng",
        "price": 1_250_000,
        "bedrooms": 2,
        "bathrooms": 1,
        "parking": 1,
        "floor_size_m2": 78,
        "levy": 2_150,
        "features": ["fibre", "24h security"],
    },
    {
        "title": "Sunny townhouse in secure complex",
        "sale_type": SaleType.rent,
        "listing_type": "townhouse",
        "suburb": "Umhlanga",
        "city": "Durban",
        "province": "KwaZulu-Natal",
        "price_per_month": 18_500,
        "deposit": 37_000,
        "bedrooms": 3,
        "bathrooms": 2,
        "garages": 1,
        "pets_allowed": True,
        "features": ["braai area"],
    },
]


def _description(row: dict[str, Any]) -> str:
    return build_listing_description(
        ListingFacts(
            sale_type=row["sale_type"].value,
            listing_type=row["listing_type"],
            title=row["title"],
            suburb=row["suburb"],
            city=row["city"],
            province=row["province"],
            price=row.get("price") or row.get("price_per_month"),
            deposit=row.get("deposit"),
            bedrooms=row.get("bedrooms"),
            bathrooms=row.get("bathrooms"),
            garages=row.get("garages"),
            parking=row.get("parking"),
            floor_size_m2=row.get("floor_size_m2"),
            erf_size_m2=row.get("erf_size_m2"),
            levy=row.get("levy"),
            pets_allowed=row.get("pets_allowed", False),
            features=row.get("features", []),
        )
    )


async def seed_demo(session: AsyncSession, *, agent_id: str = DEMO_AGENT_ID) -> dict[str, Any]:
    """
    Idempotent demo seed:
    - creates/updates a handful of active listings owned by one demo agent
    - safe to run multiple times (keyed on agent + title)
    - gives the demo owner an agent profile so it can sign in to the CRM
    """
    await ProfileRepository(session).claim(agent_id, ProfileRole.agent, full_name="HeyMies Demo Agent")

    created = 0
    for row in DEMO_LISTINGS:
        listing = (
            await session.execute(
                select(Listing).where(Listing.agent_id == agent_id).where(Listing.title == row["title"])
            )
        ).scalars().first()

        if listing is None:
            listing = Listing(agent_id=agent_id, title=row["title"])
            session.add(listing)
            created += 1

        for k, v in row.items():
            setattr(listing, k, v)
        listing.status = ListingStatus.active
        listing.description = _description(row)
        await session.flush()

    return {"seeded": len(DEMO_LISTINGS), "created": created, "agent_id": agent_id}
