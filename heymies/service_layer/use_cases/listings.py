# heymies/service_layer/use_cases/listings.py
from __future__ import annotations

import json
import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from ...adapters.clients.openai_text import OpenAITextClient
from ...adapters.repos.listings import ListingRepository
from ...domain.listing_copy import ListingFacts, build_listing_description
from ...domain.parsing import clean_int, clean_number, clean_str
from ...models import Listing, ListingStatus, SaleType
from ...schemas import ListingDescriptionIn, ListingIn, ListingPatch

log = logging.getLogger(__name__)

LISTING_PROMPT = """Write a clean, professional South African property listing description.

Rules:
- 120–170 words
- No emojis
- No ALL CAPS
- No hype language
- Mention key specs and location
- If rent: include rent per month, deposit (if provided), and available date (if provided)
- End with a short call-to-action

Property Data:
{payload}"""


def _facts_from_input(body: ListingIn, price: float) -> ListingFacts:
    return ListingFacts(
        sale_type=body.sale_type,
        listing_type=body.listing_type,
        title=body.title,
        suburb=body.suburb.strip(),
        city=body.city.strip(),
        province=body.province.strip(),
        price=price,
        deposit=clean_number(body.deposit),
        available_from=body.available_from.isoformat() if body.available_from else None,
        bedrooms=clean_int(body.bedrooms),
        bathrooms=clean_number(body.bathrooms),
        garages=clean_int(body.garages),
        parking=clean_int(body.parking),
        floor_size_m2=clean_int(body.floor_size),
        erf_size_m2=clean_int(body.erf_size),
        levy=clean_number(body.levy),
        rates_taxes=clean_number(body.rates_taxes),
        pets_allowed=body.pets_allowed,
        furnished=body.furnished,
        features=list(body.features),
    )


async def create_listing(session: AsyncSession, agent_id: str, body: ListingIn) -> Listing:
    if not body.title.strip():
        raise ValueError("Title is required.")
    if not (body.suburb.strip() and body.city.strip() and body.province.strip()):
        raise ValueError("Suburb, City, and Province are required.")

    price = clean_number(body.price)
    if price is None:
        raise ValueError("Sale price is required." if body.sale_type == "sale" else "Rent per month is required.")

    is_rent = body.sale_type == "rent"
    description = body.description.strip() or build_listing_description(_facts_from_input(body, price))

    listing = Listing(
        agent_id=agent_id,
        title=body.title.strip(),
        description=description or None,
        status=ListingStatus.active,
        sale_type=SaleType(body.sale_type),
        listing_type=body.listing_type,
        street_address=clean_str(body.street_address),
        suburb=body.suburb.strip(),
        city=body.city.strip(),
        province=body.province.strip(),
        postal_code=clean_str(body.postal_code),
        price=None if is_rent else price,
        price_per_month=price if is_rent else None,
        deposit=clean_number(body.deposit) if is_rent else None,
        available_from=body.available_from if is_rent else None,
        bedrooms=clean_int(body.bedrooms),
        bathrooms=clean_number(body.bathrooms),
        garages=clean_int(body.garages),
        parking=clean_int(body.parking),
        floor_size_m2=clean_int(body.floor_size),
        erf_size_m2=clean_int(body.erf_size),
        levy=clean_number(body.levy),
        rates_taxes=clean_number(body.rates_taxes),
        pets_allowed=body.pets_allowed,
        furnished=body.furnished,
        features=list(body.features),
        contact_name=clean_str(body.contact_name),
        contact_phone=clean_str(body.contact_phone),
        contact_email=clean_str(body.contact_email),
        cover_image=body.cover_image,
        images=list(body.images),
    )
    session.add(listing)
    await session.flush()

    log.info("listing created id=%s agent=%s type=%s", listing.id, agent_id, body.sale_type)
    return listing


async def get_owned_listing(session: AsyncSession, agent_id: str, listing_id: int) -> Listing:
    listing = await ListingRepository(session).get(listing_id)
    if not listing:
        raise LookupError(f"Listing {listing_id} not found")
    if listing.agent_id != agent_id:
        raise PermissionError("Not your listing")
    return listing


async def update_listing(session: AsyncSession, agent_id: str, listing_id: int, patch: ListingPatch) -> Listing:
    listing = await get_owned_listing(session, agent_id, listing_id)
    changes = patch.model_dump(exclude_unset=True)

    if "title" in changes:
        title = (changes.pop("title") or "").strip()
        if not title:
            raise ValueError("Title is required.")
        listing.title = title

    for key in ("suburb", "city", "province"):
        if key in changes:
            value = (changes.pop(key) or "").strip()
            if not value:
                raise ValueError("Suburb, City, and Province are required.")
            setattr(listing, key, value)

    if "price" in changes:
        price = clean_number(changes.pop("price"))
        if price is None:
            raise ValueError(
                "Sale price is required." if listing.sale_type == SaleType.sale else "Rent per month is required."
            )
        if listing.sale_type == SaleType.rent:
            listing.price_per_month = price
        else:
            listing.price = price

    if "status" in changes:
        listing.status = ListingStatus(changes.pop("status"))

    for key in ("deposit", "bathrooms"):
        if key in changes:
            setattr(listing, key, clean_number(changes.pop(key)))
    for key in ("bedrooms", "garages", "parking"):
        if key in changes:
            setattr(listing, key, clean_int(changes.pop(key)))
    for key in ("description", "street_address", "postal_code"):
        if key in changes:
            setattr(listing, key, clean_str(changes.pop(key)))

    # remaining fields are stored as given
    for key, value in changes.items():
        if value is not None:
            setattr(listing, key, value)

    listing.updated_at = datetime.utcnow()
    await session.flush()
    return listing


async def deactivate_listing(session: AsyncSession, agent_id: str, listing_id: int) -> Listing:
    listing = await get_owned_listing(session, agent_id, listing_id)
    listing.status = ListingStatus.inactive
    listing.updated_at = datetime.utcnow()
    await session.flush()
    log.info("listing %s deactivated", listing_id)
    return listing


def listing_prompt(body: ListingDescriptionIn) -> str:
    payload = body.model_dump(by_alias=True)
    return LISTING_PROMPT.format(payload=json.dumps(payload, indent=2, ensure_ascii=False))


async def generate_listing_description(body: ListingDescriptionIn, client: OpenAITextClient | None = None) -> str:
    """
    Raises RuntimeError when the model is not configured or returns nothing.
    httpx errors from the upstream call propagate to the caller.
    """
    client = client or OpenAITextClient()
    text = await client.generate(listing_prompt(body), temperature=0.6, max_output_tokens=300)
    if not text:
        raise RuntimeError("OpenAI returned empty response")
    return text
