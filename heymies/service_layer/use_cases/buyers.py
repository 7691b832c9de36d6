# heymies/service_layer/use_cases/buyers.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import asc, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...adapters.repos.listings import ListingRepository
from ...adapters.repos.profiles import ProfileRepository
from ...domain.parsing import normalize_email, parse_optional_number, parse_plus_int, sanitize_phone
from ...domain.policies import buyer_signup_problem
from ...models import Buyer, Enquiry, EnquiryStatus, Listing, ProfileRole, SavedListing, Viewing, ViewingStatus
from ...schemas import BuyerProfileIn, BuyerSignupIn
from ..scoring import score_form

log = logging.getLogger(__name__)

DASHBOARD_LIMIT = 8


async def _find_buyer(session: AsyncSession, user_id: str) -> Buyer | None:
    return (await session.execute(select(Buyer).where(Buyer.user_id == user_id))).scalars().first()


async def get_buyer(session: AsyncSession, user_id: str) -> Buyer:
    buyer = await _find_buyer(session, user_id)
    if not buyer:
        raise LookupError(f"Buyer profile for {user_id} not found")
    return buyer


def _apply_profile(buyer: Buyer, body: BuyerProfileIn) -> None:
    buyer.full_name = body.full_name.strip()
    buyer.phone = sanitize_phone(body.phone)
    if body.email is not None:
        buyer.email = normalize_email(body.email)

    buyer.budget_min = parse_optional_number(body.budget_min)
    buyer.budget_max = parse_optional_number(body.budget_max)
    buyer.property_types = list(body.property_types)
    buyer.areas = list(body.areas)
    buyer.bedrooms_min = parse_plus_int(body.bedrooms_min)
    buyer.bathrooms_min = parse_plus_int(body.bathrooms_min)

    buyer.preapproved = body.preapproved or None
    buyer.timeline = body.timeline or None
    buyer.selling_property = body.selling_property or None
    buyer.popia_consent = bool(body.popia_consent)

    # stored score is always derived from the answers just saved
    buyer.lead_score = score_form(body)
    buyer.updated_at = datetime.utcnow()


async def signup_buyer(session: AsyncSession, user_id: str, body: BuyerSignupIn) -> Buyer:
    """
    Buyer signup for the signed-in `user_id`. Re-submitting overwrites that user's own profile.
    """
    if body.user_id and body.user_id != user_id:
        raise PermissionError("Not your profile")

    problem = buyer_signup_problem(body.model_dump())
    if problem:
        raise ValueError(problem)

    await ProfileRepository(session).claim(
        user_id, ProfileRole.buyer, full_name=body.full_name.strip(), phone=sanitize_phone(body.phone)
    )

    buyer = await _find_buyer(session, user_id)
    if buyer is None:
        buyer = Buyer(user_id=user_id)
        session.add(buyer)

    _apply_profile(buyer, body)
    await session.flush()
    log.info("buyer signup user=%s score=%d", user_id, buyer.lead_score)
    return buyer


async def update_buyer_profile(session: AsyncSession, user_id: str, body: BuyerProfileIn) -> Buyer:
    lo = parse_optional_number(body.budget_min)
    hi = parse_optional_number(body.budget_max)
    if lo is not None and hi is not None and lo > hi:
        raise ValueError("Budget Min cannot be higher than Budget Max.")

    buyer = await _find_buyer(session, user_id)
    if buyer is None:
        # signed up before profiles were created automatically
        await ProfileRepository(session).claim(user_id, ProfileRole.buyer)
        buyer = Buyer(user_id=user_id, full_name="", phone="", popia_consent=False, lead_score=0)
        session.add(buyer)

    _apply_profile(buyer, body)
    await session.flush()
    return buyer


async def _require_active_listing(session: AsyncSession, listing_id: int) -> Listing:
    listing = await ListingRepository(session).get_active(listing_id)
    if not listing:
        raise LookupError(f"Listing {listing_id} not found")
    return listing


async def save_listing(session: AsyncSession, user_id: str, listing_id: int) -> SavedListing:
    buyer = await get_buyer(session, user_id)
    await _require_active_listing(session, listing_id)

    existing = (
        await session.execute(
            select(SavedListing)
            .where(SavedListing.buyer_id == buyer.id)
            .where(SavedListing.listing_id == listing_id)
        )
    ).scalars().first()
    if existing:
        return existing

    saved = SavedListing(buyer_id=buyer.id, listing_id=listing_id)
    session.add(saved)
    await session.flush()
    return saved


async def unsave_listing(session: AsyncSession, user_id: str, saved_id: int) -> None:
    buyer = await get_buyer(session, user_id)
    saved = (await session.execute(select(SavedListing).where(SavedListing.id == saved_id))).scalars().first()
    if not saved:
        raise LookupError(f"Saved item {saved_id} not found")
    if saved.buyer_id != buyer.id:
        raise PermissionError("Not your saved item")
    await session.delete(saved)
    await session.flush()


async def create_enquiry(session: AsyncSession, user_id: str, listing_id: int) -> Enquiry:
    buyer = await get_buyer(session, user_id)
    await _require_active_listing(session, listing_id)

    enquiry = Enquiry(
        buyer_id=buyer.id,
        listing_id=listing_id,
        status=EnquiryStatus.open,
        last_message="New enquiry created.",
    )
    session.add(enquiry)
    await session.flush()
    return enquiry


async def schedule_viewing(session: AsyncSession, user_id: str, listing_id: int, when: datetime) -> Viewing:
    buyer = await get_buyer(session, user_id)
    await _require_active_listing(session, listing_id)

    viewing = Viewing(buyer_id=buyer.id, listing_id=listing_id, scheduled_for=when, status=ViewingStatus.scheduled)
    session.add(viewing)

    related = (
        await session.execute(
            select(Enquiry)
            .where(Enquiry.buyer_id == buyer.id)
            .where(Enquiry.listing_id == listing_id)
            .order_by(desc(Enquiry.updated_at))
        )
    ).scalars().first()
    if related:
        related.status = EnquiryStatus.viewing_scheduled
        related.last_message = "Viewing scheduled."
        related.updated_at = datetime.utcnow()

    await session.flush()
    return viewing


async def _listings_by_id(session: AsyncSession, ids: set[int]) -> dict[int, Listing]:
    if not ids:
        return {}
    rows = (await session.execute(select(Listing).where(Listing.id.in_(ids)))).scalars().all()
    return {l.id: l for l in rows}


async def buyer_dashboard(session: AsyncSession, user_id: str) -> dict[str, Any]:
    buyer = await get_buyer(session, user_id)

    saved = (
        await session.execute(
            select(SavedListing)
            .where(SavedListing.buyer_id == buyer.id)
            .order_by(desc(SavedListing.created_at), desc(SavedListing.id))
            .limit(DASHBOARD_LIMIT)
        )
    ).scalars().all()
    enquiries = (
        await session.execute(
            select(Enquiry)
            .where(Enquiry.buyer_id == buyer.id)
            .order_by(desc(Enquiry.updated_at), desc(Enquiry.id))
            .limit(DASHBOARD_LIMIT)
        )
    ).scalars().all()
    viewings = (
        await session.execute(
            select(Viewing)
            .where(Viewing.buyer_id == buyer.id)
            .order_by(asc(Viewing.scheduled_for))
            .limit(DASHBOARD_LIMIT)
        )
    ).scalars().all()

    listings = await _listings_by_id(
        session, {r.listing_id for r in saved} | {r.listing_id for r in enquiries} | {r.listing_id for r in viewings}
    )
    return {
        "buyer": buyer,
        "saved": [(r, listings.get(r.listing_id)) for r in saved],
        "enquiries": [(r, listings.get(r.listing_id)) for r in enquiries],
        "viewings": [(r, listings.get(r.listing_id)) for r in viewings],
    }
