# heymies/service_layer/use_cases/sellers.py
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ...adapters.repos.profiles import ProfileRepository
from ...domain.parsing import clean_int, clean_number, clean_str, normalize_email, sanitize_phone
from ...domain.policies import seller_signup_problem
from ...models import PrivateSeller, ProfileRole
from ...schemas import SellerSignupIn

log = logging.getLogger(__name__)


async def signup_private_seller(session: AsyncSession, user_id: str, body: SellerSignupIn) -> PrivateSeller:
    problem = seller_signup_problem(body.model_dump())
    if problem:
        raise ValueError(problem)

    full_name = body.full_name.strip()
    phone = sanitize_phone(body.phone)
    await ProfileRepository(session).claim(user_id, ProfileRole.seller, full_name=full_name, phone=phone)

    seller = PrivateSeller(
        user_id=user_id,
        email=normalize_email(body.email),
        full_name=full_name,
        phone=phone,
        preferred_contact=body.preferred_contact,
        intent=body.intent,
        property_type=body.property_type,
        province=body.province.strip(),
        city=body.city.strip(),
        suburb=body.suburb.strip(),
        street_address=clean_str(body.street_address),
        bedrooms=clean_int(body.bedrooms),
        bathrooms=clean_number(body.bathrooms),
        parking=clean_int(body.parking),
        floor_size_m2=clean_int(body.floor_size_m2),
        erf_size_m2=clean_int(body.erf_size_m2),
        asking_price=clean_number(body.asking_price),
        price_flexibility=body.price_flexibility,
        target_timeframe=clean_str(body.target_timeframe),
        bond_status=body.bond_status,
        # amounts only count when the seller ticked that they know them
        rates_taxes_amount=clean_number(body.rates_taxes_amount) if body.rates_taxes_known else None,
        levies_amount=clean_number(body.levies_amount) if body.levies_known else None,
        reason_for_selling=clean_str(body.reason_for_selling),
        access_for_viewings=clean_str(body.access_for_viewings),
        occupancy=clean_str(body.occupancy),
        available_from=body.available_from,
        special_features=clean_str(body.special_features),
        notes=clean_str(body.notes),
        popia_consent=bool(body.popia_consent),
    )
    session.add(seller)
    await session.flush()

    log.info("private seller signup id=%s suburb=%s", seller.id, seller.suburb)
    return seller
