# heymies/entrypoints/api/routers/buyers.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ....models import Listing
from ....schemas import (
    BuyerDashboardOut,
    BuyerOut,
    BuyerProfileIn,
    BuyerSignupIn,
    EnquiryOut,
    ListingCardOut,
    ListingRef,
    OkResponse,
    SavedOut,
    ViewingIn,
    ViewingOut,
)
from ....service_layer.use_cases import buyers as uc
from ..deps import current_user_id, get_session

router = APIRouter(tags=["buyers"])


def own_buyer(user_id: str, caller: str = Depends(current_user_id)) -> str:
    if caller != user_id:
        raise HTTPException(status_code=403, detail="Not your profile")
    return user_id


def _card(listing: Listing | None) -> ListingCardOut | None:
    return ListingCardOut.model_validate(listing) if listing else None


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, PermissionError):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, LookupError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@router.post("/buyers/signup", response_model=BuyerOut)
async def buyer_signup(
    body: BuyerSignupIn,
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
) -> BuyerOut:
    try:
        buyer = await uc.signup_buyer(session, user_id, body)
    except (ValueError, PermissionError) as e:
        raise _http_error(e)
    await session.commit()
    return BuyerOut.model_validate(buyer)


@router.get("/buyers/{user_id}", response_model=BuyerOut)
async def get_profile(user_id: str = Depends(own_buyer), session: AsyncSession = Depends(get_session)) -> BuyerOut:
    try:
        return BuyerOut.model_validate(await uc.get_buyer(session, user_id))
    except LookupError as e:
        raise _http_error(e)


@router.put("/buyers/{user_id}", response_model=BuyerOut)
async def update_profile(
    body: BuyerProfileIn,
    user_id: str = Depends(own_buyer),
    session: AsyncSession = Depends(get_session),
) -> BuyerOut:
    try:
        buyer = await uc.update_buyer_profile(session, user_id, body)
    except (ValueError, PermissionError) as e:
        raise _http_error(e)
    await session.commit()
    return BuyerOut.model_validate(buyer)


@router.post("/buyers/{user_id}/saved", response_model=SavedOut)
async def save(
    body: ListingRef,
    user_id: str = Depends(own_buyer),
    session: AsyncSession = Depends(get_session),
) -> SavedOut:
    try:
        saved = await uc.save_listing(session, user_id, body.listing_id)
    except LookupError as e:
        raise _http_error(e)
    await session.commit()
    return SavedOut(id=saved.id, listing_id=saved.listing_id, created_at=saved.created_at)


@router.delete("/buyers/{user_id}/saved/{saved_id}", response_model=OkResponse)
async def unsave(
    saved_id: int,
    user_id: str = Depends(own_buyer),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    try:
        await uc.unsave_listing(session, user_id, saved_id)
    except (LookupError, PermissionError) as e:
        raise _http_error(e)
    await session.commit()
    return OkResponse(ok=True)


@router.post("/buyers/{user_id}/enquiries", response_model=EnquiryOut)
async def enquire(
    body: ListingRef,
    user_id: str = Depends(own_buyer),
    session: AsyncSession = Depends(get_session),
) -> EnquiryOut:
    try:
        enquiry = await uc.create_enquiry(session, user_id, body.listing_id)
    except LookupError as e:
        raise _http_error(e)
    await session.commit()
    return EnquiryOut(
        id=enquiry.id,
        listing_id=enquiry.listing_id,
        status=enquiry.status,
        last_message=enquiry.last_message,
        updated_at=enquiry.updated_at,
    )


@router.post("/buyers/{user_id}/viewings", response_model=ViewingOut)
async def book_viewing(
    body: ViewingIn,
    user_id: str = Depends(own_buyer),
    session: AsyncSession = Depends(get_session),
) -> ViewingOut:
    try:
        viewing = await uc.schedule_viewing(session, user_id, body.listing_id, body.scheduled_for)
    except LookupError as e:
        raise _http_error(e)
    await session.commit()
    return ViewingOut(
        id=viewing.id,
        listing_id=viewing.listing_id,
        scheduled_for=viewing.scheduled_for,
        status=viewing.status,
    )


@router.get("/buyers/{user_id}/dashboard", response_model=BuyerDashboardOut)
async def dashboard(user_id: str = Depends(own_buyer), session: AsyncSession = Depends(get_session)) -> BuyerDashboardOut:
    try:
        data = await uc.buyer_dashboard(session, user_id)
    except LookupError as e:
        raise _http_error(e)

    return BuyerDashboardOut(
        buyer=BuyerOut.model_validate(data["buyer"]),
        saved=[
            SavedOut(id=s.id, listing_id=s.listing_id, created_at=s.created_at, listing=_card(l))
            for s, l in data["saved"]
        ],
        enquiries=[
            EnquiryOut(
                id=e.id,
                listing_id=e.listing_id,
                status=e.status,
                last_message=e.last_message,
                updated_at=e.updated_at,
                listing=_card(l),
            )
            for e, l in data["enquiries"]
        ],
        viewings=[
            ViewingOut(id=v.id, listing_id=v.listing_id, scheduled_for=v.scheduled_for, status=v.status, listing=_card(l))
            for v, l in data["viewings"]
        ],
    )
