# heymies/entrypoints/api/routers/listings.py
from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ....adapters.repos.listings import DEFAULT_PAGE_SIZE, ListingRepository, ListingSearch
from ....schemas import ListingIn, ListingOut, ListingPatch, ListingSearchOut
from ....service_layer.use_cases.listings import create_listing, deactivate_listing, update_listing
from ..deps import get_session, reject_buyers

router = APIRouter(tags=["listings"])


@router.get("/listings", response_model=ListingSearchOut)
async def search_listings(
    mode: Literal["buy", "rent"] | None = Query(default=None),
    q: str | None = Query(default=None),
    price_min: float | None = Query(default=None, ge=0),
    price_max: float | None = Query(default=None, ge=0),
    beds_min: int | None = Query(default=None, ge=0),
    types: list[str] = Query(default=[]),
    sort: Literal["new", "price_asc", "price_desc"] = Query("new"),
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE),
    session: AsyncSession = Depends(get_session),
) -> ListingSearchOut:
    result = await ListingRepository(session).search(
        ListingSearch(
            mode=mode,
            q=q,
            price_min=price_min,
            price_max=price_max,
            beds_min=beds_min,
            types=[t for t in types if t],
            sort=sort,
            page=page,
            page_size=page_size,
        )
    )
    return ListingSearchOut(
        rows=[ListingOut.model_validate(r) for r in result.rows],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        has_more=result.has_more,
    )


@router.get("/listings/{listing_id}", response_model=ListingOut)
async def get_listing(listing_id: int, session: AsyncSession = Depends(get_session)) -> ListingOut:
    listing = await ListingRepository(session).get_active(listing_id)
    if not listing:
        raise HTTPException(status_code=404, detail="Listing not found")
    return ListingOut.model_validate(listing)


@router.post("/listings", response_model=ListingOut)
async def post_listing(
    body: ListingIn,
    user_id: str = Depends(reject_buyers),
    session: AsyncSession = Depends(get_session),
) -> ListingOut:
    try:
        listing = await create_listing(session, user_id, body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await session.commit()
    return ListingOut.model_validate(listing)


@router.patch("/listings/{listing_id}", response_model=ListingOut)
async def patch_listing(
    listing_id: int,
    body: ListingPatch,
    user_id: str = Depends(reject_buyers),
    session: AsyncSession = Depends(get_session),
) -> ListingOut:
    try:
        listing = await update_listing(session, user_id, listing_id, body)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await session.commit()
    return ListingOut.model_validate(listing)


@router.delete("/listings/{listing_id}", response_model=ListingOut)
async def delete_listing(
    listing_id: int,
    user_id: str = Depends(reject_buyers),
    session: AsyncSession = Depends(get_session),
) -> ListingOut:
    try:
        listing = await deactivate_listing(session, user_id, listing_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await session.commit()
    return ListingOut.model_validate(listing)


@router.get("/dashboard/listings", response_model=list[ListingOut])
async def my_listings(
    user_id: str = Depends(reject_buyers),
    session: AsyncSession = Depends(get_session),
) -> list[ListingOut]:
    rows = await ListingRepository(session).list_for_agent(user_id)
    return [ListingOut.model_validate(r) for r in rows]
