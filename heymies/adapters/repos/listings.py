# heymies/adapters/repos/listings.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from sqlalchemy import asc, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Listing, ListingStatus, SaleType

ListingMode = Literal["buy", "rent"]
ListingSort = Literal["new", "price_asc", "price_desc"]

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class ListingSearch:
    mode: ListingMode | None = None
    q: str | None = None
    price_min: float | None = None
    price_max: float | None = None
    beds_min: int | None = None
    types: list[str] = field(default_factory=list)
    sort: ListingSort = "new"
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class ListingPage:
    rows: list[Listing]
    total: int
    page: int
    page_size: int
    has_more: bool


class ListingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, listing_id: int) -> Listing | None:
        return (await self.session.execute(select(Listing).where(Listing.id == listing_id))).scalars().first()

    async def get_active(self, listing_id: int) -> Listing | None:
        stmt = select(Listing).where(Listing.id == listing_id).where(Listing.status == ListingStatus.active)
        return (await self.session.execute(stmt)).scalars().first()

    async def list_for_agent(self, agent_id: str) -> list[Listing]:
        stmt = (
            select(Listing)
            .where(Listing.agent_id == agent_id)
            .where(Listing.status != ListingStatus.inactive)
            .order_by(desc(Listing.created_at), desc(Listing.id))
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def search(self, params: ListingSearch) -> ListingPage:
        """
        Active listings only, filtered, sorted and paged (1-based pages).
        """
        page_size = min(max(params.page_size or DEFAULT_PAGE_SIZE, 1), MAX_PAGE_SIZE)
        page = max(params.page or 1, 1)
        offset = (page - 1) * page_size

        stmt = select(Listing).where(Listing.status == ListingStatus.active)

        # buy -> sale price, rent -> monthly rent
        price_col = Listing.price
        if params.mode == "buy":
            stmt = stmt.where(Listing.sale_type == SaleType.sale)
        elif params.mode == "rent":
            stmt = stmt.where(Listing.sale_type == SaleType.rent)
            price_col = Listing.price_per_month

        if params.q and params.q.strip():
            like = f"%{params.q.strip().lower()}%"
            stmt = stmt.where(or_(func.lower(Listing.city).like(like), func.lower(Listing.suburb).like(like)))

        if params.price_min is not None:
            stmt = stmt.where(price_col >= params.price_min)
        if params.price_max is not None:
            stmt = stmt.where(price_col <= params.price_max)

        if params.beds_min is not None:
            stmt = stmt.where(Listing.bedrooms >= params.beds_min)

        if params.types:
            stmt = stmt.where(Listing.listing_type.in_(params.types))

        total = (await self.session.execute(select(func.count()).select_from(stmt.subquery()))).scalar_one()

        if params.sort == "price_asc":
            stmt = stmt.order_by(asc(price_col), asc(Listing.id))
        elif params.sort == "price_desc":
            stmt = stmt.order_by(desc(price_col), desc(Listing.id))
        else:
            stmt = stmt.order_by(desc(Listing.created_at), desc(Listing.id))

        rows = list((await self.session.execute(stmt.offset(offset).limit(page_size))).scalars().all())

        return ListingPage(
            rows=rows,
            total=int(total),
            page=page,
            page_size=page_size,
            has_more=(offset + len(rows)) < int(total),
        )
