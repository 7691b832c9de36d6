# heymies/entrypoints/api/routers/sellers.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ....schemas import SellerOut, SellerSignupIn
from ....service_layer.use_cases.sellers import signup_private_seller
from ..deps import current_user_id, get_session

router = APIRouter(tags=["sellers"])


@router.post("/sellers/signup", response_model=SellerOut)
async def seller_signup(
    body: SellerSignupIn,
    user_id: str = Depends(current_user_id),
    session: AsyncSession = Depends(get_session),
) -> SellerOut:
    try:
        seller = await signup_private_seller(session, user_id, body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    await session.commit()
    return SellerOut.model_validate(seller)
