# heymies/entrypoints/api/routers/ai.py
from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ....schemas import ListingDescriptionIn, ListingDescriptionOut
from ....service_layer.use_cases.listings import generate_listing_description

log = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/listing-description", response_model=ListingDescriptionOut)
async def listing_description(body: ListingDescriptionIn):
    try:
        text = await generate_listing_description(body)
    except RuntimeError as e:
        log.error("listing description: %s", e)
        return JSONResponse({"error": str(e)}, status_code=500)
    except httpx.HTTPStatusError as e:
        log.error("listing description upstream error: %s", e.response.status_code)
        return JSONResponse(
            {"error": e.response.text or "AI generation failed", "status": e.response.status_code},
            status_code=500,
        )
    except httpx.HTTPError as e:
        log.error("listing description request failed: %r", e)
        return JSONResponse({"error": str(e) or "AI generation failed", "status": None}, status_code=500)
    return ListingDescriptionOut(description=text)
