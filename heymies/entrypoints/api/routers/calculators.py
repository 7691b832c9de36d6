# heymies/entrypoints/api/routers/calculators.py
from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter

from ....domain.bond import compute_bond
from ....domain.parsing import clean_amount
from ....domain.transfer import transfer_costs_for
from ....domain.types import BondInputs, TransferInputs
from ....schemas import BondIn, BondOut, LeadScoreIn, LeadScoreOut, TransferIn, TransferOut
from ....service_layer.scoring import score_form

router = APIRouter(prefix="/calculators", tags=["calculators"])


@router.post("/lead-score", response_model=LeadScoreOut)
def lead_score(body: LeadScoreIn) -> LeadScoreOut:
    return LeadScoreOut(score=score_form(body))


@router.post("/bond", response_model=BondOut)
def bond(body: BondIn) -> BondOut:
    result = compute_bond(
        BondInputs(
            price=clean_amount(body.price),
            deposit=clean_amount(body.deposit),
            annual_rate_percent=clean_amount(body.annual_rate_percent),
            term_years=clean_amount(body.term_years),
        )
    )
    return BondOut(**asdict(result))


@router.post("/transfer-costs", response_model=TransferOut)
def transfer_costs(body: TransferIn) -> TransferOut:
    inputs = TransferInputs(
        price=clean_amount(body.price),
        loan_amount=clean_amount(body.loan_amount),
        seller_is_vat_vendor=body.seller_is_vat_vendor,
        ownership_type=body.ownership_type,
        purchaser_type=body.purchaser_type,
    )
    result = transfer_costs_for(inputs)
    return TransferOut(ownership_type=inputs.ownership_type, purchaser_type=inputs.purchaser_type, **asdict(result))
