# heymies/domain/transfer.py
from __future__ import annotations

from .types import TransferDutyBracket, TransferInputs, TransferResult


# ---------------------------------------------------------------------------
# SARS transfer duty, effective 1 April 2025
# ---------------------------------------------------------------------------

TRANSFER_DUTY_BRACKETS_2025 = [
    TransferDutyBracket(0, 1_210_000, 0, 0),
    TransferDutyBracket(1_210_000, 1_663_800, 0, 3),
    TransferDutyBracket(1_663_800, 2_329_300, 13_614, 6),
    TransferDutyBracket(2_329_300, 2_994_800, 53_544, 8),
    TransferDutyBracket(2_994_800, 13_310_000, 106_784, 11),
    TransferDutyBracket(13_310_000, float("inf"), 1_241_456, 13),
]


# ---------------------------------------------------------------------------
# Flat fee estimates (do not scale with price or loan yet)
# ---------------------------------------------------------------------------

BOND_INITIATION_FEE = 6038
BOND_ATTORNEY_FEE = 29716
DEEDS_OFFICE_FEE = 1464
PETTIES_AND_FICA = 2200
TRANSFER_ATTORNEY_FEE = 29716
VAT_RATE = 0.15


def transfer_duty(price: float, brackets: list[TransferDutyBracket] = TRANSFER_DUTY_BRACKETS_2025) -> float:
    """Duty on a purchase price: base of the bracket plus its marginal rate on the excess."""
    p = max(0.0, price)
    for b in brackets:
        if p <= b.upper_bound:
            return b.base_amount + (p - b.lower_bound) * b.rate_percent / 100
    # unreachable while the last bracket is open-ended
    raise ValueError(f"no transfer duty bracket covers price {price}")


def compute_transfer_costs(
    price: float,
    loan_amount: float,
    seller_is_vat_vendor: bool = False,
) -> TransferResult:
    """
    Estimated bond-registration and transfer costs for a purchase.

    VAT-vendor sales carry VAT instead of transfer duty, so duty is zero for them.
    """
    duty = 0.0 if seller_is_vat_vendor else transfer_duty(price)

    bond_subtotal = BOND_INITIATION_FEE + BOND_ATTORNEY_FEE + DEEDS_OFFICE_FEE + PETTIES_AND_FICA
    bond_vat = (BOND_ATTORNEY_FEE + PETTIES_AND_FICA) * VAT_RATE
    bond_total = bond_subtotal + bond_vat

    transfer_subtotal = TRANSFER_ATTORNEY_FEE + DEEDS_OFFICE_FEE + PETTIES_AND_FICA
    transfer_vat = (TRANSFER_ATTORNEY_FEE + PETTIES_AND_FICA) * VAT_RATE
    transfer_total = transfer_subtotal + transfer_vat + duty

    return TransferResult(
        price=price,
        loan_amount=loan_amount,
        bond_initiation_fee=BOND_INITIATION_FEE,
        bond_attorney_fee=BOND_ATTORNEY_FEE,
        deeds_office_fee=DEEDS_OFFICE_FEE,
        petties_and_fica=PETTIES_AND_FICA,
        transfer_attorney_fee=TRANSFER_ATTORNEY_FEE,
        bond_subtotal=bond_subtotal,
        bond_vat=bond_vat,
        bond_total=bond_total,
        transfer_duty=duty,
        transfer_subtotal=transfer_subtotal,
        transfer_vat=transfer_vat,
        transfer_total=transfer_total,
        grand_total=bond_total + transfer_total,
    )


def transfer_costs_for(inputs: TransferInputs) -> TransferResult:
    return compute_transfer_costs(inputs.price, inputs.loan_amount, inputs.seller_is_vat_vendor)
