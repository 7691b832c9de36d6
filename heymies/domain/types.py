# heymies/domain/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PreapprovalStatus(str, Enum):
    yes = "Yes"
    in_progress = "InProgress"
    no = "No"
    unset = "Unset"


class Timeline(str, Enum):
    within_3_months = "0-3mo"
    within_6_months = "3-6mo"
    within_12_months = "6-12mo"
    browsing = "Browsing"
    unset = "Unset"


class SellingFirst(str, Enum):
    yes = "Yes"
    no = "No"
    unset = "Unset"


@dataclass(frozen=True)
class QualificationInput:
    """
    A buyer's qualification answers, already sanitized.

    Areas are counted from the structured multi-select, never from free text.
    """
    budget_min: float | None = None
    budget_max: float | None = None
    preapproval_status: PreapprovalStatus = PreapprovalStatus.unset
    timeline: Timeline = Timeline.unset
    areas_count: int = 0
    property_types_count: int = 0
    bedrooms_min: int | None = None
    bathrooms_min: int | None = None
    selling_first: SellingFirst = SellingFirst.unset


@dataclass(frozen=True)
class BondInputs:
    price: float
    deposit: float
    annual_rate_percent: float
    term_years: float


@dataclass(frozen=True)
class BondResult:
    principal: float
    months: int
    monthly_payment: float
    total_paid: float
    total_interest: float


@dataclass(frozen=True)
class TransferDutyBracket:
    lower_bound: float
    upper_bound: float
    base_amount: float
    rate_percent: float


@dataclass(frozen=True)
class TransferInputs:
    price: float
    loan_amount: float
    seller_is_vat_vendor: bool = False
    # captured for later workflow; no effect on the numbers
    ownership_type: str = "Freehold"
    purchaser_type: str = "Natural Person"


@dataclass(frozen=True)
class TransferResult:
    price: float
    loan_amount: float

    bond_initiation_fee: float
    bond_attorney_fee: float
    deeds_office_fee: float
    petties_and_fica: float
    transfer_attorney_fee: float

    bond_subtotal: float
    bond_vat: float
    bond_total: float

    transfer_duty: float
    transfer_subtotal: float
    transfer_vat: float
    transfer_total: float

    grand_total: float
