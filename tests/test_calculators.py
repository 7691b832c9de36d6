# tests/test_calculators.py
import pytest

from heymies.domain.bond import compute_bond, compute_monthly_payment, term_months
from heymies.domain.lead_score import compute_lead_score
from heymies.domain.transfer import compute_transfer_costs, transfer_duty, transfer_costs_for
from heymies.domain.types import (
    BondInputs,
    PreapprovalStatus,
    QualificationInput,
    SellingFirst,
    Timeline,
    TransferInputs,
)


def _ready_buyer() -> QualificationInput:
    return QualificationInput(
        budget_min=1_000_000,
        preapproval_status=PreapprovalStatus.yes,
        timeline=Timeline.within_3_months,
        areas_count=2,
        property_types_count=1,
        bedrooms_min=3,
        bathrooms_min=2,
        selling_first=SellingFirst.no,
    )


def test_lead_score_full_profile():
    assert compute_lead_score(_ready_buyer()) == 90


def test_lead_score_empty_and_clamped_at_zero():
    assert compute_lead_score(QualificationInput()) == 0
    assert compute_lead_score(QualificationInput(selling_first=SellingFirst.yes)) == 0


def test_lead_score_is_pure():
    q = _ready_buyer()
    assert compute_lead_score(q) == compute_lead_score(q)


def test_lead_score_partial_weights():
    q = QualificationInput(
        budget_max=2_000_000,
        preapproval_status=PreapprovalStatus.in_progress,
        timeline=Timeline.within_12_months,
        selling_first=SellingFirst.yes,
    )
    # 10 + 15 + 8 - 5
    assert compute_lead_score(q) == 28


def test_lead_score_browsing_and_no_preapproval_add_nothing():
    q = QualificationInput(preapproval_status=PreapprovalStatus.no, timeline=Timeline.browsing)
    assert compute_lead_score(q) == 0


def test_monthly_payment_matches_closed_form():
    principal, rate, years = 1_800_000, 11.75, 20
    r = rate / 100 / 12
    n = 240
    expected = principal * (r * (1 + r) ** n) / ((1 + r) ** n - 1)

    got = compute_monthly_payment(principal, rate, years)
    assert abs(got - expected) <= 1


def test_monthly_payment_zero_rate_is_straight_line():
    assert compute_monthly_payment(1_200_000, 0, 20) == 1_200_000 / 240


def test_term_months_never_below_one():
    assert term_months(0) == 1
    assert term_months(0.01) == 1
    assert term_months(20) == 240


def test_compute_bond_totals():
    res = compute_bond(BondInputs(price=2_000_000, deposit=200_000, annual_rate_percent=11.75, term_years=20))
    assert res.principal == 1_800_000
    assert res.months == 240
    assert res.total_paid == pytest.approx(res.monthly_payment * 240)
    assert res.total_interest == pytest.approx(res.total_paid - 1_800_000)


def test_compute_bond_deposit_above_price():
    res = compute_bond(BondInputs(price=500_000, deposit=600_000, annual_rate_percent=10, term_years=20))
    assert res.principal == 0
    assert res.monthly_payment == 0
    assert res.total_interest == 0


def test_transfer_duty_brackets():
    assert transfer_duty(0) == 0
    assert transfer_duty(1_210_000) == 0
    assert transfer_duty(1_210_001) > 0
    assert transfer_duty(1_663_800) == pytest.approx(13_614)
    assert transfer_duty(2_329_300) == pytest.approx(53_544)
    assert transfer_duty(2_994_800) == pytest.approx(106_784)
    assert transfer_duty(13_310_000) == pytest.approx(1_241_456)
    assert transfer_duty(14_310_000) == pytest.approx(1_241_456 + 130_000)


def test_transfer_costs_vat_vendor_has_no_duty():
    res = compute_transfer_costs(1_000_000, 1_000_000, seller_is_vat_vendor=True)
    assert res.transfer_duty == 0

    res = compute_transfer_costs(5_000_000, 4_000_000, seller_is_vat_vendor=True)
    assert res.transfer_duty == 0


def test_transfer_costs_totals():
    res = compute_transfer_costs(2_000_000, 1_800_000)

    bond_vat = (29716 + 2200) * 0.15
    transfer_vat = (29716 + 2200) * 0.15
    assert res.bond_vat == pytest.approx(bond_vat)
    assert res.bond_total == pytest.approx(6038 + 29716 + 1464 + 2200 + bond_vat)
    assert res.transfer_duty == pytest.approx(13_614 + (2_000_000 - 1_663_800) * 0.06)
    assert res.transfer_total == pytest.approx(29716 + 1464 + 2200 + transfer_vat + res.transfer_duty)
    assert res.grand_total == pytest.approx(res.bond_total + res.transfer_total)


def test_transfer_costs_ignore_ownership_and_purchaser():
    a = transfer_costs_for(TransferInputs(price=3_000_000, loan_amount=2_000_000))
    b = transfer_costs_for(
        TransferInputs(price=3_000_000, loan_amount=2_000_000, ownership_type="Sectional title", purchaser_type="Trust")
    )
    assert a == b
