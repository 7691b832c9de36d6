# heymies/domain/lead_score.py
from __future__ import annotations

from .types import PreapprovalStatus, QualificationInput, SellingFirst, Timeline

BUDGET_POINTS = 10
AREAS_POINTS = 10
PROPERTY_TYPES_POINTS = 5
BEDROOMS_POINTS = 5
BATHROOMS_POINTS = 5
SELLING_FIRST_PENALTY = 5

PREAPPROVAL_POINTS: dict[PreapprovalStatus, int] = {
    PreapprovalStatus.yes: 30,
    PreapprovalStatus.in_progress: 15,
}

TIMELINE_POINTS: dict[Timeline, int] = {
    Timeline.within_3_months: 25,
    Timeline.within_6_months: 15,
    Timeline.within_12_months: 8,
}


def compute_lead_score(q: QualificationInput) -> int:
    """
    Buyer readiness as a 0-100 integer.

    Fixed-weight point sum over the qualification answers, clamped at both ends.
    Missing answers contribute nothing.
    """
    score = 0

    if q.budget_min is not None or q.budget_max is not None:
        score += BUDGET_POINTS

    score += PREAPPROVAL_POINTS.get(q.preapproval_status, 0)
    score += TIMELINE_POINTS.get(q.timeline, 0)

    if q.areas_count > 0:
        score += AREAS_POINTS
    if q.property_types_count > 0:
        score += PROPERTY_TYPES_POINTS

    if q.bedrooms_min is not None:
        score += BEDROOMS_POINTS
    if q.bathrooms_min is not None:
        score += BATHROOMS_POINTS

    if q.selling_first == SellingFirst.yes:
        score -= SELLING_FIRST_PENALTY

    return max(0, min(100, score))
