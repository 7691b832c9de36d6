# heymies/service_layer/scoring.py
from __future__ import annotations

from typing import Any, Protocol

from ..domain.lead_score import compute_lead_score
from ..domain.parsing import (
    parse_optional_number,
    parse_plus_int,
    parse_preapproval,
    parse_selling_first,
    parse_timeline,
)
from ..domain.types import QualificationInput


class QualificationForm(Protocol):
    budget_min: Any
    budget_max: Any
    preapproved: str | None
    timeline: str | None
    areas: list[str]
    property_types: list[str]
    bedrooms_min: Any
    bathrooms_min: Any
    selling_property: str | None


def qualification_from_form(form: QualificationForm) -> QualificationInput:
    """Sanitize raw buyer form answers into calculator input."""
    return QualificationInput(
        budget_min=parse_optional_number(form.budget_min),
        budget_max=parse_optional_number(form.budget_max),
        preapproval_status=parse_preapproval(form.preapproved),
        timeline=parse_timeline(form.timeline),
        areas_count=len([a for a in form.areas or [] if str(a).strip()]),
        property_types_count=len([t for t in form.property_types or [] if str(t).strip()]),
        bedrooms_min=parse_plus_int(form.bedrooms_min),
        bathrooms_min=parse_plus_int(form.bathrooms_min),
        selling_first=parse_selling_first(form.selling_property),
    )


def score_form(form: QualificationForm) -> int:
    return compute_lead_score(qualification_from_form(form))
