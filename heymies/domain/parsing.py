# heymies/domain/parsing.py
from __future__ import annotations

import math
import re
from typing import Any

from .types import PreapprovalStatus, SellingFirst, Timeline

_NOT_AMOUNT = re.compile(r"[^\d.]")
_NOT_DIGIT = re.compile(r"[^\d]")
_NOT_PHONE = re.compile(r"[^\d+]")


def _finite(n: float) -> float | None:
    return n if math.isfinite(n) else None


def parse_optional_number(x: Any) -> float | None:
    if x is None:
        return None
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        return _finite(float(x))
    s = str(x).strip()
    if not s:
        return None
    try:
        return _finite(float(s))
    except ValueError:
        return None


def parse_non_negative_int(x: Any) -> int:
    n = parse_optional_number(x)
    if n is None or n < 0:
        return 0
    return int(n)


def parse_plus_int(x: Any) -> int | None:
    """'3+' style selector values -> 3. Empty selection -> None."""
    if x is None or x == "":
        return None
    n = parse_optional_number(str(x).replace("+", ""))
    return None if n is None else int(n)


def clean_amount(x: Any) -> float:
    """Calculator inputs: keep digits and '.', anything unusable is 0."""
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        n = float(x)
        return n if math.isfinite(n) and n >= 0 else 0.0
    s = _NOT_AMOUNT.sub("", str(x or ""))
    try:
        n = float(s)
    except ValueError:
        return 0.0
    return n if math.isfinite(n) else 0.0


def clean_number(x: Any) -> float | None:
    if x is None:
        return None
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        return _finite(float(x))
    s = _NOT_AMOUNT.sub("", str(x).strip())
    if not s:
        return None
    try:
        return _finite(float(s))
    except ValueError:
        return None


def clean_int(x: Any) -> int | None:
    if x is None:
        return None
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        return int(x) if math.isfinite(x) else None
    s = _NOT_DIGIT.sub("", str(x).strip())
    if not s:
        return None
    return int(s)


def sanitize_phone(x: str | None) -> str:
    return _NOT_PHONE.sub("", x or "")


def normalize_email(x: Any) -> str:
    return str(x or "").strip().lower()


def clean_str(x: Any) -> str | None:
    """Trimmed string, or None when blank."""
    s = str(x or "").strip()
    return s or None


# -----------------------------
# Form labels -> calculator enums
# -----------------------------
_PREAPPROVAL_LABELS = {
    "yes": PreapprovalStatus.yes,
    "in progress": PreapprovalStatus.in_progress,
    "inprogress": PreapprovalStatus.in_progress,
    "no": PreapprovalStatus.no,
}

_TIMELINE_LABELS = {
    "0-3 months": Timeline.within_3_months,
    "0-3mo": Timeline.within_3_months,
    "3-6 months": Timeline.within_6_months,
    "3-6mo": Timeline.within_6_months,
    "6-12 months": Timeline.within_12_months,
    "6-12mo": Timeline.within_12_months,
    "just browsing": Timeline.browsing,
    "browsing": Timeline.browsing,
}

_SELLING_LABELS = {
    "yes": SellingFirst.yes,
    "no": SellingFirst.no,
}


def _label(x: Any) -> str:
    return str(x or "").strip().lower()


def parse_preapproval(x: Any) -> PreapprovalStatus:
    return _PREAPPROVAL_LABELS.get(_label(x), PreapprovalStatus.unset)


def parse_timeline(x: Any) -> Timeline:
    return _TIMELINE_LABELS.get(_label(x), Timeline.unset)


def parse_selling_first(x: Any) -> SellingFirst:
    return _SELLING_LABELS.get(_label(x), SellingFirst.unset)
