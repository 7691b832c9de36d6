# heymies/domain/policies.py
from __future__ import annotations

from typing import Any

from .parsing import clean_number, parse_optional_number, sanitize_phone

AGENT_STATUSES = {"pending", "approved", "rejected"}

MIN_PHONE_DIGITS = 9


def is_valid_email(email: str | None) -> bool:
    return bool(email) and "@" in email


def buyer_signup_problem(form: dict[str, Any]) -> str | None:
    """
    Returns the first problem with a buyer signup form, or None.

    Same order the three signup steps are checked in: details, property, qualification.
    """
    # Step 1: details
    if len(str(form.get("full_name") or "").strip()) < 2:
        return "Please enter your full name."
    if len(sanitize_phone(form.get("phone"))) < MIN_PHONE_DIGITS:
        return "Please enter a valid phone number."
    if not is_valid_email(form.get("email")):
        return "Please enter a valid email address."

    # Step 2: property
    lo = parse_optional_number(form.get("budget_min"))
    hi = parse_optional_number(form.get("budget_max"))
    if lo is not None and hi is not None and lo > hi:
        return "Budget Min cannot be higher than Budget Max."
    if not form.get("property_types"):
        return "Please select at least one property type."

    # Step 3: qualification
    if not form.get("preapproved"):
        return "Please select your bond status."
    if not form.get("timeline"):
        return "Please select your buying timeline."
    if not form.get("selling_property"):
        return "Please tell us if you need to sell first."
    if not form.get("popia_consent"):
        return "You must accept POPIA consent to continue."
    return None


def seller_signup_problem(form: dict[str, Any]) -> str | None:
    if len(str(form.get("full_name") or "").strip()) < 2:
        return "Please enter your full name."
    if len(sanitize_phone(form.get("phone"))) < MIN_PHONE_DIGITS:
        return "Please enter a valid phone number."
    if not is_valid_email(form.get("email")):
        return "Please enter a valid email address."
    if not form.get("property_type"):
        return "Select a property type."
    for key, label in (("province", "Province"), ("city", "City"), ("suburb", "Suburb")):
        if not str(form.get(key) or "").strip():
            return f"{label} is required."
    if clean_number(form.get("asking_price")) is None:
        return "Enter an asking price."
    if not form.get("bond_status"):
        return "Select your bond status."
    if not form.get("popia_consent"):
        return "You must accept POPIA consent to continue."
    return None


def agent_signup_problem(form: dict[str, Any]) -> str | None:
    """
    First problem with the agent signup form, or None.
    Steps: profile, agency, performance, consent.
    """
    if not is_valid_email(form.get("email")):
        return "Enter a valid email."
    if len(str(form.get("full_name") or "").strip()) < 2:
        return "Enter your full name."
    if len(sanitize_phone(form.get("phone"))) < MIN_PHONE_DIGITS:
        return "Enter a valid phone number."
    if not form.get("preferred_contact"):
        return "Select a preferred contact method."

    if len(str(form.get("agency_name") or "").strip()) < 2:
        return "Enter your agency name."
    if len(str(form.get("office_city") or "").strip()) < 2:
        return "Enter your office city."
    if len(str(form.get("service_areas") or "").strip()) < 2:
        return "Enter your service areas (comma separated)."

    if not str(form.get("crm_tool") or "").strip():
        return "Enter your CRM tool (or 'None')."

    if not form.get("popia_consent"):
        return "You must accept POPIA consent to continue."
    return None
