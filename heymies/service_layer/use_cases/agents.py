# heymies/service_layer/use_cases/agents.py
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ...adapters.repos.agents import AgentRepository
from ...adapters.repos.profiles import ProfileRepository
from ...domain.parsing import clean_str, normalize_email, parse_non_negative_int, parse_optional_number, sanitize_phone
from ...domain.policies import AGENT_STATUSES, agent_signup_problem, is_valid_email
from ...models import Agent, AgentAccount, AgentStatus, ProfileRole
from ...schemas import AgentApplyIn, AgentSignupIn
from ..notifications import queue_agent_application_email

log = logging.getLogger(__name__)


async def apply_as_agent(session: AsyncSession, body: AgentApplyIn) -> Agent:
    """
    Agent application. Re-applying with the same email overwrites the application
    and puts it back in the pending queue.
    """
    full_name = (body.full_name or "").strip()
    email = normalize_email(body.email)

    if not full_name:
        raise ValueError("Name required")
    if not is_valid_email(email):
        raise ValueError("Valid email required")

    agent, created = await AgentRepository(session).upsert_by_email(
        email=email,
        fields={
            "full_name": full_name,
            "phone": clean_str(body.phone),
            "agency": clean_str(body.agency),
            "areas": clean_str(body.areas),
            "property_types": clean_str(body.property_types),
            # 0 means "not given" on the form
            "max_leads_per_week": parse_non_negative_int(body.max_leads_per_week) or None,
            "preferred_contact_time": clean_str(body.preferred_contact_time),
            "status": AgentStatus.pending,
        },
    )
    await queue_agent_application_email(session, agent)

    log.info("agent application %s (id=%s)", "received" if created else "updated", agent.id)
    return agent


async def moderate_agent(session: AsyncSession, agent_id: int | None, status: str | None) -> None:
    if not agent_id:
        raise ValueError("Missing id")
    if str(status) not in AGENT_STATUSES:
        raise ValueError("Invalid status")
    await AgentRepository(session).set_status(agent_id, AgentStatus(str(status)))
    log.info("agent %s moderated -> %s", agent_id, status)


def _int_or_none(x) -> int | None:
    n = parse_optional_number(x)
    return None if n is None else int(n)


async def signup_agent(session: AsyncSession, user_id: str, body: AgentSignupIn) -> AgentAccount:
    problem = agent_signup_problem(body.model_dump())
    if problem:
        raise ValueError(problem)

    full_name = body.full_name.strip()
    phone = sanitize_phone(body.phone)
    await ProfileRepository(session).claim(user_id, ProfileRole.agent, full_name=full_name, phone=phone)

    account, created = await AgentRepository(session).upsert_account(
        user_id=user_id,
        fields={
            "email": normalize_email(body.email),
            "full_name": full_name,
            "phone": phone,
            "preferred_contact": body.preferred_contact,
            "agency_name": body.agency_name.strip(),
            "position_title": clean_str(body.position_title),
            "ffc_number": clean_str(body.ffc_number),
            "years_experience": _int_or_none(body.years_experience),
            "office_city": clean_str(body.office_city),
            "office_suburb": clean_str(body.office_suburb),
            "service_areas": clean_str(body.service_areas),
            "specialties": clean_str(body.specialties),
            "avg_deals_per_month": parse_optional_number(body.avg_deals_per_month),
            "avg_commission_band": clean_str(body.avg_commission_band),
            "current_lead_sources": clean_str(body.current_lead_sources),
            "crm_tool": clean_str(body.crm_tool),
            "team_size": _int_or_none(body.team_size),
            "onboarding_goal": clean_str(body.onboarding_goal),
            "popia_consent": bool(body.popia_consent),
        },
    )
    log.info("agent signup %s user=%s", "created" if created else "updated", user_id)
    return account
