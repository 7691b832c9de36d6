# heymies/models.py
from __future__ import annotations

import enum
from datetime import date, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Enum,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# -----------------------------
# Core enums
# -----------------------------
class ProfileRole(str, enum.Enum):
    buyer = "buyer"
    agent = "agent"
    seller = "seller"


class LeadStatus(str, enum.Enum):
    new = "new"
    contacted = "contacted"
    qualified = "qualified"
    nurture = "nurture"
    viewing = "viewing"
    offer = "offer"
    won = "won"
    lost = "lost"


class LeadEventType(str, enum.Enum):
    status_change = "status_change"
    note = "note"


class AgentStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ListingStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"


class SaleType(str, enum.Enum):
    sale = "sale"
    rent = "rent"


class EnquiryStatus(str, enum.Enum):
    open = "Open"
    viewing_scheduled = "Viewing scheduled"
    closed = "Closed"


class ViewingStatus(str, enum.Enum):
    scheduled = "Scheduled"
    completed = "Completed"
    cancelled = "Cancelled"


class OutboxStatus(str, enum.Enum):
    pending = "pending"
    delivered = "delivered"
    failed = "failed"


class JobRunStatus(str, enum.Enum):
    running = "running"
    success = "success"
    failed = "failed"


# -----------------------------
# Profiles (one role per signed-in user)
# -----------------------------
class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (UniqueConstraint("user_id", name="uq_profile_user"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    role: Mapped[ProfileRole] = mapped_column(Enum(ProfileRole), index=True)

    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


# -----------------------------
# Leads (early access + agent CRM)
# -----------------------------
class Lead(Base):
    __tablename__ = "leads"
    __table_args__ = (UniqueConstraint("email", name="uq_lead_email"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), index=True)
    source: Mapped[str] = mapped_column(String(80), default="website")
    tag: Mapped[str | None] = mapped_column(String(80), nullable=True)

    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[LeadStatus] = mapped_column(Enum(LeadStatus), default=LeadStatus.new, index=True)
    score: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class LeadEvent(Base):
    __tablename__ = "lead_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    lead_id: Mapped[int] = mapped_column(Integer, index=True)
    actor_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    event_type: Mapped[LeadEventType] = mapped_column(Enum(LeadEventType), index=True)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)


# -----------------------------
# Agents (applications moderated in /admin)
# -----------------------------
class Agent(Base):
    __tablename__ = "agents"
    __table_args__ = (UniqueConstraint("email", name="uq_agent_email"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), index=True)
    full_name: Mapped[str] = mapped_column(String(255))

    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    agency: Mapped[str | None] = mapped_column(String(255), nullable=True)
    areas: Mapped[str | None] = mapped_column(Text, nullable=True)
    property_types: Mapped[str | None] = mapped_column(Text, nullable=True)
    max_leads_per_week: Mapped[int | None] = mapped_column(Integer, nullable=True)
    preferred_contact_time: Mapped[str | None] = mapped_column(String(80), nullable=True)

    status: Mapped[AgentStatus] = mapped_column(Enum(AgentStatus), default=AgentStatus.pending, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)


class AgentAccount(Base):
    """
    Full agent signup, tied to the signed-in user. Separate from the short
    email-keyed application form above.
    """
    __tablename__ = "agent_accounts"
    __table_args__ = (UniqueConstraint("user_id", name="uq_agent_account_user"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    email: Mapped[str] = mapped_column(String(255), index=True)

    full_name: Mapped[str] = mapped_column(String(255))
    phone: Mapped[str] = mapped_column(String(40))
    preferred_contact: Mapped[str] = mapped_column(String(40), default="WhatsApp")

    agency_name: Mapped[str] = mapped_column(String(255))
    position_title: Mapped[str | None] = mapped_column(String(120), nullable=True)
    ffc_number: Mapped[str | None] = mapped_column(String(80), nullable=True)
    years_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    office_city: Mapped[str | None] = mapped_column(String(80), nullable=True)
    office_suburb: Mapped[str | None] = mapped_column(String(80), nullable=True)

    service_areas: Mapped[str | None] = mapped_column(Text, nullable=True)
    specialties: Mapped[str | None] = mapped_column(Text, nullable=True)

    avg_deals_per_month: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_commission_band: Mapped[str | None] = mapped_column(String(80), nullable=True)
    current_lead_sources: Mapped[str | None] = mapped_column(Text, nullable=True)
    crm_tool: Mapped[str | None] = mapped_column(String(120), nullable=True)
    team_size: Mapped[int | None] = mapped_column(Integer, nullable=True)

    onboarding_goal: Mapped[str | None] = mapped_column(Text, nullable=True)
    popia_consent: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


# -----------------------------
# Buyers
# -----------------------------
class Buyer(Base):
    __tablename__ = "buyers"
    __table_args__ = (UniqueConstraint("user_id", name="uq_buyer_user"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # id issued by the external auth provider
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    full_name: Mapped[str] = mapped_column(String(255), default="")
    phone: Mapped[str] = mapped_column(String(40), default="")

    budget_min: Mapped[float | None] = mapped_column(Float, nullable=True)
    budget_max: Mapped[float | None] = mapped_column(Float, nullable=True)
    property_types: Mapped[list[str]] = mapped_column(JSON, default=list)
    areas: Mapped[list[str]] = mapped_column(JSON, default=list)
    bedrooms_min: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bathrooms_min: Mapped[int | None] = mapped_column(Integer, nullable=True)

    preapproved: Mapped[str | None] = mapped_column(String(40), nullable=True)
    timeline: Mapped[str | None] = mapped_column(String(40), nullable=True)
    selling_property: Mapped[str | None] = mapped_column(String(10), nullable=True)
    popia_consent: Mapped[bool] = mapped_column(Boolean, default=False)

    lead_score: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class SavedListing(Base):
    __tablename__ = "buyer_saved"
    __table_args__ = (UniqueConstraint("buyer_id", "listing_id", name="uq_saved_buyer_listing"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    buyer_id: Mapped[int] = mapped_column(Integer, index=True)
    listing_id: Mapped[int] = mapped_column(Integer, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Enquiry(Base):
    __tablename__ = "buyer_enquiries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    buyer_id: Mapped[int] = mapped_column(Integer, index=True)
    listing_id: Mapped[int] = mapped_column(Integer, index=True)

    status: Mapped[EnquiryStatus] = mapped_column(Enum(EnquiryStatus), default=EnquiryStatus.open)
    last_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)


class Viewing(Base):
    __tablename__ = "buyer_viewings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    buyer_id: Mapped[int] = mapped_column(Integer, index=True)
    listing_id: Mapped[int] = mapped_column(Integer, index=True)

    scheduled_for: Mapped[datetime] = mapped_column(DateTime, index=True)
    status: Mapped[ViewingStatus] = mapped_column(Enum(ViewingStatus), default=ViewingStatus.scheduled)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


# -----------------------------
# Private sellers
# -----------------------------
class PrivateSeller(Base):
    __tablename__ = "private_sellers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    email: Mapped[str] = mapped_column(String(255), index=True)

    full_name: Mapped[str] = mapped_column(String(255))
    phone: Mapped[str] = mapped_column(String(40))
    preferred_contact: Mapped[str] = mapped_column(String(40), default="WhatsApp")

    intent: Mapped[str] = mapped_column(String(40), default="Sell")
    property_type: Mapped[str] = mapped_column(String(40))
    province: Mapped[str] = mapped_column(String(80))
    city: Mapped[str] = mapped_column(String(80))
    suburb: Mapped[str] = mapped_column(String(80))
    street_address: Mapped[str | None] = mapped_column(String(255), nullable=True)

    bedrooms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[float | None] = mapped_column(Float, nullable=True)
    parking: Mapped[int | None] = mapped_column(Integer, nullable=True)
    floor_size_m2: Mapped[int | None] = mapped_column(Integer, nullable=True)
    erf_size_m2: Mapped[int | None] = mapped_column(Integer, nullable=True)

    asking_price: Mapped[float] = mapped_column(Float)
    price_flexibility: Mapped[str] = mapped_column(String(40), default="Negotiable")
    target_timeframe: Mapped[str | None] = mapped_column(String(40), nullable=True)

    bond_status: Mapped[str] = mapped_column(String(40))
    rates_taxes_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    levies_amount: Mapped[float | None] = mapped_column(Float, nullable=True)

    reason_for_selling: Mapped[str | None] = mapped_column(Text, nullable=True)
    access_for_viewings: Mapped[str | None] = mapped_column(Text, nullable=True)
    occupancy: Mapped[str | None] = mapped_column(String(40), nullable=True)
    available_from: Mapped[date | None] = mapped_column(Date, nullable=True)

    special_features: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    popia_consent: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


# -----------------------------
# Listings
# -----------------------------
class Listing(Base):
    __tablename__ = "listings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # owning agent / seller (external auth id)
    agent_id: Mapped[str] = mapped_column(String(64), index=True)

    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ListingStatus] = mapped_column(Enum(ListingStatus), default=ListingStatus.active, index=True)

    sale_type: Mapped[SaleType] = mapped_column(Enum(SaleType), index=True)
    listing_type: Mapped[str] = mapped_column(String(40), index=True)

    street_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    suburb: Mapped[str] = mapped_column(String(80))
    city: Mapped[str] = mapped_column(String(80))
    province: Mapped[str] = mapped_column(String(80))
    postal_code: Mapped[str | None] = mapped_column(String(10), nullable=True)

    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    price_per_month: Mapped[float | None] = mapped_column(Float, nullable=True)
    deposit: Mapped[float | None] = mapped_column(Float, nullable=True)
    available_from: Mapped[date | None] = mapped_column(Date, nullable=True)

    bedrooms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[float | None] = mapped_column(Float, nullable=True)
    garages: Mapped[int | None] = mapped_column(Integer, nullable=True)
    parking: Mapped[int | None] = mapped_column(Integer, nullable=True)
    floor_size_m2: Mapped[int | None] = mapped_column(Integer, nullable=True)
    erf_size_m2: Mapped[int | None] = mapped_column(Integer, nullable=True)

    levy: Mapped[float | None] = mapped_column(Float, nullable=True)
    rates_taxes: Mapped[float | None] = mapped_column(Float, nullable=True)

    pets_allowed: Mapped[bool] = mapped_column(Boolean, default=False)
    furnished: Mapped[bool] = mapped_column(Boolean, default=False)
    features: Mapped[list[str]] = mapped_column(JSON, default=list)

    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    cover_image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    images: Mapped[list[str]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


# -----------------------------
# Plumbing
# -----------------------------
class OutboxEvent(Base):
    __tablename__ = "outbox_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    topic: Mapped[str] = mapped_column(String(120), index=True)
    payload_json: Mapped[str] = mapped_column(Text)

    status: Mapped[OutboxStatus] = mapped_column(Enum(OutboxStatus), default=OutboxStatus.pending, index=True)
    attempts: Mapped[int] = mapped_column(Integer, default=0)

    next_attempt_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivered_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class JobRun(Base):
    """
    Tracks job executions (outbox dispatch, etc.)
    """
    __tablename__ = "job_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    job_name: Mapped[str] = mapped_column(String(80), index=True)

    status: Mapped[JobRunStatus] = mapped_column(Enum(JobRunStatus), default=JobRunStatus.running, index=True)

    started_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # what triggered the run and with which knobs, e.g. {"trigger": "api", "batch_size": 50}
    meta_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    error: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary_json: Mapped[str | None] = mapped_column(Text, nullable=True)
