from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import Literal

from .models import AgentStatus, EnquiryStatus, ListingStatus, SaleType, ViewingStatus

# form inputs arrive as typed text or numbers; domain.parsing cleans them
FormNumber = str | float | None


class OkResponse(BaseModel):
    ok: bool
    error: str | None = None


# ----- Leads -----

class EarlyAccessIn(BaseModel):
    email: str | None = None
    source: str | None = None


class LeadOut(BaseModel):
    id: int
    email: str
    source: str
    tag: str | None = None
    full_name: str | None = None
    phone: str | None = None
    message: str | None = None
    status: str
    score: int
    created_at: datetime


class LeadEventOut(BaseModel):
    id: int
    event_type: str
    body: str | None = None
    actor_id: str | None = None
    created_at: datetime


class LeadDetailOut(BaseModel):
    lead: LeadOut
    events: list[LeadEventOut]


class LeadStatusUpdate(BaseModel):
    status: str


class LeadNoteCreate(BaseModel):
    body: str = ""


# ----- Admin -----

class AdminIdBody(BaseModel):
    id: int | None = None


class AdminLeadPatch(BaseModel):
    id: int | None = None
    tag: str | None = None


class AdminAgentPatch(BaseModel):
    id: int | None = None
    status: str | None = None


# ----- Agents -----

class AgentApplyIn(BaseModel):
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    agency: str | None = None
    areas: str | None = None
    property_types: str | None = None
    max_leads_per_week: FormNumber = None
    preferred_contact_time: str | None = None


class AgentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    status: AgentStatus
    full_name: str
    email: str
    phone: str | None = None
    agency: str | None = None
    areas: str | None = None
    property_types: str | None = None
    max_leads_per_week: int | None = None
    preferred_contact_time: str | None = None


class AgentSignupIn(BaseModel):
    email: str | None = None
    full_name: str = ""
    phone: str = ""
    preferred_contact: str = "WhatsApp"

    agency_name: str = ""
    position_title: str = ""
    ffc_number: str = ""
    years_experience: FormNumber = None
    office_city: str = ""
    office_suburb: str = ""

    service_areas: str = ""  # comma separated
    specialties: str = ""

    avg_deals_per_month: FormNumber = None
    avg_commission_band: str = ""
    current_lead_sources: str = ""
    crm_tool: str = ""
    team_size: FormNumber = None

    onboarding_goal: str = ""
    popia_consent: bool = False


class AgentAccountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    email: str
    full_name: str
    phone: str
    preferred_contact: str
    agency_name: str
    position_title: str | None = None
    ffc_number: str | None = None
    years_experience: int | None = None
    office_city: str | None = None
    office_suburb: str | None = None
    service_areas: str | None = None
    specialties: str | None = None
    avg_deals_per_month: float | None = None
    avg_commission_band: str | None = None
    current_lead_sources: str | None = None
    crm_tool: str | None = None
    team_size: int | None = None
    onboarding_goal: str | None = None
    popia_consent: bool
    created_at: datetime


# ----- Buyers -----

class BuyerProfileIn(BaseModel):
    full_name: str = ""
    phone: str = ""
    email: str | None = None

    budget_min: FormNumber = None
    budget_max: FormNumber = None
    property_types: list[str] = Field(default_factory=list)
    areas: list[str] = Field(default_factory=list)
    bedrooms_min: str | int | None = None  # "3+" selector values
    bathrooms_min: str | int | None = None

    preapproved: str | None = None
    timeline: str | None = None
    selling_property: str | None = None
    popia_consent: bool = False


class BuyerSignupIn(BuyerProfileIn):
    # optional; must match the signed-in caller when given
    user_id: str | None = None


class BuyerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    email: str | None = None
    full_name: str
    phone: str
    budget_min: float | None = None
    budget_max: float | None = None
    property_types: list[str]
    areas: list[str]
    bedrooms_min: int | None = None
    bathrooms_min: int | None = None
    preapproved: str | None = None
    timeline: str | None = None
    selling_property: str | None = None
    popia_consent: bool
    lead_score: int
    updated_at: datetime


class ListingRef(BaseModel):
    listing_id: int


class ViewingIn(BaseModel):
    listing_id: int
    scheduled_for: datetime


class ListingCardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    price: float | None = None
    price_per_month: float | None = None
    suburb: str
    city: str
    bedrooms: int | None = None
    bathrooms: float | None = None
    cover_image: str | None = None
    status: ListingStatus


class SavedOut(BaseModel):
    id: int
    listing_id: int
    created_at: datetime
    listing: ListingCardOut | None = None


class EnquiryOut(BaseModel):
    id: int
    listing_id: int
    status: EnquiryStatus
    last_message: str | None = None
    updated_at: datetime
    listing: ListingCardOut | None = None


class ViewingOut(BaseModel):
    id: int
    listing_id: int
    scheduled_for: datetime
    status: ViewingStatus
    listing: ListingCardOut | None = None


class BuyerDashboardOut(BaseModel):
    buyer: BuyerOut
    saved: list[SavedOut]
    enquiries: list[EnquiryOut]
    viewings: list[ViewingOut]


# ----- Private sellers -----

class SellerSignupIn(BaseModel):
    email: str | None = None
    full_name: str = ""
    phone: str = ""
    preferred_contact: str = "WhatsApp"

    intent: str = "Sell"
    property_type: str = ""
    province: str = ""
    city: str = ""
    suburb: str = ""
    street_address: str = ""

    bedrooms: FormNumber = None
    bathrooms: FormNumber = None
    parking: FormNumber = None
    floor_size_m2: FormNumber = None
    erf_size_m2: FormNumber = None

    asking_price: FormNumber = None
    price_flexibility: str = "Negotiable"
    target_timeframe: str = ""

    bond_status: str = ""
    rates_taxes_known: bool = False
    rates_taxes_amount: FormNumber = None
    levies_known: bool = False
    levies_amount: FormNumber = None

    reason_for_selling: str = ""
    access_for_viewings: str = ""
    occupancy: str = ""
    available_from: date | None = None

    special_features: str = ""
    notes: str = ""
    popia_consent: bool = False


class SellerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str
    property_type: str
    city: str
    suburb: str
    asking_price: float
    created_at: datetime


# ----- Listings -----

class ListingIn(BaseModel):
    sale_type: Literal["sale", "rent"] = "sale"
    listing_type: str = "house"
    title: str = ""
    description: str = ""

    street_address: str = ""
    suburb: str = ""
    city: str = ""
    province: str = ""
    postal_code: str = ""

    price: FormNumber = None  # sale price OR rent per month
    deposit: FormNumber = None
    available_from: date | None = None

    bedrooms: FormNumber = None
    bathrooms: FormNumber = None
    garages: FormNumber = None
    parking: FormNumber = None
    floor_size: FormNumber = None
    erf_size: FormNumber = None

    levy: FormNumber = None
    rates_taxes: FormNumber = None

    pets_allowed: bool = False
    furnished: bool = False
    features: list[str] = Field(default_factory=list)

    contact_name: str = ""
    contact_phone: str = ""
    contact_email: str = ""

    cover_image: str | None = None
    images: list[str] = Field(default_factory=list)


class ListingPatch(BaseModel):
    title: str | None = None
    description: str | None = None
    status: Literal["active", "inactive"] | None = None
    listing_type: str | None = None

    street_address: str | None = None
    suburb: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None

    price: FormNumber = None
    deposit: FormNumber = None
    available_from: date | None = None

    bedrooms: FormNumber = None
    bathrooms: FormNumber = None
    garages: FormNumber = None
    parking: FormNumber = None

    pets_allowed: bool | None = None
    furnished: bool | None = None
    features: list[str] | None = None

    cover_image: str | None = None
    images: list[str] | None = None


class ListingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    agent_id: str
    title: str
    description: str | None = None
    status: ListingStatus
    sale_type: SaleType
    listing_type: str

    street_address: str | None = None
    suburb: str
    city: str
    province: str
    postal_code: str | None = None

    price: float | None = None
    price_per_month: float | None = None
    deposit: float | None = None
    available_from: date | None = None

    bedrooms: int | None = None
    bathrooms: float | None = None
    garages: int | None = None
    parking: int | None = None
    floor_size_m2: int | None = None
    erf_size_m2: int | None = None

    levy: float | None = None
    rates_taxes: float | None = None
    pets_allowed: bool
    furnished: bool
    features: list[str]

    cover_image: str | None = None
    images: list[str]
    created_at: datetime


class ListingSearchOut(BaseModel):
    rows: list[ListingOut]
    total: int
    page: int
    page_size: int
    has_more: bool


# ----- AI -----

class ListingDescriptionIn(BaseModel):
    sale_type: Literal["sale", "rent"] = Field("sale", alias="saleType")
    listing_type: str = Field("house", alias="listingType")
    title: str = ""

    suburb: str = ""
    city: str = ""
    province: str = ""

    price: float = 0
    deposit: float | None = None
    available_from: str | None = Field(None, alias="availableFrom")

    bedrooms: float | None = None
    bathrooms: float | None = None
    garages: int | None = None
    parking: int | None = None
    floor_size: float | None = Field(None, alias="floorSize")
    erf_size: float | None = Field(None, alias="erfSize")

    pets_allowed: bool = Field(False, alias="petsAllowed")
    furnished: bool = False
    features: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class ListingDescriptionOut(BaseModel):
    description: str


# ----- Calculators -----

class LeadScoreIn(BaseModel):
    budget_min: FormNumber = None
    budget_max: FormNumber = None
    preapproved: str | None = None
    timeline: str | None = None
    areas: list[str] = Field(default_factory=list)
    property_types: list[str] = Field(default_factory=list)
    bedrooms_min: str | int | None = None
    bathrooms_min: str | int | None = None
    selling_property: str | None = None


class LeadScoreOut(BaseModel):
    score: int = Field(..., ge=0, le=100)


class BondIn(BaseModel):
    price: FormNumber = 0
    deposit: FormNumber = 0
    annual_rate_percent: FormNumber = 0
    term_years: FormNumber = 0


class BondOut(BaseModel):
    principal: float
    months: int
    monthly_payment: float
    total_paid: float
    total_interest: float


class TransferIn(BaseModel):
    price: FormNumber = 0
    loan_amount: FormNumber = 0
    seller_is_vat_vendor: bool = False
    ownership_type: Literal["Freehold", "Sectional title"] = "Freehold"
    purchaser_type: Literal["Natural Person", "Company", "Trust"] = "Natural Person"


class TransferOut(BaseModel):
    price: float
    loan_amount: float
    ownership_type: str
    purchaser_type: str

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


# ----- Jobs -----

class DispatchResult(BaseModel):
    delivered: int
    failed: int
    events: int | None = None
    skipped_no_sink: int | None = None
