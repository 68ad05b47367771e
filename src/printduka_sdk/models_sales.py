from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .models import Record
from .normalize import Money


class LeadStatus(str, Enum):
    NEW = "New"
    CONTACTED = "Contacted"
    QUALIFIED = "Qualified"
    CONVERTED = "Converted"
    LOST = "Lost"


class LeadSource(str, Enum):
    WEBSITE = "Website"
    REFERRAL = "Referral"
    COLD_CALL = "Cold Call"
    SOCIAL_MEDIA = "Social Media"
    EVENT = "Event"
    OTHER = "Other"


class QuoteStatus(str, Enum):
    DRAFT = "Draft"
    SENT_TO_PT = "Sent to PT"
    COSTED = "Costed"
    SENT_TO_CUSTOMER = "Sent to Customer"
    APPROVED = "Approved"
    LOST = "Lost"


class Lead(Record):
    lead_id: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    source: str | None = None
    product_interest: str | None = None
    preferred_contact: str | None = None
    preferred_client_type: str | None = None
    follow_up_date: str | None = None
    status: str | None = None
    notes: str | None = None
    created_by: int | None = None
    created_at: str | None = None
    updated_at: str | None = None
    converted_to_client: bool = False
    converted_at: str | None = None


class LeadQualifyResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    detail: str | None = None
    lead: Lead | None = None


class ConvertedClient(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    client_id: str | None = None
    name: str | None = None


class LeadConvertResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    detail: str | None = None
    client: ConvertedClient | None = None
    client_id: int | None = None


class Quote(Record):
    quote_id: str | None = None
    product_name: str | None = None
    client: int | None = None
    lead: int | None = None
    total_amount: Money = None
    status: str | None = None
    quote_date: str | None = None
    valid_until: str | None = None
    created_at: str | None = None
    production_status: str | None = None
    payment_terms: str | None = None
    checkout_status: str | None = None
    reference_number: str | None = None
    quantity: int | None = None
    unit_price: Money = None
    client_name: str | None = None
    lead_name: str | None = None
    created_by_name: str | None = None


class QuoteActionResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    detail: str | None = None
    quote: Quote | None = None
    lpo_id: int | None = None
    lpo_number: str | None = None
    job_id: int | None = None
    job_number: str | None = None


class QuoteHistoryItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    activity_type: str | None = None
    title: str | None = None
    description: str | None = None
    created_at: str | None = None


class QuoteHistoryResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    quote_id: str | None = None
    status: str | None = None
    history: List[QuoteHistoryItem] = Field(default_factory=list)
