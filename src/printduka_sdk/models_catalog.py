from __future__ import annotations

from enum import Enum
from typing import Any, List, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .models import Record
from .normalize import Money, coerce_number


class ProcessStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"


class ProcessCategory(str, Enum):
    OUTSOURCED = "outsourced"
    IN_HOUSE = "in_house"


class ProcessPricingType(str, Enum):
    TIER = "tier"
    FORMULA = "formula"


class ProductStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ProductCustomizationLevel(str, Enum):
    NON_CUSTOMIZABLE = "non_customizable"
    SEMI_CUSTOMIZABLE = "semi_customizable"
    FULLY_CUSTOMIZABLE = "fully_customizable"


class ProductVisibility(str, Enum):
    CATALOG_SEARCH = "catalog-search"
    CATALOG_ONLY = "catalog-only"
    SEARCH_ONLY = "search-only"
    HIDDEN = "hidden"


class Vendor(Record):
    name: str | None = None
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    user: int | None = None
    user_is_active: bool | None = None
    payment_terms: str | None = None
    specialization: str | None = None
    minimum_order: Money = None
    lead_time: str | None = None
    rush_capable: bool = False
    vps_score: str | None = None
    vps_score_value: Money = None
    performance_score: Money = None
    recommended: bool = False
    active: bool = True
    is_available: bool = True
    max_concurrent_jobs: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


class VendorsPageSummary(BaseModel):
    total_visible: int = 0
    active_visible: int = 0
    recommended_visible: int = 0
    average_vps: float = 0.0


def summarize_vendors(vendors: Sequence[Vendor]) -> VendorsPageSummary:
    """Summary strip for the vendors page, computed from the visible rows."""
    if not vendors:
        return VendorsPageSummary()
    vps_total = sum(coerce_number(vendor.vps_score_value) or 0.0 for vendor in vendors)
    return VendorsPageSummary(
        total_visible=len(vendors),
        active_visible=sum(1 for vendor in vendors if vendor.active),
        recommended_visible=sum(1 for vendor in vendors if vendor.recommended),
        average_vps=vps_total / len(vendors),
    )


class Process(Record):
    process_id: str | None = None
    process_name: str | None = None
    description: str | None = None
    category: str | None = None
    standard_lead_time: int | None = None
    pricing_type: str | None = None
    unit_of_measure: str | None = None
    base_cost: Money = None
    approval_type: str | None = None
    approval_margin_threshold: Money = None
    status: str | None = None
    created_by: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ProcessTier(Record):
    process: int | None = None
    tier_number: int | None = None
    quantity_from: int | None = None
    quantity_to: int | None = None
    price: Money = None
    cost: Money = None
    per_unit_price: Money = None
    margin_amount: Money = None
    margin_percentage: Money = None


class ProcessVariable(Record):
    process: int | None = None
    variable_name: str | None = None
    variable_type: str | None = None
    unit: str | None = None
    variable_value: str | None = None
    price: Money = None
    rate: Money = None
    min_value: str | None = None
    max_value: str | None = None
    default_value: str | None = None
    description: str | None = None
    order: int | None = None


class ProcessVendor(Record):
    process: int | None = None
    vendor_name: str | None = None
    vendor_id: str | None = None
    vps_score: str | None = None
    priority: str | None = None
    tier_costs: dict[str, Any] | None = None
    formula_rates: dict[str, Any] | None = None
    rush_enabled: bool = False
    rush_fee_percentage: Money = None
    rush_threshold_days: int | None = None
    minimum_order: Money = None
    standard_lead_time: int | None = None
    rush_lead_time: int | None = None
    notes: str | None = None


class ProcessVariableRange(Record):
    variable: int | None = None
    min_value: str | None = None
    max_value: str | None = None
    price: Money = None
    rate: Money = None
    order: int | None = None


class ProcessDetailBundle(BaseModel):
    process: Process
    tiers: List[ProcessTier] = Field(default_factory=list)
    variables: List[ProcessVariable] = Field(default_factory=list)
    vendors: List[ProcessVendor] = Field(default_factory=list)


class ProductImage(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    image: str | None = None
    alt_text: str | None = None
    is_primary: bool = False
    display_order: int | None = None
    uploaded_at: str | None = None


class Product(Record):
    name: str | None = None
    internal_code: str | None = None
    short_description: str | None = None
    primary_category: str | None = None
    sub_category: str | None = None
    product_family: str | None = None
    product_type: str | None = None
    customization_level: str | None = None
    status: str | None = None
    is_visible: bool | None = None
    visibility: str | None = None
    base_price: Money = None
    stock_status: str | None = None
    stock_quantity: int | None = None
    primary_image_url: str | None = None
    images: List[ProductImage] = Field(default_factory=list)
    image_count: int | None = None
    can_be_published: bool | None = None
    completion_percentage: float | None = None
    created_at: str | None = None
    updated_at: str | None = None
