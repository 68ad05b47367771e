from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from .models import Record, Summary
from .normalize import Money


class DeliveryStatus(str, Enum):
    STAGED = "staged"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    FAILED = "failed"


class DeliveryMethod(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"
    COURIER = "courier"


class StagingLocation(str, Enum):
    SHELF_A = "shelf-a"
    SHELF_B = "shelf-b"
    SHELF_C = "shelf-c"
    WAREHOUSE = "warehouse"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CASH = "cash"
    MPESA = "mpesa"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"
    CREDIT_CARD = "credit_card"


class LPOStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    IN_PRODUCTION = "in_production"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class QCStatus(str, Enum):
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    REWORK = "rework"


class JobStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"


class JobVendorStageStatus(str, Enum):
    PENDING = "pending"
    SENT_TO_VENDOR = "sent_to_vendor"
    IN_PRODUCTION = "in_production"
    COMPLETED = "completed"
    ISSUES = "issues"


class Delivery(Record):
    delivery_number: str | None = None
    job: int | None = None
    job_number: str | None = None
    client_name: str | None = None
    quote_id: str | None = None
    delivery_method: str | None = None
    scheduled_delivery_date: str | None = None
    status: str | None = None
    staging_location: str | None = None
    handoff_confirmed: bool = False
    handoff_confirmed_at: str | None = None
    notes_to_am: str | None = None
    package_photos: List[str] = Field(default_factory=list)
    mark_urgent: bool = False
    created_at: str | None = None
    updated_at: str | None = None


class DeliveriesSummary(Summary):
    total_count: int = 0
    staged_count: int = 0
    in_transit_count: int = 0
    delivered_count: int = 0
    failed_count: int = 0
    urgent_count: int = 0
    handoff_confirmed_count: int = 0


class Payment(Record):
    lpo: int | None = None
    lpo_number: str | None = None
    client_name: str | None = None
    amount: Money = None
    payment_method: str | None = None
    status: str | None = None
    payment_date: str | None = None
    reference_number: str | None = None
    notes: str | None = None
    created_at: str | None = None


class PaymentsSummary(Summary):
    total_amount: Money = None
    completed_amount: Money = None
    pending_amount: Money = None
    total_count: int = 0
    completed_count: int = 0
    pending_count: int = 0
    failed_count: int = 0
    refunded_count: int = 0


class LPO(Record):
    lpo_number: str | None = None
    client: int | None = None
    client_name: str | None = None
    quote: int | None = None
    quote_id: str | None = None
    status: str | None = None
    subtotal: Money = None
    vat_amount: Money = None
    total_amount: Money = None
    payment_terms: str | None = None
    delivery_date: str | None = None
    notes: str | None = None
    created_at: str | None = None


class LPOSummary(Summary):
    total_amount: Money = None
    pending_amount: Money = None
    approved_amount: Money = None
    in_production_amount: Money = None
    completed_amount: Money = None
    cancelled_amount: Money = None
    total_count: int = 0
    pending_count: int = 0
    approved_count: int = 0
    in_production_count: int = 0
    completed_count: int = 0
    cancelled_count: int = 0


class QCInspection(Record):
    job: int | None = None
    vendor: int | None = None
    inspector: int | None = None
    job_number: str | None = None
    client_name: str | None = None
    quote_id: str | None = None
    vendor_name: str | None = None
    inspector_name: str | None = None
    status: str | None = None
    inspection_date: str | None = None
    color_accuracy: bool = False
    print_quality: bool = False
    cutting_accuracy: bool = False
    finishing_quality: bool = False
    quantity_verified: bool = False
    packaging_checked: bool = False
    notes: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class QCInspectionsSummary(Summary):
    total_count: int = 0
    pending_count: int = 0
    passed_count: int = 0
    failed_count: int = 0
    rework_count: int = 0


class JobClientInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    name: str | None = None
    email: str | None = None


class JobUserInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None


class Job(Record):
    client: JobClientInfo | None = None
    quote: int | None = None
    job_number: str | None = None
    job_name: str | None = None
    job_type: str | None = None
    priority: str | None = None
    product: str | None = None
    quantity: int | None = None
    status: str | None = None
    expected_completion: str | None = None
    created_at: str | None = None
    person_in_charge: JobUserInfo | None = None

    def flat(self) -> dict[str, Any]:
        row = self.model_dump()
        row["client"] = self.client.name if self.client else None
        row["person_in_charge"] = self.person_in_charge.username if self.person_in_charge else None
        return row


class JobVendorStage(Record):
    job: int | None = None
    vendor: int | None = None
    stage_order: int | None = None
    stage_name: str | None = None
    status: str | None = None
    progress: int | None = None
    expected_completion: str | None = None
    started_at: str | None = None
    completed_at: str | None = None
    vendor_cost: Money = None
    notes: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
