from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Type

from pydantic import BaseModel

from .models_admin import (
    AlertSeverity,
    AlertType,
    AuditLog,
    AuditLogAction,
    Group,
    Permission,
    SystemAlert,
    UserAccount,
)
from .models_catalog import (
    Process,
    ProcessCategory,
    ProcessPricingType,
    ProcessStatus,
    ProcessTier,
    ProcessVariable,
    ProcessVariableRange,
    ProcessVendor,
    Product,
    ProductCustomizationLevel,
    ProductStatus,
    ProductVisibility,
    Vendor,
)
from .models_operations import (
    LPO,
    DeliveriesSummary,
    Delivery,
    DeliveryMethod,
    DeliveryStatus,
    Job,
    JobStatus,
    JobVendorStage,
    LPOStatus,
    LPOSummary,
    Payment,
    PaymentMethod,
    PaymentsSummary,
    PaymentStatus,
    QCInspection,
    QCInspectionsSummary,
    QCStatus,
    StagingLocation,
)
from .models_sales import Lead, LeadSource, LeadStatus, Quote, QuoteStatus


class FilterKind(str, Enum):
    CHOICE = "choice"
    TEXT = "text"
    DATE = "date"
    ORDERING = "ordering"


ALL = "all"


@dataclass(frozen=True)
class FilterSpec:
    name: str
    param: str
    kind: FilterKind
    choices: tuple[str, ...] = ()

    @property
    def unset(self) -> str:
        return ALL if self.kind is FilterKind.CHOICE else ""


@dataclass(frozen=True)
class ResourceDescriptor:
    name: str
    item_model: Type[BaseModel]
    summary_model: Type[BaseModel] | None = None
    filters: tuple[FilterSpec, ...] = ()
    default_ordering: str | None = None
    actions: tuple[str, ...] = ()
    columns: tuple[tuple[str, str], ...] = (("id", "ID"),)
    parent_param: str | None = None
    label: str = ""
    paginated: bool = True
    filter_index: dict[str, FilterSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "filter_index", {spec.name: spec for spec in self.filters})

    @property
    def path(self) -> str:
        return f"/api/v1/{self.name}/"

    def detail_path(self, item_id: int | str) -> str:
        return f"/api/v1/{self.name}/{item_id}/"

    def action_path(self, item_id: int | str, action: str) -> str:
        return f"/api/v1/{self.name}/{item_id}/{action}/"

    def filter(self, name: str) -> FilterSpec | None:
        return self.filter_index.get(name)

    @property
    def search_filter(self) -> FilterSpec | None:
        return self.filter_index.get("search")


def _values(enum_cls: type[Enum]) -> tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


def _search() -> FilterSpec:
    return FilterSpec("search", "search", FilterKind.TEXT)


def _ordering() -> FilterSpec:
    return FilterSpec("ordering", "ordering", FilterKind.ORDERING)


def _date_range(field_name: str) -> tuple[FilterSpec, FilterSpec]:
    return (
        FilterSpec("dateFrom", f"{field_name}__gte", FilterKind.DATE),
        FilterSpec("dateTo", f"{field_name}__lte", FilterKind.DATE),
    )


VENDORS = ResourceDescriptor(
    name="vendors",
    label="Vendors",
    item_model=Vendor,
    filters=(_search(), FilterSpec("active", "active", FilterKind.CHOICE, ("true", "false"))),
    actions=("invite",),
    columns=(
        ("id", "ID"),
        ("name", "Name"),
        ("contact_person", "Contact"),
        ("vps_score", "VPS"),
        ("active", "Active"),
        ("recommended", "Recommended"),
    ),
)

PROCESSES = ResourceDescriptor(
    name="processes",
    label="Processes",
    item_model=Process,
    filters=(
        _search(),
        FilterSpec("status", "status", FilterKind.CHOICE, _values(ProcessStatus)),
        FilterSpec("pricingType", "pricing_type", FilterKind.CHOICE, _values(ProcessPricingType)),
        FilterSpec("category", "category", FilterKind.CHOICE, _values(ProcessCategory)),
        _ordering(),
    ),
    columns=(
        ("id", "ID"),
        ("process_id", "Code"),
        ("process_name", "Name"),
        ("category", "Category"),
        ("pricing_type", "Pricing"),
        ("base_cost", "Base cost"),
        ("status", "Status"),
    ),
)

PRODUCTS = ResourceDescriptor(
    name="products",
    label="Products",
    item_model=Product,
    filters=(
        _search(),
        FilterSpec("status", "status", FilterKind.CHOICE, _values(ProductStatus)),
        FilterSpec(
            "customizationLevel",
            "customization_level",
            FilterKind.CHOICE,
            _values(ProductCustomizationLevel),
        ),
        FilterSpec("category", "primary_category", FilterKind.TEXT),
        FilterSpec("subCategory", "sub_category", FilterKind.TEXT),
        FilterSpec("visibility", "visibility", FilterKind.CHOICE, _values(ProductVisibility)),
    ),
    actions=("publish", "archive", "save-draft", "upload-primary-image", "upload-gallery-images"),
    columns=(
        ("id", "ID"),
        ("internal_code", "Code"),
        ("name", "Name"),
        ("primary_category", "Category"),
        ("base_price", "Base price"),
        ("status", "Status"),
    ),
)

DELIVERIES = ResourceDescriptor(
    name="deliveries",
    label="Deliveries",
    item_model=Delivery,
    summary_model=DeliveriesSummary,
    default_ordering="-created_at",
    filters=(
        _search(),
        FilterSpec("status", "status", FilterKind.CHOICE, _values(DeliveryStatus)),
        FilterSpec("stagingLocation", "staging_location", FilterKind.CHOICE, _values(StagingLocation)),
        FilterSpec("handoffConfirmed", "handoff_confirmed", FilterKind.CHOICE, ("true", "false")),
        FilterSpec("urgentOnly", "mark_urgent", FilterKind.CHOICE, ("true", "false")),
        FilterSpec("method", "job__delivery_method", FilterKind.CHOICE, _values(DeliveryMethod)),
        *_date_range("created_at"),
        _ordering(),
    ),
    columns=(
        ("id", "ID"),
        ("delivery_number", "Delivery"),
        ("job_number", "Job"),
        ("client_name", "Client"),
        ("status", "Status"),
        ("staging_location", "Staging"),
        ("mark_urgent", "Urgent"),
    ),
)

PAYMENTS = ResourceDescriptor(
    name="payments",
    label="Payments",
    item_model=Payment,
    summary_model=PaymentsSummary,
    filters=(
        _search(),
        FilterSpec("status", "status", FilterKind.CHOICE, _values(PaymentStatus)),
        FilterSpec("method", "payment_method", FilterKind.CHOICE, _values(PaymentMethod)),
        *_date_range("payment_date"),
        _ordering(),
    ),
    columns=(
        ("id", "ID"),
        ("lpo_number", "LPO"),
        ("client_name", "Client"),
        ("amount", "Amount"),
        ("payment_method", "Method"),
        ("status", "Status"),
        ("payment_date", "Date"),
    ),
)

LPOS = ResourceDescriptor(
    name="lpos",
    label="LPOs",
    item_model=LPO,
    summary_model=LPOSummary,
    filters=(
        _search(),
        FilterSpec("status", "status", FilterKind.CHOICE, _values(LPOStatus)),
        *_date_range("created_at"),
        _ordering(),
    ),
    columns=(
        ("id", "ID"),
        ("lpo_number", "LPO"),
        ("client_name", "Client"),
        ("total_amount", "Total"),
        ("status", "Status"),
        ("created_at", "Created"),
    ),
)

QC_INSPECTIONS = ResourceDescriptor(
    name="qc-inspections",
    label="Quality control",
    item_model=QCInspection,
    summary_model=QCInspectionsSummary,
    filters=(
        _search(),
        FilterSpec("status", "status", FilterKind.CHOICE, _values(QCStatus)),
        FilterSpec("vendor", "vendor", FilterKind.TEXT),
        FilterSpec("inspector", "inspector", FilterKind.TEXT),
        *_date_range("created_at"),
        _ordering(),
    ),
    columns=(
        ("id", "ID"),
        ("job_number", "Job"),
        ("vendor_name", "Vendor"),
        ("inspector_name", "Inspector"),
        ("status", "Status"),
        ("inspection_date", "Date"),
    ),
)

JOBS = ResourceDescriptor(
    name="jobs",
    label="Jobs",
    item_model=Job,
    filters=(_search(), FilterSpec("status", "status", FilterKind.CHOICE, _values(JobStatus))),
    columns=(
        ("id", "ID"),
        ("job_number", "Job"),
        ("job_name", "Name"),
        ("client", "Client"),
        ("priority", "Priority"),
        ("status", "Status"),
    ),
)

LEADS = ResourceDescriptor(
    name="leads",
    label="Leads",
    item_model=Lead,
    filters=(
        _search(),
        FilterSpec("status", "status", FilterKind.CHOICE, _values(LeadStatus)),
        FilterSpec("source", "source", FilterKind.CHOICE, _values(LeadSource)),
    ),
    default_ordering="-created_at",
    actions=("qualify", "convert"),
    columns=(
        ("id", "ID"),
        ("lead_id", "Lead"),
        ("name", "Name"),
        ("source", "Source"),
        ("status", "Status"),
        ("created_at", "Created"),
    ),
)

QUOTES = ResourceDescriptor(
    name="quotes",
    label="Quotes",
    item_model=Quote,
    filters=(_search(), FilterSpec("status", "status", FilterKind.CHOICE, _values(QuoteStatus))),
    default_ordering="-created_at",
    actions=("send_to_pt_for_review", "send_to_customer", "approve", "clone"),
    columns=(
        ("id", "ID"),
        ("quote_id", "Quote"),
        ("product_name", "Product"),
        ("client_name", "Client"),
        ("total_amount", "Total"),
        ("status", "Status"),
    ),
)

USERS = ResourceDescriptor(
    name="users",
    label="Users",
    item_model=UserAccount,
    filters=(
        _search(),
        FilterSpec("isActive", "is_active", FilterKind.CHOICE, ("true", "false")),
        FilterSpec("isSuperuser", "is_superuser", FilterKind.CHOICE, ("true", "false")),
    ),
    columns=(
        ("id", "ID"),
        ("username", "Username"),
        ("email", "Email"),
        ("groups", "Groups"),
        ("is_active", "Active"),
        ("is_superuser", "Superuser"),
        ("last_login", "Last login"),
    ),
)

AUDIT_LOGS = ResourceDescriptor(
    name="audit-logs",
    label="Audit logs",
    item_model=AuditLog,
    filters=(
        _search(),
        FilterSpec("action", "action", FilterKind.CHOICE, _values(AuditLogAction)),
        FilterSpec("modelName", "model_name", FilterKind.TEXT),
        FilterSpec("user", "user", FilterKind.TEXT),
    ),
    columns=(
        ("timestamp", "When"),
        ("user", "User"),
        ("action", "Action"),
        ("model_name", "Model"),
        ("object_repr", "Object"),
        ("ip_address", "IP"),
    ),
)

SYSTEM_ALERTS = ResourceDescriptor(
    name="system-alerts",
    label="System alerts",
    item_model=SystemAlert,
    filters=(
        _search(),
        FilterSpec("alertType", "alert_type", FilterKind.CHOICE, _values(AlertType)),
        FilterSpec("severity", "severity", FilterKind.CHOICE, _values(AlertSeverity)),
        FilterSpec("isActive", "is_active", FilterKind.CHOICE, ("true", "false")),
        FilterSpec("isDismissed", "is_dismissed", FilterKind.CHOICE, ("true", "false")),
    ),
    columns=(
        ("id", "ID"),
        ("severity", "Severity"),
        ("alert_type", "Type"),
        ("title", "Title"),
        ("is_dismissed", "Dismissed"),
        ("created_at", "Created"),
    ),
)

GROUPS = ResourceDescriptor(
    name="groups",
    label="Groups",
    item_model=Group,
    paginated=False,
    columns=(("id", "ID"), ("name", "Name"), ("user_count", "Users")),
)

PERMISSIONS = ResourceDescriptor(
    name="permissions",
    label="Permissions",
    item_model=Permission,
    paginated=False,
    columns=(("id", "ID"), ("codename", "Codename"), ("name", "Name")),
)

PROCESS_TIERS = ResourceDescriptor(
    name="process-tiers",
    item_model=ProcessTier,
    parent_param="process",
    columns=(("id", "ID"), ("tier_number", "Tier"), ("quantity_from", "From"), ("quantity_to", "To"), ("price", "Price")),
)

PROCESS_VARIABLES = ResourceDescriptor(
    name="process-variables",
    item_model=ProcessVariable,
    parent_param="process",
    columns=(("id", "ID"), ("variable_name", "Variable"), ("variable_type", "Type"), ("price", "Price")),
)

PROCESS_VENDORS = ResourceDescriptor(
    name="process-vendors",
    item_model=ProcessVendor,
    parent_param="process",
    columns=(("id", "ID"), ("vendor_name", "Vendor"), ("priority", "Priority"), ("minimum_order", "Minimum")),
)

PROCESS_VARIABLE_RANGES = ResourceDescriptor(
    name="process-variable-ranges",
    item_model=ProcessVariableRange,
    parent_param="variable",
    columns=(("id", "ID"), ("min_value", "Min"), ("max_value", "Max"), ("price", "Price"), ("rate", "Rate")),
)

JOB_VENDOR_STAGES = ResourceDescriptor(
    name="job-vendor-stages",
    item_model=JobVendorStage,
    parent_param="job",
    columns=(("id", "ID"), ("stage_name", "Stage"), ("status", "Status"), ("progress", "Progress"), ("vendor_cost", "Cost")),
)

LIST_RESOURCES: tuple[ResourceDescriptor, ...] = (
    VENDORS,
    PROCESSES,
    PRODUCTS,
    DELIVERIES,
    PAYMENTS,
    LPOS,
    QC_INSPECTIONS,
    JOBS,
    LEADS,
    QUOTES,
    USERS,
    AUDIT_LOGS,
    SYSTEM_ALERTS,
)

# Endpoints that answer with a bare JSON array instead of a page.
COLLECTION_RESOURCES: tuple[ResourceDescriptor, ...] = (GROUPS, PERMISSIONS)

SUB_RESOURCES: tuple[ResourceDescriptor, ...] = (
    PROCESS_TIERS,
    PROCESS_VARIABLES,
    PROCESS_VENDORS,
    PROCESS_VARIABLE_RANGES,
    JOB_VENDOR_STAGES,
)

REGISTRY: dict[str, ResourceDescriptor] = {
    descriptor.name: descriptor for descriptor in LIST_RESOURCES + COLLECTION_RESOURCES + SUB_RESOURCES
}


def get_resource(name: str) -> ResourceDescriptor:
    try:
        return REGISTRY[name]
    except KeyError:
        raise KeyError(f"unknown resource: {name}") from None

