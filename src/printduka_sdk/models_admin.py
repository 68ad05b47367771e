from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from .models import Record


class AuditLogAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    OTHER = "OTHER"


class AlertType(str, Enum):
    LOW_STOCK = "low_stock"
    URGENT_ORDER = "urgent_order"
    PAYMENT_DUE = "payment_due"
    SYSTEM_ERROR = "system_error"
    NEW_LEAD = "new_lead"
    QUOTE_EXPIRED = "quote_expired"
    INFO = "info"


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ContentType(BaseModel):
    app_label: str | None = None
    model: str | None = None


class Permission(Record):
    name: str | None = None
    codename: str | None = None
    content_type: ContentType | None = None


class Group(Record):
    name: str | None = None
    user_count: int | None = None
    permissions: List[Permission] = Field(default_factory=list)


class UserAccount(Record):
    """Staff account as listed on the users page, groups included."""

    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool = True
    is_staff: bool = False
    is_superuser: bool = False
    groups: List[Group] = Field(default_factory=list)
    date_joined: str | None = None
    last_login: str | None = None

    def flat(self) -> dict[str, Any]:
        row = self.model_dump()
        row["groups"] = ", ".join(group.name for group in self.groups if group.name) or None
        return row


class AuditLogUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class AuditLog(Record):
    user: AuditLogUser | None = None
    action: str | None = None
    action_display: str | None = None
    model_name: str | None = None
    object_id: str | None = None
    object_repr: str | None = None
    details: str | None = None
    ip_address: str | None = None
    timestamp: str | None = None

    def flat(self) -> dict[str, Any]:
        row = self.model_dump()
        # System events have no acting user.
        row["user"] = self.user.username if self.user else "system"
        return row


class SystemAlert(Record):
    alert_type: str | None = None
    severity: str | None = None
    title: str | None = None
    message: str | None = None
    link: str | None = None
    visible_to_admins: bool = False
    visible_to_production: bool = False
    is_active: bool = True
    is_dismissed: bool = False
    dismissed_by: int | None = None
    dismissed_at: str | None = None
    related_client: int | None = None
    related_quote: int | None = None
    related_lpo: int | None = None
    created_at: str | None = None
    created_by: int | None = None


class SystemSettings(BaseModel):
    """Site-wide settings; keys the backend adds later are kept as extras."""

    model_config = ConfigDict(extra="allow")

    site_title: str | None = None
    support_email: str | None = None
    currency: str | None = None
    timezone: str | None = None
    maintenance_mode: bool | None = None
    email_on_order: bool | None = None
    email_on_quote: bool | None = None
    daily_digest: bool | None = None
    allow_registration: bool | None = None
    session_timeout: int | None = None
