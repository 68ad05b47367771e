from .auth_store import AuthStore
from .clients import (
    AuditLogsClient,
    ChildResourceClient,
    GroupsClient,
    JobsClient,
    LeadsClient,
    ProcessesClient,
    ProductsClient,
    QuotesClient,
    ResourceClient,
    SessionAuthClient,
    SettingsClient,
    SystemAlertsClient,
    UsersClient,
    VendorsClient,
)
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ErrorCode,
    FieldError,
    NoDataError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
)
from .filter_state import FilterSnapshot, FilterStore, UnknownFilterError
from .http_client import HttpClient
from .list_controller import ListController, ListState, ListStatus, PendingLoad
from .models import MutationOutcome, PagedResult, SessionCheck, SessionData, User
from .models_admin import AuditLog, Group, Permission, SystemAlert, SystemSettings, UserAccount
from .models_catalog import summarize_vendors
from .normalize import Money, coerce_number
from .query import QueryKey, build_query_key, encode_query
from .query_cache import QueryCache
from .resources import REGISTRY, FilterKind, FilterSpec, ResourceDescriptor, get_resource
from .session import ApiSession, SessionGuard
from .tracing import TraceContext
from .ui_errors import ListAffordance, UserFacingError, resolve_affordance, to_user_facing_error

__all__ = [
    "ApiError",
    "ApiSession",
    "AuditLog",
    "AuditLogsClient",
    "AuthError",
    "AuthStore",
    "ChildResourceClient",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "ErrorCode",
    "FieldError",
    "FilterKind",
    "FilterSnapshot",
    "FilterSpec",
    "FilterStore",
    "Group",
    "GroupsClient",
    "HttpClient",
    "JobsClient",
    "LeadsClient",
    "ListAffordance",
    "ListController",
    "ListState",
    "ListStatus",
    "Money",
    "MutationOutcome",
    "NoDataError",
    "NotFoundError",
    "PagedResult",
    "PendingLoad",
    "Permission",
    "PermissionDeniedError",
    "ProcessesClient",
    "ProductsClient",
    "QueryCache",
    "QueryKey",
    "QuotesClient",
    "REGISTRY",
    "RateLimitError",
    "ResourceClient",
    "ResourceDescriptor",
    "ServerError",
    "SessionAuthClient",
    "SessionCheck",
    "SessionData",
    "SessionGuard",
    "SettingsClient",
    "SystemAlert",
    "SystemAlertsClient",
    "SystemSettings",
    "TraceContext",
    "TransportError",
    "UnknownFilterError",
    "User",
    "UserAccount",
    "UserFacingError",
    "UsersClient",
    "ValidationError",
    "VendorsClient",
    "build_query_key",
    "coerce_number",
    "encode_query",
    "get_resource",
    "load_config",
    "resolve_affordance",
    "summarize_vendors",
    "to_user_facing_error",
]
