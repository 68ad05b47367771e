from .alerts import SystemAlertsClient
from .audit_logs import AuditLogsClient
from .auth import SessionAuthClient
from .jobs import JobsClient
from .leads import LeadsClient
from .processes import ProcessesClient
from .products import ProductsClient
from .quotes import QuotesClient
from .resource_client import ChildResourceClient, ResourceClient, decode_model, decode_rows
from .settings import SettingsClient
from .users import GroupsClient, UsersClient
from .vendors import VendorsClient

__all__ = [
    "AuditLogsClient",
    "ChildResourceClient",
    "GroupsClient",
    "JobsClient",
    "LeadsClient",
    "ProcessesClient",
    "ProductsClient",
    "QuotesClient",
    "ResourceClient",
    "SessionAuthClient",
    "SettingsClient",
    "SystemAlertsClient",
    "UsersClient",
    "VendorsClient",
    "decode_model",
    "decode_rows",
]
