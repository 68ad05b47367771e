from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .auth_store import AuthStore
from .clients.alerts import SystemAlertsClient
from .clients.audit_logs import AuditLogsClient
from .clients.auth import SessionAuthClient
from .clients.jobs import JobsClient
from .clients.leads import LeadsClient
from .clients.processes import ProcessesClient
from .clients.products import ProductsClient
from .clients.quotes import QuotesClient
from .clients.resource_client import ChildResourceClient, ResourceClient
from .clients.settings import SettingsClient
from .clients.users import GroupsClient, UsersClient
from .clients.vendors import VendorsClient
from .config import ClientConfig
from .exceptions import ErrorCode, PermissionDeniedError
from .filter_state import FilterStore
from .http_client import HttpClient
from .list_controller import ListController
from .models import SessionData, User
from .query_cache import QueryCache
from .resources import get_resource
from .tracing import TraceContext

TYPED_CLIENTS: dict[str, type[ResourceClient]] = {
    "vendors": VendorsClient,
    "products": ProductsClient,
    "processes": ProcessesClient,
    "jobs": JobsClient,
    "leads": LeadsClient,
    "quotes": QuotesClient,
    "users": UsersClient,
    "groups": GroupsClient,
    "audit-logs": AuditLogsClient,
    "system-alerts": SystemAlertsClient,
}


@dataclass
class ApiSession:
    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    user: User | None = None
    http: HttpClient | None = None
    cache: QueryCache | None = None
    _clients: dict[str, ResourceClient] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.trace = self.trace or TraceContext()
        self.http = self.http or HttpClient(config=self.config, trace=self.trace)
        self.cache = self.cache or QueryCache(ttl_seconds=self.config.cache_ttl_seconds)
        stored = self.auth_store.load()
        if stored and stored.env_name == self.config.env_name:
            for name, value in stored.cookies.items():
                self.http.session.cookies.set(name, value)
            self.user = stored.user

    def auth_client(self) -> SessionAuthClient:
        return SessionAuthClient(http=self.http)

    def client(self, resource: str) -> ResourceClient:
        """Shared client for a resource, typed where the resource has actions."""
        if resource not in self._clients:
            descriptor = get_resource(resource)
            if resource in TYPED_CLIENTS:
                client = TYPED_CLIENTS[resource](http=self.http, cache=self.cache)
            elif descriptor.parent_param:
                client = ChildResourceClient(http=self.http, descriptor=descriptor, cache=self.cache)
            else:
                client = ResourceClient(http=self.http, descriptor=descriptor, cache=self.cache)
            self._clients[resource] = client
        return self._clients[resource]

    def vendors(self) -> VendorsClient:
        return self.client("vendors")

    def products(self) -> ProductsClient:
        return self.client("products")

    def processes(self) -> ProcessesClient:
        return self.client("processes")

    def jobs(self) -> JobsClient:
        return self.client("jobs")

    def leads(self) -> LeadsClient:
        return self.client("leads")

    def quotes(self) -> QuotesClient:
        return self.client("quotes")

    def deliveries(self) -> ResourceClient:
        return self.client("deliveries")

    def payments(self) -> ResourceClient:
        return self.client("payments")

    def lpos(self) -> ResourceClient:
        return self.client("lpos")

    def qc_inspections(self) -> ResourceClient:
        return self.client("qc-inspections")

    def users(self) -> UsersClient:
        return self.client("users")

    def groups(self) -> GroupsClient:
        return self.client("groups")

    def audit_logs(self) -> AuditLogsClient:
        return self.client("audit-logs")

    def system_alerts(self) -> SystemAlertsClient:
        return self.client("system-alerts")

    def settings(self) -> SettingsClient:
        return SettingsClient(http=self.http)

    def filter_store(self, resource: str, *, now: Callable[[], float] | None = None) -> FilterStore:
        return FilterStore(
            get_resource(resource),
            page_size=self.config.default_page_size,
            debounce_ms=self.config.search_debounce_ms,
            now=now,
        )

    def list_controller(self, resource: str, *, now: Callable[[], float] | None = None) -> ListController:
        return ListController(self.client(resource), self.filter_store(resource, now=now))

    def login(self, username: str, password: str) -> User | None:
        response = self.auth_client().login(username, password)
        self.establish(response.user)
        return response.user

    def logout(self) -> None:
        try:
            self.auth_client().logout()
        finally:
            self.clear()

    def establish(self, user: User | None) -> None:
        self.user = user
        cookies = {cookie.name: cookie.value for cookie in self.http.session.cookies if cookie.value is not None}
        self.auth_store.save(
            SessionData(
                env_name=self.config.env_name,
                api_base_url=self.config.api_base_url,
                cookies=cookies,
                user=user,
            )
        )

    def clear(self) -> None:
        self.user = None
        self.http.session.cookies.clear()
        self.cache.clear()
        if self.auth_store:
            self.auth_store.clear()


class SessionGuard:
    """Gate for operations reserved to staff accounts."""

    def __init__(self, session: ApiSession) -> None:
        self._session = session

    def require_staff(self) -> User:
        user = self._session.auth_client().current_user()
        self._session.user = user
        if not (user.is_staff or user.is_superuser):
            raise PermissionDeniedError(
                code=ErrorCode.AUTHORIZATION_ERROR.value,
                message=f"{user.username} is not a staff account",
                status_code=403,
            )
        return user
