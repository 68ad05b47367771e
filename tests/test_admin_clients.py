from __future__ import annotations

import pytest
import responses
from responses import matchers

from printduka_sdk.clients.alerts import SystemAlertsClient
from printduka_sdk.clients.audit_logs import AuditLogsClient
from printduka_sdk.clients.settings import SettingsClient
from printduka_sdk.clients.users import GroupsClient, UsersClient
from printduka_sdk.exceptions import ApiError, ValidationError
from printduka_sdk.filter_state import FilterStore
from printduka_sdk.http_client import HttpClient
from printduka_sdk.list_controller import ListController
from printduka_sdk.models_admin import AuditLog, Group, SystemAlert, UserAccount
from printduka_sdk.query_cache import QueryCache
from printduka_sdk.resources import GROUPS, get_resource

from conftest import API, page


@pytest.mark.parametrize("name", ["users", "audit-logs", "system-alerts", "groups", "permissions"])
def test_admin_resources_are_registered(name: str) -> None:
    assert get_resource(name).path == f"/api/v1/{name}/"


@responses.activate
def test_users_list_filters_and_groups_column(http: HttpClient, cache: QueryCache) -> None:
    responses.add(
        responses.GET,
        f"{API}/api/v1/users/",
        json=page(
            [
                {
                    "id": 7,
                    "username": "jane",
                    "is_active": True,
                    "groups": [{"id": 1, "name": "Production"}, {"id": 2, "name": "Sales"}],
                }
            ]
        ),
        match=[
            matchers.query_param_matcher(
                {"search": "jane", "is_active": "true", "page": "1", "page_size": "20"}
            )
        ],
    )
    client = UsersClient(http=http, cache=cache)

    result = client.list(search=" jane ", isActive=True, isSuperuser="all")

    user = result.results[0]
    assert isinstance(user, UserAccount)
    assert user.flat()["groups"] == "Production, Sales"


@responses.activate
def test_user_updates_invalidate_users(http: HttpClient, cache: QueryCache) -> None:
    responses.add(responses.GET, f"{API}/api/v1/users/", json=page([{"id": 7, "username": "jane"}]))
    responses.add(
        responses.PATCH,
        f"{API}/api/v1/users/7/",
        json={"id": 7, "username": "jane", "is_active": False},
        match=[matchers.json_params_matcher({"is_active": False})],
    )
    responses.add(
        responses.PATCH,
        f"{API}/api/v1/users/7/",
        json={"id": 7, "username": "jane", "groups": [{"id": 3, "name": "Admins"}]},
        match=[matchers.json_params_matcher({"group_ids": [3]})],
    )
    client = UsersClient(http=http, cache=cache)
    key = client.key_for()
    client.fetch_list(key)

    deactivated = client.set_active(7, False)
    assert cache.get(key) is None

    regrouped = client.set_groups(7, [3])

    assert deactivated.is_active is False
    assert [group.name for group in regrouped.groups] == ["Admins"]


def test_activate_invite_checks_password_before_sending(http: HttpClient) -> None:
    client = UsersClient(http=http)

    with pytest.raises(ValidationError) as short:
        client.activate_invite("tok", "short")
    with pytest.raises(ValidationError) as mismatch:
        client.activate_invite("tok", "long-enough", confirm_password="different")

    assert short.value.field_errors[0].field == "password"
    assert mismatch.value.message == "Passwords do not match"


@responses.activate
def test_invite_validation_and_activation(http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{API}/api/v1/users/validate-invite/",
        json={"detail": "Invalid or expired invitation link"},
        status=400,
        match=[matchers.json_params_matcher({"token": "old"})],
    )
    responses.add(
        responses.POST,
        f"{API}/api/v1/users/activate-invite/",
        json={"detail": "Account activated"},
        match=[matchers.json_params_matcher({"token": "new", "password": "s3cret-pass"})],
    )
    client = UsersClient(http=http)

    with pytest.raises(ApiError, match="Invalid or expired invitation link"):
        client.validate_invite("old")
    assert client.activate_invite("new", "s3cret-pass", confirm_password="s3cret-pass") == {
        "detail": "Account activated"
    }


@responses.activate
def test_groups_are_a_bare_array_and_writes_invalidate_users(http: HttpClient, cache: QueryCache) -> None:
    responses.add(responses.GET, f"{API}/api/v1/users/", json=page([{"id": 7, "username": "jane"}]))
    responses.add(
        responses.GET,
        f"{API}/api/v1/groups/",
        json=[{"id": 1, "name": "Production", "user_count": 4}, {"id": 2, "name": "Sales"}],
    )
    responses.add(
        responses.POST,
        f"{API}/api/v1/groups/",
        json={"id": 3, "name": "QC"},
        status=201,
        match=[matchers.json_params_matcher({"name": "QC"})],
    )
    responses.add(
        responses.PATCH,
        f"{API}/api/v1/groups/3/",
        json={"id": 3, "name": "QC", "permissions": [{"id": 10, "codename": "view_job"}]},
        match=[matchers.json_params_matcher({"permission_ids": [10]})],
    )
    users = UsersClient(http=http, cache=cache)
    users_key = users.key_for()
    users.fetch_list(users_key)
    groups = GroupsClient(http=http, cache=cache)

    listed = groups.list_groups()
    created = groups.create_group("QC")

    assert [group.user_count for group in listed] == [4, None]
    assert isinstance(created, Group)
    assert cache.get(users_key) is None
    assert groups.set_permissions(3, [10]).permissions[0].codename == "view_job"


@responses.activate
def test_permissions_catalog(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{API}/api/v1/permissions/",
        json=[{"id": 10, "name": "Can view job", "codename": "view_job", "content_type": {"app_label": "jobs", "model": "job"}}],
    )

    permissions = GroupsClient(http=http).permissions()

    assert permissions[0].content_type.app_label == "jobs"


def test_collections_cannot_back_a_list_controller(http: HttpClient) -> None:
    with pytest.raises(ValueError, match="not paginated"):
        ListController(GroupsClient(http=http), FilterStore(GROUPS, debounce_ms=0))


@responses.activate
def test_audit_trail_for_user(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{API}/api/v1/audit-logs/",
        json=page(
            [
                {"id": 1, "action": "LOGIN", "user": {"id": 7, "username": "jane"}, "timestamp": "2024-05-01T10:00:00Z"},
                {"id": 2, "action": "OTHER", "user": None, "model_name": "Job"},
            ]
        ),
        match=[matchers.query_param_matcher({"user": "7", "page": "1", "page_size": "20"})],
    )

    result = AuditLogsClient(http=http).for_user(7)

    rows = result.results
    assert isinstance(rows[0], AuditLog)
    assert [row.flat()["user"] for row in rows] == ["jane", "system"]


@responses.activate
def test_alert_filters_and_dismiss(http: HttpClient, cache: QueryCache) -> None:
    responses.add(
        responses.GET,
        f"{API}/api/v1/system-alerts/",
        json=page([{"id": 5, "severity": "critical", "alert_type": "payment_due"}]),
        match=[
            matchers.query_param_matcher(
                {"severity": "critical", "is_dismissed": "false", "page": "1", "page_size": "20"}
            )
        ],
    )
    responses.add(
        responses.PATCH,
        f"{API}/api/v1/system-alerts/5/",
        json={"id": 5, "is_dismissed": True, "dismissed_by": 1},
        match=[matchers.json_params_matcher({"is_dismissed": True})],
    )
    client = SystemAlertsClient(http=http, cache=cache)
    key = client.key_for(severity="critical", isDismissed=False)
    client.fetch_list(key)

    dismissed = client.dismiss(5)

    assert isinstance(dismissed, SystemAlert)
    assert dismissed.is_dismissed is True
    assert cache.get(key) is None


@responses.activate
def test_settings_fetch_and_bulk_update(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{API}/api/v1/settings/",
        json={"site_title": "Print Duka", "currency": "KES", "session_timeout": 30, "brand_color": "#f60"},
    )
    responses.add(
        responses.PATCH,
        f"{API}/api/v1/settings/bulk_update/",
        json={"site_title": "Print Duka", "maintenance_mode": True},
        match=[matchers.json_params_matcher({"maintenance_mode": True})],
    )
    client = SettingsClient(http=http)

    current = client.get()
    updated = client.bulk_update({"maintenance_mode": True})

    assert current.currency == "KES"
    assert current.model_extra == {"brand_color": "#f60"}
    assert updated.maintenance_mode is True
    with pytest.raises(ValueError):
        client.bulk_update({})
