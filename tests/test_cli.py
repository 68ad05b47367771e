from __future__ import annotations

import json
from pathlib import Path

import pytest
import responses
from responses import matchers

from printduka_sdk.cli import main

from conftest import API, page


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRINTDUKA_ENV", "test")
    monkeypatch.setenv("PRINTDUKA_API_BASE_URL", API)
    monkeypatch.setenv("PRINTDUKA_RETRIES", "0")
    monkeypatch.delenv("PRINTDUKA_API_BASE_URL_TEST", raising=False)


def _run(tmp_path: Path, *argv: str) -> None:
    main(["--state-dir", str(tmp_path), *argv])


@responses.activate
def test_list_prints_table_summary_and_pagination(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(
        responses.GET,
        f"{API}/api/v1/lpos/",
        json=page(
            [{"id": 1, "lpo_number": "LPO-0001", "client_name": "Acme", "total_amount": "116.00", "status": "pending"}],
            count=41,
            summary={"total_count": 41, "pending_count": 3},
        ),
        match=[
            matchers.query_param_matcher(
                {"status": "pending", "search": "acme", "page": "2", "page_size": "20", "ordering": "-created_at"}
            )
        ],
    )

    _run(tmp_path, "list", "lpos", "--filter", "status=pending", "--search", "acme", "--ordering=-created_at", "--page", "2")

    out = capsys.readouterr().out
    assert "LPO-0001" in out
    assert "116.00" in out
    assert "pending_count=3" in out
    assert "page 2 of 3 (41 total)" in out


@responses.activate
def test_list_vendors_prints_computed_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(
        responses.GET,
        f"{API}/api/v1/vendors/",
        json=page([{"id": 1, "name": "Acme", "active": True, "recommended": True, "vps_score_value": "80"}]),
    )

    _run(tmp_path, "list", "vendors")

    out = capsys.readouterr().out
    assert "total_visible=1" in out
    assert "average_vps=80.00" in out


@responses.activate
def test_list_empty_state(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(responses.GET, f"{API}/api/v1/quotes/", json=page([]))

    _run(tmp_path, "list", "quotes", "--filter", "status=Lost")

    out = capsys.readouterr().out
    assert "No quotes found." in out


@responses.activate
def test_list_desc_flag_orders_descending(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(
        responses.GET,
        f"{API}/api/v1/payments/",
        json=page([]),
        match=[matchers.query_param_matcher({"page": "1", "page_size": "20", "ordering": "-amount"})],
    )

    _run(tmp_path, "list", "payments", "--ordering", "amount", "--desc")

    assert "No payments found." in capsys.readouterr().out


def test_list_desc_without_ordering_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _run(tmp_path, "list", "payments", "--desc")

    assert "--desc needs --ordering" in str(excinfo.value.code)


@responses.activate
def test_list_error_state_exits_1(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(responses.GET, f"{API}/api/v1/payments/", json={"detail": "Authentication credentials were not provided."}, status=401)

    with pytest.raises(SystemExit) as excinfo:
        _run(tmp_path, "list", "payments")

    assert excinfo.value.code == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["error"] == "AUTHENTICATION_ERROR"
    assert payload["hint"] == "Please try again later."


def test_list_rejects_unknown_filter(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _run(tmp_path, "list", "vendors", "--filter", "status=active")

    assert "no filter named 'status'" in str(excinfo.value.code)


@responses.activate
def test_delete_and_action(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(responses.DELETE, f"{API}/api/v1/vendors/4/", status=204)
    responses.add(
        responses.POST,
        f"{API}/api/v1/leads/3/convert/",
        json={"detail": "Converted", "client_id": 12},
        match=[matchers.json_params_matcher({"client_type": "B2C"})],
    )

    _run(tmp_path, "delete", "vendors", "4")
    _run(tmp_path, "action", "leads", "3", "convert", "--json", '{"client_type": "B2C"}')

    out = capsys.readouterr().out
    assert '"deleted": true' in out
    assert '"client_id": 12' in out


@responses.activate
def test_api_error_prints_json_and_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(responses.GET, f"{API}/api/v1/products/404/", json={"detail": "Not found."}, status=404)

    with pytest.raises(SystemExit) as excinfo:
        _run(tmp_path, "show", "products", "404")

    assert excinfo.value.code == 1
    assert json.loads(capsys.readouterr().out)["error"] == "NOT_FOUND"


@responses.activate
def test_login_then_whoami(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    user = {"id": 1, "username": "jane", "is_staff": True}
    responses.add(responses.GET, f"{API}/api/auth/csrf/", json={"csrfToken": "csrf-1"})
    responses.add(responses.POST, f"{API}/api/auth/session/login/", json={"success": True, "user": user})
    responses.add(responses.GET, f"{API}/api/auth/session/check/", json={"authenticated": True, "user": user})

    _run(tmp_path, "login", "--username", "jane", "--password", "secret")
    _run(tmp_path, "whoami", "--staff")

    out = capsys.readouterr().out
    assert '"username": "jane"' in out
    assert (tmp_path / "session.json").exists()


def test_invalid_json_body(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _run(tmp_path, "create", "vendors", "--json", "{oops")

    assert "not valid JSON" in str(excinfo.value.code)


def test_resources_lists_registry(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(tmp_path, "resources")

    out = capsys.readouterr().out
    assert "qc-inspections" in out
    assert "upload-primary-image" in out


@responses.activate
def test_list_groups_reads_the_whole_collection(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(responses.GET, f"{API}/api/v1/groups/", json=[{"id": 1, "name": "Production", "user_count": 4}])

    _run(tmp_path, "list", "groups")

    out = capsys.readouterr().out
    assert "Production" in out
    assert "page " not in out


@responses.activate
def test_settings_show_and_bulk_update(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(responses.GET, f"{API}/api/v1/settings/", json={"site_title": "Print Duka", "currency": "KES"})
    responses.add(
        responses.PATCH,
        f"{API}/api/v1/settings/bulk_update/",
        json={"site_title": "Print Duka", "daily_digest": False},
        match=[matchers.json_params_matcher({"daily_digest": False})],
    )

    _run(tmp_path, "settings")
    _run(tmp_path, "settings", "--json", '{"daily_digest": false}')

    out = capsys.readouterr().out
    assert '"currency": "KES"' in out
    assert '"daily_digest": false' in out
