from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel

from .auth_store import AuthStore
from .clients.vendors import VendorsClient
from .config import ConfigError, load_config
from .exceptions import ApiError
from .filter_state import FilterStore, UnknownFilterError
from .list_controller import ListController
from .resources import COLLECTION_RESOURCES, LIST_RESOURCES, REGISTRY, ResourceDescriptor, get_resource
from .session import ApiSession, SessionGuard
from .table import render_pagination, render_summary, render_table
from .ui_errors import ListAffordance, resolve_affordance


def _session(args: argparse.Namespace) -> ApiSession:
    config = load_config(args.env_file)
    store = AuthStore(base_dir=Path(args.state_dir)) if args.state_dir else AuthStore()
    return ApiSession(config, auth_store=store)


def _dump(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _parse_json(raw: str | None) -> dict[str, Any] | None:
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"--json is not valid JSON: {exc.msg}") from exc
    if not isinstance(value, dict):
        raise SystemExit("--json must be a JSON object")
    return value


def _parse_filters(items: Sequence[str]) -> list[tuple[str, str]]:
    parsed = []
    for item in items:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise SystemExit(f"--filter expects NAME=VALUE, got {item!r}")
        parsed.append((name.strip(), value))
    return parsed


def _ordering(field: str | None, desc: bool) -> str | None:
    if not field:
        if desc:
            raise SystemExit("--desc needs --ordering")
        return None
    if desc and not field.startswith("-"):
        return f"-{field}"
    return field


def _resource(name: str) -> str:
    if name not in REGISTRY:
        raise argparse.ArgumentTypeError(f"unknown resource {name!r}; see `printduka resources`")
    return name


def cmd_login(args: argparse.Namespace) -> None:
    session = _session(args)
    user = session.login(args.username, args.password)
    _dump({"user": user.model_dump() if user else None, "env": session.config.env_name})


def cmd_logout(args: argparse.Namespace) -> None:
    _session(args).logout()
    _dump({"logged_out": True})


def cmd_whoami(args: argparse.Namespace) -> None:
    session = _session(args)
    if args.staff:
        user = SessionGuard(session).require_staff()
    else:
        user = session.auth_client().current_user()
    _dump(user.model_dump())


def cmd_resources(args: argparse.Namespace) -> None:
    for descriptor in LIST_RESOURCES + COLLECTION_RESOURCES:
        filters = ", ".join(spec.name for spec in descriptor.filters) or "-"
        actions = ", ".join(descriptor.actions) or "-"
        print(f"{descriptor.name:<16} filters: {filters}")
        print(f"{'':<16} actions: {actions}")


def cmd_list(args: argparse.Namespace) -> None:
    session = _session(args)
    descriptor = get_resource(args.resource)
    page_size = args.page_size or session.config.default_page_size
    store = FilterStore(descriptor, page_size=page_size, debounce_ms=0)
    try:
        for name, value in _parse_filters(args.filter):
            store.set_filter(name, value)
        if args.search is not None:
            store.set_search_text(args.search)
        ordering = _ordering(args.ordering, args.desc)
        if ordering is not None:
            store.set_filter("ordering", ordering)
    except UnknownFilterError as exc:
        raise SystemExit(str(exc)) from exc
    store.set_page(args.page)

    if not descriptor.paginated:
        _print_collection(descriptor, session.client(args.resource).list_all(), args.json)
        return

    controller = ListController(session.client(args.resource), store)
    state = controller.load()
    view = resolve_affordance(state)

    if view.affordance is ListAffordance.ERROR:
        error = view.error
        _dump(
            {
                "error": state.error.code if state.error else None,
                "message": error.message if error else None,
                "hint": view.hint,
                "trace_id": error.trace_id if error else None,
            }
        )
        raise SystemExit(1)

    result = state.result
    if args.json:
        _dump(result.model_dump(mode="json"))
        return
    print(descriptor.label or descriptor.name)
    if view.affordance is ListAffordance.EMPTY:
        print(f"No {descriptor.name} found. {view.hint}")
        return
    for line in render_table(result.results, descriptor.columns):
        print(line)
    strip = render_summary(result.summary)
    if strip is None and isinstance(controller.client, VendorsClient):
        strip = render_summary(VendorsClient.page_summary(result))
    if strip:
        print(strip)
    print(render_pagination(result, store.page, store.page_size))


def _print_collection(descriptor: ResourceDescriptor, rows: Sequence[BaseModel], as_json: bool) -> None:
    if as_json:
        _dump([row.model_dump(mode="json") for row in rows])
        return
    print(descriptor.label or descriptor.name)
    if not rows:
        print(f"No {descriptor.name} found.")
        return
    for line in render_table(rows, descriptor.columns):
        print(line)


def cmd_settings(args: argparse.Namespace) -> None:
    client = _session(args).settings()
    updates = _parse_json(args.json)
    settings = client.bulk_update(updates) if updates else client.get()
    _dump(settings.model_dump(mode="json", exclude_none=True))


def cmd_show(args: argparse.Namespace) -> None:
    session = _session(args)
    client = session.client(args.resource)
    if args.resource == "processes" and args.bundle:
        _dump(session.processes().detail_bundle(args.id).model_dump(mode="json"))
        return
    if args.resource == "quotes" and args.history:
        _dump(session.quotes().history(args.id).model_dump(mode="json"))
        return
    _dump(client.retrieve(args.id).model_dump(mode="json"))


def cmd_create(args: argparse.Namespace) -> None:
    client = _session(args).client(args.resource)
    _dump(client.create(_parse_json(args.json) or {}).model_dump(mode="json"))


def cmd_update(args: argparse.Namespace) -> None:
    client = _session(args).client(args.resource)
    _dump(client.update(args.id, _parse_json(args.json) or {}).model_dump(mode="json"))


def cmd_delete(args: argparse.Namespace) -> None:
    _session(args).client(args.resource).delete(args.id)
    _dump({"deleted": True, "resource": args.resource, "id": args.id})


def cmd_action(args: argparse.Namespace) -> None:
    client = _session(args).client(args.resource)
    try:
        result = client.perform_action(args.id, args.action, _parse_json(args.json))
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    _dump(result if result is not None else {"ok": True})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="printduka", description="Print Duka staff API CLI")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--state-dir", default=None, help="Directory holding the saved session")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--username", required=True)
    login_parser.add_argument("--password", required=True)
    login_parser.set_defaults(func=cmd_login)

    logout_parser = subparsers.add_parser("logout")
    logout_parser.set_defaults(func=cmd_logout)

    whoami_parser = subparsers.add_parser("whoami")
    whoami_parser.add_argument("--staff", action="store_true", help="Fail unless the account is staff")
    whoami_parser.set_defaults(func=cmd_whoami)

    resources_parser = subparsers.add_parser("resources")
    resources_parser.set_defaults(func=cmd_resources)

    list_parser = subparsers.add_parser("list")
    list_parser.add_argument("resource", type=_resource)
    list_parser.add_argument("--search", default=None)
    list_parser.add_argument("--filter", action="append", default=[], metavar="NAME=VALUE")
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--page-size", type=int, default=None)
    list_parser.add_argument(
        "--ordering",
        default=None,
        help="Field to order by; pass descending orderings as --ordering=-created_at",
    )
    list_parser.add_argument("--desc", action="store_true", help="Prefix the ordering with - (newest first)")
    list_parser.add_argument("--json", action="store_true", help="Print the raw page as JSON")
    list_parser.set_defaults(func=cmd_list)

    show_parser = subparsers.add_parser("show")
    show_parser.add_argument("resource", type=_resource)
    show_parser.add_argument("id")
    show_parser.add_argument("--bundle", action="store_true", help="processes: include tiers, variables and vendors")
    show_parser.add_argument("--history", action="store_true", help="quotes: show the activity history")
    show_parser.set_defaults(func=cmd_show)

    create_parser = subparsers.add_parser("create")
    create_parser.add_argument("resource", type=_resource)
    create_parser.add_argument("--json", required=True)
    create_parser.set_defaults(func=cmd_create)

    update_parser = subparsers.add_parser("update")
    update_parser.add_argument("resource", type=_resource)
    update_parser.add_argument("id")
    update_parser.add_argument("--json", required=True)
    update_parser.set_defaults(func=cmd_update)

    delete_parser = subparsers.add_parser("delete")
    delete_parser.add_argument("resource", type=_resource)
    delete_parser.add_argument("id")
    delete_parser.set_defaults(func=cmd_delete)

    action_parser = subparsers.add_parser("action")
    action_parser.add_argument("resource", type=_resource)
    action_parser.add_argument("id")
    action_parser.add_argument("action")
    action_parser.add_argument("--json", default=None)
    action_parser.set_defaults(func=cmd_action)

    settings_parser = subparsers.add_parser("settings")
    settings_parser.add_argument("--json", default=None, help="Settings to change, sent as one bulk update")
    settings_parser.set_defaults(func=cmd_settings)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    except ApiError as exc:
        print(json.dumps({"error": exc.code, "message": exc.message, "trace_id": exc.trace_id}, indent=2))
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
