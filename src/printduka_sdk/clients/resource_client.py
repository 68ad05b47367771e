"""Generic REST client for one staff resource.

Reads go through the shared :class:`~printduka_sdk.query_cache.QueryCache`
when one is injected. Every successful write invalidates the resource's
cache family so the next list read reaches the network; failed writes leave
the cache alone.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, List, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from ..exceptions import ErrorCode, NoDataError
from ..logger import get_logger, log_event
from ..models import PagedResult, Summary
from ..query import QueryKey, build_query_key
from ..query_cache import QueryCache
from ..filter_state import FilterSnapshot
from ..resources import ResourceDescriptor
from .base import BaseClient, Payload, payload_body

LOGGER = get_logger("printduka_sdk.resources")

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ResourceClient(BaseClient):
    descriptor: ResourceDescriptor
    cache: QueryCache | None = None

    @property
    def module(self) -> str:
        return self.descriptor.name

    def key_for(self, *, page: int = 1, page_size: int = 20, **filters: Any) -> QueryKey:
        snapshot = FilterSnapshot.from_values(self.descriptor, filters, page=page, page_size=page_size)
        return build_query_key(self.descriptor, snapshot)

    def fetch_list(self, key: QueryKey, *, force_refresh: bool = False) -> PagedResult | None:
        """Read one page; ``None`` means the body was not a paginated envelope."""
        if key.resource != self.descriptor.name:
            raise ValueError(f"query key for {key.resource} passed to {self.descriptor.name} client")
        if self.cache is None:
            return self._load_page(key)
        return self.cache.fetch(key, lambda: self._load_page(key), force_refresh=force_refresh)

    def list(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        force_refresh: bool = False,
        **filters: Any,
    ) -> PagedResult | None:
        key = self.key_for(page=page, page_size=page_size, **filters)
        return self.fetch_list(key, force_refresh=force_refresh)

    def list_all(self) -> List[BaseModel]:
        """Every row of an endpoint that answers with a bare array (groups, permissions)."""
        payload = self._request("GET", self.descriptor.path, operation="list_all")
        return decode_rows(payload, self.descriptor.item_model, resource=self.descriptor.name)

    def retrieve(self, item_id: int | str) -> BaseModel:
        data = self._request("GET", self.descriptor.detail_path(item_id), operation="retrieve")
        return self._decode_item(data, "retrieve")

    def create(self, payload: Payload) -> BaseModel:
        data = self._request("POST", self.descriptor.path, json_body=payload_body(payload), operation="create")
        self.invalidate()
        return self._decode_item(data, "create")

    def update(self, item_id: int | str, payload: Payload) -> BaseModel:
        data = self._request(
            "PATCH",
            self.descriptor.detail_path(item_id),
            json_body=payload_body(payload),
            operation="update",
        )
        self.invalidate()
        return self._decode_item(data, "update")

    def delete(self, item_id: int | str) -> None:
        self._request("DELETE", self.descriptor.detail_path(item_id), operation="delete")
        self.invalidate()

    def perform_action(
        self,
        item_id: int | str,
        action: str,
        payload: Payload | None = None,
        *,
        files: Sequence[tuple[str, Any]] | None = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        if action not in self.descriptor.actions:
            raise ValueError(f"{self.descriptor.name} does not support action {action!r}")
        result = self._request(
            "POST",
            self.descriptor.action_path(item_id, action),
            json_body=payload_body(payload),
            files=files,
            data=data,
            operation=action,
        )
        self.invalidate()
        return result

    def invalidate(self) -> None:
        if self.cache is not None:
            self.cache.invalidate(self.descriptor.name)

    def decode_page(self, payload: Any, page_size: int) -> PagedResult | None:
        if not isinstance(payload, dict) or "count" not in payload or not isinstance(payload.get("results"), list):
            log_event(
                LOGGER,
                self.module,
                "list",
                "no_data",
                level=logging.WARNING,
                payload_type=type(payload).__name__,
            )
            return None
        results = payload["results"]
        if len(results) > page_size:
            LOGGER.warning(
                "%s returned %s rows for page_size %s; truncating",
                self.descriptor.name,
                len(results),
                page_size,
            )
            results = results[:page_size]
        page_model = PagedResult[self.descriptor.item_model, self.descriptor.summary_model or Summary]
        try:
            return page_model.model_validate({**payload, "results": results})
        except ModelValidationError as exc:
            log_event(
                LOGGER,
                self.module,
                "list",
                "no_data",
                level=logging.WARNING,
                error=exc,
            )
            return None

    def _load_page(self, key: QueryKey) -> PagedResult | None:
        payload = self._request("GET", self.descriptor.path, params=key.pairs(), operation="list")
        return self.decode_page(payload, key.page_size)

    def _decode_item(self, data: Any, operation: str) -> BaseModel:
        return decode_model(data, self.descriptor.item_model, resource=self.descriptor.name, operation=operation)


@dataclass
class ChildResourceClient(ResourceClient):
    """Client for a resource listed by its parent id (tiers, ranges, stages)."""

    def list_for(self, parent_id: int | str) -> List[BaseModel]:
        if not self.descriptor.parent_param:
            raise ValueError(f"{self.descriptor.name} is not filtered by a parent")
        payload = self._request(
            "GET",
            self.descriptor.path,
            params=[(self.descriptor.parent_param, str(parent_id))],
            operation="list_for",
        )
        return decode_rows(payload, self.descriptor.item_model, resource=self.descriptor.name)


def decode_model(
    data: Any,
    model: type[ModelT],
    *,
    resource: str,
    operation: str,
    allow_empty: bool = False,
) -> ModelT:
    """Validate a 2xx body; a missing or malformed body raises :class:`NoDataError`."""
    if data is None and allow_empty:
        data = {}
    if not isinstance(data, dict):
        raise malformed_response(resource, operation, f"expected a JSON object, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except ModelValidationError as exc:
        raise malformed_response(resource, operation, str(exc)) from exc


def decode_rows(payload: Any, model: type[ModelT], *, resource: str = "rows") -> List[ModelT]:
    """Rows from either a bare JSON array or a paginated envelope."""
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        rows = payload.get("results") or []
    else:
        rows = []
    try:
        return [model.model_validate(row) for row in rows if isinstance(row, dict)]
    except ModelValidationError as exc:
        raise malformed_response(resource, "list", str(exc)) from exc


def malformed_response(resource: str, operation: str, details: str) -> NoDataError:
    log_event(LOGGER, resource, operation, "no_data", level=logging.WARNING, reason=details)
    return NoDataError(
        code=ErrorCode.NO_DATA.value,
        message=f"Unexpected {resource} {operation} response",
        status_code=0,
        details=details,
    )
