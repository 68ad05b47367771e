"""State machine behind one staff list page.

``idle -> loading -> success | error``. Every load gets a generation number;
only the newest pending load may change the state, so a slow response for a
superseded query is dropped no matter when it arrives.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TypeVar

from .clients.resource_client import ResourceClient
from .exceptions import ApiError, ErrorCode, NoDataError
from .filter_state import FilterStore
from .logger import get_logger, log_event
from .models import MutationOutcome, PagedResult
from .query import QueryKey, build_query_key

LOGGER = get_logger("printduka_sdk.lists")

ValueT = TypeVar("ValueT")


class ListStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ListState:
    status: ListStatus = ListStatus.IDLE
    key: QueryKey | None = None
    result: PagedResult | None = None
    error: ApiError | None = None

    @property
    def is_empty(self) -> bool:
        return self.status is ListStatus.SUCCESS and self.result is not None and self.result.is_empty


@dataclass(frozen=True)
class PendingLoad:
    key: QueryKey
    generation: int


def no_data_error(key: QueryKey) -> NoDataError:
    return NoDataError(
        code=ErrorCode.NO_DATA.value,
        message=f"No data returned for {key.resource}",
        status_code=0,
    )


class ListController:
    def __init__(self, client: ResourceClient, store: FilterStore) -> None:
        if client.descriptor is not store.descriptor:
            raise ValueError("client and filter store describe different resources")
        if not client.descriptor.paginated:
            raise ValueError(f"{client.descriptor.name} is not paginated; read it with list_all()")
        self.client = client
        self.store = store
        self.state = ListState()
        self._generation = 0

    @property
    def resource(self) -> str:
        return self.client.descriptor.name

    def current_key(self) -> QueryKey:
        return build_query_key(self.client.descriptor, self.store.snapshot())

    def begin(self, key: QueryKey | None = None) -> PendingLoad:
        key = key or self.current_key()
        self._generation += 1
        self.state = ListState(status=ListStatus.LOADING, key=key)
        return PendingLoad(key=key, generation=self._generation)

    def is_current(self, pending: PendingLoad) -> bool:
        return pending.generation == self._generation

    def complete(self, pending: PendingLoad, result: PagedResult | None) -> bool:
        if not self._accept(pending):
            return False
        if result is None:
            self.state = ListState(status=ListStatus.ERROR, key=pending.key, error=no_data_error(pending.key))
        else:
            self.state = ListState(status=ListStatus.SUCCESS, key=pending.key, result=result)
        return True

    def fail(self, pending: PendingLoad, error: ApiError) -> bool:
        if not self._accept(pending):
            return False
        self.state = ListState(status=ListStatus.ERROR, key=pending.key, error=error)
        return True

    def load(self, *, force_refresh: bool = False) -> ListState:
        pending = self.begin()
        try:
            result = self.client.fetch_list(pending.key, force_refresh=force_refresh)
        except ApiError as exc:
            self.fail(pending, exc)
        else:
            self.complete(pending, result)
        return self.state

    def refresh(self) -> ListState:
        return self.load(force_refresh=True)

    def sync(self) -> ListState:
        """Load only when the filters now describe a different query."""
        if self.state.status is not ListStatus.IDLE and self.state.key == self.current_key():
            return self.state
        return self.load()

    def tick(self) -> ListState:
        self.store.poll()
        return self.sync()

    def run_mutation(self, mutation: Callable[[], ValueT], *, action: str = "mutation") -> MutationOutcome[ValueT]:
        try:
            value = mutation()
        except ApiError as exc:
            log_event(
                LOGGER,
                self.resource,
                action,
                "error",
                level=logging.WARNING,
                trace_id=exc.trace_id,
                error=exc,
            )
            return MutationOutcome(error=exc)
        self.load()
        return MutationOutcome(value=value)

    def _accept(self, pending: PendingLoad) -> bool:
        if self.is_current(pending):
            return True
        log_event(
            LOGGER,
            self.resource,
            "list",
            "stale_discarded",
            level=logging.DEBUG,
            generation=pending.generation,
            current_generation=self._generation,
        )
        return False
