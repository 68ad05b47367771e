from __future__ import annotations

import threading
import time
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any

from .logger import get_logger
from .query import QueryKey

LOGGER = get_logger("printduka_sdk.cache")


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


class QueryCache:
    """In-memory TTL cache for list reads, shared by every list controller.

    At most one request per key is in flight: later callers wait on the
    first caller's future. Invalidating a resource family drops its entries
    and in-flight slots and bumps its epoch so a read that started before
    the invalidation is never stored.
    """

    def __init__(self, ttl_seconds: float = 60.0, now: Callable[[], float] | None = None) -> None:
        self.ttl_seconds = max(0.0, ttl_seconds)
        self._now = now or time.monotonic
        self._lock = threading.Lock()
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._inflight: dict[QueryKey, Future] = {}
        self._epochs: dict[str, int] = {}

    def get(self, key: QueryKey) -> Any | None:
        with self._lock:
            return self._get_locked(key)

    def set(self, key: QueryKey, value: Any) -> None:
        with self._lock:
            self._set_locked(key, value)

    def fetch(self, key: QueryKey, loader: Callable[[], Any], *, force_refresh: bool = False) -> Any:
        with self._lock:
            if not force_refresh:
                cached = self._get_locked(key)
                if cached is not None:
                    return cached
            future = self._inflight.get(key)
            owner = future is None
            if future is None:
                future = Future()
                self._inflight[key] = future
            epoch = self._epochs.get(key.resource, 0)

        if not owner:
            LOGGER.debug("joining in-flight read for %s", key.resource)
            return future.result()

        try:
            value = loader()
        except BaseException as exc:
            with self._lock:
                if self._inflight.get(key) is future:
                    del self._inflight[key]
            future.set_exception(exc)
            raise

        with self._lock:
            if self._inflight.get(key) is future:
                del self._inflight[key]
            if value is not None and self._epochs.get(key.resource, 0) == epoch:
                self._set_locked(key, value)
        future.set_result(value)
        return value

    def invalidate(self, resource: str) -> None:
        with self._lock:
            self._epochs[resource] = self._epochs.get(resource, 0) + 1
            for key in [key for key in self._entries if key.resource == resource]:
                self._entries.pop(key, None)
            for key in [key for key in self._inflight if key.resource == resource]:
                self._inflight.pop(key, None)
        LOGGER.debug("invalidated %s", resource)

    def clear(self) -> None:
        with self._lock:
            for resource in {key.resource for key in self._entries} | {key.resource for key in self._inflight}:
                self._epochs[resource] = self._epochs.get(resource, 0) + 1
            self._entries.clear()
            self._inflight.clear()

    def in_flight(self, key: QueryKey) -> bool:
        with self._lock:
            return key in self._inflight

    def _get_locked(self, key: QueryKey) -> Any | None:
        entry = self._entries.get(key)
        if not entry:
            return None
        if entry.expires_at <= self._now():
            self._entries.pop(key, None)
            return None
        return entry.value

    def _set_locked(self, key: QueryKey, value: Any) -> None:
        if self.ttl_seconds <= 0:
            return
        self._entries[key] = CacheEntry(value=value, expires_at=self._now() + self.ttl_seconds)
