"""Per-page filter state with a debounced free-text search.

The store owns the raw values of every filter control of one list page. The
search box is special: keystrokes update ``search_text`` at once, but the
value read by the query encoder only changes after a quiet period with no
further keystrokes. Time comes from an injected clock, and the owner calls
:meth:`FilterStore.poll` (usually through ``ListController.tick``) to let the
quiet period elapse.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from .resources import FilterSpec, ResourceDescriptor

SEARCH_FILTER = "search"
DEFAULT_DEBOUNCE_MS = 3000
DEFAULT_PAGE_SIZE = 20


class UnknownFilterError(KeyError):
    def __init__(self, resource: str, name: str) -> None:
        super().__init__(name)
        self.resource = resource
        self.name = name

    def __str__(self) -> str:
        return f"{self.resource} has no filter named {self.name!r}"


def coerce_filter_value(spec: FilterSpec, value: Any) -> str:
    if value is None:
        return spec.unset
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class FilterSnapshot:
    resource: str
    values: tuple[tuple[str, str], ...]
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def get(self, name: str, default: str = "") -> str:
        for key, value in self.values:
            if key == name:
                return value
        return default

    def as_dict(self) -> dict[str, str]:
        return dict(self.values)

    @classmethod
    def from_values(
        cls,
        descriptor: ResourceDescriptor,
        values: Mapping[str, Any] | None = None,
        *,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> "FilterSnapshot":
        """Snapshot built directly from keyword filters, with no debounce."""
        values = dict(values or {})
        for name in values:
            if descriptor.filter(name) is None:
                raise UnknownFilterError(descriptor.name, name)
        resolved = tuple(
            (spec.name, coerce_filter_value(spec, values.get(spec.name))) for spec in descriptor.filters
        )
        return cls(
            resource=descriptor.name,
            values=resolved,
            page=max(1, int(page)),
            page_size=max(1, int(page_size)),
        )


class FilterStore:
    def __init__(
        self,
        descriptor: ResourceDescriptor,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        now: Callable[[], float] | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.debounce_seconds = max(0, debounce_ms) / 1000
        self._now = now or time.monotonic
        self._values = {spec.name: spec.unset for spec in descriptor.filters if spec.name != SEARCH_FILTER}
        self.search_text = ""
        self.debounced_search = ""
        self._deadline: float | None = None
        self.page = 1
        self.page_size = max(1, page_size)

    @property
    def search_pending(self) -> bool:
        return self._deadline is not None

    def value(self, name: str) -> str:
        if name == SEARCH_FILTER and self.descriptor.search_filter is not None:
            return self.search_text
        self._spec(name)
        return self._values[name]

    def set_filter(self, name: str, value: Any) -> None:
        spec = self._spec(name)
        if name == SEARCH_FILTER:
            self.set_search_text(coerce_filter_value(spec, value))
            return
        self._values[name] = coerce_filter_value(spec, value)
        self.page = 1

    def set_search_text(self, value: str | None) -> None:
        self._spec(SEARCH_FILTER)
        self.search_text = value or ""
        self.page = 1
        if self.debounce_seconds <= 0:
            self.debounced_search = self.search_text
            self._deadline = None
            return
        self._deadline = self._now() + self.debounce_seconds

    def poll(self) -> bool:
        """Settle the search value once the quiet period is over.

        Returns ``True`` when the debounced value changed.
        """
        if self._deadline is None or self._now() < self._deadline:
            return False
        self._deadline = None
        if self.debounced_search == self.search_text:
            return False
        self.debounced_search = self.search_text
        return True

    def set_page(self, page: int) -> None:
        self.page = max(1, int(page))

    def set_page_size(self, page_size: int) -> None:
        self.page_size = max(1, int(page_size))
        self.page = 1

    def reset(self) -> None:
        for spec in self.descriptor.filters:
            if spec.name != SEARCH_FILTER:
                self._values[spec.name] = spec.unset
        self.search_text = ""
        self.debounced_search = ""
        self._deadline = None
        self.page = 1

    def snapshot(self) -> FilterSnapshot:
        values = []
        for spec in self.descriptor.filters:
            if spec.name == SEARCH_FILTER:
                values.append((spec.name, self.debounced_search))
            else:
                values.append((spec.name, self._values[spec.name]))
        return FilterSnapshot(
            resource=self.descriptor.name,
            values=tuple(values),
            page=self.page,
            page_size=self.page_size,
        )

    def _spec(self, name: str) -> FilterSpec:
        spec = self.descriptor.filter(name)
        if spec is None:
            raise UnknownFilterError(self.descriptor.name, name)
        return spec
