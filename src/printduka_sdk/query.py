from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
from urllib.parse import urlencode

from .filter_state import FilterSnapshot
from .resources import ALL, FilterKind, FilterSpec, ResourceDescriptor

ORDERING_PARAM = "ordering"


@dataclass(frozen=True)
class QueryKey:
    """Identity of one list read: cache key, dedup key and staleness token."""

    resource: str
    params: tuple[tuple[str, str], ...] = ()
    page: int = 1
    page_size: int = 20

    def pairs(self) -> list[tuple[str, str]]:
        filters = [pair for pair in self.params if pair[0] != ORDERING_PARAM]
        ordering = [pair for pair in self.params if pair[0] == ORDERING_PARAM]
        return filters + [("page", str(self.page)), ("page_size", str(self.page_size))] + ordering

    def with_page(self, page: int) -> "QueryKey":
        return QueryKey(self.resource, self.params, max(1, page), self.page_size)


def encode_filter_value(spec: FilterSpec, value: str) -> str | None:
    """Wire value for one filter, or ``None`` when it holds its unset sentinel."""
    if spec.kind is FilterKind.CHOICE:
        if value == ALL or not value.strip():
            return None
        return value
    if spec.kind is FilterKind.TEXT:
        stripped = value.strip()
        return stripped or None
    if not value.strip():
        return None
    return value


def build_query_key(
    descriptor: ResourceDescriptor,
    snapshot: FilterSnapshot,
    extra: Iterable[tuple[str, str]] = (),
) -> QueryKey:
    params: list[tuple[str, str]] = list(extra)
    ordering_set = False
    for spec in descriptor.filters:
        encoded = encode_filter_value(spec, snapshot.get(spec.name, spec.unset))
        if encoded is None:
            continue
        if spec.kind is FilterKind.ORDERING:
            ordering_set = True
        params.append((spec.param, encoded))
    if not ordering_set and descriptor.default_ordering:
        params.append((ORDERING_PARAM, descriptor.default_ordering))
    return QueryKey(
        resource=descriptor.name,
        params=tuple(params),
        page=snapshot.page,
        page_size=snapshot.page_size,
    )


def encode_query(key: QueryKey) -> str:
    return urlencode(key.pairs())
