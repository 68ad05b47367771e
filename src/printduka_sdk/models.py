from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ApiError

ItemT = TypeVar("ItemT", bound=BaseModel)
SummaryT = TypeVar("SummaryT", bound=BaseModel)
ValueT = TypeVar("ValueT")


class Record(BaseModel):
    """Base for backend rows; unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None


class Summary(BaseModel):
    """Aggregate block returned next to a page, independent of pagination."""

    model_config = ConfigDict(extra="allow")


class PagedResult(BaseModel, Generic[ItemT, SummaryT]):
    model_config = ConfigDict(frozen=True)

    count: int
    next: str | None = None
    previous: str | None = None
    results: List[ItemT] = Field(default_factory=list)
    summary: Optional[SummaryT] = None

    @property
    def is_empty(self) -> bool:
        return self.count == 0 or not self.results

    @property
    def has_next(self) -> bool:
        return bool(self.next)

    @property
    def has_previous(self) -> bool:
        return bool(self.previous)


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return max(1, -(-total // page_size))


@dataclass(frozen=True)
class MutationOutcome(Generic[ValueT]):
    value: ValueT | None = None
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    username: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_staff: bool = False
    is_superuser: bool = False
    is_active: bool = True

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or self.username


class SessionCheck(BaseModel):
    authenticated: bool = False
    user: User | None = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    user: User | None = None


class SessionData(BaseModel):
    """Session cookies persisted between CLI invocations."""

    env_name: str
    api_base_url: str | None = None
    cookies: dict[str, str] = Field(default_factory=dict)
    user: User | None = None
