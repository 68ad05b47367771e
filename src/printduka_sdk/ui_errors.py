from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import ApiError, AuthError, PermissionDeniedError, ValidationError
from .list_controller import ListState, ListStatus

GENERIC_HINT = "Please try again later."
EMPTY_HINT = "Try adjusting your search or filters."


@dataclass(frozen=True)
class UserFacingError:
    title: str
    message: str
    hint: str = GENERIC_HINT
    details: str | None = None
    trace_id: str | None = None
    retryable: bool = False
    dismissible: bool = True

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def _title_for(exc: ApiError) -> str:
    if isinstance(exc, AuthError):
        return "Signed out"
    if isinstance(exc, PermissionDeniedError):
        return "Not allowed"
    if isinstance(exc, ValidationError):
        return "Check the form"
    return "Something went wrong"


def to_user_facing_error(exc: BaseException) -> UserFacingError:
    if not isinstance(exc, ApiError):
        return UserFacingError(title="Something went wrong", message="An unexpected error occurred.")
    primary = exc.user_message().strip() or "Request failed"
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(
        title=_title_for(exc),
        message=primary,
        details=details,
        trace_id=exc.trace_id,
        retryable=exc.retryable,
    )


class ListAffordance(str, Enum):
    SKELETON = "skeleton"
    ERROR = "error"
    EMPTY = "empty"
    TABLE = "table"


@dataclass(frozen=True)
class AffordanceView:
    affordance: ListAffordance
    error: UserFacingError | None = None
    hint: str | None = None


def resolve_affordance(state: ListState) -> AffordanceView:
    if state.status in (ListStatus.IDLE, ListStatus.LOADING):
        return AffordanceView(ListAffordance.SKELETON)
    if state.status is ListStatus.ERROR or state.result is None:
        error = to_user_facing_error(state.error) if state.error is not None else None
        return AffordanceView(ListAffordance.ERROR, error=error, hint=GENERIC_HINT)
    if state.result.is_empty:
        return AffordanceView(ListAffordance.EMPTY, hint=EMPTY_HINT)
    return AffordanceView(ListAffordance.TABLE)
