from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    BAD_REQUEST = "BAD_REQUEST"
    NETWORK_ERROR = "NETWORK_ERROR"
    NO_DATA = "NO_DATA"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int
    details: object | None = None
    trace_id: str | None = None
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"

    @property
    def retryable(self) -> bool:
        return False

    def user_message(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "trace_id": self.trace_id,
        }


@dataclass
class ValidationError(ApiError):
    """400/422 with optional field-level messages."""

    field_errors: list[FieldError] = field(default_factory=list)

    def user_message(self) -> str:
        if self.field_errors:
            first = self.field_errors[0]
            return f"Validation failed: {first.field}: {first.message}"
        return self.message

    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        payload["field_errors"] = [{"field": item.field, "message": item.message} for item in self.field_errors]
        return payload


class AuthError(ApiError):
    """Session missing or expired."""

    def user_message(self) -> str:
        return "Your session has expired. Please sign in again."


class PermissionDeniedError(ApiError):
    """Authenticated but not allowed to perform the operation."""

    def user_message(self) -> str:
        return "You do not have permission to perform this action."


class NotFoundError(ApiError):
    pass


class ConflictError(ApiError):
    pass


@dataclass
class RateLimitError(ApiError):
    retry_after: int | None = None

    @property
    def retryable(self) -> bool:
        return True

    def user_message(self) -> str:
        if self.retry_after:
            return f"Too many requests. Please try again in {self.retry_after} seconds"
        return "Too many requests. Please try again later"


class ServerError(ApiError):
    """5xx server-side failures."""

    @property
    def retryable(self) -> bool:
        return True

    def user_message(self) -> str:
        return "The service could not complete the request."


class TransportError(ApiError):
    """Network failure before an HTTP response was returned."""

    @property
    def retryable(self) -> bool:
        return True

    def user_message(self) -> str:
        return "Unable to reach the server. Check your connection."


class NoDataError(ApiError):
    """2xx response whose body is missing or does not match the expected shape."""

    @property
    def retryable(self) -> bool:
        return True

    def user_message(self) -> str:
        return "The server returned no usable data."
