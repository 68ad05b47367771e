from __future__ import annotations

from typing import Any, Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ErrorCode,
    FieldError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    ValidationError,
)

_DEFAULT_MESSAGES = {
    400: "Validation failed",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    409: "Resource conflict",
    422: "Validation failed",
    429: "Too many requests",
    503: "Service unavailable",
}

# Keys that carry a message rather than a field error, in lookup order.
_MESSAGE_KEYS = ("detail", "message", "error")
_NON_FIELD_KEYS = {"non_field_errors", "__all__"}


def extract_field_errors(payload: object) -> list[FieldError]:
    if not isinstance(payload, Mapping):
        return []
    errors: list[FieldError] = []
    for key, value in payload.items():
        if key in _MESSAGE_KEYS or key in {"code", "trace_id"}:
            continue
        field = "non_field_errors" if key in _NON_FIELD_KEYS else str(key)
        if isinstance(value, str) and value.strip():
            errors.append(FieldError(field=field, message=value.strip()))
        elif isinstance(value, list):
            errors.extend(FieldError(field=field, message=str(item)) for item in value if str(item).strip())
    return errors


def extract_error_message(status_code: int, payload: object, text: str | None = None) -> str:
    """Best-effort human message: detail, message, error, first field error, raw text."""
    if isinstance(payload, Mapping):
        for key in _MESSAGE_KEYS:
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        field_errors = extract_field_errors(payload)
        if field_errors:
            return field_errors[0].message
    elif isinstance(payload, str) and payload.strip():
        return payload.strip()
    elif isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    if text and text.strip():
        return text.strip()
    if status_code >= 500:
        return "Internal server error"
    return _DEFAULT_MESSAGES.get(status_code, "Request failed")


def parse_retry_after(headers: Mapping[str, str] | None, payload: object = None) -> int | None:
    raw: Any = None
    if headers:
        raw = headers.get("Retry-After")
    if raw is None and isinstance(payload, Mapping):
        raw = payload.get("retry_after")
    if raw is None:
        return None
    try:
        seconds = int(float(str(raw).strip()))
    except ValueError:
        # HTTP-date form is not used by the backend.
        return None
    return seconds if seconds > 0 else None


def map_error(
    status_code: int,
    payload: object,
    trace_id: str | None,
    *,
    text: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> ApiError:
    message = extract_error_message(status_code, payload, text)
    details = payload if isinstance(payload, (Mapping, list)) else None
    if isinstance(payload, Mapping) and isinstance(payload.get("trace_id"), str):
        trace_id = payload["trace_id"]
    common: dict[str, Any] = {
        "message": message,
        "status_code": status_code,
        "details": details,
        "trace_id": trace_id,
        "raw_payload": payload if payload is not None else text,
    }
    if status_code in {400, 422}:
        return ValidationError(
            code=ErrorCode.VALIDATION_ERROR.value,
            field_errors=extract_field_errors(payload),
            **common,
        )
    if status_code == 401:
        return AuthError(code=ErrorCode.AUTHENTICATION_ERROR.value, **common)
    if status_code == 403:
        return PermissionDeniedError(code=ErrorCode.AUTHORIZATION_ERROR.value, **common)
    if status_code == 404:
        return NotFoundError(code=ErrorCode.NOT_FOUND.value, **common)
    if status_code == 409:
        return ConflictError(code=ErrorCode.CONFLICT.value, **common)
    if status_code == 429:
        return RateLimitError(
            code=ErrorCode.RATE_LIMIT_EXCEEDED.value,
            retry_after=parse_retry_after(headers, payload),
            **common,
        )
    if status_code == 503:
        return ServerError(code=ErrorCode.SERVICE_UNAVAILABLE.value, **common)
    if status_code >= 500:
        return ServerError(code=ErrorCode.INTERNAL_SERVER_ERROR.value, **common)
    return ApiError(code=ErrorCode.BAD_REQUEST.value, **common)
