"""Structured logging for the SDK.

Every log line is a single JSON object so staff tooling can ship it to the
same collector as the backend. Error entries carry the exception name,
message and code only; tracebacks are never serialized.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

SERVICE_NAME = "print-duka"
_REDACTED = "***"
_SENSITIVE_KEYS = {"password", "token", "csrf", "csrftoken", "cookie", "sessionid", "authorization", "secret"}


def _level_from_env() -> int:
    raw = (os.getenv("PRINTDUKA_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    level = getattr(logging, raw, None)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(_level_from_env())
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def redact(context: dict[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in context.items():
        if any(token in key.lower() for token in _SENSITIVE_KEYS):
            cleaned[key] = _REDACTED
        elif isinstance(value, dict):
            cleaned[key] = redact(value)
        else:
            cleaned[key] = value
    return cleaned


def log_event(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    *,
    level: int = logging.INFO,
    trace_id: str | None = None,
    duration_ms: int | None = None,
    error: BaseException | None = None,
    **context: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    entry: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "service": SERVICE_NAME,
        "module": module,
        "action": action,
        "outcome": outcome,
        "trace_id": trace_id,
    }
    if duration_ms is not None:
        entry["duration_ms"] = duration_ms
    if context:
        entry["context"] = redact(context)
    if error is not None:
        entry["error"] = {
            "name": type(error).__name__,
            "message": str(error),
            "code": getattr(error, "code", None),
        }
    logger.log(level, json.dumps(entry, default=str))
