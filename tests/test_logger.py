from __future__ import annotations

import json
import logging

import pytest

from printduka_sdk.exceptions import ApiError
from printduka_sdk.logger import SERVICE_NAME, log_event, redact


def test_redact_masks_sensitive_keys_recursively() -> None:
    cleaned = redact({"username": "jane", "password": "x", "headers": {"X-CSRFToken": "t", "Accept": "json"}})

    assert cleaned["username"] == "jane"
    assert cleaned["password"] == "***"
    assert cleaned["headers"] == {"X-CSRFToken": "***", "Accept": "json"}


def test_log_event_emits_one_json_line(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("printduka_sdk.test")
    error = ApiError(code="NOT_FOUND", message="missing", status_code=404)

    with caplog.at_level(logging.INFO, logger="printduka_sdk.test"):
        log_event(logger, "vendors", "delete", "error", trace_id="t-1", error=error, sessionid="abc", vendor=4)

    entry = json.loads(caplog.records[-1].getMessage())
    assert entry["service"] == SERVICE_NAME
    assert entry["module"] == "vendors"
    assert entry["outcome"] == "error"
    assert entry["trace_id"] == "t-1"
    assert entry["context"] == {"sessionid": "***", "vendor": 4}
    assert entry["error"] == {"name": "ApiError", "message": str(error), "code": "NOT_FOUND"}
