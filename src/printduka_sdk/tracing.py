from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_ALIASES = (REQUEST_ID_HEADER, "X-Request-Id", "x-request-id", "X-Trace-ID")


def new_request_id() -> str:
    return uuid.uuid4().hex


@dataclass
class TraceContext:
    trace_id: str | None = None

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = new_request_id()
        return self.trace_id

    def rotate(self) -> str:
        self.trace_id = new_request_id()
        return self.trace_id

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        for key in REQUEST_ID_ALIASES:
            trace_id = headers.get(key)
            if trace_id:
                self.trace_id = trace_id
                return
