from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ErrorCode, TransportError
from .logger import get_logger, log_event
from .tracing import REQUEST_ID_HEADER, TraceContext

CSRF_COOKIE_NAME = "csrftoken"
CSRF_HEADER = "X-CSRFToken"
SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}

ResponseHook = Callable[[requests.Response], None]
RequestHook = Callable[[str, str, dict[str, Any]], None]
QueryParams = Mapping[str, Any] | Sequence[tuple[str, str]]

LOGGER = get_logger("printduka_sdk.http")


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    before_request: RequestHook | None = None
    after_response: ResponseHook | None = None
    sleep: Callable[[float], None] = time.sleep
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def csrf_token(self) -> str | None:
        if self.session is None:
            return None
        return self.session.cookies.get(CSRF_COOKIE_NAME)

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        params: QueryParams | None = None,
        data: Mapping[str, Any] | None = None,
        files: Sequence[tuple[str, Any]] | None = None,
        response_hook: ResponseHook | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> Any:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        normalized_method = method.upper()
        request_headers = {"Accept": "application/json"}
        if normalized_method not in SAFE_METHODS:
            token = self.csrf_token()
            if token:
                request_headers[CSRF_HEADER] = token
        if headers:
            request_headers.update(headers)
        trace_context = self.trace or TraceContext()
        request_headers[REQUEST_ID_HEADER] = trace_context.rotate()

        url = self._build_url(path)
        request_context = {
            "headers": request_headers,
            "json_body": json_body,
            "params": params,
        }
        if self.before_request:
            self.before_request(normalized_method, url, request_context)

        can_retry = normalized_method in {"GET", "HEAD"}
        attempts = self.config.retries + 1 if can_retry else 1
        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=params,
                    data=data,
                    files=files,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "error", trace_context.trace_id)
                    error = TransportError(
                        code=ErrorCode.NETWORK_ERROR.value,
                        message=str(exc),
                        status_code=0,
                        details={"type": type(exc).__name__},
                        trace_id=trace_context.trace_id,
                    )
                    log_event(
                        LOGGER,
                        module,
                        operation,
                        "error",
                        level=logging.ERROR,
                        trace_id=trace_context.trace_id,
                        error=error,
                        method=normalized_method,
                        path=path,
                    )
                    raise error from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            LOGGER.debug("retrying %s %s (attempt %s/%s)", normalized_method, path, attempt + 2, attempts)
            self.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request failed without response")

        if self.after_response:
            self.after_response(response)
        trace_context.update_from_headers(response.headers)
        if response_hook:
            response_hook(response)
        if response.ok:
            self._record_operation(module, operation, started, "success", trace_context.trace_id)
            log_event(
                LOGGER,
                module,
                operation,
                "success",
                level=logging.DEBUG,
                trace_id=trace_context.trace_id,
                duration_ms=self.last_operation.duration_ms if self.last_operation else None,
                method=normalized_method,
                path=path,
                status=response.status_code,
            )
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                # Non-JSON 2xx bodies are treated as empty.
                return None

        payload: Any = None
        try:
            payload = response.json()
        except ValueError:
            payload = None
        self._record_operation(module, operation, started, "error", trace_context.trace_id)
        error = map_error(
            response.status_code,
            payload,
            trace_context.trace_id,
            text=response.text,
            headers=response.headers,
        )
        log_event(
            LOGGER,
            module,
            operation,
            "error",
            level=logging.WARNING,
            trace_id=error.trace_id,
            error=error,
            method=normalized_method,
            path=path,
            status=response.status_code,
        )
        raise error

    def _record_operation(self, module: str, operation: str, started: float, result: str, trace_id: str | None) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )
