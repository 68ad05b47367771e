from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from ..http_client import HttpClient

Payload = Mapping[str, Any] | BaseModel


def payload_body(payload: Payload | None) -> Any:
    if payload is None:
        return None
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    return dict(payload)


@dataclass
class BaseClient:
    http: HttpClient

    @property
    def module(self) -> str:
        return "api"

    def _request(self, method: str, path: str, *, operation: str = "request", **kwargs):
        return self.http.request(method, path, module=self.module, operation=operation, **kwargs)
