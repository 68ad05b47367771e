from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..models_admin import SystemSettings
from .base import BaseClient
from .resource_client import decode_model

SETTINGS_PATH = "/api/v1/settings/"
BULK_UPDATE_PATH = "/api/v1/settings/bulk_update/"


@dataclass
class SettingsClient(BaseClient):
    @property
    def module(self) -> str:
        return "settings"

    def get(self) -> SystemSettings:
        data = self._request("GET", SETTINGS_PATH, operation="get")
        return decode_model(data, SystemSettings, resource="settings", operation="get")

    def bulk_update(self, updates: Mapping[str, Any]) -> SystemSettings:
        if not updates:
            raise ValueError("bulk_update needs at least one setting")
        data = self._request("PATCH", BULK_UPDATE_PATH, json_body=dict(updates), operation="bulk_update")
        return decode_model(data, SystemSettings, resource="settings", operation="bulk_update")
