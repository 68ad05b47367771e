from __future__ import annotations

from dataclasses import dataclass

from ..models_admin import SystemAlert
from ..resources import SYSTEM_ALERTS, ResourceDescriptor
from .resource_client import ResourceClient


@dataclass
class SystemAlertsClient(ResourceClient):
    descriptor: ResourceDescriptor = SYSTEM_ALERTS

    def dismiss(self, alert_id: int | str) -> SystemAlert:
        return self.update(alert_id, {"is_dismissed": True})
