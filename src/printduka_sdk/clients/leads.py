from __future__ import annotations

from dataclasses import dataclass

from ..models_sales import LeadConvertResponse, LeadQualifyResponse
from ..resources import LEADS, ResourceDescriptor
from .base import Payload
from .resource_client import ResourceClient, decode_model


@dataclass
class LeadsClient(ResourceClient):
    descriptor: ResourceDescriptor = LEADS

    def qualify(self, lead_id: int | str) -> LeadQualifyResponse:
        data = self.perform_action(lead_id, "qualify")
        return decode_model(data, LeadQualifyResponse, resource="leads", operation="qualify", allow_empty=True)

    def convert(self, lead_id: int | str, payload: Payload) -> LeadConvertResponse:
        data = self.perform_action(lead_id, "convert", payload)
        return decode_model(data, LeadConvertResponse, resource="leads", operation="convert", allow_empty=True)
