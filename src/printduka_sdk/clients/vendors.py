from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import PagedResult
from ..models_catalog import VendorsPageSummary, summarize_vendors
from ..resources import VENDORS, ResourceDescriptor
from .base import Payload
from .resource_client import ResourceClient


@dataclass
class VendorsClient(ResourceClient):
    descriptor: ResourceDescriptor = VENDORS

    def invite(self, vendor_id: int | str, payload: Payload | None = None) -> Any:
        """Send the vendor portal invitation; the body is usually empty."""
        return self.perform_action(vendor_id, "invite", payload)

    @staticmethod
    def page_summary(page: PagedResult | None) -> VendorsPageSummary:
        return summarize_vendors(page.results if page is not None else [])
