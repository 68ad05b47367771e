from __future__ import annotations

from dataclasses import dataclass

from ..models import PagedResult
from ..resources import AUDIT_LOGS, ResourceDescriptor
from .resource_client import ResourceClient


@dataclass
class AuditLogsClient(ResourceClient):
    descriptor: ResourceDescriptor = AUDIT_LOGS

    def for_user(self, user_id: int | str, *, page: int = 1, page_size: int = 20) -> PagedResult | None:
        """Activity trail shown on a user's detail page."""
        return self.list(page=page, page_size=page_size, user=str(user_id))
