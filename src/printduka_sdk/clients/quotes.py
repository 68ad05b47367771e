from __future__ import annotations

from dataclasses import dataclass

from ..models_sales import QuoteActionResponse, QuoteHistoryResponse
from ..resources import QUOTES, ResourceDescriptor
from .resource_client import ResourceClient, decode_model


@dataclass
class QuotesClient(ResourceClient):
    descriptor: ResourceDescriptor = QUOTES

    def send_to_pt_for_review(self, quote_id: int | str) -> QuoteActionResponse:
        return self._action(quote_id, "send_to_pt_for_review")

    def send_to_customer(self, quote_id: int | str) -> QuoteActionResponse:
        return self._action(quote_id, "send_to_customer")

    def approve(self, quote_id: int | str) -> QuoteActionResponse:
        return self._action(quote_id, "approve")

    def clone(self, quote_id: int | str) -> QuoteActionResponse:
        return self._action(quote_id, "clone")

    def history(self, quote_id: int | str) -> QuoteHistoryResponse:
        data = self._request("GET", self.descriptor.action_path(quote_id, "history"), operation="history")
        return decode_model(data, QuoteHistoryResponse, resource="quotes", operation="history")

    def _action(self, quote_id: int | str, action: str) -> QuoteActionResponse:
        data = self.perform_action(quote_id, action)
        return decode_model(data, QuoteActionResponse, resource="quotes", operation=action, allow_empty=True)
