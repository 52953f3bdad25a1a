"""Stub gateway for local development and testing.

Has no accounts and talks to nothing. It echoes the invoice back as its
request so host code can exercise the full flow without a bank.
"""

from __future__ import annotations

from collections import deque
from typing import Any

from paygate.gateways.base import Gateway
from paygate.invoice.invoice import Invoice

DEFAULT_HISTORY_SIZE = 100


class StubGateway(Gateway):
    """Development gateway that accepts every invoice.

    Only the most recent history_size requests are kept.
    """

    gateway_name = "Stub"

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE) -> None:
        if history_size < 1:
            raise ValueError("history_size must be positive")
        self._requests: deque[dict[str, Any]] = deque(maxlen=history_size)

    @property
    def requests(self) -> list[dict[str, Any]]:
        return list(self._requests)

    async def build_request(self, invoice: Invoice) -> dict[str, Any]:
        request = {
            "tracking_number": invoice.tracking_number,
            "amount": invoice.amount,
            "callback_url": invoice.callback_url,
            "properties": invoice.properties.snapshot(),
        }
        self._requests.append(request)
        return request
