"""Invoice: a payment request ready to be handed to a gateway."""

from __future__ import annotations

from dataclasses import dataclass, field

from paygate.invoice.properties import PropertyBag


@dataclass(frozen=True)
class Invoice:
    """A built invoice.

    Required fields are immutable once built. The property bag carries
    gateway-specific data and is read by the target gateway when it
    constructs its outbound request.

    Attributes:
        tracking_number: Host-side reference, sent to the gateway as the
            reservation number.
        amount: Amount in integer currency units (Rials).
        callback_url: Where the gateway redirects the payer afterwards.
        gateway_name: Name of the gateway the invoice is routed to.
        gateway_account_name: Optional named account of that gateway.
            None means the gateway's default account.
        properties: Gateway-specific configuration.
    """

    tracking_number: int
    amount: int
    callback_url: str
    gateway_name: str
    gateway_account_name: str | None = None
    properties: PropertyBag = field(default_factory=PropertyBag)
