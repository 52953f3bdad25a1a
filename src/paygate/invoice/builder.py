"""Invoice builder.

Host code configures an invoice here and gateway modules hang their own
options off it through extension adapters:

    builder = (
        InvoiceBuilder()
        .set_tracking_number(1001)
        .set_amount(250_000)
        .set_callback_url("https://shop.example/verify")
    )
    saman = builder.extension(SamanInvoiceExtension)
    saman.use_saman().set_res_num1("A1").add_settlement("IR...", 500)

    invoice = builder.build()
"""

from __future__ import annotations

import logging
from typing import Any, Callable, MutableMapping, TypeVar

from paygate.invoice.invoice import Invoice
from paygate.invoice.properties import PropertyBag, PropertyKey

logger = logging.getLogger(__name__)

E = TypeVar("E")


class InvoiceBuilder:
    """Builds an Invoice step by step. Every setter returns the builder."""

    def __init__(self) -> None:
        self._tracking_number: int | None = None
        self._amount: int | None = None
        self._callback_url: str | None = None
        self._gateway_name: str | None = None
        self._gateway_account_name: str | None = None
        self._properties = PropertyBag()

    @property
    def gateway_name(self) -> str | None:
        return self._gateway_name

    @property
    def properties(self) -> PropertyBag:
        return self._properties

    def set_tracking_number(self, tracking_number: int) -> InvoiceBuilder:
        if tracking_number is None or isinstance(tracking_number, bool):
            raise ValueError("tracking_number is required")
        if tracking_number <= 0:
            raise ValueError("tracking_number must be positive")
        self._tracking_number = int(tracking_number)
        return self

    def set_amount(self, amount: int) -> InvoiceBuilder:
        if amount is None or isinstance(amount, bool):
            raise ValueError("amount is required")
        if amount <= 0:
            raise ValueError("amount must be positive")
        self._amount = int(amount)
        return self

    def set_callback_url(self, callback_url: str) -> InvoiceBuilder:
        if not callback_url or not callback_url.strip():
            raise ValueError("callback_url is required")
        self._callback_url = callback_url.strip()
        return self

    def set_gateway(self, gateway_name: str) -> InvoiceBuilder:
        """Route the invoice to the gateway with this name."""
        if not gateway_name or not gateway_name.strip():
            raise ValueError("gateway_name is required")
        self._gateway_name = gateway_name.strip()
        return self

    def use_account(self, account_name: str) -> InvoiceBuilder:
        """Use a named account of the selected gateway instead of its default."""
        if not account_name or not account_name.strip():
            raise ValueError("account_name is required")
        self._gateway_account_name = account_name.strip()
        return self

    def add_or_update_property(self, key: str | PropertyKey[Any], value: Any) -> InvoiceBuilder:
        """Store value under key, replacing any previous value."""
        self._properties.set(key, value)
        return self

    def change_properties(
        self, mutator: Callable[[MutableMapping[str, Any]], None]
    ) -> InvoiceBuilder:
        """Run mutator over the whole property mapping as one atomic step."""
        self._properties.change(mutator)
        return self

    def extension(self, extension_type: Callable[[InvoiceBuilder], E]) -> E:
        """Create a gateway extension adapter bound to this builder."""
        return extension_type(self)

    def build(self) -> Invoice:
        """Validate and return the invoice.

        Raises:
            ValueError: If a required field has not been set.
        """
        missing = [
            name
            for name, value in (
                ("tracking_number", self._tracking_number),
                ("amount", self._amount),
                ("callback_url", self._callback_url),
                ("gateway_name", self._gateway_name),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"Invoice is missing required fields: {', '.join(missing)}")

        invoice = Invoice(
            tracking_number=self._tracking_number,
            amount=self._amount,
            callback_url=self._callback_url,
            gateway_name=self._gateway_name,
            gateway_account_name=self._gateway_account_name,
            properties=self._properties.copy(),
        )
        logger.debug(
            "Built invoice %s for gateway %s (%d properties)",
            invoice.tracking_number,
            invoice.gateway_name,
            len(invoice.properties),
        )
        return invoice
