"""Saman options on a generic invoice.

Host code sets options through SamanInvoiceExtension, obtained from the
invoice builder:

    saman = builder.extension(SamanInvoiceExtension)
    saman.use_saman().set_cell_number("09120000000").add_settlement("IR...", 500)

SamanGateway reads them back with the get_saman_* functions. Getters return
None when a value is absent or has an unexpected type; they never raise.
"""

from __future__ import annotations

from typing import Any, Iterable, MutableMapping

from paygate.gateways.saman.models import SamanSettlementInfo
from paygate.invoice.builder import InvoiceBuilder
from paygate.invoice.invoice import Invoice
from paygate.invoice.properties import PropertyKey

GATEWAY_NAME = "Saman"

_NAMESPACE = "saman"

USE_GET_METHOD_KEY = PropertyKey(_NAMESPACE, "use_get_method_for_payment_page", bool)
CELL_NUMBER_KEY = PropertyKey(_NAMESPACE, "cell_number", str)
SETTLEMENT_INFO_KEY = PropertyKey(_NAMESPACE, "settlement_info", list)
RES_NUM_KEYS = {
    index: PropertyKey(_NAMESPACE, f"res_num{index}", str) for index in range(1, 5)
}


class SamanInvoiceExtension:
    """Sets Saman-specific options on an invoice builder. Setters chain."""

    def __init__(self, builder: InvoiceBuilder) -> None:
        if builder is None:
            raise ValueError("builder is required")
        self._builder = builder

    @property
    def builder(self) -> InvoiceBuilder:
        return self._builder

    def use_saman(self, use_get_method: bool | None = None) -> SamanInvoiceExtension:
        """Route the invoice to Saman.

        Args:
            use_get_method: Open the payment page with GET (True) or POST
                (False). None keeps the gateway default.
        """
        self._builder.set_gateway(GATEWAY_NAME)
        if use_get_method is not None:
            self._builder.add_or_update_property(USE_GET_METHOD_KEY, bool(use_get_method))
        return self

    def use_saman_with_get_method(self) -> SamanInvoiceExtension:
        return self.use_saman(use_get_method=True)

    def use_saman_with_post_method(self) -> SamanInvoiceExtension:
        return self.use_saman(use_get_method=False)

    def set_cell_number(self, cell_number: str | None) -> SamanInvoiceExtension:
        """Payer's mobile number. Blank values are ignored."""
        return self._set_if_not_blank(CELL_NUMBER_KEY, cell_number)

    def set_res_num1(self, value: str | None) -> SamanInvoiceExtension:
        return self._set_if_not_blank(RES_NUM_KEYS[1], value)

    def set_res_num2(self, value: str | None) -> SamanInvoiceExtension:
        return self._set_if_not_blank(RES_NUM_KEYS[2], value)

    def set_res_num3(self, value: str | None) -> SamanInvoiceExtension:
        return self._set_if_not_blank(RES_NUM_KEYS[3], value)

    def set_res_num4(self, value: str | None) -> SamanInvoiceExtension:
        """ResNum4, usually the main IBAN of the settlement."""
        return self._set_if_not_blank(RES_NUM_KEYS[4], value)

    def set_settlement_info(
        self, settlements: Iterable[SamanSettlementInfo]
    ) -> SamanInvoiceExtension:
        """Replace all settlement items."""
        if settlements is None:
            raise ValueError("settlements is required")
        self._builder.add_or_update_property(SETTLEMENT_INFO_KEY, list(settlements))
        return self

    def add_settlement(
        self,
        iban: str,
        amount: int,
        purchase_id: str | None = None,
    ) -> SamanInvoiceExtension:
        """Append one settlement item. Calls accumulate."""
        if not iban or not iban.strip():
            raise ValueError("iban is required")

        item = SamanSettlementInfo(iban=iban, amount=amount, purchase_id=purchase_id)

        def append(properties: MutableMapping[str, Any]) -> None:
            settlements = properties.get(SETTLEMENT_INFO_KEY.storage_key)
            if not isinstance(settlements, list):
                settlements = []
                properties[SETTLEMENT_INFO_KEY.storage_key] = settlements
            settlements.append(item)

        self._builder.change_properties(append)
        return self

    def _set_if_not_blank(
        self, key: PropertyKey[str], value: str | None
    ) -> SamanInvoiceExtension:
        if value is not None and value.strip():
            self._builder.add_or_update_property(key, value)
        return self


def saman_extension(builder: InvoiceBuilder) -> SamanInvoiceExtension:
    """Shortcut for builder.extension(SamanInvoiceExtension)."""
    return SamanInvoiceExtension(builder)


def get_saman_use_get_method(invoice: Invoice) -> bool | None:
    return invoice.properties.get_typed(USE_GET_METHOD_KEY)


def get_saman_cell_number(invoice: Invoice) -> str | None:
    return invoice.properties.get_typed(CELL_NUMBER_KEY)


def get_saman_res_num(invoice: Invoice, index: int) -> str | None:
    """ResNum1..ResNum4 by index."""
    key = RES_NUM_KEYS.get(index)
    if key is None:
        raise ValueError(f"ResNum index must be 1-4, got {index}")
    return invoice.properties.get_typed(key)


def get_saman_settlement_info(invoice: Invoice) -> list[SamanSettlementInfo] | None:
    """Stored settlement items; foreign entries in the list are ignored."""
    settlements = invoice.properties.get_typed(SETTLEMENT_INFO_KEY)
    if settlements is None:
        return None
    return [item for item in settlements if isinstance(item, SamanSettlementInfo)]
