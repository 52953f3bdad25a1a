"""Saman settlement types and the token request sent to Saman (SEP).

SamanSettlementInfo is what host code works with. SamanSettlementIbanInfo
and SamanTashimTokenRequest mirror the JSON Saman expects; field aliases
carry the wire names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class SamanSettlementInfo:
    """One beneficiary share of a payment (Tashim).

    Attributes:
        iban: IBAN (Sheba) of the beneficiary account.
        amount: Amount settled to this IBAN, in Rials. Zero-amount items
            are dropped when the request is built.
        purchase_id: Optional purchase identifier.
    """

    iban: str
    amount: int
    purchase_id: str | None = None


class SamanSettlementIbanInfo(BaseModel):
    """Settlement item as serialized in the token request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    iban: str = Field(alias="IBAN")
    amount: int = Field(alias="Amount")
    purchase_id: str | None = Field(default=None, alias="PurchaseId")

    @classmethod
    def from_settlement(cls, settlement: SamanSettlementInfo) -> SamanSettlementIbanInfo:
        return cls(
            iban=settlement.iban,
            amount=settlement.amount,
            purchase_id=settlement.purchase_id,
        )


def to_settlement_iban_info(
    settlements: Iterable[SamanSettlementInfo] | None,
) -> list[SamanSettlementIbanInfo] | None:
    """Convert settlements for the wire, dropping zero amounts.

    Returns None when nothing is left, so the field is omitted.
    """
    if not settlements:
        return None
    items = [
        SamanSettlementIbanInfo.from_settlement(settlement)
        for settlement in settlements
        if settlement.amount != 0
    ]
    return items or None


class SamanTashimTokenRequest(BaseModel):
    """Token request with Tashim (settlement) support."""

    model_config = ConfigDict(populate_by_name=True)

    action: str = "token"
    terminal_id: str = Field(alias="TerminalId")
    amount: int = Field(alias="Amount")
    res_num: str = Field(alias="ResNum")
    redirect_url: str = Field(alias="RedirectUrl")
    cell_number: str | None = Field(default=None, alias="CellNumber")
    res_num1: str | None = Field(default=None, alias="ResNum1")
    res_num2: str | None = Field(default=None, alias="ResNum2")
    res_num3: str | None = Field(default=None, alias="ResNum3")
    res_num4: str | None = Field(default=None, alias="ResNum4")
    settlement_iban_info: list[SamanSettlementIbanInfo] | None = Field(
        default=None, alias="SettlementIbanInfo"
    )

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the wire names.

        SettlementIbanInfo is left out entirely when there are no items.
        """
        exclude = None if self.settlement_iban_info else {"settlement_iban_info"}
        return self.model_dump(by_alias=True, exclude=exclude)
