"""Saman (SEP) gateway with Tashim (settlement) support.

Builds the token request Saman expects. Sending it, and verifying the
callback, are left to the transport layer of the host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from paygate.config import Settings, get_settings
from paygate.gateways.accounts import GatewayAccount, GatewayAccountCollection, GatewayAccountProvider
from paygate.gateways.base import GatewayBase
from paygate.gateways.saman.extension import (
    GATEWAY_NAME,
    get_saman_cell_number,
    get_saman_res_num,
    get_saman_settlement_info,
    get_saman_use_get_method,
)
from paygate.gateways.saman.models import SamanTashimTokenRequest, to_settlement_iban_info
from paygate.invoice.invoice import Invoice

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamanGatewayAccount(GatewayAccount):
    """A Saman terminal."""

    terminal_id: str = ""
    password: str | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.terminal_id:
            raise ValueError(f"terminal_id is required for Saman account '{self.name}'")


@dataclass(frozen=True)
class SamanOptions:
    """
    Saman endpoints.

    Attributes:
        token_url: Token request endpoint.
        payment_page_url: Page the payer is sent to with the token.
        verify_url: Transaction verification endpoint.
    """

    token_url: str = "https://sep.shaparak.ir/onlinepg/onlinepg"
    payment_page_url: str = "https://sep.shaparak.ir/OnlinePG/SendToken"
    verify_url: str = "https://sep.shaparak.ir/verifyTxnRandomSessionkey/ipg/VerifyTransaction"

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("token_url", "payment_page_url", "verify_url"):
            if not getattr(self, name).startswith(("https://", "http://")):
                raise ValueError(f"{name} must be an http(s) URL")


class SettingsAccountProvider:
    """Loads Saman accounts from paygate settings (environment)."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    async def load_accounts(self) -> GatewayAccountCollection[SamanGatewayAccount]:
        settings = self._settings or get_settings()
        return GatewayAccountCollection(
            SamanGatewayAccount(
                name=account.name,
                terminal_id=account.terminal_id,
                password=account.password,
            )
            for account in settings.saman_accounts
        )


class SamanGateway(GatewayBase[SamanGatewayAccount]):
    """Saman Electronic Payment gateway."""

    gateway_name = GATEWAY_NAME

    def __init__(
        self,
        account_provider: GatewayAccountProvider,
        options: SamanOptions | None = None,
    ) -> None:
        super().__init__(account_provider)
        self.options = options or SamanOptions()

    async def build_request(self, invoice: Invoice) -> SamanTashimTokenRequest:
        """Token request for invoice, including its settlement items."""
        account = await self.get_account(invoice)

        request = SamanTashimTokenRequest(
            terminal_id=account.terminal_id,
            amount=invoice.amount,
            res_num=str(invoice.tracking_number),
            redirect_url=invoice.callback_url,
            cell_number=get_saman_cell_number(invoice),
            res_num1=get_saman_res_num(invoice, 1),
            res_num2=get_saman_res_num(invoice, 2),
            res_num3=get_saman_res_num(invoice, 3),
            res_num4=get_saman_res_num(invoice, 4),
            settlement_iban_info=to_settlement_iban_info(get_saman_settlement_info(invoice)),
        )
        logger.debug(
            "Built Saman token request for invoice %s using account %s (%d settlement items)",
            invoice.tracking_number,
            account.name,
            len(request.settlement_iban_info or ()),
        )
        return request

    def payment_page_method(self, invoice: Invoice) -> str:
        """HTTP method used to send the payer to the payment page."""
        return "GET" if get_saman_use_get_method(invoice) else "POST"
