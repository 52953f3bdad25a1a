"""Gateway contract and the optional accounts capability.

Every gateway implements Gateway. A gateway that owns named accounts also
implements SupportsAccounts, which is what the provider checks when it
resolves a gateway by account name. Gateways without accounts simply do not
implement it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from paygate.exceptions import GatewayAccountNotFoundError
from paygate.gateways.accounts import GatewayAccount, GatewayAccountProvider
from paygate.invoice.invoice import Invoice

logger = logging.getLogger(__name__)

A = TypeVar("A", bound=GatewayAccount)


class Gateway(ABC):
    """An integration with one external payment service provider.

    The gateway never sends anything itself here; it turns an invoice into
    the request object its bank expects.
    """

    gateway_name: ClassVar[str]

    @abstractmethod
    async def build_request(self, invoice: Invoice) -> Any:
        """Build the outbound request for invoice."""
        ...


class SupportsAccounts(ABC):
    """Optional capability: the gateway owns named accounts."""

    @property
    @abstractmethod
    def account_provider(self) -> GatewayAccountProvider:
        """Provider that loads this gateway's accounts."""
        ...

    async def has_account(self, account_name: str) -> bool:
        """True if an account with this name is configured."""
        accounts = await self.account_provider.load_accounts()
        if accounts is None:
            return False
        return accounts.get(account_name) is not None


class GatewayBase(Gateway, SupportsAccounts, Generic[A]):
    """Base class for gateways that keep their credentials in accounts."""

    def __init__(self, account_provider: GatewayAccountProvider) -> None:
        if account_provider is None:
            raise ValueError("account_provider is required")
        self._account_provider = account_provider

    @property
    def account_provider(self) -> GatewayAccountProvider:
        return self._account_provider

    async def get_account(self, invoice: Invoice) -> A:
        """Account named by the invoice, or the default account.

        Raises:
            GatewayAccountNotFoundError: If the named account does not exist
                or the gateway has no accounts at all.
        """
        accounts = await self._account_provider.load_accounts()
        if accounts is None:
            raise GatewayAccountNotFoundError(self.gateway_name, invoice.gateway_account_name)

        if invoice.gateway_account_name:
            account = accounts.get(invoice.gateway_account_name)
            if account is None:
                raise GatewayAccountNotFoundError(self.gateway_name, invoice.gateway_account_name)
            return account

        account = accounts.default
        if account is None:
            raise GatewayAccountNotFoundError(self.gateway_name)
        logger.debug("Using default account %s for gateway %s", account.name, self.gateway_name)
        return account
