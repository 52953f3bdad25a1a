"""Errors raised by gateway resolution and account lookup.

Taxonomy:
- Not found (recoverable): GatewayNotFoundError, AccountNotFoundError,
  GatewayAccountNotFoundError. The caller can show "payment method
  unavailable" and move on.
- Configuration (not recoverable at request time): AmbiguousGatewayError.
  Two gateways are registered under the same name.

Invalid arguments raise ValueError directly.
"""

from __future__ import annotations


class PaygateError(Exception):
    """Base class for all paygate errors."""


class GatewayNotFoundError(PaygateError, LookupError):
    """Raised when no registered gateway matches the requested name."""

    def __init__(self, gateway_name: str):
        self.gateway_name = gateway_name
        super().__init__(f"Gateway '{gateway_name}' is not registered or could not be resolved")


class AmbiguousGatewayError(PaygateError):
    """Raised when more than one gateway is registered under the same name.

    This is a composition error (duplicate registration), not a runtime
    condition a request can recover from.
    """

    def __init__(self, gateway_name: str, count: int | None = None):
        self.gateway_name = gateway_name
        self.count = count
        msg = f"More than one gateway with the name '{gateway_name}' found"
        if count is not None:
            msg += f" ({count} registrations)"
        super().__init__(msg)


class AccountNotFoundError(PaygateError, LookupError):
    """Raised when no registered gateway owns an account with the given name."""

    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(f"No gateway found with account name '{account_name}'")


class GatewayAccountNotFoundError(PaygateError, LookupError):
    """Raised by a gateway when the account an invoice asks for does not exist."""

    def __init__(self, gateway_name: str, account_name: str | None = None):
        self.gateway_name = gateway_name
        self.account_name = account_name
        if account_name:
            msg = f"Account '{account_name}' not found for gateway '{gateway_name}'"
        else:
            msg = f"Gateway '{gateway_name}' has no accounts configured"
        super().__init__(msg)
