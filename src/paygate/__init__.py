"""paygate: route invoices to pluggable bank gateways.

This package contains:
- Invoice builder and the typed property bag gateway modules extend
- Gateway registry, accounts and the gateway provider
- The Saman (SEP) gateway module with Tashim (settlement) support
- A stub gateway for development
"""

from paygate.composition import GatewaySetup
from paygate.container import ServiceContainer, ServiceResolver
from paygate.exceptions import (
    AccountNotFoundError,
    AmbiguousGatewayError,
    GatewayAccountNotFoundError,
    GatewayNotFoundError,
    PaygateError,
)
from paygate.gateways import (
    AsyncGatewayProvider,
    Gateway,
    GatewayAccount,
    GatewayAccountCollection,
    GatewayAccountProvider,
    GatewayBase,
    GatewayDescriptor,
    GatewayProvider,
    GatewayRegistry,
    InMemoryAccountProvider,
    StubGateway,
    SupportsAccounts,
    compare_gateway_names,
)
from paygate.invoice import Invoice, InvoiceBuilder, PropertyBag, PropertyKey

__version__ = "0.1.0"

__all__ = [
    # Composition
    "GatewaySetup",
    "ServiceContainer",
    "ServiceResolver",
    # Errors
    "PaygateError",
    "GatewayNotFoundError",
    "AmbiguousGatewayError",
    "AccountNotFoundError",
    "GatewayAccountNotFoundError",
    # Gateways
    "Gateway",
    "GatewayBase",
    "SupportsAccounts",
    "GatewayAccount",
    "GatewayAccountCollection",
    "GatewayAccountProvider",
    "InMemoryAccountProvider",
    "GatewayDescriptor",
    "GatewayRegistry",
    "GatewayProvider",
    "AsyncGatewayProvider",
    "StubGateway",
    "compare_gateway_names",
    # Invoice
    "Invoice",
    "InvoiceBuilder",
    "PropertyBag",
    "PropertyKey",
]
