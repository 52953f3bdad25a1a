"""Gateway contract, registry, accounts and the gateway provider."""

from paygate.gateways.accounts import (
    GatewayAccount,
    GatewayAccountCollection,
    GatewayAccountProvider,
    InMemoryAccountProvider,
)
from paygate.gateways.base import Gateway, GatewayBase, SupportsAccounts
from paygate.gateways.provider import AsyncGatewayProvider, GatewayProvider
from paygate.gateways.registry import (
    GatewayDescriptor,
    GatewayRegistry,
    compare_gateway_names,
    normalize_name,
)
from paygate.gateways.stub import StubGateway

__all__ = [
    "AsyncGatewayProvider",
    "Gateway",
    "GatewayAccount",
    "GatewayAccountCollection",
    "GatewayAccountProvider",
    "GatewayBase",
    "GatewayDescriptor",
    "GatewayProvider",
    "GatewayRegistry",
    "InMemoryAccountProvider",
    "StubGateway",
    "SupportsAccounts",
    "compare_gateway_names",
    "normalize_name",
]
