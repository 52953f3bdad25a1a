"""Application composition: register gateways once at startup.

Pattern:
    setup = GatewaySetup()
    setup.add_saman(accounts=[SamanGatewayAccount(name="main", terminal_id="...")])
    setup.add_stub()
    provider = setup.build()

Rules:
    1. Gateways are registered during composition only.
    2. The registry is frozen by build(); it is read-only afterwards.
    3. Registration order is kept; it breaks ties in by-account resolution.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from paygate.config import Settings
from paygate.container import ServiceContainer
from paygate.exceptions import AmbiguousGatewayError
from paygate.gateways.accounts import InMemoryAccountProvider
from paygate.gateways.provider import AsyncGatewayProvider, GatewayProvider
from paygate.gateways.registry import GatewayDescriptor, GatewayRegistry
from paygate.gateways.saman.gateway import (
    SamanGateway,
    SamanGatewayAccount,
    SamanOptions,
    SettingsAccountProvider,
)
from paygate.gateways.stub import StubGateway

logger = logging.getLogger(__name__)


class GatewaySetup:
    """Collects gateway registrations and builds providers."""

    def __init__(self, container: ServiceContainer | None = None) -> None:
        self.registry = GatewayRegistry()
        self.container = container or ServiceContainer()

    def add_gateway(
        self,
        gateway_type: type[Any],
        factory: Callable[[], Any] | None = None,
        name: str | None = None,
    ) -> GatewaySetup:
        """Register a gateway type and how to instantiate it.

        Args:
            gateway_type: Gateway class.
            factory: Creates the instance. Defaults to calling gateway_type().
            name: Registration name. Defaults to gateway_type.gateway_name.
        """
        if name:
            descriptor = GatewayDescriptor(name=name, gateway_type=gateway_type)
        else:
            descriptor = GatewayDescriptor.for_gateway(gateway_type)
        self.registry.register(descriptor)
        self.container.register(gateway_type, factory or gateway_type)
        return self

    def add_saman(
        self,
        accounts: Iterable[SamanGatewayAccount] | None = None,
        options: SamanOptions | None = None,
        settings: Settings | None = None,
    ) -> GatewaySetup:
        """Register Saman.

        Accounts given here are kept in memory; without them accounts are
        read from settings (environment).
        """
        if accounts is not None:
            account_provider = InMemoryAccountProvider(list(accounts))
        else:
            account_provider = SettingsAccountProvider(settings)
        return self.add_gateway(
            SamanGateway,
            lambda: SamanGateway(account_provider, options=options),
        )

    def add_stub(self) -> GatewaySetup:
        return self.add_gateway(StubGateway)

    def _finish(self, strict: bool) -> None:
        for issue in self.registry.validate():
            logger.error("Gateway composition problem: %s", issue)
        if strict:
            for name, count in self.registry.duplicate_names().items():
                raise AmbiguousGatewayError(name, count)
        self.registry.freeze()

    def build(self, strict: bool = True) -> GatewayProvider:
        """Freeze the registry and return a provider for synchronous callers.

        Raises:
            AmbiguousGatewayError: If strict and a name is registered twice.
        """
        self._finish(strict)
        return GatewayProvider(self.registry, self.container)

    def build_async(self, strict: bool = True) -> AsyncGatewayProvider:
        """Freeze the registry and return a provider for async callers."""
        self._finish(strict)
        return AsyncGatewayProvider(self.registry, self.container)
