"""Gateway provider: resolves a gateway by name or by account name.

Usage:
    provider = GatewayProvider(registry, container)

    gateway = provider.provide("Saman")
    gateway = provider.provide_by_account_name("main-terminal")

Resolution is read-only with respect to the registry and never caches;
instance lifetime belongs to the resolver.

By-account resolution loads the accounts of every candidate gateway
concurrently. Candidates are then inspected in registration order and the
first one owning the account wins, so the result does not depend on which
load finishes first. When two gateways own an account with the same name,
the gateway registered first is returned.
"""

from __future__ import annotations

import asyncio
import logging

from paygate.container import ServiceResolver
from paygate.exceptions import AccountNotFoundError, AmbiguousGatewayError, GatewayNotFoundError
from paygate.gateways.base import Gateway, SupportsAccounts
from paygate.gateways.registry import GatewayDescriptor, GatewayRegistry
from paygate.invoice.invoice import Invoice

logger = logging.getLogger(__name__)


class AsyncGatewayProvider:
    """Gateway provider for async callers."""

    def __init__(self, registry: GatewayRegistry, resolver: ServiceResolver) -> None:
        if registry is None or resolver is None:
            raise ValueError("registry and resolver are required")
        self._registry = registry
        self._resolver = resolver

    @property
    def registry(self) -> GatewayRegistry:
        return self._registry

    def provide(self, gateway_name: str) -> Gateway:
        """Resolve the single gateway registered under gateway_name.

        Raises:
            ValueError: If gateway_name is empty.
            GatewayNotFoundError: If no gateway matches, or the match cannot
                be resolved.
            AmbiguousGatewayError: If more than one gateway matches.
        """
        if not gateway_name or not gateway_name.strip():
            raise ValueError("gateway_name is required")

        matches = self._registry.find(gateway_name)
        if not matches:
            raise GatewayNotFoundError(gateway_name)
        if len(matches) > 1:
            raise AmbiguousGatewayError(gateway_name, len(matches))

        gateway = self._resolver.resolve(matches[0].gateway_type)
        if gateway is None:
            raise GatewayNotFoundError(gateway_name)

        logger.debug("Resolved gateway %s -> %s", gateway_name, type(gateway).__name__)
        return gateway

    def provide_for_invoice(self, invoice: Invoice) -> Gateway:
        """Resolve the gateway the invoice is routed to."""
        if invoice is None:
            raise ValueError("invoice is required")
        return self.provide(invoice.gateway_name)

    async def provide_by_account_name(self, account_name: str) -> Gateway:
        """Resolve the first registered gateway owning an account named account_name.

        Gateways that cannot be resolved, or that have no accounts concept,
        are skipped.

        Raises:
            ValueError: If account_name is empty.
            AccountNotFoundError: If no gateway owns such an account.
        """
        if not account_name or not account_name.strip():
            raise ValueError("account_name is required")

        candidates = self._account_candidates()
        tasks = [
            asyncio.create_task(gateway.has_account(account_name))
            for _, gateway in candidates
        ]
        try:
            for (descriptor, gateway), task in zip(candidates, tasks):
                try:
                    found = await task
                except Exception:
                    logger.exception("Loading accounts of gateway %s failed", descriptor.name)
                    raise
                if found:
                    logger.debug("Account %s belongs to gateway %s", account_name, descriptor.name)
                    return gateway
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        raise AccountNotFoundError(account_name)

    def _account_candidates(self) -> list[tuple[GatewayDescriptor, SupportsAccounts]]:
        """Resolvable gateways with accounts, in registration order."""
        candidates: list[tuple[GatewayDescriptor, SupportsAccounts]] = []
        for descriptor in self._registry:
            try:
                gateway = self._resolver.resolve(descriptor.gateway_type)
            except Exception:
                logger.warning("Gateway %s could not be instantiated; skipping", descriptor.name, exc_info=True)
                continue
            if gateway is None:
                logger.debug("Gateway %s is not resolvable; skipping", descriptor.name)
                continue
            if not isinstance(gateway, SupportsAccounts):
                logger.debug("Gateway %s has no accounts; skipping", descriptor.name)
                continue
            candidates.append((descriptor, gateway))
        return candidates


class GatewayProvider(AsyncGatewayProvider):
    """Gateway provider for synchronous callers.

    provide_by_account_name blocks until the account lookup completes, and
    must not be called from a thread that is running an event loop; use
    AsyncGatewayProvider there.
    """

    def provide_by_account_name(self, account_name: str) -> Gateway:  # type: ignore[override]
        return asyncio.run(super().provide_by_account_name(account_name))
