"""Gateway descriptors and the startup-time registry.

Every gateway module registers one GatewayDescriptor while the application
is composed. After composition the registry is frozen and only read.
Registration order is kept and is the only ordering the registry promises.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterator

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """Canonical form used whenever gateway or account names are compared."""
    return name.strip().casefold()


def compare_gateway_names(first: str | None, second: str | None) -> bool:
    """Case-insensitive gateway name comparison."""
    if first is None or second is None:
        return False
    return normalize_name(first) == normalize_name(second)


@dataclass(frozen=True)
class GatewayDescriptor:
    """Binds a gateway's canonical name to its implementation type."""

    name: str
    gateway_type: type[Any]

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("gateway name is required")
        if self.gateway_type is None:
            raise ValueError("gateway_type is required")

    @classmethod
    def for_gateway(cls, gateway_type: type[Any]) -> GatewayDescriptor:
        """Build a descriptor from the gateway class's declared gateway_name."""
        name = getattr(gateway_type, "gateway_name", None)
        if not name:
            raise ValueError(f"{gateway_type.__name__} does not declare a gateway_name")
        return cls(name=name, gateway_type=gateway_type)


class GatewayRegistry:
    """Ordered collection of gateway descriptors."""

    def __init__(self) -> None:
        self._descriptors: list[GatewayDescriptor] = []
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, descriptor: GatewayDescriptor) -> None:
        """Append a descriptor.

        Raises:
            RuntimeError: If the registry has been frozen.
            ValueError: If this exact descriptor is already registered.
        """
        if self._frozen:
            raise RuntimeError("Gateway registry is frozen; register gateways during composition")
        if descriptor in self._descriptors:
            raise ValueError(
                f"Gateway '{descriptor.name}' ({descriptor.gateway_type.__name__}) is already registered"
            )
        self._descriptors.append(descriptor)
        logger.debug("Registered gateway %s -> %s", descriptor.name, descriptor.gateway_type.__name__)

    def freeze(self) -> None:
        """Disallow further registration."""
        self._frozen = True

    def find(self, gateway_name: str) -> list[GatewayDescriptor]:
        """All descriptors whose name compares equal to gateway_name."""
        return [d for d in self._descriptors if compare_gateway_names(d.name, gateway_name)]

    def duplicate_names(self) -> dict[str, int]:
        """Names registered more than once, with their registration count."""
        counts = Counter(normalize_name(d.name) for d in self._descriptors)
        duplicates: dict[str, int] = {}
        for descriptor in self._descriptors:
            count = counts[normalize_name(descriptor.name)]
            if count > 1 and not any(compare_gateway_names(n, descriptor.name) for n in duplicates):
                duplicates[descriptor.name] = count
        return duplicates

    def validate(self) -> list[str]:
        """
        Report composition problems.

        Returns a list of issues. Empty list = every name resolves to
        exactly one gateway.
        """
        return [
            f"ERROR: Gateway name '{name}' is registered {count} times"
            for name, count in self.duplicate_names().items()
        ]

    def __iter__(self) -> Iterator[GatewayDescriptor]:
        return iter(tuple(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)
