"""Tests for gateway descriptors, the registry and accounts."""

import pytest

from paygate.gateways.accounts import (
    GatewayAccount,
    GatewayAccountCollection,
    InMemoryAccountProvider,
)
from paygate.gateways.registry import (
    GatewayDescriptor,
    GatewayRegistry,
    compare_gateway_names,
)


class Alpha:
    gateway_name = "Alpha"


class OtherAlpha:
    gateway_name = "ALPHA"


class Nameless:
    pass


class TestCompareGatewayNames:
    """Test name comparison."""

    def test_case_insensitive(self):
        assert compare_gateway_names("Saman", "saman") is True
        assert compare_gateway_names("SAMAN", " Saman ") is True

    def test_different_names(self):
        assert compare_gateway_names("Saman", "Mellat") is False

    def test_none_never_matches(self):
        assert compare_gateway_names(None, "Saman") is False
        assert compare_gateway_names(None, None) is False


class TestGatewayDescriptor:
    """Test descriptor creation."""

    def test_for_gateway_uses_declared_name(self):
        descriptor = GatewayDescriptor.for_gateway(Alpha)

        assert descriptor.name == "Alpha"
        assert descriptor.gateway_type is Alpha

    def test_for_gateway_requires_name(self):
        with pytest.raises(ValueError):
            GatewayDescriptor.for_gateway(Nameless)

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            GatewayDescriptor(name=" ", gateway_type=Alpha)


class TestGatewayRegistry:
    """Test registration, ordering and validation."""

    def test_keeps_registration_order(self):
        registry = GatewayRegistry()
        registry.register(GatewayDescriptor.for_gateway(OtherAlpha))
        registry.register(GatewayDescriptor.for_gateway(Alpha))

        assert [d.gateway_type for d in registry] == [OtherAlpha, Alpha]

    def test_find_is_case_insensitive(self):
        registry = GatewayRegistry()
        registry.register(GatewayDescriptor.for_gateway(Alpha))

        assert len(registry.find("alpha")) == 1
        assert registry.find("beta") == []

    def test_exact_duplicate_rejected(self):
        registry = GatewayRegistry()
        registry.register(GatewayDescriptor.for_gateway(Alpha))

        with pytest.raises(ValueError):
            registry.register(GatewayDescriptor.for_gateway(Alpha))

    def test_frozen_registry_rejects_registration(self):
        registry = GatewayRegistry()
        registry.freeze()

        with pytest.raises(RuntimeError):
            registry.register(GatewayDescriptor.for_gateway(Alpha))

    def test_validate_reports_name_collisions(self):
        registry = GatewayRegistry()
        registry.register(GatewayDescriptor.for_gateway(Alpha))
        registry.register(GatewayDescriptor.for_gateway(OtherAlpha))

        assert registry.duplicate_names() == {"Alpha": 2}
        issues = registry.validate()
        assert len(issues) == 1
        assert "Alpha" in issues[0]

    def test_validate_clean_registry(self):
        registry = GatewayRegistry()
        registry.register(GatewayDescriptor.for_gateway(Alpha))

        assert registry.validate() == []


class TestGatewayAccountCollection:
    """Test account lookup."""

    def test_get_by_name_case_insensitive(self):
        accounts = GatewayAccountCollection([GatewayAccount("Main"), GatewayAccount("Backup")])

        assert accounts.get("main").name == "Main"
        assert accounts.get("missing") is None
        assert accounts.get("") is None

    def test_default_is_first(self):
        accounts = GatewayAccountCollection([GatewayAccount("first"), GatewayAccount("second")])

        assert accounts.default.name == "first"
        assert GatewayAccountCollection().default is None

    def test_duplicate_account_rejected(self):
        with pytest.raises(ValueError):
            GatewayAccountCollection([GatewayAccount("main"), GatewayAccount("MAIN")])

    def test_account_requires_name(self):
        with pytest.raises(ValueError):
            GatewayAccount("")

    @pytest.mark.asyncio
    async def test_in_memory_provider(self):
        provider = InMemoryAccountProvider([GatewayAccount("main")])

        accounts = await provider.load_accounts()

        assert len(accounts) == 1
        assert [a.name for a in accounts] == ["main"]
