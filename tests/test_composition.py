"""Tests for composition, the service container and settings."""

import pytest

from paygate.composition import GatewaySetup
from paygate.config import SamanAccountSettings, Settings
from paygate.container import ServiceContainer
from paygate.exceptions import AmbiguousGatewayError
from paygate.gateways.provider import AsyncGatewayProvider, GatewayProvider
from paygate.gateways.saman import SamanGateway
from paygate.gateways.stub import StubGateway


class ImpostorSaman(StubGateway):
    gateway_name = "saman"


class TestServiceContainer:
    """Test the default resolver."""

    def test_unknown_type_resolves_none(self):
        assert ServiceContainer().resolve(StubGateway) is None

    def test_singleton(self):
        container = ServiceContainer()
        container.register(StubGateway, StubGateway)

        assert container.resolve(StubGateway) is container.resolve(StubGateway)

    def test_none_not_cached(self):
        results = iter([None, "ready"])
        container = ServiceContainer()
        container.register(str, lambda: next(results))

        assert container.resolve(str) is None
        assert container.resolve(str) == "ready"

    def test_register_instance(self):
        container = ServiceContainer()
        stub = StubGateway()
        container.register_instance(StubGateway, stub)

        assert container.is_registered(StubGateway)
        assert container.resolve(StubGateway) is stub

    def test_factory_resolves_dependencies(self):
        """A factory may resolve other services from the same container."""
        container = ServiceContainer()
        container.register(StubGateway, StubGateway)
        container.register(list, lambda: [container.resolve(StubGateway)])

        assert container.resolve(list) == [container.resolve(StubGateway)]


class TestGatewaySetup:
    """Test startup composition."""

    def test_build_registers_in_order(self, gateway_setup):
        provider = gateway_setup.build()

        assert isinstance(provider, GatewayProvider)
        assert [d.name for d in provider.registry] == ["Saman", "Stub"]
        assert provider.registry.frozen is True

    def test_build_async(self, gateway_setup):
        provider = gateway_setup.build_async()

        assert type(provider) is AsyncGatewayProvider
        assert isinstance(provider.provide("stub"), StubGateway)

    def test_duplicate_name_fails_at_startup(self, gateway_setup):
        gateway_setup.add_gateway(ImpostorSaman)

        with pytest.raises(AmbiguousGatewayError):
            gateway_setup.build()

    def test_non_strict_build_defers_to_resolution(self, gateway_setup):
        gateway_setup.add_gateway(ImpostorSaman)
        provider = gateway_setup.build(strict=False)

        with pytest.raises(AmbiguousGatewayError):
            provider.provide("Saman")

    def test_custom_registration_name(self):
        provider = GatewaySetup().add_gateway(StubGateway, name="Sandbox").build()

        assert isinstance(provider.provide("sandbox"), StubGateway)

    def test_saman_from_settings(self):
        settings = Settings(
            log_level="INFO",
            saman_accounts=(SamanAccountSettings(name="env-main", terminal_id="999"),),
        )
        provider = GatewaySetup().add_saman(settings=settings).build()

        gateway = provider.provide_by_account_name("env-main")

        assert isinstance(gateway, SamanGateway)


class TestSettings:
    """Test environment configuration."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PAYGATE_LOG_LEVEL", "debug")
        monkeypatch.setenv("PAYGATE_SAMAN_ACCOUNTS", "main, shop-2")
        monkeypatch.setenv("PAYGATE_SAMAN_MAIN_TERMINAL_ID", "111")
        monkeypatch.setenv("PAYGATE_SAMAN_MAIN_PASSWORD", "pw")
        monkeypatch.setenv("PAYGATE_SAMAN_SHOP_2_TERMINAL_ID", "222")

        settings = Settings.from_env()

        assert settings.log_level == "DEBUG"
        assert settings.saman_accounts == (
            SamanAccountSettings(name="main", terminal_id="111", password="pw"),
            SamanAccountSettings(name="shop-2", terminal_id="222"),
        )

    def test_no_accounts(self, monkeypatch):
        monkeypatch.delenv("PAYGATE_SAMAN_ACCOUNTS", raising=False)

        assert Settings.from_env().saman_accounts == ()

    def test_missing_terminal_id(self, monkeypatch):
        monkeypatch.setenv("PAYGATE_SAMAN_ACCOUNTS", "orphan")
        monkeypatch.delenv("PAYGATE_SAMAN_ORPHAN_TERMINAL_ID", raising=False)

        with pytest.raises(ValueError):
            Settings.from_env()

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("PAYGATE_LOG_LEVEL", "loud")
        monkeypatch.delenv("PAYGATE_SAMAN_ACCOUNTS", raising=False)

        with pytest.raises(ValueError, match="LOUD"):
            Settings.from_env()
