"""Pytest fixtures for paygate tests."""

from __future__ import annotations

import pytest

from paygate.composition import GatewaySetup
from paygate.gateways.saman.gateway import SamanGatewayAccount
from paygate.invoice.builder import InvoiceBuilder


@pytest.fixture
def saman_accounts() -> list[SamanGatewayAccount]:
    """Two Saman terminals; the first is the default."""
    return [
        SamanGatewayAccount(name="main", terminal_id="11223344", password="secret"),
        SamanGatewayAccount(name="backup", terminal_id="55667788"),
    ]


@pytest.fixture
def gateway_setup(saman_accounts) -> GatewaySetup:
    """Saman and Stub registered, in that order."""
    return GatewaySetup().add_saman(accounts=saman_accounts).add_stub()


@pytest.fixture
def builder() -> InvoiceBuilder:
    """Builder with the required non-gateway fields set."""
    return (
        InvoiceBuilder()
        .set_tracking_number(1001)
        .set_amount(250_000)
        .set_callback_url("https://shop.example/payments/verify")
    )
