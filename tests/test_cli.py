"""Tests for the command line interface."""

import argparse
import json

import pytest

from paygate.cli import PaygateCli, parse_settlement
from paygate.config import SamanAccountSettings, Settings, get_settings


@pytest.fixture
def cli() -> PaygateCli:
    settings = Settings(
        log_level="WARNING",
        saman_accounts=(
            SamanAccountSettings(name="main", terminal_id="111"),
            SamanAccountSettings(name="backup", terminal_id="222"),
        ),
    )
    return PaygateCli(settings=settings)


class TestPaygateCli:
    """Test CLI commands."""

    def test_no_command(self, cli):
        assert cli.run([]) == 1

    def test_bad_environment_reported(self, monkeypatch, capsys):
        """Settings errors become an error message and exit code 1."""
        monkeypatch.setenv("PAYGATE_SAMAN_ACCOUNTS", "orphan")
        monkeypatch.delenv("PAYGATE_SAMAN_ORPHAN_TERMINAL_ID", raising=False)
        get_settings.cache_clear()
        try:
            assert PaygateCli().run(["gateways"]) == 1
        finally:
            get_settings.cache_clear()

        assert capsys.readouterr().err.startswith("ERROR:")

    def test_bad_log_level_reported(self, monkeypatch, capsys):
        monkeypatch.setenv("PAYGATE_LOG_LEVEL", "loud")
        monkeypatch.delenv("PAYGATE_SAMAN_ACCOUNTS", raising=False)
        get_settings.cache_clear()
        try:
            assert PaygateCli().run(["resolve", "--name", "stub"]) == 1
        finally:
            get_settings.cache_clear()

        assert "Unknown log level" in capsys.readouterr().err

    def test_gateways(self, cli, capsys):
        assert cli.run(["gateways"]) == 0

        lines = capsys.readouterr().out.strip().splitlines()
        assert [line.split("\t")[0] for line in lines] == ["Saman", "Stub"]

    def test_resolve_by_name(self, cli, capsys):
        assert cli.run(["resolve", "--name", "stub"]) == 0
        assert capsys.readouterr().out.strip() == "Stub"

    def test_resolve_by_account(self, cli, capsys):
        assert cli.run(["resolve", "--account", "backup"]) == 0
        assert capsys.readouterr().out.strip() == "Saman"

    def test_resolve_unknown(self, cli, capsys):
        assert cli.run(["resolve", "--name", "mellat"]) == 1
        assert "mellat" in capsys.readouterr().err

    def test_saman_request(self, cli, capsys):
        code = cli.run(
            [
                "saman-request",
                "--amount", "10000",
                "--tracking-number", "7",
                "--callback-url", "https://shop.example/cb",
                "--account", "backup",
                "--res-num1", "A1",
                "--settlement", "IR01:6000:p1",
                "--settlement", "IR02:0",
            ]
        )

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["TerminalId"] == "222"
        assert payload["ResNum"] == "7"
        assert payload["ResNum1"] == "A1"
        assert payload["SettlementIbanInfo"] == [
            {"IBAN": "IR01", "Amount": 6000, "PurchaseId": "p1"}
        ]


class TestParseSettlement:
    def test_without_purchase_id(self):
        settlement = parse_settlement("IR01:500")

        assert settlement.iban == "IR01"
        assert settlement.amount == 500
        assert settlement.purchase_id is None

    @pytest.mark.parametrize("value", ["IR01", ":500", "IR01:abc", "a:1:2:3"])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_settlement(value)
