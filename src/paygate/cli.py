"""paygate Command Line Interface.

Provides operational tools for:
- Listing registered gateways
- Resolving a gateway by name or account name
- Previewing the Saman token request for an invoice

Usage:
    python -m paygate.cli gateways
    python -m paygate.cli resolve --name saman
    python -m paygate.cli resolve --account main
    python -m paygate.cli saman-request --amount 10000 --tracking-number 1 \\
        --callback-url https://shop.example/verify --settlement IR...:5000

Saman accounts are read from the environment (see paygate.config).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Callable

from paygate.composition import GatewaySetup
from paygate.config import Settings, get_settings
from paygate.exceptions import PaygateError
from paygate.gateways.provider import GatewayProvider
from paygate.gateways.saman.extension import SamanInvoiceExtension
from paygate.gateways.saman.models import SamanSettlementInfo
from paygate.invoice.builder import InvoiceBuilder


def parse_settlement(s: str) -> SamanSettlementInfo:
    """Parse IBAN:AMOUNT[:PURCHASE_ID]."""
    parts = s.split(":")
    if len(parts) not in (2, 3) or not parts[0]:
        raise argparse.ArgumentTypeError(f"expected IBAN:AMOUNT[:PURCHASE_ID], got '{s}'")
    try:
        amount = int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"settlement amount must be an integer, got '{parts[1]}'")
    return SamanSettlementInfo(
        iban=parts[0],
        amount=amount,
        purchase_id=parts[2] if len(parts) == 3 and parts[2] else None,
    )


class PaygateCli:
    """paygate Command Line Interface."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m paygate.cli",
            description="Payment gateway tools",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # gateways command
        subparsers.add_parser(
            "gateways",
            help="List registered gateways in registration order",
        )

        # resolve command
        resolve = subparsers.add_parser(
            "resolve",
            help="Resolve a gateway by name or account name",
        )
        target = resolve.add_mutually_exclusive_group(required=True)
        target.add_argument("--name", type=str, help="Gateway name")
        target.add_argument("--account", type=str, help="Account name")

        # saman-request command
        saman = subparsers.add_parser(
            "saman-request",
            help="Print the Saman token request for an invoice",
        )
        saman.add_argument("--amount", type=int, required=True, help="Amount in Rials")
        saman.add_argument("--tracking-number", type=int, required=True)
        saman.add_argument("--callback-url", type=str, required=True)
        saman.add_argument("--account", type=str, help="Saman account name (default: first)")
        saman.add_argument("--cell-number", type=str)
        for index in range(1, 5):
            saman.add_argument(f"--res-num{index}", type=str)
        saman.add_argument(
            "--settlement",
            type=parse_settlement,
            action="append",
            default=[],
            help="Settlement item IBAN:AMOUNT[:PURCHASE_ID]; repeatable",
        )

        return parser

    def _settings(self) -> Settings:
        return self.settings or get_settings()

    def _provider(self) -> GatewayProvider:
        return GatewaySetup().add_saman(settings=self._settings()).add_stub().build()

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        handlers: dict[str, Callable[..., int]] = {
            "gateways": self._cmd_gateways,
            "resolve": self._cmd_resolve,
            "saman-request": self._cmd_saman_request,
        }

        handler = handlers.get(parsed.command)
        if handler:
            try:
                logging.basicConfig(level=self._settings().log_level)
                return handler(parsed)
            except (PaygateError, ValueError) as e:
                print(f"ERROR: {e}", file=sys.stderr)
                return 1

        print(f"Unknown command: {parsed.command}", file=sys.stderr)
        return 1

    def _cmd_gateways(self, args: argparse.Namespace) -> int:
        """List registered gateways."""
        provider = self._provider()
        for descriptor in provider.registry:
            print(f"{descriptor.name}\t{descriptor.gateway_type.__module__}.{descriptor.gateway_type.__name__}")
        return 0

    def _cmd_resolve(self, args: argparse.Namespace) -> int:
        """Resolve a gateway."""
        provider = self._provider()
        if args.name:
            gateway = provider.provide(args.name)
        else:
            gateway = provider.provide_by_account_name(args.account)
        print(gateway.gateway_name)
        return 0

    def _cmd_saman_request(self, args: argparse.Namespace) -> int:
        """Print the Saman token request."""
        builder = (
            InvoiceBuilder()
            .set_amount(args.amount)
            .set_tracking_number(args.tracking_number)
            .set_callback_url(args.callback_url)
        )
        if args.account:
            builder.use_account(args.account)

        saman = builder.extension(SamanInvoiceExtension)
        saman.use_saman().set_cell_number(args.cell_number)
        saman.set_res_num1(args.res_num1).set_res_num2(args.res_num2)
        saman.set_res_num3(args.res_num3).set_res_num4(args.res_num4)
        for settlement in args.settlement:
            saman.add_settlement(settlement.iban, settlement.amount, settlement.purchase_id)

        invoice = builder.build()
        gateway = self._provider().provide_for_invoice(invoice)
        request = asyncio.run(gateway.build_request(invoice))

        print(json.dumps(request.to_payload(), indent=2, ensure_ascii=False))
        return 0


def main() -> int:
    """CLI entry point."""
    cli = PaygateCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
