"""Command-line interface for liquidity provisioning."""
from __future__ import annotations

import argparse
import asyncio
import sys

from .config import load_config
from .errors import ProvisionError
from .logging_setup import configure_logging
from .services import Provisioner, SessionState, format_asset, format_simulation
from .services.session import ProvisioningSession
from .wallets import TonConnectExporter


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="ston-provision",
        description="Simulate and provide liquidity to STON.fi pools",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("assets", help="List assets matching the liquidity filter")

    for name, help_text in (
        ("simulate", "Simulate a liquidity provision"),
        ("provide", "Simulate, then export the provide-liquidity transaction"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("token_a", help="Token A contract address or symbol")
        cmd.add_argument("token_b", help="Token B contract address or symbol")
        cmd.add_argument("amount_a", help="Amount of token A, e.g. 1.5")
        cmd.add_argument("amount_b", help="Amount of token B, e.g. 3.2")
        cmd.add_argument(
            "--wallet",
            default=None,
            help="Wallet address (overrides config)",
        )
        if name == "provide":
            cmd.add_argument(
                "--output",
                default=None,
                help="Write the wallet request JSON here instead of stdout",
            )

    return parser


def _print_simulation(session: ProvisioningSession) -> None:
    if session.result is None:
        return
    print("Simulation Result")
    for label, value in format_simulation(
        session.result, session.asset_a, session.asset_b
    ):
        print(f"  {label}: {value}")


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command; returns the process exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    provisioner = Provisioner(config)

    if args.command == "assets":
        for asset in await provisioner.load_assets():
            print(format_asset(asset))
        return 0

    session = await provisioner.new_session(
        args.token_a, args.token_b, args.amount_a, args.amount_b
    )
    await provisioner.simulate(session, args.wallet)
    if session.state is not SessionState.READY:
        print(f"Error: {session.error}", file=sys.stderr)
        return 1
    _print_simulation(session)

    if args.command == "provide":
        await provisioner.provide(
            session, TonConnectExporter(args.output), args.wallet
        )
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(asyncio.run(_run(args)))
    except ProvisionError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
