#!/usr/bin/env python3
"""CLI for the fully sponsored, gasless Relay bridge flow"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from eth_utils import is_address, to_wei

from gasless_bridge.config import Settings, settings
from gasless_bridge.core.errors import GaslessBridgeError
from gasless_bridge.core.flow import BridgeParams, FlowOutcome, GaslessBridgeFlow
from gasless_bridge.logging_config import setup_logging
from gasless_bridge.presentation import ConsoleReporter, render_step


logger = logging.getLogger("cli")


def _positive_decimal(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"Invalid amount: {value}")
    if not amount.is_finite() or amount <= 0:
        raise argparse.ArgumentTypeError("Amount must be positive")
    try:
        to_wei(amount, "ether")
    except ValueError:
        raise argparse.ArgumentTypeError(f"Amount out of range: {value}")
    return amount


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}")
    if number < 1:
        raise argparse.ArgumentTypeError("Must be at least 1")
    return number


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}")
    if not number > 0 or number == float("inf"):
        raise argparse.ArgumentTypeError("Must be greater than 0")
    return number


def _address(value: str) -> str:
    if not is_address(value):
        raise argparse.ArgumentTypeError(f"Invalid address: {value}")
    return value


def _apply_overrides(cfg: Settings, args: argparse.Namespace) -> Settings:
    updates = {}
    for field in ("poll_interval_seconds", "poll_max_attempts", "origin_chain_id", "destination_chain_id", "bridge_amount_eth"):
        value = getattr(args, field, None)
        if value is not None:
            updates[field] = value
    if getattr(args, "dry_run", False):
        updates["dry_run"] = True
    return cfg.model_copy(update=updates) if updates else cfg


async def cli_bridge(cfg: Settings) -> FlowOutcome:
    """Run the full flow: delegation, quote, authorization, execute, poll."""
    flow = GaslessBridgeFlow.from_settings(cfg, observer=ConsoleReporter())
    result = await flow.run(BridgeParams.from_settings(cfg))
    return result.outcome


async def cli_check_delegation(cfg: Settings, address: Optional[str], chain_id: int) -> None:
    reporter = ConsoleReporter()
    flow = GaslessBridgeFlow.from_settings(cfg, observer=reporter)
    print(render_step(0, "Check EIP-7702 delegation"))
    await flow.check_delegation(address or flow.user_address, chain_id)


async def cli_status(cfg: Settings, request_id: str) -> None:
    flow = GaslessBridgeFlow.from_settings(cfg, observer=ConsoleReporter())
    print(render_step(4, "Monitor relay execution"))
    print(f"  Request ID: {request_id}")
    await flow.poll(request_id)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Relay full-subsidy gasless bridge CLI")
    parser.add_argument("--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)")
    subparsers = parser.add_subparsers(dest="command")

    bridge_parser = subparsers.add_parser("bridge", help="Bridge ETH with every fee sponsored")
    bridge_parser.add_argument("--amount", dest="bridge_amount_eth", type=_positive_decimal, help="Amount of ETH to bridge")
    bridge_parser.add_argument("--origin-chain", dest="origin_chain_id", type=int, help="Origin chain id")
    bridge_parser.add_argument("--destination-chain", dest="destination_chain_id", type=int, help="Destination chain id")
    bridge_parser.add_argument("--dry-run", action="store_true", help="Quote and build the request without submitting")
    bridge_parser.add_argument("--max-attempts", dest="poll_max_attempts", type=_positive_int, help="Status polls before giving up")
    bridge_parser.add_argument("--poll-interval", dest="poll_interval_seconds", type=_positive_float, help="Seconds between status polls")

    delegation_parser = subparsers.add_parser("check-delegation", help="Check an EOA's EIP-7702 delegation")
    delegation_parser.add_argument("address", nargs="?", type=_address, help="EOA address (default: configured user)")
    delegation_parser.add_argument("--chain", dest="origin_chain_id", type=int, help="Chain id (default: origin chain)")

    status_parser = subparsers.add_parser("status", help="Poll a submitted request until it is terminal")
    status_parser.add_argument("request_id", help="Relay request id")
    status_parser.add_argument("--max-attempts", dest="poll_max_attempts", type=_positive_int, help="Status polls before giving up")
    status_parser.add_argument("--poll-interval", dest="poll_interval_seconds", type=_positive_float, help="Seconds between status polls")

    return parser


async def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.log_level)
    cfg = _apply_overrides(settings, args)

    try:
        if args.command == "bridge":
            await cli_bridge(cfg)
        elif args.command == "check-delegation":
            await cli_check_delegation(cfg, args.address, cfg.origin_chain_id)
        elif args.command == "status":
            await cli_status(cfg, args.request_id)
        else:
            print(f"❌ Unknown command: {args.command}")
            parser.print_help()
            return 2
    except GaslessBridgeError as exc:
        logger.error("Flow aborted: %s (%s)", exc.message, exc.category.value)
        print(f"\n❌ Error: {exc.message}", file=sys.stderr)
        return 1

    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
