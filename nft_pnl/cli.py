# nft_pnl/cli.py
"""Command-line entry point.

Usage:
    nft-pnl <trade_events_file> <floor_price_events_file> <output_file>

Reads both event files, computes the PnL snapshot sequence and writes it to
the output file. Any read, decode or write failure aborts the run with exit
status 1 and no output file is produced.

There are no options. Paths starting with "-" must follow a "--" separator.
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError

from config.settings import Settings
from config.validators import emission_order, validate_settings
from nft_pnl.exceptions import ConfigError, PnlError
from nft_pnl.io import read_floor_price_events, read_trade_events, write_snapshots
from nft_pnl.ledger import PnLLedger
from nft_pnl.scheduler import process_pnl
from nft_pnl.utils.logging import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nft-pnl",
        add_help=False,
        description="Compute per-wallet realized/unrealized PnL from NFT trades and floor prices",
    )
    parser.add_argument("trade_events_file", help="JSON array of trade events")
    parser.add_argument("floor_price_events_file", help="JSON array of floor price events")
    parser.add_argument("output_file", help="Destination for the PnL snapshot JSON array")
    return parser


def load_settings() -> Settings:
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"invalid settings: {exc}") from exc
    validate_settings(settings)
    return settings


def run(args: argparse.Namespace, settings: Settings) -> int:
    trades = read_trade_events(args.trade_events_file)
    floors = read_floor_price_events(args.floor_price_events_file)
    logger.info("pnl_inputs_loaded", trades=len(trades), floor_prices=len(floors))

    ledger = PnLLedger(emission_order=emission_order(settings))
    snapshots = process_pnl(trades, floors, ledger=ledger)

    write_snapshots(args.output_file, snapshots, indent=settings.OUTPUT_INDENT)
    logger.info(
        "pnl_output_written",
        path=args.output_file,
        snapshots=len(snapshots),
        wallets=len(ledger.wallet_totals()),
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    # Exits with status 2 and usage on stderr for a wrong argument count
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as exc:
        configure_logging()
        logger.error("pnl_config_invalid", error=str(exc))
        return 1

    configure_logging(settings.LOG_LEVEL)
    try:
        return run(args, settings)
    except PnlError as exc:
        logger.error("pnl_run_failed", error=str(exc), error_type=type(exc).__name__)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
