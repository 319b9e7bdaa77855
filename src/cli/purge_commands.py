"""Purge command wiring for Sweep CLI."""

from __future__ import annotations

import argparse
from typing import Any

from cleanup.sweep_client import SweepClient
from core.constants import DEFAULT_REPORT_TYPE
from core.timestamps import date_range_ms
from core.types import PurgeResult


def _positive_int(raw_value: str) -> int:
    """Parse a strictly positive integer flag value."""
    try:
        value = int(raw_value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{raw_value}'") from error
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def add_purge_contacts_command(subparsers: Any) -> None:
    """Register purge-contacts subcommand."""
    parser = subparsers.add_parser(
        "purge-contacts",
        help="Delete persons under a place after stripping facility references",
    )
    parser.add_argument("--place", required=True, help="Place id whose contacts are purged")
    parser.add_argument("--batch-size", type=_positive_int, help="Maximum persons in this batch")


def add_purge_reports_command(subparsers: Any) -> None:
    """Register purge-reports subcommand."""
    parser = subparsers.add_parser(
        "purge-reports",
        help="Delete dated records under a branch",
    )
    parser.add_argument("--branch", required=True, help="Branch id whose records are purged")
    parser.add_argument("--type", default=DEFAULT_REPORT_TYPE, help="Record type to delete")
    parser.add_argument("--start", help="Inclusive start date, e.g. 2024-01-01 (UTC)")
    parser.add_argument("--end", help="Exclusive end date, e.g. 2024-02-01 (UTC)")
    parser.add_argument("--batch-size", type=_positive_int, help="Maximum records in this batch")


def run_purge_contacts_command(client: SweepClient, args: argparse.Namespace) -> int:
    """Handle purge-contacts command."""
    result = client.purge_contacts(args.place, batch_size=args.batch_size)
    return _report(result)


def run_purge_reports_command(client: SweepClient, args: argparse.Namespace) -> int:
    """Handle purge-reports command."""
    start_ms, end_ms = date_range_ms(args.start, args.end)
    result = client.purge_reports(
        args.branch,
        start_ms=start_ms,
        end_ms=end_ms,
        doc_type=args.type,
        batch_size=args.batch_size,
    )
    return _report(result)


def _report(result: PurgeResult) -> int:
    """Print purge summary and map its status to an exit code."""
    if result.status == "declined":
        print("User backed out. Exiting.")
    for line in result.summary_lines():
        print(line)
    return 1 if result.status == "confirmation_failed" else 0
