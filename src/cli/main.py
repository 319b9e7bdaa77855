"""Sweep CLI entry points.

This module exposes purge, stats, and plan commands.
It maps argparse commands onto SDK calls and turns outcomes into exit codes.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from cleanup.confirmation import AssumeYesGate, PromptConfirmationGate
from cleanup.sweep_client import SweepClient
from cli.purge_commands import (
    add_purge_contacts_command,
    add_purge_reports_command,
    run_purge_contacts_command,
    run_purge_reports_command,
)
from cli.run_plan_command import add_run_plan_command, run_run_plan_command
from core.config import SweepConfig
from core.constants import LOG_FILE_TEMPLATE
from core.errors import SweepError
from core.logging_config import configure_log_sink


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="sweep",
        description="Remove stale documents from a replicated document store",
    )
    parser.add_argument("--couch-url", help="Override SWEEP_COUCH_URL for this command")
    parser.add_argument("--database", help="Override SWEEP_DATABASE for this command")
    parser.add_argument("--log-dir", help="Override SWEEP_LOG_DIR for this command")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run every read and snapshot step but skip store writes",
    )
    parser.add_argument("--yes", action="store_true", help="Skip confirmation prompts")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_purge_contacts_command(subparsers)
    add_purge_reports_command(subparsers)
    subparsers.add_parser("stats", help="Print document store statistics")
    add_run_plan_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None, client: SweepClient | None = None) -> int:
    """Run the Sweep CLI.

    Args:
        argv: Optional argument vector.
        client: Optional preconfigured SDK client, used instead of one built from args.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        sweep_client = client or _build_client(args)
        if client is not None and (args.dry_run or args.log_dir or args.yes):
            sweep_client = client.with_options(
                dry_run=True if args.dry_run else None,
                log_dir=args.log_dir,
                gate=AssumeYesGate() if args.yes else None,
            )
        configure_log_sink(
            sweep_client.config.log_dir,
            LOG_FILE_TEMPLATE.format(command=args.command),
        )
        return _dispatch(parser, sweep_client, args)
    except SweepError as error:
        print(f"error={error}")
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    client: SweepClient,
    args: argparse.Namespace,
) -> int:
    if args.command == "purge-contacts":
        return run_purge_contacts_command(client, args)
    if args.command == "purge-reports":
        return run_purge_reports_command(client, args)
    if args.command == "stats":
        print(json.dumps(client.store_stats(), sort_keys=True))
        return 0
    if args.command == "run-plan":
        return run_run_plan_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(args: argparse.Namespace) -> SweepClient:
    """Build SDK client with command-line overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured SDK client.
    """
    config = SweepConfig.from_env()
    if args.couch_url:
        config = replace(config, couch_url=args.couch_url.rstrip("/"))
    if args.database:
        config = replace(config, database=args.database)
    if args.log_dir:
        config = replace(config, log_dir=Path(args.log_dir).expanduser().resolve())
    if args.dry_run:
        config = replace(config, dry_run=True)
    gate = AssumeYesGate() if args.yes else PromptConfirmationGate()
    return SweepClient(config, gate=gate)
