"""Cleanup plan CLI command wiring.

This module registers the run-plan subcommand and delegates execution to
the shared plan engine used by CLI and SDK entry points.
"""

from __future__ import annotations

import argparse
from typing import Any

from cleanup.sweep_client import SweepClient
from core.plan_execution import execute_cleanup_plan_file


def add_run_plan_command(subparsers: Any) -> None:
    """Register run-plan subcommand."""
    parser = subparsers.add_parser(
        "run-plan",
        help="Run a declarative YAML cleanup plan",
    )
    parser.add_argument("plan_file", help="Path to YAML cleanup plan file")


def run_run_plan_command(client: SweepClient, args: argparse.Namespace) -> int:
    """Handle run-plan command invocation."""
    output_lines = execute_cleanup_plan_file(client, args.plan_file)
    for line in output_lines:
        print(line)
    return 0
