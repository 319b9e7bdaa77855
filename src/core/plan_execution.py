"""Shared cleanup plan execution engine for CLI and SDK workflows.

This module maps validated plan steps onto client purge operations so
every entry point runs one declarative cleanup path without drift.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

from core.cleanup_plan import CleanupPlan, PlanStep, load_cleanup_plan
from core.constants import DEFAULT_REPORT_TYPE
from core.errors import SweepPlanError
from core.plan_fields import (
    optional_date,
    optional_positive_int,
    optional_string,
    reject_unknown_fields,
    required_string,
)
from core.timestamps import date_range_ms
from core.types import PurgeResult


class PlanClient(Protocol):
    """Client API contract required by plan execution."""

    def with_options(
        self,
        dry_run: bool | None = None,
        log_dir: str | None = None,
    ) -> Any: ...

    def store_stats(self) -> dict[str, Any]: ...

    def purge_contacts(self, place_id: str, batch_size: int | None = None) -> PurgeResult: ...

    def purge_reports(
        self,
        branch_id: str,
        start_ms: int | None = None,
        end_ms: int | None = None,
        doc_type: str = DEFAULT_REPORT_TYPE,
        batch_size: int | None = None,
    ) -> PurgeResult: ...


def execute_cleanup_plan_file(client: PlanClient, plan_file: str) -> tuple[str, ...]:
    """Load and execute a plan file, returning printable output lines."""
    plan = load_cleanup_plan(plan_file)
    return execute_cleanup_plan(client, plan)


def execute_cleanup_plan(client: PlanClient, plan: CleanupPlan) -> tuple[str, ...]:
    """Execute a parsed plan in step order and return output lines.

    Store and audit failures propagate and stop the remaining steps.
    """
    execution_client = client.with_options(
        dry_run=plan.defaults.dry_run,
        log_dir=plan.defaults.log_dir,
    )
    output_lines: list[str] = []
    for index, step in enumerate(plan.steps):
        output_lines.append(f"step={index + 1} command={step.command}")
        output_lines.extend(_execute_step(execution_client, step, plan.defaults.batch_size))
    return tuple(output_lines)


def _execute_step(
    client: PlanClient,
    step: PlanStep,
    default_batch_size: int | None,
) -> tuple[str, ...]:
    if step.command == "purge-contacts":
        return _execute_purge_contacts_step(client, step, default_batch_size).summary_lines()
    if step.command == "purge-reports":
        return _execute_purge_reports_step(client, step, default_batch_size).summary_lines()
    if step.command == "stats":
        reject_unknown_fields(step.args, set(), step.command)
        return (f"stats={json.dumps(client.store_stats(), sort_keys=True)}",)
    raise SweepPlanError(f"Unsupported plan command '{step.command}'.")


def _execute_purge_contacts_step(
    client: PlanClient,
    step: PlanStep,
    default_batch_size: int | None,
) -> PurgeResult:
    reject_unknown_fields(step.args, {"place", "batch_size"}, step.command)
    return client.purge_contacts(
        required_string(step.args, "place"),
        batch_size=optional_positive_int(step.args, "batch_size") or default_batch_size,
    )


def _execute_purge_reports_step(
    client: PlanClient,
    step: PlanStep,
    default_batch_size: int | None,
) -> PurgeResult:
    reject_unknown_fields(
        step.args,
        {"branch", "type", "start", "end", "batch_size"},
        step.command,
    )
    start_ms, end_ms = date_range_ms(
        optional_date(step.args, "start"),
        optional_date(step.args, "end"),
    )
    return client.purge_reports(
        required_string(step.args, "branch"),
        start_ms=start_ms,
        end_ms=end_ms,
        doc_type=optional_string(step.args, "type") or DEFAULT_REPORT_TYPE,
        batch_size=optional_positive_int(step.args, "batch_size") or default_batch_size,
    )
