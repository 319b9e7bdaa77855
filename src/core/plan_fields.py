"""Type-safe field parsing helpers for cleanup plan steps.

This module centralizes primitive parsing so plan execution stays concise
and reports consistent validation errors.
"""

from __future__ import annotations

from datetime import date
from typing import Mapping

from core.errors import SweepPlanError


def required_string(args: Mapping[str, object], field_name: str) -> str:
    """Read a required string field from a plan step."""
    value = optional_string(args, field_name)
    if value is None:
        raise SweepPlanError(f"Plan step is missing required field '{field_name}'.")
    return value


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a plan step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise SweepPlanError(f"Plan field '{field_name}' must be a string when provided.")


def optional_positive_int(args: Mapping[str, object], field_name: str) -> int | None:
    """Read an optional positive integer field from a plan step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise SweepPlanError(f"Plan field '{field_name}' must be a positive integer.")
    return value


def optional_date(args: Mapping[str, object], field_name: str) -> str | date | None:
    """Read an optional date field; YAML may already have parsed it to a date."""
    value = args.get(field_name)
    if value is None or isinstance(value, (str, date)):
        return value
    raise SweepPlanError(f"Plan field '{field_name}' must be a date such as 2024-01-31.")


def reject_unknown_fields(
    args: Mapping[str, object],
    allowed_fields: set[str],
    command: str,
) -> None:
    """Fail when a step carries fields its command does not accept."""
    unknown_fields = sorted(set(args) - allowed_fields)
    if unknown_fields:
        raise SweepPlanError(
            f"Plan step '{command}' has unknown fields: {', '.join(unknown_fields)}."
        )
