"""Typed cleanup plan parsing for declarative purge runs.

This module loads and validates YAML plan files listing purge steps.
One strict schema lets CLI and SDK callers replay the same cleanup safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping, Sequence, cast

import yaml

from core.errors import SweepPlanError

PlanCommand = Literal["purge-contacts", "purge-reports", "stats"]
SUPPORTED_PLAN_COMMANDS: tuple[PlanCommand, ...] = (
    "purge-contacts",
    "purge-reports",
    "stats",
)


@dataclass(frozen=True)
class PlanDefaults:
    """Default values applied to every plan step."""

    log_dir: str | None = None
    dry_run: bool | None = None
    batch_size: int | None = None


@dataclass(frozen=True)
class PlanStep:
    """One runnable purge step from a plan file."""

    command: PlanCommand
    args: Mapping[str, object]


@dataclass(frozen=True)
class CleanupPlan:
    """Validated cleanup plan root object."""

    version: int
    defaults: PlanDefaults
    steps: tuple[PlanStep, ...]


def load_cleanup_plan(plan_path: str) -> CleanupPlan:
    """Load and validate a YAML cleanup plan from disk.

    Args:
        plan_path: File path to the YAML plan.

    Returns:
        Fully validated plan object.

    Raises:
        SweepPlanError: If the file is unreadable or schema checks fail.
    """
    payload = _load_yaml_payload(plan_path)
    root_mapping = _expect_mapping(payload, "plan root")
    _validate_keys(root_mapping, {"version", "defaults", "steps"}, "plan root")
    version = _parse_version(root_mapping)
    defaults = _parse_defaults(root_mapping)
    steps = _parse_steps(root_mapping)
    return CleanupPlan(version=version, defaults=defaults, steps=steps)


def _load_yaml_payload(plan_path: str) -> object:
    plan_file = Path(plan_path).expanduser().resolve()
    if not plan_file.exists():
        raise SweepPlanError(
            f"Cleanup plan file does not exist at {plan_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(plan_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise SweepPlanError(
            f"Failed to read cleanup plan at {plan_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise SweepPlanError(
            f"Failed to parse YAML cleanup plan at {plan_file}: {error}. Fix YAML syntax."
        ) from error
    if payload is None:
        raise SweepPlanError(f"Cleanup plan at {plan_file} is empty. Define 'version' and 'steps'.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise SweepPlanError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise SweepPlanError(f"Invalid {context}: expected object mapping, got {type(value).__name__}.")


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise SweepPlanError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise SweepPlanError("Plan field 'version' must be an integer. Set version: 1.")
    if raw_version != 1:
        raise SweepPlanError(f"Unsupported plan version {raw_version}. Use version: 1.")
    return raw_version


def _parse_defaults(root_mapping: Mapping[str, object]) -> PlanDefaults:
    raw_defaults = root_mapping.get("defaults")
    if raw_defaults is None:
        return PlanDefaults()
    defaults_mapping = _expect_mapping(raw_defaults, "plan defaults")
    _validate_keys(defaults_mapping, {"log_dir", "dry_run", "batch_size"}, "plan defaults")
    log_dir = defaults_mapping.get("log_dir")
    if log_dir is not None and not isinstance(log_dir, str):
        raise SweepPlanError("Plan default 'log_dir' must be a string when provided.")
    dry_run = defaults_mapping.get("dry_run")
    if dry_run is not None and not isinstance(dry_run, bool):
        raise SweepPlanError("Plan default 'dry_run' must be true/false.")
    batch_size = defaults_mapping.get("batch_size")
    if batch_size is not None and (
        not isinstance(batch_size, int) or isinstance(batch_size, bool) or batch_size <= 0
    ):
        raise SweepPlanError("Plan default 'batch_size' must be a positive integer.")
    return PlanDefaults(log_dir=log_dir, dry_run=dry_run, batch_size=batch_size)


def _parse_steps(root_mapping: Mapping[str, object]) -> tuple[PlanStep, ...]:
    raw_steps = root_mapping.get("steps")
    if raw_steps is None:
        raise SweepPlanError("Plan missing required field 'steps'. Add a non-empty list of commands.")
    step_rows = _expect_sequence(raw_steps, "plan steps")
    if len(step_rows) == 0:
        raise SweepPlanError("Plan field 'steps' must include at least one step.")
    return tuple(_parse_step(step_value, index) for index, step_value in enumerate(step_rows))


def _parse_step(step_value: object, step_index: int) -> PlanStep:
    context = f"plan step #{step_index + 1}"
    step_mapping = _expect_mapping(step_value, context)
    raw_command = step_mapping.get("command")
    if not isinstance(raw_command, str):
        raise SweepPlanError(f"Invalid {context}: field 'command' must be a string.")
    if raw_command not in SUPPORTED_PLAN_COMMANDS:
        supported_rows = ", ".join(SUPPORTED_PLAN_COMMANDS)
        raise SweepPlanError(
            f"Unsupported command '{raw_command}' in {context}. Use one of: {supported_rows}."
        )
    args = {key: value for key, value in step_mapping.items() if key != "command"}
    return PlanStep(command=cast(PlanCommand, raw_command), args=args)


def _validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise SweepPlanError(f"Invalid {context}: unknown fields {', '.join(unknown_keys)}.")
