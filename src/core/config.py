"""Runtime configuration model for Sweep.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_BATCH_SIZE, DEFAULT_COUCH_URL, DEFAULT_DATABASE, DEFAULT_LOG_DIR
from core.errors import SweepConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class SweepConfig:
    """Validated runtime configuration.

    Attributes:
        couch_url: Base URL of the document store server.
        database: Database name holding contacts and records.
        couch_user: Optional basic-auth user name.
        couch_password: Optional basic-auth password.
        log_dir: Directory receiving run logs and audit snapshots.
        batch_size: Maximum documents selected per purge call.
        dry_run: Suppress every store-mutating write when true.
    """

    couch_url: str
    database: str
    couch_user: str | None
    couch_password: str | None
    log_dir: Path
    batch_size: int
    dry_run: bool

    @classmethod
    def from_env(cls) -> "SweepConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SweepConfigError: If environment values are invalid.
        """
        log_dir_value = os.getenv("SWEEP_LOG_DIR", str(DEFAULT_LOG_DIR))
        batch_size = _parse_batch_size(os.getenv("SWEEP_BATCH_SIZE", str(DEFAULT_BATCH_SIZE)))
        dry_run = _parse_bool("SWEEP_DRY_RUN", os.getenv("SWEEP_DRY_RUN", "false"))
        return cls(
            couch_url=os.getenv("SWEEP_COUCH_URL", DEFAULT_COUCH_URL).rstrip("/"),
            database=os.getenv("SWEEP_DATABASE", DEFAULT_DATABASE),
            couch_user=os.getenv("SWEEP_COUCH_USER") or None,
            couch_password=os.getenv("SWEEP_COUCH_PASSWORD") or None,
            log_dir=Path(log_dir_value).expanduser().resolve(),
            batch_size=batch_size,
            dry_run=dry_run,
        )


def _parse_batch_size(raw_value: str) -> int:
    """Parse the batch size environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive integer.

    Raises:
        SweepConfigError: If value is not a positive integer.
    """
    try:
        batch_size = int(raw_value)
    except ValueError as error:
        raise SweepConfigError(
            "Invalid SWEEP_BATCH_SIZE value: "
            f"expected integer, got '{raw_value}'. "
            "Set SWEEP_BATCH_SIZE to a positive number."
        ) from error
    if batch_size <= 0:
        raise SweepConfigError(
            f"Invalid SWEEP_BATCH_SIZE value: expected a positive integer, got {batch_size}."
        )
    return batch_size


def _parse_bool(variable_name: str, raw_value: str) -> bool:
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise SweepConfigError(
        f"Invalid {variable_name} value: expected true/false, got '{raw_value}'."
    )
