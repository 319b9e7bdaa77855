"""Pre-mutation snapshot persistence.

This module writes the full pre-image of documents about to be changed
or deleted. A snapshot must be on disk before the matching store write
is issued; the file alone is enough to restore the previous state.
"""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from core.constants import BATCH_SNAPSHOT_PREFIX, FACILITY_SNAPSHOT_PREFIX, SNAPSHOT_SUFFIX
from core.errors import SweepAuditError
from core.logging_config import EventLogger, get_logger
from core.types import Document

_LOGGER = get_logger(__name__)


class AuditWriter:
    """Filesystem-backed snapshot writer rooted at the run log directory."""

    def __init__(self, log_dir: Path, logger: EventLogger | None = None) -> None:
        self._log_dir = log_dir
        self._logger = logger or _LOGGER

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def facility_snapshot_path(self, subject_id: str) -> Path:
        """Return the snapshot path for facilities referencing a person."""
        return self._log_dir / f"{FACILITY_SNAPSHOT_PREFIX}{subject_id}{SNAPSHOT_SUFFIX}"

    def batch_snapshot_path(self, kind: str, scope_id: str) -> Path:
        """Return a timestamped snapshot path for a deletion batch.

        Args:
            kind: Batch kind, e.g. ``contacts`` or ``reports``.
            scope_id: Place or branch id the batch was selected from.

        Returns:
            Snapshot path unique to this second.
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        file_name = f"{BATCH_SNAPSHOT_PREFIX}{kind}_{scope_id}_{timestamp}{SNAPSHOT_SUFFIX}"
        return self._log_dir / file_name

    def snapshot_to_file(self, path: Path, docs: Sequence[Document]) -> Sequence[Document]:
        """Write documents to one JSON array file.

        Empty input is a no-op and leaves no file behind.

        Args:
            path: Destination snapshot path.
            docs: Full documents to record.

        Returns:
            The same documents, for chaining.

        Raises:
            SweepAuditError: If the file cannot be written completely.
        """
        if len(docs) == 0:
            return docs
        payload = json.dumps(list(docs))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            _write_atomically(path, payload)
        except OSError as error:
            raise SweepAuditError(
                f"Couldn't write {len(docs)} docs to snapshot file {path}: {error}"
            ) from error
        self._logger.info("snapshot_written", doc_count=len(docs), path=str(path))
        return docs


def load_snapshot(path: Path) -> list[Document]:
    """Read a snapshot file back for recovery or inspection.

    Args:
        path: Snapshot file path.

    Returns:
        Recorded documents.

    Raises:
        SweepAuditError: If the file is missing or not a JSON array of objects.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as error:
        raise SweepAuditError(f"Couldn't read snapshot file {path}: {error}") from error
    except json.JSONDecodeError as error:
        raise SweepAuditError(
            f"Snapshot file {path} is not valid JSON: {error.msg}."
        ) from error
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise SweepAuditError(f"Snapshot file {path} must hold a JSON array of documents.")
    return payload


def _write_atomically(path: Path, payload: str) -> None:
    descriptor, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
