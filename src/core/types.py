"""Shared typed models.

This module defines the immutable values passed between the selector,
cascade, tombstone, and SDK layers. Store documents themselves stay
plain JSON mappings because their payload is opaque to the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

Document = dict[str, Any]

PurgeStatus = Literal["completed", "empty", "declined", "confirmation_failed"]


@dataclass(frozen=True)
class BranchInfo:
    """Descriptive fields of a branch used to label a deletion scope.

    Attributes:
        branch_id: Store id of the branch document.
        name: Human-readable branch name.
        type: Branch document type discriminator.
    """

    branch_id: str
    name: str | None
    type: str | None


@dataclass(frozen=True)
class WriteResult:
    """Per-document outcome of a bulk write.

    Attributes:
        doc_id: Written document id.
        ok: Whether the store accepted the write.
        rev: New revision when accepted.
        error: Store error code when rejected.
        reason: Store error reason when rejected.
    """

    doc_id: str
    ok: bool
    rev: str | None = None
    error: str | None = None
    reason: str | None = None


@dataclass(frozen=True)
class SubjectCleanup:
    """Outcome of the reference cascade for one person.

    Attributes:
        subject_id: Person id whose references were processed.
        facility_ids: Facilities that referenced the person.
        audit_path: Snapshot file of the facilities, None when none referenced it.
        committed: Whether stripped facilities were written to the store.
    """

    subject_id: str
    facility_ids: tuple[str, ...] = ()
    audit_path: Path | None = None
    committed: bool = False


@dataclass(frozen=True)
class PurgeResult:
    """Outcome of one batch purge.

    Attributes:
        status: Terminal state of the purge.
        selected_count: Documents selected for deletion after filtering.
        deleted: Documents returned by the tombstone writer.
        cleanups: Per-person cascade outcomes, in processing order.
        snapshot_path: Pre-image file of the deleted batch.
        dry_run: Whether store writes were suppressed.
    """

    status: PurgeStatus
    selected_count: int
    deleted: tuple[Document, ...] = ()
    cleanups: tuple[SubjectCleanup, ...] = ()
    snapshot_path: Path | None = None
    dry_run: bool = False

    def summary_lines(self) -> tuple[str, ...]:
        """Render printable ``key=value`` lines for CLI and plan output."""
        audit_paths = [str(item.audit_path) for item in self.cleanups if item.audit_path]
        return (
            f"status={self.status}",
            f"dry_run={str(self.dry_run).lower()}",
            f"selected={self.selected_count}",
            f"deleted={0 if self.dry_run else len(self.deleted)}",
            f"references_cleaned={sum(len(item.facility_ids) for item in self.cleanups)}",
            f"snapshot_path={self.snapshot_path or '-'}",
            f"facility_snapshots={','.join(audit_paths) or '-'}",
        )
