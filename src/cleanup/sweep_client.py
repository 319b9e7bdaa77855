"""Python SDK for batch purge operations.

This module wires the selector, cascade, audit, and tombstone layers into
the two purge flows exposed by the CLI and cleanup plans.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from cleanup.batch_selector import BatchSelector
from cleanup.cascade_cleaner import CascadeCleaner
from cleanup.confirmation import ConfirmationGate, ConfirmationResult, PromptConfirmationGate
from cleanup.document_filters import filter_by_date_range, filter_by_type
from cleanup.dry_run import DryRunPolicy
from cleanup.reference_resolver import ReferenceResolver
from cleanup.tombstones import TombstoneWriter
from core.config import SweepConfig
from core.constants import DEFAULT_REPORT_TYPE, PERSON_TYPE
from core.logging_config import EventLogger, get_logger
from core.timestamps import validate_range_ms
from core.types import BranchInfo, PurgeResult
from store.audit_writer import AuditWriter
from store.couch_gateway import CouchGateway
from store.document_store import DocumentStore, store_stats

_LOGGER = get_logger(__name__)


class SweepClient:
    """Primary SDK entry point for purge workflows."""

    def __init__(
        self,
        config: SweepConfig | None = None,
        store: DocumentStore | None = None,
        gate: ConfirmationGate | None = None,
        logger: EventLogger | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            store: Optional store gateway; an HTTP gateway when omitted.
            gate: Optional confirmation gate; an interactive prompt when omitted.
            logger: Optional event sink shared by every pipeline component.
        """
        self._config = config or SweepConfig.from_env()
        self._store = store or CouchGateway(self._config)
        self._gate = gate or PromptConfirmationGate(logger=logger)
        self._logger = logger or _LOGGER
        self._dry_run = DryRunPolicy(enabled=self._config.dry_run, logger=self._logger)
        self._audit_writer = AuditWriter(self._config.log_dir, logger=self._logger)
        self._selector = BatchSelector(self._store, logger=self._logger)
        self._cleaner = CascadeCleaner(
            self._store,
            ReferenceResolver(self._store, logger=self._logger),
            self._audit_writer,
            self._dry_run,
            logger=self._logger,
        )
        self._tombstones = TombstoneWriter(self._store, self._dry_run, logger=self._logger)

    @property
    def config(self) -> SweepConfig:
        return self._config

    def with_options(
        self,
        dry_run: bool | None = None,
        log_dir: str | None = None,
        gate: ConfirmationGate | None = None,
    ) -> "SweepClient":
        """Return a client sharing this store with updated options."""
        config = self._config
        if dry_run is not None:
            config = replace(config, dry_run=dry_run)
        if log_dir is not None:
            config = replace(config, log_dir=Path(log_dir).expanduser().resolve())
        return SweepClient(config, store=self._store, gate=gate or self._gate, logger=self._logger)

    def store_stats(self) -> dict[str, Any]:
        """Read and log database statistics."""
        return store_stats(self._store, self._logger)

    def branch_info(self, branch_id: str) -> BranchInfo:
        """Read the descriptive fields of a branch."""
        return self._selector.fetch_branch_info(branch_id)

    def purge_contacts(self, place_id: str, batch_size: int | None = None) -> PurgeResult:
        """Delete one batch of persons under a place, stripping references first.

        Args:
            place_id: Place whose descendant contacts are purged.
            batch_size: Optional override of the configured batch size.

        Returns:
            Purge outcome.

        Raises:
            SweepStoreError: If any store read or write fails.
            SweepAuditError: If a snapshot cannot be written.
        """
        self.store_stats()
        contacts = self._selector.select_contacts_for_place(
            place_id, batch_size or self._config.batch_size
        )
        persons = filter_by_type(contacts, PERSON_TYPE, logger=self._logger)
        if not persons:
            self._logger.info("purge_skipped", place_id=place_id, reason="no persons selected")
            return PurgeResult(status="empty", selected_count=0, dry_run=self._config.dry_run)
        refusal = self._confirm(
            f"Delete {len(persons)} persons under place {place_id}?", len(persons)
        )
        if refusal is not None:
            return refusal
        snapshot_path = self._audit_writer.batch_snapshot_path("contacts", place_id)
        self._audit_writer.snapshot_to_file(snapshot_path, persons)
        cleanups = self._cleaner.clean_subjects(persons)
        deleted = self._tombstones.delete_documents(persons)
        self.store_stats()
        return PurgeResult(
            status="completed",
            selected_count=len(persons),
            deleted=tuple(deleted),
            cleanups=cleanups,
            snapshot_path=snapshot_path,
            dry_run=self._config.dry_run,
        )

    def purge_reports(
        self,
        branch_id: str,
        start_ms: int | None = None,
        end_ms: int | None = None,
        doc_type: str = DEFAULT_REPORT_TYPE,
        batch_size: int | None = None,
    ) -> PurgeResult:
        """Delete one batch of records under a branch.

        Args:
            branch_id: Branch whose records are purged.
            start_ms: Optional inclusive lower bound on ``reported_date``.
            end_ms: Optional exclusive upper bound on ``reported_date``.
            doc_type: Record type to keep.
            batch_size: Optional override of the configured batch size.

        Returns:
            Purge outcome.

        Raises:
            SweepStoreError: If any store read or write fails.
            SweepAuditError: If the snapshot cannot be written.
            SweepConfigError: If only one date bound is given or the range is empty.
        """
        validate_range_ms(start_ms, end_ms)
        branch = self._selector.fetch_branch_info(branch_id)
        self.store_stats()
        records = self._selector.select_records_for_branch(
            branch_id, batch_size or self._config.batch_size
        )
        records = filter_by_type(records, doc_type, logger=self._logger)
        if start_ms is not None and end_ms is not None:
            records = filter_by_date_range(records, start_ms, end_ms, logger=self._logger)
        if not records:
            self._logger.info("purge_skipped", branch_id=branch_id, reason="no records selected")
            return PurgeResult(status="empty", selected_count=0, dry_run=self._config.dry_run)
        refusal = self._confirm(
            f"Delete {len(records)} {doc_type} documents from branch "
            f"{branch.name or branch_id} ({branch.type or 'unknown type'})?",
            len(records),
        )
        if refusal is not None:
            return refusal
        snapshot_path = self._audit_writer.batch_snapshot_path("reports", branch_id)
        self._audit_writer.snapshot_to_file(snapshot_path, records)
        deleted = self._tombstones.delete_documents(records)
        self.store_stats()
        return PurgeResult(
            status="completed",
            selected_count=len(records),
            deleted=tuple(deleted),
            snapshot_path=snapshot_path,
            dry_run=self._config.dry_run,
        )

    def _confirm(self, message: str, selected_count: int) -> PurgeResult | None:
        """Return a terminal result unless the gate confirms the batch."""
        result = self._gate.confirm(message)
        if result is ConfirmationResult.CONFIRMED:
            return None
        self._logger.warning("purge_not_confirmed", result=result.value)
        status = "declined" if result is ConfirmationResult.DECLINED else "confirmation_failed"
        return PurgeResult(
            status=status,
            selected_count=selected_count,
            dry_run=self._config.dry_run,
        )
