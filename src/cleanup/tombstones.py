"""Soft deletion by tombstone writes.

Documents are never erased: each is rewritten with ``_deleted: true`` so
the deletion itself replicates to downstream clients.
"""

from __future__ import annotations

from typing import Sequence

from cleanup.dry_run import DryRunPolicy
from core.constants import DELETED_FIELD
from core.errors import SweepStoreError
from core.logging_config import EventLogger, get_logger
from core.types import Document
from store.document_store import DocumentStore, failed_writes

_LOGGER = get_logger(__name__)


class TombstoneWriter:
    """Writes deletion markers for batches of documents."""

    def __init__(
        self,
        store: DocumentStore,
        dry_run: DryRunPolicy,
        logger: EventLogger | None = None,
    ) -> None:
        self._store = store
        self._dry_run = dry_run
        self._logger = logger or _LOGGER

    def delete_documents(self, docs: Sequence[Document]) -> Sequence[Document]:
        """Tombstone documents in one bulk write.

        Args:
            docs: Documents to delete, including their current revision.

        Returns:
            Tombstoned copies, or the input unchanged under dry-run.

        Raises:
            SweepStoreError: If the write fails or any document is rejected.
        """
        if self._dry_run.skip("delete_documents", len(docs)):
            return docs
        if len(docs) == 0:
            return []
        tombstones = [{**doc, DELETED_FIELD: True} for doc in docs]
        results = self._store.bulk_write(tombstones)
        rejected = failed_writes(results)
        self._logger.info(
            "documents_deleted",
            doc_count=len(results) - len(rejected),
            rejected_count=len(rejected),
            results=[
                {"id": result.doc_id, "ok": result.ok, "error": result.error}
                for result in results
            ],
        )
        if rejected:
            rejected_ids = ", ".join(result.doc_id for result in rejected)
            raise SweepStoreError(
                f"Store rejected {len(rejected)} of {len(results)} tombstones: {rejected_ids}."
            )
        return tombstones
