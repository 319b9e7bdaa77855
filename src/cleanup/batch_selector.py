"""Deletion candidate selection by place or branch scope.

This module wraps the hierarchy views the store maintains and returns
bounded batches of full documents for the purge flows.
"""

from __future__ import annotations

from core.constants import (
    CONTACTS_BY_PLACE_VIEW,
    ID_FIELD,
    KEY_RANGE_SENTINEL,
    RECORDS_BY_BRANCH_VIEW,
    TYPE_FIELD,
)
from core.logging_config import EventLogger, get_logger
from core.types import BranchInfo, Document
from store.document_store import DocumentStore, docs_from_rows

_LOGGER = get_logger(__name__)


class BatchSelector:
    """Reads candidate documents from hierarchy-keyed views."""

    def __init__(self, store: DocumentStore, logger: EventLogger | None = None) -> None:
        self._store = store
        self._logger = logger or _LOGGER

    def select_contacts_for_place(self, place_id: str, batch_size: int) -> list[Document]:
        """Return up to ``batch_size`` contacts whose ancestry includes the place.

        Args:
            place_id: Place id in the contact hierarchy.
            batch_size: Maximum number of contacts.

        Returns:
            Contact documents, possibly empty.

        Raises:
            SweepStoreError: If the store query fails.
        """
        result = self._store.query(
            CONTACTS_BY_PLACE_VIEW,
            key=[place_id],
            include_docs=True,
            limit=batch_size,
        )
        docs = docs_from_rows(result.get("rows", []))
        self._logger.info("contacts_selected", place_id=place_id, doc_count=len(docs))
        return docs

    def select_records_for_branch(self, branch_id: str, batch_size: int) -> list[Document]:
        """Return up to ``batch_size`` records keyed under the branch.

        The key range ``[branch_id, branch_id + sentinel)`` matches every
        descendant key lexically prefixed by the branch id.

        Args:
            branch_id: Branch id.
            batch_size: Maximum number of records.

        Returns:
            Record documents, possibly empty.

        Raises:
            SweepStoreError: If the store query fails.
        """
        result = self._store.query(
            RECORDS_BY_BRANCH_VIEW,
            startkey=[branch_id],
            endkey=[branch_id + KEY_RANGE_SENTINEL],
            include_docs=True,
            limit=batch_size,
        )
        docs = docs_from_rows(result.get("rows", []))
        self._logger.info("records_selected", branch_id=branch_id, doc_count=len(docs))
        return docs

    def fetch_branch_info(self, branch_id: str) -> BranchInfo:
        """Read the descriptive fields of a branch.

        Raises:
            SweepStoreError: If the branch cannot be fetched.
        """
        try:
            doc = self._store.get(branch_id)
        except Exception as error:
            self._logger.error("branch_not_found", branch_id=branch_id, error=str(error))
            raise
        return BranchInfo(
            branch_id=str(doc.get(ID_FIELD, branch_id)),
            name=doc.get("name"),
            type=doc.get(TYPE_FIELD),
        )
