"""Lookup of facilities that name a person as their contact."""

from __future__ import annotations

from core.constants import FACILITIES_BY_CONTACT_VIEW
from core.logging_config import EventLogger, get_logger
from core.types import Document
from store.document_store import DocumentStore, docs_from_rows, ids_from_rows

_LOGGER = get_logger(__name__)


class ReferenceResolver:
    """Finds documents holding a weak reference to a person."""

    def __init__(self, store: DocumentStore, logger: EventLogger | None = None) -> None:
        self._store = store
        self._logger = logger or _LOGGER

    def find_referencing_facilities(self, person_id: str) -> list[Document]:
        """Return every facility whose ``contact`` is ``person_id``.

        Args:
            person_id: Person id to resolve.

        Returns:
            Referencing facility documents, possibly empty.

        Raises:
            SweepStoreError: If the lookup fails; the error is logged first.
        """
        try:
            result = self._store.query(
                FACILITIES_BY_CONTACT_VIEW,
                key=[person_id],
                include_docs=True,
            )
        except Exception as error:
            self._logger.error("contact_lookup_failed", person_id=person_id, error=str(error))
            raise
        rows = result.get("rows", [])
        if rows:
            self._logger.info(
                "person_is_contact",
                person_id=person_id,
                facility_count=len(rows),
                facility_ids=ids_from_rows(rows),
            )
        else:
            self._logger.debug("person_is_contact", person_id=person_id, facility_count=0)
        return docs_from_rows(rows)
