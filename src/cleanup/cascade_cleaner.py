"""Reference cascade run before persons are deleted.

For each person the cleaner resolves referencing facilities, snapshots
them to disk, strips the ``contact`` field, and commits the stripped
facilities. Persons are processed one at a time from a FIFO queue, and
each snapshot is on disk before its mutation is issued.
"""

from __future__ import annotations

from collections import deque
from typing import Sequence

from cleanup.dry_run import DryRunPolicy
from cleanup.reference_resolver import ReferenceResolver
from core.constants import CONTACT_FIELD, ID_FIELD
from core.errors import SweepStoreError
from core.logging_config import EventLogger, get_logger
from core.types import Document, SubjectCleanup
from store.audit_writer import AuditWriter
from store.document_store import DocumentStore, failed_writes

_LOGGER = get_logger(__name__)


class CascadeCleaner:
    """Strips facility references to persons slated for removal."""

    def __init__(
        self,
        store: DocumentStore,
        resolver: ReferenceResolver,
        audit_writer: AuditWriter,
        dry_run: DryRunPolicy,
        logger: EventLogger | None = None,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._audit_writer = audit_writer
        self._dry_run = dry_run
        self._logger = logger or _LOGGER

    def clean_subjects(self, persons: Sequence[Document]) -> tuple[SubjectCleanup, ...]:
        """Run the cascade for each person, strictly in order.

        Args:
            persons: Person documents to clean.

        Returns:
            One cleanup outcome per person, in input order.

        Raises:
            SweepError: On the first failing person; the rest are not processed.
        """
        queue = deque(persons)
        outcomes: list[SubjectCleanup] = []
        while queue:
            person = queue.popleft()
            try:
                outcomes.append(self.clean_subject(person))
            except Exception as error:
                self._logger.error(
                    "subject_cleanup_failed",
                    subject_id=person.get(ID_FIELD),
                    remaining_count=len(queue),
                    completed_count=len(outcomes),
                    error=str(error),
                )
                raise
        return tuple(outcomes)

    def clean_subject(self, person: Document) -> SubjectCleanup:
        """Resolve, snapshot, strip, and commit references to one person.

        Args:
            person: Person document.

        Returns:
            Cleanup outcome for the person.
        """
        person_id = str(person[ID_FIELD])
        facilities = self._resolver.find_referencing_facilities(person_id)
        if not facilities:
            return SubjectCleanup(subject_id=person_id)
        facility_ids = tuple(str(facility.get(ID_FIELD)) for facility in facilities)
        audit_path = self._audit_writer.facility_snapshot_path(person_id)
        self._audit_writer.snapshot_to_file(audit_path, facilities)
        stripped = [_without_contact(facility) for facility in facilities]
        if self._dry_run.skip("remove_contact", len(stripped)):
            return SubjectCleanup(
                subject_id=person_id,
                facility_ids=facility_ids,
                audit_path=audit_path,
            )
        self._commit(person_id, stripped)
        return SubjectCleanup(
            subject_id=person_id,
            facility_ids=facility_ids,
            audit_path=audit_path,
            committed=True,
        )

    def _commit(self, person_id: str, facilities: list[Document]) -> None:
        results = self._store.bulk_write(facilities)
        rejected = failed_writes(results)
        self._logger.info(
            "contact_removed",
            person_id=person_id,
            facility_count=len(facilities),
            rejected_count=len(rejected),
            results=[{"id": result.doc_id, "ok": result.ok} for result in results],
        )
        if rejected:
            rejected_ids = ", ".join(result.doc_id for result in rejected)
            raise SweepStoreError(
                f"Store rejected {len(rejected)} facility updates for person "
                f"{person_id}: {rejected_ids}."
            )


def _without_contact(facility: Document) -> Document:
    return {key: value for key, value in facility.items() if key != CONTACT_FIELD}
