"""Document store gateway contract and view row helpers.

This module describes the four store calls the cleanup pipeline relies on.
Every other component depends on this contract instead of a concrete client.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from core.logging_config import EventLogger, get_logger
from core.types import Document, WriteResult

_LOGGER = get_logger(__name__)


class DocumentStore(Protocol):
    """Store operations consumed by selectors, resolvers, and writers."""

    def get(self, doc_id: str) -> Document: ...

    def query(
        self,
        view_name: str,
        *,
        key: Any = None,
        startkey: Any = None,
        endkey: Any = None,
        include_docs: bool = False,
        limit: int | None = None,
    ) -> dict[str, Any]: ...

    def bulk_write(self, docs: Sequence[Document]) -> tuple[WriteResult, ...]: ...

    def info(self) -> dict[str, Any]: ...


def docs_from_rows(rows: Sequence[dict[str, Any]]) -> list[Document]:
    """Project included documents out of view rows.

    Args:
        rows: View result rows queried with ``include_docs``.

    Returns:
        Documents in row order; rows without a document are skipped.
    """
    return [row["doc"] for row in rows if row.get("doc") is not None]


def ids_from_rows(rows: Sequence[dict[str, Any]]) -> list[str]:
    """Project document ids out of view rows."""
    return [str(row["id"]) for row in rows]


def failed_writes(results: Sequence[WriteResult]) -> list[WriteResult]:
    """Return the rejected entries of a bulk write result."""
    return [result for result in results if not result.ok]


def store_stats(store: DocumentStore, logger: EventLogger | None = None) -> dict[str, Any]:
    """Read and log database statistics.

    The update sequence in the stats marks how far replicas must catch up
    after a purge, so purges log it before and after they run.

    Args:
        store: Document store gateway.
        logger: Optional event sink.

    Returns:
        Raw stats object from the store.
    """
    stats = store.info()
    (logger or _LOGGER).info(
        "store_stats",
        doc_count=stats.get("doc_count"),
        doc_del_count=stats.get("doc_del_count"),
        update_seq=stats.get("update_seq"),
        stats=stats,
    )
    return stats
