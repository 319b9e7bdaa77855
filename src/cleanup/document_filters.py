"""In-memory document predicates used to narrow deletion candidates.

This module keeps filtering logic pure and reusable across purge flows.
"""

from __future__ import annotations

from typing import Sequence

from core.constants import REPORTED_DATE_FIELD, TYPE_FIELD
from core.logging_config import EventLogger, get_logger
from core.types import Document

_LOGGER = get_logger(__name__)


def filter_by_type(
    docs: Sequence[Document],
    doc_type: str,
    logger: EventLogger | None = None,
) -> list[Document]:
    """Keep documents whose ``type`` equals ``doc_type``.

    Args:
        docs: Candidate documents.
        doc_type: Type discriminator to keep.
        logger: Optional event sink.

    Returns:
        Matching documents in input order.
    """
    filtered = [doc for doc in docs if doc.get(TYPE_FIELD) == doc_type]
    (logger or _LOGGER).info("filtered_by_type", doc_type=doc_type, doc_count=len(filtered))
    return filtered


def filter_by_date_range(
    docs: Sequence[Document],
    start: int | float,
    end: int | float,
    logger: EventLogger | None = None,
) -> list[Document]:
    """Keep documents reported within ``[start, end)``.

    Documents without a numeric ``reported_date`` never match.

    Args:
        docs: Candidate documents.
        start: Inclusive lower bound, epoch milliseconds.
        end: Exclusive upper bound, epoch milliseconds.
        logger: Optional event sink.

    Returns:
        Matching documents in input order.
    """
    filtered: list[Document] = []
    for doc in docs:
        reported_date = doc.get(REPORTED_DATE_FIELD)
        if isinstance(reported_date, bool) or not isinstance(reported_date, (int, float)):
            continue
        if start <= reported_date < end:
            filtered.append(doc)
    (logger or _LOGGER).info(
        "filtered_by_date",
        start=start,
        end=end,
        doc_count=len(filtered),
    )
    return filtered
