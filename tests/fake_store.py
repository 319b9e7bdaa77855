"""In-memory document store used by unit and integration tests."""

from __future__ import annotations

import copy
from typing import Any, Callable, Sequence

from core.errors import SweepStoreError
from core.types import Document, WriteResult


def _contacts_by_place_keys(doc: Document) -> list[list[str]]:
    if doc.get("type") != "person":
        return []
    keys = []
    parent = doc.get("parent")
    while isinstance(parent, dict):
        keys.append([str(parent["_id"])])
        parent = parent.get("parent")
    return keys


def _records_by_branch_keys(doc: Document) -> list[list[str]]:
    if doc.get("type") in ("person", "facility") or "branch_id" not in doc:
        return []
    return [[str(doc["branch_id"])]]


_PLACE_TYPES = ("facility", "clinic", "health_center", "district_hospital")


def _facilities_by_contact_keys(doc: Document) -> list[list[str]]:
    if doc.get("type") not in _PLACE_TYPES or not doc.get("contact"):
        return []
    return [[str(doc["contact"])]]


_VIEWS: dict[str, Callable[[Document], list[list[str]]]] = {
    "medic/contacts_by_place": _contacts_by_place_keys,
    "medic/data_records_by_district": _records_by_branch_keys,
    "medic/facilities_by_contact": _facilities_by_contact_keys,
}


class FakeDocumentStore:
    """DocumentStore emulating the three hierarchy views.

    Every call is appended to ``calls`` as ``(operation, detail)`` so tests
    can assert ordering. Tombstoned documents stay stored but leave views.
    """

    def __init__(self, docs: Sequence[Document] = ()) -> None:
        self.docs: dict[str, Document] = {}
        self.calls: list[tuple[str, Any]] = []
        self.fail_on: set[str] = set()
        self.reject_ids: set[str] = set()
        self.events: list[str] | None = None
        for doc in docs:
            stored = copy.deepcopy(doc)
            stored.setdefault("_rev", "1-a")
            self.docs[str(stored["_id"])] = stored

    def get(self, doc_id: str) -> Document:
        self._record("get", doc_id)
        if doc_id not in self.docs or self.docs[doc_id].get("_deleted"):
            raise SweepStoreError(f"not_found: {doc_id}")
        return copy.deepcopy(self.docs[doc_id])

    def query(
        self,
        view_name: str,
        *,
        key: Any = None,
        startkey: Any = None,
        endkey: Any = None,
        include_docs: bool = False,
        limit: int | None = None,
    ) -> dict[str, Any]:
        self._record("query", (view_name, key if key is not None else startkey))
        emit = _VIEWS[view_name]
        rows = []
        for doc_id in sorted(self.docs):
            doc = self.docs[doc_id]
            if doc.get("_deleted"):
                continue
            for emitted in emit(doc):
                if key is not None and emitted != key:
                    continue
                if startkey is not None and emitted < startkey:
                    continue
                if endkey is not None and emitted > endkey:
                    continue
                row: dict[str, Any] = {"id": doc_id, "key": emitted}
                if include_docs:
                    row["doc"] = copy.deepcopy(doc)
                rows.append(row)
        if limit is not None:
            rows = rows[:limit]
        return {"total_rows": len(rows), "rows": rows}

    def bulk_write(self, docs: Sequence[Document]) -> tuple[WriteResult, ...]:
        self._record("bulk_write", copy.deepcopy(list(docs)))
        results = []
        for doc in docs:
            doc_id = str(doc["_id"])
            if doc_id in self.reject_ids:
                results.append(WriteResult(doc_id=doc_id, ok=False, error="conflict"))
                continue
            stored = copy.deepcopy(doc)
            generation = int(str(stored.get("_rev", "0-a")).split("-")[0]) + 1
            stored["_rev"] = f"{generation}-b"
            self.docs[doc_id] = stored
            results.append(WriteResult(doc_id=doc_id, ok=True, rev=stored["_rev"]))
        return tuple(results)

    def info(self) -> dict[str, Any]:
        self._record("info", None)
        live = [doc for doc in self.docs.values() if not doc.get("_deleted")]
        return {
            "db_name": "medic",
            "doc_count": len(live),
            "doc_del_count": len(self.docs) - len(live),
            "update_seq": str(len(self.calls)),
        }

    def write_count(self) -> int:
        return sum(1 for operation, _ in self.calls if operation == "bulk_write")

    def _record(self, operation: str, detail: Any) -> None:
        if operation in self.fail_on:
            raise SweepStoreError(f"store unavailable during {operation}")
        self.calls.append((operation, detail))
        if self.events is not None:
            self.events.append(operation)


class RecordingLogger:
    """EventLogger collecting ``(level, event, fields)`` tuples."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, event: str, **fields: Any) -> None:
        self.entries.append(("debug", event, fields))

    def info(self, event: str, **fields: Any) -> None:
        self.entries.append(("info", event, fields))

    def warning(self, event: str, **fields: Any) -> None:
        self.entries.append(("warning", event, fields))

    def error(self, event: str, **fields: Any) -> None:
        self.entries.append(("error", event, fields))

    def events(self, level: str | None = None) -> list[str]:
        return [event for entry_level, event, _ in self.entries if level in (None, entry_level)]
