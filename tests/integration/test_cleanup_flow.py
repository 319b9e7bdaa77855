"""Integration tests for contact and report cleanup workflows."""

from __future__ import annotations

from dataclasses import replace

from cleanup.confirmation import PromptConfirmationGate
from core.config import SweepConfig
from core.timestamps import date_range_ms
from store.audit_writer import load_snapshot
from sweep import SweepClient
from tests.fake_store import FakeDocumentStore, RecordingLogger

DISTRICT = {"_id": "district-1"}
HEALTH_CENTER = {"_id": "hc-1", "parent": DISTRICT}


def _hierarchy() -> FakeDocumentStore:
    return FakeDocumentStore(
        [
            {"_id": "district-1", "type": "district_hospital", "name": "North", "contact": "P1"},
            {"_id": "hc-1", "type": "facility", "name": "Clinic", "contact": "P1", "parent": DISTRICT},
            {"_id": "hc-2", "type": "facility", "name": "Annex", "contact": "P2", "parent": DISTRICT},
            {"_id": "P1", "type": "person", "name": "Ana", "parent": HEALTH_CENTER},
            {"_id": "P2", "type": "person", "name": "Ben", "parent": HEALTH_CENTER},
            {"_id": "P9", "type": "person", "name": "Other", "parent": {"_id": "district-2"}},
            {"_id": "R1", "type": "data_record", "branch_id": "district-1", "reported_date": 1704153600000},
            {"_id": "R2", "type": "data_record", "branch_id": "district-1", "reported_date": 1709251200000},
        ]
    )


def test_contact_purge_cascades_through_hierarchy(tmp_path) -> None:
    """Prompted purge should strip references, audit them, and tombstone persons."""
    store = _hierarchy()
    answers = iter(["maybe", "yes"])
    printed: list[str] = []
    gate = PromptConfirmationGate(
        input_fn=lambda prompt: next(answers),
        output_fn=printed.append,
        logger=RecordingLogger(),
    )
    config = replace(SweepConfig.from_env(), log_dir=tmp_path, dry_run=False)
    client = SweepClient(config, store=store, gate=gate, logger=RecordingLogger())

    result = client.purge_contacts("district-1")

    snapshot = load_snapshot(tmp_path / "cleaned_facilities_P1.json")
    assert result.status == "completed" and printed == ["Must respond yes or no"]
    assert sorted(doc["_id"] for doc in snapshot) == ["district-1", "hc-1"]
    assert all("contact" not in store.docs[doc_id] for doc_id in ("district-1", "hc-1", "hc-2"))
    assert store.docs["P1"]["_deleted"] and store.docs["P2"]["_deleted"]
    assert "_deleted" not in store.docs["P9"]


def test_report_purge_within_date_window(tmp_path) -> None:
    """Report purge should delete only the records reported inside the window."""
    store = _hierarchy()
    config = replace(SweepConfig.from_env(), log_dir=tmp_path, dry_run=False)
    client = SweepClient(
        config,
        store=store,
        gate=PromptConfirmationGate(input_fn=lambda prompt: "", output_fn=lambda line: None),
        logger=RecordingLogger(),
    )
    start_ms, end_ms = date_range_ms("2024-01-01", "2024-02-01")

    result = client.purge_reports("district-1", start_ms=start_ms, end_ms=end_ms)

    assert [doc["_id"] for doc in result.deleted] == ["R1"]
    assert result.snapshot_path is not None and load_snapshot(result.snapshot_path)[0]["_id"] == "R1"
    assert "_deleted" not in store.docs["R2"]
