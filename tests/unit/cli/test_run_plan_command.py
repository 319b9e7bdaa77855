"""Unit tests for run-plan CLI command."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from cleanup.confirmation import AssumeYesGate
from cleanup.sweep_client import SweepClient
from cli.main import main
from core.config import SweepConfig
from tests.fake_store import FakeDocumentStore, RecordingLogger
from tests.fixture_paths import plan_fixture


def _client(tmp_path: Path, store: FakeDocumentStore) -> SweepClient:
    config = replace(SweepConfig.from_env(), log_dir=tmp_path, dry_run=False)
    return SweepClient(
        config,
        store=store,
        gate=AssumeYesGate(logger=RecordingLogger()),
        logger=RecordingLogger(),
    )


def _store() -> FakeDocumentStore:
    return FakeDocumentStore(
        [
            {"_id": "district-1", "type": "district_hospital"},
            {"_id": "branch-1", "type": "district_hospital", "name": "North"},
            {"_id": "P1", "type": "person", "parent": {"_id": "district-1"}},
            {"_id": "R1", "type": "data_record", "branch_id": "branch-1", "reported_date": 1704153600000},
        ]
    )


def test_run_plan_command_prints_step_output(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """run-plan should print one header per step followed by its results."""
    store = _store()

    exit_code = main(
        ["run-plan", str(plan_fixture("purge_plan.yaml"))],
        client=_client(tmp_path, store),
    )
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and "step=1 command=stats" in lines
    assert "step=2 command=purge-contacts" in lines and "step=3 command=purge-reports" in lines


def test_run_plan_command_honours_plan_dry_run(tmp_path: Path) -> None:
    """A plan marked dry_run should leave the store untouched."""
    store = _store()

    main(["run-plan", str(plan_fixture("purge_plan.yaml"))], client=_client(tmp_path, store))

    assert store.write_count() == 0 and "_deleted" not in store.docs["P1"]


def test_run_plan_command_rejects_unknown_command(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Unsupported plan commands should fail with a readable error."""
    exit_code = main(
        ["run-plan", str(plan_fixture("unknown_command.yaml"))],
        client=_client(tmp_path, _store()),
    )

    assert exit_code == 1 and "drop-database" in capsys.readouterr().out
