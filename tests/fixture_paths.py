"""Shared fixture path helpers for tests."""

from __future__ import annotations

from pathlib import Path

FIXTURES_ROOT = Path(__file__).resolve().parent / "fixtures"


def plan_fixture(file_name: str) -> Path:
    """Resolve a cleanup plan fixture under tests/fixtures/plans."""
    return FIXTURES_ROOT / "plans" / file_name
