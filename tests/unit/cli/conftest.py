"""CLI test fixtures."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def _detach_log_sink() -> Iterator[None]:
    """Remove console/file handlers installed by CLI runs after each test."""
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if (handler.get_name() or "").startswith("sweep-"):
            root_logger.removeHandler(handler)
            handler.close()
