"""Dry-run switch shared by every store-mutating step."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.logging_config import EventLogger, get_logger

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class DryRunPolicy:
    """Single flag consulted before each store write.

    Reads, reference lookups, and snapshot files still happen under dry-run;
    only the store writes are skipped.
    """

    enabled: bool = False
    logger: EventLogger = field(default=_LOGGER, compare=False, repr=False)

    def skip(self, action: str, doc_count: int) -> bool:
        """Return whether ``action`` must be skipped, logging the skip.

        Args:
            action: Name of the suppressed write.
            doc_count: Number of documents the write would have touched.

        Returns:
            True under dry-run.
        """
        if self.enabled:
            self.logger.info("dry_run_skip", action=action, doc_count=doc_count)
        return self.enabled
