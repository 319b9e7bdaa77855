"""Sweep exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class SweepError(Exception):
    """Base exception for all Sweep failures."""


class SweepConfigError(SweepError):
    """Raised for invalid runtime configuration."""


class SweepStoreError(SweepError):
    """Raised for failed reads or writes against the document store."""


class SweepAuditError(SweepError, OSError):
    """Raised when a pre-mutation snapshot cannot be written or read."""


class SweepPlanError(SweepError):
    """Raised for invalid or unsupported cleanup plan files."""
