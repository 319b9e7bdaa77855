"""Public SDK surface for Sweep.

This module provides a stable import path for scripted purges.
It re-exports the primary client, pipeline components, and typed results.
"""

from __future__ import annotations

from cleanup.batch_selector import BatchSelector
from cleanup.cascade_cleaner import CascadeCleaner
from cleanup.confirmation import (
    AssumeYesGate,
    ConfirmationGate,
    ConfirmationResult,
    PromptConfirmationGate,
)
from cleanup.document_filters import filter_by_date_range, filter_by_type
from cleanup.dry_run import DryRunPolicy
from cleanup.reference_resolver import ReferenceResolver
from cleanup.sweep_client import SweepClient
from cleanup.tombstones import TombstoneWriter
from core.config import SweepConfig
from core.plan_execution import execute_cleanup_plan_file
from core.types import BranchInfo, PurgeResult, SubjectCleanup, WriteResult
from store.audit_writer import AuditWriter, load_snapshot
from store.couch_gateway import CouchGateway
from store.document_store import DocumentStore

__all__ = [
    "AssumeYesGate",
    "AuditWriter",
    "BatchSelector",
    "BranchInfo",
    "CascadeCleaner",
    "ConfirmationGate",
    "ConfirmationResult",
    "CouchGateway",
    "DocumentStore",
    "DryRunPolicy",
    "PromptConfirmationGate",
    "PurgeResult",
    "ReferenceResolver",
    "SubjectCleanup",
    "SweepClient",
    "SweepConfig",
    "TombstoneWriter",
    "WriteResult",
    "execute_cleanup_plan_file",
    "filter_by_date_range",
    "filter_by_type",
    "load_snapshot",
]
