"""
Models package for fsentry.

This package provides convenient imports for all data models:
- EntryKind: Enum for what a path refers to
- EntryMetadata, PathEntry: Filesystem entry value types
- SortKey, SortDirection, SortOptions, TraversalOptions: Traversal options
- Conflict strategies and ConflictDecision: Safe-copy conflict policies
- FolderDiffResult: Folder comparison result
- TransferOptions, TransferRecord, TransferResult: Safe transfer state
"""

from .entry_kind import EntryKind
from .conflict_strategy import (
    DEFAULT_CONFLICT_STRATEGY,
    ConflictAction,
    ConflictDecision,
    ConflictStrategy,
    ConflictStrategyType,
    Error,
    Overwrite,
    RenameWithDatetime,
    RenameWithEpochMs,
    RenameWithNumber,
    RenameWithSuffix,
    Skip,
)
from .data_models import (
    EntryMetadata,
    FolderDiffResult,
    PathEntry,
    SortDirection,
    SortKey,
    SortOptions,
    TransferAction,
    TransferOptions,
    TransferRecord,
    TransferResult,
    TraversalOptions,
)

__all__ = [
    "EntryKind",
    "EntryMetadata",
    "PathEntry",
    "SortKey",
    "SortDirection",
    "SortOptions",
    "TraversalOptions",
    "FolderDiffResult",
    "ConflictStrategy",
    "ConflictStrategyType",
    "RenameWithSuffix",
    "RenameWithNumber",
    "RenameWithDatetime",
    "RenameWithEpochMs",
    "Overwrite",
    "Skip",
    "Error",
    "DEFAULT_CONFLICT_STRATEGY",
    "ConflictAction",
    "ConflictDecision",
    "TransferAction",
    "TransferOptions",
    "TransferRecord",
    "TransferResult",
]
