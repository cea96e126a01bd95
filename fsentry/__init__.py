"""fsentry - Safe filesystem entries, traversal and transfers.

A Python library for resolving filesystem paths lazily, walking folder trees
with filters and depth limits, and copying or moving files and folders
without silently clobbering existing data.
"""

__version__ = "0.1.0"

from .errors import (
    AccessDeniedError,
    AlreadyExistsError,
    FsEntryError,
    InvalidDestinationError,
    InvalidOperationError,
    InvalidSourceError,
    NotFoundError,
)
from .models import (
    EntryKind,
    EntryMetadata,
    Error,
    FolderDiffResult,
    Overwrite,
    PathEntry,
    RenameWithDatetime,
    RenameWithEpochMs,
    RenameWithNumber,
    RenameWithSuffix,
    Skip,
    SortDirection,
    SortKey,
    SortOptions,
    TransferOptions,
    TransferResult,
    TraversalOptions,
)
from .scanning import DirectoryWalker, EntryResolver
from .operations import ConflictResolver, SafeTransfer
from .comparison import FolderDiff

__all__ = [
    "__version__",
    "FsEntryError",
    "NotFoundError",
    "InvalidSourceError",
    "InvalidDestinationError",
    "AccessDeniedError",
    "AlreadyExistsError",
    "InvalidOperationError",
    "EntryKind",
    "EntryMetadata",
    "PathEntry",
    "SortKey",
    "SortDirection",
    "SortOptions",
    "TraversalOptions",
    "RenameWithSuffix",
    "RenameWithNumber",
    "RenameWithDatetime",
    "RenameWithEpochMs",
    "Overwrite",
    "Skip",
    "Error",
    "FolderDiffResult",
    "TransferOptions",
    "TransferResult",
    "EntryResolver",
    "DirectoryWalker",
    "ConflictResolver",
    "SafeTransfer",
    "FolderDiff",
]
