"""
Core data models for fsentry.

This module contains the following dataclasses:
- EntryMetadata: Size and timestamps captured by a stat probe
- PathEntry: One filesystem path and its (possibly unresolved) kind
- SortOptions / TraversalOptions: Options for DirectoryWalker.get_children
- FolderDiffResult: Shallow classification of two folders' files
- TransferOptions: Options for SafeTransfer.transfer
- TransferRecord: One file handled during a transfer
- TransferResult: Tracks the state and results of a transfer
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional, Pattern, Union

from fsentry.errors import InvalidOperationError

from .conflict_strategy import ConflictStrategy
from .entry_kind import EntryKind


@dataclass
class EntryMetadata:
    """Metadata captured by a stat probe."""
    size: int                         # Bytes
    created_at: datetime              # Birth time where available, else ctime
    modified_at: datetime             # Last content modification


@dataclass
class PathEntry:
    """A filesystem path whose kind may not be known yet.

    The entry is a value: it holds a snapshot of what the path referred to
    when it was last probed. ``kind`` stays UNKNOWN until a hint is attached
    or a probe completes, and a resolved snapshot is never re-probed unless
    the caller forces it.

    The child partition (``files``, ``folders``, ``symlinks``) is filled by
    DirectoryWalker.get_children and replaced on every call.
    """
    path: str                                   # Absolute, normalized
    kind: EntryKind = EntryKind.UNKNOWN
    metadata: Optional[EntryMetadata] = None
    hint: Optional[EntryKind] = None            # Kind from a parent listing
    files: List["PathEntry"] = field(default_factory=list, repr=False, compare=False)
    folders: List["PathEntry"] = field(default_factory=list, repr=False, compare=False)
    symlinks: List["PathEntry"] = field(default_factory=list, repr=False, compare=False)
    children_read: bool = field(default=False, repr=False, compare=False)

    @classmethod
    def from_path(cls, path: str, cwd: Optional[str] = None) -> "PathEntry":
        """
        Create an unresolved entry from a path string.

        A leading ``~`` is expanded. Relative paths are joined onto ``cwd``;
        the process working directory is never consulted.

        Parameters:
            path (str): Absolute path, or path relative to ``cwd``.
            cwd (Optional[str]): Directory that relative paths are resolved against.

        Returns:
            PathEntry: Entry with kind UNKNOWN and a normalized absolute path.

        Raises:
            InvalidOperationError: If ``path`` is relative and no ``cwd`` was given.
        """
        expanded = os.path.expanduser(os.fspath(path))
        if not os.path.isabs(expanded):
            if cwd is None:
                raise InvalidOperationError(
                    expanded, "resolve_path", "relative path requires an explicit cwd"
                )
            expanded = os.path.join(os.path.expanduser(os.fspath(cwd)), expanded)
            if not os.path.isabs(expanded):
                raise InvalidOperationError(
                    expanded, "resolve_path", "cwd must be an absolute path"
                )
        return cls(path=os.path.normpath(expanded))

    @classmethod
    def from_hint(cls, parent_path: str, name: str, hint: EntryKind) -> "PathEntry":
        """Create an entry whose kind comes from a directory-listing hint."""
        return cls(path=os.path.join(parent_path, name), kind=hint, hint=hint)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def stem(self) -> str:
        return os.path.splitext(self.name)[0]

    @property
    def suffix(self) -> str:
        return os.path.splitext(self.name)[1]

    @property
    def parent_path(self) -> str:
        return os.path.dirname(self.path)

    @property
    def is_resolved(self) -> bool:
        """True once a probe has produced a snapshot (including MISSING)."""
        return self.metadata is not None or self.kind is EntryKind.MISSING

    def join(self, *names: str) -> "PathEntry":
        """Return a new, unresolved entry for a path below this one."""
        return PathEntry(path=os.path.normpath(os.path.join(self.path, *names)))

    def with_name(self, name: str) -> "PathEntry":
        """Return a new, unresolved entry for a sibling named ``name``."""
        return PathEntry(path=os.path.join(self.parent_path, name))

    def with_suffix(self, suffix: str) -> "PathEntry":
        """Return a new, unresolved entry with the extension replaced."""
        if suffix and not suffix.startswith("."):
            suffix = "." + suffix
        return self.with_name(self.stem + suffix)

    def with_stem(self, stem: str) -> "PathEntry":
        """Return a new, unresolved entry with the base name replaced."""
        return self.with_name(stem + self.suffix)


class SortKey(Enum):
    """What DirectoryWalker sorts files by."""
    ALPHABETICAL = "alphabetical"
    SIZE = "size"


class SortDirection(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass
class SortOptions:
    """Sorting applied to a folder's partition after traversal."""
    by: SortKey = SortKey.ALPHABETICAL
    direction: SortDirection = SortDirection.ASCENDING


@dataclass
class TraversalOptions:
    """Options for DirectoryWalker.get_children.

    ``levels`` is the depth still to descend: 0 lists the folder only, None
    descends without limit. With ``recurse_unmatched`` the ``match`` filter
    applies to results only, and subfolders whose names fail it are still
    entered.
    """
    match: Optional[Union[str, Pattern[str]]] = None
    levels: Optional[int] = 0
    sort: Optional[SortOptions] = None
    on_match: Optional[Callable[[PathEntry], Any]] = None
    recurse_unmatched: bool = False

    def __post_init__(self) -> None:
        if self.levels is not None and self.levels < 0:
            raise ValueError(f"levels must be non-negative, got {self.levels}")

    def matches(self, name: str) -> bool:
        """Check a name against ``match``: strings compare exactly, patterns search."""
        if self.match is None:
            return True
        if isinstance(self.match, str):
            return name == self.match
        return self.match.search(name) is not None

    def next_level(self) -> Optional[int]:
        return None if self.levels is None else self.levels - 1

    def descends(self) -> bool:
        return self.levels is None or self.levels > 0


@dataclass
class FolderDiffResult:
    """Shallow comparison of the files directly inside two folders."""
    missing: List[str] = field(default_factory=list)   # In A, absent from B
    added: List[str] = field(default_factory=list)     # In B, absent from A
    changed: List[str] = field(default_factory=list)   # In both, size or hash differs

    @property
    def is_empty(self) -> bool:
        return not (self.missing or self.added or self.changed)


class TransferAction(Enum):
    """What happened to one source file."""
    COPIED = "copied"
    MOVED = "moved"
    SKIPPED = "skipped"


@dataclass
class TransferOptions:
    """Options for SafeTransfer.transfer.

    ``conflict_strategy`` of None means the documented default, Error().
    """
    move: bool = False
    conflict_strategy: Optional[ConflictStrategy] = None
    dry_run: bool = False
    best_effort: bool = False
    preserve_timestamps: bool = True
    progress_callback: Optional[Callable[[int, int], None]] = None


@dataclass
class TransferRecord:
    """One file handled (or skipped) during a transfer."""
    source: str
    destination: str
    action: TransferAction
    backup_path: Optional[str] = None   # Where the existing destination went


@dataclass
class TransferResult:
    """Tracks the state and results of a transfer."""
    source: str                       # Source path
    destination: str                  # Destination path as given
    move: bool                        # Move instead of copy
    dry_run: bool                     # Dry run mode flag
    timestamp: datetime               # Operation start time
    files_copied: int = 0             # Files copied
    files_moved: int = 0              # Files moved
    files_skipped: int = 0            # Files left alone by the Skip decision
    backups_created: int = 0          # Existing destinations relocated
    folders_created: int = 0          # Destination folders created
    symlinks_skipped: int = 0         # Symlinks inside a source folder
    source_removed: bool = False      # Source folder removed after a move
    duration_seconds: float = 0.0     # Wall-clock duration
    records: List[TransferRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)  # Best-effort error messages

    @property
    def succeeded(self) -> bool:
        return not self.errors
