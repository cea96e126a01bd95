"""Deferred identity resolution for PathEntry values.

This module provides the EntryResolver class, which turns an UNKNOWN or
hinted PathEntry into a resolved snapshot with a single stat probe, and the
invalidation rule applied whenever a path's identity changes.

Example:
    >>> from fsentry.scanning import EntryResolver
    >>> resolver = EntryResolver()
    >>> entry = await resolver.resolve(PathEntry.from_path("/data/report.txt"))
    >>> entry.kind
    <EntryKind.FILE: 'file'>
"""

import logging
from typing import Optional

from fsentry.io import LocalFileSystem
from fsentry.models import EntryKind, EntryMetadata, PathEntry

logger = logging.getLogger(__name__)


class EntryResolver:
    """Resolves and invalidates PathEntry snapshots.

    The resolver holds no state of its own; each entry's cache lives on the
    entry. A resolved entry (metadata present, or kind MISSING) is returned
    untouched unless ``force`` is set.

    Attributes:
        filesystem: The LocalFileSystem used for stat probes.
    """

    def __init__(self, filesystem: Optional[LocalFileSystem] = None) -> None:
        """Initialize the resolver.

        Args:
            filesystem: Optional LocalFileSystem. If not provided, a new
                instance will be created.
        """
        self.filesystem = filesystem if filesystem is not None else LocalFileSystem()

    async def resolve(self, entry: PathEntry, force: bool = False) -> PathEntry:
        """Populate an entry's kind and metadata from a stat probe.

        Non-existence is a valid outcome: the entry becomes MISSING with no
        metadata and no error is raised. The hint, if any, is kept.

        Args:
            entry: The entry to resolve. It is updated in place.
            force: Probe even if the entry already holds a snapshot.

        Returns:
            The same entry, for chaining.

        Raises:
            FsEntryError: For probe failures other than "not found".
        """
        if entry.is_resolved and not force:
            return entry

        result = await self.filesystem.stat_path(entry.path)
        if result is None:
            entry.kind = EntryKind.MISSING
            entry.metadata = None
            return entry

        entry.kind = result.kind
        entry.metadata = EntryMetadata(
            size=result.size,
            created_at=result.created_at,
            modified_at=result.modified_at,
        )
        return entry

    async def exists(self, path: str) -> bool:
        """Check whether anything (including a dangling symlink) exists at ``path``."""
        return await self.filesystem.stat_path(path) is not None

    @staticmethod
    def invalidate(entry: PathEntry) -> PathEntry:
        """Reset an entry to unresolved after its path's identity changed.

        Called after anything that renames, moves, removes or rewrites what
        the path refers to. The child partition is dropped as well.
        """
        entry.kind = EntryKind.UNKNOWN
        entry.metadata = None
        entry.hint = None
        entry.files = []
        entry.folders = []
        entry.symlinks = []
        entry.children_read = False
        return entry
