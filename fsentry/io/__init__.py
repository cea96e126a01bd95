"""Low-level I/O package for fsentry.

This package provides the LocalFileSystem class, the asynchronous collaborator
that performs stat probes, directory listings, copies, moves and removals on
the host filesystem.

Example:
    >>> from fsentry.io import LocalFileSystem
    >>> fs = LocalFileSystem()
    >>> hints = await fs.list_dir("/data")
"""

from .local_filesystem import DirEntryHint, LocalFileSystem, StatResult

__all__ = ["LocalFileSystem", "StatResult", "DirEntryHint"]
