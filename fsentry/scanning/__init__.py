"""Filesystem scanning package for fsentry.

This package provides the classes that probe the filesystem:

- EntryResolver: Resolves a PathEntry's kind and metadata with a single stat
  probe, and invalidates entries whose identity changed.
- DirectoryWalker: Enumerates a folder's children with filtering, depth
  limits, concurrent descent and sorting.
- FileHasher: Computes content digests with caching support, for checksum
  comparisons.

Example:
    >>> from fsentry.scanning import DirectoryWalker, EntryResolver
    >>> resolver = EntryResolver()
    >>> folder = await resolver.resolve(PathEntry.from_path("/data"))
    >>> entries = await DirectoryWalker(resolver).get_children(folder)
"""

from .entry_resolver import EntryResolver
from .directory_walker import DirectoryWalker
from .file_hasher import FileHasher

__all__ = ["EntryResolver", "DirectoryWalker", "FileHasher"]
