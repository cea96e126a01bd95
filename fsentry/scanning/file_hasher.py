"""File hashing utility with caching support.

This module provides the FileHasher class for computing content digests of
files with an in-memory cache to avoid redundant hashing operations. It is
used by FolderDiff when a checksum comparison is requested.

Example:
    >>> from fsentry.scanning import FileHasher
    >>> hasher = FileHasher()
    >>> digest = await hasher.digest("/path/to/file.txt")
    >>> print(f"SHA256: {digest}")
"""

import asyncio
import hashlib
import os
from typing import Dict, Tuple

from fsentry.errors import translate_os_error

# Buffer size for chunked file reading (8KB)
CHUNK_SIZE = 8192

DEFAULT_ALGORITHM = "sha256"


class FileHasher:
    """Computes file digests with caching support.

    The cache is keyed by (path, modification time, size, algorithm), so a
    file that changes on disk is hashed again while repeated comparisons of
    an unchanged file are served from memory.

    Files are read in 8KB chunks so large files are never loaded entirely
    into memory. Read failures propagate as fsentry errors.

    Attributes:
        _cache: Dictionary mapping cache keys to hex digests.
        _cache_hits: Counter for cache hits (for debugging/statistics).
        _cache_misses: Counter for cache misses (for debugging/statistics).

    Example:
        >>> hasher = FileHasher()
        >>> first = await hasher.digest("file.txt")
        >>> second = await hasher.digest("file.txt")  # Uses cache
        >>> stats = hasher.get_cache_stats()
        >>> print(f"Hits: {stats['hits']}, Misses: {stats['misses']}")
    """

    def __init__(self) -> None:
        """Initialize the FileHasher with an empty cache."""
        self._cache: Dict[Tuple[str, float, int, str], str] = {}
        self._cache_hits: int = 0
        self._cache_misses: int = 0

    async def digest(self, path: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
        """Compute the hex digest of a file's contents.

        Args:
            path: Path to the file to hash.
            algorithm: Any name accepted by hashlib.new (e.g. "sha256", "sha1", "md5").

        Returns:
            The hex digest string.

        Raises:
            ValueError: If the algorithm is not available.
            FsEntryError: If the file cannot be read (e.g. NotFoundError,
                AccessDeniedError).
        """
        if algorithm not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")
        stat_result = await asyncio.to_thread(self._stat, path)

        # Cache and counters are only touched on the event loop, never in a worker thread.
        cache_key = (path, stat_result.st_mtime, stat_result.st_size, algorithm)
        if cache_key in self._cache:
            self._cache_hits += 1
            return self._cache[cache_key]

        self._cache_misses += 1
        hash_value = await asyncio.to_thread(self._compute_hash, path, algorithm)
        self._cache[cache_key] = hash_value
        return hash_value

    def _stat(self, path: str) -> os.stat_result:
        try:
            return os.stat(path)
        except OSError as e:
            raise translate_os_error(e, path, "digest") from e

    def _compute_hash(self, path: str, algorithm: str) -> str:
        """Compute a digest by reading the file in chunks."""
        hasher = hashlib.new(algorithm)
        try:
            with open(path, "rb") as f:
                while True:
                    chunk = f.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    hasher.update(chunk)
        except OSError as e:
            raise translate_os_error(e, path, "digest") from e
        return hasher.hexdigest()

    def clear_cache(self) -> None:
        """Clear the internal hash cache and reset the hit/miss counters."""
        self._cache.clear()
        self._cache_hits = 0
        self._cache_misses = 0

    def get_cache_stats(self) -> Dict[str, int]:
        """Get cache statistics for debugging and monitoring.

        Returns:
            Dictionary containing:
            - 'size': Number of entries in the cache
            - 'hits': Number of cache hits
            - 'misses': Number of cache misses
        """
        return {
            "size": len(self._cache),
            "hits": self._cache_hits,
            "misses": self._cache_misses,
        }
