"""
Unit tests for FileHasher in fsentry.scanning.file_hasher.

Tests cover:
- SHA256 and alternative algorithms
- Empty and chunked files
- Cache behavior and invalidation on change
- Error handling (missing file, unsupported algorithm)
"""

import asyncio
import hashlib
import os
from pathlib import Path

import pytest

from fsentry.errors import NotFoundError
from fsentry.scanning import FileHasher
from fsentry.scanning.file_hasher import CHUNK_SIZE


@pytest.mark.unit
class TestFileHasherBasic:
    """Basic FileHasher functionality tests."""

    def test_digest_basic(self, temp_dir: Path):
        """Hash small text file, verify SHA256 output format."""
        content = "Hello, World! This is test content."
        test_file = temp_dir / "test.txt"
        test_file.write_text(content)

        result = asyncio.run(FileHasher().digest(str(test_file)))

        assert result == hashlib.sha256(content.encode()).hexdigest()
        assert len(result) == 64

    def test_digest_empty_file(self, temp_dir: Path):
        test_file = temp_dir / "empty.txt"
        test_file.write_text("")
        result = asyncio.run(FileHasher().digest(str(test_file)))
        assert result == hashlib.sha256(b"").hexdigest()

    def test_digest_spans_several_chunks(self, temp_dir: Path):
        content = os.urandom(CHUNK_SIZE * 3 + 17)
        test_file = temp_dir / "large.bin"
        test_file.write_bytes(content)
        result = asyncio.run(FileHasher().digest(str(test_file)))
        assert result == hashlib.sha256(content).hexdigest()

    def test_other_algorithm(self, temp_dir: Path):
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"abc")
        result = asyncio.run(FileHasher().digest(str(test_file), "md5"))
        assert result == hashlib.md5(b"abc").hexdigest()

    def test_unsupported_algorithm(self, temp_dir: Path):
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"abc")
        with pytest.raises(ValueError):
            asyncio.run(FileHasher().digest(str(test_file), "not-a-hash"))

    def test_missing_file(self, temp_dir: Path):
        with pytest.raises(NotFoundError) as exc_info:
            asyncio.run(FileHasher().digest(str(temp_dir / "nope.txt")))
        assert exc_info.value.operation == "digest"


@pytest.mark.unit
class TestFileHasherCache:
    """Cache behavior tests."""

    def test_second_digest_hits_cache(self, temp_dir: Path):
        hasher = FileHasher()
        test_file = temp_dir / "test.txt"
        test_file.write_text("cached")

        first = asyncio.run(hasher.digest(str(test_file)))
        second = asyncio.run(hasher.digest(str(test_file)))

        assert first == second
        assert hasher.get_cache_stats() == {"size": 1, "hits": 1, "misses": 1}

    def test_changed_file_is_hashed_again(self, temp_dir: Path):
        hasher = FileHasher()
        test_file = temp_dir / "test.txt"
        test_file.write_text("one")
        first = asyncio.run(hasher.digest(str(test_file)))

        test_file.write_text("three")
        second = asyncio.run(hasher.digest(str(test_file)))

        assert first != second
        assert hasher.get_cache_stats()["misses"] == 2

    def test_algorithms_cached_separately(self, temp_dir: Path):
        hasher = FileHasher()
        test_file = temp_dir / "test.txt"
        test_file.write_text("x")
        asyncio.run(hasher.digest(str(test_file), "sha256"))
        asyncio.run(hasher.digest(str(test_file), "sha1"))
        assert hasher.get_cache_stats()["size"] == 2

    def test_clear_cache(self, temp_dir: Path):
        hasher = FileHasher()
        test_file = temp_dir / "test.txt"
        test_file.write_text("x")
        asyncio.run(hasher.digest(str(test_file)))
        hasher.clear_cache()
        assert hasher.get_cache_stats() == {"size": 0, "hits": 0, "misses": 0}

    def test_concurrent_digests_keep_stats_consistent(self, temp_dir: Path):
        hasher = FileHasher()
        paths = []
        for index in range(8):
            test_file = temp_dir / f"file{index}.txt"
            test_file.write_text(f"content {index}")
            paths.append(str(test_file))

        async def run():
            first = await asyncio.gather(*(hasher.digest(path) for path in paths))
            second = await asyncio.gather(*(hasher.digest(path) for path in paths))
            return first, second

        first, second = asyncio.run(run())

        assert first == second
        assert first[3] == hashlib.sha256(b"content 3").hexdigest()
        assert hasher.get_cache_stats() == {"size": 8, "hits": 8, "misses": 8}
