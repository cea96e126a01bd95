"""Pytest fixtures for fsentry tests."""

import io
import os
import tempfile
from pathlib import Path
from typing import Generator, Optional

import pytest
from rich.console import Console

from fsentry.scanning import DirectoryWalker, EntryResolver
from fsentry.ui import TransferConsole


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single class")
    config.addinivalue_line("markers", "integration: tests that drive several components on a real tree")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def resolver() -> EntryResolver:
    return EntryResolver()


@pytest.fixture
def walker(resolver: EntryResolver) -> DirectoryWalker:
    return DirectoryWalker(resolver)


@pytest.fixture
def source_tree(temp_dir: Path) -> Path:
    """Create a small source tree for transfer and traversal tests.

    Creates:
        temp_dir/source/
        ├── a.txt (10 bytes)
        ├── b.log (5 bytes)
        ├── c.txt (20 bytes)
        ├── empty/
        └── sub/
            ├── d.txt (3 bytes)
            └── deep/
                └── e.txt (4 bytes)

    Returns:
        Path to temp_dir/source.
    """
    source = temp_dir / "source"
    source.mkdir()
    (source / "a.txt").write_bytes(b"a" * 10)
    (source / "b.log").write_bytes(b"b" * 5)
    (source / "c.txt").write_bytes(b"c" * 20)
    (source / "empty").mkdir()

    sub = source / "sub"
    sub.mkdir()
    (sub / "d.txt").write_bytes(b"d" * 3)

    deep = sub / "deep"
    deep.mkdir()
    (deep / "e.txt").write_bytes(b"e" * 4)

    return source


@pytest.fixture
def symlink_file(temp_dir: Path) -> Generator[Optional[Path], None, None]:
    """Create a symlink to a regular file.

    Yields:
        Path to the symlink, or None if symlinks are not supported.
    """
    target_file = temp_dir / "target.txt"
    target_file.write_text("target content")

    symlink_path = temp_dir / "link.txt"

    try:
        symlink_path.symlink_to(target_file)
        yield symlink_path
    except OSError:
        # Symlinks not supported on this platform/configuration
        yield None


@pytest.fixture
def console_with_captured_output() -> TransferConsole:
    """Create a TransferConsole with Console output captured to StringIO.

    Access captured output via: ui.console.file.getvalue()
    """
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=160)
    return TransferConsole(console=console)
