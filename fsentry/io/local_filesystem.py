"""Low-level filesystem access for fsentry.

This module provides the LocalFileSystem class, the only place fsentry calls
the operating system. Every method is a coroutine that runs the blocking
platform call in a worker thread, and every OSError is translated into the
fsentry error hierarchy with the path and operation attached.

Example:
    >>> fs = LocalFileSystem()
    >>> stat = await fs.stat_path("/etc/hosts")
    >>> if stat is None:
    ...     print("missing")
"""

import asyncio
import errno
import logging
import os
import shutil
import stat
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from fsentry.errors import (
    AlreadyExistsError,
    InvalidOperationError,
    translate_os_error,
)
from fsentry.models import EntryKind

logger = logging.getLogger(__name__)

# errnos that mean "nothing at this path" for a stat probe
_NOT_FOUND_ERRNOS = (errno.ENOENT, errno.ENOTDIR)


@dataclass(frozen=True)
class StatResult:
    """Result of a successful lstat probe."""
    kind: EntryKind
    size: int
    created_at: datetime
    modified_at: datetime


@dataclass(frozen=True)
class DirEntryHint:
    """One directory listing entry with its cheap kind classification."""
    name: str
    kind: EntryKind


def _classify(mode: int) -> Optional[EntryKind]:
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryKind.FOLDER
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return None


class LocalFileSystem:
    """Asynchronous wrapper over the host filesystem.

    Symbolic links are never followed: probes use lstat and listings classify
    links as SYMLINK. Special files (FIFOs, sockets, devices) are left out of
    listings.
    """

    async def stat_path(self, path: str) -> Optional[StatResult]:
        """
        Probe a path without following symlinks.

        Parameters:
            path (str): Absolute path to probe.

        Returns:
            StatResult for an existing file, folder or symlink, or None if nothing exists at the path.

        Raises:
            InvalidOperationError: If the path is a special file.
            FsEntryError: For any other platform failure (e.g. AccessDeniedError).
        """
        return await asyncio.to_thread(self._stat_path, path)

    def _stat_path(self, path: str) -> Optional[StatResult]:
        try:
            st = os.lstat(path)
        except OSError as e:
            if e.errno in _NOT_FOUND_ERRNOS:
                return None
            raise translate_os_error(e, path, "stat") from e

        kind = _classify(st.st_mode)
        if kind is None:
            raise InvalidOperationError(path, "stat", "unsupported file type")

        created = getattr(st, "st_birthtime", None)
        if created is None:
            created = st.st_ctime
        return StatResult(
            kind=kind,
            size=st.st_size,
            created_at=datetime.fromtimestamp(created),
            modified_at=datetime.fromtimestamp(st.st_mtime),
        )

    async def list_dir(self, path: str) -> List[DirEntryHint]:
        """List a directory's immediate entries with kind hints from the listing itself."""
        return await asyncio.to_thread(self._list_dir, path)

    def _list_dir(self, path: str) -> List[DirEntryHint]:
        hints: List[DirEntryHint] = []
        try:
            with os.scandir(path) as it:
                for dir_entry in it:
                    if dir_entry.is_symlink():
                        kind = EntryKind.SYMLINK
                    elif dir_entry.is_dir(follow_symlinks=False):
                        kind = EntryKind.FOLDER
                    elif dir_entry.is_file(follow_symlinks=False):
                        kind = EntryKind.FILE
                    else:
                        logger.debug(f"Ignoring special file: {dir_entry.path}")
                        continue
                    hints.append(DirEntryHint(name=dir_entry.name, kind=kind))
        except OSError as e:
            raise translate_os_error(e, path, "list_dir") from e
        return hints

    async def copy_file(
        self,
        src: str,
        dest: str,
        overwrite: bool = True,
        preserve_timestamps: bool = True,
    ) -> None:
        """
        Copy a regular file's bytes to ``dest``.

        Parameters:
            src (str): Source file path.
            dest (str): Destination file path; its parent must exist.
            overwrite (bool): If False, fail when ``dest`` already exists.
            preserve_timestamps (bool): Copy access/modification times and mode bits as well.

        Raises:
            AlreadyExistsError: If ``overwrite`` is False and ``dest`` exists.
        """
        await asyncio.to_thread(self._copy_file, src, dest, overwrite, preserve_timestamps)

    def _copy_file(self, src: str, dest: str, overwrite: bool, preserve_timestamps: bool) -> None:
        if not overwrite and os.path.lexists(dest):
            raise AlreadyExistsError(dest, "copy", "destination exists")
        try:
            if preserve_timestamps:
                shutil.copy2(src, dest, follow_symlinks=False)
            else:
                shutil.copyfile(src, dest, follow_symlinks=False)
        except OSError as e:
            raise translate_os_error(e, dest, "copy") from e

    async def move_file(self, src: str, dest: str, overwrite: bool = True) -> None:
        """Move a file, replacing ``dest`` when ``overwrite`` is set. Falls back to copy+unlink across devices."""
        await asyncio.to_thread(self._move_file, src, dest, overwrite)

    def _move_file(self, src: str, dest: str, overwrite: bool) -> None:
        if not overwrite and os.path.lexists(dest):
            raise AlreadyExistsError(dest, "move", "destination exists")
        try:
            os.replace(src, dest)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise translate_os_error(e, src, "move") from e
            try:
                shutil.copy2(src, dest, follow_symlinks=False)
                os.unlink(src)
            except OSError as inner:
                raise translate_os_error(inner, src, "move") from inner

    async def move_dir(self, src: str, dest: str, overwrite: bool = False) -> None:
        """Move a directory tree. With ``overwrite`` an existing ``dest`` tree is removed first."""
        await asyncio.to_thread(self._move_dir, src, dest, overwrite)

    def _move_dir(self, src: str, dest: str, overwrite: bool) -> None:
        if os.path.lexists(dest):
            if not overwrite:
                raise AlreadyExistsError(dest, "move_dir", "destination exists")
            self._remove_dir(dest, recursive=True)
        try:
            shutil.move(src, dest)
        except OSError as e:
            raise translate_os_error(e, src, "move_dir") from e

    async def remove_file(self, path: str) -> None:
        await asyncio.to_thread(self._remove_file, path)

    def _remove_file(self, path: str) -> None:
        try:
            os.unlink(path)
        except OSError as e:
            raise translate_os_error(e, path, "remove") from e

    async def remove_dir(self, path: str, recursive: bool = False) -> None:
        """Remove a directory; only an empty one unless ``recursive`` is set."""
        await asyncio.to_thread(self._remove_dir, path, recursive)

    def _remove_dir(self, path: str, recursive: bool) -> None:
        try:
            if recursive:
                shutil.rmtree(path)
            else:
                os.rmdir(path)
        except OSError as e:
            raise translate_os_error(e, path, "remove_dir") from e

    async def make_dirs(self, path: str) -> None:
        """Create a directory and any missing ancestors (mkdir -p)."""
        await asyncio.to_thread(self._make_dirs, path)

    def _make_dirs(self, path: str) -> None:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise translate_os_error(e, path, "make_dirs") from e
