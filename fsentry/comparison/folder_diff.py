"""
Shallow folder comparison.

This module contains the FolderDiff class, which compares the files directly
inside two folders by name, size and optionally content digest. It is used to
verify that a transfer produced what was expected.
"""

import logging
from typing import Dict, Optional, Pattern, Union

from fsentry.errors import InvalidOperationError
from fsentry.models import EntryKind, FolderDiffResult, PathEntry, TraversalOptions
from fsentry.scanning import DirectoryWalker, FileHasher
from fsentry.scanning.file_hasher import DEFAULT_ALGORITHM

logger = logging.getLogger(__name__)


class FolderDiff:
    """
    Classifies the files of two folders as missing, added or changed.

    Only the files directly inside each folder take part; subfolders and
    symlinks are ignored. Files are paired by exact name.
    """

    def __init__(
        self,
        walker: Optional[DirectoryWalker] = None,
        hasher: Optional[FileHasher] = None,
        cwd: Optional[str] = None,
    ) -> None:
        """
        Create a FolderDiff.

        Parameters:
            walker (Optional[DirectoryWalker]): Walker used to list both folders.
            hasher (Optional[FileHasher]): Digest source for checksum comparisons.
            cwd (Optional[str]): Directory that relative string paths are resolved against.
        """
        self.walker = walker if walker is not None else DirectoryWalker()
        self.hasher = hasher if hasher is not None else FileHasher()
        self.cwd = cwd

    @property
    def resolver(self):
        return self.walker.resolver

    def _as_entry(self, value: Union[str, PathEntry]) -> PathEntry:
        if isinstance(value, PathEntry):
            return value
        return PathEntry.from_path(value, cwd=self.cwd)

    async def diff(
        self,
        a: Union[str, PathEntry],
        b: Union[str, PathEntry],
        filter: Optional[Union[str, Pattern[str]]] = None,
        checksum: bool = False,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> FolderDiffResult:
        """
        Compare the files directly inside folders ``a`` and ``b``.

        Parameters:
            a (Union[str, PathEntry]): Reference folder, typically the transfer source.
            b (Union[str, PathEntry]): Folder to check, typically the transfer destination.
            filter (Optional[Union[str, Pattern[str]]]): Exact file name, or a compiled pattern
                searched in each name (as in TraversalOptions); other files are left out of the comparison.
            checksum (bool): Also compare content digests of same-sized files.
            algorithm (str): Digest algorithm used when ``checksum`` is set.

        Returns:
            FolderDiffResult: Sorted name lists; all empty when the folders hold the same files.

        Raises:
            InvalidOperationError: If either side is not a folder.
            FsEntryError: If a folder cannot be listed or a file cannot be read.
        """
        left = self._as_entry(a)
        right = self._as_entry(b)
        for entry in (left, right):
            await self.resolver.resolve(entry, force=True)
            if entry.kind is not EntryKind.FOLDER:
                raise InvalidOperationError(
                    entry.path, "diff", f"entry is {entry.kind.value}, not a folder"
                )

        options = TraversalOptions(match=filter, levels=0)

        left_files = await self._files_by_name(left, options)
        right_files = await self._files_by_name(right, options)

        result = FolderDiffResult(
            missing=sorted(set(left_files) - set(right_files)),
            added=sorted(set(right_files) - set(left_files)),
        )

        for name in sorted(set(left_files) & set(right_files)):
            left_file = left_files[name]
            right_file = right_files[name]
            if left_file.metadata.size != right_file.metadata.size:
                result.changed.append(name)
                continue
            if checksum:
                left_digest = await self.hasher.digest(left_file.path, algorithm)
                right_digest = await self.hasher.digest(right_file.path, algorithm)
                if left_digest != right_digest:
                    result.changed.append(name)

        logger.debug(
            f"Compared {left.path} and {right.path}: {len(result.missing)} missing, "
            f"{len(result.added)} added, {len(result.changed)} changed"
        )
        return result

    async def compare(
        self,
        a: Union[str, PathEntry],
        b: Union[str, PathEntry],
        filter: Optional[Union[str, Pattern[str]]] = None,
        checksum: bool = False,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> bool:
        """Return True when ``diff`` finds no missing, added or changed files."""
        result = await self.diff(a, b, filter=filter, checksum=checksum, algorithm=algorithm)
        return result.is_empty

    async def _files_by_name(
        self, folder: PathEntry, options: TraversalOptions
    ) -> Dict[str, PathEntry]:
        await self.walker.get_children(folder, options)
        files: Dict[str, PathEntry] = {}
        for entry in folder.files:
            await self.resolver.resolve(entry, force=True)
            # The file may have been replaced since the listing.
            if entry.kind is EntryKind.FILE:
                files[entry.name] = entry
        return files
