"""Depth-limited, filter-matching folder traversal.

This module provides the DirectoryWalker class. A walk lists one folder,
builds hinted PathEntry values for its children without extra stat calls,
and descends into subfolders concurrently, joining every descent and every
``on_match`` callback before it returns.

Example:
    >>> walker = DirectoryWalker()
    >>> folder = await walker.resolver.resolve(PathEntry.from_path("/data"))
    >>> entries = await walker.get_children(folder, TraversalOptions(levels=1))
    >>> [e.name for e in folder.files]
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional

from fsentry.errors import InvalidOperationError
from fsentry.models import (
    EntryKind,
    PathEntry,
    SortDirection,
    SortKey,
    SortOptions,
    TraversalOptions,
)

from .entry_resolver import EntryResolver

logger = logging.getLogger(__name__)


async def _gather_fail_fast(aws: List[Awaitable[Any]]) -> List[Any]:
    """Run awaitables concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def _run_callback(callback: Callable[[PathEntry], Any], entry: PathEntry) -> None:
    result = callback(entry)
    if inspect.isawaitable(result):
        await result


class DirectoryWalker:
    """Enumerates a folder's children, optionally descending into subfolders.

    Descents into sibling subfolders run concurrently and complete in no
    particular order; the call returns only after all of them, and all
    ``on_match`` callbacks, have finished. The first listing failure anywhere
    in the tree aborts the whole call.

    Attributes:
        resolver: EntryResolver used to fetch sizes when sorting by size.
    """

    def __init__(self, resolver: Optional[EntryResolver] = None) -> None:
        self.resolver = resolver if resolver is not None else EntryResolver()

    async def get_children(
        self,
        folder: PathEntry,
        options: Optional[TraversalOptions] = None,
    ) -> List[PathEntry]:
        """
        Enumerate the matching children of a resolved folder.

        Each folder visited has its partition (``files``, ``folders``, ``symlinks``) replaced
        with its own direct matching children. The returned list is flat: the folder's own
        matches first, then the matches found inside each entered subfolder.

        Parameters:
            folder (PathEntry): Entry already resolved (or hinted) as FOLDER.
            options (Optional[TraversalOptions]): Filter, depth, sort and callback. Defaults to this level only.

        Returns:
            List[PathEntry]: Every matching entry found, descendants included when ``levels`` allows.

        Raises:
            InvalidOperationError: If ``folder`` is not known to be a FOLDER.
            AccessDeniedError: If a folder in the walk cannot be listed.
        """
        if options is None:
            options = TraversalOptions()
        if folder.kind is not EntryKind.FOLDER:
            raise InvalidOperationError(
                folder.path, "get_children", f"entry is {folder.kind.value}, not a folder"
            )
        return await self._walk(folder, options)

    async def _walk(self, folder: PathEntry, options: TraversalOptions) -> List[PathEntry]:
        hints = await self.resolver.filesystem.list_dir(folder.path)

        folder.files = []
        folder.folders = []
        folder.symlinks = []
        folder.children_read = False

        matched: List[PathEntry] = []
        descend: List[PathEntry] = []
        callbacks: List[Awaitable[None]] = []
        child_options = None

        for hint in hints:
            entry = PathEntry.from_hint(folder.path, hint.name, hint.kind)
            is_match = options.matches(entry.name)

            if is_match:
                matched.append(entry)
                self._partition(folder, entry)
                if options.on_match is not None:
                    callbacks.append(_run_callback(options.on_match, entry))

            if (
                entry.kind is EntryKind.FOLDER
                and options.descends()
                and (is_match or options.recurse_unmatched)
            ):
                descend.append(entry)

        if descend:
            child_options = TraversalOptions(
                match=options.match,
                levels=options.next_level(),
                sort=options.sort,
                on_match=options.on_match,
                recurse_unmatched=options.recurse_unmatched,
            )

        walks = [self._walk(entry, child_options) for entry in descend]
        results = await _gather_fail_fast(walks + callbacks)
        nested = results[: len(walks)]

        folder.children_read = True
        logger.debug(
            f"Listed {folder.path}: {len(folder.folders)} folders, "
            f"{len(folder.files)} files, {len(folder.symlinks)} symlinks"
        )

        if options.sort is not None:
            await self.sort_children(folder, options.sort)
            own = folder.folders + folder.files + folder.symlinks
            order = self._ordered(descend, options.sort)
            nested_by_path = {entry.path: found for entry, found in zip(descend, nested)}
            nested = [nested_by_path[entry.path] for entry in order]
        else:
            own = matched

        flattened = list(own)
        for found in nested:
            flattened.extend(found)
        return flattened

    @staticmethod
    def _partition(folder: PathEntry, entry: PathEntry) -> None:
        if entry.kind is EntryKind.FOLDER:
            folder.folders.append(entry)
        elif entry.kind is EntryKind.FILE:
            folder.files.append(entry)
        elif entry.kind is EntryKind.SYMLINK:
            folder.symlinks.append(entry)

    @staticmethod
    def _ordered(entries: List[PathEntry], sort: SortOptions) -> List[PathEntry]:
        ordered = sorted(entries, key=lambda e: e.name)
        if sort.direction is SortDirection.DESCENDING:
            ordered.reverse()
        return ordered

    async def sort_children(self, folder: PathEntry, sort: SortOptions) -> None:
        """Sort a folder's partition in place.

        Folders and symlinks are always ordered by name. Files are ordered by
        name or, for SortKey.SIZE, by size, resolving any file that lacks
        metadata first. Names compare case-sensitively by code point.
        Descending order reverses the ascending result.
        """
        folder.folders = self._ordered(folder.folders, sort)
        folder.symlinks = self._ordered(folder.symlinks, sort)

        if sort.by is SortKey.SIZE:
            unresolved = [entry for entry in folder.files if entry.metadata is None]
            if unresolved:
                await _gather_fail_fast(
                    [self.resolver.resolve(entry, force=True) for entry in unresolved]
                )
            files = sorted(
                folder.files,
                key=lambda e: (e.metadata.size if e.metadata is not None else 0, e.name),
            )
        else:
            files = sorted(folder.files, key=lambda e: e.name)

        if sort.direction is SortDirection.DESCENDING:
            files.reverse()
        folder.files = files
