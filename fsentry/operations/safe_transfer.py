"""
Safe copy and move for files and folder trees.

This module contains the SafeTransfer class, the entry point for copying or
moving a file or a whole folder without silently clobbering what already
exists at the destination.

Transfers are best-effort, not transactional: a failure partway through a
folder leaves a partially populated destination and an intact source. Treat
a failed folder transfer as "retry or reconcile by hand".
"""

import logging
import os
import time
from datetime import datetime
from typing import Optional, Union

from fsentry.errors import (
    AlreadyExistsError,
    FsEntryError,
    InvalidDestinationError,
    InvalidSourceError,
)
from fsentry.models import (
    ConflictAction,
    ConflictStrategyType,
    EntryKind,
    PathEntry,
    TransferAction,
    TransferOptions,
    TransferRecord,
    TransferResult,
    TraversalOptions,
)
from fsentry.orchestration import TransferLogger
from fsentry.scanning import DirectoryWalker, EntryResolver

from .conflict_resolver import ConflictResolver

logger = logging.getLogger(__name__)


class SafeTransfer:
    """
    Copies or moves files and folders, consulting a conflict strategy
    whenever a destination file already exists.

    Sibling files in a folder transfer are handled one at a time, so that
    numbered-rename probes for one file never race with another's.
    """

    def __init__(
        self,
        resolver: Optional[EntryResolver] = None,
        walker: Optional[DirectoryWalker] = None,
        conflict_resolver: Optional[ConflictResolver] = None,
        cwd: Optional[str] = None,
        transfer_logger: Optional[TransferLogger] = None,
    ) -> None:
        """
        Create a SafeTransfer.

        Parameters:
            resolver (Optional[EntryResolver]): Resolver for stat probes; shared with the defaults below.
            walker (Optional[DirectoryWalker]): Walker used to enumerate source folders.
            conflict_resolver (Optional[ConflictResolver]): Decides what to do with existing destinations.
            cwd (Optional[str]): Directory that relative string paths are resolved against.
            transfer_logger (Optional[TransferLogger]): Open log file that receives a record of the transfer.
        """
        self.resolver = resolver if resolver is not None else EntryResolver()
        self.walker = walker if walker is not None else DirectoryWalker(self.resolver)
        self.conflict_resolver = (
            conflict_resolver if conflict_resolver is not None else ConflictResolver(self.resolver)
        )
        self.cwd = cwd
        self.transfer_logger = transfer_logger

    @property
    def filesystem(self):
        return self.resolver.filesystem

    def _as_entry(self, value: Union[str, PathEntry]) -> PathEntry:
        if isinstance(value, PathEntry):
            return value
        return PathEntry.from_path(value, cwd=self.cwd)

    async def transfer(
        self,
        src: Union[str, PathEntry],
        dest: Union[str, PathEntry],
        options: Optional[TransferOptions] = None,
    ) -> TransferResult:
        """
        Copy or move ``src`` to ``dest``.

        A source file lands at ``dest``, or at ``dest/<name>`` when ``dest`` is an existing folder.
        A source folder's contents are merged into ``dest``, which is created if missing; with
        ``move`` the source folder is removed only once every file was moved; a skipped or
        failed file leaves the whole source folder in place.

        Parameters:
            src (Union[str, PathEntry]): Source file or folder.
            dest (Union[str, PathEntry]): Destination path.
            options (Optional[TransferOptions]): Move/copy, conflict strategy, dry run, best-effort.

        Returns:
            TransferResult: Counters, per-file records and (best-effort only) collected errors.

        Raises:
            InvalidSourceError: If ``src`` is a symlink or missing.
            InvalidDestinationError: If ``dest`` is a symlink, the source file itself, or of an
                incompatible kind.
            AlreadyExistsError: If a conflict strategy refuses an existing destination.
            FsEntryError: For I/O failures, unless ``best_effort`` collects them.
        """
        if options is None:
            options = TransferOptions()

        source = self._as_entry(src)
        target = self._as_entry(dest)

        await self.resolver.resolve(source, force=True)
        if source.kind is EntryKind.SYMLINK:
            raise InvalidSourceError(source.path, "transfer", "source is a symlink")
        if source.kind is EntryKind.MISSING:
            raise InvalidSourceError(source.path, "transfer", "source does not exist")

        await self.resolver.resolve(target, force=True)
        if target.kind is EntryKind.SYMLINK:
            raise InvalidDestinationError(target.path, "transfer", "destination is a symlink")

        result = TransferResult(
            source=source.path,
            destination=target.path,
            move=options.move,
            dry_run=options.dry_run,
            timestamp=datetime.now(),
        )
        verb = "Moving" if options.move else "Copying"
        prefix = "[DRY RUN] " if options.dry_run else ""
        logger.info(f"{prefix}{verb} {source.path} -> {target.path}")
        if self.transfer_logger is not None:
            self.transfer_logger.log_header(source.path, target.path, options)

        started = time.monotonic()
        try:
            if source.kind is EntryKind.FILE:
                await self._transfer_file(source, target, options, result, into_folder=True)
            else:
                await self._transfer_folder(source, target, options, result)
        finally:
            result.duration_seconds = time.monotonic() - started
            if self.transfer_logger is not None:
                self.transfer_logger.log_summary(result)

        return result

    async def _transfer_file(
        self,
        source: PathEntry,
        target: PathEntry,
        options: TransferOptions,
        result: TransferResult,
        into_folder: bool = False,
    ) -> None:
        """
        Transfer one resolved source file to a resolved target.

        When the target is an existing file the conflict strategy decides: BACKUP relocates the
        existing file first and then writes the original path, OVERWRITE writes in place, SKIP
        records the file as skipped. In dry-run mode every decision is made but nothing is written.

        Parameters:
            into_folder (bool): If True and the target is a folder, write to ``target/<source name>``.
        """
        if target.kind is EntryKind.FOLDER and into_folder:
            target = target.join(source.name)
            await self.resolver.resolve(target, force=True)
            if target.kind is EntryKind.SYMLINK:
                raise InvalidDestinationError(target.path, "transfer", "destination is a symlink")

        if target.kind is EntryKind.FOLDER:
            raise InvalidDestinationError(
                target.path, "transfer", "destination is a folder, expected a file"
            )
        if target.path == source.path:
            raise InvalidDestinationError(
                target.path, "transfer", "source and destination are the same path"
            )

        backup_path: Optional[str] = None
        if target.kind is EntryKind.FILE:
            decision = await self.conflict_resolver.compute_destination(
                options.conflict_strategy, target.path
            )
            if decision.action is ConflictAction.SKIP:
                result.files_skipped += 1
                self._record(result, TransferRecord(source.path, target.path, TransferAction.SKIPPED))
                logger.debug(f"Skipped existing destination: {target.path}")
                return
            if decision.action is ConflictAction.BACKUP:
                await self._backup_existing(target, decision.path, options)
                backup_path = decision.path
                result.backups_created += 1
        elif not options.dry_run:
            await self.filesystem.make_dirs(target.parent_path)

        if options.dry_run:
            logger.debug(f"[DRY RUN] Would {'move' if options.move else 'copy'}: {source.path} -> {target.path}")
        elif options.move:
            await self.filesystem.move_file(source.path, target.path, overwrite=True)
            self.resolver.invalidate(source)
            self.resolver.invalidate(target)
        else:
            await self.filesystem.copy_file(
                source.path,
                target.path,
                overwrite=True,
                preserve_timestamps=options.preserve_timestamps,
            )
            self.resolver.invalidate(target)

        if options.move:
            result.files_moved += 1
            action = TransferAction.MOVED
        else:
            result.files_copied += 1
            action = TransferAction.COPIED
        self._record(result, TransferRecord(source.path, target.path, action, backup_path))

    async def _backup_existing(
        self, target: PathEntry, backup_path: str, options: TransferOptions
    ) -> None:
        """Relocate an existing destination file to ``backup_path``."""
        strategy = options.conflict_strategy
        if (
            strategy is not None
            and strategy.type is ConflictStrategyType.RENAME_WITH_SUFFIX
            and strategy.error_if_exists
            and await self.resolver.exists(backup_path)
        ):
            raise AlreadyExistsError(backup_path, "backup", "backup name is taken")

        logger.info(f"Conflict resolved: {target.path} - existing file moved to {backup_path}")
        if options.dry_run:
            return
        await self.filesystem.move_file(target.path, backup_path, overwrite=True)
        self.resolver.invalidate(target)

    async def _transfer_folder(
        self,
        source: PathEntry,
        target: PathEntry,
        options: TransferOptions,
        result: TransferResult,
    ) -> None:
        """
        Merge a source folder's tree into the target folder, one file at a time.

        Folders are recreated (empty ones included), symlinks inside the source are skipped
        with a warning, and every file goes through the single-file path against
        ``target/<relative path>``. The first per-file error aborts the walk unless
        ``best_effort`` is set, in which case it is recorded and the walk continues.
        """
        if target.kind is EntryKind.FILE:
            raise InvalidDestinationError(
                target.path, "transfer", "destination is a file, expected a folder"
            )
        if target.kind is EntryKind.MISSING:
            result.folders_created += 1
            if not options.dry_run:
                await self.filesystem.make_dirs(target.path)

        entries = await self.walker.get_children(source, TraversalOptions(levels=None))
        total_files = sum(1 for entry in entries if entry.kind is EntryKind.FILE)
        completed = 0

        for entry in entries:
            relative_path = os.path.relpath(entry.path, source.path)
            dest_entry = target.join(relative_path)
            try:
                if entry.kind is EntryKind.SYMLINK:
                    result.symlinks_skipped += 1
                    logger.warning(f"Skipping symlink inside source folder: {entry.path}")
                    continue

                await self.resolver.resolve(dest_entry, force=True)
                if dest_entry.kind is EntryKind.SYMLINK:
                    raise InvalidDestinationError(
                        dest_entry.path, "transfer", "destination is a symlink"
                    )

                if entry.kind is EntryKind.FOLDER:
                    await self._ensure_folder(dest_entry, options, result)
                    continue

                await self._transfer_file(entry, dest_entry, options, result)
                completed += 1
                if options.progress_callback is not None:
                    options.progress_callback(completed, total_files)
            except FsEntryError as e:
                if not options.best_effort:
                    raise
                error_msg = str(e)
                logger.warning(error_msg)
                result.errors.append(error_msg)
                if self.transfer_logger is not None:
                    self.transfer_logger.log_error(error_msg)

        if not options.move:
            return
        if result.errors:
            logger.warning(f"Leaving source folder in place after errors: {source.path}")
            return
        if result.files_skipped:
            # Skipped files were never moved; the source holds their only copy.
            logger.warning(
                f"Leaving source folder in place, {result.files_skipped} file(s) skipped: {source.path}"
            )
            return
        if options.dry_run:
            logger.debug(f"[DRY RUN] Would remove source folder: {source.path}")
            return

        await self.filesystem.remove_dir(source.path, recursive=True)
        self.resolver.invalidate(source)
        result.source_removed = True
        logger.debug(f"Removed source folder: {source.path}")

    async def _ensure_folder(
        self, dest_entry: PathEntry, options: TransferOptions, result: TransferResult
    ) -> None:
        if dest_entry.kind is EntryKind.FOLDER:
            return
        if dest_entry.kind is EntryKind.FILE:
            raise InvalidDestinationError(
                dest_entry.path, "transfer", "destination is a file, expected a folder"
            )
        result.folders_created += 1
        if not options.dry_run:
            await self.filesystem.make_dirs(dest_entry.path)

    def _record(self, result: TransferResult, record: TransferRecord) -> None:
        result.records.append(record)
        if self.transfer_logger is not None:
            self.transfer_logger.log_record(record)
