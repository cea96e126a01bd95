"""Conflict resolution for safe copy and move.

This module provides the ConflictResolver class. Given a destination path
that already exists, it decides, according to a ConflictStrategy, whether the
existing file should be relocated to a backup path, overwritten, left alone,
or whether the transfer must fail.

Numbered-rename probing is inherently racy: two writers can both observe
``stem-01.ext`` as free and both choose it. No locking is attempted.
"""

import logging
import os
from datetime import datetime
from typing import Callable, Optional, Tuple, Union

from fsentry.errors import AlreadyExistsError, InvalidOperationError
from fsentry.models import (
    DEFAULT_CONFLICT_STRATEGY,
    ConflictAction,
    ConflictDecision,
    ConflictStrategy,
    ConflictStrategyType,
    RenameWithDatetime,
    RenameWithEpochMs,
    RenameWithNumber,
)
from fsentry.scanning import EntryResolver

logger = logging.getLogger(__name__)


def _split_name(path: str) -> Tuple[str, str, str]:
    directory, name = os.path.split(path)
    stem, ext = os.path.splitext(name)
    return directory, stem, ext


def _default_timestamp(moment: datetime) -> str:
    return moment.strftime("%Y%m%d%H%M%S") + f"{moment.microsecond // 1000:03d}"


class ConflictResolver:
    """Computes what to do with an existing destination.

    Attributes:
        resolver: EntryResolver used for existence probes.
        clock: Returns the current time; used by the timestamped strategies.
    """

    def __init__(
        self,
        resolver: Optional[EntryResolver] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.resolver = resolver if resolver is not None else EntryResolver()
        self.clock = clock if clock is not None else datetime.now

    async def compute_destination(
        self,
        strategy: Optional[ConflictStrategy],
        candidate_path: str,
    ) -> ConflictDecision:
        """
        Decide how to proceed when ``candidate_path`` already exists.

        Parameters:
            strategy (Optional[ConflictStrategy]): Policy to apply; None means DEFAULT_CONFLICT_STRATEGY (Error).
            candidate_path (str): The destination file path that is already taken.

        Returns:
            ConflictDecision: BACKUP with the path the existing file should be moved to,
                OVERWRITE with the original path, or SKIP.

        Raises:
            AlreadyExistsError: For the Error strategy, for an exhausted numbered rename with
                ``error_if_exists``, or when a timestamped backup name is taken and
                ``error_if_exists`` is set.
        """
        if strategy is None:
            strategy = DEFAULT_CONFLICT_STRATEGY
        kind = strategy.type

        if kind is ConflictStrategyType.RENAME_WITH_SUFFIX:
            # Whether the suffixed path is free is checked by the caller.
            return ConflictDecision(ConflictAction.BACKUP, candidate_path + strategy.marker)

        if kind is ConflictStrategyType.RENAME_WITH_NUMBER:
            return await self._rename_with_number(strategy, candidate_path)

        if kind in (
            ConflictStrategyType.RENAME_WITH_DATETIME,
            ConflictStrategyType.RENAME_WITH_EPOCH_MS,
        ):
            return await self._rename_with_timestamp(strategy, candidate_path)

        if kind is ConflictStrategyType.OVERWRITE:
            return ConflictDecision(ConflictAction.OVERWRITE, candidate_path)

        if kind is ConflictStrategyType.SKIP:
            logger.debug(f"Skipping existing destination: {candidate_path}")
            return ConflictDecision(ConflictAction.SKIP)

        if kind is ConflictStrategyType.ERROR:
            raise AlreadyExistsError(candidate_path, "resolve_conflict", "destination exists")

        raise InvalidOperationError(
            candidate_path, "resolve_conflict", f"unknown conflict strategy {kind!r}"
        )

    async def _rename_with_number(
        self, strategy: RenameWithNumber, candidate_path: str
    ) -> ConflictDecision:
        directory, stem, ext = _split_name(candidate_path)
        # Each probe depends on the previous one finding the name taken.
        for number in range(1, strategy.limit + 1):
            name = f"{stem}{strategy.separator}{strategy.prefix}{number:02d}{ext}"
            path = os.path.join(directory, name)
            if not await self.resolver.exists(path):
                return ConflictDecision(ConflictAction.BACKUP, path)

        if strategy.error_if_exists:
            raise AlreadyExistsError(
                candidate_path,
                "rename_with_number",
                f"all {strategy.limit} numbered names are taken",
            )
        logger.warning(
            f"All {strategy.limit} numbered names taken for {candidate_path}, skipping"
        )
        return ConflictDecision(ConflictAction.SKIP)

    async def _rename_with_timestamp(
        self,
        strategy: Union[RenameWithDatetime, RenameWithEpochMs],
        candidate_path: str,
    ) -> ConflictDecision:
        directory, stem, ext = _split_name(candidate_path)
        moment = self.clock()
        if strategy.type is ConflictStrategyType.RENAME_WITH_EPOCH_MS:
            stamp = str(int(moment.timestamp() * 1000))
        elif strategy.format:
            stamp = moment.strftime(strategy.format)
        else:
            stamp = _default_timestamp(moment)

        path = os.path.join(directory, f"{stem}{strategy.separator}{strategy.prefix}{stamp}{ext}")
        if strategy.error_if_exists and await self.resolver.exists(path):
            raise AlreadyExistsError(path, strategy.type.value, "backup name is taken")
        return ConflictDecision(ConflictAction.BACKUP, path)
