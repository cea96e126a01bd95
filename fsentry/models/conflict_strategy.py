"""
Conflict strategies for safe copy and move.

Each strategy is a frozen dataclass tagged with a ConflictStrategyType, and
ConflictResolver dispatches on that tag:
- RenameWithSuffix: Relocate the existing destination to ``name + marker``
- RenameWithNumber: Relocate it to the first free ``stem-NN.ext``
- RenameWithDatetime: Relocate it to ``stem-<timestamp>.ext``
- RenameWithEpochMs: Relocate it to ``stem-<epoch ms>.ext``
- Overwrite: Replace the existing destination
- Skip: Leave the existing destination and skip this file
- Error: Fail
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

DEFAULT_MARKER = "~"
DEFAULT_NUMBER_LIMIT = 32


class ConflictStrategyType(Enum):
    RENAME_WITH_SUFFIX = "rename_with_suffix"
    RENAME_WITH_NUMBER = "rename_with_number"
    RENAME_WITH_DATETIME = "rename_with_datetime"
    RENAME_WITH_EPOCH_MS = "rename_with_epoch_ms"
    OVERWRITE = "overwrite"
    SKIP = "skip"
    ERROR = "error"


@dataclass(frozen=True)
class RenameWithSuffix:
    """Append ``marker`` to the existing destination's name.

    With ``error_if_exists`` the transfer fails when the marker name is
    itself taken, instead of replacing it.
    """
    marker: str = DEFAULT_MARKER
    error_if_exists: bool = False
    type: ConflictStrategyType = field(
        default=ConflictStrategyType.RENAME_WITH_SUFFIX, init=False
    )


@dataclass(frozen=True)
class RenameWithNumber:
    """Probe ``stem<separator><prefix><NN><ext>`` for NN = 01 .. limit."""
    separator: str = "-"
    prefix: str = ""
    limit: int = DEFAULT_NUMBER_LIMIT
    error_if_exists: bool = False
    type: ConflictStrategyType = field(
        default=ConflictStrategyType.RENAME_WITH_NUMBER, init=False
    )


@dataclass(frozen=True)
class RenameWithDatetime:
    """Stamp the backup name with the current local time.

    ``format`` is an strftime format; None gives YYYYMMDDHHMMSS plus
    milliseconds.
    """
    format: Optional[str] = None
    separator: str = "-"
    prefix: str = ""
    error_if_exists: bool = False
    type: ConflictStrategyType = field(
        default=ConflictStrategyType.RENAME_WITH_DATETIME, init=False
    )


@dataclass(frozen=True)
class RenameWithEpochMs:
    """Stamp the backup name with milliseconds since the epoch."""
    separator: str = "-"
    prefix: str = ""
    error_if_exists: bool = False
    type: ConflictStrategyType = field(
        default=ConflictStrategyType.RENAME_WITH_EPOCH_MS, init=False
    )


@dataclass(frozen=True)
class Overwrite:
    type: ConflictStrategyType = field(default=ConflictStrategyType.OVERWRITE, init=False)


@dataclass(frozen=True)
class Skip:
    type: ConflictStrategyType = field(default=ConflictStrategyType.SKIP, init=False)


@dataclass(frozen=True)
class Error:
    type: ConflictStrategyType = field(default=ConflictStrategyType.ERROR, init=False)


ConflictStrategy = Union[
    RenameWithSuffix,
    RenameWithNumber,
    RenameWithDatetime,
    RenameWithEpochMs,
    Overwrite,
    Skip,
    Error,
]

# Applied when a destination file exists and the caller named no strategy.
DEFAULT_CONFLICT_STRATEGY: ConflictStrategy = Error()


class ConflictAction(Enum):
    """What SafeTransfer should do with an existing destination."""
    BACKUP = "backup"         # Relocate the existing file to ``path`` first
    OVERWRITE = "overwrite"   # Replace it in place
    SKIP = "skip"             # Leave it and skip this file


@dataclass(frozen=True)
class ConflictDecision:
    """ConflictResolver's answer for one existing destination."""
    action: ConflictAction
    path: Optional[str] = None
