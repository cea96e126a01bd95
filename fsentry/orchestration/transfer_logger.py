"""TransferLogger for recording safe transfers in formatted log files.

This module provides the TransferLogger class that writes a structured log
with sections for the header, each file handled, folder verification and the
final summary. The log is what an operator reads to reconcile a transfer that
stopped partway through.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from fsentry.models import (
    FolderDiffResult,
    TransferAction,
    TransferOptions,
    TransferRecord,
    TransferResult,
)

logger = logging.getLogger(__name__)


class TransferLogger:
    """Logger for safe transfers with structured output format.

    Usage:
        with TransferLogger(Path("transfer.log"), dry_run=True) as log:
            transfer = SafeTransfer(transfer_logger=log)
            result = await transfer.transfer(src, dest, options)
            log.log_diff(diff, src, dest)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Path, dry_run: bool = False) -> None:
        """Initialize the TransferLogger.

        Args:
            log_file_path: Path of the log file to create.
            dry_run: Whether this is a dry run (no actual changes made).

        Raises:
            OSError: If the log file's parent directory is missing.
        """
        self._dry_run = dry_run
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None
        self._record_counter = 0
        self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        parent = self._log_file_path.parent
        if not parent.is_dir():
            raise OSError(f"Log directory does not exist: {parent}")

    def __enter__(self) -> "TransferLogger":
        self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._file_handle is not None:
            self._file_handle.close()
            self._file_handle = None

    def get_log_path(self) -> Path:
        return self._log_file_path

    def log_header(self, source: str, destination: str, options: TransferOptions) -> None:
        """Write the header section: title, timestamp, mode and the transfer being attempted."""
        self._write_separator()
        self._write_line("fsentry - Safe Transfer Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        mode = "DRY RUN" if self._dry_run or options.dry_run else "LIVE"
        self._write_line(f"Mode: {mode}")
        self._write_line(f"Operation: {'MOVE' if options.move else 'COPY'}")
        self._write_line(f"Source: {source}")
        self._write_line(f"Destination: {destination}")
        strategy = options.conflict_strategy
        strategy_name = strategy.type.value if strategy is not None else "error (default)"
        self._write_line(f"Conflict strategy: {strategy_name}")
        self._write_line("")

    def log_record(self, record: TransferRecord) -> None:
        """Write one per-file line, opening the FILES section on first use."""
        if self._record_counter == 0:
            self._write_separator()
            self._write_line("FILES")
            self._write_separator()

        self._record_counter += 1
        if record.action is TransferAction.SKIPPED:
            self._write_line(f"- skipped {record.source} (kept {record.destination})")
            return

        self._write_line(f"- {record.action.value} {record.source} -> {record.destination}")
        if record.backup_path:
            self._write_line(f"! existing file moved to {record.backup_path}", indent=4)

    def log_error(self, message: str) -> None:
        self._write_line(f"! Error: {message}", indent=2)

    def log_diff(self, diff: FolderDiffResult, left: str, right: str) -> None:
        """Write a verification section comparing two folders."""
        self._write_separator()
        self._write_line("VERIFICATION")
        self._write_separator()
        self._write_line(f"Compared: {left} <-> {right}")
        if diff.is_empty:
            self._write_line("Result: identical")
            self._write_line("")
            return

        self._write_line("Result: differences found")
        for label, names in (
            ("Missing", diff.missing),
            ("Added", diff.added),
            ("Changed", diff.changed),
        ):
            if names:
                self._write_line(f"{label}:", indent=2)
                for name in names:
                    self._write_line(f"- {name}", indent=4)
        self._write_line("")

    def log_summary(self, result: TransferResult) -> None:
        """Write the summary section with the transfer's counters and errors."""
        self._write_line("")
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Files copied: {result.files_copied:,}")
        self._write_line(f"Files moved: {result.files_moved:,}")
        self._write_line(f"Files skipped: {result.files_skipped:,}")
        self._write_line(f"Backups created: {result.backups_created}")
        self._write_line(f"Folders created: {result.folders_created}")
        self._write_line(f"Symlinks skipped: {result.symlinks_skipped}")
        if result.move:
            self._write_line(f"Source removed: {'yes' if result.source_removed else 'no'}")

        if result.errors:
            self._write_line(f"Total errors: {len(result.errors)}")
            self._write_line("Errors:")
            for error in result.errors:
                self._write_line(f"  - {error}")

        self._write_line(f"Duration: {result.duration_seconds:.1f}s")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        if self._file_handle is None:
            logger.warning(f"Transfer log is not open, dropped line: {text}")
            return
        self._file_handle.write(" " * indent + text + "\n")
