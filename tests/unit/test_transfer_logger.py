"""Unit tests for TransferLogger."""

import logging
from datetime import datetime
from pathlib import Path

import pytest

from fsentry.models import (
    FolderDiffResult,
    RenameWithNumber,
    TransferAction,
    TransferOptions,
    TransferRecord,
    TransferResult,
)
from fsentry.orchestration import TransferLogger


def _result(**overrides) -> TransferResult:
    values = dict(
        source="/src",
        destination="/dest",
        move=False,
        dry_run=False,
        timestamp=datetime(2024, 5, 15, 10, 0, 0),
    )
    values.update(overrides)
    return TransferResult(**values)


@pytest.mark.unit
class TestTransferLoggerBasic:
    """Test basic TransferLogger functionality."""

    def test_context_manager_opens_and_closes_file(self, temp_dir: Path):
        log_path = temp_dir / "transfer.log"
        logger = TransferLogger(log_path)
        assert not log_path.exists()
        with logger:
            assert log_path.exists()
        assert logger._file_handle is None

    def test_get_log_path(self, temp_dir: Path):
        log_path = temp_dir / "transfer.log"
        assert TransferLogger(log_path).get_log_path() == log_path

    def test_missing_parent_rejected(self, temp_dir: Path):
        with pytest.raises(OSError):
            TransferLogger(temp_dir / "nope" / "transfer.log")

    def test_write_after_close_does_not_raise(self, temp_dir: Path, caplog):
        logger = TransferLogger(temp_dir / "transfer.log")
        with caplog.at_level(logging.WARNING, logger="fsentry.orchestration.transfer_logger"):
            logger.log_error("late")
        assert "not open" in caplog.text
        assert "late" in caplog.text

    def test_parent_that_is_a_file_rejected(self, temp_dir: Path):
        (temp_dir / "plain").write_text("x")
        with pytest.raises(OSError):
            TransferLogger(temp_dir / "plain" / "transfer.log")


@pytest.mark.unit
class TestTransferLoggerSections:
    """Test the content of each log section."""

    def test_header_live_copy_default_strategy(self, temp_dir: Path):
        log_path = temp_dir / "transfer.log"
        with TransferLogger(log_path) as logger:
            logger.log_header("/src", "/dest", TransferOptions())
        content = log_path.read_text()
        assert "fsentry - Safe Transfer Log" in content
        assert "Mode: LIVE" in content
        assert "Operation: COPY" in content
        assert "Source: /src" in content
        assert "Destination: /dest" in content
        assert "Conflict strategy: error (default)" in content

    def test_header_dry_run_move(self, temp_dir: Path):
        log_path = temp_dir / "transfer.log"
        options = TransferOptions(move=True, dry_run=True, conflict_strategy=RenameWithNumber())
        with TransferLogger(log_path) as logger:
            logger.log_header("/src", "/dest", options)
        content = log_path.read_text()
        assert "Mode: DRY RUN" in content
        assert "Operation: MOVE" in content
        assert "Conflict strategy: rename_with_number" in content

    def test_records(self, temp_dir: Path):
        log_path = temp_dir / "transfer.log"
        with TransferLogger(log_path) as logger:
            logger.log_record(TransferRecord("/src/a", "/dest/a", TransferAction.COPIED))
            logger.log_record(
                TransferRecord("/src/b", "/dest/b", TransferAction.MOVED, backup_path="/dest/b-01")
            )
            logger.log_record(TransferRecord("/src/c", "/dest/c", TransferAction.SKIPPED))
        content = log_path.read_text()
        assert content.count("FILES") == 1
        assert "- copied /src/a -> /dest/a" in content
        assert "- moved /src/b -> /dest/b" in content
        assert "! existing file moved to /dest/b-01" in content
        assert "- skipped /src/c (kept /dest/c)" in content

    def test_diff_identical(self, temp_dir: Path):
        log_path = temp_dir / "transfer.log"
        with TransferLogger(log_path) as logger:
            logger.log_diff(FolderDiffResult(), "/a", "/b")
        content = log_path.read_text()
        assert "VERIFICATION" in content
        assert "Result: identical" in content

    def test_diff_with_differences(self, temp_dir: Path):
        log_path = temp_dir / "transfer.log"
        diff = FolderDiffResult(missing=["gone.txt"], changed=["size.txt"])
        with TransferLogger(log_path) as logger:
            logger.log_diff(diff, "/a", "/b")
        content = log_path.read_text()
        assert "Result: differences found" in content
        assert "Missing:" in content
        assert "- gone.txt" in content
        assert "Added:" not in content
        assert "- size.txt" in content

    def test_summary(self, temp_dir: Path):
        log_path = temp_dir / "transfer.log"
        result = _result(move=True, files_moved=1234, backups_created=2, duration_seconds=323)
        result.errors.append("copy failed for /src/x: boom")
        with TransferLogger(log_path) as logger:
            logger.log_summary(result)
        content = log_path.read_text()
        assert "SUMMARY" in content
        assert "Files moved: 1,234" in content
        assert "Backups created: 2" in content
        assert "Source removed: no" in content
        assert "Total errors: 1" in content
        assert "copy failed for /src/x: boom" in content
        assert "Duration: 323.0s" in content
        assert f"Log file: {log_path}" in content

    def test_summary_for_copy_omits_source_removed(self, temp_dir: Path):
        log_path = temp_dir / "transfer.log"
        with TransferLogger(log_path) as logger:
            logger.log_summary(_result(files_copied=3))
        content = log_path.read_text()
        assert "Files copied: 3" in content
        assert "Source removed" not in content
        assert "Total errors" not in content

