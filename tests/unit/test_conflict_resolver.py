"""
Unit tests for ConflictResolver.

Tests cover:
- Suffix, numbered, datetime and epoch renames
- Numbered-rename probing and exhaustion
- Overwrite, Skip and Error decisions
"""

import asyncio
import os
from datetime import datetime
from pathlib import Path

import pytest

from fsentry.errors import AlreadyExistsError
from fsentry.models import (
    ConflictAction,
    Error,
    Overwrite,
    RenameWithDatetime,
    RenameWithEpochMs,
    RenameWithNumber,
    RenameWithSuffix,
    Skip,
)
from fsentry.operations import ConflictResolver

FIXED_TIME = datetime(2024, 5, 15, 13, 45, 30, 123456)


def _resolver() -> ConflictResolver:
    return ConflictResolver(clock=lambda: FIXED_TIME)


def _decide(strategy, path: Path):
    return asyncio.run(_resolver().compute_destination(strategy, str(path)))


@pytest.mark.unit
class TestRenameWithSuffix:
    """Tests for the suffix rename."""

    def test_default_marker(self, temp_dir: Path):
        decision = _decide(RenameWithSuffix(), temp_dir / "a.txt")
        assert decision.action is ConflictAction.BACKUP
        assert decision.path == str(temp_dir / "a.txt~")

    def test_custom_marker(self, temp_dir: Path):
        decision = _decide(RenameWithSuffix(marker=".bak"), temp_dir / "a.txt")
        assert decision.path == str(temp_dir / "a.txt.bak")


@pytest.mark.unit
class TestRenameWithNumber:
    """Tests for numbered-rename probing."""

    def test_first_candidate_when_free(self, temp_dir: Path):
        (temp_dir / "a.txt").write_text("x")
        decision = _decide(RenameWithNumber(), temp_dir / "a.txt")
        assert decision.action is ConflictAction.BACKUP
        assert decision.path == str(temp_dir / "a-01.txt")

    def test_probes_past_taken_names(self, temp_dir: Path):
        for name in ("a.txt", "a-01.txt", "a-02.txt"):
            (temp_dir / name).write_text("x")
        decision = _decide(RenameWithNumber(), temp_dir / "a.txt")
        assert decision.path == str(temp_dir / "a-03.txt")

    def test_separator_and_prefix(self, temp_dir: Path):
        decision = _decide(RenameWithNumber(separator="_", prefix="v"), temp_dir / "a.txt")
        assert decision.path == str(temp_dir / "a_v01.txt")

    def test_no_extension(self, temp_dir: Path):
        decision = _decide(RenameWithNumber(), temp_dir / "README")
        assert decision.path == str(temp_dir / "README-01")

    def test_exhausted_limit_skips(self, temp_dir: Path):
        (temp_dir / "a.txt").write_text("x")
        for number in range(1, 6):
            (temp_dir / f"a-{number:02d}.txt").write_text("x")
        decision = _decide(RenameWithNumber(limit=5), temp_dir / "a.txt")
        assert decision.action is ConflictAction.SKIP
        assert decision.path is None

    def test_exhausted_limit_errors_when_asked(self, temp_dir: Path):
        (temp_dir / "a.txt").write_text("x")
        for number in range(1, 6):
            (temp_dir / f"a-{number:02d}.txt").write_text("x")
        with pytest.raises(AlreadyExistsError):
            _decide(RenameWithNumber(limit=5, error_if_exists=True), temp_dir / "a.txt")

    def test_candidate_beyond_limit_is_ignored(self, temp_dir: Path):
        for number in range(1, 3):
            (temp_dir / f"a-{number:02d}.txt").write_text("x")
        decision = _decide(RenameWithNumber(limit=2), temp_dir / "a.txt")
        assert decision.action is ConflictAction.SKIP
        assert not os.path.exists(temp_dir / "a-03.txt")


@pytest.mark.unit
class TestTimestampRenames:
    """Tests for datetime and epoch renames."""

    def test_default_datetime_format(self, temp_dir: Path):
        decision = _decide(RenameWithDatetime(), temp_dir / "a.txt")
        assert decision.action is ConflictAction.BACKUP
        assert decision.path == str(temp_dir / "a-20240515134530123.txt")

    def test_custom_datetime_format(self, temp_dir: Path):
        decision = _decide(RenameWithDatetime(format="%Y-%m-%d"), temp_dir / "a.txt")
        assert decision.path == str(temp_dir / "a-2024-05-15.txt")

    def test_epoch_ms(self, temp_dir: Path):
        decision = _decide(RenameWithEpochMs(), temp_dir / "a.txt")
        expected = int(FIXED_TIME.timestamp() * 1000)
        assert decision.path == str(temp_dir / f"a-{expected}.txt")

    def test_taken_timestamp_name_errors_when_asked(self, temp_dir: Path):
        (temp_dir / "a-2024-05-15.txt").write_text("x")
        with pytest.raises(AlreadyExistsError):
            _decide(
                RenameWithDatetime(format="%Y-%m-%d", error_if_exists=True),
                temp_dir / "a.txt",
            )


@pytest.mark.unit
class TestTerminalStrategies:
    """Tests for Overwrite, Skip and Error."""

    def test_overwrite(self, temp_dir: Path):
        decision = _decide(Overwrite(), temp_dir / "a.txt")
        assert decision.action is ConflictAction.OVERWRITE
        assert decision.path == str(temp_dir / "a.txt")

    def test_skip(self, temp_dir: Path):
        decision = _decide(Skip(), temp_dir / "a.txt")
        assert decision.action is ConflictAction.SKIP

    def test_error(self, temp_dir: Path):
        with pytest.raises(AlreadyExistsError) as exc_info:
            _decide(Error(), temp_dir / "a.txt")
        assert exc_info.value.path == str(temp_dir / "a.txt")

    def test_no_strategy_means_error(self, temp_dir: Path):
        with pytest.raises(AlreadyExistsError):
            _decide(None, temp_dir / "a.txt")
