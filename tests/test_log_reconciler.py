"""Tests for moving deletion records into the clean log."""

from pathlib import Path

import pytest

from rsync_runner.sync.log_reconciler import LogReconciler


def test_reconcile_keeps_deletion_lines_and_empties_tool_log(tool_log: Path, clean_log: Path):
    result = LogReconciler().reconcile(tool_log, clean_log)

    assert result.success is True
    assert result.lines_retained == 2
    assert clean_log.read_text(encoding="utf-8") == "Deleting old.txt\ndeleting cache.tmp\n"
    assert tool_log.stat().st_size == 0


def test_reconcile_appends_after_existing_clean_log_content(tool_log: Path, clean_log: Path):
    clean_log.write_text("deleting from-last-week.txt\n", encoding="utf-8")

    LogReconciler().reconcile(tool_log, clean_log)

    assert clean_log.read_text(encoding="utf-8").splitlines() == [
        "deleting from-last-week.txt",
        "Deleting old.txt",
        "deleting cache.tmp",
    ]


def test_reconcile_twice_then_second_pass_adds_nothing(tool_log: Path, clean_log: Path):
    reconciler = LogReconciler()
    reconciler.reconcile(tool_log, clean_log)
    first = clean_log.read_text(encoding="utf-8")

    second = reconciler.reconcile(tool_log, clean_log)

    assert second.success is True
    assert second.lines_retained == 0
    assert clean_log.read_text(encoding="utf-8") == first


def test_reconcile_matches_marker_anywhere_in_the_line(tmp_path: Path):
    tool_log = tmp_path / "rsync.log"
    tool_log.write_bytes(
        b"2024/01/02 10:00:00 [1234] *deleting   Music/old.mp3\r\n"
        b"2024/01/02 10:00:01 [1234] >f+++++++++ Music/new.mp3\r\n"
        b"2024/01/02 10:00:02 [1234] DELETING Music/Thumbs.db\r\n"
    )
    clean_log = tmp_path / "clean.txt"

    LogReconciler().reconcile(tool_log, clean_log)

    assert clean_log.read_text(encoding="utf-8").splitlines() == [
        "2024/01/02 10:00:00 [1234] *deleting   Music/old.mp3",
        "2024/01/02 10:00:02 [1234] DELETING Music/Thumbs.db",
    ]


def test_reconcile_preserves_undecodable_bytes(tmp_path: Path):
    tool_log = tmp_path / "rsync.log"
    tool_log.write_bytes(b"deleting caf\xe9.txt\n")
    clean_log = tmp_path / "clean.txt"

    assert LogReconciler().reconcile(tool_log, clean_log)

    assert clean_log.read_bytes() == b"deleting caf\xe9.txt\n"


def test_reconcile_with_custom_marker(tmp_path: Path):
    tool_log = tmp_path / "rsync.log"
    tool_log.write_text("removed a\nkept b\n", encoding="utf-8")
    clean_log = tmp_path / "clean.txt"

    LogReconciler(marker="REMOVED").reconcile(tool_log, clean_log)

    assert clean_log.read_text(encoding="utf-8") == "removed a\n"


def test_reconcile_given_missing_tool_log_then_fails_without_touching_clean_log(tmp_path: Path):
    clean_log = tmp_path / "clean.txt"

    result = LogReconciler().reconcile(tmp_path / "missing.log", clean_log)

    assert result.success is False
    assert not result
    assert result.error
    assert not clean_log.exists()


def test_reconcile_given_unwritable_clean_log_then_fails_and_keeps_tool_log(tool_log: Path, tmp_path: Path):
    clean_log = tmp_path / "clean-is-a-folder"
    clean_log.mkdir()
    before = tool_log.read_text(encoding="utf-8")

    result = LogReconciler().reconcile(tool_log, clean_log)

    assert result.success is False
    assert tool_log.read_text(encoding="utf-8") == before


def test_reconcile_given_unexpected_error_then_propagates(
    tool_log: Path, clean_log: Path, monkeypatch: pytest.MonkeyPatch
):
    reconciler = LogReconciler()

    def _boom(_path):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(reconciler, "read_retained_lines", _boom)

    with pytest.raises(RuntimeError):
        reconciler.reconcile(tool_log, clean_log)
