"""Tests for gitquery.models.status."""

from __future__ import annotations

import pytest

from gitquery.models.status import (
    IndexStatus,
    StatusEntry,
    StatusReport,
    WorktreeStatus,
    has_changes,
    ignored_entries,
    is_clean,
    staged_entries,
    status_report,
    unstaged_entries,
    untracked_entries,
    with_index_status,
    with_worktree_status,
)


def _entry(path: str, index: str, worktree: str) -> StatusEntry:
    return StatusEntry(
        path=path,
        index_status=IndexStatus.from_char(index),
        worktree_status=WorktreeStatus.from_char(worktree),
    )


class TestStatusCharacters:
    """Tests for porcelain character mapping."""

    @pytest.mark.parametrize(
        ("char", "expected"),
        [
            ("M", IndexStatus.MODIFIED),
            ("A", IndexStatus.ADDED),
            ("D", IndexStatus.DELETED),
            ("R", IndexStatus.RENAMED),
            ("C", IndexStatus.COPIED),
            (" ", IndexStatus.CLEAN),
            ("?", IndexStatus.CLEAN),
            ("U", IndexStatus.CLEAN),
        ],
    )
    def test_index_from_char(self, char: str, expected: IndexStatus) -> None:
        """Index column characters map to statuses; unknown means clean."""
        assert IndexStatus.from_char(char) is expected

    @pytest.mark.parametrize(
        ("char", "expected"),
        [
            ("M", WorktreeStatus.MODIFIED),
            ("D", WorktreeStatus.DELETED),
            ("?", WorktreeStatus.UNTRACKED),
            ("!", WorktreeStatus.IGNORED),
            (" ", WorktreeStatus.CLEAN),
            ("A", WorktreeStatus.CLEAN),
        ],
    )
    def test_worktree_from_char(self, char: str, expected: WorktreeStatus) -> None:
        """Worktree column characters map to statuses; unknown means clean."""
        assert WorktreeStatus.from_char(char) is expected

    def test_to_char_inverts_from_char(self) -> None:
        """Every status maps back to the character it came from."""
        for status in IndexStatus:
            assert IndexStatus.from_char(status.to_char()) is status
        for status in WorktreeStatus:
            assert WorktreeStatus.from_char(status.to_char()) is status


class TestStatusEntry:
    """Tests for the StatusEntry record."""

    def test_both_axes_clean_is_rejected(self) -> None:
        """An entry with no change on either axis cannot be built."""
        with pytest.raises(ValueError, match="no changes"):
            StatusEntry("a.txt", IndexStatus.CLEAN, WorktreeStatus.CLEAN)

    def test_str_renders_porcelain(self) -> None:
        """str() gives back the porcelain line."""
        assert str(_entry("src/app.py", "M", " ")) == "M  src/app.py"
        assert str(_entry("new.txt", "?", "?")) == " ? new.txt"


class TestStatusReportQueries:
    """Tests for the status report free functions."""

    @pytest.fixture
    def report(self) -> StatusReport:
        return status_report(
            [
                _entry("staged.py", "M", " "),
                _entry("both.py", "M", "M"),
                _entry("edited.py", " ", "M"),
                StatusEntry("new.txt", IndexStatus.CLEAN, WorktreeStatus.UNTRACKED),
                StatusEntry("build/", IndexStatus.CLEAN, WorktreeStatus.IGNORED),
                _entry("added.py", "A", " "),
            ]
        )

    def test_staged(self, report: StatusReport) -> None:
        """Staged entries have a non-clean index status."""
        assert [e.path for e in staged_entries(report)] == [
            "staged.py",
            "both.py",
            "added.py",
        ]

    def test_unstaged(self, report: StatusReport) -> None:
        """Unstaged entries have a non-clean worktree status."""
        assert [e.path for e in unstaged_entries(report)] == [
            "both.py",
            "edited.py",
            "new.txt",
            "build/",
        ]

    def test_untracked_and_ignored(self, report: StatusReport) -> None:
        """Untracked and ignored entries are selected by worktree status."""
        assert [e.path for e in untracked_entries(report)] == ["new.txt"]
        assert [e.path for e in ignored_entries(report)] == ["build/"]

    def test_with_status(self, report: StatusReport) -> None:
        """Entries can be selected by an exact status."""
        assert [e.path for e in with_index_status(report, IndexStatus.ADDED)] == [
            "added.py"
        ]
        assert len(list(with_worktree_status(report, WorktreeStatus.MODIFIED))) == 2

    def test_find_by_path(self, report: StatusReport) -> None:
        """find looks up an entry by exact path."""
        entry = report.find("both.py")
        assert entry is not None
        assert entry.worktree_status is WorktreeStatus.MODIFIED

    def test_clean_report(self) -> None:
        """An empty report is clean."""
        assert is_clean(status_report([]))
        assert not has_changes(status_report([]))

    def test_dirty_report(self, report: StatusReport) -> None:
        """A report with entries has changes."""
        assert has_changes(report)
        assert not is_clean(report)
