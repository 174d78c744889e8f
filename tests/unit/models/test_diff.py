"""Tests for gitquery.models.diff."""

from __future__ import annotations

import pytest

from gitquery.models.diff import (
    DiffChunk,
    DiffLine,
    DiffLineType,
    DiffStats,
    DiffStatus,
    FileDiff,
    diff_output,
    files_with_status,
)


class TestDiffEnums:
    """Tests for status and line-type characters."""

    @pytest.mark.parametrize(
        ("char", "status"),
        [
            ("A", DiffStatus.ADDED),
            ("M", DiffStatus.MODIFIED),
            ("D", DiffStatus.DELETED),
            ("R", DiffStatus.RENAMED),
            ("C", DiffStatus.COPIED),
        ],
    )
    def test_status_chars(self, char: str, status: DiffStatus) -> None:
        """Each status prints as its git letter."""
        assert status.to_char() == char

    def test_line_type_chars(self) -> None:
        """Line prefixes convert both ways."""
        assert DiffLineType.from_char(" ") is DiffLineType.CONTEXT
        assert DiffLineType.from_char("+") is DiffLineType.ADDED
        assert DiffLineType.from_char("-") is DiffLineType.REMOVED
        assert DiffLineType.from_char("X") is None
        assert DiffLineType.REMOVED.to_char() == "-"


class TestFileDiff:
    """Tests for FileDiff and DiffChunk."""

    def test_defaults(self) -> None:
        """A new record has no counts, chunks or old path."""
        file_diff = FileDiff("test.txt", DiffStatus.MODIFIED)
        assert file_diff.old_path is None
        assert file_diff.chunks == ()
        assert file_diff.additions == 0
        assert file_diff.deletions == 0
        assert not file_diff.is_binary
        assert not file_diff.is_summary_only

    def test_summary_only(self) -> None:
        """Counts without chunks mark a summary-only record."""
        assert FileDiff("a.py", DiffStatus.MODIFIED, additions=3).is_summary_only

    def test_chunk_counts(self) -> None:
        """Chunks count their added and removed lines."""
        chunk = DiffChunk(
            1,
            2,
            1,
            2,
            (
                DiffLine(DiffLineType.CONTEXT, "a"),
                DiffLine(DiffLineType.REMOVED, "b"),
                DiffLine(DiffLineType.ADDED, "c"),
            ),
        )
        assert chunk.additions == 1
        assert chunk.deletions == 1
        assert chunk.header == "@@ -1,2 +1,2 @@"
        assert str(chunk.lines[2]) == "+c"

    def test_str(self) -> None:
        """str() shows status, path and counts."""
        assert str(FileDiff("a.py", DiffStatus.ADDED, additions=5)) == "A a.py +5 -0"
        renamed = FileDiff("new.py", DiffStatus.RENAMED, old_path="old.py")
        assert str(renamed) == "R old.py => new.py +0 -0"
        assert str(FileDiff("x.png", DiffStatus.MODIFIED, is_binary=True)) == (
            "M x.png (binary)"
        )


class TestDiffStats:
    """Tests for DiffStats."""

    def test_display(self) -> None:
        """Stats display like git's summary line."""
        stats = DiffStats(files_changed=2, insertions=13, deletions=7)
        assert str(stats) == "2 files changed, 13 insertions(+), 7 deletions(-)"

    def test_from_files(self) -> None:
        """Stats are the sum of per-file counts."""
        stats = DiffStats.from_files(
            [
                FileDiff("a", DiffStatus.MODIFIED, additions=10, deletions=5),
                FileDiff("b", DiffStatus.MODIFIED, additions=3, deletions=2),
            ]
        )
        assert stats == DiffStats(2, 13, 7)
        assert stats.total_changes == 20


class TestDiffOutput:
    """Tests for the diff report."""

    def test_computes_stats(self) -> None:
        """Without explicit stats, totals come from the files."""
        output = diff_output(
            [
                FileDiff("file1.txt", DiffStatus.ADDED, additions=5),
                FileDiff("file2.txt", DiffStatus.MODIFIED, additions=3, deletions=2),
            ]
        )
        assert len(output.files) == 2
        assert not output.is_empty()
        assert output.stats == DiffStats(2, 8, 2)

    def test_explicit_stats_win(self) -> None:
        """Stats read from git's summary are kept as given."""
        output = diff_output([FileDiff("a", DiffStatus.MODIFIED)], DiffStats(1, 9, 4))
        assert output.stats == DiffStats(1, 9, 4)

    def test_empty(self) -> None:
        """An empty diff has zero stats."""
        output = diff_output([])
        assert output.is_empty()
        assert output.stats.files_changed == 0

    def test_queries(self) -> None:
        """Files are found by path and filtered by status."""
        output = diff_output(
            [
                FileDiff("src/a.py", DiffStatus.ADDED, additions=1),
                FileDiff("src/b.py", DiffStatus.DELETED, deletions=1),
            ]
        )
        assert output.files.find("src/b.py") is not None
        assert [f.path for f in files_with_status(output, DiffStatus.ADDED)] == [
            "src/a.py"
        ]
        assert len(list(output.files.find_containing("src/"))) == 2
