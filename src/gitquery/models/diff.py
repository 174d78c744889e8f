"""Diff records: per-file changes, hunks and summary statistics."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from gitquery.collection import RecordCollection

__all__ = [
    "DiffStatus",
    "DiffLineType",
    "DiffLine",
    "DiffChunk",
    "FileDiff",
    "DiffStats",
    "DiffOutput",
    "diff_output",
    "files_with_status",
]


class DiffStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"

    def to_char(self) -> str:
        return _DIFF_STATUS_CHARS[self]


_DIFF_STATUS_CHARS: dict[DiffStatus, str] = {
    DiffStatus.ADDED: "A",
    DiffStatus.MODIFIED: "M",
    DiffStatus.DELETED: "D",
    DiffStatus.RENAMED: "R",
    DiffStatus.COPIED: "C",
}


class DiffLineType(str, Enum):
    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"

    @classmethod
    def from_char(cls, prefix: str) -> DiffLineType | None:
        """Map a unified-diff line prefix; anything else returns None."""
        return _LINE_TYPE_BY_CHAR.get(prefix)

    def to_char(self) -> str:
        return _LINE_TYPE_CHARS[self]


_LINE_TYPE_CHARS: dict[DiffLineType, str] = {
    DiffLineType.CONTEXT: " ",
    DiffLineType.ADDED: "+",
    DiffLineType.REMOVED: "-",
}
_LINE_TYPE_BY_CHAR = {char: line_type for line_type, char in _LINE_TYPE_CHARS.items()}


@dataclass(frozen=True, slots=True)
class DiffLine:
    line_type: DiffLineType
    content: str

    def __str__(self) -> str:
        return f"{self.line_type.to_char()}{self.content}"


@dataclass(frozen=True, slots=True)
class DiffChunk:
    """One hunk of a unified diff."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: tuple[DiffLine, ...] = ()

    @property
    def header(self) -> str:
        return f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"

    @property
    def additions(self) -> int:
        return sum(1 for line in self.lines if line.line_type is DiffLineType.ADDED)

    @property
    def deletions(self) -> int:
        return sum(1 for line in self.lines if line.line_type is DiffLineType.REMOVED)


@dataclass(frozen=True, slots=True)
class FileDiff:
    """Changes to a single file.

    Summary modes (numstat, stat, name-only) fill the counts and leave
    ``chunks`` empty; patch mode fills both.

    Attributes:
        path: Path after the change.
        old_path: Path before a rename or copy.
        status: Kind of change.
        chunks: Hunks, in file order.
        additions: Added line count.
        deletions: Removed line count.
        is_binary: True when git reported no line counts for the file.
    """

    path: str
    status: DiffStatus
    old_path: str | None = None
    chunks: tuple[DiffChunk, ...] = ()
    additions: int = 0
    deletions: int = 0
    is_binary: bool = False

    @property
    def is_summary_only(self) -> bool:
        return not self.chunks and (self.additions > 0 or self.deletions > 0)

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions

    def __str__(self) -> str:
        path = f"{self.old_path} => {self.path}" if self.old_path else self.path
        if self.is_binary:
            return f"{self.status.to_char()} {path} (binary)"
        return f"{self.status.to_char()} {path} +{self.additions} -{self.deletions}"


@dataclass(frozen=True, slots=True)
class DiffStats:
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0

    @classmethod
    def from_files(cls, files: Iterable[FileDiff]) -> DiffStats:
        """Totals computed from per-file counts."""
        count = insertions = deletions = 0
        for file_diff in files:
            count += 1
            insertions += file_diff.additions
            deletions += file_diff.deletions
        return cls(files_changed=count, insertions=insertions, deletions=deletions)

    @property
    def total_changes(self) -> int:
        return self.insertions + self.deletions

    def __str__(self) -> str:
        return (
            f"{self.files_changed} files changed, "
            f"{self.insertions} insertions(+), {self.deletions} deletions(-)"
        )


@dataclass(frozen=True, slots=True)
class DiffOutput:
    """A decoded diff: the per-file records plus overall statistics."""

    files: RecordCollection[FileDiff]
    stats: DiffStats

    def is_empty(self) -> bool:
        return self.files.is_empty()

    def __str__(self) -> str:
        return str(self.stats)


def diff_output(files: Iterable[FileDiff], stats: DiffStats | None = None) -> DiffOutput:
    """Build a diff report keyed and searched by path.

    Args:
        files: File records in diff order.
        stats: Totals read from git's own summary line. Computed from the
            per-file counts when omitted.
    """
    collection = RecordCollection(files, key=lambda f: f.path, text=lambda f: f.path)
    if stats is None:
        stats = DiffStats.from_files(collection)
    return DiffOutput(files=collection, stats=stats)


def files_with_status(output: DiffOutput, status: DiffStatus) -> Iterator[FileDiff]:
    return output.files.filter(lambda f: f.status is status)
