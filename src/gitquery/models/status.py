"""Status records decoded from ``git status --porcelain``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from gitquery.collection import RecordCollection

__all__ = [
    "IndexStatus",
    "WorktreeStatus",
    "StatusEntry",
    "StatusReport",
    "status_report",
    "staged_entries",
    "unstaged_entries",
    "untracked_entries",
    "ignored_entries",
    "with_index_status",
    "with_worktree_status",
    "is_clean",
    "has_changes",
]


class IndexStatus(str, Enum):
    """State of a path in the index relative to HEAD."""

    CLEAN = "clean"
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"

    @classmethod
    def from_char(cls, code: str) -> IndexStatus:
        """Map a porcelain column character; unknown codes mean CLEAN."""
        return _INDEX_BY_CHAR.get(code, cls.CLEAN)

    def to_char(self) -> str:
        return _INDEX_CHARS[self]


class WorktreeStatus(str, Enum):
    """State of a path in the working tree relative to the index."""

    CLEAN = "clean"
    MODIFIED = "modified"
    DELETED = "deleted"
    UNTRACKED = "untracked"
    IGNORED = "ignored"

    @classmethod
    def from_char(cls, code: str) -> WorktreeStatus:
        """Map a porcelain column character; unknown codes mean CLEAN."""
        return _WORKTREE_BY_CHAR.get(code, cls.CLEAN)

    def to_char(self) -> str:
        return _WORKTREE_CHARS[self]


_INDEX_CHARS: dict[IndexStatus, str] = {
    IndexStatus.CLEAN: " ",
    IndexStatus.MODIFIED: "M",
    IndexStatus.ADDED: "A",
    IndexStatus.DELETED: "D",
    IndexStatus.RENAMED: "R",
    IndexStatus.COPIED: "C",
}
_INDEX_BY_CHAR = {char: status for status, char in _INDEX_CHARS.items()}

_WORKTREE_CHARS: dict[WorktreeStatus, str] = {
    WorktreeStatus.CLEAN: " ",
    WorktreeStatus.MODIFIED: "M",
    WorktreeStatus.DELETED: "D",
    WorktreeStatus.UNTRACKED: "?",
    WorktreeStatus.IGNORED: "!",
}
_WORKTREE_BY_CHAR = {char: status for status, char in _WORKTREE_CHARS.items()}


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """One path with changes on at least one status axis.

    Attributes:
        path: Path relative to the repository root.
        index_status: Change staged in the index.
        worktree_status: Change in the working tree not yet staged.
        original_path: Source path of a staged rename or copy.
    """

    path: str
    index_status: IndexStatus
    worktree_status: WorktreeStatus
    original_path: str | None = None

    def __post_init__(self) -> None:
        if (
            self.index_status is IndexStatus.CLEAN
            and self.worktree_status is WorktreeStatus.CLEAN
        ):
            raise ValueError(f"Status entry for {self.path!r} has no changes")

    def __str__(self) -> str:
        return f"{self.index_status.to_char()}{self.worktree_status.to_char()} {self.path}"


StatusReport: TypeAlias = RecordCollection[StatusEntry]


def status_report(entries: Iterable[StatusEntry]) -> StatusReport:
    """Wrap status entries, keyed and searched by path."""
    return RecordCollection(entries, key=lambda e: e.path, text=lambda e: e.path)


def staged_entries(report: StatusReport) -> Iterator[StatusEntry]:
    return report.filter(lambda e: e.index_status is not IndexStatus.CLEAN)


def unstaged_entries(report: StatusReport) -> Iterator[StatusEntry]:
    return report.filter(lambda e: e.worktree_status is not WorktreeStatus.CLEAN)


def untracked_entries(report: StatusReport) -> Iterator[StatusEntry]:
    return with_worktree_status(report, WorktreeStatus.UNTRACKED)


def ignored_entries(report: StatusReport) -> Iterator[StatusEntry]:
    return with_worktree_status(report, WorktreeStatus.IGNORED)


def with_index_status(
    report: StatusReport, status: IndexStatus
) -> Iterator[StatusEntry]:
    return report.filter(lambda e: e.index_status is status)


def with_worktree_status(
    report: StatusReport, status: WorktreeStatus
) -> Iterator[StatusEntry]:
    return report.filter(lambda e: e.worktree_status is status)


def is_clean(report: StatusReport) -> bool:
    """True when the working tree and index match HEAD."""
    return report.is_empty()


def has_changes(report: StatusReport) -> bool:
    return not is_clean(report)
