"""Commit records decoded from formatted ``git log`` output."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import TypeAlias

from gitquery.collection import RecordCollection
from gitquery.types import Hash

__all__ = [
    "Author",
    "CommitMessage",
    "Commit",
    "CommitDetails",
    "CommitLog",
    "commit_log",
    "by_author",
    "since",
    "until",
    "with_message_containing",
    "merges_only",
    "no_merges",
    "find_by_short_hash",
]


@dataclass(frozen=True, slots=True)
class Author:
    """Identity and time of an author, committer or tagger.

    Attributes:
        name: Display name.
        email: Email address without angle brackets.
        timestamp: Timezone-aware UTC time.
    """

    name: str
    email: str
    timestamp: datetime

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass(frozen=True, slots=True)
class CommitMessage:
    """Subject line and optional body of a commit."""

    subject: str
    body: str | None = None

    @property
    def full(self) -> str:
        if self.body:
            return f"{self.subject}\n\n{self.body}"
        return self.subject

    def is_empty(self) -> bool:
        return not self.subject

    def __str__(self) -> str:
        return self.full


@dataclass(frozen=True, slots=True)
class Commit:
    """A single commit.

    ``timestamp`` is the author time, which is what ``git log`` orders and
    displays by default; the committer time stays on ``committer``.

    Attributes:
        hash: Commit identifier.
        author: Who wrote the change.
        committer: Who recorded the commit.
        message: Subject and body.
        timestamp: Author timestamp.
        parents: Parent identifiers, first parent first.
    """

    hash: Hash
    author: Author
    committer: Author
    message: CommitMessage
    timestamp: datetime
    parents: tuple[Hash, ...] = ()

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def main_parent(self) -> Hash | None:
        return self.parents[0] if self.parents else None

    def is_authored_by(self, author: str) -> bool:
        """True when ``author`` occurs in the author name or email."""
        return author in self.author.name or author in self.author.email

    def message_contains(self, text: str) -> bool:
        """Case-insensitive search of subject and body."""
        needle = text.lower()
        if needle in self.message.subject.lower():
            return True
        return self.message.body is not None and needle in self.message.body.lower()

    def __str__(self) -> str:
        when = self.timestamp.strftime("%Y-%m-%d %H:%M:%S UTC")
        return f"{self.hash.short} {self.message.subject} by {self.author.name} at {when}"


@dataclass(frozen=True, slots=True)
class CommitDetails:
    """A commit together with its ``show --stat`` totals.

    Insertions and deletions come from the stat summary line when git prints
    one, otherwise from per-file approximations (see
    :func:`gitquery.parsers.diff.approximate_line_split`).
    """

    commit: Commit
    files_changed: tuple[str, ...] = field(default_factory=tuple)
    insertions: int = 0
    deletions: int = 0

    @property
    def total_changes(self) -> int:
        return self.insertions + self.deletions

    def has_changes(self) -> bool:
        return bool(self.files_changed)

    def __str__(self) -> str:
        lines = [
            str(self.commit),
            f"Files changed: {len(self.files_changed)}",
            f"Insertions: +{self.insertions}",
            f"Deletions: -{self.deletions}",
        ]
        if self.files_changed:
            lines.append("")
            lines.append("Files:")
            lines.extend(f"  {path}" for path in self.files_changed)
        return "\n".join(lines)


CommitLog: TypeAlias = RecordCollection[Commit]


def commit_log(commits: Iterable[Commit]) -> CommitLog:
    """Wrap commits in log order, keyed by hash and searched by full message."""
    return RecordCollection(commits, key=lambda c: c.hash, text=lambda c: c.message.full)


def by_author(log: CommitLog, author: str) -> Iterator[Commit]:
    return log.filter(lambda c: c.is_authored_by(author))


def since(log: CommitLog, moment: datetime) -> Iterator[Commit]:
    return log.filter(lambda c: c.timestamp >= moment)


def until(log: CommitLog, moment: datetime) -> Iterator[Commit]:
    return log.filter(lambda c: c.timestamp <= moment)


def with_message_containing(log: CommitLog, text: str) -> Iterator[Commit]:
    """Case-insensitive variant of ``log.find_containing``."""
    return log.filter(lambda c: c.message_contains(text))


def merges_only(log: CommitLog) -> Iterator[Commit]:
    return log.filter(lambda c: c.is_merge)


def no_merges(log: CommitLog) -> Iterator[Commit]:
    return log.filter(lambda c: not c.is_merge)


def find_by_short_hash(log: CommitLog, short: str) -> Commit | None:
    return next(log.filter(lambda c: c.hash.short == short), None)
