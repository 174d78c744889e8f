"""Branch and tag records."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TypeAlias

from gitquery.collection import RecordCollection
from gitquery.models.commit import Author
from gitquery.types import Hash

__all__ = [
    "BranchType",
    "Branch",
    "BranchList",
    "branch_list",
    "local_branches",
    "remote_branches",
    "current_branch",
    "find_by_short_name",
    "local_count",
    "remote_count",
    "TagType",
    "Tag",
    "TagList",
    "tag_list",
    "lightweight_tags",
    "annotated_tags",
    "lightweight_count",
    "annotated_count",
    "tags_for_commit",
]


# =============================================================================
# Branches
# =============================================================================


class BranchType(str, Enum):
    LOCAL = "local"
    REMOTE_TRACKING = "remote_tracking"


@dataclass(frozen=True, slots=True)
class Branch:
    """A local or remote-tracking branch.

    Attributes:
        name: Full branch name; remote-tracking names keep the remote
            segment (``origin/main``).
        branch_type: Local or remote-tracking.
        is_current: True for the checked-out branch.
        commit_hash: Tip commit, or the zero hash when git printed none.
        upstream: Configured upstream, without ahead/behind counts.
    """

    name: str
    branch_type: BranchType
    is_current: bool
    commit_hash: Hash
    upstream: str | None = None

    @property
    def is_remote(self) -> bool:
        return self.branch_type is BranchType.REMOTE_TRACKING

    @property
    def short_name(self) -> str:
        """Name without the remote segment.

        ``origin/feature/x`` becomes ``feature/x``. Local branches are
        returned unchanged, slashes included.
        """
        if self.is_remote and "/" in self.name:
            return self.name.split("/", 1)[1]
        return self.name

    def __str__(self) -> str:
        marker = "* " if self.is_current else "  "
        return f"{marker}{self.name} {self.commit_hash.short}"


BranchList: TypeAlias = RecordCollection[Branch]


def branch_list(branches: Iterable[Branch]) -> BranchList:
    """Wrap branches sorted by name."""
    return RecordCollection(branches, key=lambda b: b.name, sort_by_key=True)


def local_branches(branches: BranchList) -> Iterator[Branch]:
    return branches.filter(lambda b: b.branch_type is BranchType.LOCAL)


def remote_branches(branches: BranchList) -> Iterator[Branch]:
    return branches.filter(lambda b: b.branch_type is BranchType.REMOTE_TRACKING)


def current_branch(branches: BranchList) -> Branch | None:
    return next(branches.filter(lambda b: b.is_current), None)


def find_by_short_name(branches: BranchList, short_name: str) -> Branch | None:
    """First branch (in name order) whose short name matches exactly."""
    return next(branches.filter(lambda b: b.short_name == short_name), None)


def local_count(branches: BranchList) -> int:
    return branches.count(lambda b: b.branch_type is BranchType.LOCAL)


def remote_count(branches: BranchList) -> int:
    return branches.count(lambda b: b.branch_type is BranchType.REMOTE_TRACKING)


# =============================================================================
# Tags
# =============================================================================


class TagType(str, Enum):
    LIGHTWEIGHT = "lightweight"
    ANNOTATED = "annotated"


@dataclass(frozen=True, slots=True)
class Tag:
    """A named reference to a commit.

    For annotated tags ``hash`` is the dereferenced commit, never the tag
    object itself.

    Attributes:
        name: Short tag name.
        hash: Target commit.
        tag_type: Lightweight or annotated.
        message: Annotation text (annotated only).
        tagger: Who created the annotation (annotated only).
        timestamp: When the annotation was created (annotated only).

    Raises:
        ValueError: If a lightweight tag is given annotation fields.
    """

    name: str
    hash: Hash
    tag_type: TagType
    message: str | None = None
    tagger: Author | None = None
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        if self.tag_type is TagType.LIGHTWEIGHT and (
            self.message is not None
            or self.tagger is not None
            or self.timestamp is not None
        ):
            raise ValueError(f"Lightweight tag {self.name!r} cannot carry annotation data")

    @property
    def is_annotated(self) -> bool:
        return self.tag_type is TagType.ANNOTATED

    @property
    def is_lightweight(self) -> bool:
        return self.tag_type is TagType.LIGHTWEIGHT

    def __str__(self) -> str:
        if self.message:
            subject = self.message.split("\n", 1)[0]
            return f"{self.name} ({self.hash.short}) {subject}"
        return f"{self.name} ({self.hash.short})"


TagList: TypeAlias = RecordCollection[Tag]


def tag_list(tags: Iterable[Tag]) -> TagList:
    """Wrap tags sorted by name; substring search also covers the message."""
    return RecordCollection(
        tags,
        key=lambda t: t.name,
        text=lambda t: f"{t.name}\n{t.message}" if t.message else t.name,
        sort_by_key=True,
    )


def lightweight_tags(tags: TagList) -> Iterator[Tag]:
    return tags.filter(lambda t: t.is_lightweight)


def annotated_tags(tags: TagList) -> Iterator[Tag]:
    return tags.filter(lambda t: t.is_annotated)


def lightweight_count(tags: TagList) -> int:
    return tags.count(lambda t: t.is_lightweight)


def annotated_count(tags: TagList) -> int:
    return tags.count(lambda t: t.is_annotated)


def tags_for_commit(tags: TagList, commit: Hash) -> Iterator[Tag]:
    return tags.filter(lambda t: t.hash == commit)
