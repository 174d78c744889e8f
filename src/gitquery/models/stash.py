"""Stash records decoded from ``git stash list``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import TypeAlias

from gitquery.collection import RecordCollection
from gitquery.types import Hash

__all__ = [
    "Stash",
    "StashList",
    "stash_list",
    "latest_stash",
    "stash_at",
    "stashes_for_branch",
]


@dataclass(frozen=True, slots=True)
class Stash:
    """One stash entry.

    ``index`` is the entry's position at decode time (0 is the newest). It
    shifts whenever a stash is pushed or dropped, so it is not a stable
    identity; use ``hash`` for that.
    """

    index: int
    message: str
    hash: Hash
    branch: str
    timestamp: datetime

    @property
    def ref(self) -> str:
        return f"stash@{{{self.index}}}"

    def __str__(self) -> str:
        return f"{self.ref}: {self.message}"


StashList: TypeAlias = RecordCollection[Stash]


def stash_list(stashes: Iterable[Stash]) -> StashList:
    """Wrap stashes newest first, keyed by index and searched by message."""
    return RecordCollection(stashes, key=lambda s: s.index, text=lambda s: s.message)


def latest_stash(stashes: StashList) -> Stash | None:
    return stashes.first()


def stash_at(stashes: StashList, index: int) -> Stash | None:
    return stashes.find(index)


def stashes_for_branch(stashes: StashList, branch: str) -> Iterator[Stash]:
    return stashes.filter(lambda s: s.branch == branch)
