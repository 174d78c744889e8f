"""Record types produced by the decoders, with their collection helpers.

Each submodule pairs a record type with a ``TypeAlias`` over
:class:`~gitquery.collection.RecordCollection`, a constructor function and
free query functions:

- :mod:`gitquery.models.status`: porcelain status entries
- :mod:`gitquery.models.commit`: commits and commit details
- :mod:`gitquery.models.refs`: branches and tags
- :mod:`gitquery.models.stash`: stash entries
- :mod:`gitquery.models.diff`: file diffs, hunks and statistics

Query functions whose names collide across record types (``find_by_short_name``
for branches, ``find_by_short_hash`` for commits) are exported from their
submodule only.
"""

from __future__ import annotations

from gitquery.models.commit import (
    Author,
    Commit,
    CommitDetails,
    CommitLog,
    CommitMessage,
    commit_log,
)
from gitquery.models.diff import (
    DiffChunk,
    DiffLine,
    DiffLineType,
    DiffOutput,
    DiffStats,
    DiffStatus,
    FileDiff,
    diff_output,
)
from gitquery.models.refs import (
    Branch,
    BranchList,
    BranchType,
    Tag,
    TagList,
    TagType,
    branch_list,
    tag_list,
)
from gitquery.models.stash import Stash, StashList, stash_list
from gitquery.models.status import (
    IndexStatus,
    StatusEntry,
    StatusReport,
    WorktreeStatus,
    status_report,
)

__all__ = [
    # Status
    "IndexStatus",
    "WorktreeStatus",
    "StatusEntry",
    "StatusReport",
    "status_report",
    # Commits
    "Author",
    "CommitMessage",
    "Commit",
    "CommitDetails",
    "CommitLog",
    "commit_log",
    # Refs
    "BranchType",
    "Branch",
    "BranchList",
    "branch_list",
    "TagType",
    "Tag",
    "TagList",
    "tag_list",
    # Stash
    "Stash",
    "StashList",
    "stash_list",
    # Diff
    "DiffStatus",
    "DiffLineType",
    "DiffLine",
    "DiffChunk",
    "FileDiff",
    "DiffStats",
    "DiffOutput",
    "diff_output",
]
