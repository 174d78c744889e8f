"""Decoder for ``git branch -vv --all`` output."""

from __future__ import annotations

from gitquery.constants import CURRENT_BRANCH_MARKER, REMOTE_BRANCH_PREFIX, ZERO_HASH
from gitquery.logging import get_logger
from gitquery.models.refs import Branch, BranchList, BranchType, branch_list
from gitquery.parsers._common import non_blank_lines
from gitquery.types import Hash

__all__ = ["decode_branch_line", "parse_branch_output"]

logger = get_logger(__name__)


def _upstream(line: str) -> str | None:
    """Upstream name from the first ``[...]`` group, without ahead/behind."""
    start = line.find("[")
    if start == -1:
        return None
    end = line.find("]", start)
    if end == -1:
        return None
    upstream = line[start + 1 : end].split(":", 1)[0].strip()
    return upstream or None


def decode_branch_line(line: str) -> Branch | None:
    """Decode one verbose branch line.

    Symbolic pointers (``remotes/origin/HEAD -> origin/main``) and detached
    HEAD lines (``(HEAD detached at 1a2b3c4)``) yield None.

    Example:
        ``* main  1a2b3c4 [origin/main: ahead 1] Fix parser`` decodes to the
        current local branch ``main`` tracking ``origin/main``.
    """
    line = line.strip()
    if not line or "->" in line:
        return None

    is_current = line.startswith(CURRENT_BRANCH_MARKER)
    if is_current:
        line = line[len(CURRENT_BRANCH_MARKER) :].strip()
    if line.startswith("("):
        return None

    parts = line.split()
    if not parts:
        return None

    name = parts[0]
    branch_type = BranchType.LOCAL
    if name.startswith(REMOTE_BRANCH_PREFIX):
        branch_type = BranchType.REMOTE_TRACKING
        name = name[len(REMOTE_BRANCH_PREFIX) :]

    return Branch(
        name=name,
        branch_type=branch_type,
        is_current=is_current,
        commit_hash=Hash(parts[1] if len(parts) > 1 else ZERO_HASH),
        upstream=_upstream(line),
    )


def parse_branch_output(text: str) -> BranchList:
    """Decode a whole branch listing, sorted by name."""
    branches: list[Branch] = []
    for line in non_blank_lines(text):
        branch = decode_branch_line(line)
        if branch is None:
            logger.debug("branch_line_skipped", line=line)
            continue
        branches.append(branch)

    logger.debug("branches_parsed", branches=len(branches))
    return branch_list(branches)
