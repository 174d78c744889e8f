"""Decoder for ``git status --porcelain`` (v1) output."""

from __future__ import annotations

from gitquery.constants import STATUS_PATH_OFFSET, STATUS_RENAME_SEPARATOR
from gitquery.logging import get_logger
from gitquery.models.status import (
    IndexStatus,
    StatusEntry,
    StatusReport,
    WorktreeStatus,
    status_report,
)
from gitquery.parsers._common import non_blank_lines

__all__ = ["decode_status_line", "parse_status_output"]

logger = get_logger(__name__)

_PATH_MOVING_STATUSES = (IndexStatus.RENAMED, IndexStatus.COPIED)


def decode_status_line(line: str) -> StatusEntry | None:
    """Decode one ``XY path`` line.

    Unknown status characters count as clean. A line too short to hold both
    status columns, or whose columns are both clean, yields None.

    Args:
        line: A single porcelain line, including its leading space if any.

    Returns:
        The decoded entry, or None when the line carries no change.
    """
    if len(line) < STATUS_PATH_OFFSET:
        return None

    index_status = IndexStatus.from_char(line[0])
    worktree_status = WorktreeStatus.from_char(line[1])
    if index_status is IndexStatus.CLEAN and worktree_status is WorktreeStatus.CLEAN:
        return None

    path = line[STATUS_PATH_OFFSET:]
    original_path: str | None = None
    if index_status in _PATH_MOVING_STATUSES and STATUS_RENAME_SEPARATOR in path:
        original_path, path = path.split(STATUS_RENAME_SEPARATOR, 1)

    return StatusEntry(
        path=path,
        index_status=index_status,
        worktree_status=worktree_status,
        original_path=original_path,
    )


def parse_status_output(text: str) -> StatusReport:
    """Decode a whole porcelain status report, skipping lines with no change."""
    entries: list[StatusEntry] = []
    skipped = 0
    for line in non_blank_lines(text):
        entry = decode_status_line(line)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)

    logger.debug("status_parsed", entries=len(entries), skipped=skipped)
    return status_report(entries)
