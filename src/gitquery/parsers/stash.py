"""Decoder for ``git stash list`` in :data:`~gitquery.constants.STASH_FORMAT`."""

from __future__ import annotations

from gitquery.constants import STASH_BRANCH_PREFIXES, STASH_FIELD_COUNT, UNKNOWN_BRANCH
from gitquery.exceptions import DecodeError
from gitquery.logging import get_logger
from gitquery.models.stash import Stash, StashList, stash_list
from gitquery.parsers._common import non_blank_lines, timestamp_or_epoch
from gitquery.types import Hash

__all__ = ["decode_stash_line", "parse_stash_output"]

logger = get_logger(__name__)


def _split_subject(remainder: str) -> tuple[str, str]:
    """Split a reflog subject into ``(branch, message)``."""
    label, colon, message = remainder.partition(":")
    if not colon:
        return UNKNOWN_BRANCH, remainder

    branch = UNKNOWN_BRANCH
    for prefix in STASH_BRANCH_PREFIXES:
        if label.startswith(prefix):
            branch = label[len(prefix) :]
            break
    return branch, message.strip()


def decode_stash_line(index: int, line: str) -> Stash:
    """Decode one ``stash@{N} <hash> <epoch> <subject>`` line.

    Args:
        index: Position of the entry in the listing (0 is the newest).
        line: The line, without its line terminator.

    Returns:
        The decoded stash. An unparsable epoch yields the Unix epoch.

    Raises:
        DecodeError: If the line has fewer than four space-separated parts
            or an empty subject.

    Example:
        ``stash@{0} abc123 1700000000 On main: WIP feature`` decodes to
        index 0 on branch ``main`` with message ``WIP feature``.
    """
    parts = line.split(" ", STASH_FIELD_COUNT - 1)
    if len(parts) < STASH_FIELD_COUNT:
        raise DecodeError(
            f"Invalid stash list format: expected {STASH_FIELD_COUNT} parts, got {len(parts)}",
            record_kind="stash",
            line=line,
        )

    _, hash_value, raw_time, remainder = parts
    if not remainder.strip():
        raise DecodeError(
            "Invalid stash format: missing branch and message information",
            record_kind="stash",
            line=line,
        )

    branch, message = _split_subject(remainder)
    return Stash(
        index=index,
        message=message,
        hash=Hash(hash_value),
        branch=branch,
        timestamp=timestamp_or_epoch(raw_time),
    )


def parse_stash_output(text: str) -> StashList:
    """Decode a whole stash listing, newest first.

    Indices count non-blank lines only.

    Raises:
        DecodeError: If any line is malformed; no partial list is returned.
    """
    stashes = [
        decode_stash_line(index, line.strip())
        for index, line in enumerate(non_blank_lines(text))
    ]
    logger.debug("stashes_parsed", stashes=len(stashes))
    return stash_list(stashes)
