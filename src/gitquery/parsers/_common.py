"""Helpers shared by the report decoders."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime

from gitquery.exceptions import TimestampParseError

__all__ = [
    "EPOCH",
    "non_blank_lines",
    "parse_unix_timestamp",
    "timestamp_or_epoch",
]

#: Sentinel time used where a field is optional and could not be decoded
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def non_blank_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` that hold more than whitespace.

    Only ``\\n`` ends a line; a trailing ``\\r`` is dropped. Lines are
    otherwise yielded unstripped; porcelain status lines depend on their
    leading space.
    """
    for line in text.split("\n"):
        line = line.removesuffix("\r")
        if line.strip():
            yield line


def parse_unix_timestamp(raw: str) -> datetime:
    """Decode epoch seconds into a UTC datetime.

    Args:
        raw: Decimal seconds since the Unix epoch, as printed by ``%at``.

    Returns:
        Timezone-aware UTC datetime.

    Raises:
        TimestampParseError: If ``raw`` is not a signed 64-bit integer or
            falls outside the representable datetime range.
    """
    try:
        seconds = int(raw)
    except ValueError as e:
        raise TimestampParseError(f"Invalid timestamp: {raw!r}", raw_value=raw) from e

    if not _INT64_MIN <= seconds <= _INT64_MAX:
        raise TimestampParseError(f"Timestamp out of range: {raw!r}", raw_value=raw)

    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError) as e:
        raise TimestampParseError(f"Timestamp out of range: {raw!r}", raw_value=raw) from e


def timestamp_or_epoch(raw: str) -> datetime:
    """Like :func:`parse_unix_timestamp`, falling back to :data:`EPOCH`."""
    try:
        return parse_unix_timestamp(raw)
    except TimestampParseError:
        return EPOCH
