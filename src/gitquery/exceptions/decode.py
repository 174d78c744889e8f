from __future__ import annotations

from gitquery.exceptions.base import GitQueryError


class DecodeError(GitQueryError):
    """Exception raised when a report line violates a decoder invariant.

    Raised by the fail-on-malformed decoders (stash entries, log timestamps,
    tag hash resolution, unified patches). The message names the invariant
    that was violated, e.g. ``"expected 4 parts, got 2"``.

    Attributes:
        message: Human-readable error message.
        record_kind: Kind of record being decoded (e.g., "stash", "tag").
        line: The offending source line, if the failure is line-scoped.
    """

    def __init__(
        self,
        message: str,
        record_kind: str | None = None,
        line: str | None = None,
    ) -> None:
        """Initialize the DecodeError.

        Args:
            message: Human-readable error message.
            record_kind: Kind of record being decoded.
            line: The offending source line.
        """
        self.record_kind = record_kind
        self.line = line
        super().__init__(message)


class TimestampParseError(DecodeError):
    """Exception raised when an epoch-seconds field cannot be decoded.

    Attributes:
        message: Human-readable error message.
        raw_value: The text that failed to parse.
    """

    def __init__(self, message: str, raw_value: str) -> None:
        """Initialize the TimestampParseError.

        Args:
            message: Human-readable error message.
            raw_value: The text that failed to parse.
        """
        self.raw_value = raw_value
        super().__init__(message, record_kind="timestamp")
