from __future__ import annotations


class GitQueryError(Exception):
    """Base exception class for all gitquery-specific errors.

    This is the root of the gitquery exception hierarchy. Every error raised by
    a decoder or by configuration loading inherits from this class, so callers
    can catch all library failures at one boundary while letting system
    exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            stashes = parse_stash_output(raw)
        except GitQueryError as e:
            logger.error("stash_query_failed", error=e.message)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the GitQueryError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
