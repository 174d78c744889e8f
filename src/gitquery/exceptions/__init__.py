"""gitquery exception hierarchy.

All exceptions can be imported from this package:
    from gitquery.exceptions import DecodeError, GitQueryError
"""

from __future__ import annotations

# Base exception
from gitquery.exceptions.base import GitQueryError

# Configuration exceptions
from gitquery.exceptions.config import ConfigError

# Decoder exceptions
from gitquery.exceptions.decode import DecodeError, TimestampParseError

__all__ = [
    # Base
    "GitQueryError",
    # Config
    "ConfigError",
    # Decode
    "DecodeError",
    "TimestampParseError",
]
