"""Typed decoders for git's text reports.

gitquery turns the output of status, log, branch, tag, stash and diff
commands into immutable record collections. It never runs git itself: the
caller executes the commands listed in :mod:`gitquery.constants` and hands
the text to :mod:`gitquery.parsers`.

Usage:
    ```python
    from gitquery import ReportKind, decode_report
    from gitquery.models.commit import merges_only

    log = decode_report(ReportKind.LOG, stdout)
    for commit in merges_only(log):
        print(commit)
    ```
"""

from __future__ import annotations

from gitquery.collection import RecordCollection
from gitquery.config import GitQueryConfig, load_config
from gitquery.exceptions import (
    ConfigError,
    DecodeError,
    GitQueryError,
    TimestampParseError,
)
from gitquery.parsers import DiffMode, ReportKind, decode_report
from gitquery.types import Hash

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Hash",
    "RecordCollection",
    "ReportKind",
    "DiffMode",
    "decode_report",
    "GitQueryConfig",
    "load_config",
    "GitQueryError",
    "ConfigError",
    "DecodeError",
    "TimestampParseError",
]
