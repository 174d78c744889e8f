"""Decoders for ``git log`` in :data:`~gitquery.constants.LOG_FORMAT` and
``git show --stat``.

Each log line carries ten delimiter-separated fields::

    hash|author name|author email|author time|committer name|committer email|
    committer time|parents|subject|body

The delimiter is not escaped by git, so a subject containing it shifts the
remaining fields. Callers that need arbitrary subjects should request a
format with a control-character delimiter and pass the same character here
(or set ``parsing.log_delimiter`` in the config).
"""

from __future__ import annotations

from gitquery.constants import LOG_FIELD_DELIMITER, LOG_MAX_FIELDS, LOG_MIN_FIELDS
from gitquery.exceptions import DecodeError
from gitquery.logging import get_logger
from gitquery.models.commit import (
    Author,
    Commit,
    CommitDetails,
    CommitLog,
    CommitMessage,
    commit_log,
)
from gitquery.parsers._common import non_blank_lines, parse_unix_timestamp
from gitquery.parsers.diff import parse_stat_lines
from gitquery.types import Hash

__all__ = [
    "decode_log_line",
    "parse_log_output",
    "parse_show_stat_output",
    "parse_commit_details",
]

logger = get_logger(__name__)


def decode_log_line(line: str, delimiter: str = LOG_FIELD_DELIMITER) -> Commit | None:
    """Decode one formatted log line.

    Args:
        line: A single line of log output.
        delimiter: Field separator the format was requested with.

    Returns:
        The decoded commit, or None when the line has fewer than nine fields.

    Raises:
        TimestampParseError: If either epoch field is not a valid integer.
    """
    # Only blanks are trimmed; \x1c-\x1f are valid delimiters
    parts = line.strip(" \t\r").split(delimiter, LOG_MAX_FIELDS - 1)
    if len(parts) < LOG_MIN_FIELDS:
        return None

    (
        hash_value,
        author_name,
        author_email,
        author_time,
        committer_name,
        committer_email,
        committer_time,
        parents,
        subject,
    ) = parts[:LOG_MIN_FIELDS]
    body = parts[LOG_MIN_FIELDS] if len(parts) > LOG_MIN_FIELDS else ""

    author = Author(
        name=author_name,
        email=author_email,
        timestamp=parse_unix_timestamp(author_time),
    )
    committer = Author(
        name=committer_name,
        email=committer_email,
        timestamp=parse_unix_timestamp(committer_time),
    )
    return Commit(
        hash=Hash(hash_value),
        author=author,
        committer=committer,
        message=CommitMessage(subject=subject, body=body or None),
        timestamp=author.timestamp,
        parents=tuple(Hash(p) for p in parents.split()),
    )


def parse_log_output(text: str, delimiter: str = LOG_FIELD_DELIMITER) -> CommitLog:
    """Decode a whole log report.

    Lines with too few fields are skipped; a bad timestamp fails the report.

    Raises:
        TimestampParseError: If any decoded line has an invalid epoch field.
    """
    commits: list[Commit] = []
    for line in non_blank_lines(text):
        commit = decode_log_line(line, delimiter)
        if commit is None:
            logger.debug("log_line_skipped", line=line)
            continue
        commits.append(commit)

    logger.debug("log_parsed", commits=len(commits))
    return commit_log(commits)


def parse_show_stat_output(text: str) -> tuple[tuple[str, ...], int, int]:
    """Decode ``git show --stat --format=`` output.

    Per-file lines contribute approximate insertion/deletion counts; the
    summary line, when present, replaces those approximations with exact
    totals.

    Returns:
        ``(paths, insertions, deletions)``.
    """
    files, summary = parse_stat_lines(text, approximate=True)
    paths = tuple(f.path for f in files)
    if summary is not None:
        return paths, summary.insertions, summary.deletions
    return (
        paths,
        sum(f.additions for f in files),
        sum(f.deletions for f in files),
    )


def parse_commit_details(
    log_text: str,
    stat_text: str,
    delimiter: str = LOG_FIELD_DELIMITER,
) -> CommitDetails:
    """Combine a single-commit log report with its ``show --stat`` output.

    Raises:
        DecodeError: If ``log_text`` holds no decodable commit.
        TimestampParseError: If the commit has an invalid epoch field.
    """
    commit = parse_log_output(log_text, delimiter).first()
    if commit is None:
        raise DecodeError("Commit not found in log output", record_kind="commit")

    paths, insertions, deletions = parse_show_stat_output(stat_text)
    return CommitDetails(
        commit=commit,
        files_changed=paths,
        insertions=insertions,
        deletions=deletions,
    )
