"""Decoders turning git report text into record collections.

Every decoder is a pure function of its input text. Use the per-report
functions directly, or route a blob by kind with :func:`decode_report`:

    from gitquery.parsers import ReportKind, decode_report

    log = decode_report(ReportKind.LOG, stdout)
"""

from __future__ import annotations

from enum import Enum

from gitquery.config import GitQueryConfig
from gitquery.constants import LOG_FIELD_DELIMITER
from gitquery.models import (
    BranchList,
    CommitLog,
    DiffOutput,
    StashList,
    StatusReport,
    TagList,
)
from gitquery.parsers.branch import decode_branch_line, parse_branch_output
from gitquery.parsers.diff import (
    DiffMode,
    approximate_line_split,
    parse_diff_output,
)
from gitquery.parsers.log import (
    decode_log_line,
    parse_commit_details,
    parse_log_output,
    parse_show_stat_output,
)
from gitquery.parsers.stash import decode_stash_line, parse_stash_output
from gitquery.parsers.status import decode_status_line, parse_status_output
from gitquery.parsers.tag import decode_tag_line, parse_show_tag, parse_tag_output

__all__ = [
    "ReportKind",
    "decode_report",
    "DiffMode",
    "approximate_line_split",
    "decode_status_line",
    "parse_status_output",
    "decode_log_line",
    "parse_log_output",
    "parse_show_stat_output",
    "parse_commit_details",
    "decode_branch_line",
    "parse_branch_output",
    "decode_tag_line",
    "parse_tag_output",
    "parse_show_tag",
    "decode_stash_line",
    "parse_stash_output",
    "parse_diff_output",
]


class ReportKind(str, Enum):
    STATUS = "status"
    LOG = "log"
    BRANCHES = "branches"
    TAGS = "tags"
    STASHES = "stashes"
    DIFF = "diff"


Report = StatusReport | CommitLog | BranchList | TagList | StashList | DiffOutput


def decode_report(
    kind: ReportKind,
    text: str,
    *,
    diff_mode: DiffMode | None = None,
    config: GitQueryConfig | None = None,
) -> Report:
    """Decode ``text`` as a report of the given kind.

    Args:
        kind: Which report produced ``text``.
        text: Raw command output.
        diff_mode: Output form of a DIFF report (default: PATCH). Ignored
            for other kinds.
        config: Supplies the log field delimiter. The default delimiter is
            used when omitted.

    Returns:
        The matching collection, or a :class:`~gitquery.models.DiffOutput`
        for DIFF reports.

    Raises:
        DecodeError: If a fail-on-malformed decoder rejects the text.
    """
    if kind is ReportKind.STATUS:
        return parse_status_output(text)
    if kind is ReportKind.LOG:
        delimiter = LOG_FIELD_DELIMITER
        if config is not None:
            delimiter = config.parsing.log_delimiter
        return parse_log_output(text, delimiter)
    if kind is ReportKind.BRANCHES:
        return parse_branch_output(text)
    if kind is ReportKind.TAGS:
        return parse_tag_output(text)
    if kind is ReportKind.STASHES:
        return parse_stash_output(text)
    return parse_diff_output(text, diff_mode or DiffMode.PATCH)
