"""Decoders for ``git diff`` output in its summary and patch forms.

Four forms are understood, selected with :class:`DiffMode`:

- ``NAME_ONLY``: one path per line (``--name-only``)
- ``NUMSTAT``: ``adds<TAB>dels<TAB>path`` (``--numstat``)
- ``STAT``: human ``path | N +++--`` lines plus a summary (``--stat``)
- ``PATCH``: full unified diff, decoded with :mod:`unidiff`

Only the patch form yields hunks; the others produce summary records.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import Enum

from unidiff import PatchSet
from unidiff.errors import UnidiffParseError
from unidiff.patch import Hunk, PatchedFile

from gitquery.constants import STAT_COLUMN_SEPARATOR
from gitquery.exceptions import DecodeError
from gitquery.logging import get_logger
from gitquery.models.diff import (
    DiffChunk,
    DiffLine,
    DiffLineType,
    DiffOutput,
    DiffStats,
    DiffStatus,
    FileDiff,
    diff_output,
)
from gitquery.parsers._common import non_blank_lines

__all__ = [
    "DiffMode",
    "approximate_line_split",
    "parse_stat_summary",
    "parse_stat_lines",
    "parse_name_only_output",
    "parse_numstat_output",
    "parse_stat_output",
    "parse_patch_output",
    "parse_diff_output",
]

logger = get_logger(__name__)

_STAT_SUMMARY_RE = re.compile(
    r"(\d+)\s+files?\s+changed"
    r"(?:,\s+(\d+)\s+insertions?\(\+\))?"
    r"(?:,\s+(\d+)\s+deletions?\(-\))?",
)

# "{old => new}" segment of a numstat rename path
_BRACE_RENAME_RE = re.compile(r"\{(?P<old>[^{}]*) => (?P<new>[^{}]*)\}")

_NUMSTAT_BINARY = "-"
_RENAME_ARROW = " => "
_DEV_NULL = "/dev/null"


class DiffMode(str, Enum):
    NAME_ONLY = "name_only"
    NUMSTAT = "numstat"
    STAT = "stat"
    PATCH = "patch"


# =============================================================================
# Stat helpers
# =============================================================================


def approximate_line_split(changes: int, glyphs: str) -> tuple[int, int]:
    """Split a ``--stat`` change count into insertions and deletions.

    ``--stat`` prints one combined count per file plus a bar of ``+`` and
    ``-`` glyphs scaled to the terminal width. The split follows the glyph
    ratio, so it is approximate for large files; exact per-file counts need
    ``--numstat``.

    Args:
        changes: Combined count from the stat column.
        glyphs: The ``+``/``-`` bar that follows it.

    Returns:
        ``(insertions, deletions)``, summing to ``changes``; ``(0, 0)`` when
        the bar holds no glyphs.

    Example:
        >>> approximate_line_split(15, "++++++++++-----")
        (10, 5)
    """
    plus = glyphs.count("+")
    minus = glyphs.count("-")
    total = plus + minus
    if total == 0:
        return 0, 0
    insertions = changes * plus // total
    return insertions, changes - insertions


def parse_stat_summary(line: str) -> DiffStats | None:
    """Read "N files changed, A insertions(+), D deletions(-)".

    Singular forms are accepted and either count may be absent.
    """
    match = _STAT_SUMMARY_RE.search(line)
    if not match:
        return None
    return DiffStats(
        files_changed=int(match.group(1)),
        insertions=int(match.group(2)) if match.group(2) else 0,
        deletions=int(match.group(3)) if match.group(3) else 0,
    )


def _decode_stat_line(line: str, approximate: bool) -> FileDiff:
    path, _, column = line.partition(STAT_COLUMN_SEPARATOR)
    column = column.strip()
    if column.startswith("Bin"):
        return FileDiff(path=path.strip(), status=DiffStatus.MODIFIED, is_binary=True)

    additions = deletions = 0
    if approximate:
        count, _, glyphs = column.partition(" ")
        if count.isdigit():
            additions, deletions = approximate_line_split(int(count), glyphs)
    return FileDiff(
        path=path.strip(),
        status=DiffStatus.MODIFIED,
        additions=additions,
        deletions=deletions,
    )


def parse_stat_lines(
    text: str, *, approximate: bool = False
) -> tuple[list[FileDiff], DiffStats | None]:
    """Decode ``--stat`` text into file records and the summary line.

    Args:
        text: Output of ``git diff --stat`` or ``git show --stat``.
        approximate: Fill per-file counts with :func:`approximate_line_split`.
            Otherwise per-file counts stay zero.

    Returns:
        File records in output order, and the summary if one was printed.
    """
    files: list[FileDiff] = []
    summary: DiffStats | None = None
    for line in non_blank_lines(text):
        if STAT_COLUMN_SEPARATOR in line:
            files.append(_decode_stat_line(line, approximate))
        elif "changed" in line:
            summary = parse_stat_summary(line) or summary
    return files, summary


# =============================================================================
# Summary forms
# =============================================================================


def parse_name_only_output(text: str) -> DiffOutput:
    """Each non-empty line becomes a MODIFIED record without counts."""
    files = [
        FileDiff(path=line.strip(), status=DiffStatus.MODIFIED)
        for line in non_blank_lines(text)
    ]
    return diff_output(files)


def _split_rename(path: str) -> tuple[str | None, str]:
    """Resolve a numstat rename path to ``(old_path, new_path)``.

    Handles both ``old => new`` and ``dir/{old => new}/file``. Paths with
    no arrow return ``(None, path)``.
    """
    match = _BRACE_RENAME_RE.search(path)
    if match:
        prefix, suffix = path[: match.start()], path[match.end() :]
        old = f"{prefix}{match.group('old')}{suffix}"
        new = f"{prefix}{match.group('new')}{suffix}"
        # An empty side ("{ => lib}/x.py") leaves a doubled or leading slash
        return _normalize_slashes(old), _normalize_slashes(new)
    if _RENAME_ARROW in path:
        old, new = path.split(_RENAME_ARROW, 1)
        return old, new
    return None, path


def _normalize_slashes(path: str) -> str:
    while "//" in path:
        path = path.replace("//", "/")
    return path.lstrip("/")


def _decode_numstat_line(line: str) -> FileDiff | None:
    parts = line.split("\t", 2)
    if len(parts) < 3:
        return None
    raw_adds, raw_dels, raw_path = parts

    is_binary = raw_adds == _NUMSTAT_BINARY and raw_dels == _NUMSTAT_BINARY
    additions = int(raw_adds) if raw_adds.isdigit() else 0
    deletions = int(raw_dels) if raw_dels.isdigit() else 0

    old_path, path = _split_rename(raw_path)
    if old_path is not None:
        status = DiffStatus.RENAMED
    elif additions > 0 and deletions == 0:
        status = DiffStatus.ADDED
    elif additions == 0 and deletions > 0:
        status = DiffStatus.DELETED
    else:
        status = DiffStatus.MODIFIED

    return FileDiff(
        path=path,
        status=status,
        old_path=old_path,
        additions=additions,
        deletions=deletions,
        is_binary=is_binary,
    )


def parse_numstat_output(text: str) -> DiffOutput:
    """Decode ``--numstat`` output.

    The status is inferred from the counts alone: additions only means
    ADDED, deletions only means DELETED. Binary files (``-`` counts) keep
    zero counts and are flagged ``is_binary``. Lines with fewer than three
    tab-separated fields are skipped.
    """
    files: list[FileDiff] = []
    for line in non_blank_lines(text):
        file_diff = _decode_numstat_line(line)
        if file_diff is None:
            logger.debug("numstat_line_skipped", line=line)
            continue
        files.append(file_diff)
    return diff_output(files)


def parse_stat_output(text: str) -> DiffOutput:
    """Decode ``--stat`` output.

    Per-file records carry no counts; statistics come from git's summary
    line, or are zero when there is none.
    """
    files, summary = parse_stat_lines(text)
    return diff_output(files, summary)


# =============================================================================
# Patch form
# =============================================================================


def _strip_side_prefix(name: str, prefix: str) -> str:
    return name[len(prefix) :] if name.startswith(prefix) else name


def _patched_file_status(patched_file: PatchedFile) -> DiffStatus:
    if patched_file.is_added_file:
        return DiffStatus.ADDED
    if patched_file.is_removed_file:
        return DiffStatus.DELETED
    if patched_file.is_rename:
        return DiffStatus.RENAMED
    return DiffStatus.MODIFIED


def _iter_diff_lines(hunk: Hunk) -> Iterator[DiffLine]:
    for line in hunk:
        line_type = DiffLineType.from_char(line.line_type)
        # "\ No newline at end of file" markers carry no content
        if line_type is None:
            continue
        yield DiffLine(line_type=line_type, content=line.value.rstrip("\r\n"))


def _decode_patched_file(patched_file: PatchedFile) -> FileDiff:
    source = _strip_side_prefix(patched_file.source_file, "a/")
    target = _strip_side_prefix(patched_file.target_file, "b/")
    status = _patched_file_status(patched_file)

    path = source if patched_file.target_file == _DEV_NULL else target
    old_path = source if status is DiffStatus.RENAMED and source != target else None

    chunks = tuple(
        DiffChunk(
            old_start=hunk.source_start,
            old_count=hunk.source_length,
            new_start=hunk.target_start,
            new_count=hunk.target_length,
            lines=tuple(_iter_diff_lines(hunk)),
        )
        for hunk in patched_file
    )
    return FileDiff(
        path=path,
        status=status,
        old_path=old_path,
        chunks=chunks,
        additions=patched_file.added,
        deletions=patched_file.removed,
        is_binary=patched_file.is_binary_file,
    )


def parse_patch_output(text: str) -> DiffOutput:
    """Decode a full unified diff.

    Raises:
        DecodeError: If the patch is malformed.
    """
    try:
        patch = PatchSet.from_string(text)
    except UnidiffParseError as e:
        raise DecodeError(f"Malformed patch: {e}", record_kind="diff") from e

    files = [_decode_patched_file(patched_file) for patched_file in patch]
    logger.debug(
        "patch_parsed",
        files=len(files),
        binary=sum(1 for f in files if f.is_binary),
    )
    return diff_output(files)


# =============================================================================
# Dispatch
# =============================================================================


def parse_diff_output(text: str, mode: DiffMode = DiffMode.PATCH) -> DiffOutput:
    """Decode diff output produced in ``mode``.

    Raises:
        DecodeError: If ``mode`` is PATCH and the patch is malformed.
    """
    if mode is DiffMode.NAME_ONLY:
        return parse_name_only_output(text)
    if mode is DiffMode.NUMSTAT:
        return parse_numstat_output(text)
    if mode is DiffMode.STAT:
        return parse_stat_output(text)
    return parse_patch_output(text)
