"""Decoders for tag listings and ``git show`` tag output.

Listings come from ``git for-each-ref refs/tags`` in
:data:`~gitquery.constants.TAG_FORMAT`. For annotated tags git reports the
tag object in ``objectname`` and the tagged commit in ``*objectname``; the
decoded :class:`~gitquery.models.refs.Tag` always points at the commit.
"""

from __future__ import annotations

from datetime import UTC, datetime

from gitquery.constants import (
    ANNOTATED_TAG_OBJECT_TYPE,
    TAG_FIELD_COUNT,
    TAG_FIELD_DELIMITER,
)
from gitquery.exceptions import DecodeError
from gitquery.logging import get_logger
from gitquery.models.commit import Author
from gitquery.models.refs import Tag, TagList, TagType, tag_list
from gitquery.parsers._common import EPOCH, non_blank_lines, timestamp_or_epoch
from gitquery.types import Hash

__all__ = ["decode_tag_line", "parse_tag_output", "parse_show_tag"]

logger = get_logger(__name__)

# Date format of the tag header printed by `git show`
_SHOW_DATE_FORMAT = "%a %b %d %H:%M:%S %Y %z"
_SHOW_DATE_PREFIXES = ("TaggerDate:", "Date:")
_SHOW_TAGGER_PREFIX = "Tagger:"
_SHOW_COMMIT_PREFIX = "commit "
_SHOW_COMMIT_FOLLOWERS = ("Author:", "Merge:")


def _annotation_message(subject: str, body: str) -> str | None:
    if not subject and not body:
        return None
    message = f"{subject}\n\n{body}" if body else subject
    return message.strip() or None


def decode_tag_line(line: str) -> Tag:
    """Decode one for-each-ref tag line.

    Raises:
        DecodeError: If the line has fewer than nine columns.
    """
    parts = line.split(TAG_FIELD_DELIMITER)
    if len(parts) < TAG_FIELD_COUNT:
        raise DecodeError(
            f"Invalid for-each-ref format: expected {TAG_FIELD_COUNT} parts, got {len(parts)}",
            record_kind="tag",
            line=line,
        )

    (
        name,
        object_type,
        object_name,
        dereferenced,
        tagger_name,
        tagger_email,
        tagger_date,
        subject,
        body,
    ) = parts[:TAG_FIELD_COUNT]

    if object_type != ANNOTATED_TAG_OBJECT_TYPE:
        return Tag(name=name, hash=Hash(object_name), tag_type=TagType.LIGHTWEIGHT)

    tagger: Author | None = None
    if tagger_name and tagger_email:
        tagger = Author(
            name=tagger_name,
            # %(taggeremail) prints "<email>"; stored bare like Author.email elsewhere
            email=tagger_email.strip("<>"),
            timestamp=timestamp_or_epoch(tagger_date),
        )
    return Tag(
        name=name,
        hash=Hash(dereferenced),
        tag_type=TagType.ANNOTATED,
        message=_annotation_message(subject, body),
        tagger=tagger,
        timestamp=tagger.timestamp if tagger else None,
    )


def parse_tag_output(text: str) -> TagList:
    """Decode a tag listing sorted by name, skipping malformed lines."""
    tags: list[Tag] = []
    for line in non_blank_lines(text):
        try:
            tags.append(decode_tag_line(line))
        except DecodeError as e:
            logger.debug("tag_line_skipped", line=line, reason=e.message)

    logger.debug("tags_parsed", tags=len(tags))
    return tag_list(tags)


def _parse_identity(value: str) -> tuple[str, str] | None:
    """Split ``Name <email>``."""
    start = value.find("<")
    end = value.find(">", start)
    if start == -1 or end == -1:
        return None
    return value[:start].strip(), value[start + 1 : end]


def _parse_show_date(value: str) -> datetime:
    try:
        return datetime.strptime(value.strip(), _SHOW_DATE_FORMAT).astimezone(UTC)
    except ValueError:
        return EPOCH


def _find_commit_header(lines: list[str]) -> int | None:
    """Index of the tagged commit's ``commit <hash>`` line.

    Tag messages are printed unindented before the commit, so a message line
    may also start with ``commit``. The header is the last such line that is
    followed by the commit's ``Author:`` (or ``Merge:``) line.
    """
    found: int | None = None
    for i, line in enumerate(lines[:-1]):
        if line.startswith(_SHOW_COMMIT_PREFIX) and lines[i + 1].startswith(
            _SHOW_COMMIT_FOLLOWERS
        ):
            found = i
    return found


def parse_show_tag(name: str, text: str) -> Tag:
    """Decode ``git show --format=fuller <tag>`` output.

    Annotated tags print a ``tag``/``Tagger:``/``Date:`` header and their
    message before the tagged commit; lightweight tags print the commit
    only. A tagger date that cannot be read falls back to the Unix epoch.

    Args:
        name: Tag name that was shown.
        text: The command output.

    Raises:
        DecodeError: If no ``commit <hash>`` line is present.
    """
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    commit_at = _find_commit_header(lines)
    if commit_at is None:
        raise DecodeError("Could not parse tag commit hash", record_kind="tag")
    commit_hash = Hash(lines[commit_at].split()[1])

    header = lines[:commit_at]
    is_annotated = any(line.startswith("tag ") for line in header) and any(
        line.startswith(_SHOW_TAGGER_PREFIX) for line in header
    )
    if not is_annotated:
        return Tag(name=name, hash=commit_hash, tag_type=TagType.LIGHTWEIGHT)

    identity: tuple[str, str] | None = None
    timestamp = EPOCH
    message_lines: list[str] = []
    in_message = False
    for line in header:
        if in_message:
            message_lines.append(line.strip())
        elif line.startswith(_SHOW_TAGGER_PREFIX):
            identity = _parse_identity(line[len(_SHOW_TAGGER_PREFIX) :])
        elif line.startswith(_SHOW_DATE_PREFIXES):
            timestamp = _parse_show_date(line.split(":", 1)[1])
        elif not line.strip():
            in_message = True

    tagger = Author(name=identity[0], email=identity[1], timestamp=timestamp) if identity else None
    message = "\n".join(message_lines).strip()
    return Tag(
        name=name,
        hash=commit_hash,
        tag_type=TagType.ANNOTATED,
        message=message or None,
        tagger=tagger,
        timestamp=timestamp,
    )
