"""Tests for gitquery.parsers.stash."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from gitquery.exceptions import DecodeError
from gitquery.models.stash import latest_stash, stash_at, stashes_for_branch
from gitquery.parsers._common import EPOCH
from gitquery.parsers.stash import decode_stash_line, parse_stash_output
from gitquery.types import Hash


class TestDecodeStashLine:
    """Tests for single stash lines."""

    def test_on_branch(self) -> None:
        """'On <branch>: <message>' splits into branch and message."""
        stash = decode_stash_line(0, "stash@{0} abc123 1700000000 On main: WIP feature")
        assert stash.index == 0
        assert stash.hash == Hash("abc123")
        assert stash.branch == "main"
        assert stash.message == "WIP feature"
        assert stash.timestamp == datetime.fromtimestamp(1_700_000_000, tz=UTC)

    def test_wip_on_branch(self) -> None:
        """Plain 'git stash' subjects use the 'WIP on' prefix."""
        stash = decode_stash_line(
            1, "stash@{1} def456 1700000000 WIP on feature/x: 1a2b3c4 Commit subject"
        )
        assert stash.branch == "feature/x"
        assert stash.message == "1a2b3c4 Commit subject"

    def test_unknown_prefix(self) -> None:
        """A label without a known prefix gives branch 'unknown'."""
        stash = decode_stash_line(0, "stash@{0} abc 1700000000 autostash: rebase")
        assert stash.branch == "unknown"
        assert stash.message == "rebase"

    def test_no_colon(self) -> None:
        """Without a colon the whole subject is the message."""
        stash = decode_stash_line(0, "stash@{0} abc 1700000000 just a message")
        assert stash.branch == "unknown"
        assert stash.message == "just a message"

    def test_message_keeps_later_colons(self) -> None:
        """Only the first colon separates branch from message."""
        stash = decode_stash_line(0, "stash@{0} abc 1700000000 On main: fix: the thing")
        assert stash.message == "fix: the thing"

    def test_bad_timestamp_uses_epoch(self) -> None:
        """An unparsable epoch falls back to the Unix epoch."""
        stash = decode_stash_line(0, "stash@{0} abc notatime On main: msg")
        assert stash.timestamp == EPOCH

    def test_too_few_parts(self) -> None:
        """Lines with fewer than four parts raise."""
        with pytest.raises(DecodeError, match="expected 4 parts, got 2") as exc_info:
            decode_stash_line(0, "stash@{0} abc")
        assert exc_info.value.record_kind == "stash"

    def test_empty_remainder(self) -> None:
        """A present but empty subject raises."""
        with pytest.raises(DecodeError, match="missing branch and message"):
            decode_stash_line(0, "stash@{0} abc 1700000000 ")


class TestParseStashOutput:
    """Tests for whole stash listings."""

    def test_listing(self) -> None:
        """Entries are indexed by position among non-blank lines."""
        text = (
            "stash@{0} aaa 1700000300 On main: newest\n"
            "\n"
            "stash@{1} bbb 1700000200 WIP on dev: 1234567 middle\n"
            "stash@{2} ccc 1700000100 On main: oldest\n"
        )
        stashes = parse_stash_output(text)
        assert [s.index for s in stashes] == [0, 1, 2]
        latest = latest_stash(stashes)
        assert latest is not None
        assert latest.message == "newest"
        found = stash_at(stashes, 2)
        assert found is not None
        assert found.message == "oldest"
        assert [s.index for s in stashes_for_branch(stashes, "main")] == [0, 2]

    def test_malformed_line_fails_listing(self) -> None:
        """One malformed line fails the whole listing."""
        with pytest.raises(DecodeError):
            parse_stash_output("stash@{0} aaa 1700000300 On main: ok\nbroken\n")

    def test_empty(self) -> None:
        """No output means no stashes."""
        assert latest_stash(parse_stash_output("")) is None
