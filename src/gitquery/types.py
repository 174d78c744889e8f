"""Identifier type for git objects."""

from __future__ import annotations

from dataclasses import dataclass

from gitquery.constants import SHORT_HASH_LENGTH

__all__ = ["Hash"]


@dataclass(frozen=True, slots=True, order=True)
class Hash:
    """Opaque identifier of a git object (commit, tree, blob, tag).

    Equality and ordering compare the raw string exactly; no case folding or
    abbreviation matching is done.

    Attributes:
        value: The identifier as reported by git.
    """

    value: str

    @property
    def short(self) -> str:
        """First 7 characters, or the whole value when shorter."""
        return self.value[:SHORT_HASH_LENGTH]

    def __str__(self) -> str:
        return self.value
