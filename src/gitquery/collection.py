"""Immutable, ordered container shared by every decoded report.

Status reports, commit logs, branch and tag lists, stash lists and diff file
lists are all :class:`RecordCollection` instances over different record types.
Each instantiation supplies two accessors:

- ``key``: the value :meth:`RecordCollection.find` compares for equality
- ``text``: the string :meth:`RecordCollection.find_containing` searches

Type-specific queries (staged entries, merge commits, remote branches, ...)
live as free functions next to each record type in :mod:`gitquery.models`.

Example:
    ```python
    tags = parse_tag_output(raw)
    tags.find("v1.0.0")
    list(tags.find_containing("rc"))
    tags.count(lambda t: t.is_annotated)
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import Any, Generic, TypeVar, overload

__all__ = ["RecordCollection"]

T = TypeVar("T")


class RecordCollection(Generic[T]):
    """Ordered, read-only sequence of decoded records.

    Insertion order is preserved unless ``sort_by_key`` is set, in which case
    records are ordered by their key (used by the branch and tag lists so the
    result does not depend on git's enumeration order).

    Args:
        records: Records in source order.
        key: Returns the exact-match lookup value of a record.
        text: Returns the searchable text of a record. Defaults to ``str(key)``.
        sort_by_key: Order records by ``key`` instead of source order.
    """

    __slots__ = ("_records", "_key", "_text")

    def __init__(
        self,
        records: Iterable[T],
        *,
        key: Callable[[T], Any],
        text: Callable[[T], str] | None = None,
        sort_by_key: bool = False,
    ) -> None:
        items = sorted(records, key=key) if sort_by_key else list(records)
        self._records: tuple[T, ...] = tuple(items)
        self._key = key
        self._text: Callable[[T], str] = text or (lambda record: str(key(record)))

    # -------------------------------------------------------------------------
    # Sequence protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return iter(self._records)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[T, ...]: ...

    def __getitem__(self, index: int | slice) -> T | tuple[T, ...]:
        return self._records[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordCollection):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._records)!r})"

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_empty(self) -> bool:
        """True when the report decoded no records."""
        return not self._records

    def all(self) -> tuple[T, ...]:
        """All records, in collection order."""
        return self._records

    def first(self) -> T | None:
        return self._records[0] if self._records else None

    def last(self) -> T | None:
        return self._records[-1] if self._records else None

    def find(self, key: Hashable) -> T | None:
        """Return the first record whose key equals ``key`` exactly.

        Args:
            key: Value compared against each record's key.

        Returns:
            The matching record, or None.
        """
        for record in self._records:
            if self._key(record) == key:
                return record
        return None

    def find_containing(self, substring: str) -> Iterator[T]:
        """Lazily yield every record whose text contains ``substring``.

        Each call returns a new iterator, so the result can be consumed and
        requested again.
        """
        return (record for record in self._records if substring in self._text(record))

    def filter(self, predicate: Callable[[T], bool]) -> Iterator[T]:
        """Lazily yield the records satisfying ``predicate``."""
        return (record for record in self._records if predicate(record))

    def count(self, predicate: Callable[[T], bool] | None = None) -> int:
        """Number of records, or of records satisfying ``predicate``."""
        if predicate is None:
            return len(self._records)
        return sum(1 for record in self._records if predicate(record))
