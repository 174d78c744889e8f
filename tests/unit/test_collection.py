"""Tests for gitquery.collection.RecordCollection."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from gitquery.collection import RecordCollection


@dataclass(frozen=True)
class Item:
    name: str
    note: str = ""


def _items(*names: str) -> RecordCollection[Item]:
    return RecordCollection(
        [Item(n, note=f"note for {n}") for n in names],
        key=lambda i: i.name,
        text=lambda i: i.note,
    )


class TestSequenceProtocol:
    """Tests for length, iteration, indexing and equality."""

    def test_empty_collection(self) -> None:
        """An empty collection reports empty and has no ends."""
        items = _items()
        assert len(items) == 0
        assert items.is_empty()
        assert items.first() is None
        assert items.last() is None
        assert items.all() == ()

    def test_preserves_source_order(self) -> None:
        """Iteration follows the order records were supplied in."""
        items = _items("b", "a", "c")
        assert [i.name for i in items] == ["b", "a", "c"]
        assert items.first() == Item("b", "note for b")
        assert items.last() == Item("c", "note for c")

    def test_sort_by_key(self) -> None:
        """sort_by_key orders by the key function."""
        items = RecordCollection(
            [Item("b"), Item("a"), Item("c")],
            key=lambda i: i.name,
            sort_by_key=True,
        )
        assert [i.name for i in items] == ["a", "b", "c"]

    def test_indexing_and_slicing(self) -> None:
        """Integer indexing yields a record, slicing a tuple."""
        items = _items("a", "b", "c")
        assert items[1].name == "b"
        assert items[-1].name == "c"
        assert [i.name for i in items[:2]] == ["a", "b"]

    def test_index_out_of_range(self) -> None:
        """Out-of-range indexing raises IndexError."""
        with pytest.raises(IndexError):
            _items("a")[5]

    def test_equality_compares_records(self) -> None:
        """Collections with the same records compare equal."""
        assert _items("a", "b") == _items("a", "b")
        assert _items("a", "b") != _items("b", "a")

    def test_does_not_alias_source_list(self) -> None:
        """Mutating the source list does not change the collection."""
        source = [Item("a")]
        items = RecordCollection(source, key=lambda i: i.name)
        source.append(Item("b"))
        assert len(items) == 1

    def test_repr_names_records(self) -> None:
        """repr includes the records."""
        assert "Item(name='a'" in repr(_items("a"))


class TestQueries:
    """Tests for find, find_containing, filter and count."""

    def test_find_exact_key(self) -> None:
        """find returns the first record whose key equals the argument."""
        items = _items("alpha", "beta")
        assert items.find("beta") == Item("beta", "note for beta")

    def test_find_missing_returns_none(self) -> None:
        """find never matches on a substring."""
        assert _items("alpha").find("alp") is None

    def test_find_containing_searches_text(self) -> None:
        """find_containing matches the text accessor, not the key."""
        items = _items("alpha", "beta")
        found = list(items.find_containing("for b"))
        assert [i.name for i in found] == ["beta"]

    def test_find_containing_is_fresh_each_call(self) -> None:
        """Each call returns a new iterator that can be consumed again."""
        items = _items("alpha", "beta")
        first = list(items.find_containing("note"))
        second = list(items.find_containing("note"))
        assert first == second
        assert len(first) == 2

    def test_default_text_is_key(self) -> None:
        """Without a text accessor, substring search uses str(key)."""
        items = RecordCollection([Item("feature/x")], key=lambda i: i.name)
        assert len(list(items.find_containing("feature"))) == 1

    def test_filter(self) -> None:
        """filter yields matching records lazily in order."""
        items = _items("a", "bb", "ccc")
        assert [i.name for i in items.filter(lambda i: len(i.name) > 1)] == [
            "bb",
            "ccc",
        ]

    def test_count(self) -> None:
        """count counts all records or those matching a predicate."""
        items = _items("a", "bb", "ccc")
        assert items.count() == 3
        assert items.count(lambda i: "c" in i.name) == 1
