"""Tests for OrderedSet and SortedSet."""

import pytest

from foldkit.collectors.containers import OrderedSet, SortedSet, case_insensitive_compare


class TestOrderedSet:
    """Tests for OrderedSet."""

    def test_iterates_in_first_insertion_order(self) -> None:
        s = OrderedSet(["b", "a", "b", "c", "a"])

        assert list(s) == ["b", "a", "c"]

    def test_readding_does_not_move_element(self) -> None:
        s = OrderedSet(["a", "b"])
        s.add("a")

        assert list(s) == ["a", "b"]

    def test_discard(self) -> None:
        s = OrderedSet(["a", "b", "c"])
        s.discard("b")
        s.discard("missing")

        assert list(s) == ["a", "c"]

    def test_update_with_self_is_noop(self) -> None:
        s = OrderedSet(["a", "b"])
        s.update(s)

        assert list(s) == ["a", "b"]

    def test_inplace_or_merges(self) -> None:
        s = OrderedSet(["a"])
        s |= OrderedSet(["b", "a"])

        assert list(s) == ["a", "b"]

    def test_equality_is_order_sensitive_between_ordered_sets(self) -> None:
        assert OrderedSet(["a", "b"]) == OrderedSet(["a", "b"])
        assert OrderedSet(["a", "b"]) != OrderedSet(["b", "a"])

    def test_equality_with_plain_set_ignores_order(self) -> None:
        assert OrderedSet(["a", "b"]) == {"b", "a"}

    def test_initial_capacity_is_ignored(self) -> None:
        assert len(OrderedSet(initial_capacity=1000)) == 0

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(OrderedSet())


class TestSortedSet:
    """Tests for SortedSet."""

    def test_natural_order(self) -> None:
        s = SortedSet([3, 1, 2, 3])

        assert list(s) == [1, 2, 3]
        assert s.first() == 1
        assert s.last() == 3

    def test_key_and_comparator_are_exclusive(self) -> None:
        with pytest.raises(ValueError, match="not both"):
            SortedSet(key=str.casefold, comparator=case_insensitive_compare)

    def test_comparator_keeps_first_seen(self) -> None:
        s = SortedSet(["b", "B", "a"], comparator=case_insensitive_compare)

        assert list(s) == ["a", "b"]
        assert "A" in s

    def test_discard_by_equivalent_value(self) -> None:
        s = SortedSet(["Apple", "banana"], key=str.casefold)
        s.discard("APPLE")

        assert list(s) == ["banana"]

    def test_contains_incomparable_value_is_false(self) -> None:
        s = SortedSet([1, 2, 3])

        assert "x" not in s

    def test_set_operators_keep_ordering(self) -> None:
        s = SortedSet(["b", "a"], key=str.casefold)

        union = s | {"C"}

        assert isinstance(union, SortedSet)
        assert list(union) == ["a", "b", "C"]

    def test_indexing(self) -> None:
        s = SortedSet(["c", "a", "b"])

        assert s[0] == "a"
        assert s[-1] == "c"

    def test_empty_first_raises(self) -> None:
        with pytest.raises(KeyError):
            SortedSet().first()


class TestCaseInsensitiveCompare:
    """Tests for case_insensitive_compare()."""

    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [("a", "A", 0), ("a", "B", -1), ("C", "b", 1)],
    )
    def test_compare(self, left: str, right: str, expected: int) -> None:
        assert case_insensitive_compare(left, right) == expected
