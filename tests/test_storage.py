import pytest

from seqmap.errors import InvariantViolation
from seqmap.storage import Entry, EntryStorage


def _storage(*keys):
    s = EntryStorage()
    for k in keys:
        s.push(Entry(k, k.upper()))
    return s


def test_push_returns_dense_positions():
    s = EntryStorage(capacity=4)
    assert s.push(Entry("a", 1)) == 0
    assert s.push(Entry("b", 2)) == 1
    assert len(s) == 2
    assert s.get_at(1) == Entry("b", 2)


def test_remove_at_shifts_tail_left():
    s = _storage("a", "b", "c", "d")
    removed = s.remove_at(1)

    assert removed == Entry("b", "B")
    assert [e.key for e in s] == ["a", "c", "d"]
    assert s.get_at(1).key == "c"


def test_swap_value_at_keeps_position():
    s = _storage("a", "b")
    old = s.swap_value_at(0, "new")

    assert old == "A"
    assert [(e.key, e.value) for e in s] == [("a", "new"), ("b", "B")]


def test_keys_from_yields_suffix():
    s = _storage("a", "b", "c")
    assert list(s.keys_from(1)) == ["b", "c"]
    assert list(s.keys_from(3)) == []


def test_out_of_range_is_an_invariant_violation():
    s = _storage("a")
    with pytest.raises(InvariantViolation):
        s.get_at(1)
    with pytest.raises(InvariantViolation):
        s.remove_at(-1)


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        EntryStorage(capacity=-1)
