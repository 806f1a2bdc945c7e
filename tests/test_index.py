from seqmap.index import HashIndex


def test_insert_get_remove():
    idx = HashIndex()
    assert idx.insert("a", 0) is None
    assert idx.insert("a", 3) == 0
    assert idx.get("a") == 3
    assert idx.remove("a") == 3
    assert idx.remove("a") is None
    assert idx.get("a") is None
    assert len(idx) == 0


def test_decrement_positions_above_full_scan():
    idx = HashIndex()
    for pos, key in enumerate("abcd"):
        idx.insert(key, pos)

    changed = idx.decrement_positions_above(1)

    assert changed == 2
    assert dict(idx.items()) == {"a": 0, "b": 1, "c": 1, "d": 2}


def test_decrement_positions_above_only_touches_given_keys():
    idx = HashIndex()
    for pos, key in enumerate("abcd"):
        idx.insert(key, pos)

    # "b" (position 1) was removed from storage; c and d moved down
    idx.remove("b")
    changed = idx.decrement_positions_above(1, ["c", "d"])

    assert changed == 2
    assert dict(idx.items()) == {"a": 0, "c": 1, "d": 2}
