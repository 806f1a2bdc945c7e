from __future__ import annotations
import json
import logging
from typing import Any, Dict, List

from .map import SeqMap
from .parser import (
    Add,
    At,
    Clear,
    Delete,
    Get,
    Has,
    Keys,
    Len,
    ListEntries,
    Pos,
    Set,
    SetDefault,
    Values,
)

logger = logging.getLogger(__name__)

NIL = "(nil)"


def _fmt(value: Any) -> str:
    return json.dumps(value, default=str)


def _row(position: int, key: Any, value: Any) -> Dict[str, Any]:
    return {"position": position, "key": key, "value": value}


def execute(smap: SeqMap, stmt):
    """
    Execute a parsed statement against the map.
    Returns:
      - list for LIST / KEYS / VALUES
      - int for LEN
      - string message or formatted value for the rest
    """
    logger.debug("executing %r", stmt)

    if isinstance(stmt, Set):
        prev = smap.insert(stmt.key, stmt.value)
        if prev is None:
            return "OK (inserted)"
        return f"OK (replaced {_fmt(prev)})"

    if isinstance(stmt, Add):
        pos = smap.try_insert(stmt.key, stmt.value)
        return f"OK (added at {pos})"

    if isinstance(stmt, SetDefault):
        return _fmt(smap.get_or_insert_with(stmt.key, lambda: stmt.value))

    if isinstance(stmt, Get):
        if stmt.key not in smap:
            return NIL
        return _fmt(smap[stmt.key])

    if isinstance(stmt, Delete):
        if stmt.key not in smap:
            return NIL
        return f"OK (removed {_fmt(smap.remove(stmt.key))})"

    if isinstance(stmt, Has):
        return _fmt(smap.contains_key(stmt.key))

    if isinstance(stmt, Pos):
        pos = smap.position_of(stmt.key)
        return NIL if pos is None else str(pos)

    if isinstance(stmt, At):
        found = smap.get_at(stmt.position)
        if found is None:
            return NIL
        return [_row(stmt.position, *found)]

    if isinstance(stmt, ListEntries):
        rows: List[Dict[str, Any]] = []
        for pos, (k, v) in enumerate(smap.items()):
            rows.append(_row(pos, k, v))
        return rows

    if isinstance(stmt, Keys):
        return list(smap.keys())

    if isinstance(stmt, Values):
        return list(smap.values())

    if isinstance(stmt, Len):
        return len(smap)

    if isinstance(stmt, Clear):
        n = len(smap)
        smap.clear()
        return f"OK (cleared {n} entries)"

    raise ValueError(f"Unknown statement type: {type(stmt)}")
