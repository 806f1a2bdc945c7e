from __future__ import annotations
from typing import Dict, Hashable, ItemsView, Iterable, Optional


class HashIndex:
    """
    Basic in-memory index:
      key -> position in EntryStorage

    Positions are plain integers (back-references), the index never owns
    the values they point at.
    """
    def __init__(self) -> None:
        self.map: Dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self.map)

    def __contains__(self, key: Hashable) -> bool:
        return key in self.map

    def insert(self, key: Hashable, position: int) -> Optional[int]:
        old = self.map.get(key)
        self.map[key] = position
        return old

    def remove(self, key: Hashable) -> Optional[int]:
        return self.map.pop(key, None)

    def get(self, key: Hashable) -> Optional[int]:
        return self.map.get(key)

    def items(self) -> ItemsView[Hashable, int]:
        return self.map.items()

    def decrement_positions_above(
        self,
        threshold: int,
        keys: Optional[Iterable[Hashable]] = None,
    ) -> int:
        """
        Decrement every position strictly greater than threshold.

        keys: the keys that currently sit above threshold. When given, only
        those are touched, so the cost follows the shifted suffix instead of
        the whole index. Returns how many positions changed.
        """
        changed = 0
        if keys is None:
            for key, pos in self.map.items():
                if pos > threshold:
                    self.map[key] = pos - 1
                    changed += 1
            return changed

        for key in keys:
            pos = self.map[key]
            if pos > threshold:
                self.map[key] = pos - 1
                changed += 1
        return changed

    def clear(self) -> None:
        self.map.clear()
