from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Hashable, Iterator, List

from .errors import InvariantViolation

logger = logging.getLogger(__name__)


@dataclass
class Entry:
    """
    One slot in the storage:
      - key: never reassigned after the entry is created
      - value: replaced in place on overwrite
    """
    key: Hashable
    value: Any


class EntryStorage:
    """
    Entries kept in insertion order, addressed by dense positions 0..n-1.

    Removing an entry closes the gap: every later entry moves one position
    to the left. Keeping any key -> position map in sync with that shift is
    the caller's job (see SeqMap.remove).
    """
    def __init__(self, capacity: int = 0) -> None:
        # A list grows on demand; the capacity hint only has to be non-negative.
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.entries: List[Entry] = []

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    # ----- Positional access -----

    def _check(self, position: int) -> None:
        if not 0 <= position < len(self.entries):
            logger.error("position %s out of range for storage of length %d", position, len(self.entries))
            raise InvariantViolation(
                f"position {position} out of range (len={len(self.entries)})"
            )

    def push(self, entry: Entry) -> int:
        """
        Appends an entry at the end, returns its position.
        """
        self.entries.append(entry)
        return len(self.entries) - 1

    def get_at(self, position: int) -> Entry:
        self._check(position)
        return self.entries[position]

    def remove_at(self, position: int) -> Entry:
        """
        Removes the entry at position and shifts the tail left by one.
        Cost is proportional to the number of entries after position.
        """
        self._check(position)
        return self.entries.pop(position)

    def swap_value_at(self, position: int, value: Any) -> Any:
        entry = self.get_at(position)
        old, entry.value = entry.value, value
        return old

    def keys_from(self, position: int) -> Iterator[Hashable]:
        """
        Yields the keys stored at positions >= position, in order.
        """
        for i in range(position, len(self.entries)):
            yield self.entries[i].key

    def clear(self) -> None:
        self.entries.clear()
