from __future__ import annotations
import logging
import operator
from collections.abc import ItemsView, Mapping, ValuesView
from typing import (
    Any,
    Callable,
    Hashable,
    Iterable,
    Iterator,
    List,
    MutableMapping,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from .errors import InvariantViolation, KeyAlreadyExists
from .index import HashIndex
from .storage import Entry, EntryStorage

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class _SeqMapValues(ValuesView):
    def __iter__(self):
        for entry in self._mapping._iter_entries():
            yield entry.value


class _SeqMapItems(ItemsView):
    def __iter__(self):
        for entry in self._mapping._iter_entries():
            yield (entry.key, entry.value)


class SeqMap(MutableMapping[K, V]):
    """
    A map that remembers insertion order and still looks keys up in O(1):
      - entries live in an EntryStorage (dense positions, insertion order)
      - a HashIndex maps every key to its position in that storage

    SeqMap is the only thing allowed to touch either structure, so every
    method leaves them in sync. Overwriting a key keeps its position;
    removing a key shifts everything after it down by one.

    Not thread-safe: guard concurrent writers with your own lock.
    """

    def __init__(
        self,
        items: Optional[Union[Mapping[K, V], Iterable[Tuple[K, V]]]] = None,
        capacity: int = 0,
    ) -> None:
        self._storage = EntryStorage(capacity)
        self._index = HashIndex()
        # bumped on every structural change, checked by live iterators
        self._version = 0
        if items is not None:
            self.extend(items)

    @classmethod
    def with_capacity(cls, capacity: int) -> "SeqMap[K, V]":
        return cls(capacity=capacity)

    # --------- Keyed access ---------

    def insert(self, key: K, value: V) -> Optional[V]:
        """
        Insert or overwrite key.

        Overwriting replaces the value at the key's existing position and
        returns the previous value. A new key is appended at the end and
        None is returned.
        """
        pos = self._index.get(key)
        if pos is not None:
            return self._storage.swap_value_at(pos, value)

        pos = self._storage.push(Entry(key, value))
        self._index.insert(key, pos)
        self._version += 1
        return None

    def try_insert(self, key: K, value: V) -> int:
        """
        Insert a new key, refusing to overwrite.
        Returns the position of the new entry.
        """
        if key in self._index:
            raise KeyAlreadyExists(key)
        self.insert(key, value)
        return len(self._storage) - 1

    def get(self, key: K, default: Any = None) -> Any:
        pos = self._index.get(key)
        if pos is None:
            return default
        return self._storage.get_at(pos).value

    def remove(self, key: K) -> Optional[V]:
        """
        Remove key and return its value, or None if it was not present.

        The entry is taken out of storage (closing the gap), then every key
        that sat after it gets its index position decremented, then the key
        itself leaves the index.
        """
        pos = self._index.get(key)
        if pos is None:
            return None

        entry = self._storage.remove_at(pos)
        self._index.decrement_positions_above(pos, self._storage.keys_from(pos))
        self._index.remove(key)
        self._version += 1
        return entry.value

    def contains_key(self, key: K) -> bool:
        return key in self._index

    def get_or_insert_with(self, key: K, producer: Callable[[], V]) -> V:
        """
        Return the value for key, inserting producer() at the end on a miss.
        producer is called at most once, and never when key is present.
        """
        pos = self._index.get(key)
        if pos is not None:
            return self._storage.get_at(pos).value
        value = producer()
        self.insert(key, value)
        return value

    # --------- Positional access ---------

    def position_of(self, key: K) -> Optional[int]:
        return self._index.get(key)

    def get_at(self, position: int) -> Optional[Tuple[K, V]]:
        """Pair at position, or None outside 0..len-1. Only ints are accepted."""
        position = operator.index(position)
        if not 0 <= position < len(self._storage):
            return None
        entry = self._storage.get_at(position)
        return entry.key, entry.value

    # --------- Size / bulk ---------

    def is_empty(self) -> bool:
        return len(self._storage) == 0

    def clear(self) -> None:
        logger.debug("clearing SeqMap with %d entries", len(self._storage))
        self._storage.clear()
        self._index.clear()
        self._version += 1

    def drain(self) -> Iterator[Tuple[K, V]]:
        """
        Empty the map and return an iterator over what it held, in order.
        The map is already empty when this returns.
        """
        drained = [(e.key, e.value) for e in self._storage]
        logger.debug("draining SeqMap with %d entries", len(drained))
        self._storage.clear()
        self._index.clear()
        self._version += 1
        return iter(drained)

    def extend(self, items: Union[Mapping[K, V], Iterable[Tuple[K, V]]]) -> None:
        if isinstance(items, Mapping):
            items = items.items()
        for key, value in items:
            self.insert(key, value)

    def copy(self) -> "SeqMap[K, V]":
        return type(self)(self.items(), capacity=len(self))

    def check_invariants(self) -> None:
        """
        Raise InvariantViolation if storage and index have drifted apart.
        """
        n = len(self._storage)
        if n != len(self._index):
            self._violation(f"storage has {n} entries, index has {len(self._index)}")

        seen = set()
        for key, pos in self._index.items():
            if not 0 <= pos < n:
                self._violation(f"key {key!r} points at {pos}, outside 0..{n - 1}")
            if pos in seen:
                self._violation(f"position {pos} is claimed by more than one key")
            seen.add(pos)
            stored = self._storage.get_at(pos).key
            # same rule as dict: identity, then ==
            if stored is not key and stored != key:
                self._violation(f"key {key!r} points at {pos}, which holds {stored!r}")

    @staticmethod
    def _violation(message: str) -> None:
        logger.error("SeqMap invariant violated: %s", message)
        raise InvariantViolation(message)

    # --------- Iteration ---------

    def _iter_entries(self) -> Iterator[Entry]:
        version = self._version
        i = 0
        while True:
            if self._version != version:
                raise RuntimeError("SeqMap changed size during iteration")
            if i >= len(self._storage):
                return
            yield self._storage.get_at(i)
            i += 1

    def __iter__(self) -> Iterator[K]:
        for entry in self._iter_entries():
            yield entry.key

    def values(self) -> ValuesView:
        return _SeqMapValues(self)

    def items(self) -> ItemsView:
        return _SeqMapItems(self)

    # --------- Mapping protocol ---------

    def __len__(self) -> int:
        return len(self._storage)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __getitem__(self, key: K) -> V:
        pos = self._index.get(key)
        if pos is None:
            raise KeyError(key)
        return self._storage.get_at(pos).value

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: K) -> None:
        if key not in self._index:
            raise KeyError(key)
        self.remove(key)

    def pop(self, key: K, default: Any = _MISSING) -> Any:
        if key not in self._index:
            if default is _MISSING:
                raise KeyError(key)
            return default
        return self.remove(key)

    def popitem(self, last: bool = True) -> Tuple[K, V]:
        """
        Remove and return the last (or, with last=False, the first) pair.
        Popping the last entry never shifts anything.
        """
        if not self._storage:
            raise KeyError("popitem(): SeqMap is empty")
        entry = self._storage.get_at(len(self._storage) - 1 if last else 0)
        return entry.key, self.remove(entry.key)

    def __eq__(self, other: object) -> bool:
        # Order matters between two SeqMaps, like OrderedDict.
        if isinstance(other, SeqMap):
            if len(self) != len(other):
                return False
            return all(a == b for a, b in zip(self.items(), other.items()))
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        lines: List[str] = [f"SeqMap({len(self)})"]
        for key, value in self.items():
            lines.append(f"{key}: {value}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"SeqMap({body})"
