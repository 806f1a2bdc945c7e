from __future__ import annotations


class SeqMapError(Exception):
    """Base class for errors raised by seqmap."""


class KeyAlreadyExists(SeqMapError, KeyError):
    """
    Raised by SeqMap.try_insert when the key is already present.
    Subclasses KeyError so callers can treat it as a key problem.
    """
    def __init__(self, key) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"The key already exists in the SeqMap: {self.key!r}"


class InvariantViolation(SeqMapError, AssertionError):
    """
    Storage and index disagree. Only an implementation bug can get here;
    no sequence of public calls should ever raise it.
    """
