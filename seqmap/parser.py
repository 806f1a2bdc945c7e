from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List
import re
import shlex


# --------- AST (Parsed command objects) ---------

@dataclass
class Set:
    key: Any
    value: Any


@dataclass
class Add:
    key: Any
    value: Any


@dataclass
class SetDefault:
    key: Any
    value: Any


@dataclass
class Get:
    key: Any


@dataclass
class Delete:
    key: Any


@dataclass
class Has:
    key: Any


@dataclass
class Pos:
    key: Any


@dataclass
class At:
    position: int


@dataclass
class ListEntries:
    pass


@dataclass
class Keys:
    pass


@dataclass
class Values:
    pass


@dataclass
class Len:
    pass


@dataclass
class Clear:
    pass


# --------- Helpers ---------

def _parse_literal(tok: str) -> Any:
    tok = tok.strip()
    # quoted string
    if len(tok) >= 2 and tok[0] == tok[-1] and tok[0] in ("'", '"'):
        return tok[1:-1]
    low = tok.lower()
    if low in ("true", "false"):
        return low == "true"
    if re.fullmatch(r"-?\d+", tok):
        return int(tok)
    if low == "null":
        return None
    # fallback: bare word string
    return tok


def _tokenize(stmt: str, punctuation_chars: str = "") -> List[str]:
    # posix=False keeps the quotes so _parse_literal can tell "1" from 1
    lexer = shlex.shlex(stmt, posix=False, punctuation_chars=punctuation_chars)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise ValueError(f"Bad statement: {e}") from None


def _expect(name: str, args: List[str], count: int) -> None:
    if len(args) != count:
        raise ValueError(f"{name.upper()} takes {count} argument(s), got {len(args)}")


# --------- Statement table ---------

def _key_value(cls) -> Callable[[str, List[str]], Any]:
    def build(name: str, args: List[str]):
        _expect(name, args, 2)
        return cls(key=_parse_literal(args[0]), value=_parse_literal(args[1]))
    return build


def _key_only(cls) -> Callable[[str, List[str]], Any]:
    def build(name: str, args: List[str]):
        _expect(name, args, 1)
        return cls(key=_parse_literal(args[0]))
    return build


def _no_args(cls) -> Callable[[str, List[str]], Any]:
    def build(name: str, args: List[str]):
        _expect(name, args, 0)
        return cls()
    return build


def _at(name: str, args: List[str]) -> At:
    _expect(name, args, 1)
    position = _parse_literal(args[0])
    if isinstance(position, bool) or not isinstance(position, int):
        raise ValueError(f"AT expects an integer position, got {args[0]}")
    return At(position=position)


_STATEMENTS: Dict[str, Callable[[str, List[str]], Any]] = {
    "set": _key_value(Set),
    "add": _key_value(Add),
    "setdefault": _key_value(SetDefault),
    "get": _key_only(Get),
    "del": _key_only(Delete),
    "has": _key_only(Has),
    "pos": _key_only(Pos),
    "at": _at,
    "list": _no_args(ListEntries),
    "keys": _no_args(Keys),
    "values": _no_args(Values),
    "len": _no_args(Len),
    "clear": _no_args(Clear),
}


def parse_statement(text: str):
    """
    Parse a single statement WITHOUT the trailing semicolon.
    Returns one of the AST dataclasses above.
    """
    tokens = _tokenize(text.strip())
    if not tokens:
        raise ValueError("Empty statement")

    name = tokens[0].lower()
    build = _STATEMENTS.get(name)
    if build is None:
        supported = ", ".join(s.upper() for s in _STATEMENTS)
        raise ValueError(f"Unrecognized statement. Supported: {supported}.")
    return build(name, tokens[1:])


def split_script(script: str) -> List[str]:
    """
    Split input into statements separated by semicolons.
    Semicolons inside quotes do not split.
    """
    statements: List[str] = []
    current: List[str] = []
    for tok in _tokenize(script, punctuation_chars=";"):
        if tok.strip(";"):
            current.append(tok)
        elif current:
            statements.append(" ".join(current))
            current = []
    if current:
        statements.append(" ".join(current))
    return statements
