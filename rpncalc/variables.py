"""Variable handling for infix expressions: clean-up, discovery and substitution."""

from __future__ import annotations

import string
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from itertools import groupby

__all__ = [
    "VariableTable",
    "preprocess",
    "extract_variables",
    "substitute",
    "format_number",
]

_LETTERS = frozenset(string.ascii_letters)
_OPERATORS = frozenset("()+-*/")
_ALNUM = frozenset(string.ascii_letters + string.digits)


def _hash(name: str) -> int:
    value = 0
    for byte in name.encode("latin-1", errors="replace"):
        value = (value * 31 + byte) % (1 << 64)
    return value % VariableTable.CAPACITY


@dataclass
class _Slot:
    name: str
    value: float = 0.0
    count: int = 0


class VariableTable:
    """Open-addressing table of variable names, their values and occurrence counts."""

    CAPACITY = 100

    def __init__(self) -> None:
        self._slots: list[_Slot | None] = [None] * self.CAPACITY
        self._distinct = 0

    def _probe(self, name: str) -> int:
        index = _hash(name)
        for _ in range(self.CAPACITY):
            slot = self._slots[index]
            if slot is None or slot.name == name:
                return index
            index = (index + 1) % self.CAPACITY
        raise OverflowError("variable table is full")

    def _find(self, name: str) -> _Slot:
        try:
            slot = self._slots[self._probe(name)]
        except OverflowError:
            slot = None
        if slot is None:
            raise KeyError(name)
        return slot

    def add(self, name: str) -> int:
        """Record one occurrence of ``name``; return how often it has been seen."""
        if not name:
            raise ValueError("variable name must not be empty")
        index = self._probe(name)
        slot = self._slots[index]
        if slot is None:
            slot = self._slots[index] = _Slot(name)
            self._distinct += 1
        slot.count += 1
        return slot.count

    def names(self) -> list[str]:
        """Names in table order, the order in which values are asked for."""
        return [slot.name for slot in self._slots if slot is not None]

    def set(self, name: str, value: float) -> None:
        """Assign a value to a known variable."""
        self._find(name).value = float(value)

    def get(self, name: str) -> float:
        """Value of a known variable (0.0 until set)."""
        return self._find(name).value

    def __getitem__(self, name: str) -> float:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str) or not name:
            return False
        try:
            self._find(name)
        except KeyError:
            return False
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return self._distinct


def preprocess(expression: str) -> str:
    """Collapse runs of signs, drop stray characters after them and remove spaces."""
    if not expression:
        raise ValueError("empty expression")
    chars = list(expression)
    i = 0
    while i < len(chars):
        ch = chars[i]
        if ch in "+-":
            negative = ch == "-"
            j = i + 1
            while j < len(chars):
                following = chars[j]
                if following == "-":
                    negative = not negative
                elif following != "+" and (following in _OPERATORS or following in _ALNUM):
                    break
                chars[j] = " "
                j += 1
            chars[i] = "-" if negative else "+"
            i = j
        else:
            i += 1
    return "".join(c for c in chars if c != " ")


def _runs(expression: str) -> Iterator[tuple[bool, str]]:
    for is_word, group in groupby(expression, key=lambda c: c in _LETTERS):
        yield is_word, "".join(group)


def extract_variables(expression: str) -> VariableTable:
    """Collect every run of letters in ``expression`` into a new table."""
    table = VariableTable()
    for is_word, text in _runs(expression):
        if is_word:
            table.add(text)
    return table


def substitute(expression: str, values: Mapping[str, float] | VariableTable) -> str:
    """Replace each variable name with its value written in ``%g`` form."""
    return "".join(
        format_number(values[text]) if is_word else text
        for is_word, text in _runs(expression)
    )


def format_number(value: float) -> str:
    """Format a number the way ``printf("%g")`` does."""
    return "%g" % value