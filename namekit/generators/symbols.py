#!/usr/bin/env python3
"""
Weighted Symbol Pools
=====================
A Symbol is the smallest unit a name is built from: a vowel, a consonant,
or a cluster such as "th" or "ae". A SymbolPool holds weighted symbols and
draws one at a time, with probability proportional to weight.
"""

import unicodedata
from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..errors import EmptyPoolError
from .entropy import RandomSource, new_rng

ZERO_WIDTH_JOINER = '\u200d'


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class Symbol:
    """A character or cluster with a selection weight."""
    value: str
    weight: int = 1

    def __post_init__(self):
        _check_weight(self.weight)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SymbolHandle:
    """Refers to the symbols added by a single add() or cluster() call."""
    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start


def _check_weight(weight: int):
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise TypeError(f"Symbol weight must be an integer, got {weight!r}")
    if weight <= 0:
        raise ValueError(f"Symbol weight must be positive, got {weight}")


def atomize(text: str) -> List[str]:
    """
    Split text into user-perceived characters.

    Combining marks, variation selectors and zero-width-joiner sequences
    stay attached to the character they modify, so "é" written as
    "e" + U+0301 is one unit, not two.
    """
    units: List[str] = []
    join_next = False
    for char in text:
        attaches = (
            unicodedata.combining(char)
            or unicodedata.category(char) == 'Mn'
            or '\ufe00' <= char <= '\ufe0f'
            or char == ZERO_WIDTH_JOINER
        )
        if units and (attaches or join_next):
            units[-1] += char
        else:
            units.append(char)
        join_next = char == ZERO_WIDTH_JOINER
    return units


# =============================================================================
# Symbol Pool
# =============================================================================

class SymbolPool:
    """
    Weighted collection of symbols.

    Usage:
        pool = SymbolPool()
        pool.add("aeiou")
        handle = pool.cluster("ae", "ou")
        pool.set_weight(handle, 3)
        pool.next()  # "ae" and "ou" are three times as likely as "a"
    """

    def __init__(self, symbols: Optional[str] = None, rng: Optional[RandomSource] = None):
        self.rng = rng or new_rng()
        self.symbols: List[Symbol] = []
        if symbols:
            self.add(symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols)

    def __repr__(self) -> str:
        return f"SymbolPool({', '.join(f'{s.value}:{s.weight}' for s in self.symbols)})"

    @property
    def values(self) -> List[str]:
        return [s.value for s in self.symbols]

    @property
    def total_weight(self) -> int:
        return sum(s.weight for s in self.symbols)

    def _extend(self, values: List[str], weight: int) -> SymbolHandle:
        _check_weight(weight)
        start = len(self.symbols)
        self.symbols.extend(Symbol(v, weight) for v in values)
        return SymbolHandle(start, len(self.symbols))

    def add(self, text: str, weight: int = 1) -> SymbolHandle:
        """Add every character of text as a separate symbol."""
        return self._extend(atomize(text), weight)

    def cluster(self, *clusters: str, weight: int = 1) -> SymbolHandle:
        """Add each argument as one symbol, regardless of its length."""
        return self._extend(list(clusters), weight)

    def set_weight(self, handle: SymbolHandle, weight: int) -> 'SymbolPool':
        """Re-weight the symbols a handle refers to."""
        _check_weight(weight)
        if handle.start < 0 or handle.stop > len(self.symbols):
            raise IndexError(f"Handle {handle} does not belong to this pool")
        for i in range(handle.start, handle.stop):
            self.symbols[i] = Symbol(self.symbols[i].value, weight)
        return self

    def draw(self) -> Symbol:
        """Return a random symbol. Heavier symbols are more likely."""
        if not self.symbols:
            raise EmptyPoolError("A symbol could not be selected because the pool is empty.")
        index = self.rng.weighted_index([s.weight for s in self.symbols])
        return self.symbols[index]

    def next(self) -> str:
        """Return the value of a random symbol."""
        return self.draw().value

    def copy(self) -> 'SymbolPool':
        """Deep copy with a fresh randomness source."""
        pool = SymbolPool()
        pool.symbols = [Symbol(s.value, s.weight) for s in self.symbols]
        return pool
