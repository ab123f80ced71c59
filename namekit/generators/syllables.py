#!/usr/bin/env python3
"""
Syllable Sources
================
A SyllableComposer builds syllables from up to three symbol positions:

    LEAD    - the opening consonant (or cluster)
    MIDDLE  - the vowel nucleus
    TRAIL   - the closing consonant

Each position holds any number of SymbolPools and an inclusion chance.
A syllable is produced by walking the positions in that fixed order and,
for every position whose chance roll succeeds, picking one of its pools
uniformly and drawing a symbol from it.

A SyllableSet is the other syllable source: a fixed list of syllables,
written by hand or sampled once from a composer.
"""

from enum import Enum
from typing import Dict, List, Optional, Union

from ..errors import EmptySyllableError, SyllableSetError
from .entropy import RandomSource, new_rng
from .symbols import SymbolPool


class SymbolPosition(Enum):
    """Position of a symbol within a syllable."""
    LEAD = "lead"
    MIDDLE = "middle"
    TRAIL = "trail"


POSITION_ORDER = (SymbolPosition.LEAD, SymbolPosition.MIDDLE, SymbolPosition.TRAIL)


def _check_chance(chance: float) -> float:
    chance = float(chance)
    if not 0.0 <= chance <= 1.0:
        raise ValueError(f"Chance must be between 0 and 1, got {chance}")
    return chance


class SyllableComposer:
    """
    Generates syllables from positional symbol pools.

    Usage:
        syllables = (SyllableComposer()
            .add(SymbolPosition.LEAD, "strl")
            .add(SymbolPosition.MIDDLE, "aeiou")
            .add(SymbolPosition.TRAIL, "nm")
            .set_chance(SymbolPosition.TRAIL, 0.25))
        syllables.next()  # e.g. "ta", "rin", "lo"
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or new_rng()
        self.pools: Dict[SymbolPosition, List[SymbolPool]] = {}
        self.chances: Dict[SymbolPosition, float] = {}
        self.allows_empty = False

    def __repr__(self) -> str:
        parts = []
        for position in POSITION_ORDER:
            pools = self.pools.get(position)
            if pools:
                parts.append(f"{position.value}={len(pools)}@{self.effective_chance(position)}")
        return f"SyllableComposer({', '.join(parts)})"

    def add(self, position: SymbolPosition, symbols: Union[str, SymbolPool]) -> 'SyllableComposer':
        """
        Register a pool for a position.

        A plain string is wrapped in a new pool, one symbol per character.
        The first pool added to a position sets its chance to 1.0 unless a
        chance was already configured.
        """
        if isinstance(symbols, str):
            symbols = SymbolPool(symbols)
        if not isinstance(symbols, SymbolPool):
            raise TypeError(f"Expected a SymbolPool or string, got {type(symbols).__name__}")

        if position not in self.pools:
            self.pools[position] = []
            self.chances.setdefault(position, 1.0)

        self.pools[position].append(symbols)
        return self

    def set_chance(self, position: SymbolPosition, chance: float) -> 'SyllableComposer':
        """Set the probability that a position contributes a symbol."""
        self.chances[position] = _check_chance(chance)
        return self

    def allow_empty(self, allowed: bool = True) -> 'SyllableComposer':
        """Let next() return an empty string instead of raising."""
        self.allows_empty = allowed
        return self

    def effective_chance(self, position: SymbolPosition) -> float:
        """Inclusion chance, treating positions without pools as 0."""
        if not self.pools.get(position):
            return 0.0
        return self.chances.get(position, 0.0)

    def _generate_symbol(self, position: SymbolPosition) -> str:
        pool = self.rng.choice(self.pools[position])
        return pool.next()

    def next(self) -> str:
        """Generate a new syllable."""
        syllable = []
        for position in POSITION_ORDER:
            chance = self.effective_chance(position)
            if chance > 0 and self.rng.random() < chance:
                syllable.append(self._generate_symbol(position))

        result = ''.join(syllable)
        if not result and not self.allows_empty:
            raise EmptySyllableError("No symbols available to generate a syllable.")
        return result

    def copy(self) -> 'SyllableComposer':
        """Deep copy of pools and chances with fresh randomness sources."""
        composer = SyllableComposer()
        for position, pools in self.pools.items():
            for pool in pools:
                composer.add(position, pool.copy())
        for position, chance in self.chances.items():
            composer.set_chance(position, chance)
        composer.allows_empty = self.allows_empty
        return composer

    def iter_pools(self):
        """Yield every pool, in position order."""
        for position in POSITION_ORDER:
            yield from self.pools.get(position, [])

    def iter_components(self):
        """Yield this composer and its pools."""
        yield self
        yield from self.iter_pools()


class SyllableSet:
    """
    A finite set of syllables that next() picks from uniformly.

    Names built from a small set read as if they came from the same place
    or culture. The set is either listed by hand with add(), or filled on
    first use from a SyllableComposer until it holds max_syllable_count
    syllables:

        syllables = SyllableSet("ka", "ri", "to")
        syllables = SyllableSet.from_composer(composer, 12, force_unique=True)

    With force_unique, duplicates are dropped. Filling gives up after
    max_syllable_count * 2 draws.
    """

    def __init__(self, *syllables: str, rng: Optional[RandomSource] = None):
        self.rng = rng or new_rng()
        self.syllables: List[str] = []
        self.source: Optional[SyllableComposer] = None
        self.max_syllable_count = 0
        self.force_unique = False
        self.add(*syllables)

    @classmethod
    def from_composer(cls, composer: SyllableComposer, max_syllable_count: int,
                      force_unique: bool = False,
                      rng: Optional[RandomSource] = None) -> 'SyllableSet':
        if not isinstance(composer, SyllableComposer):
            raise TypeError(f"Expected a SyllableComposer, got {type(composer).__name__}")
        if max_syllable_count <= 0:
            raise ValueError(f"max_syllable_count must be positive, got {max_syllable_count}")
        result = cls(rng=rng)
        result.source = composer
        result.max_syllable_count = max_syllable_count
        result.force_unique = force_unique
        return result

    def __repr__(self) -> str:
        return f"SyllableSet({len(self.syllables)} syllables, max={self.max_syllable_count})"

    def __len__(self) -> int:
        return len(self.syllables)

    def add(self, *syllables: str) -> 'SyllableSet':
        for syllable in syllables:
            if not self.force_unique or syllable not in self.syllables:
                self.syllables.append(syllable)
        return self

    def _fill(self):
        attempts = 0
        limit = self.max_syllable_count * 2
        while len(self.syllables) < self.max_syllable_count:
            if attempts >= limit:
                raise SyllableSetError(
                    f"Could not generate {self.max_syllable_count} unique syllables "
                    f"in {attempts} attempts"
                )
            self.add(self.source.next())
            attempts += 1

    def next(self) -> str:
        """Pick a syllable from the set, filling it first if needed."""
        if self.source is not None and len(self.syllables) < self.max_syllable_count:
            self._fill()
        if not self.syllables:
            raise EmptySyllableError("No syllables have been added to this set.")
        return self.rng.choice(self.syllables)

    def copy(self) -> 'SyllableSet':
        """Copy the syllables (and a copy of the source composer) with a fresh rng."""
        clone = SyllableSet()
        clone.syllables = list(self.syllables)
        clone.max_syllable_count = self.max_syllable_count
        clone.force_unique = self.force_unique
        if self.source is not None:
            clone.source = self.source.copy()
        return clone

    def iter_components(self):
        """Yield this set and, when it fills from a composer, that composer's components."""
        yield self
        if self.source is not None:
            yield from self.source.iter_components()


SyllableSource = Union[SyllableComposer, SyllableSet]
SYLLABLE_SOURCES = (SyllableComposer, SyllableSet)
