#!/usr/bin/env python3
"""
Names and Name Assembly
=======================
A Name is an ordered list of syllables. The NameAssembler picks a syllable
count and asks the composer configured for each syllable role (leading,
inner, trailing) to fill it.
"""

from enum import Enum
from typing import Dict, Iterator, List, Optional

from ..errors import MissingGeneratorError
from .entropy import RandomSource, new_rng
from .syllables import SYLLABLE_SOURCES, SyllableSource


class SyllableRole(Enum):
    """Position of a syllable within a name."""
    LEADING = "leading"
    INNER = "inner"
    TRAILING = "trailing"
    ANY = "any"


CONCRETE_ROLES = (SyllableRole.LEADING, SyllableRole.INNER, SyllableRole.TRAILING)


class Name:
    """
    A mutable sequence of syllables.

    The string form joins the syllables, capitalizes the first character and
    lower-cases the rest. Two names are equal when their string forms are.
    """

    def __init__(self, *syllables: str):
        self.syllables: List[str] = list(syllables)

    @classmethod
    def from_name(cls, other: 'Name') -> 'Name':
        return cls(*other.syllables)

    def copy(self) -> 'Name':
        return Name.from_name(self)

    def __str__(self) -> str:
        joined = ''.join(self.syllables)
        return joined[:1].upper() + joined[1:].lower()

    def __repr__(self) -> str:
        return f"Name({', '.join(repr(s) for s in self.syllables)})"

    def __eq__(self, other) -> bool:
        if isinstance(other, Name):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __len__(self) -> int:
        return len(self.syllables)

    def __iter__(self) -> Iterator[str]:
        return iter(self.syllables)

    def resolve_index(self, index: int) -> int:
        """Translate a negative index into a forward one (-1 is the last syllable)."""
        if index < 0:
            resolved = index + len(self.syllables)
            if resolved < 0:
                raise IndexError(f"Syllable index {index} is out of range for {len(self.syllables)} syllables")
            return resolved
        return index

    def syllable_at(self, index: int) -> str:
        return self.syllables[self.resolve_index(index)]

    def append(self, syllable: str) -> 'Name':
        self.syllables.append(syllable)
        return self

    def replace_leading(self, syllable: str):
        self.syllables[0] = syllable

    def replace_trailing(self, syllable: str):
        self.syllables[-1] = syllable


def check_size_range(minimum: int, maximum: int):
    if minimum <= 0 or maximum <= 0:
        raise ValueError(f"Name size must be positive, got {minimum}..{maximum}")
    if minimum > maximum:
        raise ValueError(f"Minimum size {minimum} is larger than maximum size {maximum}")


class NameAssembler:
    """
    Sequences syllables from role-specific composers into a Name.

    A one-syllable name uses only the LEADING composer, a two-syllable name
    uses LEADING then TRAILING, and longer names put INNER syllables in
    between. Which roles are needed depends on the size picked for each
    name, so a missing composer is reported when a name is generated.
    """

    def __init__(self, minimum: int = 2, maximum: int = 3, rng: Optional[RandomSource] = None):
        check_size_range(minimum, maximum)
        self.rng = rng or new_rng()
        self.composers: Dict[SyllableRole, SyllableSource] = {}
        self.minimum_size = minimum
        self.maximum_size = maximum

    def set(self, role: SyllableRole, composer: SyllableSource) -> 'NameAssembler':
        """Use a composer for a role. ANY sets all three roles to the same composer."""
        if not isinstance(composer, SYLLABLE_SOURCES):
            raise TypeError(f"Expected a SyllableComposer or SyllableSet, got {type(composer).__name__}")
        if role == SyllableRole.ANY:
            for concrete in CONCRETE_ROLES:
                self.composers[concrete] = composer
        else:
            self.composers[role] = composer
        return self

    def get(self, role: SyllableRole) -> Optional[SyllableSource]:
        return self.composers.get(role)

    def set_size(self, minimum: int, maximum: Optional[int] = None) -> 'NameAssembler':
        """Set the syllable count range. A single argument fixes the size."""
        if maximum is None:
            maximum = minimum
        check_size_range(minimum, maximum)
        self.minimum_size = minimum
        self.maximum_size = maximum
        return self

    def _require(self, size: int, *roles: SyllableRole) -> List[SyllableSource]:
        missing = [r.value for r in roles if r not in self.composers]
        if missing:
            raise MissingGeneratorError(
                f"No syllable composer for {', '.join(missing)} "
                f"(needed for a {size}-syllable name)"
            )
        return [self.composers[r] for r in roles]

    def generate_candidate(self, size: Optional[int] = None) -> Name:
        """Assemble a new name, optionally with an explicit syllable count."""
        if size is None:
            size = self.rng.randint(self.minimum_size, self.maximum_size)
        elif size <= 0:
            raise ValueError(f"Name size must be positive, got {size}")

        name = Name()
        if size == 1:
            leading, = self._require(size, SyllableRole.LEADING)
            name.append(leading.next())
        elif size == 2:
            leading, trailing = self._require(size, SyllableRole.LEADING, SyllableRole.TRAILING)
            name.append(leading.next())
            name.append(trailing.next())
        else:
            leading, inner, trailing = self._require(size, *CONCRETE_ROLES)
            name.append(leading.next())
            for _ in range(size - 2):
                name.append(inner.next())
            name.append(trailing.next())

        return name
