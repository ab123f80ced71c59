#!/usr/bin/env python3
"""
Name Generator
==============
Ties the pipeline together:

    assemble -> transform (optional) -> filter (optional) -> accept | retry

Rejected candidates are retried until max_retries attempts have been made,
after which RetryLimitExceededError is raised. An unsatisfiable configuration
therefore fails loudly instead of looping forever or returning a name the
filter would reject.

Thread safety: a NameGenerator holds no locks. Independent generators can be
used from different threads, but one instance must not be shared between
threads without external synchronization.
"""

import logging
from typing import Callable, Iterator, List, Optional, Union

from .errors import RetryLimitExceededError
from .filters import NameFilter
from .generators.entropy import RandomSource, new_rng
from .generators.names import CONCRETE_ROLES, Name, NameAssembler, SyllableRole
from .generators.syllables import SymbolPosition, SyllableComposer, SyllableSource
from .settings import get_setting
from .transforms import Transform, TransformSet

logger = logging.getLogger(__name__)

Transformer = Union[Transform, TransformSet]


class NameGenerator:
    """
    Generates names that pass an optional filter.

    Usage:
        names = (NameGenerator()
            .any(lambda s: s.add(SymbolPosition.LEAD, "strl").add(SymbolPosition.MIDDLE, "aeio"))
            .set_size(2, 3)
            .set_filter(NameFilter().do_not_allow_ending("i")))
        names.next()       # "Sarelo"
        names.next(1)      # "Ta"
        names.next_name()  # Name('sa', 're', 'lo')
    """

    def __init__(
        self,
        assembler: Optional[NameAssembler] = None,
        max_retries: Optional[int] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.rng = rng or new_rng()
        if assembler is None:
            assembler = NameAssembler(
                get_setting("generation.min_size", 2),
                get_setting("generation.max_size", 3),
            )
        self.assembler = assembler
        self.transformer: Optional[Transformer] = None
        self.transform_chance = 1.0
        self.filter: Optional[NameFilter] = None
        self.max_retries = 0
        self.set_max_retries(max_retries if max_retries is not None
                             else get_setting("generation.max_retries", 1000))

    @classmethod
    def from_symbols(cls, lead: str, middle: str, trail: Optional[str] = None) -> 'NameGenerator':
        """Shortcut for a generator that uses one composer for every role."""
        composer = SyllableComposer().add(SymbolPosition.LEAD, lead).add(SymbolPosition.MIDDLE, middle)
        if trail:
            composer.add(SymbolPosition.TRAIL, trail)
        return cls().set_syllables(SyllableRole.ANY, composer)

    def __repr__(self) -> str:
        return (f"NameGenerator(size={self.minimum_size}..{self.maximum_size}, "
                f"transformer={self.transformer!r}, filter={self.filter!r})")

    @property
    def minimum_size(self) -> int:
        return self.assembler.minimum_size

    @property
    def maximum_size(self) -> int:
        return self.assembler.maximum_size

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def set_syllables(self, role: SyllableRole, composer: SyllableSource) -> 'NameGenerator':
        self.assembler.set(role, composer)
        return self

    def _define(self, role: SyllableRole,
                configure: Callable[[SyllableComposer], SyllableComposer]) -> 'NameGenerator':
        composer = configure(SyllableComposer())
        return self.set_syllables(role, composer)

    def lead(self, configure: Callable[[SyllableComposer], SyllableComposer]) -> 'NameGenerator':
        """Configure a fresh composer for the leading syllable."""
        return self._define(SyllableRole.LEADING, configure)

    def inner(self, configure: Callable[[SyllableComposer], SyllableComposer]) -> 'NameGenerator':
        return self._define(SyllableRole.INNER, configure)

    def trail(self, configure: Callable[[SyllableComposer], SyllableComposer]) -> 'NameGenerator':
        return self._define(SyllableRole.TRAILING, configure)

    def any(self, configure: Callable[[SyllableComposer], SyllableComposer]) -> 'NameGenerator':
        """Configure one composer shared by every syllable role."""
        return self._define(SyllableRole.ANY, configure)

    def set_size(self, minimum: int, maximum: Optional[int] = None) -> 'NameGenerator':
        self.assembler.set_size(minimum, maximum)
        return self

    def set_transform(self, transformer: Optional[Transformer], chance: Optional[float] = None) -> 'NameGenerator':
        """Attach a Transform or TransformSet, applied to each candidate with the given chance."""
        if chance is None:
            chance = get_setting("generation.transform_chance", 1.0)
        chance = float(chance)
        if not 0.0 <= chance <= 1.0:
            raise ValueError(f"Chance must be between 0 and 1, got {chance}")
        self.transformer = transformer
        self.transform_chance = chance
        return self

    def set_filter(self, name_filter: Optional[NameFilter]) -> 'NameGenerator':
        self.filter = name_filter
        return self

    def set_max_retries(self, max_retries: int) -> 'NameGenerator':
        if max_retries <= 0:
            raise ValueError(f"max_retries must be positive, got {max_retries}")
        self.max_retries = max_retries
        return self

    def seed(self, value: int) -> 'NameGenerator':
        """
        Reseed every component of this generator from a single value.

        Two generators built the same way and seeded with the same value
        produce the same sequence of names.
        """
        root = RandomSource(value)
        for component in self.iter_components():
            component.rng = root.fork()
        return self

    def iter_components(self) -> Iterator:
        """Yield every object in the graph that owns a randomness source."""
        seen = set()

        def once(obj):
            if id(obj) not in seen:
                seen.add(id(obj))
                return [obj]
            return []

        yield from once(self)
        yield from once(self.assembler)
        for role in CONCRETE_ROLES:
            composer = self.assembler.get(role)
            if composer is None:
                continue
            for obj in composer.iter_components():
                yield from once(obj)
        if isinstance(self.transformer, TransformSet):
            yield from once(self.transformer)
            for transform in self.transformer.iter_transforms():
                yield from once(transform)
        elif self.transformer is not None:
            yield from once(self.transformer)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _transform(self, candidate: Name) -> Name:
        if self.transformer is None:
            return candidate
        if self.transform_chance >= 1.0 or self.rng.random() < self.transform_chance:
            return self.transformer.apply(candidate)
        return candidate

    def next_name(self, size: Optional[int] = None) -> Name:
        """Generate an accepted name and return it as a Name."""
        attempts = 0
        while True:
            candidate = self._transform(self.assembler.generate_candidate(size))

            if self.filter is None:
                return candidate

            reason = self.filter.rejection_reason(candidate)
            if reason is None:
                return candidate

            attempts += 1
            logger.debug(
                f"Rejected {candidate} ({reason.condition.value} {reason.value!r}), "
                f"attempt {attempts}/{self.max_retries}"
            )
            if attempts >= self.max_retries:
                logger.warning(f"No valid name after {attempts} attempts")
                raise RetryLimitExceededError(attempts)

    def next(self, size: Optional[int] = None) -> str:
        """Generate an accepted name as a string."""
        return str(self.next_name(size))

    def generate(self, count: int, size: Optional[int] = None) -> List[str]:
        """Generate count names."""
        return [self.next(size) for _ in range(count)]
