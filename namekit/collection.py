#!/usr/bin/env python3
"""Registry of named generators, e.g. one per culture or kind of place."""

from typing import Callable, Dict, Iterator, Optional, Tuple

from .generator import NameGenerator


class NameGeneratorCollection:
    """Maps ids to NameGenerators."""

    def __init__(self):
        self._generators: Dict[str, NameGenerator] = {}

    def __len__(self) -> int:
        return len(self._generators)

    def __contains__(self, gid: str) -> bool:
        return gid in self._generators

    def items(self) -> Iterator[Tuple[str, NameGenerator]]:
        return iter(self._generators.items())

    def add(self, gid: str, generator: NameGenerator) -> 'NameGeneratorCollection':
        if gid in self._generators:
            raise KeyError(f"A name generator already exists with id '{gid}'")
        self._generators[gid] = generator
        return self

    def define(self, gid: str,
               configure: Callable[[NameGenerator], NameGenerator]) -> 'NameGeneratorCollection':
        """Configure a fresh generator and register it under gid."""
        return self.add(gid, configure(NameGenerator()))

    def get(self, gid: str) -> NameGenerator:
        if gid not in self._generators:
            raise KeyError(f"A name generator with id '{gid}' does not exist")
        return self._generators[gid]

    def next(self, gid: str, size: Optional[int] = None) -> str:
        return self.get(gid).next(size)
