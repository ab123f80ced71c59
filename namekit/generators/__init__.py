#!/usr/bin/env python3
"""
Name Generation Building Blocks
===============================
Leaf-to-root:
- entropy:   per-component randomness sources
- symbols:   weighted symbol pools
- syllables: positional syllable composers and syllable sets
- names:     the Name type and the role-aware name assembler
"""

from .entropy import RandomSource, new_rng
from .symbols import Symbol, SymbolHandle, SymbolPool, atomize
from .syllables import SymbolPosition, SyllableComposer, SyllableSet
from .names import Name, NameAssembler, SyllableRole

__all__ = [
    'RandomSource',
    'new_rng',
    'Symbol',
    'SymbolHandle',
    'SymbolPool',
    'atomize',
    'SymbolPosition',
    'SyllableComposer',
    'SyllableSet',
    'Name',
    'NameAssembler',
    'SyllableRole',
]
