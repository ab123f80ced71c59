#!/usr/bin/env python3
"""
NameKit - Syllable-Based Name Generator
=======================================

Builds names from weighted symbol pools: symbols form syllables, syllables
form names, and optional transforms and a denylist filter shape the result.

Quick Start
-----------
    from namekit import NameGenerator, NameFilter, SymbolPosition

    names = (NameGenerator()
        .any(lambda s: s
            .add(SymbolPosition.LEAD, "strlk")
            .add(SymbolPosition.MIDDLE, "aeiou"))
        .set_size(2, 3)
        .set_filter(NameFilter().do_not_allow_ending("u")))

    names.next()          # "Tolesa"
    names.seed(42)        # reproducible from here on

    from namekit import serialization
    serialization.save(names, "elves.yaml")
    same_config = serialization.load("elves.yaml")

Modules
-------
    namekit.generators    - symbol pools, syllable composers, name assembly
    namekit.transforms    - conditional rewrites of generated names
    namekit.filters       - denylist validation
    namekit.generator     - the generate/transform/filter/retry loop
    namekit.serialization - YAML/JSON save and load
    namekit.formatter     - templates combining several generators

CLI Usage
---------
    python -m namekit generate elves.yaml -n 10
    python -m namekit check elves.yaml Tolesu
    python -m namekit show elves.yaml
"""

__version__ = "0.1.0"
__author__ = "NameKit"

# =============================================================================
# Submodule Imports
# =============================================================================

from . import generators
from . import transforms
from . import filters
from . import serialization

# =============================================================================
# Public API
# =============================================================================

from .errors import (
    NameKitError,
    EmptyPoolError,
    EmptySyllableError,
    MissingGeneratorError,
    RetryLimitExceededError,
    SerializationError,
    SyllableSetError,
)
from .generators import (
    RandomSource,
    Symbol,
    SymbolHandle,
    SymbolPool,
    SymbolPosition,
    SyllableComposer,
    SyllableSet,
    Name,
    NameAssembler,
    SyllableRole,
)
from .transforms import StepKind, Transform, TransformSet, TransformStep
from .filters import FilterCondition, FilterConstraint, NameFilter
from .generator import NameGenerator
from .collection import NameGeneratorCollection
from .formatter import NameCase, NameFormatter

__all__ = [
    '__version__',
    # Errors
    'NameKitError',
    'EmptyPoolError',
    'EmptySyllableError',
    'MissingGeneratorError',
    'RetryLimitExceededError',
    'SerializationError',
    'SyllableSetError',
    # Building blocks
    'RandomSource',
    'Symbol',
    'SymbolHandle',
    'SymbolPool',
    'SymbolPosition',
    'SyllableComposer',
    'SyllableSet',
    'Name',
    'NameAssembler',
    'SyllableRole',
    # Transforms and filters
    'StepKind',
    'Transform',
    'TransformSet',
    'TransformStep',
    'FilterCondition',
    'FilterConstraint',
    'NameFilter',
    # Generation
    'NameGenerator',
    'NameGeneratorCollection',
    'NameCase',
    'NameFormatter',
    'serialization',
]
