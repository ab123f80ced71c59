#!/usr/bin/env python3
"""
Name Filter
===========
Denylist validation for finished names.

Every constraint describes something a name must NOT be. A name that
satisfies ANY constraint is rejected:

    NameFilter().do_not_allow_ending("i").is_valid("Tori")   # False
    NameFilter().do_not_allow_ending("i").is_valid("Toran")  # True

Comparisons are case-insensitive, and regex constraints are searched
anywhere in the name with re.IGNORECASE.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Pattern, Union

from .generators.names import Name


class FilterCondition(Enum):
    """Kind of comparison a constraint performs."""
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    MATCHES_PATTERN = "matches_pattern"


@dataclass
class FilterConstraint:
    """A single deny rule."""
    condition: FilterCondition
    value: str
    _pattern: Optional[Pattern] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.condition == FilterCondition.MATCHES_PATTERN:
            self._pattern = re.compile(self.value, re.IGNORECASE)

    def matches(self, name: str) -> bool:
        """True when name violates this constraint."""
        if self.condition == FilterCondition.MATCHES_PATTERN:
            return self._pattern.search(name) is not None

        lowercase_name = name.lower()
        lowercase_value = self.value.lower()
        if self.condition == FilterCondition.CONTAINS:
            return lowercase_value in lowercase_name
        if self.condition == FilterCondition.STARTS_WITH:
            return lowercase_name.startswith(lowercase_value)
        if self.condition == FilterCondition.ENDS_WITH:
            return lowercase_name.endswith(lowercase_value)
        return False


class NameFilter:
    """Rejects names that match any of its constraints."""

    def __init__(self, *patterns: str):
        self.constraints: List[FilterConstraint] = []
        self.do_not_allow_pattern(*patterns)

    def __repr__(self) -> str:
        return f"NameFilter({len(self.constraints)} constraints)"

    def __len__(self) -> int:
        return len(self.constraints)

    def add(self, constraint: FilterConstraint) -> 'NameFilter':
        self.constraints.append(constraint)
        return self

    def _add_all(self, condition: FilterCondition, values) -> 'NameFilter':
        for value in values:
            self.add(FilterConstraint(condition, value))
        return self

    def do_not_allow_substring(self, *substrings: str) -> 'NameFilter':
        return self._add_all(FilterCondition.CONTAINS, substrings)

    def do_not_allow_start(self, *prefixes: str) -> 'NameFilter':
        return self._add_all(FilterCondition.STARTS_WITH, prefixes)

    def do_not_allow_ending(self, *suffixes: str) -> 'NameFilter':
        return self._add_all(FilterCondition.ENDS_WITH, suffixes)

    def do_not_allow_pattern(self, *regexes: str) -> 'NameFilter':
        return self._add_all(FilterCondition.MATCHES_PATTERN, regexes)

    def rejection_reason(self, name: Union[Name, str]) -> Optional[FilterConstraint]:
        """Return the first constraint name violates, or None if it passes."""
        text = str(name)
        for constraint in self.constraints:
            if constraint.matches(text):
                return constraint
        return None

    def is_valid(self, name: Union[Name, str]) -> bool:
        """True when name violates none of the constraints."""
        return self.rejection_reason(name) is None
