#!/usr/bin/env python3
"""
Name Formatter
==============
Combines several generators into one templated name:

    full_names = (NameFormatter("{first} {last}")
        .define("first", first_names)
        .define("last", last_names, case=NameCase.UPPER))
    full_names.next()  # "Kara TOLVEN"

A placeholder used twice gets the same value both times. Placeholders with
no bound generator are left in the output as-is.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

PLACEHOLDER_PATTERN = re.compile(r"\{(.+?)\}")


class NameCase(Enum):
    """Letter case applied to a generated value."""
    LOWER = "lower"
    UPPER = "upper"
    CAPITALIZED = "capitalized"


@dataclass
class PlaceholderOptions:
    case: NameCase = NameCase.CAPITALIZED
    leading_space: bool = False


def apply_case(text: str, case: NameCase) -> str:
    if case == NameCase.UPPER:
        return text.upper()
    if case == NameCase.LOWER:
        return text.lower()
    return text[:1].upper() + text[1:].lower()


class NameFormatter:
    """Fills {placeholders} in a format string from bound generators."""

    def __init__(self, template: str):
        if template is None:
            raise ValueError("The desired format cannot be None")
        self.template = template
        self.generators: Dict[str, object] = {}
        self.options: Dict[str, PlaceholderOptions] = {}

    def define(self, placeholder: str, generator, case: NameCase = NameCase.CAPITALIZED,
               leading_space: bool = False) -> 'NameFormatter':
        """Bind a generator (anything with a next() method) to a placeholder."""
        if generator is None or not callable(getattr(generator, 'next', None)):
            raise ValueError(f"Placeholder '{placeholder}' needs a generator with a next() method")
        self.generators[placeholder] = generator
        self.options[placeholder] = PlaceholderOptions(case, leading_space)
        return self

    def placeholders(self) -> List[str]:
        return PLACEHOLDER_PATTERN.findall(self.template)

    def _value(self, placeholder: str) -> str:
        options = self.options[placeholder]
        value = apply_case(str(self.generators[placeholder].next()), options.case)
        if options.leading_space:
            value = ' ' + value
        return value

    def next(self) -> str:
        """Produce one formatted name. Repeated placeholders share one value."""
        values = {}

        def fill(match):
            placeholder = match.group(1)
            if placeholder not in self.generators:
                return match.group(0)
            if placeholder not in values:
                values[placeholder] = self._value(placeholder)
            return values[placeholder]

        return PLACEHOLDER_PATTERN.sub(fill, self.template)
