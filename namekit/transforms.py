#!/usr/bin/env python3
"""
Transform Engine
================
Transforms derive variants from a generated name:

- Insert, append, replace or remove a syllable
- Replace a substring inside every syllable
- Run a callback (in-process only, never persisted)

A Transform can be gated by a regex condition on one syllable (or the whole
name) and by a firing chance. Each of its steps has its own chance as well.
A TransformSet groups transforms and either applies all of them in order or
draws a weighted subset without replacement, e.g. to pick exactly one of
several alternative endings.

Usage:
    endings = (TransformSet()
        .add(Transform().append_syllable("ia"))
        .add(Transform().append_syllable("or").with_weight(3))
        .randomly_select(1))
    endings.apply(Name("ka", "ru"))  # Karuia or Karuor
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Union

from .generators.entropy import RandomSource, new_rng
from .generators.names import Name


class StepKind(Enum):
    """What a TransformStep does to a name."""
    INSERT_SYLLABLE = "insert_syllable"
    APPEND_SYLLABLE = "append_syllable"
    REPLACE_SYLLABLE = "replace_syllable"
    REPLACE_ALL_SUBSTRING = "replace_all_substring"
    REMOVE_SYLLABLE = "remove_syllable"
    CALLBACK = "callback"


# Number of string arguments each persisted step kind takes
STEP_ARITY = {
    StepKind.INSERT_SYLLABLE: 2,
    StepKind.APPEND_SYLLABLE: 1,
    StepKind.REPLACE_SYLLABLE: 2,
    StepKind.REPLACE_ALL_SUBSTRING: 2,
    StepKind.REMOVE_SYLLABLE: 1,
}


@dataclass
class TransformStep:
    """
    One action of a Transform.

    Arguments are kept as strings so every built-in step can be written to
    and read from a configuration file unchanged. CALLBACK steps carry a
    Python callable instead and cannot be persisted.
    """
    kind: StepKind
    args: List[str] = field(default_factory=list)
    chance: float = 1.0
    callback: Optional[Callable[[Name], None]] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.kind == StepKind.CALLBACK:
            if not callable(self.callback):
                raise TypeError("A callback step needs a callable")
        elif len(self.args) != STEP_ARITY[self.kind]:
            raise ValueError(
                f"{self.kind.value} takes {STEP_ARITY[self.kind]} argument(s), got {len(self.args)}"
            )
        elif self.kind == StepKind.REPLACE_ALL_SUBSTRING and not self.args[0]:
            raise ValueError("replace_all_substring needs a non-empty substring")

    @classmethod
    def from_callback(cls, callback: Callable[[Name], None]) -> 'TransformStep':
        return cls(StepKind.CALLBACK, callback=callback)

    @property
    def serializable(self) -> bool:
        return self.kind != StepKind.CALLBACK

    def modify(self, name: Name):
        """Apply this step to name in place."""
        syllables = name.syllables

        if self.kind == StepKind.INSERT_SYLLABLE:
            syllables.insert(name.resolve_index(int(self.args[0])), self.args[1])
        elif self.kind == StepKind.APPEND_SYLLABLE:
            syllables.append(self.args[0])
        elif self.kind == StepKind.REPLACE_SYLLABLE:
            syllables[name.resolve_index(int(self.args[0]))] = self.args[1]
        elif self.kind == StepKind.REMOVE_SYLLABLE:
            del syllables[name.resolve_index(int(self.args[0]))]
        elif self.kind == StepKind.REPLACE_ALL_SUBSTRING:
            substring = self.args[0].lower()
            replacement = self.args[1].lower()
            for i, syllable in enumerate(syllables):
                lowered = syllable.lower()
                if substring in lowered:
                    syllables[i] = lowered.replace(substring, replacement)
        elif self.kind == StepKind.CALLBACK:
            self.callback(name)


def _check_chance(chance: float) -> float:
    chance = float(chance)
    if not 0.0 <= chance <= 1.0:
        raise ValueError(f"Chance must be between 0 and 1, got {chance}")
    return chance


class Transform:
    """
    A conditional, probabilistic rewrite of a name.

    Evaluation order:
        1. Roll against chance; a miss leaves the name unchanged.
        2. If a condition is set, test its regex against the syllable at
           condition_index (negative counts from the end) or, without an
           index, against the whole name. No match leaves the name unchanged.
        3. Run each step in order, each behind its own chance roll.
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or new_rng()
        self.steps: List[TransformStep] = []
        self.weight = 1
        self.chance = 1.0
        self.condition_index: Optional[int] = None
        self.condition_regex: Optional[str] = None

    def __repr__(self) -> str:
        steps = ', '.join(s.kind.value for s in self.steps)
        return f"Transform([{steps}], weight={self.weight}, chance={self.chance})"

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def add_step(self, step: TransformStep) -> 'Transform':
        self.steps.append(step)
        return self

    def insert_syllable(self, index: int, syllable: str) -> 'Transform':
        """Insert a syllable at index, pushing later syllables right."""
        return self.add_step(TransformStep(StepKind.INSERT_SYLLABLE, [str(int(index)), syllable]))

    def append_syllable(self, syllable: str) -> 'Transform':
        return self.add_step(TransformStep(StepKind.APPEND_SYLLABLE, [syllable]))

    def replace_syllable(self, index: int, replacement: str) -> 'Transform':
        return self.add_step(TransformStep(StepKind.REPLACE_SYLLABLE, [str(int(index)), replacement]))

    def remove_syllable(self, index: int) -> 'Transform':
        return self.add_step(TransformStep(StepKind.REMOVE_SYLLABLE, [str(int(index))]))

    def replace_all(self, substring: str, replacement: str) -> 'Transform':
        """
        Replace substring in every syllable. The substring must sit entirely
        inside one syllable to match. Touched syllables are lower-cased.
        """
        return self.add_step(TransformStep(StepKind.REPLACE_ALL_SUBSTRING, [substring, replacement]))

    def execute(self, callback: Callable[[Name], None]) -> 'Transform':
        """Run an arbitrary in-place edit. Transforms using this cannot be saved."""
        return self.add_step(TransformStep.from_callback(callback))

    def when(self, index: Optional[int], regex: str) -> 'Transform':
        """Only fire when regex matches the syllable at index (None: the whole name)."""
        re.compile(regex)
        self.condition_index = index
        self.condition_regex = regex
        return self

    def step_chance(self, chance: float) -> 'Transform':
        """Set the chance of the most recently added step."""
        if not self.steps:
            raise ValueError("step_chance() needs at least one step")
        self.steps[-1].chance = _check_chance(chance)
        return self

    def with_chance(self, chance: float) -> 'Transform':
        self.chance = _check_chance(chance)
        return self

    def with_weight(self, weight: int) -> 'Transform':
        if weight <= 0:
            raise ValueError(f"Transform weight must be positive, got {weight}")
        self.weight = weight
        return self

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------

    def matches(self, name: Name) -> bool:
        """Check the optional condition against name."""
        if self.condition_regex is None:
            return True
        if self.condition_index is None:
            target = str(name)
        else:
            target = name.syllable_at(self.condition_index)
        return re.search(self.condition_regex, target) is not None

    def _run_steps(self, name: Name):
        for step in self.steps:
            if step.chance >= 1.0 or self.rng.random() < step.chance:
                step.modify(name)

    def modify(self, name: Name, source: Optional[Name] = None) -> bool:
        """
        Apply in place. The condition is tested against source (defaults to
        name). Returns whether the transform fired.
        """
        if self.chance < 1.0 and self.rng.random() >= self.chance:
            return False
        if not self.matches(source if source is not None else name):
            return False
        self._run_steps(name)
        return True

    def apply(self, name: Name) -> Name:
        """Return a transformed copy, leaving name untouched."""
        result = name.copy()
        self.modify(result, source=name)
        return result


class TransformSet:
    """
    A group of transforms.

    By default every transform is applied in the order it was added. After
    randomly_select(k), k transforms are drawn by weight without replacement
    and applied in the order drawn. Conditions are always tested against the
    source name, not the partially transformed one.
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or new_rng()
        self.transforms: List[Transform] = []
        self.random_selection_count = 0

    def __repr__(self) -> str:
        return f"TransformSet({len(self.transforms)} transforms, select={self.random_selection_count})"

    @property
    def uses_random_selection(self) -> bool:
        return self.random_selection_count > 0

    def add(self, transform: Union[Transform, Callable[[Transform], Transform]]) -> 'TransformSet':
        """Add a transform, or a callable that configures a fresh one."""
        if not isinstance(transform, Transform):
            transform = transform(Transform())
        self.transforms.append(transform)
        return self

    def weight(self, transform: Transform, weight: int) -> 'TransformSet':
        """Set the selection weight of a transform in this set."""
        if transform not in self.transforms:
            raise ValueError("Transform is not part of this set")
        transform.with_weight(weight)
        return self

    def randomly_select(self, count: int) -> 'TransformSet':
        """Apply only count transforms, drawn by weight without replacement."""
        if count < 0:
            raise ValueError(f"Selection count must not be negative, got {count}")
        self.random_selection_count = count
        return self

    def join(self, other: 'TransformSet') -> 'TransformSet':
        """Return a new set holding this set's transforms followed by other's."""
        result = TransformSet().randomly_select(self.random_selection_count)
        result.transforms.extend(self.transforms)
        result.transforms.extend(other.transforms)
        return result

    def _draw(self) -> List[Transform]:
        remaining = list(self.transforms)
        drawn = []
        while remaining and len(drawn) < self.random_selection_count:
            index = self.rng.weighted_index([t.weight for t in remaining])
            drawn.append(remaining.pop(index))
        return drawn

    def apply(self, name: Name) -> Name:
        """Return a transformed copy, leaving name untouched."""
        result = name.copy()
        selected = self._draw() if self.uses_random_selection else self.transforms
        for transform in selected:
            transform.modify(result, source=name)
        return result

    def iter_transforms(self):
        return iter(self.transforms)
