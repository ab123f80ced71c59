#!/usr/bin/env python3
"""
Generator Persistence
=====================
Saves a NameGenerator (pools, composers, size bounds, transforms, filter) as
a human-readable YAML or JSON record and rebuilds an equivalent generator
from it.

Polymorphic slots carry an explicit "kind" tag:

    syllables.<role>.kind   positional | set
    transform.kind          transform | transform_set
    filter.kind             denylist

A loaded generator is a new, independent object graph. Randomness state is
not saved, so a loaded generator produces different names than the original
unless both are seeded. Callback transform steps cannot be saved.

Example record:

    kind: name_generator
    version: 1
    size: {minimum: 2, maximum: 3}
    max_retries: 1000
    syllables:
      any:
        kind: positional
        allow_empty: false
        positions:
          lead: {chance: 1.0, pools: [[{value: s, weight: 1}]]}
          middle: {chance: 1.0, pools: [[{value: a, weight: 1}]]}
    filter:
      kind: denylist
      constraints: [{condition: ends_with, value: i}]
"""

import json
import re
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .collection import NameGeneratorCollection
from .errors import SerializationError
from .filters import FilterCondition, FilterConstraint, NameFilter
from .generator import NameGenerator
from .generators.names import CONCRETE_ROLES, NameAssembler, SyllableRole
from .generators.symbols import Symbol, SymbolPool
from .generators.syllables import POSITION_ORDER, SymbolPosition, SyllableComposer, SyllableSet
from .settings import get_setting
from .transforms import StepKind, Transform, TransformSet, TransformStep

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

YAML_SUFFIXES = ('.yaml', '.yml')
JSON_SUFFIXES = ('.json',)


def _require(mapping: Dict, key: str, context: str):
    if not isinstance(mapping, dict):
        raise SerializationError(f"{context} must be a mapping, got {type(mapping).__name__}")
    if key not in mapping:
        raise SerializationError(f"{context} is missing '{key}'")
    return mapping[key]


def _mapping(value, context: str) -> Dict:
    if not isinstance(value, dict):
        raise SerializationError(f"{context} must be a mapping, got {type(value).__name__}")
    return value


def _enum(enum_cls, value, context: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ', '.join(e.value for e in enum_cls)
        raise SerializationError(f"Unknown {context} '{value}' (expected one of: {allowed})") from None


def _check_kind(data: Dict, expected, context: str) -> str:
    kind = _require(data, 'kind', context)
    if isinstance(expected, str):
        expected = (expected,)
    if kind not in expected:
        raise SerializationError(f"Unknown {context} kind '{kind}' (expected one of: {', '.join(expected)})")
    return kind


# =============================================================================
# Writing
# =============================================================================

def _pool_to_list(pool: SymbolPool) -> list:
    return [{'value': s.value, 'weight': s.weight} for s in pool.symbols]


def _composer_to_dict(composer: SyllableComposer) -> Dict[str, Any]:
    positions = {}
    for position in POSITION_ORDER:
        if position not in composer.pools and position not in composer.chances:
            continue
        positions[position.value] = {
            'chance': composer.chances.get(position, 0.0),
            'pools': [_pool_to_list(p) for p in composer.pools.get(position, [])],
        }
    return {
        'kind': 'positional',
        'allow_empty': composer.allows_empty,
        'positions': positions,
    }


def _syllable_set_to_dict(syllables: SyllableSet) -> Dict[str, Any]:
    data = {
        'kind': 'set',
        'syllables': list(syllables.syllables),
        'max_syllable_count': syllables.max_syllable_count,
        'force_unique': syllables.force_unique,
    }
    if syllables.source is not None:
        data['source'] = _composer_to_dict(syllables.source)
    return data


def _source_to_dict(source) -> Dict[str, Any]:
    if isinstance(source, SyllableSet):
        return _syllable_set_to_dict(source)
    return _composer_to_dict(source)


def _step_to_dict(step: TransformStep) -> Dict[str, Any]:
    if not step.serializable:
        raise SerializationError("Callback transform steps cannot be saved")
    return {'kind': step.kind.value, 'args': list(step.args), 'chance': step.chance}


def _transform_to_dict(transform: Transform) -> Dict[str, Any]:
    data = {
        'kind': 'transform',
        'weight': transform.weight,
        'chance': transform.chance,
        'steps': [_step_to_dict(s) for s in transform.steps],
    }
    if transform.condition_regex is not None:
        data['condition'] = {'index': transform.condition_index, 'regex': transform.condition_regex}
    return data


def _transformer_to_dict(transformer) -> Dict[str, Any]:
    if isinstance(transformer, TransformSet):
        return {
            'kind': 'transform_set',
            'random_selection_count': transformer.random_selection_count,
            'transforms': [_transform_to_dict(t) for t in transformer.transforms],
        }
    if isinstance(transformer, Transform):
        return _transform_to_dict(transformer)
    raise SerializationError(f"Cannot save transformer of type {type(transformer).__name__}")


def _filter_to_dict(name_filter: NameFilter) -> Dict[str, Any]:
    return {
        'kind': 'denylist',
        'constraints': [
            {'condition': c.condition.value, 'value': c.value} for c in name_filter.constraints
        ],
    }


def _syllables_to_dict(assembler: NameAssembler) -> Dict[str, Any]:
    composers = [assembler.get(role) for role in CONCRETE_ROLES]
    if composers[0] is not None and all(c is composers[0] for c in composers):
        return {SyllableRole.ANY.value: _source_to_dict(composers[0])}
    return {
        role.value: _source_to_dict(composer)
        for role, composer in zip(CONCRETE_ROLES, composers)
        if composer is not None
    }


def to_dict(generator: NameGenerator) -> Dict[str, Any]:
    """Describe a generator as plain data."""
    data = {
        'kind': 'name_generator',
        'version': FORMAT_VERSION,
        'size': {'minimum': generator.minimum_size, 'maximum': generator.maximum_size},
        'max_retries': generator.max_retries,
        'syllables': _syllables_to_dict(generator.assembler),
    }
    if generator.transformer is not None:
        data['transform'] = _transformer_to_dict(generator.transformer)
        data['transform']['apply_chance'] = generator.transform_chance
    if generator.filter is not None:
        data['filter'] = _filter_to_dict(generator.filter)
    return data


# =============================================================================
# Reading
# =============================================================================

def _pool_from_list(data: list, context: str) -> SymbolPool:
    if not isinstance(data, list):
        raise SerializationError(f"{context} must be a list of symbols")
    pool = SymbolPool()
    try:
        pool.symbols = [
            Symbol(str(_require(s, 'value', context)), int(s.get('weight', 1))) for s in data
        ]
    except SerializationError:
        raise
    except (TypeError, ValueError) as e:
        raise SerializationError(f"{context}: {e}") from e
    return pool


def _composer_from_dict(data: Dict, context: str) -> SyllableComposer:
    _check_kind(data, 'positional', context)
    composer = SyllableComposer()
    positions = _mapping(data.get('positions') or {}, f"{context}.positions")
    for key, entry in positions.items():
        position = _enum(SymbolPosition, key, f"{context} position")
        where = f"{context}.positions.{key}"
        entry = _mapping(entry, where)
        pools = entry.get('pools') or []
        if not isinstance(pools, list):
            raise SerializationError(f"{where}.pools must be a list")
        for i, pool_data in enumerate(pools):
            composer.add(position, _pool_from_list(pool_data, f"{where}.pools[{i}]"))
        if 'chance' in entry:
            try:
                composer.set_chance(position, entry['chance'])
            except (TypeError, ValueError) as e:
                raise SerializationError(f"{where}: {e}") from e
    composer.allow_empty(bool(data.get('allow_empty', False)))
    return composer


def _syllable_set_from_dict(data: Dict, context: str) -> SyllableSet:
    listed = data.get('syllables') or []
    if not isinstance(listed, list):
        raise SerializationError(f"{context}.syllables must be a list")
    try:
        if data.get('source') is not None:
            result = SyllableSet.from_composer(
                _composer_from_dict(data['source'], f"{context}.source"),
                int(_require(data, 'max_syllable_count', context)),
                bool(data.get('force_unique', False)),
            )
        else:
            result = SyllableSet()
            result.force_unique = bool(data.get('force_unique', False))
    except SerializationError:
        raise
    except (TypeError, ValueError) as e:
        raise SerializationError(f"{context}: {e}") from e
    return result.add(*(str(s) for s in listed))


def _source_from_dict(data: Dict, context: str):
    kind = _check_kind(data, ('positional', 'set'), context)
    if kind == 'set':
        return _syllable_set_from_dict(data, context)
    return _composer_from_dict(data, context)


def _transform_from_dict(data: Dict, context: str) -> Transform:
    _check_kind(data, 'transform', context)
    transform = Transform()
    steps = data.get('steps') or []
    if not isinstance(steps, list):
        raise SerializationError(f"{context}.steps must be a list")
    try:
        for i, step in enumerate(steps):
            kind = _enum(StepKind, _require(step, 'kind', f"{context}.steps[{i}]"), "step kind")
            if kind == StepKind.CALLBACK:
                raise SerializationError(f"{context}.steps[{i}]: callback steps cannot be loaded")
            transform.add_step(TransformStep(
                kind, [str(a) for a in step.get('args') or []], float(step.get('chance', 1.0))
            ))
        transform.with_weight(int(data.get('weight', 1)))
        transform.with_chance(data.get('chance', 1.0))
        condition = data.get('condition')
        if condition:
            condition = _mapping(condition, f"{context}.condition")
            index = condition.get('index')
            transform.when(None if index is None else int(index),
                           str(_require(condition, 'regex', f"{context}.condition")))
    except SerializationError:
        raise
    except (TypeError, ValueError, re.error) as e:
        raise SerializationError(f"{context}: {e}") from e
    return transform


def _transformer_from_dict(data: Dict):
    kind = _check_kind(data, ('transform', 'transform_set'), 'transform')
    if kind == 'transform':
        return _transform_from_dict(data, 'transform')

    entries = data.get('transforms') or []
    if not isinstance(entries, list):
        raise SerializationError("transform.transforms must be a list")
    result = TransformSet()
    for i, entry in enumerate(entries):
        result.add(_transform_from_dict(entry, f"transform.transforms[{i}]"))
    try:
        result.randomly_select(int(data.get('random_selection_count', 0)))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"transform.random_selection_count: {e}") from e
    return result


def _filter_from_dict(data: Dict) -> NameFilter:
    _check_kind(data, 'denylist', 'filter')
    constraints = data.get('constraints') or []
    if not isinstance(constraints, list):
        raise SerializationError("filter.constraints must be a list")
    result = NameFilter()
    for i, entry in enumerate(constraints):
        context = f"filter.constraints[{i}]"
        condition = _enum(FilterCondition, _require(entry, 'condition', context), "filter condition")
        try:
            result.add(FilterConstraint(condition, str(_require(entry, 'value', context))))
        except re.error as e:
            raise SerializationError(f"{context}: {e}") from e
    return result


def from_dict(data: Dict[str, Any]) -> NameGenerator:
    """Build a new generator from plain data produced by to_dict()."""
    _check_kind(data, 'name_generator', 'record')
    version = data.get('version', FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise SerializationError(f"Unsupported record version {version}")

    size = _mapping(data.get('size') or {}, 'size')
    try:
        assembler = NameAssembler(
            int(size.get('minimum', get_setting("generation.min_size", 2))),
            int(size.get('maximum', get_setting("generation.max_size", 3))),
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"size: {e}") from e

    syllables = _mapping(data.get('syllables') or {}, 'syllables')
    for key, composer_data in syllables.items():
        role = _enum(SyllableRole, key, "syllable role")
        assembler.set(role, _source_from_dict(composer_data, f"syllables.{key}"))

    max_retries = data.get('max_retries')
    try:
        generator = NameGenerator(assembler, max_retries=None if max_retries is None else int(max_retries))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"max_retries: {e}") from e

    if data.get('transform'):
        transform_data = _mapping(data['transform'], 'transform')
        transformer = _transformer_from_dict(transform_data)
        try:
            generator.set_transform(transformer, transform_data.get('apply_chance', 1.0))
        except (TypeError, ValueError) as e:
            raise SerializationError(f"transform.apply_chance: {e}") from e
    if data.get('filter'):
        generator.set_filter(_filter_from_dict(_mapping(data['filter'], 'filter')))

    return generator


def collection_to_dict(collection: NameGeneratorCollection) -> Dict[str, Any]:
    return {
        'kind': 'collection',
        'version': FORMAT_VERSION,
        'generators': {gid: to_dict(g) for gid, g in collection.items()},
    }


def collection_from_dict(data: Dict[str, Any]) -> NameGeneratorCollection:
    _check_kind(data, 'collection', 'record')
    collection = NameGeneratorCollection()
    generators = _mapping(data.get('generators') or {}, 'generators')
    for gid, entry in generators.items():
        collection.add(gid, from_dict(entry))
    return collection


# =============================================================================
# Text and Files
# =============================================================================

def _format_for(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return 'yaml'
    if suffix in JSON_SUFFIXES:
        return 'json'
    raise SerializationError(f"Unsupported file type '{suffix}' (use .yaml, .yml or .json)")


def dump_text(data: Dict[str, Any], fmt: Optional[str] = None) -> str:
    """Render plain data as YAML or JSON."""
    fmt = fmt or get_setting("serialization.default_format", "yaml")
    indent = get_setting("serialization.indent", 2)
    if fmt == 'yaml':
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, indent=indent)
    if fmt == 'json':
        return json.dumps(data, indent=indent, ensure_ascii=False)
    raise SerializationError(f"Unknown format '{fmt}'")


def load_text(text: str, fmt: Optional[str] = None) -> Dict[str, Any]:
    """Parse YAML or JSON text into plain data."""
    fmt = fmt or get_setting("serialization.default_format", "yaml")
    try:
        if fmt == 'yaml':
            data = yaml.safe_load(text)
        elif fmt == 'json':
            data = json.loads(text)
        else:
            raise SerializationError(f"Unknown format '{fmt}'")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SerializationError(f"Could not parse {fmt} record: {e}") from e
    if not isinstance(data, dict):
        raise SerializationError("A generator record must be a mapping")
    return data


def dumps(generator: NameGenerator, fmt: Optional[str] = None) -> str:
    return dump_text(to_dict(generator), fmt)


def loads(text: str, fmt: Optional[str] = None) -> NameGenerator:
    return from_dict(load_text(text, fmt))


def _load_record(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"No generator file at {path}")
    return load_text(path.read_text(encoding='utf-8'), _format_for(path))


def save(target: Union[NameGenerator, NameGeneratorCollection], path: Union[str, Path]) -> Path:
    """Write a generator or collection to a .yaml/.yml/.json file."""
    path = Path(path)
    if isinstance(target, NameGeneratorCollection):
        data = collection_to_dict(target)
    else:
        data = to_dict(target)
    path.write_text(dump_text(data, _format_for(path)), encoding='utf-8')
    logger.info(f"Saved {data['kind']} to {path}")
    return path


def load(path: Union[str, Path]) -> NameGenerator:
    """Read a generator saved with save()."""
    path = Path(path)
    generator = from_dict(_load_record(path))
    logger.info(f"Loaded name generator from {path}")
    return generator


def load_any(path: Union[str, Path]) -> Union[NameGenerator, NameGeneratorCollection]:
    """Read either a single generator or a collection, depending on the record kind."""
    path = Path(path)
    data = _load_record(path)
    if data.get('kind') == 'collection':
        result = collection_from_dict(data)
    else:
        result = from_dict(data)
    logger.info(f"Loaded {data.get('kind')} from {path}")
    return result


def load_collection(path: Union[str, Path]) -> NameGeneratorCollection:
    """Read a collection saved with save()."""
    path = Path(path)
    return collection_from_dict(_load_record(path))
