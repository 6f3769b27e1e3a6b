"""Build a representative example value from a schema node.

`{'type': 'object', 'properties': {'name': {'type': 'string', 'example': 'Ada'}}}`
extracts to `{'name': 'Ada'}`. Arrays are represented by a single element,
oneOf/anyOf by their first alternative, allOf by merging every member.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .accessors import get_value_by_path
from .config import ResolverSettings, get_settings
from .errors import MissingSchemaError
from .logging_utils import get_logger
from .schema_kinds import (
    COMPOSITION_KINDS,
    SchemaKind,
    additional_property_map,
    classify,
    descend,
    is_closed,
    is_mapping,
    is_sequence,
    prune_exclusive,
    variants,
)

logger = get_logger(__name__)

# Marks "no literal example"; distinct from an explicit `example: null`.
_MISSING = object()

Trail = Tuple[int, ...]


@dataclass(frozen=True)
class _Walk:
    include_additional_properties: bool
    max_depth: int


def _make_walk(options: Optional[Mapping[str, Any]], settings: Optional[ResolverSettings]) -> _Walk:
    settings = settings or get_settings()
    include = get_value_by_path(options, 'includeAdditionalProperties')
    if include is None:
        include = get_value_by_path(options, 'generator.includeAdditionalProperties')
    if include is None:
        include = settings.include_additional_properties
    return _Walk(include_additional_properties=bool(include), max_depth=settings.max_depth)


def _is_missing(component: Any) -> bool:
    # Empty mappings and lists are valid (if uninformative) schemas.
    if isinstance(component, (Mapping, list, tuple)):
        return False
    return not component


def _is_empty(value: Any) -> bool:
    return value is None or (is_mapping(value) and not value)


def extract(
    component: Any,
    root: Any = None,
    options: Optional[Mapping[str, Any]] = None,
    settings: Optional[ResolverSettings] = None,
) -> Any:
    """Recursively build an example instance of `component`.

    `root` is the scope `rel: self` references resolve against; it defaults to
    `component` and is rebound to any descendant carrying an `id`.
    `options` may set `includeAdditionalProperties` (or
    `generator.includeAdditionalProperties`) to fold catch-all properties
    into the example.
    """
    if _is_missing(component):
        raise MissingSchemaError()
    walk = _make_walk(options, settings)
    return _extract(component, root if root is not None else component, walk, ())


def map_properties_to_examples(
    props: Any,
    schema: Any = None,
    options: Optional[Mapping[str, Any]] = None,
    settings: Optional[ResolverSettings] = None,
) -> Dict[str, Any]:
    """Map a `properties` definition to example values.

    `{'attribute1': {'type': 'string', 'example': 'example value'}}` ->
    `{'attribute1': 'example value'}`

    Properties whose name starts with '__' or that are flagged `private` are
    left out, as are leaves with neither `example` nor `default`. A property
    named `ID` is emitted as `id`, since `id` itself marks a schema scope.
    """
    walk = _make_walk(options, settings)
    return _map_properties(props, schema, walk, ())


def get_example_from_item(reference: Any) -> Any:
    """Literal example of a leaf: `example`, else `default`, else None.

    Non-mapping references yield 'unknown'.
    """
    value = _literal_example(reference)
    return None if value is _MISSING else value


def _literal_example(reference: Any) -> Any:
    if not is_mapping(reference):
        return 'unknown'
    if 'example' in reference:
        return reference['example']
    if 'default' in reference:
        return reference['default']
    return _MISSING


def _extract(component: Any, root: Any, walk: _Walk, trail: Trail) -> Any:
    if _is_missing(component):
        raise MissingSchemaError()
    trail = descend(component, trail, walk.max_depth)

    # Local references resolve relative to the closest schema with an id
    if is_mapping(component) and component.get('id'):
        root = component

    kind = classify(component)
    if kind is SchemaKind.ARRAY_ITEMS:
        return [_extract(component['items'], root, walk, trail)]

    reduced = _HANDLERS[kind](component, root, walk, trail)

    additional = component.get('additionalProperties') if is_mapping(component) else None
    if is_mapping(additional) and _includes_additional(component, walk):
        extra = _map_properties(additional_property_map(additional), root, walk, trail)
        if is_mapping(reduced):
            reduced = {**reduced, **extra}
        elif reduced is None:
            reduced = extra

    if kind in COMPOSITION_KINDS and _is_empty(reduced) and is_mapping(component.get('properties')):
        logger.debug("Composition produced no example, falling back to declared properties")
        reduced = _map_properties(component['properties'], root, walk, trail)

    if is_mapping(component):
        reduced = prune_exclusive(reduced, component.get('exclusive'))
    return reduced


def _includes_additional(component: Mapping, walk: _Walk) -> bool:
    flag = get_value_by_path(component, 'generator.includeAdditionalProperties')
    if flag is None:
        return walk.include_additional_properties
    return bool(flag)


def _extract_all_of(component: Mapping, root: Any, walk: _Walk, trail: Trail, seed: Any = None) -> Any:
    accumulator: Any = dict(seed) if is_mapping(seed) else {}
    for subschema in component['allOf']:
        if not is_mapping(subschema):
            continue
        value = _extract(subschema, root, walk, trail)
        if is_closed(subschema):
            # A closed member overrides everything merged before it
            accumulator = value
        elif is_mapping(value):
            accumulator = {**accumulator, **value} if is_mapping(accumulator) else dict(value)
    return accumulator


def _extract_first_variant(component: Mapping, root: Any, walk: _Walk, trail: Trail) -> Any:
    alternatives = variants(component)
    if not alternatives:
        return None
    return _extract(alternatives[0], root, walk, trail)


def _extract_self_reference(component: Mapping, root: Any, walk: _Walk, trail: Trail) -> Any:
    # Hyper-schema style reference to the enclosing scope
    return _extract(root, root, walk, trail)


def _extract_properties(component: Mapping, root: Any, walk: _Walk, trail: Trail) -> Any:
    return _map_properties(component['properties'], root, walk, trail)


def _extract_leaf(component: Any, root: Any, walk: _Walk, trail: Trail) -> Any:
    value = _literal_example(component)
    return None if value is _MISSING else value


_HANDLERS = {
    SchemaKind.ALL_OF: _extract_all_of,
    SchemaKind.ONE_OF: _extract_first_variant,
    SchemaKind.ANY_OF: _extract_first_variant,
    SchemaKind.SELF_REF: _extract_self_reference,
    SchemaKind.OBJECT_PROPS: _extract_properties,
    SchemaKind.LEAF: _extract_leaf,
}


def _map_properties(props: Any, schema: Any, walk: _Walk, trail: Trail) -> Dict[str, Any]:
    if not is_mapping(props):
        return {}

    properties: Dict[str, Any] = {}
    for name, prop in props.items():
        # Allow opting out of example generation
        if (isinstance(name, str) and name.startswith('__')) or (is_mapping(prop) and prop.get('private')):
            continue

        example = _example_for_property(prop, schema, walk, trail)
        if example is _MISSING:
            continue
        properties['id' if name == 'ID' else name] = example
    return properties


def _example_for_property(prop: Any, schema: Any, walk: _Walk, trail: Trail) -> Any:
    if not is_mapping(prop):
        return 'unknown'

    example = _literal_example(prop)
    inner = descend(prop, trail, walk.max_depth)

    # Declared properties take precedence over composition keywords here
    if prop.get('rel') == 'self':
        example = _extract(schema, schema, walk, trail)
    elif classify(prop) is SchemaKind.ARRAY_ITEMS and example is _MISSING:
        items = prop['items']
        if items.get('example') is not None:
            example = [items['example']]
        else:
            example = [_extract(items, schema, walk, inner)]
    elif prop.get('id') and example is _MISSING:
        example = _extract(prop, prop, walk, trail)
    elif is_mapping(prop.get('properties')):
        example = _map_properties(prop['properties'], schema, walk, inner)
    elif variants(prop) is not None:
        example = _extract(prop, schema, walk, trail)
    elif is_sequence(prop.get('allOf')):
        seed = example if is_mapping(example) else None
        example = _extract_all_of(prop, schema, walk, inner, seed=seed)

    if example is _MISSING:
        return example
    return prune_exclusive(example, prop.get('exclusive'))
