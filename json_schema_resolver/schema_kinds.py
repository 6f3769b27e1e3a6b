"""Keyword classification shared by definition building and example extraction.

A schema node is classified once into a `SchemaKind`; both derivations then
dispatch on that kind instead of re-checking keywords in sequence.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import SchemaCycleError
from .logging_utils import get_logger

logger = get_logger(__name__)


class SchemaKind(str, Enum):
    ARRAY_ITEMS = 'array_items'
    ALL_OF = 'all_of'
    ONE_OF = 'one_of'
    ANY_OF = 'any_of'
    SELF_REF = 'self_ref'
    OBJECT_PROPS = 'object_props'
    LEAF = 'leaf'


COMPOSITION_KINDS = frozenset({SchemaKind.ALL_OF, SchemaKind.ONE_OF, SchemaKind.ANY_OF})


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def classify(node: Any) -> SchemaKind:
    """Pick the single kind that drives resolution of `node`.

    Precedence: array items, allOf, oneOf, anyOf, self reference, properties.
    """
    if not is_mapping(node):
        return SchemaKind.LEAF
    if node.get('type') == 'array' and is_mapping(node.get('items')):
        return SchemaKind.ARRAY_ITEMS
    if is_sequence(node.get('allOf')):
        return SchemaKind.ALL_OF
    if is_sequence(node.get('oneOf')):
        return SchemaKind.ONE_OF
    if is_sequence(node.get('anyOf')):
        return SchemaKind.ANY_OF
    if node.get('rel') == 'self':
        return SchemaKind.SELF_REF
    if is_mapping(node.get('properties')):
        return SchemaKind.OBJECT_PROPS
    return SchemaKind.LEAF


def variants(node: Mapping) -> Optional[List[Any]]:
    """The oneOf alternatives, else the anyOf alternatives, else None."""
    for key in ('oneOf', 'anyOf'):
        if is_sequence(node.get(key)):
            return list(node[key])
    return None


def variant_keyword(node: Mapping) -> Optional[str]:
    if is_sequence(node.get('oneOf')):
        return 'oneOf'
    if is_sequence(node.get('anyOf')):
        return 'anyOf'
    return None


def is_hidden(node: Any) -> bool:
    return is_mapping(node) and node.get('noDisplay') is True


def is_closed(node: Any) -> bool:
    """True for schemas declaring `additionalProperties: false`."""
    return is_mapping(node) and node.get('additionalProperties') is False


def visible_properties(properties: Any) -> Dict[str, Any]:
    """New mapping without `noDisplay` entries; the input is left untouched."""
    if not is_mapping(properties):
        return {}
    return {
        name: prop
        for name, prop in properties.items()
        if is_mapping(prop) and not is_hidden(prop)
    }


def hidden_property_names(node: Any) -> List[str]:
    if not is_mapping(node) or not is_mapping(node.get('properties')):
        return []
    return [name for name, prop in node['properties'].items() if is_hidden(prop)]


def additional_property_map(additional: Any) -> Dict[str, Any]:
    """Read `additionalProperties` as a name -> schema map.

    A catch-all that carries its own `properties` contributes those instead.
    """
    if not is_mapping(additional):
        return {}
    if is_mapping(additional.get('properties')):
        return dict(additional['properties'])
    return {name: prop for name, prop in additional.items() if is_mapping(prop)}


def prune_exclusive(value: Any, groups: Any) -> Any:
    """Drop every member but the first of each exclusive group.

    Returns a new mapping; non-mapping values pass through unchanged.
    """
    if not is_mapping(value) or not is_sequence(groups):
        return value
    pruned = dict(value)
    for group in groups:
        if not is_sequence(group):
            continue
        for name in list(group)[1:]:
            pruned.pop(name, None)
    return pruned


def enum_value_type(values: Any) -> Optional[str]:
    """Type name of the first enum entry, in JSON vocabulary."""
    if not is_sequence(values) or not values:
        return None
    first = values[0]
    if isinstance(first, bool):
        return 'boolean'
    if isinstance(first, (int, float)):
        return 'number'
    if isinstance(first, str):
        return 'string'
    return 'object'


def describe(node: Any) -> str:
    """Short human label for a node, used in error messages."""
    if is_mapping(node):
        for key in ('id', 'title'):
            if isinstance(node.get(key), str) and node[key]:
                return f"{key}={node[key]!r}"
        if node.get('rel') == 'self':
            return "rel='self'"
        if node.get('type'):
            return f"type={node['type']!r}"
    return type(node).__name__


def descend(node: Any, trail: Tuple[int, ...], max_depth: int) -> Tuple[int, ...]:
    """Push `node` onto the chain of nodes being resolved.

    Raises SchemaCycleError when the node is already on the chain or the
    chain is longer than `max_depth`. Non-mapping nodes are not tracked.
    """
    if not is_mapping(node):
        return trail
    if len(trail) >= max_depth:
        logger.warning(f"Schema nesting exceeded {max_depth} levels at {describe(node)}")
        raise SchemaCycleError(describe(node), f"maximum depth {max_depth} exceeded")
    key = id(node)
    if key in trail:
        logger.warning(f"Schema cycle detected at {describe(node)}")
        raise SchemaCycleError(describe(node))
    return trail + (key,)
