"""Flattened object definitions for documentation rendering.

A definition lists the properties an object exposes (split into required and
optional), one nested definition per oneOf/anyOf variant, and a formatted
example of the whole node. The input schema is never modified.
"""

from __future__ import annotations

import json
import random
from typing import Any, Dict, List, Optional, Tuple

from . import example_extractor
from .config import ResolverSettings, get_settings
from .errors import ExampleFormattingError
from .formatters import Formatter, default_formatter
from .logging_utils import get_logger
from .merging import merge_definitions, without_keys
from .paths import MAX_IDENTIFIER, ROOT_PATH, join_path, path_identifier
from .schema_kinds import (
    additional_property_map,
    descend,
    enum_value_type,
    hidden_property_names,
    is_closed,
    is_hidden,
    is_mapping,
    is_sequence,
    variant_keyword,
    variants,
    visible_properties,
)

logger = get_logger(__name__)

Trail = Tuple[int, ...]
Definition = Dict[str, Any]

# Variant alternatives of these types get a full definition of their own
_STRUCTURED_TYPES = ('object', 'array')


def _dump_schema(schema: Any) -> str:
    try:
        return json.dumps(schema, default=repr)
    except ValueError:
        # Circular containers
        return repr(schema)


class SchemaResolver:
    """Builds object definitions from JSON-Schema-like mappings.

    Parameters
    ----------
    formatter : Formatter, optional
        Anything implementing `.format(value)`; defaults to a JSONFormatter
        using the configured indentation.
    settings : ResolverSettings, optional
        Defaults to `get_settings()`.
    rng : random.Random, optional
        Source of the per-build UI keys when `id_strategy` is "random".
    """

    def __init__(
        self,
        formatter: Optional[Formatter] = None,
        settings: Optional[ResolverSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or get_settings()
        self.formatter = formatter or default_formatter(self.settings)
        self._random = rng or random.Random()

    def build(self, schema: Any) -> Optional[Definition]:
        """Entry point: the full definition of `schema`, or None when it is hidden.

        Returns a dict with `allProps` (omitted when empty), `requiredProps`,
        `optionalProps` (None when empty), `objects`, `example`, `title`,
        `description`, `enum`, `id` and `_original` (the source node).
        """
        return self._build(schema, None, ROOT_PATH, ())

    def define_properties(self, properties: Any, scope: Any = None) -> Dict[str, Any]:
        """Definitions for a `properties` mapping, skipping `noDisplay` entries."""
        return self._define_properties(properties, scope, join_path(ROOT_PATH, 'properties'), ())

    def define_property(self, prop: Any, scope: Any = None) -> Optional[Definition]:
        """Definition of a single property: type, formatted example and any nested structure."""
        return self._define_property(prop, scope if scope is not None else prop, ROOT_PATH, ())

    def get_example_from_property(self, prop: Any, scope: Any = None) -> Optional[str]:
        """Formatted example of a property, or None when it yields none."""
        extracted = example_extractor.map_properties_to_examples({'prop': prop}, scope, settings=self.settings)
        if 'prop' not in extracted:
            return None
        return self._format(extracted['prop'], prop)

    def _identifier(self, path: str) -> str:
        if self.settings.id_strategy == 'path':
            return path_identifier(path)
        return str(self._random.randint(0, MAX_IDENTIFIER))

    def _format(self, value: Any, schema: Any) -> str:
        try:
            return self.formatter.format(value)
        except Exception as exc:
            raise ExampleFormattingError(
                f"Error preparing data for object: {_dump_schema(schema)} {exc}"
            ) from exc

    def _skeleton(self) -> Definition:
        return {
            # Properties defined by the object itself
            'allProps': {},
            'requiredProps': {},
            'optionalProps': {},
            # Nested definitions for oneOf/anyOf
            'objects': [],
            'example': '',
        }

    def _build(self, schema: Any, scope: Any, path: str, trail: Trail) -> Optional[Definition]:
        if not is_mapping(schema) or is_hidden(schema):
            return None
        trail = descend(schema, trail, self.settings.max_depth)
        if scope is None or schema.get('id'):
            scope = schema

        required: List[Any] = list(schema['required']) if is_sequence(schema.get('required')) else []
        definition = self._skeleton()

        if is_sequence(schema.get('allOf')):
            definition, required = self._fold_all_of(schema, scope, path, trail, definition, required)

        alternatives = variants(schema)
        if alternatives is not None:
            keyword = variant_keyword(schema)
            objects = []
            for index, alternative in enumerate(alternatives):
                built = self._build(alternative, scope, join_path(path, keyword, index), trail)
                if built is not None:
                    objects.append(built)
            definition['objects'] = objects

        all_props: Dict[str, Any] = dict(definition.get('allProps') or {})
        additional = schema.get('additionalProperties')
        additional_path = join_path(path, 'additionalProperties')

        if is_mapping(schema.get('properties')):
            if is_closed(schema):
                # A closed object exposes exactly its own properties
                all_props = {}
            all_props.update(self._define_properties(schema['properties'], scope, join_path(path, 'properties'), trail))
            if is_mapping(additional):
                all_props.update(self._define_properties(additional_property_map(additional), scope, additional_path, trail))

        # Catch-all properties are shared by every oneOf/anyOf branch
        if is_mapping(additional) and definition['objects']:
            shared = self._define_properties(additional_property_map(additional), scope, additional_path, trail)
            definition['objects'] = [
                {**obj, 'allProps': {**(obj.get('allProps') or {}), **shared}}
                for obj in definition['objects']
            ]

        items = schema.get('items')
        if is_mapping(items):
            items_path = join_path(path, 'items')
            if is_closed(items):
                all_props = {}
            all_props.update(self._define_properties(items.get('properties'), scope, join_path(items_path, 'properties'), trail))
            if is_mapping(items.get('additionalProperties')):
                all_props.update(self._define_properties(
                    additional_property_map(items['additionalProperties']),
                    scope,
                    join_path(items_path, 'additionalProperties'),
                    trail,
                ))

        return self._finalize(schema, scope, path, definition, all_props, required)

    def _fold_all_of(self, schema, scope, path, trail, definition, required):
        closed = False
        hidden: List[str] = []
        for index, member in enumerate(schema['allOf']):
            if not is_mapping(member):
                continue
            if is_sequence(member.get('required')):
                required = required + list(member['required'])
            hidden.extend(hidden_property_names(member))
            member_path = join_path(path, 'allOf', index)

            if is_closed(member):
                logger.debug(f"Closed allOf member at {member_path} replaces the merged definition")
                definition = self._build(member, scope, member_path, trail) or self._skeleton()
                closed = True
            elif not closed:
                built = self._build(member, scope, member_path, trail)
                if built is not None:
                    definition = merge_definitions(definition, built)

        if hidden:
            logger.debug(f"Hiding allOf properties at {path}: {', '.join(hidden)}")
            for key in ('allProps', 'requiredProps', 'optionalProps'):
                definition[key] = without_keys(definition.get(key), hidden)
        return definition, required

    def _finalize(self, schema, scope, path, definition, all_props, required) -> Definition:
        required_names = {name for name in required if isinstance(name, str)}

        definition['allProps'] = all_props
        definition['title'] = schema.get('title')
        definition['description'] = schema.get('description')
        definition['enum'] = schema.get('enum')
        definition['requiredProps'] = {k: v for k, v in all_props.items() if k in required_names} or None
        definition['optionalProps'] = {k: v for k, v in all_props.items() if k not in required_names} or None
        definition['id'] = self._identifier(path)
        definition['_original'] = schema

        example = example_extractor.extract(schema, scope, settings=self.settings)
        definition['example'] = self._format(example, schema)

        if not all_props:
            del definition['allProps']
        return definition

    def _define_properties(self, properties: Any, scope: Any, path: str, trail: Trail) -> Dict[str, Any]:
        return {
            name: self._define_property(prop, scope, join_path(path, name), trail)
            for name, prop in visible_properties(properties).items()
        }

    def _define_property(self, prop: Any, scope: Any, path: str, trail: Trail) -> Optional[Definition]:
        if not is_mapping(prop) or is_hidden(prop):
            return None

        inner = descend(prop, trail, self.settings.max_depth)
        keyword = variant_keyword(prop)
        items = prop.get('items')
        definition: Definition = {}
        resolved = False

        if is_sequence(prop.get('allOf')):
            # Resolve composed properties so nested `properties` surface as well
            definition = self._build(prop, scope, path, trail) or {}
            resolved = True
        elif keyword is not None:
            definition[keyword] = self._define_alternatives(prop[keyword], keyword, definition, scope, path, inner)
        elif is_mapping(prop.get('properties')):
            definition['properties'] = self._define_properties(prop['properties'], scope, join_path(path, 'properties'), inner)
        elif is_mapping(items) and is_mapping(items.get('properties')):
            definition['properties'] = self._define_properties(
                items['properties'], scope, join_path(path, 'items', 'properties'), inner
            )

        if is_sequence(prop.get('enum')):
            definition['type'] = enum_value_type(prop['enum'])
        else:
            definition['type'] = prop.get('type')

        if 'example' not in definition:
            example = self.get_example_from_property(prop, scope)
            if example is not None:
                definition['example'] = example

        if not resolved:
            built = self._build(prop, scope, path, trail)
            for key, value in (built or {}).items():
                definition.setdefault(key, value)
        return definition

    def _define_alternatives(self, alternatives, keyword, definition, scope, path, trail) -> List[Definition]:
        defined = []
        for index, alternative in enumerate(alternatives):
            alt_path = join_path(path, keyword, index)
            if is_mapping(alternative) and alternative.get('type') in _STRUCTURED_TYPES:
                built = self._build(alternative, scope, alt_path, trail)
            else:
                built = self._define_property(alternative, scope, alt_path, trail)
                # The first scalar alternative supplies the property's example
                if built is not None and 'example' not in definition and 'example' in built:
                    definition['example'] = built['example']
            if built is not None:
                defined.append(built)
        return defined


def build_object_definition(
    schema: Any,
    formatter: Optional[Formatter] = None,
    settings: Optional[ResolverSettings] = None,
) -> Optional[Definition]:
    """Shortcut for `SchemaResolver(formatter, settings).build(schema)`."""
    return SchemaResolver(formatter=formatter, settings=settings).build(schema)
