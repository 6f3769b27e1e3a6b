from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .merging import BACK_REFERENCE_KEYS

ROW_FIELDS = ('path', 'type', 'required', 'example', 'description')


def definition_to_rows(definition: Optional[Mapping[str, Any]], parent: str = '', sep: str = '.') -> List[Dict[str, Any]]:
    """Flatten a resolved definition into one row per property.

    Nested properties get dot paths ('address.city'); variant definitions
    (`objects`) are listed with a '[n]' marker.
    """
    rows: List[Dict[str, Any]] = []
    if not definition:
        return rows

    required = set((definition.get('requiredProps') or {}).keys())
    for name, prop in (definition.get('allProps') or {}).items():
        path = f"{parent}{sep}{name}" if parent else str(name)
        rows.extend(_property_rows(prop, path, name in required, sep))

    for index, variant in enumerate(definition.get('objects') or []):
        marker = f"{parent}[{index}]" if parent else f"[{index}]"
        rows.extend(definition_to_rows(variant, marker, sep))
    return rows


def _property_rows(prop: Any, path: str, required: bool, sep: str) -> List[Dict[str, Any]]:
    if not isinstance(prop, Mapping):
        return []
    rows = [{
        'path': path,
        'type': prop.get('type'),
        'required': required,
        'example': prop.get('example'),
        'description': prop.get('description'),
    }]
    nested = prop.get('properties')
    if isinstance(nested, Mapping):
        nested_required = set((prop.get('requiredProps') or {}).keys())
        for name, child in nested.items():
            rows.extend(_property_rows(child, f"{path}{sep}{name}", name in nested_required, sep))
    return rows


def strip_back_references(value: Any) -> Any:
    """Copy of a definition tree without `_original`, safe to serialise."""
    if isinstance(value, Mapping):
        return {k: strip_back_references(v) for k, v in value.items() if k not in BACK_REFERENCE_KEYS}
    if isinstance(value, list):
        return [strip_back_references(v) for v in value]
    return value


def rows_to_table(rows: List[Dict[str, Any]]) -> List[List[Any]]:
    """Rows as lists in ROW_FIELDS order, for table widgets."""
    return [[row.get(field) for field in ROW_FIELDS] for row in rows]
