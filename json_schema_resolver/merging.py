from __future__ import annotations

from typing import Any, Dict, Mapping

# Keys holding references into the caller's schema; never merged into.
BACK_REFERENCE_KEYS = frozenset({'_original'})


def merge_definitions(target: Mapping[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    """Right-biased deep merge returning a new dict.

    Lists are concatenated, mappings merged recursively, everything else is
    overwritten by `source`. Neither argument is modified.
    """
    merged: Dict[str, Any] = dict(target)
    for key, value in source.items():
        current = merged.get(key)
        if key in BACK_REFERENCE_KEYS:
            merged[key] = value
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = current + value
        elif isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_definitions(current, value)
        else:
            merged[key] = value
    return merged


def without_keys(mapping: Any, keys) -> Any:
    """Copy of `mapping` minus `keys`; None and non-mappings pass through."""
    if not isinstance(mapping, Mapping):
        return mapping
    drop = set(keys)
    return {k: v for k, v in mapping.items() if k not in drop}
