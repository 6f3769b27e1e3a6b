from __future__ import annotations

from typing import Any, Mapping


def get_value_by_path(data: Any, path: str, default: Any = None, sep: str = '.') -> Any:
    """Retrieve a value from nested mappings using a dot-notation path.

    Dotted keys (e.g. 'x.y' stored as one key) are matched before descending,
    so 'generator.includeAdditionalProperties' works both nested and flat.
    Anything that is not a mapping along the way yields `default`.
    """
    if not path:
        return default
    keys = path.split(sep)
    val = data
    i = 0
    while i < len(keys):
        if not isinstance(val, Mapping):
            return default

        key = keys[i]
        if key in val:
            val = val[key]
            i += 1
            continue

        # Fallback for unsplit dotted keys
        matched = False
        candidate = key
        for j in range(i + 1, len(keys)):
            candidate = candidate + sep + keys[j]
            if candidate in val:
                val = val[candidate]
                i = j + 1
                matched = True
                break
        if not matched:
            return default

    return val
