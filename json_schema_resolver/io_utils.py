from __future__ import annotations

import json
from typing import Any, Dict

from .errors import SchemaLoadError


def read_json_content(file_obj) -> Any:
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise SchemaLoadError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            try:
                content = content.decode('utf-8')
            except UnicodeDecodeError as exc:
                raise SchemaLoadError(f"File is not valid UTF-8: {exc}") from exc
        return _loads(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as exc:
        raise SchemaLoadError(f"Cannot read {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SchemaLoadError(f"{path} is not valid UTF-8: {exc}") from exc
    return _loads(content)


def parse_schema_text(text: str) -> Dict[str, Any]:
    """Parse pasted schema text; the document root must be a JSON object."""
    if text is None or not text.strip():
        raise SchemaLoadError("No schema text provided.")
    return _require_object(_loads(text))


def load_schema(file_obj) -> Dict[str, Any]:
    return _require_object(read_json_content(file_obj))


def _loads(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Invalid JSON: {exc}") from exc


def _require_object(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Schema root must be a JSON object, got {type(data).__name__}.")
    return data
