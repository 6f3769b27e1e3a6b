from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from . import curl
from .errors import SchemaLoadError, SchemaResolverError
from .example_extractor import extract
from .flattening import definition_to_rows, rows_to_table, strip_back_references
from .formatters import default_formatter
from .io_utils import load_schema, parse_schema_text
from .logging_utils import get_logger
from .object_definition import SchemaResolver

logger = get_logger(__name__)

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def load_schema_handler(file_obj) -> Tuple[Optional[Dict[str, Any]], str, str]:
    if file_obj is None:
        return None, "No file uploaded.", ""

    try:
        schema = load_schema(file_obj)
    except SchemaLoadError as e:
        return None, f"Error loading schema: {str(e)}", ""

    return schema, "Schema loaded.", json.dumps(schema, indent=2)


def parse_schema_text_handler(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    try:
        schema = parse_schema_text(text)
    except SchemaLoadError as e:
        return None, f"Error parsing schema: {str(e)}"
    return schema, "Schema parsed."


def resolve_schema_handler(schema) -> Tuple[Any, str, List[List[Any]], str]:
    """Definition (display-safe), example text, property table and status for a schema."""
    if schema is None:
        return None, "", [], "No schema loaded."

    try:
        definition = SchemaResolver().build(schema)
    except SchemaResolverError as e:
        logger.warning(f"Resolution failed: {e}")
        return None, "", [], f"Error resolving schema: {str(e)}"

    if definition is None:
        return None, "", [], "Schema is marked noDisplay; nothing to document."

    rows = definition_to_rows(definition)
    prop_count = len(definition.get('allProps') or {})
    status = f"Resolved {prop_count} top-level properties, {len(definition['objects'])} variants."
    return strip_back_references(definition), definition['example'], rows_to_table(rows), status


def curl_handler(schema, uri: str, method: str, headers_text: str) -> Tuple[str, str]:
    if not uri or not uri.strip():
        return "", "Enter a request URI."

    headers: Dict[str, Any] = {}
    if headers_text and headers_text.strip():
        try:
            headers = json.loads(headers_text)
        except json.JSONDecodeError as e:
            return "", f"Headers must be a JSON object: {str(e)}"
        if not isinstance(headers, dict):
            return "", "Headers must be a JSON object."

    data = None
    if schema is not None:
        try:
            data = extract(schema)
        except SchemaResolverError as e:
            return "", f"Error building example payload: {str(e)}"

    command = curl.generate(uri.strip(), method or "GET", headers, data, formatter=default_formatter())
    return command, "cURL command generated."
