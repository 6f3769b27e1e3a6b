"""cURL command strings for documented requests.

    >>> print(generate('http://x/y', 'POST', {'Content-Type': 'application/json'}, {'a': 1}))
    curl -X "POST" "http://x/y" \\
         -H "Content-Type: application/json" \\
         --data '{"a":1}'
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .config import ResolverSettings, get_settings
from .formatters import Formatter, JSONFormatter

HEADER_SEPARATOR = ': '
NEW_LINE = ' \\\n'
FLAG_INDENT = 5


def generate(
    uri: str,
    method: Optional[str] = None,
    headers: Optional[Mapping[str, Any]] = None,
    data: Any = None,
    formatter: Optional[Formatter] = None,
    settings: Optional[ResolverSettings] = None,
) -> str:
    """Build a cURL command.

    GET requests carry `data` as a query string; any other method sends it
    as a `--data` payload rendered by `formatter`.
    """
    method = (method or 'GET').upper()
    is_get = method == 'GET'

    if data is not None and is_get:
        uri += build_query_string(data)

    lines: List[str] = [' '.join(['curl', build_flag('X', method, 0), f'"{uri}"'])]

    for header, value in (headers or {}).items():
        lines.append(build_flag('H', f"{header}{HEADER_SEPARATOR}{_query_value(value)}", FLAG_INDENT))

    if data is not None and not is_get:
        lines.append(build_flag('-data', format_data(data, formatter, settings), FLAG_INDENT, "'"))

    return NEW_LINE.join(lines)


def format_data(data: Any, formatter: Optional[Formatter] = None, settings: Optional[ResolverSettings] = None) -> str:
    settings = settings or get_settings()
    formatter = formatter or JSONFormatter()
    return formatter.format(data, None, settings.curl_data_indent)


def build_flag(flag_type: str, value: str, indents: int, quote: str = '"') -> str:
    """build_flag('H', 'Accept: */*', 5) -> '     -H "Accept: */*"'"""
    return f"{' ' * indents}-{flag_type} {quote}{value}{quote}"


def build_query_string(data: Any, no_query_string: bool = False) -> str:
    """Serialise a mapping (or list, keyed by index) as '?k1=v1&k2=v2'.

    With `no_query_string` the first separator is '&', for appending to a
    URI that already has a query.
    """
    first = '&' if no_query_string else '?'
    if isinstance(data, Mapping):
        pairs = list(data.items())
    elif isinstance(data, (list, tuple)):
        pairs = list(enumerate(data))
    else:
        return ''
    return first + '&'.join(f"{key}={_query_value(value)}" for key, value in pairs)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return 'null'
    if isinstance(value, (list, tuple)):
        return ','.join(_query_value(v) for v in value)
    return str(value)
