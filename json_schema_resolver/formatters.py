from __future__ import annotations

import json
from typing import Any, Callable, Optional, Protocol

from .config import ResolverSettings, get_settings

Replacer = Callable[[Any], Any]


class Formatter(Protocol):
    """Anything that can turn an example value into display text."""

    def format(self, value: Any, replacer: Optional[Replacer] = None, indent: Optional[int] = None) -> str:
        ...


class JSONFormatter:
    """JSON-style pretty printer.

    `replacer` is handed to `json.dumps` as its `default` hook for values json
    cannot encode. `indent=None` uses the formatter's own indentation and
    `indent=0` produces compact single-line output. Keys keep insertion order,
    so identical input always formats identically.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format(self, value: Any, replacer: Optional[Replacer] = None, indent: Optional[int] = None) -> str:
        if indent is None:
            indent = self.indent
        if not indent:
            return json.dumps(value, default=replacer, ensure_ascii=False, separators=(',', ':'))
        return json.dumps(value, default=replacer, ensure_ascii=False, indent=indent)


def default_formatter(settings: Optional[ResolverSettings] = None) -> JSONFormatter:
    """JSONFormatter using the configured example indentation."""
    settings = settings or get_settings()
    return JSONFormatter(indent=settings.example_indent)
