from __future__ import annotations

import hashlib
from typing import List

ROOT_PATH = '#'
MAX_IDENTIFIER = 1000000000


def escape_path_segment(segment) -> str:
    """Escape a single key segment for JSON-pointer style paths.

    - '~' is escaped as '~0' first, so an escaped '/' cannot be confused with it.
    - '/' is escaped as '~1' so keys like 'application/json' remain one segment.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('~', '~0').replace('/', '~1')


def unescape_path_segment(segment: str) -> str:
    if segment is None:
        return ''
    return segment.replace('~1', '/').replace('~0', '~')


def join_path(parent: str, *segments) -> str:
    """Append escaped segments to a path: join_path('#', 'properties', 'a/b') -> '#/properties/a~1b'."""
    base = parent or ROOT_PATH
    for segment in segments:
        base = f"{base}/{escape_path_segment(segment)}"
    return base


def split_path(path: str) -> List[str]:
    """Split a path on '/' and unescape each segment. The leading '#' is dropped."""
    if path is None:
        return []
    if not isinstance(path, str):
        path = str(path)
    parts = path.split('/')
    if parts and parts[0] == ROOT_PATH:
        parts = parts[1:]
    return [unescape_path_segment(p) for p in parts if p != '']


def path_identifier(path: str) -> str:
    """Stable identifier in the 0..1,000,000,000 range derived from a structural path."""
    digest = hashlib.sha1((path or ROOT_PATH).encode('utf-8')).hexdigest()
    return str(int(digest, 16) % (MAX_IDENTIFIER + 1))
