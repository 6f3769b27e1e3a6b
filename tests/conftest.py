from __future__ import annotations

import pytest

from json_schema_resolver.config import ResolverSettings
from json_schema_resolver.object_definition import SchemaResolver


@pytest.fixture
def path_settings() -> ResolverSettings:
    """Settings with deterministic identifiers."""
    return ResolverSettings(id_strategy="path", example_indent=2, max_depth=64)


@pytest.fixture
def resolver(path_settings) -> SchemaResolver:
    return SchemaResolver(settings=path_settings)


@pytest.fixture
def user_schema() -> dict:
    return {
        "title": "User",
        "description": "A registered user",
        "type": "object",
        "required": ["name"],
        "properties": {
            "name": {"type": "string", "example": "Ada"},
            "age": {"type": "number", "example": 36},
            "password": {"type": "string", "noDisplay": True},
        },
    }
