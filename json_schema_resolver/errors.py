from __future__ import annotations


class SchemaResolverError(Exception):
    """Base class for errors raised while deriving definitions or examples."""


class MissingSchemaError(SchemaResolverError, ValueError):
    """A falsy schema component was handed to the example extractor."""

    def __init__(self, message: str = 'No schema received to generate example data'):
        super().__init__(message)


class ExampleFormattingError(SchemaResolverError):
    """The formatter could not stringify the example of a schema node."""


class SchemaCycleError(SchemaResolverError, RecursionError):
    """A schema node re-entered its own resolution path, or nesting ran too deep."""

    def __init__(self, location: str, reason: str = 'node revisited'):
        self.location = location
        self.reason = reason
        super().__init__(f"schema cycle detected at {location} ({reason})")


class SchemaLoadError(SchemaResolverError, ValueError):
    """A schema document could not be read or is not a JSON object."""
