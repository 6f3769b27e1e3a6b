"""Resolver settings.

Resolution order: explicit arguments > env vars (JSON_SCHEMA_RESOLVER_*) > .env file > defaults.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResolverSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JSON_SCHEMA_RESOLVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Formatting ---
    example_indent: int = Field(default=2, ge=0)
    # cURL payloads are written on a single line unless overridden.
    curl_data_indent: int = Field(default=0, ge=0)

    # --- Identifiers ---
    # "random" draws a fresh UI key per build; "path" hashes the node's structural path.
    id_strategy: Literal["random", "path"] = "random"

    # --- Recursion ---
    max_depth: int = Field(default=64, ge=1)

    # --- Examples ---
    include_additional_properties: bool = False

    # --- Logging ---
    log_level: str = "WARNING"


@lru_cache(maxsize=1)
def get_settings() -> ResolverSettings:
    """Return the global settings singleton."""
    return ResolverSettings()
