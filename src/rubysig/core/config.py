"""Global configuration for rubysig.

This module provides centralized configuration management with support for
environment variables and sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class RubysigConfig(BaseSettings):
    """rubysig configuration settings.

    Values can be overridden via environment variables with RUBYSIG_ prefix.
    Example: RUBYSIG_DEFINITION_TERMINATOR="\\nend" overrides definition_terminator.
    """

    # Definition parsing
    definition_terminator: str = Field(
        default="; end",
        min_length=1,
        description="Text appended to a definition line to close it before parsing",
    )

    # Source handling
    source_encoding: str = Field(
        default="utf-8",
        description="Encoding used for Ruby source text and node text decoding",
    )

    model_config = {
        "env_prefix": "RUBYSIG_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_config() -> RubysigConfig:
    """Get cached configuration instance.

    Returns:
        RubysigConfig singleton instance.
    """
    return RubysigConfig()


def reload_config() -> RubysigConfig:
    """Reload configuration (clears cache).

    Returns:
        Fresh RubysigConfig instance.
    """
    get_config.cache_clear()
    return get_config()
