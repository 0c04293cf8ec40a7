"""
Base configuration for claude-transcript.

Shared settings and helper functions for the CLI and services.
"""

from __future__ import annotations

import os
import pathlib
from typing import TypeVar

import lazy_object_proxy
import pydantic
import pydantic_settings

T = TypeVar('T', bound='BaseTranscriptSettings')

ENV_PREFIX = 'CLAUDE_TRANSCRIPT_'


def _default_workers() -> int:
    return min(os.cpu_count() or 1, 8)


class BaseTranscriptSettings(pydantic_settings.BaseSettings):
    """Shared configuration across transcript tools."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file_encoding='utf-8',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='forbid',  # Reject unknown settings
    )

    # Application metadata
    APP_NAME: str = 'claude-transcript'
    VERSION: str = '0.1.0'

    # Display
    PREVIEW_LENGTH: int = 50  # Characters of user content in entry descriptions
    SHOW_ERROR_LIMIT: int = 0  # Parse errors printed per file by `show` (0 = all)

    # Parallel verification
    MAX_WORKERS: int = pydantic.Field(default_factory=_default_workers)

    @pydantic.field_validator('PREVIEW_LENGTH')
    @classmethod
    def validate_preview_length(cls, v: int) -> int:
        """Validate preview length is positive."""
        if v < 1:
            raise ValueError('PREVIEW_LENGTH must be at least 1')
        return v

    @pydantic.field_validator('SHOW_ERROR_LIMIT')
    @classmethod
    def validate_show_error_limit(cls, v: int) -> int:
        """Validate error limit is not negative."""
        if v < 0:
            raise ValueError('SHOW_ERROR_LIMIT must be 0 (all) or positive')
        return v

    @pydantic.field_validator('MAX_WORKERS')
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        """Validate worker count is within process pool bounds."""
        if not 1 <= v <= 64:
            raise ValueError('MAX_WORKERS must be between 1-64')
        return v


def get_settings(settings_class: type[T], env_file: str | None = None) -> T:
    """
    Factory for creating settings with dynamic .env file loading.

    LOAD_ENV_FILE environment variable specifies custom .env file path.
    When unset, loads from environment variables only.

    Args:
        settings_class: Settings class to instantiate
        env_file: Optional path to .env file (overrides LOAD_ENV_FILE)

    Returns:
        Settings instance

    Raises:
        FileNotFoundError: If specified .env file doesn't exist
    """
    env_file_path = env_file or os.getenv('LOAD_ENV_FILE')

    if not env_file_path:
        return settings_class()  # No .env file, load from environment only

    resolved_path = pathlib.Path(env_file_path).resolve()
    if not resolved_path.exists():
        raise FileNotFoundError(f'Environment file not found: {resolved_path}')

    return settings_class(_env_file=resolved_path)


def lazy_settings(settings_class: type[T]) -> T:
    """
    Lazy settings - defers instantiation until first access.

    Args:
        settings_class: Settings class to instantiate

    Returns:
        Proxy that instantiates settings on first access
    """
    return lazy_object_proxy.Proxy(lambda: get_settings(settings_class))
