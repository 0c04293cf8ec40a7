"""Configuration for claude-transcript (pydantic-settings, lazily loaded)."""

from claude_transcript.config.base import ENV_PREFIX, BaseTranscriptSettings, get_settings, lazy_settings
from claude_transcript.config.cli import CliSettings

__all__ = [
    'ENV_PREFIX',
    'BaseTranscriptSettings',
    'CliSettings',
    'get_settings',
    'lazy_settings',
]
