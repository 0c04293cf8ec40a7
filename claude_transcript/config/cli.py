"""
CLI configuration.

Extends base configuration with CLI-specific settings.
"""

from __future__ import annotations

from claude_transcript.config.base import BaseTranscriptSettings, lazy_settings


class CliSettings(BaseTranscriptSettings):
    """CLI-specific configuration."""

    pass  # Empty for now, room for CLI-specific settings


# Module-level singleton (lazy-loaded)
settings = lazy_settings(CliSettings)
