"""
Shared protocols for claude-transcript services.

This module contains Protocol definitions used across multiple services.
Pure parsing and coverage functions never log; services that touch the
filesystem report progress through LoggerProtocol.
"""

from __future__ import annotations

from typing import Protocol


class LoggerProtocol(Protocol):
    """
    Protocol for async logger - enables services to work with any logging implementation.

    Implementations:
    - CLILogger (cli/logger.py): Logs to stdout with optional verbose mode
    - NullLogger (below): No-op implementation for when logging is optional
    """

    async def info(self, message: str) -> None: ...
    async def warning(self, message: str) -> None: ...
    async def error(self, message: str) -> None: ...


class NullLogger:
    """
    No-op logger.

    TranscriptLoaderService falls back to it when the caller passes no
    logger, e.g. library use where only the parse results matter.
    """

    async def info(self, message: str) -> None:
        pass

    async def warning(self, message: str) -> None:
        pass

    async def error(self, message: str) -> None:
        pass
