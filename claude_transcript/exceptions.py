"""
Shared exceptions for claude-transcript.

Domain-specific exceptions used across services.

Exception Hierarchy:
    TranscriptError (base)
    ├── LineDecodeError (a single line failed to decode)
    ├── TranscriptParseError (fail-fast parse hit a bad line)
    ├── CoverageSerializationError (round-trip of a parsed entry failed)
    └── TranscriptFileNotFoundError (input file does not exist)
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from claude_transcript.schemas.operations.parse import DecodeFailure, ParseError


class TranscriptError(Exception):
    """Base exception for all claude-transcript errors."""


class LineDecodeError(TranscriptError):
    """Raised when one transcript line is not valid JSON or matches no entry shape."""

    def __init__(self, failure: DecodeFailure) -> None:
        self.failure = failure
        super().__init__(failure.message)


class TranscriptParseError(TranscriptError):
    """Raised by the fail-fast parser for the first line that does not decode."""

    def __init__(self, error: ParseError) -> None:
        self.error = error
        super().__init__(str(error))

    @property
    def line_number(self) -> int:
        return self.error.line_number


class CoverageSerializationError(TranscriptError):
    """Raised when a parsed entry cannot be serialized back to JSON.

    Distinct from a coverage finding: a report with missing fields means the
    models dropped wire data, this error means the comparison never ran.
    """

    def __init__(self, entry_kind: str, reason: str) -> None:
        self.entry_kind = entry_kind
        self.reason = reason
        super().__init__(f'Failed to serialize {entry_kind} entry for coverage check: {reason}')


class TranscriptFileNotFoundError(TranscriptError):
    """Raised when a transcript file passed by the caller does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'Transcript file not found: {path}')
