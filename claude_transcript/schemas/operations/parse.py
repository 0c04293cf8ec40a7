"""
Parse operation schemas.

Models for the results of parsing a transcript: per-line decode failures,
aggregate results, and raw-preserving pairs used by coverage validation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import pydantic

from claude_transcript.schemas.base import StrictModel
from claude_transcript.schemas.transcript import TranscriptEntry


class DecodeErrorDetail(StrictModel):
    """One schema violation reported by Pydantic for a line."""

    location: str  # Dot-separated path, e.g. 'message.content.0.type'
    message: str
    error_type: str  # Pydantic error type, e.g. 'missing', 'union_tag_invalid'


class DecodeFailure(StrictModel):
    """
    Why a line did not decode.

    kind='json': the line is not valid JSON. line/column/offset locate the
    syntax error within the line (1-based line and column, 0-based offset).

    kind='schema': the line is valid JSON but matches no entry shape. details
    lists every violation.
    """

    kind: Literal['json', 'schema']
    message: str
    line: int | None = None
    column: int | None = None
    offset: int | None = None
    details: Sequence[DecodeErrorDetail] = ()


class ParseError(StrictModel):
    """A transcript line that failed to decode."""

    line_number: int  # 1-indexed, counting blank lines
    line_content: str  # Line text without terminator (invalid UTF-8 replaced by U+FFFD)
    error: DecodeFailure

    def __str__(self) -> str:
        return f'Failed to parse transcript at line {self.line_number}: {self.error.message}'


class RawEntry(StrictModel):
    """A parsed entry paired with the exact JSON text it came from."""

    line_number: int
    raw_line: str
    entry: TranscriptEntry


class ParseResult(StrictModel):
    """Entries and errors of one transcript, both in input line order."""

    entries: Sequence[TranscriptEntry] = ()
    errors: Sequence[ParseError] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def total_lines(self) -> int:
        """Number of non-empty lines seen."""
        return len(self.entries) + len(self.errors)


class RawParseResult(StrictModel):
    """Raw-preserving parse result for coverage validation."""

    entries: Sequence[RawEntry] = ()
    errors: Sequence[ParseError] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def total_lines(self) -> int:
        return len(self.entries) + len(self.errors)

    def to_parse_result(self) -> ParseResult:
        """Drop the raw text, keeping entries and errors."""
        return ParseResult(entries=[raw.entry for raw in self.entries], errors=self.errors)


# Per-line outcome yielded by the streaming parser
ParsedLine = RawEntry | ParseError


def format_location(loc: tuple[str | int, ...]) -> str:
    """Join a Pydantic error location into a dotted path."""
    return '.'.join(str(part) for part in loc) or '(root)'


def decode_failure_from_validation_error(exc: pydantic.ValidationError) -> DecodeFailure:
    """Build a schema DecodeFailure from a Pydantic ValidationError."""
    details = [
        DecodeErrorDetail(
            location=format_location(err['loc']),
            message=err['msg'],
            error_type=err['type'],
        )
        for err in exc.errors(include_url=False)
    ]
    count = len(details)
    noun = 'error' if count == 1 else 'errors'
    summary = '; '.join(f'{d.location}: {d.message}' for d in details[:3])
    if count > 3:
        summary += f'; ... and {count - 3} more'
    return DecodeFailure(
        kind='schema',
        message=f'{count} validation {noun}: {summary}',
        details=details,
    )
