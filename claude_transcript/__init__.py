"""
claude-transcript: typed parsing and schema-coverage validation for transcript JSONL logs.

Public operations:
- parse_transcript_line: one line -> entry (raises LineDecodeError)
- parse_transcript: text -> ParseResult (entries + errors, line order)
- parse_transcript_with_raw: text -> RawParseResult (entries keep raw JSON)
- check_entry_coverage: raw line + entry -> CoverageReport
- describe: entry -> one-line description
"""

from __future__ import annotations

from claude_transcript.exceptions import (
    CoverageSerializationError,
    LineDecodeError,
    TranscriptError,
    TranscriptFileNotFoundError,
    TranscriptParseError,
)
from claude_transcript.schemas.operations import (
    CoverageReport,
    DecodeFailure,
    ParseError,
    ParseResult,
    RawEntry,
    RawParseResult,
)
from claude_transcript.schemas.transcript import TranscriptEntry, TranscriptEntryAdapter
from claude_transcript.services import (
    check_entry_coverage,
    check_transcript_coverage,
    describe,
    find_missing_fields,
    iter_transcript,
    parse_transcript,
    parse_transcript_line,
    parse_transcript_strict,
    parse_transcript_with_raw,
)

__all__ = [
    # Exceptions
    'CoverageSerializationError',
    'LineDecodeError',
    'TranscriptError',
    'TranscriptFileNotFoundError',
    'TranscriptParseError',
    # Results
    'CoverageReport',
    'DecodeFailure',
    'ParseError',
    'ParseResult',
    'RawEntry',
    'RawParseResult',
    # Model
    'TranscriptEntry',
    'TranscriptEntryAdapter',
    # Operations
    'check_entry_coverage',
    'check_transcript_coverage',
    'describe',
    'find_missing_fields',
    'iter_transcript',
    'parse_transcript',
    'parse_transcript_line',
    'parse_transcript_strict',
    'parse_transcript_with_raw',
]
