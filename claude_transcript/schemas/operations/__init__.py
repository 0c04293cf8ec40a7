"""
Operation schemas for service results.

This package contains Pydantic models for results returned by the parser and
coverage services.
"""

from __future__ import annotations

from claude_transcript.schemas.operations.coverage import CoverageReport
from claude_transcript.schemas.operations.parse import (
    DecodeErrorDetail,
    DecodeFailure,
    ParsedLine,
    ParseError,
    ParseResult,
    RawEntry,
    RawParseResult,
    decode_failure_from_validation_error,
    format_location,
)

__all__ = [
    # Coverage
    'CoverageReport',
    # Parse
    'DecodeErrorDetail',
    'DecodeFailure',
    'ParsedLine',
    'ParseError',
    'ParseResult',
    'RawEntry',
    'RawParseResult',
    'decode_failure_from_validation_error',
    'format_location',
]
