"""Service layer for transcript parsing, coverage validation and description."""

from claude_transcript.services.coverage import (
    check_entry_coverage,
    check_transcript_coverage,
    find_missing_fields,
    generalize_path,
    round_trip,
    summarize_missing_fields,
)
from claude_transcript.services.describe import describe, entry_label, format_json_line_for_debug, to_debug_json
from claude_transcript.services.parser import (
    TranscriptLoaderService,
    iter_transcript,
    parse_transcript,
    parse_transcript_files,
    parse_transcript_line,
    parse_transcript_strict,
    parse_transcript_with_raw,
)

__all__ = [
    'TranscriptLoaderService',
    'check_entry_coverage',
    'check_transcript_coverage',
    'describe',
    'entry_label',
    'find_missing_fields',
    'format_json_line_for_debug',
    'generalize_path',
    'iter_transcript',
    'parse_transcript',
    'parse_transcript_files',
    'parse_transcript_line',
    'parse_transcript_strict',
    'parse_transcript_with_raw',
    'round_trip',
    'summarize_missing_fields',
    'to_debug_json',
]
