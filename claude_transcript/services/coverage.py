"""
Coverage validation - find wire fields the typed models silently drop.

Transcript models ignore unknown keys (TolerantModel), so a field added
upstream decodes fine and simply disappears. This module surfaces those
fields: it serializes the parsed entry back to JSON and walks the raw line
and the round-tripped tree in lock-step, recording every raw key the typed
side does not have.

The comparison is one-directional and existence-only:
- only keys present in raw but absent after round-trip are reported
- values are never compared; a field present on both sides is covered even
  if the values differ
- keys the typed side adds are never reported

Path format:
    extra                  - key at the root
    message.unknownNested  - nested key
    items.[0].extra        - key inside array element 0
    items.[2]              - raw array element with no typed counterpart

Round-trip serialization:
- Uses model_dump(exclude_unset=True, mode='json')
- Modeled fields present on the wire are re-emitted, explicit nulls included
- A field that serializes away is indistinguishable from an unmodeled one,
  so it is reported; those are exactly the fields worth deciding on
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable

import orjson
from pydantic_core import PydanticSerializationError

from claude_transcript.exceptions import CoverageSerializationError
from claude_transcript.schemas.operations.coverage import CoverageReport
from claude_transcript.schemas.operations.parse import RawParseResult
from claude_transcript.schemas.transcript import TranscriptEntry
from claude_transcript.schemas.types import JsonValue
from claude_transcript.services.parser import parse_transcript_with_raw

# ==============================================================================
# Tree Walk
# ==============================================================================


def _is_container(value: JsonValue) -> bool:
    return isinstance(value, (dict, list))


def find_missing_fields(raw: JsonValue, typed: JsonValue, path_prefix: str = '') -> list[str]:
    """
    Recursively find raw keys with no counterpart in the typed tree.

    Args:
        raw: Decoded raw JSON (the original line)
        typed: Decoded round-tripped JSON (the parsed entry, re-serialized)
        path_prefix: Prefix for reported paths (ends with '.' when non-empty)

    Returns:
        Missing paths in raw traversal order
    """
    missing: list[str] = []

    if isinstance(raw, dict) and isinstance(typed, dict):
        for key, raw_value in raw.items():
            if key not in typed:
                missing.append(f'{path_prefix}{key}')
                continue
            typed_value = typed[key]
            if _is_container(raw_value) or _is_container(typed_value):
                missing.extend(find_missing_fields(raw_value, typed_value, f'{path_prefix}{key}.'))

    elif isinstance(raw, list) and isinstance(typed, list):
        for index, raw_item in enumerate(raw):
            if index >= len(typed):
                missing.append(f'{path_prefix}[{index}]')
                continue
            missing.extend(find_missing_fields(raw_item, typed[index], f'{path_prefix}[{index}].'))

    # Scalars and shape mismatches: existence only, nothing to report
    return missing


# ==============================================================================
# Entry Coverage
# ==============================================================================


def round_trip(entry: TranscriptEntry) -> JsonValue:
    """
    Serialize a parsed entry back to a JSON tree.

    Raises:
        CoverageSerializationError: If the entry cannot be serialized
    """
    try:
        return entry.model_dump(mode='json', exclude_unset=True)
    except PydanticSerializationError as e:
        raise CoverageSerializationError(entry.kind, str(e)) from e


def check_entry_coverage(raw_line: str, entry: TranscriptEntry, line_number: int = 0) -> CoverageReport:
    """
    Report which fields of a raw line the parsed entry does not carry.

    Args:
        raw_line: The exact JSON text the entry was parsed from
        entry: The parsed entry
        line_number: Line number to record on the report

    Returns:
        CoverageReport (complete when nothing is missing)

    Raises:
        CoverageSerializationError: If the entry cannot be round-tripped.
            Never folded into an empty or partial report.
    """
    raw = orjson.loads(raw_line)
    typed = round_trip(entry)
    return CoverageReport(
        line_number=line_number,
        entry_kind=entry.kind,
        missing_fields=find_missing_fields(raw, typed),
    )


def check_transcript_coverage(text: str | bytes) -> tuple[RawParseResult, list[CoverageReport]]:
    """
    Parse a transcript and check coverage of every entry that decoded.

    Returns:
        The raw-preserving parse result, and one report per entry with gaps
        (entries with complete coverage are left out), in line order
    """
    parsed = parse_transcript_with_raw(text)
    reports: list[CoverageReport] = []

    for raw_entry in parsed.entries:
        report = check_entry_coverage(raw_entry.raw_line, raw_entry.entry, raw_entry.line_number)
        if not report.complete:
            reports.append(report)

    return parsed, reports


# ==============================================================================
# Grouping
# ==============================================================================

_INDEX_PATTERN = re.compile(r'\[\d+\]')


def generalize_path(path: str) -> str:
    """
    Replace array indices with * so gaps at different positions group together.

    Example:
        'message.content.[3].citations' -> 'message.content.[*].citations'
    """
    return _INDEX_PATTERN.sub('[*]', path)


def summarize_missing_fields(reports: Iterable[CoverageReport]) -> Counter[str]:
    """
    Count missing paths across reports, with array indices generalized.

    A path counts once per entry even if it is missing at several indices of
    the same entry. Use Counter.most_common() for frequency order.
    """
    counts: Counter[str] = Counter()
    for report in reports:
        counts.update({generalize_path(path) for path in report.missing_fields})
    return counts
