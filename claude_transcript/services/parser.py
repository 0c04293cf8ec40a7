"""
Transcript parser service - line-oriented JSONL parsing.

Converts transcript text into typed entries one line at a time. A line that
is not valid JSON, or that matches no entry shape, is recorded as a
ParseError and parsing continues with the next line (isolate-and-continue):
a transcript with 9,999 good lines and 1 corrupt line yields 9,999 entries
and exactly 1 error.

Line numbers are 1-based and count blank lines, so error positions match
what an editor shows. Empty lines are skipped without producing an entry
or an error. A line holding only whitespace is not empty and fails to decode.

Files are read as bytes and decoded per line, so an invalid UTF-8 sequence
fails only the line that contains it.

The pure functions here never touch the filesystem or log. File loading
lives in TranscriptLoaderService and parse_transcript_files.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import orjson
import pydantic

from claude_transcript.exceptions import LineDecodeError, TranscriptFileNotFoundError, TranscriptParseError
from claude_transcript.protocols import LoggerProtocol, NullLogger
from claude_transcript.schemas.operations.parse import (
    DecodeFailure,
    ParsedLine,
    ParseError,
    ParseResult,
    RawEntry,
    RawParseResult,
    decode_failure_from_validation_error,
)
from claude_transcript.schemas.transcript import TranscriptEntry, validate_entry

# ==============================================================================
# Single Line
# ==============================================================================


def parse_transcript_line(line: str | bytes) -> TranscriptEntry:
    """
    Decode one transcript line into a typed entry.

    Args:
        line: One JSON object, without its line terminator. Bytes are decoded
            as UTF-8 by orjson; invalid UTF-8 is a JSON failure.

    Returns:
        The validated entry

    Raises:
        LineDecodeError: If the line is not JSON or matches no entry shape.
            The attached DecodeFailure says which.
    """
    try:
        data = orjson.loads(line)
    except orjson.JSONDecodeError as e:
        failure = DecodeFailure(
            kind='json',
            message=str(e),
            line=e.lineno,
            column=e.colno,
            offset=e.pos,
        )
        raise LineDecodeError(failure) from e

    try:
        return validate_entry(data)
    except pydantic.ValidationError as e:
        raise LineDecodeError(decode_failure_from_validation_error(e)) from e


# ==============================================================================
# Whole Transcript
# ==============================================================================


def split_lines(text: str | bytes) -> list[str] | list[bytes]:
    """
    Split transcript text on LF only.

    str.splitlines() also breaks on characters such as U+2028, which JSON
    allows unescaped inside strings.
    """
    if isinstance(text, bytes):
        return text.split(b'\n')
    return text.split('\n')


def _strip_terminator(line: str | bytes) -> str | bytes:
    if isinstance(line, bytes):
        return line.rstrip(b'\r\n')
    return line.rstrip('\r\n')


def _line_text(line: str | bytes) -> str:
    """Line text for reporting; undecodable bytes become U+FFFD."""
    if isinstance(line, bytes):
        return line.decode('utf-8', errors='replace')
    return line


def iter_transcript(source: str | bytes | Iterable[str] | Iterable[bytes]) -> Iterator[ParsedLine]:
    """
    Parse a transcript lazily, yielding one outcome per non-empty line.

    Outcomes are yielded in input order: a RawEntry for each line that
    decodes, a ParseError for each line that does not. Closing the generator
    stops parsing; no state outlives it.

    Args:
        source: Full transcript text or bytes, or any iterable of lines (e.g.
            an open file, text or binary). Trailing CR/LF on each line is
            ignored.
    """
    lines = split_lines(source) if isinstance(source, (str, bytes)) else source

    for line_number, line in enumerate(lines, 1):
        line = _strip_terminator(line)
        if not line:
            continue

        try:
            entry = parse_transcript_line(line)
        except LineDecodeError as e:
            yield ParseError(line_number=line_number, line_content=_line_text(line), error=e.failure)
            continue

        yield RawEntry(line_number=line_number, raw_line=_line_text(line), entry=entry)


def parse_transcript_with_raw(text: str | bytes) -> RawParseResult:
    """
    Parse a transcript, keeping each entry's raw JSON text.

    Used by coverage validation, which needs the raw line to compare against
    the round-tripped entry.
    """
    entries: list[RawEntry] = []
    errors: list[ParseError] = []

    for outcome in iter_transcript(text):
        if isinstance(outcome, ParseError):
            errors.append(outcome)
        else:
            entries.append(outcome)

    return RawParseResult(entries=entries, errors=errors)


def parse_transcript(text: str | bytes) -> ParseResult:
    """
    Parse a transcript into entries and errors (isolate-and-continue).

    Args:
        text: Full transcript text or raw file bytes (one JSON object per line)

    Returns:
        ParseResult with entries and errors, each in input line order
    """
    return parse_transcript_with_raw(text).to_parse_result()


def parse_transcript_strict(text: str | bytes) -> list[TranscriptEntry]:
    """
    Parse a transcript, failing on the first bad line.

    Raises:
        TranscriptParseError: For the first line that does not decode
    """
    entries: list[TranscriptEntry] = []
    for outcome in iter_transcript(text):
        if isinstance(outcome, ParseError):
            raise TranscriptParseError(outcome)
        entries.append(outcome.entry)
    return entries


# ==============================================================================
# Files
# ==============================================================================


def _parse_file(path: Path) -> RawParseResult:
    """Read and parse one transcript file (module-level so worker processes can pickle it)."""
    return parse_transcript_with_raw(path.read_bytes())


def parse_transcript_files(paths: Sequence[Path], *, workers: int = 1) -> list[tuple[Path, RawParseResult]]:
    """
    Parse several transcript files, optionally in parallel.

    Files are independent, so each is parsed in its own worker process.
    Results are stored by input index, so the returned order always matches
    `paths` regardless of which worker finishes first.

    Args:
        paths: Transcript files to parse
        workers: Worker processes (1 parses sequentially in-process)

    Returns:
        (path, result) pairs in input order

    Raises:
        TranscriptFileNotFoundError: If any path is not an existing file
            (checked before any parsing starts)
    """
    for path in paths:
        if not path.is_file():
            raise TranscriptFileNotFoundError(path)

    results: list[RawParseResult | None] = [None] * len(paths)

    if workers <= 1 or len(paths) <= 1:
        for index, path in enumerate(paths):
            results[index] = _parse_file(path)
    else:
        with ProcessPoolExecutor(max_workers=min(workers, len(paths))) as executor:
            futures = {executor.submit(_parse_file, path): index for index, path in enumerate(paths)}
            for future in as_completed(futures):
                results[futures[future]] = future.result()

    paired: list[tuple[Path, RawParseResult]] = []
    for path, result in zip(paths, results, strict=True):
        assert result is not None
        paired.append((path, result))
    return paired


# ==============================================================================
# Transcript Loader Service
# ==============================================================================


class TranscriptLoaderService:
    """
    Service for loading transcript JSONL files.

    Reads files and parses them with parse_transcript, reporting progress and
    unparsable lines through the logger. Parse errors are returned, not raised.
    """

    async def load_transcript_files(
        self, transcript_files: Sequence[Path], logger: LoggerProtocol | None = None
    ) -> dict[str, ParseResult]:
        """
        Load and parse transcript files.

        Args:
            transcript_files: List of JSONL file paths
            logger: Logger instance (NullLogger when omitted)

        Returns:
            Dict mapping file path (as given) to its parse result, in input order

        Raises:
            TranscriptFileNotFoundError: If a file does not exist
        """
        logger = logger or NullLogger()
        files_data: dict[str, ParseResult] = {}

        for file_path in transcript_files:
            await logger.info(f'Loading {file_path.name}')

            result = await self._parse_transcript_file(file_path, logger)
            files_data[str(file_path)] = result

            await logger.info(f'Loaded {len(result.entries)} entries from {file_path.name}')

        return files_data

    async def _parse_transcript_file(self, file_path: Path, logger: LoggerProtocol) -> ParseResult:
        """
        Parse a single transcript file.

        Args:
            file_path: Path to JSONL file
            logger: Logger instance

        Returns:
            ParseResult for the file
        """
        if not file_path.is_file():
            raise TranscriptFileNotFoundError(file_path)

        result = parse_transcript(file_path.read_bytes())

        if result.errors:
            await logger.warning(f'{len(result.errors)} lines in {file_path.name} could not be parsed')

        return result
