"""Tests for the transcript parser service."""

from __future__ import annotations

import asyncio
import io
from pathlib import Path
from typing import Any

import orjson
import pytest

from claude_transcript.exceptions import LineDecodeError, TranscriptFileNotFoundError, TranscriptParseError
from claude_transcript.protocols import NullLogger
from claude_transcript.schemas.operations import ParseError, RawEntry
from claude_transcript.schemas.transcript import AssistantEntry, SummaryEntry, SystemEntry, UserEntry
from claude_transcript.services.parser import (
    TranscriptLoaderService,
    iter_transcript,
    parse_transcript,
    parse_transcript_files,
    parse_transcript_line,
    parse_transcript_strict,
    parse_transcript_with_raw,
)


def dumps(record: dict[str, Any]) -> str:
    return orjson.dumps(record).decode()


@pytest.fixture
def transcript(
    user_record: dict[str, Any],
    assistant_record: dict[str, Any],
    system_record: dict[str, Any],
    summary_record: dict[str, Any],
) -> str:
    return '\n'.join([dumps(user_record), dumps(assistant_record), dumps(system_record), dumps(summary_record)])


class RecordingLogger:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    async def info(self, message: str) -> None:
        self.messages.append(('info', message))

    async def warning(self, message: str) -> None:
        self.messages.append(('warning', message))

    async def error(self, message: str) -> None:
        self.messages.append(('error', message))


# ==============================================================================
# Single line
# ==============================================================================


class TestParseTranscriptLine:
    def test_valid_line(self, user_record: dict[str, Any]) -> None:
        entry = parse_transcript_line(dumps(user_record))

        assert isinstance(entry, UserEntry)
        assert entry.content == 'hello'

    def test_invalid_json_reports_position(self) -> None:
        with pytest.raises(LineDecodeError) as exc_info:
            parse_transcript_line('{"type": "user", ')

        failure = exc_info.value.failure
        assert failure.kind == 'json'
        assert failure.line == 1
        assert failure.column is not None
        assert failure.offset is not None
        assert failure.column == failure.offset + 1
        assert not failure.details

    def test_schema_failure_lists_violations(self, assistant_record: dict[str, Any]) -> None:
        del assistant_record['parentUuid']
        del assistant_record['message']['usage']

        with pytest.raises(LineDecodeError) as exc_info:
            parse_transcript_line(dumps(assistant_record))

        failure = exc_info.value.failure
        assert failure.kind == 'schema'
        assert failure.message.startswith('2 validation errors: ')
        locations = {detail.location for detail in failure.details}
        assert locations == {'assistant.parentUuid', 'assistant.message.assistant.usage'}
        assert {detail.error_type for detail in failure.details} == {'missing'}

    def test_json_array_is_a_schema_failure(self) -> None:
        with pytest.raises(LineDecodeError) as exc_info:
            parse_transcript_line('[1, 2, 3]')

        assert exc_info.value.failure.kind == 'schema'


# ==============================================================================
# Whole transcript
# ==============================================================================


class TestParseTranscript:
    def test_all_kinds_in_order(self, transcript: str) -> None:
        result = parse_transcript(transcript)

        assert result.ok
        assert [type(e) for e in result.entries] == [UserEntry, AssistantEntry, SystemEntry, SummaryEntry]
        assert result.total_lines == 4

    def test_bad_line_is_isolated(self, user_record: dict[str, Any], summary_record: dict[str, Any]) -> None:
        text = '\n'.join([dumps(user_record), '{not json', dumps(summary_record)])

        result = parse_transcript(text)

        assert not result.ok
        assert len(result.entries) == 2
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.line_number == 2
        assert error.line_content == '{not json'
        assert error.error.kind == 'json'

    def test_errors_keep_input_order(self, summary_record: dict[str, Any]) -> None:
        text = '\n'.join(['oops', dumps(summary_record), '{"type": "bogus"}', 'also bad'])

        result = parse_transcript(text)

        assert [e.line_number for e in result.errors] == [1, 3, 4]
        assert [e.error.kind for e in result.errors] == ['json', 'schema', 'json']

    def test_empty_lines_skipped_but_counted(self, summary_record: dict[str, Any]) -> None:
        text = '\n\n' + dumps(summary_record) + '\n\n' + 'broken' + '\n'

        result = parse_transcript(text)

        assert len(result.entries) == 1
        assert result.total_lines == 2
        assert result.errors[0].line_number == 5

    def test_whitespace_only_line_is_an_error(self, summary_record: dict[str, Any]) -> None:
        text = '\n\n' + dumps(summary_record) + '\n   \n' + 'broken' + '\n'

        result = parse_transcript(text)

        assert len(result.entries) == 1
        assert [e.line_number for e in result.errors] == [4, 5]
        assert result.errors[0].line_content == '   '
        assert result.errors[0].error.kind == 'json'

    def test_invalid_utf8_fails_only_its_line(
        self, user_record: dict[str, Any], summary_record: dict[str, Any]
    ) -> None:
        data = dumps(user_record).encode() + b'\n\xff\xfe\n' + dumps(summary_record).encode() + b'\n'

        result = parse_transcript(data)

        assert [type(e) for e in result.entries] == [UserEntry, SummaryEntry]
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.line_number == 2
        assert error.error.kind == 'json'
        assert error.line_content == '\ufffd\ufffd'

    def test_crlf_line_endings(self, user_record: dict[str, Any], summary_record: dict[str, Any]) -> None:
        text = dumps(user_record) + '\r\n' + dumps(summary_record) + '\r\n'

        result = parse_transcript(text)

        assert result.ok
        assert len(result.entries) == 2

    def test_unicode_line_separator_inside_string(self, user_record: dict[str, Any]) -> None:
        user_record['message']['content'] = 'before after'

        result = parse_transcript(dumps(user_record))

        assert result.ok
        assert result.entries[0].content == 'before after'

    def test_empty_text(self) -> None:
        result = parse_transcript('')

        assert result.ok
        assert result.total_lines == 0

    def test_with_raw_keeps_line_text(self, transcript: str) -> None:
        result = parse_transcript_with_raw(transcript)

        first = result.entries[0]
        assert first.line_number == 1
        assert first.raw_line == transcript.split('\n')[0]
        assert result.to_parse_result().entries[0] == first.entry

    def test_parse_error_str(self) -> None:
        error = parse_transcript('nope').errors[0]

        assert str(error).startswith('Failed to parse transcript at line 1: ')


class TestIterTranscript:
    def test_yields_outcomes_lazily(self, user_record: dict[str, Any]) -> None:
        outcomes = iter_transcript('\n'.join(['bad', dumps(user_record)]))

        first = next(outcomes)
        second = next(outcomes)

        assert isinstance(first, ParseError)
        assert isinstance(second, RawEntry)
        assert second.line_number == 2
        with pytest.raises(StopIteration):
            next(outcomes)

    def test_close_stops_parsing(self, transcript: str) -> None:
        outcomes = iter_transcript(transcript)
        next(outcomes)

        outcomes.close()

        with pytest.raises(StopIteration):
            next(outcomes)

    def test_accepts_open_file(self, transcript: str) -> None:
        outcomes = list(iter_transcript(io.StringIO(transcript + '\n')))

        assert len(outcomes) == 4
        assert all(isinstance(o, RawEntry) for o in outcomes)

    def test_accepts_binary_file(self, transcript: str) -> None:
        outcomes = list(iter_transcript(io.BytesIO(transcript.encode() + b'\r\n')))

        assert len(outcomes) == 4
        assert all(isinstance(o, RawEntry) for o in outcomes)
        assert outcomes[0].raw_line == transcript.split('\n')[0]


class TestParseTranscriptStrict:
    def test_returns_entries_when_valid(self, transcript: str) -> None:
        assert len(parse_transcript_strict(transcript)) == 4

    def test_raises_on_first_bad_line(self, summary_record: dict[str, Any]) -> None:
        text = '\n'.join([dumps(summary_record), 'bad one', 'bad two'])

        with pytest.raises(TranscriptParseError) as exc_info:
            parse_transcript_strict(text)

        assert exc_info.value.line_number == 2
        assert exc_info.value.error.line_content == 'bad one'


# ==============================================================================
# Files
# ==============================================================================


def _write_transcripts(tmp_path: Path, count: int, summary_record: dict[str, Any]) -> list[Path]:
    paths = []
    for index in range(count):
        path = tmp_path / f'session-{index}.jsonl'
        lines = [dumps({**summary_record, 'summary': f'file {index} line {n}'}) for n in range(index + 1)]
        path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
        paths.append(path)
    return paths


class TestParseTranscriptFiles:
    @pytest.mark.parametrize('workers', [1, 2])
    def test_results_follow_input_order(self, tmp_path: Path, summary_record: dict[str, Any], workers: int) -> None:
        paths = list(reversed(_write_transcripts(tmp_path, 4, summary_record)))

        results = parse_transcript_files(paths, workers=workers)

        assert [path for path, _ in results] == paths
        for path, result in results:
            index = int(path.stem.split('-')[1])
            assert len(result.entries) == index + 1
            assert result.entries[0].entry.summary == f'file {index} line 0'

    def test_missing_file_raises_before_parsing(self, tmp_path: Path, summary_record: dict[str, Any]) -> None:
        paths = _write_transcripts(tmp_path, 1, summary_record) + [tmp_path / 'missing.jsonl']

        with pytest.raises(TranscriptFileNotFoundError) as exc_info:
            parse_transcript_files(paths)

        assert exc_info.value.path == tmp_path / 'missing.jsonl'

    @pytest.mark.parametrize('workers', [1, 2])
    def test_corrupt_bytes_do_not_lose_the_file(
        self, tmp_path: Path, summary_record: dict[str, Any], workers: int
    ) -> None:
        clean = _write_transcripts(tmp_path, 1, summary_record)[0]
        corrupt = tmp_path / 'corrupt.jsonl'
        corrupt.write_bytes(dumps(summary_record).encode() + b'\n\xff\xfe\n' + dumps(summary_record).encode() + b'\n')

        results = parse_transcript_files([clean, corrupt], workers=workers)

        _, result = results[1]
        assert len(result.entries) == 2
        assert [e.line_number for e in result.errors] == [2]


class TestTranscriptLoaderService:
    def test_loads_files_keyed_by_path(self, tmp_path: Path, summary_record: dict[str, Any]) -> None:
        paths = _write_transcripts(tmp_path, 2, summary_record)

        results = asyncio.run(TranscriptLoaderService().load_transcript_files(paths, NullLogger()))

        assert list(results) == [str(p) for p in paths]
        assert [len(r.entries) for r in results.values()] == [1, 2]

    def test_warns_about_unparsable_lines(self, tmp_path: Path, summary_record: dict[str, Any]) -> None:
        path = tmp_path / 'partial.jsonl'
        path.write_text(dumps(summary_record) + '\nbroken\n', encoding='utf-8')
        logger = RecordingLogger()

        results = asyncio.run(TranscriptLoaderService().load_transcript_files([path], logger))

        assert len(results[str(path)].errors) == 1
        assert ('warning', '1 lines in partial.jsonl could not be parsed') in logger.messages
        assert ('info', 'Loaded 1 entries from partial.jsonl') in logger.messages

    def test_logger_is_optional(self, tmp_path: Path, summary_record: dict[str, Any]) -> None:
        path = tmp_path / 'corrupt.jsonl'
        path.write_bytes(dumps(summary_record).encode() + b'\n\x80\n')

        results = asyncio.run(TranscriptLoaderService().load_transcript_files([path]))

        assert len(results[str(path)].entries) == 1
        assert len(results[str(path)].errors) == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(TranscriptFileNotFoundError):
            asyncio.run(TranscriptLoaderService().load_transcript_files([tmp_path / 'nope.jsonl'], NullLogger()))
