#!/usr/bin/env python3
"""
Command-line interface for claude-transcript.

Provides commands to display transcript files and to verify that every line
parses and every wire field is modeled.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

import typer

from claude_transcript.cli.logger import CLILogger
from claude_transcript.config.cli import settings
from claude_transcript.exceptions import CoverageSerializationError, TranscriptFileNotFoundError
from claude_transcript.schemas.operations import CoverageReport, ParseError
from claude_transcript.services.coverage import check_entry_coverage, summarize_missing_fields
from claude_transcript.services.describe import describe, entry_label, format_json_line_for_debug, to_debug_json
from claude_transcript.services.parser import TranscriptLoaderService, parse_transcript_files

app = typer.Typer(
    name='claude-transcript',
    help='Parse, display and verify transcript JSONL files',
    add_completion=False,
)


def _require_paths(paths: Sequence[Path] | None) -> Sequence[Path]:
    """Abort when no transcript files were given."""
    if not paths:
        typer.secho('Error: No transcript files specified', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    return paths


# ==============================================================================
# show
# ==============================================================================


@app.command()
def show(
    paths: list[Path] | None = typer.Argument(None, help='Transcript JSONL files'),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Format and display transcript files.

    Prints a one-line description and the parsed JSON of every entry. Lines
    that fail to parse are shown with their error and raw content.
    """
    asyncio.run(_show_async(_require_paths(paths), verbose))


async def _show_async(paths: Sequence[Path], verbose: bool) -> None:
    """Async implementation of show command."""
    logger = CLILogger(verbose=verbose)
    loader = TranscriptLoaderService()

    try:
        results = await loader.load_transcript_files(paths, logger)
    except TranscriptFileNotFoundError as e:
        typer.secho(f'Error: {e}', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    multiple_files = len(results) > 1

    for file_index, (path, result) in enumerate(results.items()):
        if multiple_files:
            if file_index > 0:
                typer.echo()  # Blank line between files
            typer.secho(f'=== {path} ===', fg=typer.colors.CYAN, bold=True)

        if result.errors:
            typer.secho(
                f'Warning: {len(result.errors)} lines could not be parsed',
                fg=typer.colors.YELLOW,
                err=True,
            )
            limit = settings.SHOW_ERROR_LIMIT or len(result.errors)
            for error in result.errors[:limit]:
                _print_parse_error(error)

        typer.echo(f'Successfully parsed entries: {len(result.entries)}')
        typer.echo()

        for entry_index, entry in enumerate(result.entries, 1):
            typer.secho(
                f'Entry {entry_index}: {describe(entry, settings.PREVIEW_LENGTH)}',
                fg=typer.colors.BLUE,
                bold=True,
            )
            typer.secho(entry_label(entry), dim=True)
            typer.echo(to_debug_json(entry))


def _print_parse_error(error: ParseError) -> None:
    """Print one failed line with its raw content and error location."""
    typer.secho(f'Error at line {error.line_number}: {error.error.message}', fg=typer.colors.RED, err=True)

    typer.echo('\nRaw line content:', err=True)
    typer.secho(error.line_content, dim=True, err=True)

    typer.echo('\nFormatted for debugging:', err=True)
    typer.echo(format_json_line_for_debug(error.line_content), err=True)

    for detail in error.error.details:
        typer.echo(f'  {detail.location}: {detail.message} [{detail.error_type}]', err=True)

    column = error.error.column
    if column:
        typer.echo(f'\nError location (column {column})', err=True)
        typer.secho(' ' * (column - 1) + '^', fg=typer.colors.YELLOW, err=True)
    typer.echo(err=True)


# ==============================================================================
# verify
# ==============================================================================


@app.command()
def verify(
    paths: list[Path] | None = typer.Argument(None, help='Transcript JSONL files'),
    strict: bool = typer.Option(False, '--strict', help='Also report wire fields the models drop'),
    workers: int | None = typer.Option(
        None, '--workers', '-j', min=1, help='Parallel worker processes (default: MAX_WORKERS setting)'
    ),
) -> None:
    """Verify transcript files parse completely.

    Prints one `path:line: message` line per problem and exits 1 if anything
    was found. Prints nothing when every line is valid.
    """
    transcript_paths = _require_paths(paths)
    worker_count = workers if workers is not None else settings.MAX_WORKERS

    try:
        parsed_files = parse_transcript_files(transcript_paths, workers=worker_count)
    except TranscriptFileNotFoundError as e:
        typer.secho(f'Error: {e}', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    problem_count = 0
    gap_reports: list[CoverageReport] = []

    for path, result in parsed_files:
        for error in result.errors:
            typer.echo(f'{path}:{error.line_number}: {error.error.message}', err=True)
            problem_count += 1

        if not strict:
            continue

        for raw_entry in result.entries:
            try:
                report = check_entry_coverage(raw_entry.raw_line, raw_entry.entry, raw_entry.line_number)
            except CoverageSerializationError as e:
                typer.echo(f'{path}:{raw_entry.line_number}: {e}', err=True)
                problem_count += 1
                continue

            for field_path in report.missing_fields:
                typer.echo(f'{path}:{report.line_number}: missing field {field_path}', err=True)
                problem_count += 1
            if not report.complete:
                gap_reports.append(report)

    if gap_reports:
        typer.echo(err=True)
        typer.secho('Missing fields by frequency:', bold=True, err=True)
        for field_path, count in summarize_missing_fields(gap_reports).most_common():
            typer.echo(f'  {count:>6}  {field_path}', err=True)

    if problem_count:
        raise typer.Exit(1)


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == '__main__':
    main()
