"""
Entry descriptions for diagnostic display.

Short, human-readable one-liners for transcript entries, plus the JSON
formatting helpers used when showing entries and failed lines.
"""

from __future__ import annotations

import orjson

from claude_transcript.schemas.transcript import (
    AssistantEntry,
    AssistantMessage,
    SummaryEntry,
    SystemEntry,
    TranscriptEntry,
    UserEntry,
    as_text,
    count_tool_uses,
)
from claude_transcript.services.coverage import round_trip

DESCRIPTION_PREVIEW_CHARS = 50
SYSTEM_LEVEL_PLACEHOLDER = 'unspecified'
NO_CONTENT_PLACEHOLDER = 'No content'


def _preview(text: str, limit: int) -> str:
    if len(text) > limit:
        return f'{text[:limit]}...'
    return text


def _describe_assistant(entry: AssistantEntry) -> str:
    message = entry.message
    parts = ['Assistant']

    tool_count = count_tool_uses(message.content) if message.content is not None else 0
    code_count = 0
    has_thinking = False

    # Only assistant-role payloads carry the reasoning and tool extension fields
    if isinstance(message, AssistantMessage):
        has_thinking = message.thinking is not None
        tool_count += len(message.tool_uses or ())
        code_count = len(message.code_outputs or ())

    if has_thinking:
        parts.append('with thinking')
    if tool_count > 0:
        parts.append(f'{tool_count} tool uses')
    if code_count > 0:
        parts.append(f'{code_count} code outputs')
    return ': '.join(parts)


def describe(entry: TranscriptEntry, preview_length: int = DESCRIPTION_PREVIEW_CHARS) -> str:
    """
    Describe an entry in one line.

    Examples:
        System[warning]
        User: Please refactor the parser so that it handles b...
        Assistant: with thinking: 2 tool uses
        Summary: Refactored parser error handling

    Args:
        entry: Any transcript entry
        preview_length: Characters of user content to show before truncating
    """
    if isinstance(entry, SystemEntry):
        return f'System[{entry.level or SYSTEM_LEVEL_PLACEHOLDER}]'

    if isinstance(entry, UserEntry):
        content = entry.content
        if content is None:
            return f'User: {NO_CONTENT_PLACEHOLDER}'
        return f'User: {_preview(as_text(content), preview_length)}'

    if isinstance(entry, AssistantEntry):
        return _describe_assistant(entry)

    if isinstance(entry, SummaryEntry):
        return f'Summary: {entry.summary}'

    raise TypeError(f'Not a transcript entry: {type(entry).__name__}')


def entry_label(entry: TranscriptEntry) -> str:
    """Entry kind as a display label, e.g. 'Assistant entry'."""
    return f'{entry.kind.capitalize()} entry'


def to_debug_json(entry: TranscriptEntry) -> str:
    """Indented JSON of the round-tripped entry (what the models kept)."""
    return orjson.dumps(round_trip(entry), option=orjson.OPT_INDENT_2).decode()


def format_json_line_for_debug(line: str) -> str:
    """Pretty-print a raw line if it is JSON, otherwise return it unchanged."""
    try:
        value = orjson.loads(line)
    except orjson.JSONDecodeError:
        return line
    return orjson.dumps(value, option=orjson.OPT_INDENT_2).decode()
