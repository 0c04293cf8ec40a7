"""
Transcript JSONL schema models.

This package contains Pydantic models for transcript entries:
- content: message content, content blocks and tool result bodies
- entries: entry kinds, messages and the TranscriptEntry union
"""

from __future__ import annotations

from claude_transcript.schemas.transcript.content import (
    BLOCK_SEPARATOR,
    ContentBlock,
    MessageContent,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolResultBody,
    ToolResultItem,
    ToolUseBlock,
    as_text,
    count_tool_results,
    count_tool_uses,
    has_tool_uses,
    tool_result_text,
)
from claude_transcript.schemas.transcript.entries import (
    ENTRY_KINDS,
    AssistantEntry,
    AssistantMessage,
    BaseEntry,
    CacheCreation,
    CodeOutput,
    EntryKind,
    Message,
    ServerToolUse,
    SummaryEntry,
    SystemEntry,
    ToolUse,
    TranscriptEntry,
    TranscriptEntryAdapter,
    UsageInfo,
    UserEntry,
    UserMessage,
    entry_kind,
    validate_entry,
)

# Expose submodules for qualified access (e.g., transcript.entries.UserEntry)
from . import content, entries

__all__ = [
    # Submodules
    'content',
    'entries',
    # Content
    'BLOCK_SEPARATOR',
    'ContentBlock',
    'MessageContent',
    'TextBlock',
    'ThinkingBlock',
    'ToolResultBlock',
    'ToolResultBody',
    'ToolResultItem',
    'ToolUseBlock',
    'as_text',
    'count_tool_results',
    'count_tool_uses',
    'has_tool_uses',
    'tool_result_text',
    # Usage
    'CacheCreation',
    'ServerToolUse',
    'UsageInfo',
    # Messages
    'AssistantMessage',
    'CodeOutput',
    'Message',
    'ToolUse',
    'UserMessage',
    # Entries
    'ENTRY_KINDS',
    'AssistantEntry',
    'BaseEntry',
    'EntryKind',
    'SummaryEntry',
    'SystemEntry',
    'UserEntry',
    # Main union
    'TranscriptEntry',
    'TranscriptEntryAdapter',
    'entry_kind',
    'validate_entry',
]
