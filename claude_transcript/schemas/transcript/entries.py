"""
Pydantic models for transcript JSONL entries.

Each line of a transcript is one entry. The outer `type` field selects one of
four entry kinds:

    user       - user turn (prompt text or tool results)
    assistant  - model turn (text, thinking, tool invocations, token usage)
    system     - system notice with free-text content
    summary    - conversation summary pointing at a leaf message

SCHEMA VERSION TOLERANCE:
One model per entry kind covers every observed schema revision. Fields that
every revision agrees on are required; everything else is optional with a
None default, and "absent" means the same thing whichever revision omitted
it. Examples:
- system entries may or may not carry `level` and `toolUseID`
- assistant entries produced by the synthetic error path lack `requestId`
  and carry `isApiErrorMessage` instead
- summary entries have no uuid/timestamp/sessionId at all (minimal schema)

DISPATCH:
The outer `type` field is authoritative when present. Later schema revisions
write some entries without it; for those the kind is inferred from
`message.role`, or as `summary` when both `summary` and `leafUuid` are
present. An unrecognized `type` value fails the line - inference is only a
fallback for a missing tag, never for an unknown one.

Outer `type` and `message.role` are not cross-checked: a user entry whose
message has role 'assistant' still decodes as a user entry.

WIRE NAMING:
Attribute names are wire names. Structural fields are camelCase
(`sessionId`, `parentUuid`, `toolUseID`), message payload fields are
snake_case (`stop_reason`, `tool_name`). The mix is part of the external
format and is kept as-is.

Round-trip serialization:
- Use model_dump(exclude_unset=True, mode='json') to reproduce the wire shape
- Fields present on the wire (including explicit nulls) are re-emitted
- Unknown wire fields were dropped on decode; see services/coverage.py
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Any, Literal

import pydantic

from claude_transcript.schemas.transcript.content import MessageContent
from claude_transcript.schemas.types import JsonValue, TolerantModel

EntryKind = Literal['user', 'assistant', 'system', 'summary']

ENTRY_KINDS: tuple[EntryKind, ...] = ('user', 'assistant', 'system', 'summary')


# ==============================================================================
# Token Usage
# ==============================================================================


class CacheCreation(TolerantModel):
    """Cache creation token breakdown."""

    ephemeral_5m_input_tokens: int | None = None
    ephemeral_1h_input_tokens: int | None = None


class ServerToolUse(TolerantModel):
    """Server-side tool use tracking."""

    web_search_requests: int | None = None
    web_fetch_requests: int | None = None


class UsageInfo(TolerantModel):
    """Token usage statistics for an assistant message.

    Every counter is optional: synthetic error messages carry an almost empty
    usage object, and older revisions lack the cache fields.
    """

    input_tokens: int | None = None
    output_tokens: int | None = None
    cache_creation_input_tokens: int | None = None
    cache_read_input_tokens: int | None = None
    cache_creation: CacheCreation | None = None
    server_tool_use: ServerToolUse | None = None
    service_tier: str | None = None


# ==============================================================================
# Legacy Tool/Code Records (assistant message extensions)
# ==============================================================================


class ToolUse(TolerantModel):
    """Tool invocation recorded alongside (not inside) the message content."""

    tool_name: str
    tool_input: JsonValue
    tool_output: JsonValue = None


class CodeOutput(TolerantModel):
    """Code execution output attached to an assistant message."""

    code: str
    output: str | None = None
    language: str | None = None


# ==============================================================================
# Messages (Discriminated by role)
# ==============================================================================


class UserMessage(TolerantModel):
    """Message payload of a user turn."""

    role: Literal['user']
    content: MessageContent | None = None


class AssistantMessage(TolerantModel):
    """Message payload of an assistant turn (nested API response)."""

    role: Literal['assistant']
    id: str = pydantic.Field(..., description='Message ID from the API')
    type: str = pydantic.Field(..., description="Message type indicator (always 'message' so far)")
    model: str = pydantic.Field(..., description='Model identifier, or <synthetic> for error messages')
    content: MessageContent | None = None
    thinking: str | None = pydantic.Field(None, description='Reasoning text (older revisions)')
    tool_uses: Sequence[ToolUse] | None = None
    code_outputs: Sequence[CodeOutput] | None = None
    stop_reason: str | None = pydantic.Field(None, description='Reason the model stopped generating')
    stop_sequence: str | None = None
    usage: UsageInfo


Message = Annotated[UserMessage | AssistantMessage, pydantic.Field(discriminator='role')]


# ==============================================================================
# Entries
# ==============================================================================


class BaseEntry(TolerantModel):
    """Identity fields shared by user, assistant and system entries."""

    uuid: str
    timestamp: str
    sessionId: str
    cwd: str
    version: str
    userType: str
    isSidechain: bool
    gitBranch: str | None = pydantic.Field(None, description='Git branch of cwd (later revisions)')


class UserEntry(BaseEntry):
    """User turn entry."""

    type: Literal['user'] = 'user'
    parentUuid: str | None = pydantic.Field(None, description='UUID of the parent entry (null for the first turn)')
    message: Message
    toolUseResult: JsonValue = pydantic.Field(None, description='Tool execution metadata (schema not modeled)')

    @property
    def kind(self) -> EntryKind:
        return 'user'

    @property
    def content(self) -> MessageContent | None:
        return self.message.content


class AssistantEntry(BaseEntry):
    """Assistant turn entry."""

    type: Literal['assistant'] = 'assistant'
    parentUuid: str = pydantic.Field(..., description='UUID of the parent entry')
    message: Message
    requestId: str | None = pydantic.Field(None, description='API request ID (absent on synthetic errors)')
    isApiErrorMessage: bool | None = pydantic.Field(None, description='Set on synthetic API error messages')

    @property
    def kind(self) -> EntryKind:
        return 'assistant'

    @property
    def content(self) -> MessageContent | None:
        return self.message.content


class SystemEntry(BaseEntry):
    """System notice entry."""

    type: Literal['system'] = 'system'
    parentUuid: str | None = None
    content: str
    isMeta: bool
    level: str | None = pydantic.Field(None, description="Severity such as 'info' or 'warning'")
    toolUseID: str | None = pydantic.Field(None, description='Tool use this notice relates to')
    subtype: str | None = pydantic.Field(None, description='System notice subtype (later revisions)')

    @property
    def kind(self) -> EntryKind:
        return 'system'


class SummaryEntry(TolerantModel):
    """Conversation summary entry (minimal schema, no identity fields)."""

    type: Literal['summary'] = 'summary'
    summary: str
    leafUuid: str

    @property
    def kind(self) -> EntryKind:
        return 'summary'


# ==============================================================================
# Transcript Entry (Discriminated Union)
# ==============================================================================


def entry_kind(value: Any) -> str | None:
    """
    Resolve the entry kind used to dispatch a raw or constructed entry.

    Returns the outer `type` when present (even if unknown, so validation
    reports it as an invalid tag). Without a `type`, infers from the message
    role or the summary fields. Returns None when nothing matches.
    """
    if isinstance(value, pydantic.BaseModel):
        return getattr(value, 'type', None)
    if not isinstance(value, dict):
        return None

    tag = value.get('type')
    if tag is not None:
        return tag if isinstance(tag, str) else None

    message = value.get('message')
    if isinstance(message, dict):
        role = message.get('role')
        if role in ('user', 'assistant'):
            return role
    if 'summary' in value and 'leafUuid' in value:
        return 'summary'
    return None


TranscriptEntry = Annotated[
    Annotated[UserEntry, pydantic.Tag('user')]
    | Annotated[AssistantEntry, pydantic.Tag('assistant')]
    | Annotated[SystemEntry, pydantic.Tag('system')]
    | Annotated[SummaryEntry, pydantic.Tag('summary')],
    pydantic.Discriminator(entry_kind),
]

# Type adapter for validating entries (required for union types)
TranscriptEntryAdapter: pydantic.TypeAdapter[TranscriptEntry] = pydantic.TypeAdapter(TranscriptEntry)


def validate_entry(data: Any) -> TranscriptEntry:
    """Validate a decoded JSON object as a transcript entry."""
    return TranscriptEntryAdapter.validate_python(data)
