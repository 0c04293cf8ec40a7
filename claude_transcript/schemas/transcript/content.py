"""
Pydantic models for transcript message content.

Message content arrives in two shapes, told apart only by JSON shape:

    "content": "plain text"
    "content": [{"type": "text", "text": "..."}, {"type": "tool_use", ...}]

The list shape holds content blocks, a discriminated union on the block's
`type` field. Tool results nest one more untagged union: their content is
either a string or a list of {type, text} items.

Unknown block types fail the line instead of being skipped, so a new block
kind shows up as a parse error rather than silently vanishing.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Literal

import pydantic

from claude_transcript.schemas.types import JsonValue, TolerantModel

# Separator used when flattening blocks into a single preview string
BLOCK_SEPARATOR = '\n'


# ==============================================================================
# Tool Result Content (Untagged Union)
# ==============================================================================


class ToolResultItem(TolerantModel):
    """One item of a list-shaped tool result."""

    type: str  # Only 'text' observed, but not constrained
    text: str


# String or ordered list of items - no discriminator, decided by JSON shape
ToolResultBody = str | Sequence[ToolResultItem]


def tool_result_text(body: ToolResultBody) -> str:
    """Flatten a tool result body to a single string."""
    if isinstance(body, str):
        return body
    return BLOCK_SEPARATOR.join(item.text for item in body)


# ==============================================================================
# Content Blocks (Discriminated Union)
# ==============================================================================


class TextBlock(TolerantModel):
    """Text content block from user or assistant messages."""

    type: Literal['text']
    text: str

    def as_text(self) -> str:
        return self.text


class ToolUseBlock(TolerantModel):
    """Tool invocation block from assistant messages."""

    type: Literal['tool_use']
    id: str
    name: str
    input: JsonValue  # Tool-specific, not modeled

    def as_text(self) -> str:
        return f'[tool_use: {self.name}]'


class ToolResultBlock(TolerantModel):
    """Tool result block from user messages, correlated to a tool_use by id."""

    type: Literal['tool_result']
    tool_use_id: str
    content: ToolResultBody
    is_error: bool | None = None

    def result_text(self) -> str:
        return tool_result_text(self.content)

    def as_text(self) -> str:
        return self.result_text()


class ThinkingBlock(TolerantModel):
    """Extended thinking block from assistant messages."""

    type: Literal['thinking']
    thinking: str
    signature: str | None = None  # Opaque, never inspected

    def as_text(self) -> str:
        return self.thinking


ContentBlock = Annotated[
    TextBlock | ToolUseBlock | ToolResultBlock | ThinkingBlock,
    pydantic.Field(discriminator='type'),
]

# Plain string or ordered block list (untagged - decided by JSON shape)
MessageContent = str | Sequence[ContentBlock]


# ==============================================================================
# Content Queries
# ==============================================================================


def as_text(content: MessageContent) -> str:
    """
    Flatten message content into one string for previews.

    Blocks are joined with newlines. Not meant for semantic decisions - tool
    invocations are reduced to a marker with the tool name.
    """
    if isinstance(content, str):
        return content
    return BLOCK_SEPARATOR.join(block.as_text() for block in content)


def count_tool_uses(content: MessageContent) -> int:
    """Number of tool_use blocks (0 for plain string content)."""
    if isinstance(content, str):
        return 0
    return sum(1 for block in content if isinstance(block, ToolUseBlock))


def count_tool_results(content: MessageContent) -> int:
    """Number of tool_result blocks (0 for plain string content)."""
    if isinstance(content, str):
        return 0
    return sum(1 for block in content if isinstance(block, ToolResultBlock))


def has_tool_uses(content: MessageContent) -> bool:
    """Whether the content contains at least one tool_use block."""
    if isinstance(content, str):
        return False
    return any(isinstance(block, ToolUseBlock) for block in content)
