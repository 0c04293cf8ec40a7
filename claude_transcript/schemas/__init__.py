"""
Schema definitions for claude-transcript.

This package contains Pydantic models for:
- transcript: transcript JSONL entry types
- operations: parse and coverage result schemas
"""

from __future__ import annotations

from claude_transcript.schemas.base import StrictModel
from claude_transcript.schemas.types import JsonValue, TolerantModel

__all__ = [
    'StrictModel',
    'TolerantModel',
    'JsonValue',
]
