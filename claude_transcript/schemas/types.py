"""
Shared type definitions for schemas.

Centralizes the foundation models and JSON types used by the transcript and
operation schemas.

Layering:
- This module provides FOUNDATION types (BaseStrictModel, TolerantModel, JsonValue)
- Domain packages (transcript/, operations/) import from here
- Wire models inherit from TolerantModel, result models from BaseStrictModel
"""

from __future__ import annotations

from typing import TypeAlias

import pydantic

# ==============================================================================
# Base Strict Model (Foundation)
# ==============================================================================


class BaseStrictModel(pydantic.BaseModel):
    """
    Foundation strict model for values this package builds itself.

    Uses extra='forbid' to reject unknown fields. Parse results, coverage
    reports and decode failures are constructed in-process, so an unexpected
    field is always a programming error (fail-fast).
    """

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type coercion
        frozen=True,  # Immutable after creation
    )


# ==============================================================================
# Tolerant Model (Foundation)
# ==============================================================================


class TolerantModel(pydantic.BaseModel):
    """
    Foundation model for transcript wire records.

    Symmetry with BaseStrictModel:
    - BaseStrictModel: extra='forbid' (rejects unknown fields)
    - TolerantModel: extra='ignore' (drops unknown fields)

    Transcripts are written by an external agent whose schema moves faster
    than these models. Unknown keys are dropped on decode instead of failing
    the line; the coverage validator (services/coverage.py) reports exactly
    which keys were dropped by comparing the raw line with the round-tripped
    model.

    Known fields still use strict type validation: a string where an int is
    expected fails the line.
    """

    model_config = pydantic.ConfigDict(
        extra='ignore',  # Drop unknown fields (surfaced by coverage validation)
        strict=True,  # Strict type coercion for known fields
        frozen=True,  # Immutable after creation
    )


# ==============================================================================
# JSON Types
# ==============================================================================

JsonValue = pydantic.JsonValue
"""
Any JSON value: null, bool, number, string, array or object.

Used for opaque wire payloads (tool inputs, tool-use results) and as the tree
type walked by the coverage validator.
"""

JsonObject: TypeAlias = dict[str, JsonValue]
"""A decoded JSON object (one transcript line before validation)."""
