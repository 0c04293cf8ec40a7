"""
Coverage operation schemas.

Models for coverage validation results: which raw wire fields of an entry
have no counterpart in the round-tripped model.
"""

from __future__ import annotations

from collections.abc import Sequence

from claude_transcript.schemas.base import StrictModel


class CoverageReport(StrictModel):
    """Coverage gaps found for one transcript entry."""

    line_number: int
    entry_kind: str
    missing_fields: Sequence[str] = ()  # Dotted/bracketed paths in raw key order

    @property
    def complete(self) -> bool:
        """True when the model kept every raw field."""
        return not self.missing_fields
