"""Command-line interface for claude-transcript."""
