"""Command-line interface for fgpt."""
