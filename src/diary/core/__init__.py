"""Functional core - pure entry and editing logic with no I/O."""

from .entry import Entry, parse_tags, format_tags
from .buffer import LineBuffer, line_start, cursor_up, cursor_down

__all__ = [
    # Entries
    "Entry",
    "parse_tags",
    "format_tags",
    # Editing
    "LineBuffer",
    "line_start",
    "cursor_up",
    "cursor_down",
]
