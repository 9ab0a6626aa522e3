#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/utils/__init__.py
"""Utility modules for the htmldown package.

This package contains the whitespace analysis and Markdown escaping helpers
used by the visitor and the built-in translators.
"""

from htmldown.utils.escape import (
    apply_text_replace,
    escape_link_destination,
    escape_link_title,
    escape_markdown,
    escape_table_cell,
)
from htmldown.utils.whitespace import (
    WhitespaceStats,
    chomp,
    collapse_whitespace,
    get_whitespace_stats,
    is_whitespace_only,
    trim_newlines,
)

__all__ = [
    "apply_text_replace",
    "escape_link_destination",
    "escape_link_title",
    "escape_markdown",
    "escape_table_cell",
    "WhitespaceStats",
    "chomp",
    "collapse_whitespace",
    "get_whitespace_stats",
    "is_whitespace_only",
    "trim_newlines",
]
