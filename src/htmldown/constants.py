#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the htmldown library.

This module centralizes the default tag tables, escape patterns and
formatting defaults consumed by the translator registry and the options.

Constants are organized by category:
1. Type Definitions - Literal types
2. Element Tables - Default ignored and block-level tags
3. Markdown Formatting - Delimiters, fences and markers
4. Escaping - Default escape patterns
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

CodeBlockStyle = Literal["fenced", "indented"]
BulletMarker = Literal["*", "-", "+"]
WhitespacePosition = Literal["start", "end"]
ListKind = Literal["ordered", "unordered"]

# =============================================================================
# Element Tables
# =============================================================================

# Tags dropped together with their whole subtree
DEFAULT_IGNORE_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "button",
        "datalist",
        "embed",
        "head",
        "iframe",
        "input",
        "link",
        "map",
        "meta",
        "noscript",
        "object",
        "optgroup",
        "option",
        "script",
        "select",
        "style",
        "template",
        "textarea",
        "title",
    }
)

# Tags separated from their neighbours by a blank line
DEFAULT_BLOCK_ELEMENTS: frozenset[str] = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "body",
        "center",
        "dd",
        "details",
        "dir",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "html",
        "li",
        "main",
        "menu",
        "nav",
        "ol",
        "output",
        "p",
        "pre",
        "section",
        "summary",
        "table",
        "tbody",
        "tfoot",
        "thead",
        "ul",
    }
)

LIST_ELEMENTS: dict[str, ListKind] = {"ol": "ordered", "ul": "unordered", "menu": "unordered"}
TABLE_CELL_ELEMENTS: frozenset[str] = frozenset({"td", "th"})

DOCUMENT_TAG = "#document"

# =============================================================================
# Markdown Formatting
# =============================================================================

DEFAULT_CODE_FENCE = "```"
DEFAULT_CODE_BLOCK_STYLE: CodeBlockStyle = "fenced"
DEFAULT_BULLET_MARKER: BulletMarker = "*"
DEFAULT_EM_DELIMITER = "_"
DEFAULT_STRONG_DELIMITER = "**"
DEFAULT_STRIKE_DELIMITER = "~~"
DEFAULT_MAX_CONSECUTIVE_NEWLINES = 3
DEFAULT_HTML_PARSER = "html.parser"
NATIVE_HTML_PARSER = "lxml"

BLOCK_NEWLINES = 2
INDENTED_CODE_PREFIX = "    "
HARD_LINE_BREAK = "  \n"
HORIZONTAL_RULE = "---"

MIN_CODE_FENCE_LENGTH = 3

TABLE_ALIGNMENT_MAPPING = {"left": ":---", "center": ":---:", "right": "---:", "justify": ":---"}
TABLE_DEFAULT_ALIGNMENT = "---"
TABLE_CELL_LINE_BREAK = "<br>"

# =============================================================================
# Escaping
# =============================================================================

# (pattern, replacement) applied to every text node outside verbatim regions
DEFAULT_GLOBAL_ESCAPE: tuple[str, str] = (r"[\\`*_~\[\]]", r"\\\g<0>")

# (pattern, replacement) applied at the start of each line of text
DEFAULT_LINE_START_ESCAPE: tuple[str, str] = (
    r"^([ \t]*)(?:([-+=>])|(#{1,6})(?=\s|$)|(\d+)([.)])(?=\s|$))",
    r"\1\4\\\2\3\5",
)
