#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/utils/escape.py
"""Markdown text escaping utilities.

Text taken from HTML must not accidentally produce Markdown syntax. Two
pattern passes cover this: a global pass for inline syntax characters and a
line-start pass for block markers such as headings, list bullets and quotes.

"""

from __future__ import annotations

import re
from functools import lru_cache

from htmldown.options import MarkdownOptions


@lru_cache(maxsize=64)
def _compile(pattern: str, flags: int = 0) -> re.Pattern[str]:
    return re.compile(pattern, flags)


def escape_markdown(text: str, options: MarkdownOptions, at_line_start: bool = True) -> str:
    r"""Escape special Markdown characters in text content.

    Parameters
    ----------
    text : str
        Text to escape
    options : MarkdownOptions
        Options providing the escape patterns
    at_line_start : bool, default True
        Whether ``text`` begins a line of output. When False, the line-start
        pass skips the first line.

    Returns
    -------
    str
        Escaped text safe for Markdown

    Examples
    --------
        >>> escape_markdown("# *not* a heading", MarkdownOptions())
        '\\# \\*not\\* a heading'

    """
    if not text:
        return text

    pattern, replacement = options.global_escape
    text = _compile(pattern).sub(replacement, text)

    pattern, replacement = options.line_start_escape

    def _line_start(match: re.Match[str]) -> str:
        if match.start() == 0 and not at_line_start:
            return match.group(0)
        return match.expand(replacement)

    return _compile(pattern, re.MULTILINE).sub(_line_start, text)


def apply_text_replace(text: str, options: MarkdownOptions) -> str:
    """Apply the user-configured ``text_replace`` patterns to ``text``."""
    for pattern, replacement in options.text_replace:
        text = _compile(pattern).sub(replacement, text)
    return text


def escape_link_destination(url: str) -> str:
    """Wrap a link destination in angle brackets when it contains spaces or parentheses."""
    if re.search(r"[\s()<>]", url):
        return "<" + url.replace("<", "%3C").replace(">", "%3E") + ">"
    return url


def escape_link_title(title: str) -> str:
    """Escape double quotes in a link title."""
    return title.replace("\\", "\\\\").replace('"', '\\"')


def escape_table_cell(text: str) -> str:
    r"""Escape pipe characters that would otherwise split a table cell.

    Examples
    --------
        >>> escape_table_cell("a | b")
        'a \\| b'

    """
    # A pipe is already escaped only after an odd number of backslashes
    return re.sub(r"(?<!\\)((?:\\\\)*)\|", r"\1\\|", text)
