#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/utils/whitespace.py
"""Whitespace measurement and normalization helpers.

The visitor consults these helpers at every junction between emitted
fragments: the trailing whitespace statistics of the output so far decide
how many newlines a block still needs, and HTML whitespace collapsing keeps
source formatting out of the rendered Markdown.

"""

from __future__ import annotations

import re
from typing import NamedTuple

from htmldown.constants import WhitespacePosition

# HTML whitespace; non-breaking spaces are content, not layout
_HTML_WHITESPACE_RUN = re.compile(r"[ \t\n\r\f]+")
_LEADING_WHITESPACE = re.compile(r"\A\s+")
_TRAILING_WHITESPACE = re.compile(r"\s+\Z")


class WhitespaceStats(NamedTuple):
    """Size of a leading or trailing whitespace run."""

    length: int
    newlines: int


def get_whitespace_stats(text: str, position: WhitespacePosition) -> WhitespaceStats:
    r"""Measure the whitespace run at the start or end of ``text``.

    Parameters
    ----------
    text : str
        Text to inspect
    position : {"start", "end"}
        Which end of the text to measure

    Returns
    -------
    WhitespaceStats
        Length of the run and the number of newline characters it contains

    Raises
    ------
    ValueError
        If ``position`` is not "start" or "end"

    Examples
    --------
        >>> get_whitespace_stats("text  \n\n", "end")
        WhitespaceStats(length=4, newlines=2)

    """
    if position == "start":
        pattern = _LEADING_WHITESPACE
    elif position == "end":
        pattern = _TRAILING_WHITESPACE
    else:
        raise ValueError(f"position must be 'start' or 'end', got {position!r}")

    match = pattern.search(text)
    if not match:
        return WhitespaceStats(0, 0)
    run = match.group(0)
    return WhitespaceStats(len(run), run.count("\n"))


def trim_newlines(text: str) -> str:
    """Remove leading and trailing newline characters."""
    return text.strip("\r\n")


def is_whitespace_only(text: str) -> bool:
    """Return True if ``text`` contains no visible characters."""
    return not text or text.isspace()


def collapse_whitespace(text: str) -> str:
    """Collapse each run of HTML whitespace into a single space."""
    return _HTML_WHITESPACE_RUN.sub(" ", text)


def chomp(text: str) -> tuple[str, str, str]:
    """Split surrounding whitespace off ``text``.

    Returns
    -------
    tuple[str, str, str]
        ``(leading, trailing, stripped)`` where leading and trailing are a single
        space when the text had whitespace on that side.

    """
    leading = " " if text[:1].isspace() else ""
    trailing = " " if text[-1:].isspace() else ""
    return leading, trailing, text.strip()
