#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML-to-Markdown translation.

This module defines the immutable options value consumed by the translator
registry, the visitor and the HTML parser.
"""
# src/htmldown/options/markdown.py

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from htmldown.constants import (
    DEFAULT_BULLET_MARKER,
    DEFAULT_CODE_BLOCK_STYLE,
    DEFAULT_CODE_FENCE,
    DEFAULT_EM_DELIMITER,
    DEFAULT_GLOBAL_ESCAPE,
    DEFAULT_HTML_PARSER,
    DEFAULT_LINE_START_ESCAPE,
    DEFAULT_MAX_CONSECUTIVE_NEWLINES,
    DEFAULT_STRIKE_DELIMITER,
    DEFAULT_STRONG_DELIMITER,
    MIN_CODE_FENCE_LENGTH,
    BulletMarker,
    CodeBlockStyle,
)
from htmldown.exceptions import ValidationError
from htmldown.options.base import CloneFrozenMixin

_BULLET_MARKERS = ("*", "-", "+")
_CODE_BLOCK_STYLES = ("fenced", "indented")


def _normalize_tags(tags: Iterable[str]) -> frozenset[str]:
    if isinstance(tags, str):
        tags = tags.split(",")
    return frozenset(tag.strip().lower() for tag in tags if tag.strip())


@dataclass(frozen=True)
class MarkdownOptions(CloneFrozenMixin):
    """Configuration options for HTML-to-Markdown translation.

    Parameters
    ----------
    prefer_native_parser : bool, default False
        Parse with the C-backed ``lxml`` tree builder when it is installed,
        falling back to ``html_parser`` otherwise.
    html_parser : str, default "html.parser"
        BeautifulSoup tree builder used to parse HTML.
    ignore : frozenset[str], default empty
        Tags dropped with their subtree, in addition to the built-in list.
    block_elements : frozenset[str], default empty
        Tags rendered as blocks, in addition to the built-in list.
    max_consecutive_newlines : int, default 3
        Longest run of newline characters allowed in the output.
    escape_special : bool, default True
        Escape Markdown syntax characters found in text.
    global_escape : tuple[str, str]
        ``(pattern, replacement)`` applied to all escaped text.
    line_start_escape : tuple[str, str]
        ``(pattern, replacement)`` applied where escaped text starts a line.
    text_replace : tuple[tuple[str, str], ...], default ()
        Extra ``(pattern, replacement)`` pairs applied to every text node.
    code_fence : str, default "```"
        Fence used for fenced code blocks.
    code_block_style : {"fenced", "indented"}, default "fenced"
        How ``<pre>`` blocks are rendered.
    bullet_marker : {"*", "-", "+"}, default "*"
        Marker for unordered list items.
    em_delimiter, strong_delimiter, strike_delimiter : str
        Inline formatting delimiters.
    keep_data_images : bool, default False
        Keep images whose source is a ``data:`` URI.
    use_inline_links : bool, default True
        When False, links whose text equals their URL become ``<url>`` autolinks.
    use_link_reference_definitions : bool, default False
        Render links as ``[text][n]`` with definitions at the end of the document.

    """

    prefer_native_parser: bool = field(
        default=False,
        metadata={"help": "Parse with lxml when available, falling back to html_parser", "importance": "advanced"},
    )
    html_parser: str = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": "BeautifulSoup parser to use: 'html.parser' (built-in), 'lxml' or 'html5lib'",
            "importance": "advanced",
        },
    )
    ignore: frozenset[str] = field(
        default_factory=frozenset,
        metadata={"help": "Additional tags to drop together with their content", "importance": "core"},
    )
    block_elements: frozenset[str] = field(
        default_factory=frozenset,
        metadata={"help": "Additional tags to render as blocks", "importance": "core"},
    )
    max_consecutive_newlines: int = field(
        default=DEFAULT_MAX_CONSECUTIVE_NEWLINES,
        metadata={"help": "Maximum number of consecutive newlines in the output", "type": int, "importance": "core"},
    )
    escape_special: bool = field(
        default=True,
        metadata={"help": "Escape Markdown special characters in text", "importance": "core"},
    )
    global_escape: tuple[str, str] = field(
        default=DEFAULT_GLOBAL_ESCAPE,
        metadata={"help": "(pattern, replacement) applied to escaped text", "importance": "advanced"},
    )
    line_start_escape: tuple[str, str] = field(
        default=DEFAULT_LINE_START_ESCAPE,
        metadata={"help": "(pattern, replacement) applied at the start of lines", "importance": "advanced"},
    )
    text_replace: tuple[tuple[str, str], ...] = field(
        default=(),
        metadata={"help": "(pattern, replacement) pairs applied to every text node", "importance": "advanced"},
    )
    code_fence: str = field(
        default=DEFAULT_CODE_FENCE,
        metadata={"help": "Fence for fenced code blocks", "importance": "core"},
    )
    code_block_style: CodeBlockStyle = field(
        default=DEFAULT_CODE_BLOCK_STYLE,
        metadata={"help": "Code block style", "choices": list(_CODE_BLOCK_STYLES), "importance": "core"},
    )
    bullet_marker: BulletMarker = field(
        default=DEFAULT_BULLET_MARKER,
        metadata={"help": "Marker for unordered list items", "choices": list(_BULLET_MARKERS), "importance": "core"},
    )
    em_delimiter: str = field(default=DEFAULT_EM_DELIMITER, metadata={"help": "Emphasis delimiter"})
    strong_delimiter: str = field(default=DEFAULT_STRONG_DELIMITER, metadata={"help": "Strong emphasis delimiter"})
    strike_delimiter: str = field(default=DEFAULT_STRIKE_DELIMITER, metadata={"help": "Strikethrough delimiter"})
    keep_data_images: bool = field(
        default=False,
        metadata={"help": "Keep images with data: URIs", "importance": "advanced"},
    )
    use_inline_links: bool = field(
        default=True,
        metadata={"help": "Render links whose text equals the URL as [url](url) instead of <url>"},
    )
    use_link_reference_definitions: bool = field(
        default=False,
        metadata={"help": "Use reference-style links with definitions at the end", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize tag sets and validate field values.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        object.__setattr__(self, "ignore", _normalize_tags(self.ignore))
        object.__setattr__(self, "block_elements", _normalize_tags(self.block_elements))
        object.__setattr__(self, "text_replace", tuple(tuple(pair) for pair in self.text_replace))

        if not isinstance(self.max_consecutive_newlines, int) or self.max_consecutive_newlines < 0:
            raise ValidationError(
                f"max_consecutive_newlines must be a non-negative integer, got {self.max_consecutive_newlines!r}",
                parameter_name="max_consecutive_newlines",
                parameter_value=self.max_consecutive_newlines,
            )
        if self.bullet_marker not in _BULLET_MARKERS:
            raise ValidationError(
                f"bullet_marker must be one of {_BULLET_MARKERS}, got {self.bullet_marker!r}",
                parameter_name="bullet_marker",
                parameter_value=self.bullet_marker,
            )
        if self.code_block_style not in _CODE_BLOCK_STYLES:
            raise ValidationError(
                f"code_block_style must be one of {_CODE_BLOCK_STYLES}, got {self.code_block_style!r}",
                parameter_name="code_block_style",
                parameter_value=self.code_block_style,
            )
        fence_chars = set(self.code_fence)
        if len(fence_chars) != 1 or fence_chars - {"`", "~"} or len(self.code_fence) < MIN_CODE_FENCE_LENGTH:
            raise ValidationError(
                f"code_fence must be at least {MIN_CODE_FENCE_LENGTH} backticks or tildes, got {self.code_fence!r}",
                parameter_name="code_fence",
                parameter_value=self.code_fence,
            )

        for name in ("global_escape", "line_start_escape"):
            self._check_pattern(name, getattr(self, name))
        for pair in self.text_replace:
            self._check_pattern("text_replace", pair)

    @staticmethod
    def _check_pattern(name: str, pair: tuple[str, str]) -> None:
        if len(pair) != 2:
            raise ValidationError(
                f"{name} entries must be (pattern, replacement) pairs, got {pair!r}",
                parameter_name=name,
                parameter_value=pair,
            )
        try:
            re.compile(pair[0])
        except re.error as e:
            raise ValidationError(
                f"Invalid regular expression for {name}: {e}",
                parameter_name=name,
                parameter_value=pair[0],
                original_error=e,
            ) from e
