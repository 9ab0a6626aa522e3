"""htmldown - Fast, configurable HTML to Markdown translation.

htmldown walks a parsed HTML tree once and emits Markdown according to a
table of per-tag translator rules. The rule table is built from layered
defaults (ignored tags, block tags, built-in translators) and can be
extended or overridden tag by tag without touching the engine.

Key Features
------------
- Single pass, rule-driven rendering with whitespace-aware block spacing
- Static rules and per-node rule factories that can extend inherited rules
- Configurable escaping, delimiters, bullets and code block style
- GFM pipe tables, nested lists, fenced or indented code blocks
- Inline, autolink or reference-style links
- Batch translation of named documents with one converter

Requirements
------------
- Python 3.10+
- beautifulsoup4 (``lxml`` optional, used with ``prefer_native_parser``)

Examples
--------
One-off translation:

    >>> from htmldown import translate
    >>> translate("<h1>Title</h1><p>Some <em>text</em></p>")
    '# Title\\n\\nSome _text_'

Reusing a converter with custom rules:

    >>> from htmldown import HtmlToMarkdown, MarkdownOptions, TranslatorRule
    >>> converter = HtmlToMarkdown(
    ...     MarkdownOptions(bullet_marker="-"),
    ...     custom_rules={"mark": TranslatorRule(prefix="==", postfix="==")},
    ... )
    >>> converter.translate("<p>a <mark>b</mark></p>")
    'a ==b=='

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "htmldown requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

import logging

from htmldown.api import translate
from htmldown.converter import HtmlToMarkdown
from htmldown.exceptions import DependencyError, HtmlDownError, RegistryFrozenError, ValidationError
from htmldown.nodes import ElementNode, TextNode
from htmldown.options import MarkdownOptions
from htmldown.parser import parse_html
from htmldown.translator import (
    REMOVE_NODE,
    RuleContext,
    TranslatorFactory,
    TranslatorRegistry,
    TranslatorRule,
    build_registry,
)
from htmldown.visitor import emit

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Entry points
    "translate",
    "HtmlToMarkdown",
    "parse_html",
    "emit",
    # Options
    "MarkdownOptions",
    # Rules
    "REMOVE_NODE",
    "RuleContext",
    "TranslatorFactory",
    "TranslatorRegistry",
    "TranslatorRule",
    "build_registry",
    # Tree
    "ElementNode",
    "TextNode",
    # Exceptions
    "HtmlDownError",
    "ValidationError",
    "RegistryFrozenError",
    "DependencyError",
]
