#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/parser.py
"""HTML parsing front end.

HTML is parsed with BeautifulSoup and copied into the :mod:`htmldown.nodes`
tree. Comments, doctypes, processing instructions and other declarations
carry no renderable content and are dropped during the copy.

Parser selection
----------------
``html_parser`` names the BeautifulSoup tree builder ("html.parser" by
default). With ``prefer_native_parser`` the C-backed ``lxml`` builder is tried
first; when it is not installed the configured ``html_parser`` is used and a
warning is logged.

"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from htmldown.constants import NATIVE_HTML_PARSER
from htmldown.exceptions import DependencyError
from htmldown.nodes import ElementNode, TextNode, document
from htmldown.options import MarkdownOptions

logger = logging.getLogger(__name__)

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)
_LINE_ENDINGS = re.compile(r"\r\n?")
_PARSER_PACKAGES = {"lxml": "lxml", "lxml-xml": "lxml", "xml": "lxml", "html5lib": "html5lib"}


def _make_soup(html: str, options: MarkdownOptions) -> BeautifulSoup:
    if options.prefer_native_parser and options.html_parser != NATIVE_HTML_PARSER:
        try:
            return BeautifulSoup(html, NATIVE_HTML_PARSER)
        except FeatureNotFound:
            logger.warning(
                "Native parser '%s' is not installed; falling back to '%s'", NATIVE_HTML_PARSER, options.html_parser
            )

    try:
        return BeautifulSoup(html, options.html_parser)
    except FeatureNotFound as e:
        package = _PARSER_PACKAGES.get(options.html_parser)
        raise DependencyError(
            missing_packages=[(package, "")] if package else [],
            message=f"Selected html_parser '{options.html_parser}' is not available: {e}",
            original_error=e,
        ) from e


def _copy_children(source: Tag, target: ElementNode) -> None:
    for child in source.children:
        if isinstance(child, Tag):
            attributes = {
                name: " ".join(value) if isinstance(value, list) else str(value) for name, value in child.attrs.items()
            }
            element = ElementNode(child.name, attributes)
            target.append(element)
            _copy_children(child, element)
        elif isinstance(child, NavigableString) and not isinstance(child, _SKIPPED_STRINGS):
            target.append(TextNode(str(child)))


def parse_html(html: str, options: MarkdownOptions | None = None) -> ElementNode:
    """Parse an HTML string into an element tree.

    Parameters
    ----------
    html : str
        HTML source; fragments and whole documents are both accepted
    options : MarkdownOptions, optional
        Options selecting the parser backend

    Returns
    -------
    ElementNode
        Document root (tag ``#document``) holding the parsed content

    Raises
    ------
    DependencyError
        If the configured ``html_parser`` is not installed

    """
    options = options or MarkdownOptions()
    # HTML input streams normalize CR and CRLF to LF
    soup = _make_soup(_LINE_ENDINGS.sub("\n", html), options)
    root = document()
    _copy_children(soup, root)
    return root
