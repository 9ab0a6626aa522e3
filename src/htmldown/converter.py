#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/converter.py
"""HTML to Markdown converter class.

An :class:`HtmlToMarkdown` instance owns resolved options and a frozen
translator registry built once at construction. It can translate any number
of documents, one at a time or as a batch of named documents; each document
gets its own traversal state, so translations never influence each other.

Examples
--------
    >>> from htmldown import HtmlToMarkdown
    >>> converter = HtmlToMarkdown()
    >>> converter.translate("<p>Hello <b>world</b></p>")
    'Hello **world**'
    >>> converter.translate({"a": "<h1>X</h1>", "b": "<p>Y</p>"})
    {'a': '# X', 'b': 'Y'}

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional, Union, overload

from htmldown.exceptions import ValidationError
from htmldown.options import MarkdownOptions
from htmldown.parser import parse_html
from htmldown.translator import RuleLike, TranslatorRegistry, build_registry
from htmldown.visitor import emit

logger = logging.getLogger(__name__)

FileCollection = Mapping[str, str]


class HtmlToMarkdown:
    """Reusable HTML to Markdown converter.

    Parameters
    ----------
    options : MarkdownOptions, optional
        Conversion options; defaults to ``MarkdownOptions()``
    custom_rules : mapping, optional
        Translator rules keyed by comma-joined tag names, layered over the
        built-in rules. Values may be :class:`~htmldown.translator.TranslatorRule`
        instances, mappings of rule fields, or factories taking a
        :class:`~htmldown.translator.RuleContext`.

    Attributes
    ----------
    options : MarkdownOptions
        Resolved options
    registry : TranslatorRegistry
        Frozen rule table shared by all translations of this instance

    """

    def __init__(
        self,
        options: Optional[MarkdownOptions] = None,
        custom_rules: Optional[Mapping[str, RuleLike]] = None,
    ):
        if options is not None and not isinstance(options, MarkdownOptions):
            raise ValidationError(
                f"options must be a MarkdownOptions instance, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )
        self.options = options or MarkdownOptions()
        self.registry: TranslatorRegistry = build_registry(self.options, custom_rules)

    @overload
    def translate(self, html: str) -> str: ...

    @overload
    def translate(self, html: FileCollection) -> dict[str, str]: ...

    def translate(self, html: Union[str, FileCollection]) -> Union[str, dict[str, str]]:
        """Translate HTML to Markdown.

        Parameters
        ----------
        html : str or mapping of str to str
            An HTML document, or named documents

        Returns
        -------
        str or dict[str, str]
            Markdown for a single document, or a dict with the same keys as the input

        Raises
        ------
        ValidationError
            If ``html`` is neither a string nor a mapping of strings

        """
        if isinstance(html, str):
            return self._translate_document(html)
        if isinstance(html, Mapping):
            logger.debug("Translating batch of %d documents", len(html))
            return {name: self._translate_document(source, name) for name, source in html.items()}
        raise ValidationError(
            f"Expected an HTML string or a mapping of names to HTML strings, got {type(html).__name__}",
            parameter_name="html",
            parameter_value=type(html).__name__,
        )

    def _translate_document(self, html: str, name: Optional[str] = None) -> str:
        if not isinstance(html, str):
            raise ValidationError(
                f"HTML for document {name!r} must be a string, got {type(html).__name__}",
                parameter_name="html",
                parameter_value=name,
            )
        logger.debug("Translating document %s (%d characters)", name or "<string>", len(html))
        tree = parse_html(html, self.options)
        return emit(tree, self.options, self.registry)
