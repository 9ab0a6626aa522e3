#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/api.py
"""Convenience entry point for one-off translations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union, overload

from htmldown.converter import FileCollection, HtmlToMarkdown
from htmldown.exceptions import ValidationError
from htmldown.options import MarkdownOptions
from htmldown.translator import RuleLike


@overload
def translate(
    html: str,
    options: Optional[MarkdownOptions] = None,
    custom_rules: Optional[Mapping[str, RuleLike]] = None,
    **kwargs: Any,
) -> str: ...


@overload
def translate(
    html: FileCollection,
    options: Optional[MarkdownOptions] = None,
    custom_rules: Optional[Mapping[str, RuleLike]] = None,
    **kwargs: Any,
) -> dict[str, str]: ...


def translate(
    html: Union[str, FileCollection],
    options: Optional[MarkdownOptions] = None,
    custom_rules: Optional[Mapping[str, RuleLike]] = None,
    **kwargs: Any,
) -> Union[str, dict[str, str]]:
    """Translate HTML to Markdown with a throwaway converter.

    Parameters
    ----------
    html : str or mapping of str to str
        An HTML document, or named documents
    options : MarkdownOptions, optional
        Pre-configured options
    custom_rules : mapping, optional
        Translator rules keyed by comma-joined tag names
    kwargs : Any
        Individual option overrides applied on top of ``options``
        (e.g. ``bullet_marker="-"``)

    Returns
    -------
    str or dict[str, str]
        Markdown for a single document, or a dict with the same keys as the input

    Raises
    ------
    ValidationError
        If an option name in ``kwargs`` is unknown or the input type is unsupported

    Examples
    --------
        >>> translate("<ul><li>one</li><li>two</li></ul>", bullet_marker="-")
        '- one\\n- two'

    """
    options = options or MarkdownOptions()
    if kwargs:
        try:
            options = options.create_updated(**kwargs)
        except TypeError as e:
            raise ValidationError(
                f"Unknown option(s): {', '.join(sorted(kwargs))}", parameter_name="kwargs", original_error=e
            ) from e
    return HtmlToMarkdown(options, custom_rules).translate(html)
