#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options for HTML-to-Markdown translation."""

from htmldown.options.base import CloneFrozenMixin
from htmldown.options.markdown import MarkdownOptions

__all__ = ["CloneFrozenMixin", "MarkdownOptions"]
