#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/visitor.py
"""Tree walker that emits Markdown.

:class:`MarkdownVisitor` renders one element tree with a frozen
:class:`~htmldown.translator.TranslatorRegistry`. The walk is a pre-order
recursive descent: every element resolves its rule, renders its children
into an output frame of its own, wraps and post-processes the result and
appends it to the enclosing frame.

Spacing is rule-driven, not source-driven. Text collapses HTML whitespace,
and only block rules (``surrounding_newlines``) put newlines between
fragments. At each junction the visitor measures the newlines already
present at the end of the output and pads them up to what the block asks
for, so the separation between two blocks is the larger of their demands.

"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from htmldown.constants import LIST_ELEMENTS, TABLE_CELL_ELEMENTS
from htmldown.context import TableState, TraversalContext
from htmldown.nodes import ElementNode, Node, TextNode
from htmldown.options import MarkdownOptions
from htmldown.translator import REMOVE_NODE, RuleContext, TranslatorRegistry, TranslatorRule, resolve_rule
from htmldown.utils.escape import apply_text_replace, escape_link_destination, escape_link_title, escape_markdown
from htmldown.utils.whitespace import collapse_whitespace, get_whitespace_stats, is_whitespace_only

logger = logging.getLogger(__name__)

_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t\r]*\n)+")


class MarkdownVisitor:
    """Render a single element tree to Markdown.

    A visitor holds the traversal state of one document and must not be
    reused; :func:`emit` creates a fresh one per call.

    Parameters
    ----------
    registry : TranslatorRegistry
        Frozen rule table
    options : MarkdownOptions
        Resolved options

    """

    def __init__(self, registry: TranslatorRegistry, options: MarkdownOptions):
        self.registry = registry
        self.options = options
        self.state = TraversalContext()

    def render(self, tree: Node) -> str:
        """Render ``tree`` and return the final Markdown text."""
        self.visit(tree)
        return self._finalize(self.state.frames[0].text)

    def visit(self, node: Node) -> None:
        if isinstance(node, TextNode):
            self._visit_text(node)
        else:
            self._visit_element(node)

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def _visit_element(self, node: ElementNode) -> None:
        leave = self._enter_structure(node)

        rule = resolve_rule(self.registry.resolve(node.tag), RuleContext(node, self.options, self.state))
        if rule.ignore:
            # Transparent: children render straight into the enclosing frame
            if rule.should_recurse:
                for child in node.children:
                    self.visit(child)
        else:
            content = self._render_children(node, rule) if rule.should_recurse else ""
            self._emit(node, rule, content)

        if leave is not None:
            leave()

    def _enter_structure(self, node: ElementNode) -> Optional[Callable[[], object]]:
        """Update list and table state for ``node``; return the matching exit callback."""
        state = self.state
        tag = node.tag

        if tag in LIST_ELEMENTS:
            kind = LIST_ELEMENTS[tag]
            start = node.get_int("start", 1) if kind == "ordered" else 1
            state.push_list(kind, start)
            return state.pop_list
        if tag == "li":
            state.next_list_item()
        elif tag == "table":
            state.tables.append(TableState())
            return state.tables.pop
        elif tag == "tr" and state.current_table is not None:
            state.current_table.start_row()
        elif tag in TABLE_CELL_ELEMENTS and state.current_table is not None:
            state.current_table.start_cell(max(1, node.get_int("colspan", 1)))
        return None

    def _render_children(self, node: ElementNode, rule: TranslatorRule) -> str:
        state = self.state
        state.push_frame(block=rule.is_block)
        if rule.no_escape:
            state.no_escape_depth += 1
        if rule.preserve_whitespace:
            state.preserve_whitespace_depth += 1

        for child in node.children:
            self.visit(child)

        if rule.no_escape:
            state.no_escape_depth -= 1
        if rule.preserve_whitespace:
            state.preserve_whitespace_depth -= 1
        return state.pop_frame()

    def _emit(self, node: ElementNode, rule: TranslatorRule, content: str) -> None:
        preserve = bool(rule.preserve_whitespace) or self.state.preserve_whitespace

        if rule.should_recurse and not rule.preserve_if_empty and is_whitespace_only(content):
            if content and not rule.is_block:
                self._append_whitespace(content, preserve)
            return

        if rule.is_block and not preserve:
            content = content.strip()

        content = f"{rule.prefix or ''}{content}{rule.postfix or ''}"

        if rule.postprocess is not None:
            result = rule.postprocess(content, node, self.options)
            if result is REMOVE_NODE:
                logger.debug("Postprocess removed <%s>", node.tag)
                return
            content = result

        if rule.is_block:
            if not content:
                return
            self._append_newlines(rule.surrounding_newlines)
            self._append(content)
            self._append_newlines(rule.surrounding_newlines)
        else:
            self._append(content, space_if_repeating_char=bool(rule.space_if_repeating_char))

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def _visit_text(self, node: TextNode) -> None:
        state = self.state
        options = self.options
        text = node.text

        if not state.preserve_whitespace:
            text = collapse_whitespace(text)
            tail = state.tail()
            if tail is None or tail[-1].isspace():
                text = text.lstrip(" ")
            if not text:
                return

        if options.escape_special and not state.no_escape:
            tail = state.tail()
            text = escape_markdown(text, options, at_line_start=tail is None or tail.endswith("\n"))
        self._append(apply_text_replace(text, options))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _append(self, text: str, space_if_repeating_char: bool = False) -> None:
        if not text:
            return
        frame = self.state.frame
        if space_if_repeating_char and not text[0].isspace():
            tail = self.state.tail()
            if tail and tail[-1] == text[0]:
                frame.text += " "
        frame.text += text

    def _append_whitespace(self, text: str, preserve: bool) -> None:
        if preserve:
            self._append(text)
            return
        tail = self.state.tail()
        if tail is not None and not tail[-1].isspace():
            self._append(" ")

    def _append_newlines(self, count: int) -> None:
        """Pad the output so that it ends with at least ``count`` newlines."""
        state = self.state
        frame = state.frame
        if frame.text and not state.preserve_whitespace:
            frame.text = frame.text.rstrip(" \t")

        tail = state.tail()
        # Nothing to separate from at the start of a block or document
        if tail is None:
            return
        missing = count - get_whitespace_stats(tail, "end").newlines
        if missing > 0:
            frame.text += "\n" * missing

    def _finalize(self, text: str) -> str:
        text = _LEADING_BLANK_LINES.sub("", text).rstrip()

        if self.state.link_references:
            definitions = []
            for (url, title), number in self.state.link_references.items():
                title_part = f' "{escape_link_title(title)}"' if title else ""
                definitions.append(f"[{number}]: {escape_link_destination(url)}{title_part}")
            text = f"{text}\n\n" + "\n".join(definitions) if text else "\n".join(definitions)

        # Covers the link definitions too
        limit = self.options.max_consecutive_newlines
        return re.sub(rf"(?:[ \t\r]*\n){{{limit + 1},}}", "\n" * limit, text)


def emit(tree: Node, options: MarkdownOptions, registry: TranslatorRegistry) -> str:
    """Render an element tree to Markdown.

    Parameters
    ----------
    tree : ElementNode or TextNode
        Root of the tree, usually the document node returned by
        :func:`htmldown.parser.parse_html`
    options : MarkdownOptions
        Resolved options
    registry : TranslatorRegistry
        Rule table, normally built by :func:`htmldown.translator.build_registry`

    Returns
    -------
    str
        Markdown text

    """
    return MarkdownVisitor(registry, options).render(tree)
