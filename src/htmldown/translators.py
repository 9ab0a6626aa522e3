#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/translators.py
"""Built-in translator rules.

:data:`DEFAULT_TRANSLATORS` maps comma-joined tag lists to the rules used
when a converter is built. They are layered over the ignored and block tag
tables and may themselves be extended by caller rules.

Supported HTML Elements
-----------------------
- Text formatting: bold, italic, strikethrough, inline code
- Structure: headings (h1-h6), line breaks, horizontal rules, blockquotes
- Lists: ordered (honouring ``start``) and unordered, with nesting
- Tables: GFM pipe tables with alignment, padding and captions
- Links: inline, autolink and reference style
- Images: inline, with ``data:`` URIs dropped unless configured
- Code blocks: fenced or indented, with language detection
"""

from __future__ import annotations

import re
from typing import Callable, Union

from htmldown.constants import (
    BLOCK_NEWLINES,
    HARD_LINE_BREAK,
    HORIZONTAL_RULE,
    INDENTED_CODE_PREFIX,
    MIN_CODE_FENCE_LENGTH,
    TABLE_ALIGNMENT_MAPPING,
    TABLE_CELL_LINE_BREAK,
    TABLE_DEFAULT_ALIGNMENT,
)
from htmldown.context import TableState
from htmldown.nodes import ElementNode
from htmldown.options import MarkdownOptions
from htmldown.translator import REMOVE_NODE, RuleContext, RuleLike, TranslatorRule, _RemoveNode
from htmldown.utils.escape import (
    escape_link_destination,
    escape_link_title,
    escape_markdown,
    escape_table_cell,
)
from htmldown.utils.whitespace import chomp, collapse_whitespace, trim_newlines

_LANGUAGE_CLASS_PATTERNS = (
    re.compile(r"language-([\w+#-]+)"),
    re.compile(r"lang-([\w+#-]+)"),
    re.compile(r"brush:\s*([\w+#-]+)"),
)
_TEXT_ALIGN = re.compile(r"text-align\s*:\s*(left|right|center|justify)", re.IGNORECASE)

PostResult = Union[str, _RemoveNode]


# =============================================================================
# Inline formatting
# =============================================================================


def _delimited(option_name: str) -> Callable[[str, ElementNode, MarkdownOptions], str]:
    """Build a postprocess wrapping content in the delimiter named by ``option_name``."""

    def postprocess(content: str, node: ElementNode, options: MarkdownOptions) -> str:
        leading, trailing, text = chomp(content)
        if not text:
            return content
        delimiter = getattr(options, option_name)
        return f"{leading}{delimiter}{text}{delimiter}{trailing}"

    return postprocess


def _longest_run(text: str, char: str) -> int:
    runs = re.findall(f"{re.escape(char)}+", text)
    return max((len(run) for run in runs), default=0)


def _inline_code(content: str, node: ElementNode, options: MarkdownOptions) -> str:
    fence = "`" * (_longest_run(content, "`") + 1)
    padding = " " if content.startswith("`") or content.endswith("`") else ""
    return f"{fence}{padding}{content}{padding}{fence}"


def _code_rule(ctx: RuleContext) -> TranslatorRule:
    # <pre><code> renders through the <pre> rule
    if ctx.node.has_ancestor("pre"):
        return TranslatorRule(no_escape=True)
    return TranslatorRule(no_escape=True, space_if_repeating_char=True, postprocess=_inline_code)


# =============================================================================
# Code blocks
# =============================================================================


def extract_language(node: ElementNode) -> str:
    """Extract a language identifier from a ``<pre>`` element or its ``<code>`` child.

    Checks for language in:
    - class attributes with patterns like language-xxx, lang-xxx, brush: xxx
    - data-lang attributes
    - the same patterns on a child ``<code>`` element
    """
    code = node.find("code")
    for element in (node, code):
        if element is None:
            continue
        if element.get("data-lang"):
            return element.get("data-lang", "").strip()
        for pattern in _LANGUAGE_CLASS_PATTERNS:
            if match := pattern.search(element.get("class", "")):
                return match.group(1)
    return ""


def _code_fence(content: str, options: MarkdownOptions) -> str:
    # At least one fence character more than any run inside the block
    char = options.code_fence[0]
    return char * max(len(options.code_fence), MIN_CODE_FENCE_LENGTH, _longest_run(content, char) + 1)


def _code_block(content: str, node: ElementNode, options: MarkdownOptions) -> str:
    # HTML drops a single newline directly after <pre>
    if content.startswith("\r\n"):
        content = content[2:]
    elif content.startswith("\n"):
        content = content[1:]
    content = content.rstrip()

    if options.code_block_style == "indented":
        return "\n".join(INDENTED_CODE_PREFIX + line if line else "" for line in content.split("\n"))

    fence = _code_fence(content, options)
    return f"{fence}{extract_language(node)}\n{content}\n{fence}"


# =============================================================================
# Block structure
# =============================================================================


def _line_break(ctx: RuleContext) -> TranslatorRule:
    return TranslatorRule(prefix="\n" if ctx.preserve_whitespace else HARD_LINE_BREAK, recurse=False)


def _heading(level: int) -> TranslatorRule:
    def postprocess(content: str, node: ElementNode, options: MarkdownOptions) -> str:
        return re.sub(r"[ \t]*\n\s*", " ", content)

    return TranslatorRule(prefix="#" * level + " ", postprocess=postprocess)


def _blockquote(content: str, node: ElementNode, options: MarkdownOptions) -> str:
    lines = trim_newlines(content).split("\n")
    return "\n".join(f"> {line}" if line.strip() else ">" for line in lines)


def _list_rule(ctx: RuleContext) -> TranslatorRule:
    # Nested lists hug their parent item
    newlines = 1 if ctx.list_depth > 1 else BLOCK_NEWLINES
    return ctx.base_rule().merge(TranslatorRule(surrounding_newlines=newlines))


def _list_item_rule(ctx: RuleContext) -> TranslatorRule:
    number = ctx.list_item_number
    if ctx.list_kind == "ordered" and number is not None:
        marker = f"{number}. "
    else:
        marker = f"{ctx.options.bullet_marker} "
    indent = " " * len(marker)

    def postprocess(content: str, node: ElementNode, options: MarkdownOptions) -> str:
        first, _, rest = content.partition("\n")
        if not rest:
            return first
        indented = "\n".join(indent + line if line else "" for line in rest.split("\n"))
        return f"{first}\n{indented}"

    return ctx.base_rule().merge(TranslatorRule(surrounding_newlines=1, prefix=marker, postprocess=postprocess))


# =============================================================================
# Links and images
# =============================================================================


def _link_rule(ctx: RuleContext) -> TranslatorRule:
    href = (ctx.node.get("href") or "").strip()
    if not href:
        return ctx.base_rule()
    title = ctx.node.get("title")
    state = ctx.state

    def postprocess(content: str, node: ElementNode, options: MarkdownOptions) -> str:
        leading, trailing, text = chomp(content)
        if not options.use_inline_links and node.text_content().strip() == href:
            return f"{leading}<{href}>{trailing}"
        if options.use_link_reference_definitions:
            number = state.add_link_reference(href, title)
            return f"{leading}[{text}][{number}]{trailing}"
        title_part = f' "{escape_link_title(title)}"' if title else ""
        return f"{leading}[{text}]({escape_link_destination(href)}{title_part}){trailing}"

    return ctx.base_rule().merge(TranslatorRule(postprocess=postprocess))


def _image(content: str, node: ElementNode, options: MarkdownOptions) -> PostResult:
    src = (node.get("src") or "").strip()
    if not src or (src.startswith("data:") and not options.keep_data_images):
        return REMOVE_NODE
    alt = collapse_whitespace(node.get("alt") or "").strip()
    if options.escape_special:
        alt = escape_markdown(alt, options, at_line_start=False)
    title = node.get("title")
    title_part = f' "{escape_link_title(title)}"' if title else ""
    return f"![{alt}]({escape_link_destination(src)}{title_part})"


# =============================================================================
# Tables
# =============================================================================


def _cell_alignment(node: ElementNode) -> str | None:
    align = (node.get("align") or "").strip().lower()
    if align in TABLE_ALIGNMENT_MAPPING:
        return align
    match = _TEXT_ALIGN.search(node.get("style") or "")
    return match.group(1).lower() if match else None


def _table_cell_rule(ctx: RuleContext) -> TranslatorRule:
    table = ctx.state.current_table
    span = max(1, ctx.node.get_int("colspan", 1))
    if table is not None and table.row_index == 0:
        alignment = _cell_alignment(ctx.node)
        if alignment:
            table.alignments[table.column_index] = alignment

    def postprocess(content: str, node: ElementNode, options: MarkdownOptions) -> str:
        text = re.sub(r"[ \t]*\n\s*", TABLE_CELL_LINE_BREAK, content.strip())
        return f"| {escape_table_cell(text)} " + "|  " * (span - 1)

    return ctx.base_rule().merge(TranslatorRule(preserve_if_empty=True, postprocess=postprocess))


def _table_row(content: str, node: ElementNode, options: MarkdownOptions) -> str:
    return content.rstrip() + " |"


def _table_rule(ctx: RuleContext) -> TranslatorRule:
    table: TableState | None = ctx.state.current_table

    def postprocess(content: str, node: ElementNode, options: MarkdownOptions) -> PostResult:
        rows = [line for line in content.split("\n") if line.strip()]
        if not rows or table is None:
            return REMOVE_NODE

        counts = [count for count in table.row_cells if count]
        width = max(table.column_count, 1)
        padded = []
        for index, row in enumerate(rows):
            missing = width - counts[index] if index < len(counts) else 0
            padded.append(row + " |" * max(missing, 0))

        separator = "| " + " | ".join(
            TABLE_ALIGNMENT_MAPPING.get(table.alignments.get(column, ""), TABLE_DEFAULT_ALIGNMENT)
            for column in range(width)
        ) + " |"
        lines = [padded[0], separator, *padded[1:]]

        caption = node.find("caption")
        if caption is not None and caption.text_content().strip():
            caption_text = collapse_whitespace(caption.text_content()).strip()
            if options.escape_special:
                caption_text = escape_markdown(caption_text, options)
            lines.insert(0, f"{options.em_delimiter}{caption_text}{options.em_delimiter}\n")
        return "\n".join(lines)

    return ctx.base_rule().merge(TranslatorRule(postprocess=postprocess))


# =============================================================================
# Default table
# =============================================================================

DEFAULT_TRANSLATORS: dict[str, RuleLike] = {
    "br": _line_break,
    "hr": TranslatorRule(prefix=HORIZONTAL_RULE, recurse=False),
    "strong,b": TranslatorRule(space_if_repeating_char=True, postprocess=_delimited("strong_delimiter")),
    "em,i": TranslatorRule(space_if_repeating_char=True, postprocess=_delimited("em_delimiter")),
    "del,s,strike": TranslatorRule(space_if_repeating_char=True, postprocess=_delimited("strike_delimiter")),
    "code,kbd,samp,tt": _code_rule,
    "pre": TranslatorRule(no_escape=True, preserve_whitespace=True, postprocess=_code_block),
    **{f"h{level}": _heading(level) for level in range(1, 7)},
    "blockquote": TranslatorRule(postprocess=_blockquote),
    "ul,ol,menu": _list_rule,
    "li": _list_item_rule,
    "a": _link_rule,
    "img": TranslatorRule(recurse=False, postprocess=_image),
    "table": _table_rule,
    "thead,tbody,tfoot": TranslatorRule(surrounding_newlines=1),
    "tr": TranslatorRule(surrounding_newlines=1, postprocess=_table_row),
    "th,td": _table_cell_rule,
    "caption": TranslatorRule(ignore=True, recurse=False),
}
