#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/translator.py
"""Translator rules and the per-tag translator registry.

Every HTML tag is rendered according to a rule found in a
:class:`TranslatorRegistry`. A rule is either a static
:class:`TranslatorRule` record or a :class:`TranslatorFactory` that computes
the record for a particular node at render time (list item ordinals, table
columns, link targets).

Registries are layered. From weakest to strongest:

1. ignored tags (``ignore=True, recurse=False``)
2. block tags (``surrounding_newlines=2``)
3. built-in default translators
4. caller supplied custom translators

Static rules are shallow-merged over whatever a tag already has; factories
keep the previous rule as their ``base`` so they can extend it instead of
replacing it.

Examples
--------
A custom rule that only adds a prefix keeps the inherited block spacing:

    >>> from htmldown import MarkdownOptions, TranslatorRule
    >>> registry = build_registry(MarkdownOptions(), {"blockquote": TranslatorRule(prefix="T:")})
    >>> rule = registry.resolve("BLOCKQUOTE")
    >>> rule.prefix, rule.surrounding_newlines
    ('T:', 2)

"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from htmldown.constants import BLOCK_NEWLINES, DEFAULT_BLOCK_ELEMENTS, DEFAULT_IGNORE_ELEMENTS, ListKind
from htmldown.exceptions import RegistryFrozenError, ValidationError

if TYPE_CHECKING:
    from htmldown.context import TraversalContext
    from htmldown.nodes import ElementNode
    from htmldown.options import MarkdownOptions

logger = logging.getLogger(__name__)


class _RemoveNode:
    """Sentinel type returned by a postprocess hook to drop its node."""

    _instance: Optional[_RemoveNode] = None

    def __new__(cls) -> _RemoveNode:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REMOVE_NODE"

    def __reduce__(self) -> str:
        return "REMOVE_NODE"


REMOVE_NODE = _RemoveNode()

PostProcess = Callable[[str, "ElementNode", "MarkdownOptions"], Union[str, _RemoveNode]]


@dataclass(frozen=True)
class TranslatorRule:
    """Static rendering rule for a tag.

    Every field defaults to None, meaning "not specified", so that merging
    a rule over another only overrides what was set explicitly.

    Parameters
    ----------
    ignore : bool, optional
        Emit nothing for the node itself.
    recurse : bool, optional
        Descend into children. Defaults to ``not ignore``.
    surrounding_newlines : int, optional
        Number of newline characters separating the node from neighbouring
        output; 2 leaves one blank line. Unset or 0 renders the node inline.
    prefix, postfix : str, optional
        Literals wrapped around the rendered children.
    no_escape : bool, optional
        Disable Markdown escaping for text in the subtree.
    preserve_whitespace : bool, optional
        Keep source whitespace verbatim in the subtree.
    preserve_if_empty : bool, optional
        Render the node even if its children produce no text.
    space_if_repeating_char : bool, optional
        Insert a space before the node's output when its first character
        repeats the last character already emitted (``**a** **b**``).
    postprocess : callable, optional
        ``postprocess(content, node, options)`` returning the final text for
        the node, or :data:`REMOVE_NODE`.

    """

    ignore: Optional[bool] = None
    recurse: Optional[bool] = None
    surrounding_newlines: Optional[int] = None
    prefix: Optional[str] = None
    postfix: Optional[str] = None
    no_escape: Optional[bool] = None
    preserve_whitespace: Optional[bool] = None
    preserve_if_empty: Optional[bool] = None
    space_if_repeating_char: Optional[bool] = None
    postprocess: Optional[PostProcess] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> TranslatorRule:
        """Build a rule from a mapping of field names.

        Raises
        ------
        ValidationError
            If the mapping contains keys that are not rule fields

        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValidationError(
                f"Unknown translator rule field(s): {', '.join(unknown)}",
                parameter_name="custom_rules",
                parameter_value=dict(values),
            )
        return cls(**values)

    def merge(self, other: TranslatorRule) -> TranslatorRule:
        """Return a copy of this rule with the fields set on ``other`` overriding."""
        updates = {f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None}
        return replace(self, **updates) if updates else self

    @property
    def is_block(self) -> bool:
        return bool(self.surrounding_newlines)

    @property
    def should_recurse(self) -> bool:
        if self.recurse is not None:
            return self.recurse
        return not self.ignore


@dataclass(frozen=True)
class RuleContext:
    """What a :class:`TranslatorFactory` knows about the node being rendered.

    Parameters
    ----------
    node : ElementNode
        The element being rendered
    options : MarkdownOptions
        Options of the converter
    state : TraversalContext
        Traversal state of the current document
    base : TranslatorRule or TranslatorFactory, optional
        Rule registered for the tag before the factory was layered on top

    """

    node: ElementNode
    options: MarkdownOptions
    state: TraversalContext
    base: Optional[Rule] = None

    @property
    def parent(self) -> Optional[ElementNode]:
        return self.node.parent

    @property
    def list_kind(self) -> Optional[ListKind]:
        current = self.state.current_list
        return current.kind if current else None

    @property
    def list_depth(self) -> int:
        return self.state.list_depth

    @property
    def list_item_number(self) -> Optional[int]:
        """Ordinal of the current ``<li>``; only meaningful while rendering one."""
        current = self.state.current_list
        return current.next_number - 1 if current else None

    @property
    def table_row_index(self) -> Optional[int]:
        table = self.state.current_table
        return table.row_index if table else None

    @property
    def table_column_index(self) -> Optional[int]:
        table = self.state.current_table
        return table.column_index if table else None

    @property
    def no_escape(self) -> bool:
        return self.state.no_escape

    @property
    def preserve_whitespace(self) -> bool:
        return self.state.preserve_whitespace

    def base_rule(self) -> TranslatorRule:
        """Resolve ``base`` to a static rule.

        A factory base is invoked with this context, re-pointed at its own
        base, so chains of factories resolve from the bottom up.
        """
        return resolve_rule(self.base, replace(self, base=None))


@dataclass(frozen=True)
class TranslatorFactory:
    """Rule computed per node.

    Parameters
    ----------
    func : callable
        ``func(ctx: RuleContext)`` returning a :class:`TranslatorRule` (or a
        mapping of rule fields)
    base : TranslatorRule or TranslatorFactory, optional
        Rule this factory was layered over

    """

    func: Callable[[RuleContext], Union[TranslatorRule, Mapping[str, Any]]]
    base: Optional[Rule] = None

    def __call__(self, ctx: RuleContext) -> TranslatorRule:
        result = self.func(replace(ctx, base=self.base))
        if isinstance(result, TranslatorRule):
            return result
        if isinstance(result, Mapping):
            return TranslatorRule.from_mapping(result)
        raise ValidationError(
            f"Translator factory for <{ctx.node.tag}> returned {type(result).__name__}, expected TranslatorRule",
            parameter_name="custom_rules",
            parameter_value=result,
        )


Rule = Union[TranslatorRule, TranslatorFactory]
RuleLike = Union[TranslatorRule, TranslatorFactory, Mapping[str, Any], Callable[[RuleContext], Any]]

DEFAULT_RULE = TranslatorRule()


def resolve_rule(rule: Optional[Rule], ctx: RuleContext) -> TranslatorRule:
    """Turn a registered rule into a static record for the node in ``ctx``."""
    if rule is None:
        return DEFAULT_RULE
    if isinstance(rule, TranslatorFactory):
        return rule(ctx)
    return rule


def coerce_rule(value: RuleLike) -> Rule:
    """Normalize the accepted custom rule shapes to a :data:`Rule`.

    Raises
    ------
    ValidationError
        If ``value`` is not a rule, factory, mapping or callable

    """
    if isinstance(value, (TranslatorRule, TranslatorFactory)):
        return value
    if isinstance(value, Mapping):
        return TranslatorRule.from_mapping(value)
    if callable(value):
        return TranslatorFactory(value)
    raise ValidationError(
        f"Unsupported translator rule type: {type(value).__name__}",
        parameter_name="custom_rules",
        parameter_value=value,
    )


def _merge_over_factory(static: TranslatorRule, existing: TranslatorFactory) -> TranslatorFactory:
    def merged(ctx: RuleContext) -> TranslatorRule:
        return ctx.base_rule().merge(static)

    return TranslatorFactory(merged, base=existing)


def split_tags(keys: str) -> list[str]:
    """Split a comma-joined tag list into normalized tag names."""
    return [key.strip().lower() for key in keys.split(",") if key.strip()]


class TranslatorRegistry:
    """Mapping of lower-cased tag names to translator rules.

    Rules are added with :meth:`set` while the registry is being built. Once
    :meth:`freeze` has been called the registry is read-only and can be shared
    by any number of translations.
    """

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}
        self._frozen = False

    def set(self, keys: str, rule: RuleLike, preserve_base: bool = False) -> None:
        """Register ``rule`` for every tag in the comma-joined ``keys``.

        Parameters
        ----------
        keys : str
            One tag or a comma-joined list of tags
        rule : TranslatorRule, TranslatorFactory, mapping or callable
            Rule to register
        preserve_base : bool, default False
            Layer the rule over an existing one (merge a static rule, attach
            the existing rule as a factory's base) instead of replacing it

        Raises
        ------
        RegistryFrozenError
            If the registry has been frozen

        """
        new_rule = coerce_rule(rule)
        for tag in split_tags(keys):
            if self._frozen:
                raise RegistryFrozenError(tag)
            existing = self._rules.get(tag)
            if not preserve_base or existing is None:
                self._rules[tag] = new_rule
            elif isinstance(new_rule, TranslatorFactory):
                self._rules[tag] = replace(new_rule, base=existing)
            elif isinstance(existing, TranslatorFactory):
                self._rules[tag] = _merge_over_factory(new_rule, existing)
            else:
                self._rules[tag] = existing.merge(new_rule)

    def remove(self, keys: str) -> None:
        for tag in split_tags(keys):
            if self._frozen:
                raise RegistryFrozenError(tag)
            self._rules.pop(tag, None)

    def get(self, tag: str) -> Optional[Rule]:
        """Return the rule registered for ``tag``, or None."""
        return self._rules.get(tag.lower())

    def resolve(self, tag: str) -> Rule:
        """Return the rule for ``tag``, or the implicit default rule for unknown tags."""
        return self._rules.get(tag.lower(), DEFAULT_RULE)

    def freeze(self) -> TranslatorRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.lower() in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<TranslatorRegistry {len(self._rules)} tags ({state})>"


def build_registry(
    options: MarkdownOptions,
    custom_rules: Optional[Mapping[str, RuleLike]] = None,
    default_rules: Optional[Mapping[str, RuleLike]] = None,
) -> TranslatorRegistry:
    """Build the frozen registry for a converter.

    Parameters
    ----------
    options : MarkdownOptions
        Options supplying additional ignored and block tags
    custom_rules : mapping, optional
        Caller rules keyed by comma-joined tag lists; strongest layer
    default_rules : mapping, optional
        Built-in rules; defaults to :data:`htmldown.translators.DEFAULT_TRANSLATORS`

    Returns
    -------
    TranslatorRegistry
        Frozen registry

    """
    if default_rules is None:
        from htmldown.translators import DEFAULT_TRANSLATORS

        default_rules = DEFAULT_TRANSLATORS

    registry = TranslatorRegistry()

    for tag in sorted(DEFAULT_IGNORE_ELEMENTS | options.ignore):
        registry.set(tag, TranslatorRule(ignore=True, recurse=False))
    for tag in sorted(DEFAULT_BLOCK_ELEMENTS | options.block_elements):
        registry.set(tag, TranslatorRule(surrounding_newlines=BLOCK_NEWLINES), preserve_base=True)

    for layer in (default_rules, custom_rules or {}):
        for keys, rule in layer.items():
            registry.set(keys, rule, preserve_base=True)

    logger.debug(
        "Built translator registry with %d tags (%d custom rule entries)", len(registry), len(custom_rules or {})
    )
    return registry.freeze()
