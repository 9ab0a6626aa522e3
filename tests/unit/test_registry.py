#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_registry.py
"""Unit tests for translator rules and the translator registry.

Tests cover:
- Rule coercion from mappings and callables
- Layering of ignore, block, default and custom rules
- Factory base chaining
- Frozen registries
"""

import pytest

from htmldown.context import TraversalContext
from htmldown.exceptions import RegistryFrozenError, ValidationError
from htmldown.nodes import ElementNode
from htmldown.options import MarkdownOptions
from htmldown.translator import (
    DEFAULT_RULE,
    REMOVE_NODE,
    RuleContext,
    TranslatorFactory,
    TranslatorRegistry,
    TranslatorRule,
    build_registry,
    coerce_rule,
    resolve_rule,
    split_tags,
)


def _resolve(registry: TranslatorRegistry, tag: str, options: MarkdownOptions | None = None) -> TranslatorRule:
    ctx = RuleContext(ElementNode(tag), options or MarkdownOptions(), TraversalContext())
    return resolve_rule(registry.resolve(tag), ctx)


@pytest.mark.unit
class TestTranslatorRule:
    """Tests for TranslatorRule records."""

    def test_all_fields_unset_by_default(self) -> None:
        rule = TranslatorRule()
        assert rule.ignore is None
        assert rule.surrounding_newlines is None
        assert not rule.is_block
        assert rule.should_recurse

    def test_recurse_defaults_to_not_ignore(self) -> None:
        assert not TranslatorRule(ignore=True).should_recurse
        assert TranslatorRule(ignore=True, recurse=True).should_recurse

    def test_merge_only_overrides_set_fields(self) -> None:
        base = TranslatorRule(surrounding_newlines=2, prefix="> ")
        merged = base.merge(TranslatorRule(prefix="Q: "))
        assert merged.surrounding_newlines == 2
        assert merged.prefix == "Q: "

    def test_from_mapping(self) -> None:
        rule = TranslatorRule.from_mapping({"prefix": "*", "postfix": "*"})
        assert rule == TranslatorRule(prefix="*", postfix="*")

    def test_from_mapping_unknown_field(self) -> None:
        with pytest.raises(ValidationError, match="surround"):
            TranslatorRule.from_mapping({"surround": 2})

    def test_remove_node_is_singleton(self) -> None:
        assert type(REMOVE_NODE)() is REMOVE_NODE
        assert repr(REMOVE_NODE) == "REMOVE_NODE"


@pytest.mark.unit
class TestCoercion:
    """Tests for coerce_rule and split_tags."""

    def test_mapping_becomes_rule(self) -> None:
        assert coerce_rule({"ignore": True}) == TranslatorRule(ignore=True)

    def test_callable_becomes_factory(self) -> None:
        def factory(ctx):
            return TranslatorRule()

        rule = coerce_rule(factory)
        assert isinstance(rule, TranslatorFactory)
        assert rule.func is factory

    def test_unsupported_type(self) -> None:
        with pytest.raises(ValidationError):
            coerce_rule(42)  # type: ignore[arg-type]

    def test_split_tags(self) -> None:
        assert split_tags(" Strong, B ,,i") == ["strong", "b", "i"]


@pytest.mark.unit
class TestTranslatorRegistry:
    """Tests for TranslatorRegistry."""

    def test_set_multiple_keys(self) -> None:
        registry = TranslatorRegistry()
        registry.set("strong,b", TranslatorRule(prefix="**"))
        assert "strong" in registry
        assert "B" in registry
        assert len(registry) == 2
        assert sorted(registry) == ["b", "strong"]

    def test_lookup_is_case_insensitive(self) -> None:
        registry = TranslatorRegistry()
        registry.set("P", TranslatorRule(surrounding_newlines=2))
        assert registry.get("p") is registry.get("P")
        assert registry.resolve("p").surrounding_newlines == 2

    def test_unknown_tag_resolves_to_default(self) -> None:
        registry = TranslatorRegistry()
        assert registry.get("span") is None
        assert registry.resolve("span") is DEFAULT_RULE
        assert 42 not in registry

    def test_set_replaces_without_preserve_base(self) -> None:
        registry = TranslatorRegistry()
        registry.set("p", TranslatorRule(surrounding_newlines=2))
        registry.set("p", TranslatorRule(prefix="x"))
        assert registry.resolve("p") == TranslatorRule(prefix="x")

    def test_set_merges_with_preserve_base(self) -> None:
        registry = TranslatorRegistry()
        registry.set("p", TranslatorRule(surrounding_newlines=2))
        registry.set("p", TranslatorRule(prefix="x"), preserve_base=True)
        assert registry.resolve("p") == TranslatorRule(surrounding_newlines=2, prefix="x")

    def test_factory_keeps_base(self) -> None:
        base = TranslatorRule(surrounding_newlines=2)
        registry = TranslatorRegistry()
        registry.set("p", base)
        registry.set("p", lambda ctx: ctx.base_rule().merge(TranslatorRule(prefix="> ")), preserve_base=True)

        factory = registry.get("p")
        assert isinstance(factory, TranslatorFactory)
        assert factory.base is base
        rule = _resolve(registry, "p")
        assert rule.surrounding_newlines == 2
        assert rule.prefix == "> "

    def test_static_over_factory_merges_at_render_time(self) -> None:
        registry = TranslatorRegistry()
        registry.set("p", lambda ctx: TranslatorRule(surrounding_newlines=2, prefix="A"))
        registry.set("p", TranslatorRule(postfix="B"), preserve_base=True)
        rule = _resolve(registry, "p")
        assert (rule.surrounding_newlines, rule.prefix, rule.postfix) == (2, "A", "B")

    def test_factory_chain(self) -> None:
        registry = TranslatorRegistry()
        registry.set("p", TranslatorRule(surrounding_newlines=2))
        registry.set("p", lambda ctx: ctx.base_rule().merge(TranslatorRule(prefix="1")), preserve_base=True)
        registry.set(
            "p",
            lambda ctx: ctx.base_rule().merge(TranslatorRule(prefix=(ctx.base_rule().prefix or "") + "2")),
            preserve_base=True,
        )
        rule = _resolve(registry, "p")
        assert rule.prefix == "12"
        assert rule.surrounding_newlines == 2

    def test_base_rule_without_base(self) -> None:
        ctx = RuleContext(ElementNode("p"), MarkdownOptions(), TraversalContext())
        assert ctx.base_rule() is DEFAULT_RULE

    def test_factory_may_return_mapping(self) -> None:
        registry = TranslatorRegistry()
        registry.set("p", lambda ctx: {"prefix": "#"})
        assert _resolve(registry, "p").prefix == "#"

    def test_factory_bad_return_type(self) -> None:
        registry = TranslatorRegistry()
        registry.set("p", lambda ctx: "not a rule")
        with pytest.raises(ValidationError, match="<p>"):
            _resolve(registry, "p")

    def test_frozen_registry_rejects_changes(self) -> None:
        registry = TranslatorRegistry()
        registry.set("p", TranslatorRule())
        assert registry.freeze() is registry
        assert registry.frozen
        with pytest.raises(RegistryFrozenError) as exc_info:
            registry.set("div", TranslatorRule())
        assert exc_info.value.tag == "div"
        with pytest.raises(RegistryFrozenError):
            registry.remove("p")
        assert "p" in registry

    def test_remove(self) -> None:
        registry = TranslatorRegistry()
        registry.set("p,div", TranslatorRule())
        registry.remove("P")
        assert "p" not in registry
        assert "div" in registry


@pytest.mark.unit
class TestBuildRegistry:
    """Tests for build_registry layering."""

    def test_result_is_frozen(self) -> None:
        registry = build_registry(MarkdownOptions())
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.set("p", TranslatorRule())

    def test_ignored_tags(self) -> None:
        registry = build_registry(MarkdownOptions())
        rule = registry.resolve("script")
        assert rule.ignore is True
        assert rule.recurse is False

    def test_extra_ignored_and_block_tags(self) -> None:
        registry = build_registry(MarkdownOptions(ignore=["nav"], block_elements=["x-card"]))
        assert registry.resolve("NAV").ignore
        assert registry.resolve("x-card").surrounding_newlines == 2

    def test_block_tags(self) -> None:
        registry = build_registry(MarkdownOptions())
        assert registry.resolve("p").surrounding_newlines == 2
        assert registry.resolve("div").surrounding_newlines == 2

    def test_defaults_merge_over_block_layer(self) -> None:
        registry = build_registry(MarkdownOptions())
        heading = registry.resolve("h2")
        assert heading.surrounding_newlines == 2
        assert heading.prefix == "## "

    def test_custom_static_rule_keeps_inherited_fields(self) -> None:
        registry = build_registry(MarkdownOptions(), {"blockquote": TranslatorRule(prefix="T:")})
        rule = registry.resolve("BLOCKQUOTE")
        assert rule.prefix == "T:"
        assert rule.surrounding_newlines == 2
        assert rule.postprocess is not None

    def test_custom_static_rule_over_default_factory(self) -> None:
        registry = build_registry(MarkdownOptions(), {"table": {"prefix": "T:"}})
        rule = _resolve(registry, "table")
        assert rule.prefix == "T:"
        assert rule.surrounding_newlines == 2
        assert rule.postprocess is not None

    def test_custom_rule_for_unknown_tag(self) -> None:
        registry = build_registry(MarkdownOptions(), {"mark": {"prefix": "==", "postfix": "=="}})
        assert registry.resolve("mark") == TranslatorRule(prefix="==", postfix="==")

    def test_custom_rules_can_unignore(self) -> None:
        registry = build_registry(MarkdownOptions(), {"title": {"ignore": False, "recurse": True}})
        rule = registry.resolve("title")
        assert not rule.ignore
        assert rule.should_recurse

    def test_explicit_default_rules(self) -> None:
        registry = build_registry(MarkdownOptions(), default_rules={})
        assert registry.resolve("h1") == TranslatorRule(surrounding_newlines=2)
