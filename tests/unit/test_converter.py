#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_converter.py
"""Unit tests for HtmlToMarkdown and the translate() entry point."""

import logging

import pytest

from htmldown import HtmlToMarkdown, MarkdownOptions, TranslatorRule, translate
from htmldown.exceptions import HtmlDownError, RegistryFrozenError, ValidationError


@pytest.mark.unit
class TestHtmlToMarkdown:
    """Tests for the converter class."""

    def test_translate_string(self, converter) -> None:
        assert converter.translate("<p>Hello <b>world</b></p>") == "Hello **world**"

    def test_translate_mapping(self, converter) -> None:
        result = converter.translate({"a": "<h1>X</h1>", "b": "<p>Y</p>"})
        assert result == {"a": "# X", "b": "Y"}

    def test_empty_mapping(self, converter) -> None:
        assert converter.translate({}) == {}

    def test_empty_string(self, converter) -> None:
        assert converter.translate("") == ""

    def test_documents_do_not_share_state(self, converter) -> None:
        first = converter.translate("<ol><li>a</li><li>b</li></ol>")
        second = converter.translate("<ol><li>c</li></ol>")
        assert first == "1. a\n2. b"
        assert second == "1. c"

    def test_unsupported_input(self, converter) -> None:
        with pytest.raises(ValidationError) as exc_info:
            converter.translate(42)  # type: ignore[call-overload]
        assert exc_info.value.parameter_name == "html"

    def test_non_string_document_in_mapping(self, converter) -> None:
        with pytest.raises(ValidationError, match="'bad'"):
            converter.translate({"bad": b"<p>x</p>"})  # type: ignore[dict-item]

    def test_invalid_options_type(self) -> None:
        with pytest.raises(ValidationError):
            HtmlToMarkdown(options={"bullet_marker": "-"})  # type: ignore[arg-type]

    def test_registry_is_frozen(self, converter) -> None:
        assert converter.registry.frozen
        with pytest.raises(RegistryFrozenError):
            converter.registry.set("p", TranslatorRule())

    def test_custom_rules(self) -> None:
        converter = HtmlToMarkdown(custom_rules={"mark": {"prefix": "==", "postfix": "=="}})
        assert converter.translate("<p>a <mark>b</mark></p>") == "a ==b=="

    def test_invalid_custom_rule(self) -> None:
        with pytest.raises(ValidationError):
            HtmlToMarkdown(custom_rules={"p": {"not_a_field": True}})

    def test_debug_logging(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="htmldown"):
            HtmlToMarkdown().translate("<p>x</p>")
        assert "Built translator registry" in caplog.text
        assert "Translating document" in caplog.text


@pytest.mark.unit
class TestTranslateFunction:
    """Tests for the translate() convenience function."""

    def test_string(self) -> None:
        assert translate("<h2>Title</h2>") == "## Title"

    def test_mapping(self) -> None:
        assert translate({"one": "<em>a</em>"}) == {"one": "_a_"}

    def test_options_object(self) -> None:
        assert translate("<ul><li>a</li></ul>", MarkdownOptions(bullet_marker="+")) == "+ a"

    def test_keyword_overrides(self) -> None:
        options = MarkdownOptions(bullet_marker="+")
        assert translate("<ul><li>a</li></ul>", options, bullet_marker="-") == "- a"

    def test_unknown_keyword(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            translate("<p>x</p>", no_such_option=True)
        assert isinstance(exc_info.value.original_error, TypeError)

    def test_invalid_keyword_value(self) -> None:
        with pytest.raises(ValidationError):
            translate("<p>x</p>", max_consecutive_newlines=-1)

    def test_custom_rules(self) -> None:
        rules = {"h1": TranslatorRule(prefix="Title: ")}
        assert translate("<h1>A</h1>", custom_rules=rules) == "Title: A"

    def test_errors_share_base_class(self) -> None:
        with pytest.raises(HtmlDownError):
            translate(None)  # type: ignore[call-overload]
