"""Tests for TemplateRenderer and to_text."""

import pytest

from smartscript import parse, to_text
from smartscript.elements import (
    DoubleConstant,
    FunctionRef,
    IntegerConstant,
    Operator,
    StringLiteral,
    Variable,
)
from smartscript.errors import RenderError
from smartscript.location import SourceLocation
from smartscript.nodes import Document, Echo, ForLoop, Node, Text
from smartscript.renderers import ASTRenderer, TemplateRenderer, render_element
from smartscript.renderers.template import escape_string, escape_text, format_double

LOC = SourceLocation.unknown()


class TestRenderShapes:
    """Rendered output has a canonical shape."""

    def test_text(self) -> None:
        assert to_text(parse("plain text")) == "plain text"

    def test_echo(self) -> None:
        assert to_text(parse("{$=i+1$}")) == "{$= i + 1 $}"

    def test_for_loop_without_step(self) -> None:
        assert to_text(parse("{$for i 1 3$}x{$end$}")) == "{$ FOR i 1 3 $}x{$END$}"

    def test_for_loop_with_step(self) -> None:
        source = '{$ FOR sco_re "-1"10 "1" $}{$END$}'
        assert to_text(parse(source)) == '{$ FOR sco_re "-1" 10 "1" $}{$END$}'

    def test_nested(self) -> None:
        source = "{$FOR i 1 2$}{$FOR j 1 2$}{$=i j$}{$END$}{$END$}"
        assert to_text(parse(source)) == (
            "{$ FOR i 1 2 $}{$ FOR j 1 2 $}{$= i j $}{$END$}{$END$}"
        )

    def test_empty_document(self) -> None:
        assert to_text(parse("")) == ""


class TestEscaping:
    """Text and strings are re-escaped so they parse back the same."""

    def test_text_tag_open_is_escaped(self) -> None:
        assert escape_text("a{$b") == "a\\{$b"

    def test_text_backslash_is_escaped(self) -> None:
        assert escape_text("a\\b") == "a\\\\b"

    def test_text_lone_brace_is_not_escaped(self) -> None:
        assert escape_text("a { b") == "a { b"

    def test_text_trailing_brace_is_escaped(self) -> None:
        assert escape_text("a{") == "a\\{"
        assert escape_text("a\\{") == "a\\\\\\{"

    def test_string_escapes(self) -> None:
        assert escape_string('a"b\\c\nd\re\tf') == 'a\\"b\\\\c\\nd\\re\\tf'

    def test_escaped_text_round_trips(self) -> None:
        source = "x \\{$ y \\\\ z"
        assert parse(to_text(parse(source))) == parse(source)

    def test_string_round_trips(self) -> None:
        source = r'{$= "q\"uote\\ \n\t\r" $}'
        assert parse(to_text(parse(source))) == parse(source)


class TestElements:
    """render_element covers every element kind."""

    @pytest.mark.parametrize(
        ("element", "expected"),
        [
            (Variable("i"), "i"),
            (FunctionRef("sin"), "@sin"),
            (StringLiteral("a b"), '"a b"'),
            (IntegerConstant(-42), "-42"),
            (DoubleConstant(2.5), "2.5"),
            (Operator("^"), "^"),
        ],
    )
    def test_element(self, element, expected: str) -> None:  # type: ignore[no-untyped-def]
        assert render_element(element) == expected

    def test_unknown_element(self) -> None:
        with pytest.raises(RenderError):
            render_element("i")  # type: ignore[arg-type]


class TestDoubleFormatting:
    """Doubles are always written in plain decimal notation."""

    def test_whole_number_keeps_decimal_point(self) -> None:
        assert format_double(3.0) == "3.0"

    def test_large_value_has_no_exponent(self) -> None:
        assert format_double(1e16) == "10000000000000000.0"

    def test_small_value_has_no_exponent(self) -> None:
        text = format_double(1.5e-7)
        assert "e" not in text
        assert float(text) == 1.5e-7

    def test_negative(self) -> None:
        assert format_double(-0.25) == "-0.25"

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite(self, value: float) -> None:
        with pytest.raises(RenderError):
            format_double(value)

    def test_large_double_round_trips(self) -> None:
        doc = Document(location=LOC, children=(Echo(location=LOC, elements=(DoubleConstant(1e300),)),))
        assert parse(to_text(doc)) == doc


class TestRendererObject:
    """TemplateRenderer as an ASTRenderer."""

    def test_conforms_to_protocol(self) -> None:
        renderer: ASTRenderer = TemplateRenderer()
        assert renderer.render(parse("x")) == "x"

    def test_renders_constructed_tree(self) -> None:
        doc = Document(
            location=LOC,
            children=(
                ForLoop(
                    location=LOC,
                    variable=Variable("i"),
                    start=IntegerConstant(0),
                    end=Variable("n"),
                    step=DoubleConstant(0.5),
                    children=(Text(location=LOC, content="-"),),
                ),
            ),
        )
        assert TemplateRenderer().render(doc) == "{$ FOR i 0 n 0.5 $}-{$END$}"

    def test_unknown_node(self) -> None:
        doc = Document(location=LOC, children=(Node(location=LOC),))  # type: ignore[arg-type]
        with pytest.raises(RenderError, match="Node"):
            TemplateRenderer().render(doc)
