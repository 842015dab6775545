"""Tests for the SmartScript parser: node construction and block structure."""

import pytest

from smartscript import parse
from smartscript.elements import (
    DoubleConstant,
    FunctionRef,
    IntegerConstant,
    Operator,
    StringLiteral,
    Variable,
)
from smartscript.errors import ParserError
from smartscript.location import SourceLocation
from smartscript.nodes import Document, Echo, ForLoop, Text
from smartscript.parser import Parser

LOC = SourceLocation.unknown()


def _text(content: str) -> Text:
    return Text(location=LOC, content=content)


def _echo(*elements) -> Echo:  # type: ignore[no-untyped-def]
    return Echo(location=LOC, elements=tuple(elements))


def _loop(variable: str, start, end, step=None, *children) -> ForLoop:  # type: ignore[no-untyped-def]
    return ForLoop(
        location=LOC,
        variable=Variable(variable),
        start=start,
        end=end,
        step=step,
        children=tuple(children),
    )


class TestText:
    """Documents without tags."""

    def test_empty_source(self) -> None:
        assert parse("").children == ()

    def test_plain_text(self) -> None:
        assert parse("Just some text.\n").children == (_text("Just some text.\n"),)

    def test_escapes_are_resolved(self) -> None:
        assert parse("a \\{$ b \\\\ c").children == (_text("a {$ b \\ c"),)

    def test_escaped_tag_open(self) -> None:
        assert parse("\\{$").children == (_text("{$"),)

    def test_whitespace_only(self) -> None:
        assert parse("  \n ").children == (_text("  \n "),)


class TestEcho:
    """{$= ... $} tags."""

    def test_variable_operator_integer(self) -> None:
        doc = parse("{$= i + 1 $}")
        assert doc.children == (_echo(Variable("i"), Operator("+"), IntegerConstant(1)),)

    def test_all_element_kinds(self) -> None:
        doc = parse('{$= i i * @sin "0.000" @decfmt 2.5 -3 $}')
        (echo,) = doc.children
        assert echo.elements == (
            Variable("i"),
            Variable("i"),
            Operator("*"),
            FunctionRef("sin"),
            StringLiteral("0.000"),
            FunctionRef("decfmt"),
            DoubleConstant(2.5),
            IntegerConstant(-3),
        )

    @pytest.mark.parametrize("symbol", ["+", "-", "*", "/", "^"])
    def test_valid_operators(self, symbol: str) -> None:
        (echo,) = parse(f"{{$= {symbol} $}}").children
        assert echo.elements == (Operator(symbol),)

    def test_no_spaces(self) -> None:
        (echo,) = parse("{$=i*2$}").children
        assert echo.elements == (Variable("i"), Operator("*"), IntegerConstant(2))

    def test_string_with_escapes(self) -> None:
        (echo,) = parse(r'{$= "Joe \"Long\" Smith\n" $}').children
        assert echo.elements == (StringLiteral('Joe "Long" Smith\n'),)

    def test_text_around_echo(self) -> None:
        doc = parse("Hi {$= name $}!")
        assert doc.children == (_text("Hi "), _echo(Variable("name")), _text("!"))

    def test_multiline_tag(self) -> None:
        (echo,) = parse("{$=\n  a\n  b\n$}").children
        assert echo.elements == (Variable("a"), Variable("b"))

    def test_location(self) -> None:
        doc = parse("ab\n cd{$= x $}")
        echo = doc.children[1]
        assert (echo.location.lineno, echo.location.col_offset) == (2, 4)


class TestForLoop:
    """{$ FOR ... $} ... {$END$} blocks."""

    def test_four_arguments(self) -> None:
        doc = parse("{$ FOR i 1 10 1 $}{$END$}")
        assert doc.children == (
            _loop("i", IntegerConstant(1), IntegerConstant(10), IntegerConstant(1)),
        )

    def test_three_arguments(self) -> None:
        (loop,) = parse("{$ FOR i 1 10 $}{$END$}").children
        assert loop.step is None
        assert loop.end == IntegerConstant(10)

    def test_mixed_argument_kinds(self) -> None:
        (loop,) = parse('{$ FOR sco_re "-1"10 "1" $}{$END$}').children
        assert loop.variable == Variable("sco_re")
        assert loop.start == StringLiteral("-1")
        assert loop.end == IntegerConstant(10)
        assert loop.step == StringLiteral("1")

    def test_adjacent_arguments(self) -> None:
        (loop,) = parse('{$ FOR i-1.35bbb"1" $}{$END$}').children
        assert loop.variable == Variable("i")
        assert loop.start == DoubleConstant(-1.35)
        assert loop.end == Variable("bbb")
        assert loop.step == StringLiteral("1")

    def test_keywords_are_case_insensitive(self) -> None:
        assert parse("{$for i 1 2$}{$end$}") == parse("{$ FOR i 1 2 $}{$ END $}")

    def test_body(self) -> None:
        doc = parse("{$ FOR i 1 3 $}Value: {$= i $}\n{$END$}")
        assert doc.children == (
            _loop(
                "i",
                IntegerConstant(1),
                IntegerConstant(3),
                None,
                _text("Value: "),
                _echo(Variable("i")),
                _text("\n"),
            ),
        )

    def test_nested_loops(self) -> None:
        doc = parse("{$FOR i 1 2$}{$FOR j 1 2$}x{$END$}y{$END$}z")
        outer, tail = doc.children
        assert tail == _text("z")
        inner, after = outer.children
        assert inner.variable == Variable("j")
        assert inner.children == (_text("x"),)
        assert after == _text("y")

    def test_sibling_loops(self) -> None:
        doc = parse("{$FOR a 1 2$}{$END$}{$FOR b 1 2$}{$END$}")
        assert [loop.variable.name for loop in doc.children] == ["a", "b"]

    def test_loop_location_is_tag_open(self) -> None:
        (loop,) = parse("\n  {$ FOR i 1 2 $}{$END$}").children[1:]
        assert (loop.location.lineno, loop.location.col_offset) == (2, 3)


class TestStructuralErrors:
    """Tag structure that must be rejected."""

    def test_end_without_for(self) -> None:
        with pytest.raises(ParserError, match="More END tags than opened blocks."):
            parse("{$END$}")

    def test_extra_end(self) -> None:
        with pytest.raises(ParserError, match="More END tags"):
            parse("{$FOR i 1 2$}{$END$}{$END$}")

    def test_missing_end(self) -> None:
        with pytest.raises(ParserError, match="Missing END tag"):
            parse("{$FOR i 1 2$}body")

    def test_missing_end_reports_open_count(self) -> None:
        with pytest.raises(ParserError, match="2 block"):
            parse("{$FOR i 1 2$}{$FOR j 1 2$}{$END$}{$FOR k 1 2$}")

    def test_unclosed_end_tag(self) -> None:
        with pytest.raises(ParserError):
            parse("{$FOR i 1 2$}{$END$")

    def test_end_tag_cut_off(self) -> None:
        with pytest.raises(ParserError, match="never closed"):
            parse("{$FOR i 1 2$}{$END")

    def test_unclosed_tag_name(self) -> None:
        with pytest.raises(ParserError, match="never closed"):
            parse("text {$   ")

    def test_unclosed_echo(self) -> None:
        with pytest.raises(ParserError, match="never closed"):
            parse("{$= i")

    def test_empty_echo(self) -> None:
        with pytest.raises(ParserError, match="Echo tag body cannot be empty."):
            parse("{$= $}")

    def test_unknown_tag(self) -> None:
        with pytest.raises(ParserError, match="Invalid tag name: 'IF'"):
            parse("{$IF 1 2$}")

    def test_invalid_operator(self) -> None:
        with pytest.raises(ParserError, match="Invalid operator: ."):
            parse("{$= 1.2.3 $}")

    def test_dollar_is_not_an_operator(self) -> None:
        with pytest.raises(ParserError, match="Invalid operator"):
            parse("{$= $ $}")

    def test_end_with_arguments(self) -> None:
        with pytest.raises(ParserError, match="END tag cannot take arguments."):
            parse("{$FOR i 1 2$}{$END i$}")


class TestForArgumentErrors:
    """FOR tag argument count and kinds."""

    def test_variable_must_start_with_letter(self) -> None:
        with pytest.raises(ParserError, match="First FOR argument must be a variable"):
            parse("{$FOR _ab 1 2$}{$END$}")

    def test_number_as_variable(self) -> None:
        with pytest.raises(ParserError, match="First FOR argument"):
            parse("{$FOR 3 1 10 1 $}{$END$}")

    def test_function_as_variable(self) -> None:
        with pytest.raises(ParserError, match="First FOR argument"):
            parse("{$FOR @sin 1 10 $}{$END$}")

    def test_no_arguments(self) -> None:
        with pytest.raises(ParserError, match="First FOR argument"):
            parse("{$FOR $}{$END$}")

    @pytest.mark.parametrize(
        ("source", "ordinal"),
        [
            ("{$FOR i $}{$END$}", "second"),
            ("{$FOR i 1 $}{$END$}", "third"),
        ],
    )
    def test_too_few_arguments(self, source: str, ordinal: str) -> None:
        with pytest.raises(ParserError, match=f"missing its {ordinal} argument"):
            parse(source)

    def test_too_many_arguments(self) -> None:
        with pytest.raises(ParserError, match="at most four arguments"):
            parse("{$FOR i 1 10 1 1 $}{$END$}")

    def test_function_as_bound(self) -> None:
        with pytest.raises(ParserError, match="Second FOR argument must be"):
            parse("{$FOR i @sin 10 $}{$END$}")

    def test_operator_as_step(self) -> None:
        with pytest.raises(ParserError, match="Fourth FOR argument must be"):
            parse("{$FOR i 1 10 * $}{$END$}")

    def test_unclosed_for(self) -> None:
        with pytest.raises(ParserError, match="never closed"):
            parse("{$FOR i 1 10")


class TestParserObject:
    """The Parser class itself."""

    def test_document_accessors(self) -> None:
        parser = Parser("abc")
        assert parser.document is parser.get_document_node()
        assert isinstance(parser.document, Document)

    def test_parse_is_eager(self) -> None:
        with pytest.raises(ParserError):
            Parser("{$END$}")

    def test_same_source_gives_equal_documents(self) -> None:
        source = "{$FOR i 1 2$}{$= i $}{$END$}"
        assert Parser(source).document == Parser(source).document

    def test_equality_ignores_location(self) -> None:
        assert parse("{$=x$}").children[0] == parse("\n\n   {$= x $}").children[0]

    def test_non_string_source(self) -> None:
        with pytest.raises(TypeError):
            Parser(b"abc")  # type: ignore[arg-type]
