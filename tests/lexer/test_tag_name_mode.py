"""Tests for the lexer's TAG_NAME mode."""

import pytest

from smartscript.errors import LexerError
from smartscript.lexer import Lexer, LexerMode
from smartscript.tokens import Token, TokenType


def _tag_name(source: str) -> Token:
    lexer = Lexer(source)
    lexer.mode = LexerMode.TAG_NAME
    return lexer.next_token()


class TestTagNames:
    """Names that may follow "{$"."""

    def test_equals_sign(self) -> None:
        assert _tag_name("= i $}") == Token(TokenType.TAG_NAME, "=")

    def test_equals_sign_without_space(self) -> None:
        lexer = Lexer("=i$}")
        lexer.mode = LexerMode.TAG_NAME
        assert lexer.next_token() == Token(TokenType.TAG_NAME, "=")
        lexer.mode = LexerMode.TAG_BODY
        assert lexer.next_token() == Token(TokenType.VARIABLE, "i")

    @pytest.mark.parametrize("name", ["FOR", "for", "End", "custom_tag1"])
    def test_keywords_are_returned_as_written(self, name: str) -> None:
        assert _tag_name(f"  {name} x") == Token(TokenType.TAG_NAME, name)

    def test_leading_whitespace_is_skipped(self) -> None:
        token = _tag_name(" \t\n FOR")
        assert token == Token(TokenType.TAG_NAME, "FOR")
        assert (token.lineno, token.col) == (2, 2)

    def test_name_stops_at_tag_close(self) -> None:
        lexer = Lexer("END$}")
        lexer.mode = LexerMode.TAG_NAME
        assert lexer.next_token() == Token(TokenType.TAG_NAME, "END")
        lexer.mode = LexerMode.TAG_BODY
        assert lexer.next_token() == Token(TokenType.TAG_CLOSE, "$}")


class TestTagNameErrors:
    """Invalid input in TAG_NAME mode."""

    def test_only_whitespace_is_eof(self) -> None:
        assert _tag_name("   ") == Token(TokenType.EOF)

    def test_name_must_start_with_letter(self) -> None:
        with pytest.raises(LexerError, match="First letter of name is not valid"):
            _tag_name("_for")

    def test_digit_is_not_a_name(self) -> None:
        with pytest.raises(LexerError, match="First letter of name is not valid"):
            _tag_name("1abc")

    def test_tag_close_is_not_a_name(self) -> None:
        with pytest.raises(LexerError):
            _tag_name("$}")
