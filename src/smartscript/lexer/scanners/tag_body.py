"""Tag body mode scanner mixin."""

import math

from smartscript.errors import LexerError
from smartscript.lexer.modes import INT_MAX, INT_MIN, STRING_ESCAPES, TAG_CLOSE
from smartscript.tokens import Token, TokenType


class TagBodyScannerMixin:
    """Mixin providing tag body mode scanning logic.

    Rules are tried in order after skipping whitespace:
    1. "$}"            -> TAG_CLOSE
    2. "@" + name      -> FUNCTION_NAME
    3. '"' ... '"'     -> STRING_LITERAL
    4. digit, or "-" followed by a digit -> INTEGER_LITERAL / DOUBLE_LITERAL
    5. letter + name   -> VARIABLE
    6. anything else   -> OPERATOR (single character, including a lone "-")

    No separator is required between arguments: ``i-1.35bbb"1"`` scans as
    VARIABLE, DOUBLE_LITERAL, VARIABLE, STRING_LITERAL.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int

    def _save_location(self) -> None:
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str | int | float) -> Token:
        raise NotImplementedError

    def _error(self, message: str) -> LexerError:
        raise NotImplementedError

    def _eof_or_raise(self) -> Token:
        raise NotImplementedError

    def _skip_whitespace(self) -> None:
        raise NotImplementedError

    def _skip_digits(self) -> int:
        raise NotImplementedError

    def _peek(self, offset: int = 0) -> str:
        raise NotImplementedError

    def _at(self, sequence: str) -> bool:
        raise NotImplementedError

    def _advance(self) -> str:
        raise NotImplementedError

    def _scan_name(self) -> str:
        raise NotImplementedError

    def _scan_tag_body(self) -> Token:
        """Scan one tag argument, TAG_CLOSE, or EOF if only whitespace remains.

        Raises:
            LexerError: On malformed strings, numerals or names
        """
        self._skip_whitespace()
        if self._pos >= self._source_len:
            return self._eof_or_raise()

        self._save_location()
        char = self._source[self._pos]

        if self._at(TAG_CLOSE):
            self._advance()
            self._advance()
            return self._make_token(TokenType.TAG_CLOSE, TAG_CLOSE)

        if char == "@":
            self._advance()
            return self._make_token(TokenType.FUNCTION_NAME, self._scan_name())

        if char == '"':
            return self._make_token(TokenType.STRING_LITERAL, self._scan_string())

        if char.isdecimal() or (char == "-" and self._peek(1).isdecimal()):
            return self._scan_number()

        if char.isalpha():
            return self._make_token(TokenType.VARIABLE, self._scan_name())

        self._advance()
        return self._make_token(TokenType.OPERATOR, char)

    def _scan_string(self) -> str:
        """Scan a double-quoted string literal, resolving escapes.

        Must be called with the cursor on the opening quote.

        Raises:
            LexerError: On an unsupported escape or a missing closing quote
        """
        self._advance()  # opening quote
        parts: list[str] = []
        while self._pos < self._source_len:
            char = self._source[self._pos]
            if char == "\\":
                escaped = self._peek(1)
                if not escaped:
                    raise self._error("Started escape sequence did not end.")
                replacement = STRING_ESCAPES.get(escaped)
                if replacement is None:
                    raise self._error(f"Cannot escape character {escaped!r}.")
                parts.append(replacement)
                self._advance()
                self._advance()
            elif char == '"':
                self._advance()
                return "".join(parts)
            else:
                parts.append(char)
                self._advance()
        raise self._error("String was never terminated.")

    def _scan_number(self) -> Token:
        """Scan an INTEGER_LITERAL or DOUBLE_LITERAL.

        Syntax is an optional "-", one or more digits, and optionally a
        "." followed by one or more digits. The decimal point selects the
        double type.

        Raises:
            LexerError: If the decimal point has no digits after it, or the
                value does not fit its type
        """
        start = self._pos
        if self._peek() == "-":
            self._advance()
        if self._skip_digits() == 0:
            raise self._error(f"Could not extract a number from position {start}.")

        if self._peek() != ".":
            literal = self._source[start : self._pos]
            try:
                value = int(literal)
            except ValueError as exc:
                raise self._error(f"Could not extract 'int' from {_clip(literal)!r}.") from exc
            if not INT_MIN <= value <= INT_MAX:
                raise self._error(f"Integer literal {_clip(literal)!r} is out of range.")
            return self._make_token(TokenType.INTEGER_LITERAL, value)

        self._advance()  # decimal point
        if self._skip_digits() == 0:
            raise self._error("Double value cannot end with a decimal point.")

        literal = self._source[start : self._pos]
        try:
            number = float(literal)
        except ValueError as exc:
            raise self._error(f"Could not extract 'double' from {_clip(literal)!r}.") from exc
        if not math.isfinite(number):
            raise self._error(f"Double literal {_clip(literal)!r} is out of range.")
        return self._make_token(TokenType.DOUBLE_LITERAL, number)


def _clip(literal: str) -> str:
    """Shorten a numeral for error messages."""
    if len(literal) > 20:
        return literal[:17] + "..."
    return literal
