"""Token navigation utilities for SmartScript parser.

Provides mixin for pulling tokens from the lexer and building located
parser errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from smartscript.errors import LexerError, ParserError
from smartscript.lexer import LexerMode
from smartscript.tokens import Token, TokenType

if TYPE_CHECKING:
    from smartscript.lexer import Lexer


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _lexer: Lexer
        - _source_file: str | None

    """

    _lexer: Lexer
    _source_file: str | None

    def _next(self, mode: LexerMode) -> Token:
        """Switch the lexer to mode and pull the next token.

        Raises:
            ParserError: Wrapping any LexerError, with the same message
        """
        self._lexer.mode = mode
        try:
            return self._lexer.next_token()
        except LexerError as exc:
            raise ParserError(
                exc.message,
                lineno=exc.lineno,
                col_offset=exc.col_offset,
                source_file=self._source_file,
            ) from exc

    def _error(self, message: str, token: Token | None = None) -> ParserError:
        """Build a ParserError, located at token when given."""
        if token is None:
            return ParserError(message, source_file=self._source_file)
        return ParserError(
            message,
            lineno=token.lineno,
            col_offset=token.col,
            source_file=self._source_file,
        )

    def _describe(self, token: Token) -> str:
        """Human-readable token description for error messages."""
        if token.type == TokenType.EOF:
            return "end of input"
        kind = token.type.name.lower().replace("_", " ")
        return f"{kind} {token.value!r}"
