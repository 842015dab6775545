"""Text mode scanner mixin."""

from smartscript.errors import LexerError
from smartscript.lexer.modes import TAG_OPEN, TEXT_ESCAPES
from smartscript.tokens import Token, TokenType


class TextScannerMixin:
    """Mixin providing text mode scanning logic.

    Outside tags the lexer produces either TAG_OPEN for "{$" or one
    PLAIN_TEXT token covering everything up to the next unescaped "{$".

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int

    def _save_location(self) -> None:
        """Save current location for token creation."""
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str | int | float) -> Token:
        """Create token at the saved location. Implemented by Lexer."""
        raise NotImplementedError

    def _error(self, message: str) -> LexerError:
        """Build a located LexerError. Implemented by Lexer."""
        raise NotImplementedError

    def _peek(self, offset: int = 0) -> str:
        raise NotImplementedError

    def _at(self, sequence: str) -> bool:
        raise NotImplementedError

    def _advance(self) -> str:
        raise NotImplementedError

    def _scan_text(self) -> Token:
        """Scan a TAG_OPEN or a PLAIN_TEXT token.

        Escapes: "\\\\" produces a backslash and "\\{" an opening brace, so
        "\\{$" is literal text rather than a tag opening.

        Raises:
            LexerError: On any other escape or a trailing lone backslash
        """
        self._save_location()

        if self._at(TAG_OPEN):
            self._advance()
            self._advance()
            return self._make_token(TokenType.TAG_OPEN, TAG_OPEN)

        parts: list[str] = []
        while self._pos < self._source_len:
            char = self._source[self._pos]
            if char == "\\":
                escaped = self._peek(1)
                if not escaped:
                    raise self._error("Started escape sequence did not end.")
                replacement = TEXT_ESCAPES.get(escaped)
                if replacement is None:
                    raise self._error(f"Cannot escape character {escaped!r}.")
                parts.append(replacement)
                self._advance()
                self._advance()
            elif self._at(TAG_OPEN):
                break
            else:
                parts.append(char)
                self._advance()

        if not parts:
            raise self._error(f"Could not extract token from position {self._pos}.")
        return self._make_token(TokenType.PLAIN_TEXT, "".join(parts))
