"""Tag name mode scanner mixin."""

from smartscript.tokens import Token, TokenType


class TagNameScannerMixin:
    """Mixin providing tag name mode scanning logic.

    Right after "{$" the lexer expects either "=" (echo tag) or a
    keyword such as FOR or END. Keywords are returned as written; the
    parser compares them case-insensitively.

    """

    # These will be set by the Lexer class
    _source_len: int
    _pos: int

    def _save_location(self) -> None:
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str | int | float) -> Token:
        raise NotImplementedError

    def _eof_or_raise(self) -> Token:
        raise NotImplementedError

    def _skip_whitespace(self) -> None:
        raise NotImplementedError

    def _peek(self, offset: int = 0) -> str:
        raise NotImplementedError

    def _advance(self) -> str:
        raise NotImplementedError

    def _scan_name(self) -> str:
        raise NotImplementedError

    def _scan_tag_name(self) -> Token:
        """Scan a TAG_NAME token, or EOF if only whitespace remains.

        Raises:
            LexerError: If the name does not start with a letter
        """
        self._skip_whitespace()
        if self._pos >= self._source_len:
            return self._eof_or_raise()

        self._save_location()
        if self._peek() == "=":
            self._advance()
            return self._make_token(TokenType.TAG_NAME, "=")

        return self._make_token(TokenType.TAG_NAME, self._scan_name())
