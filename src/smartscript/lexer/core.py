"""Pull-based state-machine lexer for SmartScript templates.

The parser owns the lexer's mode. Before every ``next_token()`` call it
sets ``lexer.mode`` to the grammar position it is in; the lexer scans
exactly one token under that mode's rules and stops. It never infers
from context whether it is inside a tag.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from smartscript.errors import LexerError
from smartscript.lexer.modes import TAG_WHITESPACE, LexerMode
from smartscript.lexer.scanners import (
    TagBodyScannerMixin,
    TagNameScannerMixin,
    TextScannerMixin,
)
from smartscript.tokens import Token, TokenType


class Lexer(
    # Scanners (mode-specific scanning logic)
    TextScannerMixin,
    TagNameScannerMixin,
    TagBodyScannerMixin,
):
    """State-machine lexer driven by an externally set mode.

    Usage:
        >>> lexer = Lexer("Hi {$= name $}")
        >>> lexer.next_token()
        Token(PLAIN_TEXT, 'Hi ', 1:1)
        >>> lexer.next_token()
        Token(TAG_OPEN, '{$', 1:4)
        >>> lexer.mode = LexerMode.TAG_NAME
        >>> lexer.next_token()
        Token(TAG_NAME, '=', 1:6)

    Protocol:
        - ``next_token()`` returns EOF exactly once per exhausted stream;
          calling it again raises LexerError.
        - ``get_token()`` returns the last token without advancing and
          raises LexerError before the first ``next_token()`` call.
        - After any LexerError the lexer state is undefined; discard it.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source) to avoid repeated calls
        "_pos",
        "_lineno",
        "_col",
        "_mode",
        "_source_file",
        "_token",  # Last produced token; None until first next_token()
        "_saved_pos",
        "_saved_lineno",
        "_saved_col",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: Template source text
            source_file: Optional source file path for token locations

        Raises:
            TypeError: If source is not a string
        """
        if not isinstance(source, str):
            raise TypeError(f"source must be str, got {type(source).__name__}")
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._mode = LexerMode.TEXT
        self._source_file = source_file
        self._token: Token | None = None

        # Saved location for the token being scanned
        self._saved_pos = 0
        self._saved_lineno = 1
        self._saved_col = 1

    # =========================================================================
    # Public protocol
    # =========================================================================

    @property
    def mode(self) -> LexerMode:
        """Mode used for the next ``next_token()`` call."""
        return self._mode

    @mode.setter
    def mode(self, mode: LexerMode) -> None:
        if not isinstance(mode, LexerMode):
            raise TypeError(f"mode must be a LexerMode, got {mode!r}")
        self._mode = mode

    def set_mode(self, mode: LexerMode) -> None:
        """Change the mode used for subsequent tokens."""
        self.mode = mode

    def get_token(self) -> Token:
        """Return the last produced token without advancing.

        Raises:
            LexerError: If called before the first ``next_token()``
        """
        if self._token is None:
            raise LexerError("Cannot get token without first extracting it using 'next_token()'.")
        return self._token

    def next_token(self) -> Token:
        """Scan and return the next token under the current mode.

        Raises:
            LexerError: If the next token cannot be extracted, or the
                previous token was already EOF
        """
        if self._pos >= self._source_len:
            self._token = self._eof_or_raise()
            return self._token

        self._token = self._dispatch_mode()
        return self._token

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens under the current mode until EOF (inclusive).

        The mode is not changed between tokens, so this is mainly useful
        for inspecting how a fragment lexes in a single mode.
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    @property
    def position(self) -> int:
        """Index of the first unconsumed character."""
        return self._pos

    def _dispatch_mode(self) -> Token:
        """Dispatch to the scanner for the current mode."""
        if self._mode == LexerMode.TEXT:
            return self._scan_text()
        if self._mode == LexerMode.TAG_NAME:
            return self._scan_tag_name()
        return self._scan_tag_body()

    def _eof_or_raise(self) -> Token:
        """Produce EOF, or fail if EOF was already produced."""
        if self._token is not None and self._token.type == TokenType.EOF:
            raise LexerError("Cannot get next token after EOF.", self._lineno, self._col)
        return Token(
            type=TokenType.EOF,
            value=None,
            _lineno=self._lineno,
            _col=self._col,
            _start_offset=self._pos,
            _source_file=self._source_file,
        )

    # =========================================================================
    # Character navigation helpers
    # =========================================================================

    def _peek(self, offset: int = 0) -> str:
        """Peek at a character without advancing.

        Returns:
            Character at current position + offset, or empty string past
            the end of input.
        """
        pos = self._pos + offset
        if pos >= self._source_len:
            return ""
        return self._source[pos]

    def _at(self, sequence: str) -> bool:
        """Check whether the source continues with sequence at the cursor."""
        return self._source.startswith(sequence, self._pos)

    def _advance(self) -> str:
        """Advance position by one character.

        Updates line/column tracking.

        Returns:
            The consumed character.
        """
        if self._pos >= self._source_len:
            return ""

        char = self._source[self._pos]
        self._pos += 1

        if char == "\n":
            self._lineno += 1
            self._col = 1
        else:
            self._col += 1

        return char

    def _skip_whitespace(self) -> None:
        """Skip spaces, tabs and line breaks."""
        while self._pos < self._source_len and self._source[self._pos] in TAG_WHITESPACE:
            self._advance()

    def _skip_digits(self) -> int:
        """Skip decimal digits.

        Returns:
            Number of digits skipped.
        """
        before = self._pos
        while self._pos < self._source_len and self._source[self._pos].isdecimal():
            self._advance()
        return self._pos - before

    def _scan_name(self) -> str:
        """Scan an identifier: a letter followed by letters, digits or underscores.

        Raises:
            LexerError: If the cursor is not on a letter
        """
        first = self._peek()
        if not first:
            raise self._error("Expected a name but reached end of input.")
        if not first.isalpha():
            raise self._error(f"First letter of name is not valid: {first!r}")

        start = self._pos
        self._advance()
        while self._pos < self._source_len:
            char = self._source[self._pos]
            if char.isalpha() or char.isdecimal() or char == "_":
                self._advance()
            else:
                break
        return self._source[start : self._pos]

    # =========================================================================
    # Location tracking
    # =========================================================================

    def _save_location(self) -> None:
        """Save current location as the start of the token being scanned."""
        self._saved_pos = self._pos
        self._saved_lineno = self._lineno
        self._saved_col = self._col

    def _make_token(self, token_type: TokenType, value: str | int | float) -> Token:
        """Create a Token starting at the saved location."""
        return Token(
            type=token_type,
            value=value,
            _lineno=self._saved_lineno,
            _col=self._saved_col,
            _start_offset=self._saved_pos,
            _source_file=self._source_file,
        )

    def _error(self, message: str) -> LexerError:
        """Build a LexerError located at the start of the current token."""
        return LexerError(message, self._saved_lineno, self._saved_col)
