"""Exception classes for SmartScript.

Provides standardized exceptions for error handling throughout SmartScript.
"""

from __future__ import annotations


class SmartScriptError(Exception):
    """Base exception for all SmartScript errors.

    Subclass this for specific error categories.
    """

    pass


class LexerError(SmartScriptError):
    """Error during tokenization.

    Raised when the lexer cannot extract the next token: invalid escape
    sequences, unterminated strings, malformed numerals, or a token request
    that breaks the lexer protocol (reading past EOF, reading before the
    first token).
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
    ) -> None:
        """Initialize lexer error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        super().__init__(message)


class ParserError(SmartScriptError):
    """Error during template parsing.

    Raised when the token stream is structurally invalid, and for every
    LexerError raised while the parser pulls tokens, so callers only need
    to handle a single error type at the parser boundary.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class RenderError(SmartScriptError):
    """Error during template rendering.

    Raised when the renderer encounters a node or element type it
    does not know how to write back as template source.
    """

    pass
