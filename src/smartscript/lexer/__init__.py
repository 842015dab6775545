"""Pull-based state-machine lexer for SmartScript templates.

The parser drives the lexer one token at a time, switching its mode
between calls. The lexer never changes mode on its own.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerMode enum, delimiters, escape tables
└── scanners/            # Mode-specific scanners
    ├── text.py          # Text mode (plain text, "{$")
    ├── tag_name.py      # Tag name mode ("=", keywords)
    └── tag_body.py      # Tag body mode (arguments, "$}")

Usage:
    >>> from smartscript.lexer import Lexer, LexerMode
    >>> lexer = Lexer("{$= i $}")
    >>> lexer.next_token()
    Token(TAG_OPEN, '{$', 1:1)
    >>> lexer.mode = LexerMode.TAG_NAME
    >>> lexer.next_token()
    Token(TAG_NAME, '=', 1:3)
    >>> lexer.mode = LexerMode.TAG_BODY
    >>> lexer.next_token()
    Token(VARIABLE, 'i', 1:5)
    >>> lexer.next_token()
    Token(TAG_CLOSE, '$}', 1:7)

"""

from smartscript.lexer.core import Lexer
from smartscript.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode"]
