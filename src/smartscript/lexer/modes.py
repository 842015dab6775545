"""Lexer operating modes and delimiter constants.

This module defines the finite state machine modes for the lexer.
Modes are owned by the parser: the lexer reads its mode before scanning
each token and never switches it by itself.
"""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    The parser switches between modes based on grammar position:
    - TEXT: Outside any tag
    - TAG_NAME: Right after "{$", expecting "=" or a tag keyword
    - TAG_BODY: After the tag name, expecting arguments or "$}"

    """

    TEXT = auto()  # Outside tags
    TAG_NAME = auto()  # Inside "{$", before the name
    TAG_BODY = auto()  # Inside "{$", after the name


TAG_OPEN = "{$"
TAG_CLOSE = "$}"

# Characters skipped between tokens inside a tag
TAG_WHITESPACE = frozenset({" ", "\t", "\n", "\r"})

# Text mode: escaped character -> produced character
TEXT_ESCAPES = {"\\": "\\", "{": "{"}

# Tag body strings: escaped character -> produced character
STRING_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "r": "\r", "t": "\t"}

# Signed 64-bit bounds for integer literals
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1
