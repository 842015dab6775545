"""Token and TokenType definitions for the SmartScript lexer.

The lexer produces Token objects one at a time; the parser pulls them
with ``Lexer.next_token()``. Each Token has a type, a value, and source
coordinates.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

Equality:
Tokens compare by (type, value) only. Coordinates are excluded so a
token scanned from one source equals the same token scanned anywhere else.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smartscript.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer.

    Value types per kind:
    - EOF: None
    - TAG_OPEN, TAG_CLOSE: the delimiter itself ("{$", "$}")
    - PLAIN_TEXT, TAG_NAME, VARIABLE, FUNCTION_NAME, STRING_LITERAL: str
    - INTEGER_LITERAL: int
    - DOUBLE_LITERAL: float
    - OPERATOR: single-character str

    """

    # Stream structure
    EOF = auto()

    # Text mode
    TAG_OPEN = auto()  # {$
    PLAIN_TEXT = auto()  # Unescaped literal text

    # Tag name mode
    TAG_NAME = auto()  # = or identifier

    # Tag body mode
    TAG_CLOSE = auto()  # $}
    VARIABLE = auto()  # name
    FUNCTION_NAME = auto()  # @name
    STRING_LITERAL = auto()  # "text"
    INTEGER_LITERAL = auto()  # 42, -7
    DOUBLE_LITERAL = auto()  # 3.14, -0.5
    OPERATOR = auto()  # any other single character


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        value: Payload; see TokenType for the type per kind
        _lineno: Start line number (1-indexed)
        _col: Start column offset (1-indexed)
        _start_offset: Absolute start position in source
        _source_file: Optional source file path

    Performance:
        SourceLocation is created lazily on first access to `.location`.

    """

    type: TokenType
    value: str | int | float | None = None
    _lineno: int = field(default=1, compare=False)
    _col: int = field(default=1, compare=False)
    _start_offset: int = field(default=0, compare=False)
    _source_file: str | None = field(default=None, compare=False)
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from smartscript.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            source_file=self._source_file,
        )
        # Safe mutation of frozen dataclass cache field (idempotent write)
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if isinstance(val, str) and len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self._lineno}:{self._col})"

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col
