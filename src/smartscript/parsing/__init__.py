"""Parsing subsystem for SmartScript parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Pulling tokens from the lexer, error building
- `TagParsingMixin`: Echo, FOR and END tags

Architecture:
The parser uses a mixin-based design for separation of concerns.
Open blocks are tracked by `ContainerStack` (see containers.py).

Example:
    >>> from smartscript.parsing import TagParsingMixin, TokenNavigationMixin
    >>> class Parser(TokenNavigationMixin, TagParsingMixin):
    ...     pass

"""

from smartscript.parsing.containers import ContainerFrame, ContainerStack, ContainerType
from smartscript.parsing.tags import TagParsingMixin
from smartscript.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "ContainerFrame",
    "ContainerStack",
    "ContainerType",
    "TagParsingMixin",
    "TokenNavigationMixin",
]
