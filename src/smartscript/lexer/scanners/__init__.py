"""Mode-specific scanners for the SmartScript lexer.

Each scanner is a mixin that provides scanning logic for a specific
lexer mode (TEXT, TAG_NAME, TAG_BODY).
"""

from __future__ import annotations

from smartscript.lexer.scanners.tag_body import TagBodyScannerMixin
from smartscript.lexer.scanners.tag_name import TagNameScannerMixin
from smartscript.lexer.scanners.text import TextScannerMixin

__all__ = [
    "TagBodyScannerMixin",
    "TagNameScannerMixin",
    "TextScannerMixin",
]
