"""Template renderer: regenerates SmartScript source from an AST.

The output is not byte-identical to the original source (whitespace
inside tags is normalized and escapes are re-applied), but parsing it
again yields an AST equal to the one rendered:

    parse(to_text(parse(source))) == parse(source)

Example:
    >>> from smartscript import parse, to_text
    >>> to_text(parse("{$for i 1 3$}x{$=i*2$}{$end$}"))
    '{$ FOR i 1 3 $}x{$= i * 2 $}{$END$}'

Thread Safety:
TemplateRenderer holds no state; output is accumulated in a list local
to each render() call.

"""

import math
from decimal import Decimal

from smartscript.elements import (
    DoubleConstant,
    Element,
    FunctionRef,
    IntegerConstant,
    Operator,
    StringLiteral,
    Variable,
)
from smartscript.errors import RenderError
from smartscript.lexer.modes import TAG_CLOSE, TAG_OPEN
from smartscript.nodes import Document, Echo, ForLoop, Node, Text

# Characters re-escaped inside string literals (backslash first)
_STRING_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)


class TemplateRenderer:
    """Render AST back to template source."""

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Render a document (or any subtree) to template source."""
        parts: list[str] = []
        self._render_node(node, parts)
        return "".join(parts)

    def _render_node(self, node: Node, parts: list[str]) -> None:
        match node:
            case Document(children=children):
                for child in children:
                    self._render_node(child, parts)
            case Text(content=content):
                parts.append(escape_text(content))
            case Echo(elements=elements):
                parts.append(f"{TAG_OPEN}= ")
                parts.append(" ".join(render_element(e) for e in elements))
                parts.append(f" {TAG_CLOSE}")
            case ForLoop():
                args = [node.variable, node.start, node.end]
                if node.step is not None:
                    args.append(node.step)
                parts.append(f"{TAG_OPEN} FOR ")
                parts.append(" ".join(render_element(a) for a in args))
                parts.append(f" {TAG_CLOSE}")
                for child in node.children:
                    self._render_node(child, parts)
                parts.append(f"{TAG_OPEN}END{TAG_CLOSE}")
            case _:
                raise RenderError(f"Cannot render node of type {type(node).__name__}")


def escape_text(content: str) -> str:
    """Escape literal text so it lexes back as the same PLAIN_TEXT.

    A trailing "{" is escaped too, since the next sibling may start with "$".
    """
    escaped = content.replace("\\", "\\\\").replace(TAG_OPEN, "\\" + TAG_OPEN)
    if escaped.endswith("{"):
        escaped = escaped[:-1] + "\\{"
    return escaped


def escape_string(value: str) -> str:
    """Escape a string literal body (without the surrounding quotes)."""
    for raw, escaped in _STRING_ESCAPES:
        value = value.replace(raw, escaped)
    return value


def format_double(value: float) -> str:
    """Format a double in plain decimal notation that always has a "."

    The lexer has no exponent syntax, so 1e+16 is written out as
    10000000000000000.0.

    Raises:
        RenderError: For infinities and NaN
    """
    if not math.isfinite(value):
        raise RenderError(f"Cannot render non-finite double {value!r}")
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text


def render_element(element: Element) -> str:
    """Render a single tag argument as template source."""
    match element:
        case Variable(name=name):
            return name
        case FunctionRef(name=name):
            return f"@{name}"
        case StringLiteral(value=value):
            return f'"{escape_string(value)}"'
        case IntegerConstant(value=value):
            return str(value)
        case DoubleConstant(value=value):
            return format_double(value)
        case Operator(symbol=symbol):
            return symbol
        case _:
            raise RenderError(f"Cannot render element of type {type(element).__name__}")
