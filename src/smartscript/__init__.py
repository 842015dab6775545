"""
SmartScript: tag templating language lexer and parser for Python.

Parses templates made of literal text and "{$ ... $}" tags into a typed,
immutable AST. Execution of the AST is left to an external engine that
walks it through the visitor interface.

Quick Start:
    >>> from smartscript import parse, to_text
    >>> doc = parse("Hello {$= name $}!")
    >>> doc.children[1]
    Echo(elements=(Variable(name='name'),))

    >>> # Regenerate equivalent source from the AST
    >>> to_text(parse("{$for i 1 3$}{$=i$}{$end$}"))
    '{$ FOR i 1 3 $}{$= i $}{$END$}'

Configuration:
    >>> from smartscript import ParseConfig
    >>> doc = parse(source, config=ParseConfig(max_nesting_depth=4))
"""

from smartscript.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from smartscript.elements import (
    DoubleConstant,
    Element,
    Expression,
    FunctionRef,
    IntegerConstant,
    Operator,
    StringLiteral,
    Variable,
)
from smartscript.errors import LexerError, ParserError, RenderError, SmartScriptError
from smartscript.lexer import Lexer, LexerMode
from smartscript.location import SourceLocation
from smartscript.nodes import Block, Document, Echo, ForLoop, Node, Text
from smartscript.parser import Parser
from smartscript.renderers.protocol import ASTRenderer
from smartscript.renderers.template import TemplateRenderer
from smartscript.serialization import from_dict, from_json, to_dict, to_json
from smartscript.tokens import Token, TokenType
from smartscript.visitor import BaseVisitor, transform

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse SmartScript source into a typed AST.

    Args:
        source: Template source text
        source_file: Optional source file path for error messages
        config: Configuration for this call only (uses the active
            context config if None)

    Returns:
        Document AST root node

    Raises:
        ParserError: If the source is not a valid template

    Example:
        >>> doc = parse("{$ FOR i 1 10 $}x{$END$}")
        >>> doc.children[0].end
        IntegerConstant(value=10)
    """
    if config is None:
        return Parser(source, source_file=source_file).document

    with parse_config_context(config):
        return Parser(source, source_file=source_file).document


def to_text(document: Document) -> str:
    """Render a Document back to template source.

    Parsing the result yields a Document equal to the one rendered.

    Args:
        document: Document AST to render

    Returns:
        Template source string
    """
    return TemplateRenderer().render(document)


__all__ = [
    # Main API
    "parse",
    "to_text",
    "Parser",
    "Lexer",
    "LexerMode",
    "Token",
    "TokenType",
    "SourceLocation",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Nodes
    "Node",
    "Block",
    "Document",
    "Text",
    "Echo",
    "ForLoop",
    # Elements
    "Element",
    "Expression",
    "Variable",
    "FunctionRef",
    "StringLiteral",
    "IntegerConstant",
    "DoubleConstant",
    "Operator",
    # Renderers
    "ASTRenderer",
    "TemplateRenderer",
    # Visitor
    "BaseVisitor",
    "transform",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Errors
    "SmartScriptError",
    "LexerError",
    "ParserError",
    "RenderError",
    "__version__",
]
