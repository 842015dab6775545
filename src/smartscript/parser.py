"""Recursive descent parser producing a typed AST.

Pulls tokens from the Lexer one at a time, switching the lexer's mode
to match its grammar position, and builds an immutable Document.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token pulling, LexerError wrapping
- `TagParsingMixin`: Echo, FOR and END tags

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share AST across threads

"""

from __future__ import annotations

from smartscript.errors import ParserError
from smartscript.lexer import Lexer, LexerMode
from smartscript.nodes import Document, Text
from smartscript.parsing import TagParsingMixin, TokenNavigationMixin
from smartscript.parsing.containers import ContainerStack
from smartscript.tokens import TokenType
from smartscript.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(
    TokenNavigationMixin,
    TagParsingMixin,
):
    """Recursive descent parser for SmartScript templates.

    Parsing is eager: the constructor parses the whole source and either
    exposes a complete Document or raises ParserError. No partially built
    tree is ever observable.

    Usage:
        >>> parser = Parser("Hi {$= name $}!")
        >>> parser.document.children
        (Text(content='Hi '), Echo(elements=(Variable(name='name'),)), Text(content='!'))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_lexer",
        # Container stack for tracking open blocks
        "_containers",
        "_document",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Parse source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use set_parse_config() or parse_config_context() before creating
        a Parser if you need non-default configuration.

        Args:
            source: Template source text
            source_file: Optional source file path for error messages

        Raises:
            TypeError: If source is not a string
            ParserError: If source cannot be parsed for any reason
        """
        self._source = source
        self._source_file = source_file
        self._lexer = Lexer(source, source_file)
        self._containers = ContainerStack(source_file=source_file)
        self._document = self._parse()

    @property
    def document(self) -> Document:
        """The parsed document."""
        return self._document

    def get_document_node(self) -> Document:
        """Return the parsed document (same as ``document``)."""
        return self._document

    def _parse(self) -> Document:
        """Parse text and tags until EOF.

        Returns:
            Document root node

        Raises:
            ParserError: On the first structural or lexical problem
        """
        logger.debug("Parsing %d characters from %s", len(self._source), self._source_file or "<string>")
        try:
            document = self._parse_text()
        except ParserError as exc:
            logger.debug("Parse failed: %s", exc)
            raise
        logger.debug("Parsed document with %d top-level node(s)", len(document.children))
        return document

    def _parse_text(self) -> Document:
        """Top-level loop: text becomes Text nodes, "{$" starts a tag."""
        while True:
            token = self._next(LexerMode.TEXT)

            if token.type == TokenType.EOF:
                break
            if token.type == TokenType.PLAIN_TEXT:
                self._containers.current().append(
                    Text(location=token.location, content=str(token.value))
                )
            elif token.type == TokenType.TAG_OPEN:
                self._parse_tag(token)
            else:
                raise self._error(f"Unexpected {self._describe(token)} outside of a tag.", token)

        depth = self._containers.depth()
        if depth:
            innermost = self._containers.current()
            raise ParserError(
                f"Missing END tag(s): {depth} block(s) still open.",
                lineno=innermost.location.lineno,
                col_offset=innermost.location.col_offset,
                source_file=self._source_file,
            )

        return self._containers.document().freeze()  # type: ignore[return-value]
