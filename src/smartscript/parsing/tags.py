"""Tag parsing for SmartScript parser.

Handles everything between "{$" and "$}": echo tags, FOR blocks and
END tags. The tag keyword is matched case-insensitively.

Grammar:
    tag      := "{$" ( echo | for | end ) "$}"
    echo     := "=" element+
    for      := "FOR" variable expr expr expr?
    end      := "END"
    element  := variable | function | string | integer | double | operator
    expr     := variable | string | integer | double
    operator := "+" | "-" | "*" | "/" | "^"

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from smartscript.config import get_parse_config
from smartscript.elements import (
    VALID_OPERATORS,
    DoubleConstant,
    Element,
    Expression,
    FunctionRef,
    IntegerConstant,
    Operator,
    StringLiteral,
    Variable,
)
from smartscript.lexer import LexerMode
from smartscript.nodes import Echo
from smartscript.parsing.containers import ContainerFrame
from smartscript.tokens import Token, TokenType
from smartscript.utils.logger import get_logger

if TYPE_CHECKING:
    from smartscript.errors import ParserError
    from smartscript.parsing.containers import ContainerStack

logger = get_logger(__name__)

_ORDINALS = ("first", "second", "third", "fourth")


class TagParsingMixin:
    """Mixin for parsing a single tag after its TAG_OPEN token.

    Required Host Attributes:
        - _containers: ContainerStack

    Required Host Methods:
        - _next(mode) -> Token
        - _error(message, token) -> ParserError
        - _describe(token) -> str

    """

    _containers: ContainerStack

    def _next(self, mode: LexerMode) -> Token:
        raise NotImplementedError

    def _error(self, message: str, token: Token | None = None) -> ParserError:
        raise NotImplementedError

    def _describe(self, token: Token) -> str:
        raise NotImplementedError

    def _parse_tag(self, open_token: Token) -> None:
        """Parse one tag and apply it to the container stack.

        Args:
            open_token: The TAG_OPEN token that started the tag

        Raises:
            ParserError: If the tag is malformed or unknown
        """
        name_token = self._next(LexerMode.TAG_NAME)
        if name_token.type == TokenType.EOF:
            raise self._error("Tag was never closed.", open_token)

        name = str(name_token.value)
        logger.debug("Tag %r at %s", name, name_token.location)

        if name == "=":
            self._parse_echo_tag(open_token)
            return

        keyword = name.upper()
        if keyword == "FOR":
            self._parse_for_tag(open_token)
        elif keyword == "END":
            self._parse_end_tag(open_token)
        else:
            raise self._error(f"Invalid tag name: {name!r}.", name_token)

    # =========================================================================
    # Echo
    # =========================================================================

    def _parse_echo_tag(self, open_token: Token) -> None:
        """Parse the body of {$= ... $} and append an Echo node."""
        elements: list[Element] = []
        while True:
            token = self._next(LexerMode.TAG_BODY)
            if token.type == TokenType.TAG_CLOSE:
                break
            if token.type == TokenType.EOF:
                raise self._error("Tag was never closed.", open_token)
            elements.append(self._element_from_token(token))

        if not elements:
            raise self._error("Echo tag body cannot be empty.", open_token)

        self._containers.current().append(
            Echo(location=open_token.location, elements=tuple(elements))
        )

    def _element_from_token(self, token: Token) -> Element:
        """Classify a tag body token as an element.

        Raises:
            ParserError: For operators outside VALID_OPERATORS
        """
        match token.type:
            case TokenType.VARIABLE:
                return Variable(str(token.value))
            case TokenType.FUNCTION_NAME:
                return FunctionRef(str(token.value))
            case TokenType.STRING_LITERAL:
                return StringLiteral(str(token.value))
            case TokenType.DOUBLE_LITERAL:
                return DoubleConstant(float(token.value))  # type: ignore[arg-type]
            case TokenType.INTEGER_LITERAL:
                return IntegerConstant(int(token.value))  # type: ignore[arg-type]
            case TokenType.OPERATOR:
                if token.value not in VALID_OPERATORS:
                    raise self._error(f"Invalid operator: {token.value}", token)
                return Operator(str(token.value))
            case _:
                raise self._error(f"Unexpected {self._describe(token)} inside tag.", token)

    # =========================================================================
    # FOR / END
    # =========================================================================

    def _parse_for_tag(self, open_token: Token) -> None:
        """Parse {$ FOR var start end [step] $} and open a loop block.

        The new frame becomes the current container until its END tag.
        """
        token = self._next(LexerMode.TAG_BODY)
        if token.type == TokenType.EOF:
            raise self._error("Tag was never closed.", open_token)
        if token.type != TokenType.VARIABLE:
            raise self._error(
                f"First FOR argument must be a variable, got {self._describe(token)}.", token
            )
        variable = Variable(str(token.value))

        start = self._expect_expression(open_token, 1)
        end = self._expect_expression(open_token, 2)

        step: Expression | None = None
        token = self._next(LexerMode.TAG_BODY)
        if token.type != TokenType.TAG_CLOSE:
            step = self._expression_from_token(open_token, token, 3)
            token = self._next(LexerMode.TAG_BODY)
            if token.type == TokenType.EOF:
                raise self._error("Tag was never closed.", open_token)
            if token.type != TokenType.TAG_CLOSE:
                raise self._error(
                    f"FOR tag takes at most four arguments, got {self._describe(token)}.",
                    token,
                )

        limit = get_parse_config().max_nesting_depth
        if limit is not None and self._containers.depth() >= limit:
            raise self._error(f"FOR blocks nested deeper than {limit} level(s).", open_token)

        frame = ContainerFrame.for_loop(open_token.location, variable, start, end, step)
        self._containers.push(frame)

    def _expect_expression(self, open_token: Token, index: int) -> Expression:
        """Pull a required FOR argument at the given position (0-based)."""
        token = self._next(LexerMode.TAG_BODY)
        if token.type == TokenType.TAG_CLOSE:
            raise self._error(
                f"FOR tag is missing its {_ORDINALS[index]} argument.", token
            )
        return self._expression_from_token(open_token, token, index)

    def _expression_from_token(self, open_token: Token, token: Token, index: int) -> Expression:
        """Classify a FOR argument token as an expression.

        Raises:
            ParserError: If the token is not a variable, string or number
        """
        match token.type:
            case TokenType.VARIABLE:
                return Variable(str(token.value))
            case TokenType.STRING_LITERAL:
                return StringLiteral(str(token.value))
            case TokenType.INTEGER_LITERAL:
                return IntegerConstant(int(token.value))  # type: ignore[arg-type]
            case TokenType.DOUBLE_LITERAL:
                return DoubleConstant(float(token.value))  # type: ignore[arg-type]
            case TokenType.EOF:
                raise self._error("Tag was never closed.", open_token)
            case _:
                ordinal = _ORDINALS[index].capitalize()
                raise self._error(
                    f"{ordinal} FOR argument must be a variable, string or number, "
                    f"got {self._describe(token)}.",
                    token,
                )

    def _parse_end_tag(self, open_token: Token) -> None:
        """Parse {$END$} and close the innermost loop block."""
        token = self._next(LexerMode.TAG_BODY)
        if token.type == TokenType.EOF:
            raise self._error("Tag was never closed.", open_token)
        if token.type != TokenType.TAG_CLOSE:
            raise self._error("END tag cannot take arguments.", token)

        if self._containers.depth() == 0:
            raise self._error("More END tags than opened blocks.", open_token)

        loop = self._containers.pop().freeze()
        self._containers.current().append(loop)  # type: ignore[arg-type]
