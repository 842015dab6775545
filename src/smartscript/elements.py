"""Typed tag arguments (elements) for SmartScript.

Elements are the classified values that appear inside a tag body:
variables, function references, string literals, numeric constants
and operators. Like AST nodes they are frozen dataclasses with slots
and compare structurally.

Element Family:
Element
├── Variable         name
├── FunctionRef      @name
├── StringLiteral    "text"
├── IntegerConstant  42
├── DoubleConstant   3.14
└── Operator         + - * / ^

Expression is the subset allowed as FOR loop bounds and step.

"""

from dataclasses import dataclass
from typing import TypeAlias

# Operators an echo tag accepts
VALID_OPERATORS = frozenset({"+", "-", "*", "/", "^"})


@dataclass(frozen=True, slots=True)
class Variable:
    """Reference to a runtime variable.

    Template: ``i``, ``last_year``

    """

    name: str


@dataclass(frozen=True, slots=True)
class FunctionRef:
    """Reference to a runtime function.

    Template: ``@sin``, ``@decfmt``

    """

    name: str


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """String constant with escapes already resolved.

    Template: ``"Joe \\"Long\\" Smith"``

    """

    value: str


@dataclass(frozen=True, slots=True)
class IntegerConstant:
    """Signed 64-bit integer constant."""

    value: int


@dataclass(frozen=True, slots=True)
class DoubleConstant:
    """Finite floating-point constant.

    Template: ``3.14``, ``-1.35``. Always written with a decimal point.

    """

    value: float


@dataclass(frozen=True, slots=True)
class Operator:
    """Single-character arithmetic operator from VALID_OPERATORS."""

    symbol: str


# PEP 695 type alias for tag arguments
Element: TypeAlias = (
    Variable
    | FunctionRef
    | StringLiteral
    | IntegerConstant
    | DoubleConstant
    | Operator
)

# Arguments allowed as FOR loop bounds and step
Expression: TypeAlias = Variable | StringLiteral | IntegerConstant | DoubleConstant
