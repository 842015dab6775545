"""Typed AST nodes for SmartScript.

All AST nodes are frozen dataclasses with slots for:
- Immutability: the parse result cannot be altered after construction
- Structural equality: two parses of equivalent source compare equal
- Pattern matching: Python 3.10+ match statements work naturally

Node Hierarchy:
Node (base)
├── Document   root, owns top-level children
├── Text       literal output
├── Echo       {$= ... $} substitution
└── ForLoop    {$ FOR ... $} ... {$END$} block

Locations are carried for error reporting but excluded from equality
and repr.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from smartscript.elements import Element, Expression, Variable
from smartscript.location import SourceLocation


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""

    location: SourceLocation = field(compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text, with template escapes already resolved."""

    content: str


@dataclass(frozen=True, slots=True)
class Echo(Node):
    """Substitution instruction.

    Template: {$= i i * @sin "0.000" @decfmt $}

    The executor evaluates the elements in order; the parser only
    guarantees there is at least one.

    """

    elements: tuple[Element, ...]


@dataclass(frozen=True, slots=True)
class ForLoop(Node):
    """Bounded loop block.

    Template: {$ FOR i 1 10 2 $} ... {$END$}

    ``step`` is None for the three-argument form.

    """

    variable: Variable
    start: Expression
    end: Expression
    step: Expression | None
    children: tuple[Block, ...] = ()


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node of a parsed template."""

    children: tuple[Block, ...] = ()


# PEP 695 type alias for nodes that may appear as children
Block: TypeAlias = Text | Echo | ForLoop
