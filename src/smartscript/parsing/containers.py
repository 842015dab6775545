"""Container stack for SmartScript parsing.

Tracks the blocks that are open while the parser walks the token stream.
The document frame sits at the bottom; each FOR tag pushes a frame and
each END tag pops one.

Frames are mutable while open and are frozen into AST nodes only when
they close, so the parser never holds references into a half-built
immutable tree.

Usage:
    stack = ContainerStack()            # Initializes with DOCUMENT frame
    stack.current().append(text_node)   # Leaf goes into innermost block
    stack.push(ContainerFrame.for_loop(location, variable, start, end, step))
    loop = stack.pop().freeze()         # ForLoop node with collected children
    stack.current().append(loop)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from smartscript.elements import Expression, Variable
from smartscript.location import SourceLocation
from smartscript.nodes import Block, Document, ForLoop


class ContainerType(Enum):
    """Types of block containers."""

    DOCUMENT = auto()  # Root container
    FOR_LOOP = auto()  # {$FOR ...$} ... {$END$}


@dataclass(slots=True)
class ContainerFrame:
    """A frame on the container stack representing an open block.

    Attributes:
        container_type: DOCUMENT or FOR_LOOP
        location: Where the block was opened
        children: Nodes collected so far, in source order
        variable: Loop variable (FOR_LOOP only)
        start: Loop start expression (FOR_LOOP only)
        end: Loop end expression (FOR_LOOP only)
        step: Optional loop step expression (FOR_LOOP only)

    """

    container_type: ContainerType
    location: SourceLocation
    children: list[Block] = field(default_factory=list)

    # FOR_LOOP header
    variable: Variable | None = None
    start: Expression | None = None
    end: Expression | None = None
    step: Expression | None = None

    @classmethod
    def for_loop(
        cls,
        location: SourceLocation,
        variable: Variable,
        start: Expression,
        end: Expression,
        step: Expression | None = None,
    ) -> ContainerFrame:
        """Create a frame for a FOR block with an empty body."""
        return cls(
            container_type=ContainerType.FOR_LOOP,
            location=location,
            variable=variable,
            start=start,
            end=end,
            step=step,
        )

    def append(self, node: Block) -> None:
        """Append a child node to this block."""
        self.children.append(node)

    def freeze(self) -> Document | ForLoop:
        """Build the immutable node for this frame.

        Returns:
            Document for the document frame, ForLoop otherwise
        """
        if self.container_type == ContainerType.DOCUMENT:
            return Document(location=self.location, children=tuple(self.children))

        assert self.variable is not None and self.start is not None and self.end is not None
        return ForLoop(
            location=self.location,
            variable=self.variable,
            start=self.start,
            end=self.end,
            step=self.step,
            children=tuple(self.children),
        )


@dataclass
class ContainerStack:
    """Manages the stack of open blocks during parsing.

    Invariant: stack[0] is always DOCUMENT, stack[-1] is innermost container.

    """

    source_file: str | None = None
    _stack: list[ContainerFrame] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Initialize with DOCUMENT frame."""
        self._stack = [
            ContainerFrame(
                container_type=ContainerType.DOCUMENT,
                location=SourceLocation(lineno=1, col_offset=1, source_file=self.source_file),
            )
        ]

    def push(self, frame: ContainerFrame) -> None:
        """Push a new container onto the stack.

        Args:
            frame: The container frame to push
        """
        assert len(self._stack) > 0, "Cannot push to empty stack"
        self._stack.append(frame)

    def pop(self) -> ContainerFrame:
        """Pop the innermost container.

        Returns:
            The popped container frame

        Raises:
            ValueError: If attempting to pop the document frame
        """
        if len(self._stack) <= 1:
            raise ValueError("Cannot pop document frame")
        return self._stack.pop()

    def current(self) -> ContainerFrame:
        """Get the innermost container."""
        return self._stack[-1]

    def depth(self) -> int:
        """Current nesting depth (document = 0).

        Returns:
            The number of open FOR blocks
        """
        return len(self._stack) - 1

    def document(self) -> ContainerFrame:
        """Get the document frame."""
        return self._stack[0]
