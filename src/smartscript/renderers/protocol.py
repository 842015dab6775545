"""ASTRenderer protocol: stable interface for AST renderers.

Any renderer that implements ``render(node) -> str`` conforms to this protocol.
The built-in ``TemplateRenderer`` is the reference implementation.

Example:
    from smartscript.renderers.protocol import ASTRenderer

    def save(renderer: ASTRenderer, doc: Document, path: Path) -> None:
        path.write_text(renderer.render(doc), encoding="utf-8")

"""

from typing import Protocol

from smartscript.nodes import Document


class ASTRenderer(Protocol):
    """Protocol for AST renderers.

    Implementations must accept a Document and return a rendered string.

    """

    def render(self, node: Document) -> str:
        """Render a Document AST to a string.

        Args:
            node: The document AST to render.

        Returns:
            Rendered string output.

        """
        ...
