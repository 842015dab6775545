"""SmartScript renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- TemplateRenderer: Renders AST back to template source

Thread Safety:
All renderers accumulate output locally to each render() call.
Safe for concurrent use from multiple threads.

"""

from smartscript.renderers.protocol import ASTRenderer
from smartscript.renderers.template import TemplateRenderer, render_element

__all__ = ["ASTRenderer", "TemplateRenderer", "render_element"]
