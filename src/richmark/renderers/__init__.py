"""richmark renderers.

Renderers convert typed tree nodes into output formats.

Available Renderers:
- MarkdownRenderer: Renders a tree back to Markdown source

Thread Safety:
Renderers keep per-call state in a RenderContext local to each render()
call. Safe for concurrent use from multiple threads.

"""

from richmark.renderers.markdown import MarkdownRenderer, RenderContext
from richmark.renderers.protocol import ASTRenderer, RenderRule

__all__ = ["ASTRenderer", "MarkdownRenderer", "RenderContext", "RenderRule"]
