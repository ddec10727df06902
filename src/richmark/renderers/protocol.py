"""Renderer protocols.

``ASTRenderer`` is the interface editor adapters program against: anything
with ``render(doc) -> str``. ``RenderRule`` is the shape of a custom rule
passed to ``MarkdownRenderer(rules=...)``.

Example:
    from richmark.renderers.protocol import ASTRenderer

    def save(renderer: ASTRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from richmark.nodes import Document, Node
    from richmark.renderers.markdown import MarkdownRenderer, RenderContext


@runtime_checkable
class ASTRenderer(Protocol):
    """Anything that turns a Document into a string."""

    def render(self, node: Document) -> str: ...


class RenderRule(Protocol):
    """Custom rendering for one node type.

    Called with the renderer, the node, the node's children already
    rendered, and the per-call context. Returning None falls through to the
    built-in rendering for the node.

    Example:
        >>> def shout(renderer, node, children, ctx):
        ...     return children.upper() + "\\n"
        >>> MarkdownRenderer(rules={Paragraph: shout})

    """

    def __call__(
        self,
        renderer: MarkdownRenderer,
        node: Node,
        children: str,
        ctx: RenderContext,
        /,
    ) -> str | None: ...
