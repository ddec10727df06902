"""Exception classes for richmark.

Parsing is total: any string parses to some tree, so there is no parse
error. Failures can only come from rendering trees that were not produced
by the parser.
"""

from __future__ import annotations


class RichmarkError(Exception):
    """Base exception for all richmark errors.

    Subclass this for specific error categories.
    """

    pass


class RenderError(RichmarkError):
    """Error during Markdown rendering.

    Raised when the renderer meets an object that is not a known node
    type, or when a custom render rule fails.
    """

    def __init__(self, message: str, node: object | None = None) -> None:
        """Initialize render error.

        Args:
            message: Error description
            node: The offending node, if any
        """
        self.message = message
        self.node = node
        if node is not None:
            message = f"{type(node).__name__}: {message}"
        super().__init__(message)
