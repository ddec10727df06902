"""Utility modules for richmark.

Provides:
- text: escape_markdown, encode_url for Markdown output
- logger: get_logger for logging
"""

from richmark.utils.logger import get_logger
from richmark.utils.text import encode_url, escape_markdown

__all__ = [
    "encode_url",
    "escape_markdown",
    "get_logger",
]
