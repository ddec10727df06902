"""Mode-specific scanners for the richmark lexer."""

from richmark.lexer.scanners.block import BlockScannerMixin
from richmark.lexer.scanners.fence import FenceScannerMixin

__all__ = ["BlockScannerMixin", "FenceScannerMixin"]
