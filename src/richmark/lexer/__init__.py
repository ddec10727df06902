"""Line-classifying lexer for the richmark parser.

The lexer scans the source one line at a time, classifies each line, then
commits position. Inline syntax is left to the parser.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerMode enum
├── classifiers/         # Block-type classification mixins
│   ├── heading.py       # ATX heading
│   ├── fence.py         # Fenced code
│   ├── thematic.py      # Thematic break
│   ├── quote.py         # Block quote
│   └── list.py          # Bulleted / ordered / todo markers
└── scanners/            # Mode-specific scanners
    ├── block.py         # Block mode (main dispatch)
    └── fence.py         # Code fence mode

Usage:
    >>> from richmark.lexer import Lexer
    >>> for token in Lexer("- one\\n- two").tokenize():
    ...     print(token)
Token(LIST_ITEM, 'one', 1:0)
Token(LIST_ITEM, 'two', 2:0)
Token(EOF, '', 2:0)

"""

from richmark.lexer.core import Lexer
from richmark.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode"]
