"""Table parsing for the richmark parser.

Handles pipe tables:

    | Header 1 | Header 2 |   <- header row
    |:---------|---------:|   <- delimiter row (required)
    | Cell 1   | Cell 2   |   <- body rows

Body rows are padded or truncated to the header's column count.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from richmark.nodes import Table, TableCell, TableRow
from richmark.parsing.charsets import TABLE_DELIMITER_CHARS
from richmark.tokens import Token, TokenType

if TYPE_CHECKING:
    from richmark.location import SourceLocation
    from richmark.nodes import Inline

type Alignment = Literal["left", "center", "right"] | None


class TableParsingMixin:
    """Mixin for pipe table parsing.

    Required Host Attributes:
        - _tables_enabled: bool

    Required Host Methods:
        - _peek(offset) -> Token | None
        - _skip(count) -> None
        - _parse_inline(text, location, images=...) -> tuple[Inline, ...]

    """

    _current: Token | None

    @property
    def _tables_enabled(self) -> bool:
        raise NotImplementedError

    def _starts_table(self) -> bool:
        """Check whether the current and next lines form a table header."""
        return self._table_header() is not None

    def _table_header(self) -> tuple[list[str], tuple[Alignment, ...]] | None:
        if not self._tables_enabled:
            return None

        header = self._current
        delimiter = self._peek()
        if (
            header is None
            or delimiter is None
            or header.type != TokenType.PARAGRAPH_LINE
            or delimiter.type != TokenType.PARAGRAPH_LINE
        ):
            return None

        header_cells = self._parse_table_row(header.value)
        if not header_cells:
            return None

        alignments = self._parse_table_delimiter(delimiter.value, len(header_cells))
        if alignments is None:
            return None
        return header_cells, alignments

    def _try_parse_table(self) -> Table | None:
        """Try to parse a table at the current token.

        Returns Table if valid, None if not a table (nothing is consumed).
        """
        parsed = self._table_header()
        if parsed is None:
            return None
        header_cells, alignments = parsed

        header = self._current
        assert header is not None
        rows = [self._build_table_row(header_cells, alignments, header.location)]
        self._skip(2)

        while self._current is not None and self._current.type == TokenType.PARAGRAPH_LINE:
            cells = self._parse_table_row(self._current.value)
            if cells is None:
                break
            rows.append(self._build_table_row(cells, alignments, self._current.location))
            self._advance()

        return Table(location=header.location, children=tuple(rows))

    def _build_table_row(
        self,
        cells: list[str],
        alignments: tuple[Alignment, ...],
        location: SourceLocation,
    ) -> TableRow:
        width = len(alignments)
        cells = (cells + [""] * width)[:width]
        return TableRow(
            location=location,
            children=tuple(
                TableCell(
                    location=location,
                    children=self._parse_inline(cell.strip(), location, images=False),
                    align=alignments[i],
                )
                for i, cell in enumerate(cells)
            ),
        )

    def _parse_table_row(self, line: str) -> list[str] | None:
        """Parse a table row into cells.

        Returns list of cell contents, or None if not a valid row.
        """
        line = line.strip()

        # Must contain at least one pipe
        if "|" not in line:
            return None

        # Remove leading/trailing pipes
        if line.startswith("|"):
            line = line[1:]
        if line.endswith("|") and not line.endswith("\\|"):
            line = line[:-1]

        # Split on unescaped pipes
        cells: list[str] = []
        current_cell: list[str] = []
        i = 0
        while i < len(line):
            if line[i] == "\\" and i + 1 < len(line) and line[i + 1] == "|":
                # Escaped pipe
                current_cell.append("|")
                i += 2
            elif line[i] == "|":
                cells.append("".join(current_cell))
                current_cell = []
                i += 1
            else:
                current_cell.append(line[i])
                i += 1

        cells.append("".join(current_cell))
        return cells

    def _parse_table_delimiter(
        self, line: str, expected_cols: int
    ) -> tuple[Alignment, ...] | None:
        """Parse table delimiter row and extract alignments.

        Delimiter format: |:---|:---:|---:|
        Returns None if not a valid delimiter row or if the column count
        differs from the header.
        """
        line = line.strip()
        if not line or not set(line) <= TABLE_DELIMITER_CHARS | {"|"}:
            return None

        if line.startswith("|"):
            line = line[1:]
        if line.endswith("|"):
            line = line[:-1]

        alignments: list[Alignment] = []
        for part in line.split("|"):
            part = part.strip()
            has_left_colon = part.startswith(":")
            has_right_colon = part.endswith(":") and len(part) > 1

            inner = part[1 if has_left_colon else 0 : -1 if has_right_colon else None]
            # Must have at least one dash
            if not inner or not all(c == "-" for c in inner):
                return None

            if has_left_colon and has_right_colon:
                alignments.append("center")
            elif has_left_colon:
                alignments.append("left")
            elif has_right_colon:
                alignments.append("right")
            else:
                alignments.append(None)

        if len(alignments) != expected_cols:
            return None
        return tuple(alignments)

    def _peek(self, offset: int = 1) -> Token | None:
        raise NotImplementedError

    def _parse_inline(
        self, text: str, location: SourceLocation, *, images: bool = True
    ) -> tuple[Inline, ...]:
        raise NotImplementedError
