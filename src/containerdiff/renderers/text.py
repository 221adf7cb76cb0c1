"""Console renderer: padded columns, styled per diff state."""

from typing import List, Optional, Sequence

from ..layout import SEPARATOR
from ..schema import CellView, LaidOutRow, StyledLine, TableLayout

DIFFERENT_STYLE = "yellow"
EQUAL_STYLE = "green"


def _format_row(row: LaidOutRow, widths: Sequence[int]) -> str:
    cells: List[CellView] = [row.label] + list(row.cells)
    parts = [cell.text.ljust(width) for cell, width in zip(cells, widths)]
    return SEPARATOR.join(parts).rstrip()


def _row_style(row: LaidOutRow, show_only_different: bool) -> Optional[str]:
    if show_only_different:
        return None
    return DIFFERENT_STYLE if row.row.different else EQUAL_STYLE


def render(layout: TableLayout, show_only_different: bool = False) -> List[StyledLine]:
    """Header line followed by one line per shown row."""
    lines = [StyledLine(text=_format_row(layout.header, layout.widths))]
    for row in layout.rows:
        if show_only_different and not row.row.different:
            continue
        lines.append(StyledLine(
            text=_format_row(row, layout.widths),
            style=_row_style(row, show_only_different),
        ))
    return lines
