"""
Adaptive table layout.

Fits a matrix of multi-valued cells into a target width by collapsing the
multi-value cells of the widest columns to a ``<<< N >>>`` placeholder.
Single values are never shortened, so a table whose single values are wider
than the target still overflows.

All functions are pure: widths go in, new widths come out.
"""

from typing import Iterator, List, Optional, Sequence

from ._util import debug as _debug_fn
from .schema import CellView, DiffRow, LaidOutRow, RenderModel, TableLayout

SEPARATOR = "  "

# Collapse threshold for media without a width budget (HTML).
DEFAULT_COLLAPSE_LIMIT = 35

Table = Sequence[Sequence[List[str]]]


def _debug(msg: str) -> None:
    _debug_fn("layout", msg)


def join_values(values: Sequence[str]) -> str:
    return ", ".join(values)


def placeholder(count: int) -> str:
    return f"<<< {count} >>>"


def should_collapse(values: Sequence[str], limit: int) -> bool:
    """Multi-value cell whose text exceeds ``limit`` and whose placeholder is shorter."""
    if len(values) < 2:
        return False
    joined = join_values(values)
    return len(joined) > limit and len(placeholder(len(values))) < len(joined)


def table_cells(model: RenderModel) -> List[List[List[str]]]:
    """Rows of value lists; column 0 is the row label."""
    return [[[row.label]] + list(row.cells) for row in [model.header] + list(model.rows)]


def natural_widths(table: Table) -> List[int]:
    if not table:
        return []
    widths = [0] * len(table[0])
    for row in table:
        for col, values in enumerate(row):
            widths[col] = max(widths[col], len(join_values(values)))
    return widths


def total_width(widths: Sequence[int]) -> int:
    if not widths:
        return 0
    return sum(widths) + len(SEPARATOR) * (len(widths) - 1)


def _shrunk_length(values: Sequence[str], threshold: int) -> int:
    # Collapse cells at or above the threshold, i.e. above threshold - 1.
    # should_collapse also requires a shorter placeholder, so widths never grow.
    if should_collapse(values, threshold - 1):
        return len(placeholder(len(values)))
    return len(join_values(values))


def shrink_step(widths: Sequence[int], table: Table, threshold: int) -> List[int]:
    """Recompute every data column at least ``threshold`` wide."""
    new = list(widths)
    for col in range(1, len(widths)):
        if widths[col] >= threshold:
            new[col] = max(_shrunk_length(row[col], threshold) for row in table)
    return new


def iter_shrink(widths: Sequence[int], table: Table, target: int) -> Iterator[List[int]]:
    """Yield the widths after each shrink step until they fit or the threshold runs out."""
    current = list(widths)
    if len(current) < 2 or total_width(current) <= target:
        return
    threshold = max(current[1:])
    while True:
        current = shrink_step(current, table, threshold)
        yield current
        threshold -= 1
        if threshold <= 1 or total_width(current) <= target:
            return


def shrink_widths(widths: Sequence[int], table: Table, target: Optional[int]) -> List[int]:
    """Final widths for ``target``; unbounded targets keep the natural widths."""
    result = list(widths)
    if target is None:
        return result
    steps = 0
    for result in iter_shrink(widths, table, target):
        steps += 1
    _debug(f"shrink to {target}: {steps} steps, total {total_width(result)}")
    return result


def build_cell(values: Sequence[str], limit: Optional[int]) -> CellView:
    """Display form of a cell; ``limit=None`` never collapses."""
    joined = join_values(values)
    if limit is not None and should_collapse(values, limit):
        return CellView(text=placeholder(len(values)), values=list(values),
                        collapsed=True, tooltip=joined)
    return CellView(text=joined, values=list(values))


def _lay_out_row(row: DiffRow, limits: Sequence[Optional[int]]) -> LaidOutRow:
    return LaidOutRow(
        row=row,
        label=CellView(text=row.label, values=[row.label]),
        cells=[build_cell(values, limit) for values, limit in zip(row.cells, limits)],
    )


def layout_table(
    model: RenderModel,
    collapse_limit: Optional[int] = DEFAULT_COLLAPSE_LIMIT,
) -> TableLayout:
    """Compute column widths and cell views for both renderers.

    With a target width the widths come from the shrink loop and each data
    cell is collapsed against its column width. Without one, no shrinking
    happens and ``collapse_limit`` (None for expanded output) applies.
    """
    table = table_cells(model)
    widths = natural_widths(table)
    if model.target_width is not None:
        widths = shrink_widths(widths, table, model.target_width)
        limits: List[Optional[int]] = list(widths[1:])
    else:
        limits = [collapse_limit] * (len(widths) - 1)

    header = LaidOutRow(
        row=model.header,
        label=CellView(text=model.header.label, values=[model.header.label]),
        cells=[build_cell(values, None) for values in model.header.cells],
    )
    return TableLayout(
        widths=widths,
        header=header,
        rows=[_lay_out_row(row, limits) for row in model.rows],
    )
