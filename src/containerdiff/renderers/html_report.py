"""HTML diff renderer.

Builds a context dict from the laid-out table and delegates the document
to templates/diff.html.j2 via Jinja2. Cell contents are pre-escaped Markup.
"""

from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from ..schema import LaidOutRow, TableLayout

DIFFERENT_CLASS = "different"
EQUAL_CLASS = "equal"


def _row_class(row: LaidOutRow, show_only_different: bool) -> str:
    if show_only_different:
        return ""
    return DIFFERENT_CLASS if row.row.different else EQUAL_CLASS


def _prepare_cells(row: LaidOutRow, expand_versions: bool) -> List[dict]:
    """Cell content as Markup (values escaped, one per line when expanded)."""
    cells = []
    for cell in row.cells:
        if expand_versions:
            cells.append({"html": Markup("<br>").join(cell.values), "title": ""})
        else:
            cells.append({"html": Markup.escape(cell.text), "title": cell.tooltip})
    return cells


def _build_context(
    layout: TableLayout,
    expand_versions: bool,
    show_only_different: bool,
    warnings: List[dict],
    meta: dict,
) -> dict:
    rows = []
    for row in layout.rows:
        if show_only_different and not row.row.different:
            continue
        rows.append({
            "label": row.label.text,
            "css_class": _row_class(row, show_only_different),
            "cells": _prepare_cells(row, expand_versions),
        })
    n_different = sum(1 for r in layout.rows if r.row.different)
    return {
        "header_label": layout.header.label.text,
        "columns": [cell.text for cell in layout.header.cells],
        "rows": rows,
        "summary": {
            "containers": len(layout.rows),
            "different": n_different,
            "environments": len(layout.header.cells),
        },
        "warnings": warnings,
        "meta": meta,
    }


def render(
    layout: TableLayout,
    env: Environment,
    *,
    expand_versions: bool = False,
    show_only_different: bool = False,
    warnings: Optional[List[dict]] = None,
    meta: Optional[dict] = None,
) -> str:
    """Render the diff document by building a context dict and invoking the Jinja2 template."""
    # When called directly (e.g. tests) the environment may have no loader;
    # set it up from the package templates dir.
    if env.loader is None:
        templates_dir = Path(__file__).resolve().parent.parent / "templates"
        env = env.overlay(loader=FileSystemLoader(str(templates_dir)))

    ctx = _build_context(layout, expand_versions, show_only_different, warnings or [], meta or {})
    template = env.get_template("diff.html.j2")
    return template.render(ctx)
