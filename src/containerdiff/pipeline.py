"""
Pipeline orchestrator: classify clusters, build the diff matrix, lay it out, render.
Also loads and saves pod snapshots for offline runs (--from-snapshot).
"""

import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from jinja2 import Environment

from ._util import debug as _debug_fn
from .environments import build_cluster_map
from .layout import DEFAULT_COLLAPSE_LIMIT, layout_table
from .matrix import build_render_model
from .renderers import make_env, render_html, render_text
from .schema import (
    SCHEMA_VERSION,
    DiffOptions,
    DiffResult,
    EnvironmentSpec,
    PodRecord,
    PodSnapshot,
)


def _debug(msg: str) -> None:
    _debug_fn("pipeline", msg)


def load_snapshot(path: Path) -> PodSnapshot:
    """Load and deserialize a pod snapshot from JSON."""
    data = json.loads(Path(path).read_text())
    file_version = data.get("schema_version", 1)
    if file_version > SCHEMA_VERSION:
        print(
            f"WARNING: snapshot was created by a newer containerdiff (schema v{file_version}, "
            f"this tool supports v{SCHEMA_VERSION}). Some fields may be dropped.",
            file=sys.stderr,
        )
    return PodSnapshot.model_validate(data)


def save_snapshot(pods: Sequence[PodRecord], path: Path, meta: Optional[dict] = None) -> None:
    """Serialize pods to JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    snapshot = PodSnapshot(meta=meta or {}, pods=list(pods))
    path.write_text(snapshot.model_dump_json(indent=2))


def run_pipeline(
    pods: Sequence[PodRecord],
    spec: EnvironmentSpec,
    options: DiffOptions,
    *,
    html: bool = False,
    env: Optional[Environment] = None,
    meta: Optional[dict] = None,
) -> DiffResult:
    """
    Compute the version diff of ``pods`` and render it.

    Text output ignores ``expand_versions``; HTML output ignores
    ``target_width`` since the document has no width budget.
    """
    cluster_map = build_cluster_map(pods, spec)
    _debug(f"{len(pods)} pods, columns: {cluster_map.columns}")

    if html:
        options = options.model_copy(update={"target_width": None})
    model = build_render_model(pods, cluster_map, options)

    if html:
        limit = None if options.expand_versions else DEFAULT_COLLAPSE_LIMIT
        layout = layout_table(model, collapse_limit=limit)
        document = render_html(
            layout,
            env or make_env(),
            expand_versions=options.expand_versions,
            show_only_different=options.show_only_different,
            warnings=cluster_map.warnings,
            meta=meta,
        )
        return DiffResult(columns=cluster_map.columns, html=document, warnings=cluster_map.warnings)

    layout = layout_table(model)
    lines = render_text(layout, show_only_different=options.show_only_different)
    return DiffResult(columns=cluster_map.columns, lines=lines, warnings=cluster_map.warnings)


def summarize(result: DiffResult) -> List[str]:
    """Warning messages in the order they were raised."""
    return [w["message"] for w in result.warnings]
