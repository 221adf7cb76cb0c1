"""Diff matrix: versions per (container name, environment) and the row diff flag."""

from typing import Dict, List, Optional, Sequence

from .schema import (
    MISSING_VERSION,
    ClusterMap,
    DiffOptions,
    DiffRow,
    PodRecord,
    RenderModel,
)
from .versions import extract_version, version_key

HEADER_LABEL = "Container"


def container_names(pods: Sequence[PodRecord]) -> List[str]:
    return sorted({c.name for pod in pods for c in pod.containers})


def cell_versions(
    pods: Sequence[PodRecord],
    container: str,
    environment: Optional[str],
    cluster_map: ClusterMap,
    use_label_version: bool = False,
) -> List[str]:
    """Sorted, deduplicated versions of one container in one environment.

    ``environment=None`` selects clusters that matched no token. Empty when
    no pod of the environment runs the container; ``["."]`` when it runs but
    no version could be determined.
    """
    versions = set()
    found = False
    for pod in pods:
        if pod.cluster not in cluster_map.environments:
            continue
        if cluster_map.environments[pod.cluster] != environment:
            continue
        instances = [c for c in pod.containers if c.name == container]
        if not instances:
            continue
        found = True
        if use_label_version:
            # The label belongs to the pod: one lookup per pod.
            instances = instances[:1]
        for instance in instances:
            version = extract_version(instance, pod.labels, use_label_version)
            if version is not None:
                versions.add(version)

    if found and not versions:
        versions.add(MISSING_VERSION)
    return sorted(versions, key=version_key)


def is_different(cells: Sequence[List[str]], treat_missing_as_equal: bool = False) -> bool:
    """True when any compared cell differs from the reference cell."""
    reference = None
    for cell in cells:
        if treat_missing_as_equal and not cell:
            continue
        if reference is None:
            reference = cell
        elif list(cell) != list(reference):
            return True
    return False


def _namespaces_by_container(pods: Sequence[PodRecord], cluster_map: ClusterMap) -> Dict[str, List[str]]:
    seen: Dict[str, set] = {}
    keys = cluster_map.column_keys
    for pod in pods:
        if pod.cluster not in cluster_map.environments:
            continue
        if cluster_map.environments[pod.cluster] not in keys:
            continue
        for c in pod.containers:
            seen.setdefault(c.name, set()).add(pod.namespace)
    return {name: sorted(ns) for name, ns in seen.items()}


def annotate_label(name: str, namespaces: Sequence[str]) -> str:
    if not namespaces:
        return name
    return f"{name} ({', '.join(namespaces)})"


def build_diff_rows(
    pods: Sequence[PodRecord],
    cluster_map: ClusterMap,
    options: DiffOptions,
) -> List[DiffRow]:
    namespaces = _namespaces_by_container(pods, cluster_map) if options.show_namespaces else {}
    rows = []
    for name in container_names(pods):
        cells = [
            cell_versions(pods, name, env, cluster_map, options.use_label_version)
            for env in cluster_map.column_keys
        ]
        row_namespaces = namespaces.get(name, [])
        rows.append(DiffRow(
            name=name,
            label=annotate_label(name, row_namespaces),
            namespaces=row_namespaces,
            cells=cells,
            different=is_different(cells, options.treat_missing_as_equal),
        ))
    return rows


def build_render_model(
    pods: Sequence[PodRecord],
    cluster_map: ClusterMap,
    options: DiffOptions,
) -> RenderModel:
    """Header row of environment names followed by one row per container name."""
    header = DiffRow(
        name=HEADER_LABEL,
        label=HEADER_LABEL,
        cells=[[env] for env in cluster_map.columns],
    )
    return RenderModel(
        header=header,
        rows=build_diff_rows(pods, cluster_map, options),
        target_width=options.target_width,
    )
