"""Group clusters into declared environments by substring match.

Warnings are returned, not printed; the caller decides how to show them.
Clusters matching no token are kept under ``None`` so a declared token that
happens to be named ``other`` never collects them.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ._util import debug as _debug_fn, make_warning
from .schema import OTHER_ENVIRONMENT, ClusterMap, EnvironmentSpec, PodRecord


def _debug(msg: str) -> None:
    _debug_fn("environments", msg)


def matching_tokens(cluster: str, spec: EnvironmentSpec) -> List[str]:
    """Declared tokens contained in the cluster name, in declaration order."""
    return [token for token in spec.tokens if token in cluster]


def classify(cluster: str, spec: EnvironmentSpec) -> Tuple[Optional[str], Optional[dict]]:
    """Return (environment, warning).

    The environment is None for the other bucket. The warning is set for
    ambiguous clusters.
    """
    matches = matching_tokens(cluster, spec)
    if not matches:
        return None, None
    warning = None
    if len(matches) >= 2:
        quoted = "', '".join(matches)
        warning = make_warning(
            "environments",
            f"Warning, too many matches for '{cluster}': '{quoted}'",
            cluster=cluster,
            matches=matches,
        )
    return matches[0], warning


def build_cluster_map(pods: Sequence[PodRecord], spec: EnvironmentSpec) -> ClusterMap:
    """Classify every observed cluster once and work out the rendered columns."""
    environments: Dict[str, Optional[str]] = {}
    warnings: List[dict] = []
    for pod in pods:
        if pod.cluster in environments:
            continue
        env, warning = classify(pod.cluster, spec)
        environments[pod.cluster] = env
        if warning:
            warnings.append(warning)
        _debug(f"{pod.cluster} -> {env or OTHER_ENVIRONMENT}")

    # A token gets a column when any observed cluster contains it, even if an
    # ambiguous cluster was assigned to an earlier token.
    columns = [token for token in spec.tokens if any(token in c for c in environments)]
    other_column = spec.include_other and None in environments.values()
    if other_column:
        columns.append(OTHER_ENVIRONMENT)
    return ClusterMap(
        environments=environments,
        columns=columns,
        other_column=other_column,
        warnings=warnings,
    )
