"""Namespace and container exclusion.

Pods are never modified in place; filtered copies are returned.
"""

from typing import List, Sequence

from .schema import PodRecord


def _contains_any(value: str, substrings: Sequence[str]) -> bool:
    lowered = value.lower()
    return any(s.lower() in lowered for s in substrings)


def exclude_namespaces(pods: Sequence[PodRecord], namespaces: Sequence[str]) -> List[PodRecord]:
    """Drop pods whose namespace contains any of the substrings (case-insensitive)."""
    if not namespaces:
        return list(pods)
    return [p for p in pods if not _contains_any(p.namespace, namespaces)]


def exclude_containers(pods: Sequence[PodRecord], containers: Sequence[str]) -> List[PodRecord]:
    """Copy pods without the containers whose name contains any of the substrings."""
    if not containers:
        return list(pods)
    result = []
    for pod in pods:
        kept = [c for c in pod.containers if not _contains_any(c.name, containers)]
        if len(kept) == len(pod.containers):
            result.append(pod)
        else:
            result.append(pod.model_copy(update={"containers": kept}))
    return result


def apply_filters(
    pods: Sequence[PodRecord],
    exclude_namespace: Sequence[str] = (),
    exclude_container: Sequence[str] = (),
) -> List[PodRecord]:
    return exclude_containers(exclude_namespaces(pods, exclude_namespace), exclude_container)
