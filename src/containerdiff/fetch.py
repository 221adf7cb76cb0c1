"""Pod fetcher: list pods of every kubeconfig context.

Each context is queried in its own worker thread. The timeout applies per
request and as a wall-clock deadline for the whole fetch.
Clusters that cannot be configured or do not answer are reported and skipped;
the rest of the run continues with whatever pods were collected.
"""

import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from typing import List, Optional, Sequence

import urllib3
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from ._util import debug as _debug_fn, notice
from .schema import ContainerInstance, PodRecord

DEFAULT_TIMEOUT = 10


def _debug(msg: str) -> None:
    _debug_fn("fetch", msg)


def list_contexts(kubeconfig: Optional[str] = None) -> List[str]:
    """Context names from the kubeconfig, sorted."""
    contexts, _active = config.list_kube_config_contexts(config_file=kubeconfig)
    return sorted(c["name"] for c in contexts or [])


def select_clusters(contexts: Sequence[str], exclude_clusters: Sequence[str]) -> List[str]:
    selected = []
    for name in contexts:
        if any(e in name for e in exclude_clusters):
            notice(f"Excluding cluster: '{name}'")
            continue
        selected.append(name)
    return selected


def pod_from_api(pod, cluster: str) -> PodRecord:
    """Convert a kubernetes V1Pod to a PodRecord."""
    metadata = pod.metadata
    spec = pod.spec
    containers = []
    if spec is not None:
        containers = [
            ContainerInstance(name=c.name, image=c.image or "")
            for c in spec.containers or []
        ]
    return PodRecord(
        cluster=cluster,
        namespace=metadata.namespace or "",
        name=metadata.name or "",
        labels=dict(metadata.labels or {}),
        containers=containers,
    )


def fetch_cluster_pods(
    context: str,
    kubeconfig: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[PodRecord]:
    """All pods of one cluster; [] when the cluster is unusable or unreachable."""
    configuration = client.Configuration()
    try:
        config.load_kube_config(
            config_file=kubeconfig,
            context=context,
            client_configuration=configuration,
            persist_config=False,
        )
    except ConfigException as exc:
        notice(f"Ignoring cluster (invalid config): '{context}': {exc}")
        return []
    # One attempt per request; fetch_all_pods enforces the overall deadline.
    configuration.retries = 0
    api_client = client.ApiClient(configuration)

    notice(f"Connecting to: {api_client.configuration.host} ({context})")
    try:
        v1 = client.CoreV1Api(api_client)
        result = v1.list_pod_for_all_namespaces(_request_timeout=timeout)
    except ApiException as exc:
        notice(f"Ignoring cluster: '{context}': {exc.status} {exc.reason}")
        return []
    except (urllib3.exceptions.HTTPError, OSError) as exc:
        notice(f"Ignoring cluster: '{context}': {exc}")
        return []
    finally:
        api_client.close()

    pods = [pod_from_api(p, context) for p in result.items or []]
    _debug(f"{context}: {len(pods)} pods")
    return pods


def fetch_all_pods(
    kubeconfig: Optional[str] = None,
    exclude_clusters: Sequence[str] = (),
    timeout: float = DEFAULT_TIMEOUT,
) -> List[PodRecord]:
    """Pods of every selected context, in context order."""
    clusters = select_clusters(list_contexts(kubeconfig), exclude_clusters)
    if not clusters:
        return []
    pool = ThreadPoolExecutor(max_workers=len(clusters))
    try:
        futures = [(name, pool.submit(fetch_cluster_pods, name, kubeconfig, timeout)) for name in clusters]
        deadline = time.monotonic() + timeout
        pods: List[PodRecord] = []
        for name, future in futures:
            try:
                pods.extend(future.result(timeout=max(0.0, deadline - time.monotonic())))
            except FuturesTimeoutError:
                notice(f"Ignoring cluster: '{name}': Timeout.")
        return pods
    finally:
        # Do not wait for clusters that missed the deadline.
        pool.shutdown(wait=False, cancel_futures=True)
