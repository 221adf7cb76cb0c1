"""Tests for namespace and container exclusion."""

from containerdiff.filters import apply_filters, exclude_containers, exclude_namespaces
from containerdiff.schema import ContainerInstance, PodRecord


def _pod(namespace, *names):
    return PodRecord(
        cluster="prod-1",
        namespace=namespace,
        containers=[ContainerInstance(name=n, image=f"{n}:1") for n in names],
    )


def test_exclude_namespaces_substring_case_insensitive():
    pods = [_pod("kube-system", "dns"), _pod("shop", "api"), _pod("Monitoring", "prom")]
    kept = exclude_namespaces(pods, ["KUBE", "monitor"])
    assert [p.namespace for p in kept] == ["shop"]


def test_exclude_namespaces_empty_list_keeps_all():
    pods = [_pod("a", "x"), _pod("b", "y")]
    assert exclude_namespaces(pods, []) == pods


def test_exclude_containers_returns_copies():
    pod = _pod("shop", "api", "istio-proxy", "Istio-init")
    kept = exclude_containers([pod], ["istio"])
    assert [c.name for c in kept[0].containers] == ["api"]
    assert [c.name for c in pod.containers] == ["api", "istio-proxy", "Istio-init"]
    assert kept[0] is not pod


def test_exclude_containers_untouched_pod_is_reused():
    pod = _pod("shop", "api")
    assert exclude_containers([pod], ["sidecar"])[0] is pod


def test_apply_filters_combines_both():
    pods = [_pod("kube-system", "dns"), _pod("shop", "api", "envoy")]
    kept = apply_filters(pods, exclude_namespace=["kube"], exclude_container=["envoy"])
    assert len(kept) == 1
    assert [c.name for c in kept[0].containers] == ["api"]
