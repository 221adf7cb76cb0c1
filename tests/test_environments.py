"""Tests for environment classification and column selection."""

from containerdiff.environments import build_cluster_map, classify, matching_tokens
from containerdiff.schema import ContainerInstance, EnvironmentSpec, PodRecord


def _pods(*clusters: str):
    return [
        PodRecord(cluster=c, namespace="default", containers=[ContainerInstance(name="api", image="api:1")])
        for c in clusters
    ]


# ---------------------------------------------------------------------------
# EnvironmentSpec
# ---------------------------------------------------------------------------

def test_spec_parse_keeps_order_and_drops_duplicates():
    spec = EnvironmentSpec.parse("stage, prod,,stage")
    assert spec.tokens == ["stage", "prod"]
    assert spec.include_other is False


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

def test_single_match():
    spec = EnvironmentSpec(tokens=["prod", "stage"])
    assert classify("prod-east", spec) == ("prod", None)


def test_no_match_is_unassigned():
    spec = EnvironmentSpec(tokens=["prod", "stage"])
    assert classify("dmz-1", spec) == (None, None)


def test_match_is_case_sensitive():
    spec = EnvironmentSpec(tokens=["prod"])
    assert matching_tokens("PROD-1", spec) == []


def test_ambiguous_match_uses_first_declared_and_warns():
    spec = EnvironmentSpec(tokens=["stage", "prod"])
    env, warning = classify("prod-stage-1", spec)
    assert env == "stage"
    assert warning["cluster"] == "prod-stage-1"
    assert warning["matches"] == ["stage", "prod"]
    assert warning["severity"] == "warning"
    assert warning["message"] == "Warning, too many matches for 'prod-stage-1': 'stage', 'prod'"


# ---------------------------------------------------------------------------
# build_cluster_map
# ---------------------------------------------------------------------------

def test_columns_without_other():
    spec = EnvironmentSpec(tokens=["prod", "stage"])
    cmap = build_cluster_map(_pods("prod-east", "prod-west", "stage-1"), spec)
    assert cmap.columns == ["prod", "stage"]
    assert cmap.environments == {"prod-east": "prod", "prod-west": "prod", "stage-1": "stage"}
    assert cmap.warnings == []


def test_columns_with_other():
    spec = EnvironmentSpec(tokens=["prod", "stage"], include_other=True)
    cmap = build_cluster_map(_pods("prod-east", "stage-1", "dmz-1"), spec)
    assert cmap.columns == ["prod", "stage", "other"]


def test_unmatched_cluster_without_other_has_no_column():
    spec = EnvironmentSpec(tokens=["prod", "stage"])
    cmap = build_cluster_map(_pods("prod-east", "dmz-1"), spec)
    assert cmap.columns == ["prod"]
    assert cmap.environments["dmz-1"] is None


def test_other_column_only_when_something_is_unmatched():
    spec = EnvironmentSpec(tokens=["prod"], include_other=True)
    cmap = build_cluster_map(_pods("prod-east"), spec)
    assert cmap.columns == ["prod"]


def test_columns_follow_declaration_order():
    spec = EnvironmentSpec(tokens=["stage", "dev", "prod"])
    cmap = build_cluster_map(_pods("prod-1", "stage-1"), spec)
    assert cmap.columns == ["stage", "prod"]


def test_each_cluster_warned_once():
    spec = EnvironmentSpec(tokens=["a", "b"])
    cmap = build_cluster_map(_pods("ab-1", "ab-1", "ab-1"), spec)
    assert len(cmap.warnings) == 1


def test_empty_pod_list():
    cmap = build_cluster_map([], EnvironmentSpec(tokens=["prod"], include_other=True))
    assert cmap.columns == []
    assert cmap.environments == {}


def test_ambiguous_cluster_gives_every_matched_token_a_column():
    spec = EnvironmentSpec(tokens=["stage", "prod"])
    cmap = build_cluster_map(_pods("prod-stage-1"), spec)
    assert cmap.environments == {"prod-stage-1": "stage"}
    assert cmap.columns == ["stage", "prod"]
    assert len(cmap.warnings) == 1


def test_declared_other_token_is_not_the_other_bucket():
    spec = EnvironmentSpec(tokens=["other"])
    cmap = build_cluster_map(_pods("other-1", "dmz-1"), spec)
    assert cmap.environments == {"other-1": "other", "dmz-1": None}
    assert cmap.columns == ["other"]
    assert cmap.column_keys == ["other"]
