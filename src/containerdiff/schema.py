"""
Pod inventory and diff schema.

Strongly typed contract between the pod fetcher, the diff core and the renderers.
The fetcher produces PodRecords; the core derives DiffRows and a RenderModel;
renderers consume the laid-out table.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

SCHEMA_VERSION = 1

OTHER_ENVIRONMENT = "other"
MISSING_VERSION = "."


# --- Pods (produced by the fetcher, read-only afterwards) ---


class ContainerInstance(BaseModel):
    """Single container from a pod spec."""

    name: str
    image: str = ""  # repo[:tag][@digest]


class PodRecord(BaseModel):
    """A pod observed in one cluster."""

    cluster: str
    namespace: str = ""
    name: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)
    containers: List[ContainerInstance] = Field(default_factory=list)


class PodSnapshot(BaseModel):
    """Pod list serialized with --save-snapshot and read back with --from-snapshot."""

    schema_version: int = SCHEMA_VERSION
    meta: dict = Field(default_factory=dict)  # timestamp, kubeconfig, excluded clusters
    pods: List[PodRecord] = Field(default_factory=list)


# --- Run configuration ---


class EnvironmentSpec(BaseModel):
    """Declared environment tokens, in column order."""

    tokens: List[str] = Field(default_factory=list)
    include_other: bool = False

    @field_validator("tokens")
    @classmethod
    def _distinct_tokens(cls, tokens: List[str]) -> List[str]:
        # An empty token is a substring of every cluster name; drop it.
        seen: List[str] = []
        for token in tokens:
            token = token.strip()
            if token and token not in seen:
                seen.append(token)
        return seen

    @classmethod
    def parse(cls, value: str, include_other: bool = False) -> "EnvironmentSpec":
        """Build from the comma-separated command-line form."""
        return cls(tokens=value.split(","), include_other=include_other)


class DiffOptions(BaseModel):
    """Mode flags for one diff run."""

    expand_versions: bool = False
    show_only_different: bool = False
    treat_missing_as_equal: bool = False
    show_namespaces: bool = False
    use_label_version: bool = False
    target_width: Optional[int] = None  # None renders unbounded (HTML)


# --- Derived diff data ---


class ClusterMap(BaseModel):
    """Cluster -> environment assignment plus the columns that will be rendered."""

    environments: Dict[str, Optional[str]] = Field(default_factory=dict)  # None: matched no token
    columns: List[str] = Field(default_factory=list)
    other_column: bool = False  # last column is the other bucket
    warnings: List[dict] = Field(default_factory=list)

    @property
    def column_keys(self) -> List[Optional[str]]:
        """Environment key per column; None selects the other bucket."""
        keys: List[Optional[str]] = list(self.columns)
        if self.other_column:
            keys[-1] = None
        return keys


class DiffRow(BaseModel):
    """One container name and its versions per environment column."""

    name: str
    label: str = ""  # name, optionally annotated with namespaces
    namespaces: List[str] = Field(default_factory=list)
    cells: List[List[str]] = Field(default_factory=list)
    different: bool = False


class RenderModel(BaseModel):
    """Header row (environment names) followed by data rows."""

    header: DiffRow
    rows: List[DiffRow] = Field(default_factory=list)
    target_width: Optional[int] = None

    @property
    def columns(self) -> List[str]:
        return [cell[0] for cell in self.header.cells]


# --- Layout output (shared by both renderers) ---


class CellView(BaseModel):
    """Display form of one cell after the collapse decision."""

    text: str = ""
    values: List[str] = Field(default_factory=list)
    collapsed: bool = False
    tooltip: str = ""


class LaidOutRow(BaseModel):
    row: DiffRow
    label: CellView
    cells: List[CellView] = Field(default_factory=list)


class TableLayout(BaseModel):
    """Column widths (label column first) and the cell views for every row."""

    widths: List[int] = Field(default_factory=list)
    header: LaidOutRow
    rows: List[LaidOutRow] = Field(default_factory=list)


class StyledLine(BaseModel):
    """One console line; style is a rich style name or None for plain."""

    text: str
    style: Optional[str] = None


class DiffResult(BaseModel):
    """What one pipeline run hands back to the caller for output."""

    columns: List[str] = Field(default_factory=list)
    lines: List[StyledLine] = Field(default_factory=list)
    html: Optional[str] = None
    warnings: List[dict] = Field(default_factory=list)
