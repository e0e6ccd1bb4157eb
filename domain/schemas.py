"""Pydantic models for taxonomy records, tree node views, and analytics events."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TaxonomyRecord(BaseModel):
    """Single taxonomy entry as returned by a provider page."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Provider-assigned taxonomy node id.")
    text: str = Field(..., description="Display text; also the sort key for sibling ordering.")
    path: str = Field(
        ...,
        description="'|'-delimited ancestor chain ending in this node's own segment, e.g. '|A|B|C'.",
    )
    child_count: int = Field(default=0, ge=0, description="Number of immediate children reported by the provider.")
    share_title: str | None = Field(default=None, description="Title used by the search index, if any.")


class NodeState(str, Enum):
    """Expansion state of a node in the facet tree."""

    COLLAPSED_UNLOADED = "collapsed_unloaded"
    COLLAPSED_LOADED = "collapsed_loaded"
    EXPANDED = "expanded"


class NodeView(BaseModel):
    """Read-only snapshot of a tree node handed out to callers outside the engine."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    path: str
    child_count: int = 0
    share_title: str | None = None
    expanded: bool = False
    children_loaded: bool = False
    children: tuple[str, ...] = ()

    @property
    def state(self) -> NodeState:
        if self.expanded:
            return NodeState.EXPANDED
        if self.children_loaded:
            return NodeState.COLLAPSED_LOADED
        return NodeState.COLLAPSED_UNLOADED


class AnalyticsEvent(BaseModel):
    """Tree interaction event sent to the metrics collaborator."""

    model_config = ConfigDict(frozen=True)

    category: Literal["tree"] = "tree"
    action: Literal["expand", "contract"]
    label: str


class BootstrapReport(BaseModel):
    """Outcome of the one-time bootstrap expansion walk."""

    mode: Literal["filters", "default", "none"] = Field(
        default="none",
        description="'filters' when active filters selected nodes, 'default' for the shallow policy, "
        "'none' when nothing was expanded.",
    )
    expanded: list[str] = Field(default_factory=list, description="Node ids opened, in expansion order.")
    fetches: int = Field(default=0, description="Provider calls the walk issued itself, top level included.")
    error: str | None = None
    failed_node_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
