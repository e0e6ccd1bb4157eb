"""In-memory arena of fetched taxonomy nodes, keyed by id."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from domain.schemas import NodeView, TaxonomyRecord

logger = logging.getLogger(__name__)


class UnknownNodeError(KeyError):
    """Raised when a node id has not been fetched into the tree yet."""

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Unknown taxonomy node: {self.node_id!r} (not fetched yet)"


class TaxonomyNode(BaseModel):
    """Mutable arena entry. Only the expansion engine mutates these through TaxonomyTree."""

    record: TaxonomyRecord
    children: list[str] = Field(default_factory=list)
    children_loaded: bool = False
    expanded: bool = False

    @property
    def id(self) -> str:
        return self.record.id

    def view(self) -> NodeView:
        return NodeView(
            id=self.record.id,
            text=self.record.text,
            path=self.record.path,
            child_count=self.record.child_count,
            share_title=self.record.share_title,
            expanded=self.expanded,
            children_loaded=self.children_loaded,
            children=tuple(self.children),
        )


class TaxonomyTree:
    """
    Append-only tree of fetched nodes.

    Nodes are created when a fetch resolves and are never removed; a record
    whose id is already known keeps the first stored entry.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, TaxonomyNode] = {}
        self._top_level: list[str] | None = None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def top_level_loaded(self) -> bool:
        return self._top_level is not None

    def _add(self, records: Iterable[TaxonomyRecord]) -> list[str]:
        ids: list[str] = []
        for record in records:
            if record.id not in self._nodes:
                self._nodes[record.id] = TaxonomyNode(record=record)
            else:
                logger.debug("Node %s already in tree; keeping first record", record.id)
            ids.append(record.id)
        return ids

    def set_top_level(self, records: Iterable[TaxonomyRecord]) -> list[str]:
        """Store the top-level page. Returns the ids in provider (sorted) order."""
        self._top_level = self._add(records)
        return list(self._top_level)

    def attach_children(self, parent_id: str, records: Iterable[TaxonomyRecord]) -> list[str]:
        """Store a fetched child page under `parent_id` and mark its children as loaded."""
        parent = self.get(parent_id)
        parent.children = self._add(records)
        parent.children_loaded = True
        return list(parent.children)

    def set_expanded(self, node_id: str, expanded: bool) -> None:
        node = self.get(node_id)
        if expanded and not node.children_loaded:
            raise ValueError(f"Cannot expand node {node_id!r} before its children are loaded")
        node.expanded = expanded

    def get(self, node_id: str) -> TaxonomyNode:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    # ---- Read-only views ----

    def view(self, node_id: str) -> NodeView:
        return self.get(node_id).view()

    def top_level_ids(self) -> list[str]:
        return list(self._top_level or [])

    def top_level(self) -> list[NodeView]:
        return [self._nodes[node_id].view() for node_id in (self._top_level or [])]

    def children(self, node_id: str) -> list[NodeView]:
        return [self._nodes[child_id].view() for child_id in self.get(node_id).children]

    def expanded_ids(self) -> list[str]:
        return [node_id for node_id, node in self._nodes.items() if node.expanded]
