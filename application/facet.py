"""Facet UI adapter: turns expand/collapse clicks into engine toggles plus analytics events."""

import logging

from application.constants import ACTION_CONTRACT, ACTION_EXPAND, ANALYTICS_CATEGORY, ANALYTICS_LABEL_PREFIX
from application.expansion import ExpansionEngine
from domain.schemas import AnalyticsEvent, NodeView
from infrastructure.analytics.base import AnalyticsSink

logger = logging.getLogger(__name__)


class FacetAdapter:
    """
    The only mutation path exposed to the UI layer.

    Views handed out are read-only snapshots; all tree changes go through the engine.
    """

    def __init__(self, engine: ExpansionEngine, analytics: AnalyticsSink) -> None:
        self.engine = engine
        self.analytics = analytics

    def top_level(self) -> list[NodeView]:
        return self.engine.top_level()

    def children(self, node_id: str) -> list[NodeView]:
        return self.engine.children(node_id)

    def node(self, node_id: str) -> NodeView:
        return self.engine.node(node_id)

    def _emit(self, event: AnalyticsEvent) -> None:
        # Analytics must never affect tree state
        try:
            self.analytics.track_event(event)
        except Exception:
            logger.warning(
                "Analytics sink %s failed; dropping event action=%s label=%r",
                self.analytics.name,
                event.action,
                event.label,
                exc_info=True,
            )

    async def expand(self, node_id: str) -> NodeView:
        """Handle a user click on a node: record the event, then toggle the node.

        Args:
            node_id: Id of a node already present in the tree

        Returns:
            The node's view after the toggle

        Raises:
            UnknownNodeError: If the node has not been fetched yet (no event is emitted)
            ProviderError: If loading the node's children fails
        """
        current = self.engine.node(node_id)
        event = AnalyticsEvent(
            category=ANALYTICS_CATEGORY,
            action=ACTION_CONTRACT if current.expanded else ACTION_EXPAND,
            label=f"{ANALYTICS_LABEL_PREFIX}{current.text}",
        )
        self._emit(event)
        return await self.engine.toggle(node_id)
