"""Opik-backed analytics sink: each tree interaction becomes an Opik trace."""

import logging

import opik

from domain.schemas import AnalyticsEvent
from infrastructure.analytics.base import AnalyticsSink
from infrastructure.observability.logging import get_log_context

logger = logging.getLogger(__name__)


class OpikAnalyticsSink(AnalyticsSink):
    """
    Records events as Opik traces named `<category>.<action>`.

    Traces are buffered by the Opik client and sent in the background;
    call flush() before the process exits.
    """

    name = "opik"

    def __init__(self, *, client: opik.Opik | None = None, project_name: str | None = None) -> None:
        self.client = client or opik.Opik(project_name=project_name)
        logger.info("Initialized Opik analytics sink (project=%s)", project_name or "default")

    def track_event(self, event: AnalyticsEvent) -> None:
        ctx = get_log_context()
        self.client.trace(
            name=f"{event.category}.{event.action}",
            input=event.model_dump(mode="json"),
            metadata={"session_tag": ctx["session_tag"], "node_id": ctx["node_id"]},
            tags=[event.category, event.action],
        )

    def flush(self) -> None:
        self.client.flush()
