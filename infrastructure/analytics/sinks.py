"""Local analytics sinks: logging, in-memory, and no-op."""

import logging

from domain.schemas import AnalyticsEvent
from infrastructure.analytics.base import AnalyticsSink

logger = logging.getLogger(__name__)


class LoggingAnalyticsSink(AnalyticsSink):
    """Writes each event to the application log."""

    name = "log"

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def track_event(self, event: AnalyticsEvent) -> None:
        logger.log(self.level, "analytics category=%s action=%s label=%r", event.category, event.action, event.label)


class MemoryAnalyticsSink(AnalyticsSink):
    """Keeps events in a list, in emission order."""

    name = "memory"

    def __init__(self) -> None:
        self.events: list[AnalyticsEvent] = []

    def track_event(self, event: AnalyticsEvent) -> None:
        self.events.append(event)


class NullAnalyticsSink(AnalyticsSink):
    name = "none"

    def track_event(self, event: AnalyticsEvent) -> None:
        return None
