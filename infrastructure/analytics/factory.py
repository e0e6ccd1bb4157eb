"""Factory for analytics sinks."""

import logging

from infrastructure.analytics.base import AnalyticsSink
from infrastructure.analytics.sinks import LoggingAnalyticsSink, MemoryAnalyticsSink, NullAnalyticsSink
from infrastructure.config.models import AnalyticsConfig, AnalyticsSinkKind

logger = logging.getLogger(__name__)


def make_analytics_sink(cfg: AnalyticsConfig) -> AnalyticsSink:
    """
    Create the analytics sink selected in config.

    The Opik sink is imported lazily so that local sinks work without Opik configured.
    """
    if cfg.sink is AnalyticsSinkKind.LOG:
        return LoggingAnalyticsSink()
    if cfg.sink is AnalyticsSinkKind.MEMORY:
        return MemoryAnalyticsSink()
    if cfg.sink is AnalyticsSinkKind.NONE:
        return NullAnalyticsSink()
    if cfg.sink is AnalyticsSinkKind.OPIK:
        from infrastructure.analytics.opik_sink import OpikAnalyticsSink

        return OpikAnalyticsSink(project_name=cfg.project_name)

    raise ValueError(f"Unsupported analytics sink: {cfg.sink}")
