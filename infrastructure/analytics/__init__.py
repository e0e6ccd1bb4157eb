"""
Analytics sinks for tree interaction events.

- LoggingAnalyticsSink: events go to the application log
- MemoryAnalyticsSink: events are kept in a list (tests, CLI summaries)
- OpikAnalyticsSink: events are recorded as Opik traces
- NullAnalyticsSink: events are dropped
"""

from infrastructure.analytics.base import AnalyticsSink
from infrastructure.analytics.factory import make_analytics_sink
from infrastructure.analytics.sinks import LoggingAnalyticsSink, MemoryAnalyticsSink, NullAnalyticsSink

__all__ = [
    "AnalyticsSink",
    "LoggingAnalyticsSink",
    "MemoryAnalyticsSink",
    "NullAnalyticsSink",
    "make_analytics_sink",
]
