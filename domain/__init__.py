"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- schemas: Pydantic models for taxonomy records, node views and analytics events
- taxonomy: Path prefix derivation, matching rule and the in-memory node arena
"""

from domain.schemas import AnalyticsEvent, BootstrapReport, NodeState, NodeView, TaxonomyRecord

__all__ = [
    "TaxonomyRecord",
    "NodeView",
    "NodeState",
    "AnalyticsEvent",
    "BootstrapReport",
]
