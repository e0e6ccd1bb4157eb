"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing the facet tree workflows: bootstrap expansion, user toggles
with analytics, and tree summaries.
"""

from application.expansion import ExpansionEngine
from application.facet import FacetAdapter
from application.summary import format_tree_outline, log_tree_summary

__all__ = [
    # Main workflows
    "ExpansionEngine",
    "FacetAdapter",
    # Reporting
    "format_tree_outline",
    "log_tree_summary",
]
