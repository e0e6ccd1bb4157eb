"""Plain-text outline of the facet tree, for logs and CLI output."""

import logging

from application.constants import MARK_COLLAPSED, MARK_EXPANDED, MARK_LEAF
from application.expansion import ExpansionEngine
from domain.schemas import BootstrapReport, NodeView

logger = logging.getLogger(__name__)


def _marker(view: NodeView) -> str:
    if view.expanded:
        return MARK_EXPANDED
    if view.children_loaded:
        return MARK_COLLAPSED if view.children else MARK_LEAF
    return MARK_COLLAPSED if view.child_count > 0 else MARK_LEAF


def format_tree_outline(engine: ExpansionEngine, *, indent: str = "  ") -> list[str]:
    """
    Render the visible part of the tree, one line per node.

    Children are listed only under expanded nodes, so the outline matches what
    a user would see in the facet.
    """
    lines: list[str] = []

    def _walk(views: list[NodeView], depth: int) -> None:
        for view in views:
            lines.append(f"{indent * depth}{_marker(view)} {view.text} ({view.child_count}) {view.path}")
            if view.expanded:
                _walk(engine.children(view.id), depth + 1)

    _walk(engine.top_level(), 0)
    return lines


def log_tree_summary(engine: ExpansionEngine, report: BootstrapReport) -> None:
    """Log the bootstrap outcome followed by the visible outline."""
    logger.info("=" * 60)
    logger.info("Bootstrap mode: %s", report.mode)
    logger.info("Expanded nodes: %d (fetches=%d)", len(report.expanded), report.fetches)
    if report.error:
        logger.warning("Bootstrap incomplete (failed at parent=%s): %s", report.failed_node_id, report.error)
    logger.info("-" * 60)
    for line in format_tree_outline(engine):
        logger.info("%s", line)
    logger.info("=" * 60)
