"""Test doubles shared by the unit tests."""

import asyncio
from collections.abc import Sequence
from typing import Any

from domain.schemas import TaxonomyRecord
from domain.taxonomy.loader import ChildrenByParent, parse_static_taxonomy
from infrastructure.analytics.base import AnalyticsSink
from infrastructure.config.models import Provider
from infrastructure.providers.base import ProviderError, TaxonomyProvider


def node(node_id: str, *children: dict[str, Any], text: str | None = None) -> dict[str, Any]:
    """Nested taxonomy entry in the static YAML shape."""
    return {"id": node_id, "text": text or node_id, "children": list(children)}


def pages(*entries: dict[str, Any]) -> ChildrenByParent:
    return parse_static_taxonomy({"taxonomy": list(entries)})


class RecordingProvider(TaxonomyProvider):
    """Serves pages from memory and records every call, including overlap between calls."""

    provider = Provider.STATIC

    def __init__(
        self,
        children_by_parent: ChildrenByParent,
        *,
        fail_on: Sequence[str | None] = (),
        yields: int = 3,
        page_size: int = 150,
    ) -> None:
        super().__init__(page_size=page_size)
        self.children_by_parent = children_by_parent
        self.fail_on = set(fail_on)
        self.yields = yields
        self.calls: list[str | None] = []
        self.active = 0
        self.max_active = 0

    async def _query_children(self, parent_id: str | None, *, page_size: int) -> Sequence[TaxonomyRecord]:
        self.calls.append(parent_id)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            # Give other tasks a chance to interleave
            for _ in range(self.yields):
                await asyncio.sleep(0)
            if parent_id in self.fail_on:
                raise ProviderError(f"boom for {parent_id}", parent_id=parent_id)
            return list(self.children_by_parent.get(parent_id, []))
        finally:
            self.active -= 1


class ExplodingSink(AnalyticsSink):
    name = "exploding"

    def __init__(self) -> None:
        self.calls = 0

    def track_event(self, event) -> None:
        self.calls += 1
        raise ConnectionError("metrics collector unreachable")
