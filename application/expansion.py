"""Taxonomy tree expansion engine: user toggles, bootstrap walk, and default shallow expansion."""

import asyncio
import logging
from collections import deque
from collections.abc import Iterable, Sequence

from application.constants import DEFAULT_EXPAND_LIMIT, MODE_DEFAULT, MODE_FILTERS, MODE_NONE
from domain.schemas import BootstrapReport, NodeView, TaxonomyRecord
from domain.taxonomy.paths import PrefixCache, matches_prefix_set
from domain.taxonomy.tree import TaxonomyTree
from infrastructure.config.models import FacetConfig
from infrastructure.constants import ROOT_PARENT
from infrastructure.observability.logging import clear_node_context, set_log_context
from infrastructure.providers.base import ProviderError, TaxonomyProvider

logger = logging.getLogger(__name__)


class ExpansionEngine:
    """
    Owns the facet tree and is the only code that mutates it.

    Node states: collapsed with children not loaded (initial), collapsed with
    children loaded, expanded. Every provider call goes through one lock, so at
    most one fetch is outstanding at a time. Opening a node whose fetch is
    already pending joins that fetch instead of issuing a second one.
    """

    def __init__(self, provider: TaxonomyProvider, *, default_expand_limit: int = DEFAULT_EXPAND_LIMIT) -> None:
        self.provider = provider
        self.default_expand_limit = default_expand_limit

        self._tree = TaxonomyTree()
        self._prefix_cache = PrefixCache()
        self._fetch_lock = asyncio.Lock()
        self._pending: dict[str, asyncio.Task[list[str]]] = {}
        self._bootstrapped = False

        self.fetch_count = 0
        self.last_error: ProviderError | None = None

    @classmethod
    def from_cfg(cls, cfg: FacetConfig, provider: TaxonomyProvider) -> "ExpansionEngine":
        return cls(provider, default_expand_limit=cfg.expansion.default_expand_limit)

    # ---- Read-only views ----

    @property
    def is_bootstrapped(self) -> bool:
        return self._bootstrapped

    def node(self, node_id: str) -> NodeView:
        return self._tree.view(node_id)

    def top_level(self) -> list[NodeView]:
        return self._tree.top_level()

    def children(self, node_id: str) -> list[NodeView]:
        return self._tree.children(node_id)

    def expanded_ids(self) -> list[str]:
        return self._tree.expanded_ids()

    def prefixes(self, active_filters: Iterable[str]) -> tuple[str, ...]:
        """Ancestor-path prefixes of the active filters (recomputed only when the filters change)."""
        return self._prefix_cache.get(active_filters)

    # ---- Provider access ----

    async def _fetch(
        self, parent_id: str | None, report: BootstrapReport | None = None
    ) -> list[TaxonomyRecord]:
        async with self._fetch_lock:
            self.fetch_count += 1
            if report is not None:
                report.fetches += 1
            set_log_context(node_id=parent_id or ROOT_PARENT)
            try:
                return await self.provider.fetch_children(parent_id)
            except ProviderError as e:
                if e.parent_id is None:
                    e.parent_id = parent_id
                raise
            except Exception as e:
                raise ProviderError(
                    f"Provider failed for parent={parent_id or ROOT_PARENT}: {e}", parent_id=parent_id
                ) from e
            finally:
                clear_node_context()

    async def _load_top_level(self, report: BootstrapReport | None = None) -> list[str]:
        if self._tree.top_level_loaded:
            return self._tree.top_level_ids()
        records = await self._fetch(None, report)
        return self._tree.set_top_level(records)

    async def _fetch_and_attach(self, node_id: str, report: BootstrapReport | None = None) -> list[str]:
        records = await self._fetch(node_id, report)
        return self._tree.attach_children(node_id, records)

    async def _load_children(self, node_id: str, report: BootstrapReport | None = None) -> list[str]:
        node = self._tree.get(node_id)
        if node.children_loaded:
            return list(node.children)

        pending = self._pending.get(node_id)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_and_attach(node_id, report))
            self._pending[node_id] = pending
            pending.add_done_callback(lambda _task, nid=node_id: self._pending.pop(nid, None))
        else:
            logger.debug("Joining in-flight fetch for node %s", node_id)

        return await pending

    async def _open(self, node_id: str, report: BootstrapReport | None = None) -> list[str]:
        child_ids = await self._load_children(node_id, report)
        self._tree.set_expanded(node_id, True)
        return child_ids

    # ---- State transitions ----

    async def toggle(self, node_id: str) -> NodeView:
        """
        Flip a node between expanded and collapsed.

        Collapsing keeps the loaded children; expanding fetches only when the
        children were never loaded. On fetch failure the node stays collapsed
        and the ProviderError propagates.

        Raises:
            UnknownNodeError: If the node has not been fetched into the tree
            ProviderError: If loading the children fails
        """
        node = self._tree.get(node_id)
        if node.expanded:
            self._tree.set_expanded(node_id, False)
            logger.debug("Collapsed %s", node_id)
        else:
            await self._open(node_id)
            logger.debug("Expanded %s", node_id)
        return self._tree.view(node_id)

    async def expand(self, node_id: str) -> list[NodeView]:
        """Force a node open (idempotent) and return its children."""
        await self._open(node_id)
        return self._tree.children(node_id)

    def collapse(self, node_id: str) -> NodeView:
        self._tree.set_expanded(node_id, False)
        return self._tree.view(node_id)

    # ---- Bootstrap ----

    def _enqueue_matches(
        self,
        node_ids: Iterable[str],
        prefixes: Sequence[str],
        queue: deque[str],
        queued: set[str],
    ) -> None:
        for node_id in node_ids:
            if node_id in queued:
                continue
            if matches_prefix_set(self._tree.get(node_id).record.path, prefixes):
                queue.append(node_id)
                queued.add(node_id)

    async def _expand_matching(
        self,
        queue: deque[str],
        queued: set[str],
        prefixes: Sequence[str],
        report: BootstrapReport,
    ) -> None:
        while queue:
            node_id = queue.popleft()
            child_ids = await self._open(node_id, report)
            report.expanded.append(node_id)
            self._enqueue_matches(child_ids, prefixes, queue, queued)

    async def _expand_default(self, top_ids: Sequence[str], report: BootstrapReport) -> bool:
        limit = self.default_expand_limit
        if not top_ids or len(top_ids) > limit:
            logger.info("No default expansion (%d top-level nodes, limit=%d)", len(top_ids), limit)
            return False

        for node_id in top_ids:
            child_ids = await self._open(node_id, report)
            report.expanded.append(node_id)

            # One cascade level only; grandchildren stay collapsed
            if self._tree.get(node_id).record.child_count <= limit:
                for child_id in child_ids:
                    await self._open(child_id, report)
                    report.expanded.append(child_id)
        return True

    async def bootstrap(self, active_filters: Sequence[str] = ()) -> BootstrapReport:
        """
        Fetch the top level and reveal every active filter.

        Top-level nodes on an active filter's ancestor chain are queued and
        opened one at a time; each opened node's matching children join the
        queue. With nothing queued, the default policy opens a small top level
        plus one level under small nodes.

        A ProviderError stops the walk but is not raised: nodes already opened
        stay open, and the error is kept on `last_error` and in the report.

        Raises:
            RuntimeError: If called more than once on the same engine
        """
        if self._bootstrapped:
            raise RuntimeError("bootstrap() already ran for this engine")
        self._bootstrapped = True

        report = BootstrapReport()
        prefixes = self.prefixes(active_filters)
        logger.info("Bootstrap started (%d active filters, %d path prefixes)", len(active_filters), len(prefixes))

        try:
            top_ids = await self._load_top_level(report)
            logger.info("Loaded %d top-level nodes", len(top_ids))

            queue: deque[str] = deque()
            queued: set[str] = set()
            self._enqueue_matches(top_ids, prefixes, queue, queued)

            if queue:
                report.mode = MODE_FILTERS
                await self._expand_matching(queue, queued, prefixes, report)
            elif await self._expand_default(top_ids, report):
                report.mode = MODE_DEFAULT
            else:
                report.mode = MODE_NONE
        except ProviderError as e:
            self.last_error = e
            report.error = str(e)
            report.failed_node_id = e.parent_id
            logger.warning(
                "Bootstrap stopped at parent=%s after expanding %d nodes: %s",
                e.parent_id or ROOT_PARENT,
                len(report.expanded),
                e,
            )

        logger.info(
            "Bootstrap finished (mode=%s, expanded=%d, fetches=%d)",
            report.mode,
            len(report.expanded),
            report.fetches,
        )
        return report
