"""Static (file-backed) taxonomy provider, used for offline runs and testing."""

import logging
from collections.abc import Sequence
from pathlib import Path

from domain.schemas import TaxonomyRecord
from domain.taxonomy.loader import ChildrenByParent
from infrastructure.config.loader import load_static_taxonomy
from infrastructure.config.models import FacetConfig, Provider
from infrastructure.constants import PAGE_SIZE
from infrastructure.providers.base import TaxonomyProvider
from infrastructure.providers.registry import register_adapter

logger = logging.getLogger(__name__)


class StaticTaxonomyProvider(TaxonomyProvider):
    """In-memory taxonomy; no network calls are made."""

    provider = Provider.STATIC

    def __init__(self, *, pages: ChildrenByParent, page_size: int = PAGE_SIZE) -> None:
        super().__init__(client=None, page_size=page_size)
        self.pages = pages
        logger.info(
            "Initialized static taxonomy provider (%d top-level nodes, %d parents)",
            len(pages.get(None, [])),
            len(pages),
        )

    @classmethod
    def from_file(cls, path: Path, *, page_size: int = PAGE_SIZE) -> "StaticTaxonomyProvider":
        return cls(pages=load_static_taxonomy(path), page_size=page_size)

    @classmethod
    def from_cfg(cls, cfg: FacetConfig) -> "StaticTaxonomyProvider":
        if cfg.static is None:
            raise ValueError("static provider selected but FacetConfig.static is None")
        return cls.from_file(cfg.static.taxonomy_file, page_size=cfg.expansion.page_size)

    async def _query_children(self, parent_id: str | None, *, page_size: int) -> Sequence[TaxonomyRecord]:
        # Unknown parents are leaves
        return list(self.pages.get(parent_id, []))[:page_size]


register_adapter(Provider.STATIC, StaticTaxonomyProvider)
