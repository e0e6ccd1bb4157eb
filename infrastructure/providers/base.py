"""Base adapter interface for taxonomy providers."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any

from domain.schemas import TaxonomyRecord
from infrastructure.config.models import Provider
from infrastructure.constants import PAGE_SIZE, ROOT_PARENT

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """A taxonomy page could not be fetched or parsed."""

    def __init__(self, message: str, *, parent_id: str | None = None) -> None:
        super().__init__(message)
        self.parent_id = parent_id


def sort_records(records: Iterable[TaxonomyRecord]) -> list[TaxonomyRecord]:
    """Order siblings by display text (case-sensitive, ascending). Stable: equal texts keep provider order."""
    return sorted(records, key=lambda r: r.text)


class TaxonomyProvider(ABC):
    """
    Abstract base class for taxonomy provider adapters.
    Common interface for hierarchy backends (JSON:API, static file, etc.).

    All concrete adapters must implement:
    - _query_children(): Fetch one page of immediate children of a parent (None = top level)
    """

    provider: Provider
    client: Any

    def __init__(self, *, client: Any = None, page_size: int = PAGE_SIZE) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.client = client
        self.page_size = page_size

    async def fetch_children(self, parent_id: str | None = None) -> list[TaxonomyRecord]:
        """Fetch up to `page_size` immediate children of `parent_id`, sorted by text.

        Args:
            parent_id: Taxonomy node id, or None / "null" for the top level

        Returns:
            Child records sorted by display text

        Raises:
            ProviderError: If the provider call fails
        """
        parent = None if parent_id in (None, ROOT_PARENT) else parent_id
        records = list(await self._query_children(parent, page_size=self.page_size))

        if len(records) > self.page_size:
            logger.warning(
                "Provider returned %d children for parent=%s; truncating to page_size=%d",
                len(records),
                parent or ROOT_PARENT,
                self.page_size,
            )
            records = records[: self.page_size]

        logger.debug("Fetched %d children for parent=%s", len(records), parent or ROOT_PARENT)
        return sort_records(records)

    async def aclose(self) -> None:
        """Release network resources held by the adapter (no-op by default)."""
        return None

    @abstractmethod
    async def _query_children(self, parent_id: str | None, *, page_size: int) -> Sequence[TaxonomyRecord]:
        """Run one provider query and return the raw (unsorted) page.

        Args:
            parent_id: Parent node id, None for the top level
            page_size: Maximum number of records to request

        Returns:
            Records in provider order
        """

        raise NotImplementedError
