import logging
import os
from collections.abc import Sequence
from typing import Any

import httpx

from domain.schemas import TaxonomyRecord
from infrastructure.config.models import FacetConfig, Provider
from infrastructure.constants import PAGE_SIZE, ROOT_PARENT
from infrastructure.providers.base import ProviderError, TaxonomyProvider
from infrastructure.providers.registry import register_adapter

logger = logging.getLogger(__name__)


class JsonApiTaxonomyProvider(TaxonomyProvider):
    """
    JSON:API taxonomy backend (OSF-style): GET /providers/<type>/<id>/taxonomies/

    - Children of a node are selected with `filter[parents]=<id>` ("null" for the top level)
    - One page of `page[size]` entries is requested per call; no page walking
    - Each entry carries `text`, `child_count`, `share_title` and `path` attributes
    """

    provider = Provider.JSONAPI

    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        provider_type: str,
        provider_id: str,
        page_size: int = PAGE_SIZE,
    ) -> None:
        super().__init__(client=client, page_size=page_size)
        self.provider_type = provider_type
        self.provider_id = provider_id

    @classmethod
    def from_cfg(cls, cfg: FacetConfig) -> "JsonApiTaxonomyProvider":
        api = cfg.jsonapi
        if api is None:
            raise ValueError("jsonapi provider selected but FacetConfig.jsonapi is None")

        headers = {"Accept": "application/vnd.api+json"}
        token = os.environ.get(api.token_env) if api.token_env else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        elif api.token_env:
            logger.warning("Environment variable %s is not set; querying anonymously", api.token_env)

        client = httpx.AsyncClient(
            base_url=api.base_url.rstrip("/"),
            timeout=api.timeout_s,
            headers=headers,
        )
        return cls(
            client=client,
            provider_type=api.provider_type,
            provider_id=api.provider_id,
            page_size=cfg.expansion.page_size,
        )

    @property
    def endpoint(self) -> str:
        return f"/providers/{self.provider_type}/{self.provider_id}/taxonomies/"

    async def _query_children(self, parent_id: str | None, *, page_size: int) -> Sequence[TaxonomyRecord]:
        parent = parent_id or ROOT_PARENT
        params: dict[str, Any] = {
            "filter[parents]": parent,
            "page[size]": page_size,
        }

        try:
            resp = await self.client.get(self.endpoint, params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise ProviderError(f"Taxonomy request failed for parent={parent}: {e}", parent_id=parent_id) from e
        except ValueError as e:
            raise ProviderError(f"Taxonomy response for parent={parent} is not JSON", parent_id=parent_id) from e

        items = data.get("data") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise ProviderError(
                f"Taxonomy response for parent={parent} has no 'data' list",
                parent_id=parent_id,
            )

        try:
            records = [self._parse_item(item) for item in items]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProviderError(
                f"Failed to parse taxonomy entries for parent={parent}: {e}",
                parent_id=parent_id,
            ) from e

        logger.debug("JSON:API parent=%s returned %d entries", parent, len(records))
        return records

    @staticmethod
    def _parse_item(item: dict[str, Any]) -> TaxonomyRecord:
        attrs = item.get("attributes") or {}
        return TaxonomyRecord(
            id=str(item["id"]),
            text=attrs["text"],
            path=attrs["path"],
            child_count=int(attrs.get("child_count") or 0),
            share_title=attrs.get("share_title"),
        )

    async def aclose(self) -> None:
        await self.client.aclose()


register_adapter(Provider.JSONAPI, JsonApiTaxonomyProvider)
