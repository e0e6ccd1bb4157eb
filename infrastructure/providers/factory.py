"""Factory for creating taxonomy provider adapters."""

import importlib
import logging
from pathlib import Path

from infrastructure.config.models import FacetConfig, Provider
from infrastructure.constants import SAMPLE_TAXONOMY_FILE

from .base import TaxonomyProvider
from .registry import get_adapter_class
from .static import StaticTaxonomyProvider

logger = logging.getLogger(__name__)


def _ensure_provider_imported(provider: Provider) -> None:
    """
    Lazy-import the provider module to trigger `register_adapter(...)`.

    Convention:
      - Provider enum value MUST match module filename under infrastructure/providers/
        e.g., Provider.JSONAPI.value == "jsonapi" -> infrastructure/providers/jsonapi.py
    """
    module_name = f"{__package__}.{provider.value}"
    try:
        importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if getattr(e, "name", None) == module_name:
            raise RuntimeError(
                f"No provider module found for provider='{provider.value}'. "
                f"Expected file: infrastructure/providers/{provider.value}.py"
            ) from e
        raise


def make_provider(
    cfg: FacetConfig,
    *,
    use_mock: bool = False,
    mock_taxonomy_file: Path | None = None,
) -> TaxonomyProvider:
    """
    Factory function to create the appropriate taxonomy provider.
    Args:
        cfg: Facet configuration containing provider settings
        use_mock: If True, use the StaticTaxonomyProvider regardless of cfg
        mock_taxonomy_file: Taxonomy YAML for the mock provider (default: configs/taxonomy.sample.yaml)
    Returns:
        An instance of TaxonomyProvider for the specified provider.
    Raises:
        RuntimeError: If the provider is unsupported.
    """
    if use_mock:
        path = mock_taxonomy_file or (cfg.static.taxonomy_file if cfg.static else SAMPLE_TAXONOMY_FILE)
        logger.info("Using static taxonomy provider from %s (mock mode)", path)
        return StaticTaxonomyProvider.from_file(path, page_size=cfg.expansion.page_size)

    # 1) Try registry first (maybe already imported elsewhere)
    adapter_cls = get_adapter_class(cfg.provider)

    # 2) If not registered yet, import the provider module by convention, then retry
    if adapter_cls is None:
        _ensure_provider_imported(cfg.provider)
        adapter_cls = get_adapter_class(cfg.provider)

    if adapter_cls is None:
        raise RuntimeError(
            f"Provider '{cfg.provider.value}' did not register an adapter. "
            f"Make sure {cfg.provider.value}.py calls register_adapter(...)."
        )

    # Standard constructor path
    return adapter_cls.from_cfg(cfg)  # type: ignore[attr-defined]
