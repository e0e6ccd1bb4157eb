"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Taxonomy providers (JSON:API over httpx, static YAML)
- Analytics sinks (log, memory, Opik)
- Configuration loading (YAML, environment)
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import (
    FacetConfig,
    Provider,
    load_facet_config,
)
from infrastructure.providers import ProviderError, TaxonomyProvider, make_provider

__all__ = [
    # Provider adapters (most commonly used)
    "make_provider",
    "TaxonomyProvider",
    "ProviderError",
    # Configuration (most commonly used)
    "load_facet_config",
    "FacetConfig",
    "Provider",
]
