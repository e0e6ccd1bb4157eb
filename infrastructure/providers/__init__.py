"""
Taxonomy provider adapters.

Implements the adapter pattern for different hierarchy backends:
- JSON:API (OSF-style taxonomies endpoint over httpx)
- Static (nested YAML taxonomy, for offline runs and testing)

All adapters implement the TaxonomyProvider interface.
"""

from infrastructure.providers.base import ProviderError, TaxonomyProvider, sort_records
from infrastructure.providers.factory import make_provider
from infrastructure.providers.jsonapi import JsonApiTaxonomyProvider
from infrastructure.providers.static import StaticTaxonomyProvider

__all__ = [
    # Abstract base
    "TaxonomyProvider",
    "ProviderError",
    "sort_records",
    # Concrete implementations
    "JsonApiTaxonomyProvider",
    "StaticTaxonomyProvider",
    # Factory (most commonly used)
    "make_provider",
]
