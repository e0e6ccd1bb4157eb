"""
Configuration management: models, loading, and validation.

Handles:
- FacetConfig: Main facet configuration
- Provider configs: JSON:API endpoint and static taxonomy file settings
- Expansion policy and analytics sink selection
- Static taxonomy loading from YAML

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import load_facet_config, load_static_taxonomy
from infrastructure.config.models import (
    AnalyticsConfig,
    AnalyticsSinkKind,
    ExpansionConfig,
    # Main config
    FacetConfig,
    # Provider configs
    JsonApiConfig,
    # Enums
    Provider,
    StaticConfig,
)

__all__ = [
    # Main config (most commonly used)
    "FacetConfig",
    "load_facet_config",
    # Enums
    "Provider",
    "AnalyticsSinkKind",
    # Provider configs
    "JsonApiConfig",
    "StaticConfig",
    # Policy
    "ExpansionConfig",
    "AnalyticsConfig",
    # Loaders
    "load_static_taxonomy",
]
