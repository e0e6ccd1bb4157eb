"""Configuration loading from YAML files."""

from pathlib import Path
from typing import Any

import yaml

from domain.taxonomy.loader import ChildrenByParent, parse_static_taxonomy
from infrastructure.config.models import (
    AnalyticsConfig,
    ExpansionConfig,
    FacetConfig,
    Provider,
)

from .registry import PARAM_MODEL_BY_PROVIDER


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def load_static_taxonomy(path: Path) -> ChildrenByParent:
    """
    Load a nested taxonomy from YAML file.

    This function handles file I/O, then delegates parsing to domain layer.
    """
    data = _load_yaml(path)
    return parse_static_taxonomy(data)


def load_facet_config(config_path: Path, *, extra_filters: list[str] | None = None) -> FacetConfig:
    """
    Load facet.yaml and construct a fully-resolved FacetConfig.

    Conventions (required for adding providers):
    - The Provider enum value must match the FacetConfig field name used for provider-specific params.
      Example: if Provider.JSONAPI.value == "jsonapi", FacetConfig must define a `jsonapi` field.
    - This naming convention allows provider parameter models to be bound dynamically from the registry.

    Args:
        config_path: Path to facet.yaml
        extra_filters: Active filter paths appended after the ones in the file (e.g. from the CLI)

    Returns:
        Validated FacetConfig

    Raises:
        FileNotFoundError: If the file is missing
        ValueError: If required keys are missing or have invalid values
    """
    raw = _load_yaml(config_path)

    if "provider" not in raw:
        raise ValueError("facet.yaml missing required key: provider")

    try:
        provider = Provider(str(raw["provider"]).strip().lower())
    except ValueError as e:
        raise ValueError(
            f"Invalid provider {raw['provider']!r} in {config_path}. Available: {[p.value for p in Provider]}"
        ) from e

    param_model_cls = PARAM_MODEL_BY_PROVIDER.get(provider)
    if param_model_cls is None:
        raise ValueError(f"No param model registered for provider: {provider.value}")

    if provider.value not in FacetConfig.model_fields:
        raise ValueError(
            f"FacetConfig has no field '{provider.value}'. "
            f"Add `'{provider.value}': Optional[<YourProviderConfig>] = None` to FacetConfig "
            f"(field name must match Provider.value)."
        )

    # Bind every provider block present in the file; the selected one is required
    run_kwargs: dict[str, Any] = {}
    for other, model_cls in PARAM_MODEL_BY_PROVIDER.items():
        block = raw.get(other.value)
        if block is None and other is not provider:
            continue
        if block is not None and not isinstance(block, dict):
            raise ValueError(f"'{other.value}' block must be a mapping in {config_path}")
        run_kwargs[other.value] = model_cls(**(block or {}))

    filters_raw = raw.get("active_filters") or []
    if not isinstance(filters_raw, list):
        raise ValueError("active_filters must be a list of path strings")

    filters = [str(f) for f in filters_raw]
    if extra_filters:
        filters.extend(extra_filters)

    return FacetConfig(
        provider=provider,
        expansion=ExpansionConfig(**(raw.get("expansion") or {})),
        analytics=AnalyticsConfig(**(raw.get("analytics") or {})),
        active_filters=filters,
        **run_kwargs,
    )
