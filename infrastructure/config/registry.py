from typing import Any

from .models import JsonApiConfig, Provider, StaticConfig

# Provider -> params config model
# Add future providers here
PARAM_MODEL_BY_PROVIDER: dict[Provider, type[Any]] = {
    Provider.JSONAPI: JsonApiConfig,
    Provider.STATIC: StaticConfig,
}
