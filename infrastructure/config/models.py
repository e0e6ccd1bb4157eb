"""Configuration models (Pydantic classes)."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from infrastructure.constants import DEFAULT_JSONAPI_BASE_URL, PAGE_SIZE, SAMPLE_TAXONOMY_FILE


class Provider(str, Enum):
    """Supported taxonomy providers."""

    JSONAPI = "jsonapi"
    STATIC = "static"


class AnalyticsSinkKind(str, Enum):
    """Where tree interaction events are sent."""

    LOG = "log"
    MEMORY = "memory"
    OPIK = "opik"
    NONE = "none"


class JsonApiConfig(BaseModel):
    """JSON:API (OSF-style) taxonomy endpoint configuration."""

    base_url: str = DEFAULT_JSONAPI_BASE_URL
    provider_type: str = Field(default="preprints", description="Provider collection, e.g. 'preprints'.")
    provider_id: str = Field(..., description="Provider id whose taxonomy is browsed, e.g. 'osf'.")
    timeout_s: float = Field(default=30.0, gt=0)
    token_env: str | None = Field(
        default=None,
        description="Name of the environment variable holding a bearer token (optional).",
    )


class StaticConfig(BaseModel):
    """File-backed taxonomy configuration."""

    taxonomy_file: Path = Field(default_factory=lambda: SAMPLE_TAXONOMY_FILE)


class ExpansionConfig(BaseModel):
    """
    Tree expansion policy.

    Defaults match the discovery facet behavior.
    """

    page_size: int = Field(default=PAGE_SIZE, ge=1)
    default_expand_limit: int = Field(
        default=3,
        ge=0,
        description="With no active filters, auto-expand the top level when it has at most this many "
        "nodes, and cascade one level into nodes whose child_count is at most this many.",
    )


class AnalyticsConfig(BaseModel):
    """Analytics sink selection."""

    sink: AnalyticsSinkKind = AnalyticsSinkKind.LOG
    project_name: str | None = Field(default=None, description="Opik project name (opik sink only).")


class FacetConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from facet.yaml
    - Validated and enriched by configuration loader
    - Consumed by provider factory, expansion engine and analytics sink factory
    """

    provider: Provider = Field(default=Provider.JSONAPI, description="Taxonomy provider backend to use.")

    # Provider config (field name must match Provider.value)
    jsonapi: JsonApiConfig | None = None
    static: StaticConfig | None = None

    expansion: ExpansionConfig = Field(default_factory=ExpansionConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)

    active_filters: list[str] = Field(
        default_factory=list,
        description="Full taxonomy paths selected at startup, e.g. '|A|B'.",
    )

    @model_validator(mode="after")
    def _validate(self) -> "FacetConfig":
        if self.provider is Provider.STATIC and self.static is None:
            self.static = StaticConfig()

        if getattr(self, self.provider.value) is None:
            raise ValueError(f"'{self.provider.value}' block is required when provider={self.provider.value}")

        self.active_filters = [str(f).strip() for f in self.active_filters if str(f).strip()]
        return self
