from pathlib import Path

# Repo-root conventional directories/files (overrideable via facet.yaml / CLI)
CONFIG_DIR = Path("configs")
FACET_CONFIG_FILE = CONFIG_DIR / "facet.yaml"
SAMPLE_TAXONOMY_FILE = CONFIG_DIR / "taxonomy.sample.yaml"

# Provider query defaults
PAGE_SIZE = 150
ROOT_PARENT = "null"
DEFAULT_JSONAPI_BASE_URL = "https://api.osf.io/v2"
