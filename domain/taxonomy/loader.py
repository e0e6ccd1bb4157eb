"""Parse a nested taxonomy definition (from YAML) into per-parent record pages."""

from typing import Any

from domain.schemas import TaxonomyRecord
from domain.taxonomy.paths import PATH_DELIMITER

ChildrenByParent = dict[str | None, list[TaxonomyRecord]]


def parse_static_taxonomy(data: dict[str, Any]) -> ChildrenByParent:
    """
    Parse pre-loaded YAML dict into a mapping of parent id -> child records.

    This is a pure function - it does NOT perform file I/O.
    The YAML loading happens in infrastructure.config.loader.

    Expected shape:
        taxonomy:
          - id: A
            text: Arts and Humanities
            children:
              - id: B
                text: Architecture

    Paths ('|A|B') and child counts are derived from the nesting. Top-level
    entries are stored under the key None.

    Args:
        data: Dictionary from yaml.safe_load()

    Returns:
        Mapping of parent id (None for the top level) to its children, in file order

    Raises:
        ValueError: If entries are malformed or an id appears twice
    """
    entries = data.get("taxonomy", []) or []
    if not isinstance(entries, list):
        raise ValueError("taxonomy must be a list")

    pages: ChildrenByParent = {None: []}
    seen: set[str] = set()

    def _walk(items: list[Any], parent_id: str | None, parent_path: str) -> None:
        for raw in items:
            if not isinstance(raw, dict):
                raise ValueError(f"taxonomy entries must be mappings, got {type(raw).__name__}")
            if "id" not in raw or "text" not in raw:
                raise ValueError(f"taxonomy entry missing 'id' or 'text': {raw!r}")

            node_id = str(raw["id"]).strip()
            if not node_id or PATH_DELIMITER in node_id:
                raise ValueError(f"Invalid taxonomy id {raw['id']!r} (must be non-empty, no '|')")
            if node_id in seen:
                raise ValueError(f"Duplicate taxonomy id: {node_id!r}")
            seen.add(node_id)

            children = raw.get("children", []) or []
            if not isinstance(children, list):
                raise ValueError(f"children of {node_id!r} must be a list")

            path = f"{parent_path}{PATH_DELIMITER}{node_id}"
            pages.setdefault(parent_id, []).append(
                TaxonomyRecord(
                    id=node_id,
                    text=str(raw["text"]),
                    path=path,
                    child_count=len(children),
                    share_title=raw.get("share_title"),
                )
            )
            if children:
                _walk(children, node_id, path)

    _walk(entries, None, "")
    return pages
