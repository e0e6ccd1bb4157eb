"""
Taxonomy tree management: path prefixes, matching, and the node arena.

All functions in this module are pure (no file I/O, no network).
"""

from domain.taxonomy.loader import ChildrenByParent, parse_static_taxonomy
from domain.taxonomy.paths import (
    PATH_DELIMITER,
    PrefixCache,
    derive_prefixes,
    matches_prefix_set,
    split_path,
)
from domain.taxonomy.tree import TaxonomyNode, TaxonomyTree, UnknownNodeError

__all__ = [
    "PATH_DELIMITER",
    "split_path",
    "derive_prefixes",
    "matches_prefix_set",
    "PrefixCache",
    "TaxonomyTree",
    "TaxonomyNode",
    "UnknownNodeError",
    "ChildrenByParent",
    "parse_static_taxonomy",
]
