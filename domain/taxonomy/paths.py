"""Active-filter path handling: prefix derivation and the expansion matching rule."""

from collections.abc import Iterable, Sequence

PATH_DELIMITER = "|"


def split_path(path: str) -> list[str]:
    """Return the non-empty '|' segments of a path ('|A||B|' -> ['A', 'B'])."""
    return [segment for segment in path.split(PATH_DELIMITER) if segment != ""]


def derive_prefixes(active_filter_paths: Iterable[str]) -> tuple[str, ...]:
    """
    Build the ordered set of cumulative path prefixes for every active filter.

    Examples:
        >>> derive_prefixes(["|A|B", "|A|C"])
        ('|A', '|A|B', '|A|C')
        >>> derive_prefixes(["", "||"])
        ()

    Empty segments are skipped, so malformed paths never raise; the empty
    string is never part of the result.

    Args:
        active_filter_paths: Full taxonomy paths currently selected by the user

    Returns:
        Tuple of prefixes in first-seen order, without duplicates
    """
    seen: dict[str, None] = {}
    for filter_path in active_filter_paths:
        prefix = ""
        for segment in split_path(str(filter_path)):
            prefix += PATH_DELIMITER + segment
            seen.setdefault(prefix, None)
    return tuple(seen)


def matches_prefix_set(path: str, prefixes: Sequence[str]) -> bool:
    """
    Return True if the node at `path` lies on the ancestor chain of an active filter.

    The test is substring containment of `path + '|'`, not a prefix-anchored
    comparison: '|B|' matches inside '|A|B|C'. Kept as-is because filter state
    produced upstream relies on it.
    """
    needle = f"{path}{PATH_DELIMITER}"
    return any(needle in prefix for prefix in prefixes)


class PrefixCache:
    """Memoized `derive_prefixes`, recomputed only when the filter input changes."""

    def __init__(self) -> None:
        self._key: tuple[str, ...] | None = None
        self._value: tuple[str, ...] = ()

    def get(self, active_filter_paths: Iterable[str]) -> tuple[str, ...]:
        key = tuple(str(p) for p in active_filter_paths)
        if key != self._key:
            self._value = derive_prefixes(key)
            self._key = key
        return self._value

    def invalidate(self) -> None:
        self._key = None
        self._value = ()
