from domain.taxonomy.paths import PrefixCache, derive_prefixes, matches_prefix_set, split_path


def _is_segment_prefix(prefix: str, path: str) -> bool:
    p, full = split_path(prefix), split_path(path)
    return full[: len(p)] == p


def test_derive_prefixes_builds_cumulative_chain() -> None:
    assert derive_prefixes(["|A|B|C"]) == ("|A", "|A|B", "|A|B|C")


def test_derive_prefixes_dedups_and_keeps_first_seen_order() -> None:
    out = derive_prefixes(["|A|B", "|C", "|A|D", "|C"])
    assert out == ("|A", "|A|B", "|C", "|A|D")


def test_derive_prefixes_skips_empty_segments_and_empty_paths() -> None:
    assert derive_prefixes(["", "|", "||"]) == ()
    assert derive_prefixes(["||A|||B|"]) == ("|A", "|A|B")
    # missing leading delimiter is tolerated
    assert derive_prefixes(["A|B"]) == ("|A", "|A|B")


def test_derive_prefixes_never_contains_empty_and_members_prefix_some_input() -> None:
    filters = ["|A|B|C", "", "|X", "|A|Q", "||Y||Z"]
    out = derive_prefixes(filters)
    assert "" not in out
    for prefix in out:
        assert any(_is_segment_prefix(prefix, f) for f in filters if split_path(f))


def test_derive_prefixes_is_idempotent() -> None:
    filters = ["|A|B|C", "|D|E", "|A|F"]
    once = derive_prefixes(filters)
    twice = derive_prefixes(once)
    assert set(twice) <= set(once)
    assert twice == once


def test_matching_requires_trailing_delimiter() -> None:
    prefixes = derive_prefixes(["|A|B", "|C"])
    assert matches_prefix_set("|A", prefixes)
    # a filter that ends at a node does not mark that node itself
    assert not matches_prefix_set("|C", prefixes)
    assert not matches_prefix_set("|A|B", prefixes)
    assert not matches_prefix_set("|D", prefixes)


def test_matching_is_substring_not_prefix_anchored() -> None:
    prefixes = derive_prefixes(["|A|B|C"])
    # "|B|" occurs inside "|A|B|C" even though "|B" is not an ancestor of it
    assert matches_prefix_set("|B", prefixes)


def test_prefix_cache_recomputes_only_on_changed_input() -> None:
    cache = PrefixCache()
    first = cache.get(["|A|B"])
    assert cache.get(["|A|B"]) is first
    assert cache.get(("|A|B",)) is first

    changed = cache.get(["|A|B", "|C"])
    assert changed == ("|A", "|A|B", "|C")
    assert changed is not first

    cache.invalidate()
    assert cache.get(["|A|B", "|C"]) == changed
