import pytest

from domain.schemas import NodeState, TaxonomyRecord
from domain.taxonomy.loader import parse_static_taxonomy
from domain.taxonomy.tree import TaxonomyTree, UnknownNodeError


def _rec(node_id: str, path: str, child_count: int = 0) -> TaxonomyRecord:
    return TaxonomyRecord(id=node_id, text=node_id, path=path, child_count=child_count)


def test_new_nodes_start_collapsed_and_unloaded() -> None:
    tree = TaxonomyTree()
    tree.set_top_level([_rec("A", "|A", 1)])
    view = tree.view("A")
    assert view.state is NodeState.COLLAPSED_UNLOADED
    assert view.children == ()


def test_attach_children_marks_loaded_and_keeps_order() -> None:
    tree = TaxonomyTree()
    tree.set_top_level([_rec("A", "|A", 2)])
    tree.attach_children("A", [_rec("B", "|A|B"), _rec("C", "|A|C")])

    assert tree.view("A").state is NodeState.COLLAPSED_LOADED
    assert [v.id for v in tree.children("A")] == ["B", "C"]


def test_expanding_requires_loaded_children() -> None:
    tree = TaxonomyTree()
    tree.set_top_level([_rec("A", "|A", 1)])
    with pytest.raises(ValueError):
        tree.set_expanded("A", True)

    tree.attach_children("A", [])
    tree.set_expanded("A", True)
    assert tree.view("A").state is NodeState.EXPANDED
    assert tree.expanded_ids() == ["A"]


def test_known_ids_keep_their_first_record() -> None:
    tree = TaxonomyTree()
    tree.set_top_level([_rec("A", "|A", 1)])
    tree.attach_children("A", [TaxonomyRecord(id="A", text="other", path="|X|A")])
    assert tree.view("A").path == "|A"
    assert len(tree) == 1


def test_unknown_node_raises_key_error_subclass() -> None:
    tree = TaxonomyTree()
    with pytest.raises(UnknownNodeError) as exc:
        tree.view("missing")
    assert isinstance(exc.value, KeyError)
    assert "missing" in str(exc.value)


def test_views_are_read_only_snapshots() -> None:
    tree = TaxonomyTree()
    tree.set_top_level([_rec("A", "|A", 1)])
    before = tree.view("A")
    tree.attach_children("A", [_rec("B", "|A|B")])

    assert before.children_loaded is False
    with pytest.raises(Exception):
        before.expanded = True  # type: ignore[misc]


def test_parse_static_taxonomy_derives_paths_and_counts() -> None:
    data = {
        "taxonomy": [
            {"id": "A", "text": "Arts", "children": [{"id": "B", "text": "Baroque"}]},
            {"id": "C", "text": "Chemistry", "share_title": "chem"},
        ]
    }
    pages = parse_static_taxonomy(data)

    assert [r.id for r in pages[None]] == ["A", "C"]
    a, c = pages[None]
    assert (a.path, a.child_count) == ("|A", 1)
    assert (c.path, c.child_count, c.share_title) == ("|C", 0, "chem")
    assert pages["A"][0].path == "|A|B"


@pytest.mark.parametrize(
    "data",
    [
        {"taxonomy": {"id": "A"}},
        {"taxonomy": [{"id": "A"}]},
        {"taxonomy": [{"id": "A|B", "text": "bad"}]},
        {"taxonomy": [{"id": "A", "text": "a"}, {"id": "A", "text": "again"}]},
        {"taxonomy": [{"id": "A", "text": "a", "children": "B"}]},
    ],
)
def test_parse_static_taxonomy_rejects_malformed_input(data: dict) -> None:
    with pytest.raises(ValueError):
        parse_static_taxonomy(data)
