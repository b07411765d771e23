"""Tests for tree filtering, source flagging and category listing."""

import pytest

from models.app import AssetTreeNode
from services.tree_filter import filter_tree, get_tree_categories, mark_source_flags


def _node(
    node_id, node_type, name, children=(), category=None, item_ids=(), count=0, value=0.0
):
    node = AssetTreeNode(
        node_id, node_type, name, region_name="The Forge", category_name=category
    )
    node.children = list(children)
    node.item_ids = list(item_ids)
    node.total_count = count
    node.total_value = value
    return node


@pytest.fixture
def tree():
    trit = _node(
        "r/s/st/stack-trit", "stack", "Tritanium",
        category="Material", item_ids=[1], count=100, value=500.0,
    )
    rifter = _node(
        "r/s/st/asset-2", "ship", "Rifter",
        category="Ship", item_ids=[2], count=1, value=4e5,
    )
    plex = _node(
        "r/s/st/asset-2/stack-plex", "stack", "PLEX",
        category="Special", item_ids=[3], count=1, value=5e6,
    )
    rifter.children = [plex]
    station = _node(
        "r/s/st", "station", "Jita IV - Moon 4", [trit, rifter], count=102, value=5_400_500.0
    )
    system = _node("r/s", "system", "Jita", [station], count=102, value=5_400_500.0)
    region = _node("r", "region", "The Forge", [system], count=102, value=5_400_500.0)
    return [region]


def _ids(nodes):
    out = []
    stack = list(nodes)
    while stack:
        node = stack.pop()
        out.append(node.id)
        stack.extend(node.children)
    return sorted(out)


class TestFilterTree:
    def test_empty_filters_return_input(self, tree):
        assert filter_tree(tree, "") is tree
        assert filter_tree(tree, "", None) is tree

    def test_leaf_match_preserves_ancestors_and_totals(self, tree):
        result = filter_tree(tree, "tritanium")

        assert _ids(result) == ["r", "r/s", "r/s/st", "r/s/st/stack-trit"]
        [region] = result
        station = region.children[0].children[0]
        assert region.total_count == 102
        assert region.total_value == 5_400_500.0
        assert station.total_count == 102

    def test_input_is_not_mutated(self, tree):
        filter_tree(tree, "plex")

        station = tree[0].children[0].children[0]
        assert len(station.children) == 2

    def test_matching_container_does_not_keep_unmatched_contents(self, tree):
        assert filter_tree(tree, "RIFTER") == []
        assert filter_tree(tree, "", category="Ship") == []

    def test_unmatched_cargo_dropped_from_surviving_ship(self, tree):
        rifter = tree[0].children[0].children[0].children[1]
        cargo = _node(
            "r/s/st/asset-2/stack-trit", "stack", "Tritanium",
            category="Material", item_ids=[4], count=500, value=2500.0,
        )
        rifter.children.append(cargo)

        result = filter_tree(tree, "", category="Special")

        assert "r/s/st/asset-2" in _ids(result)
        assert "r/s/st/asset-2/stack-plex" in _ids(result)
        assert "r/s/st/asset-2/stack-trit" not in _ids(result)
        assert len(rifter.children) == 2

    def test_region_name_matches_every_node(self, tree):
        result = filter_tree(tree, "forge")

        assert _ids(result) == _ids(tree)

    def test_no_match(self, tree):
        assert filter_tree(tree, "veldspar") == []

    def test_category_filter(self, tree):
        result = filter_tree(tree, "", category="Special")

        assert "r/s/st/asset-2/stack-plex" in _ids(result)
        assert "r/s/st/stack-trit" not in _ids(result)

    def test_search_and_category_combined(self, tree):
        assert filter_tree(tree, "tritanium", category="Ship") == []


def test_mark_source_flags(tree):
    mark_source_flags(tree, contract_item_ids={3}, order_item_ids=frozenset({1}))

    station = tree[0].children[0].children[0]
    trit, rifter = station.children
    assert trit.is_in_market_order
    assert not trit.is_in_contract
    assert rifter.children[0].is_in_contract
    assert not rifter.is_in_contract


def test_get_tree_categories(tree):
    assert get_tree_categories(tree) == ["Material", "Ship", "Special"]
    assert get_tree_categories([]) == []
