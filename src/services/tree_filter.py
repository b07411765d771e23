"""Display-time filtering and flagging of built asset trees.

Filtering never re-aggregates: surviving nodes keep the totals computed by
the tree builder for the full underlying data.
"""

from __future__ import annotations

from collections.abc import Iterable

from models.app import AssetTreeNode


def _matches(node: AssetTreeNode, search_lower: str, category: str | None) -> bool:
    if search_lower:
        fields = (node.name, node.region_name)
        if not any(f and search_lower in f.lower() for f in fields):
            return False
    if category and node.category_name != category:
        return False
    return True


def _filter(
    nodes: list[AssetTreeNode], search_lower: str, category: str | None
) -> list[AssetTreeNode]:
    result = []
    for node in nodes:
        children = _filter(node.children, search_lower, category)
        if children or (node.is_leaf and _matches(node, search_lower, category)):
            result.append(node.copy_with_children(children))
    return result


def filter_tree(
    nodes: list[AssetTreeNode], search: str, category: str | None = None
) -> list[AssetTreeNode]:
    """Filter a tree by name search and exact category name.

    A leaf survives when it matches. Any other node survives only when at
    least one descendant survives, and keeps only the children that lead to
    a surviving leaf. Input nodes are never mutated.

    Args:
        nodes: Top-level nodes of a built tree
        search: Case-insensitive substring matched against node names
        category: Exact category name to match, or None

    Returns:
        The filtered top-level nodes; the input list itself when both
        filters are empty
    """
    if not search and not category:
        return nodes
    return _filter(nodes, search.lower(), category)


def mark_source_flags(
    nodes: Iterable[AssetTreeNode],
    contract_item_ids: set[int] | frozenset[int],
    order_item_ids: set[int] | frozenset[int],
) -> None:
    """Flag leaves whose items are also listed in a contract or market order."""
    stack = list(nodes)
    while stack:
        node = stack.pop()
        if node.children:
            stack.extend(node.children)
            continue
        if not node.item_ids:
            continue
        if not contract_item_ids.isdisjoint(node.item_ids):
            node.is_in_contract = True
        if not order_item_ids.isdisjoint(node.item_ids):
            node.is_in_market_order = True


def get_tree_categories(nodes: Iterable[AssetTreeNode]) -> list[str]:
    """Sorted distinct category names present anywhere in a tree."""
    categories: set[str] = set()
    stack = list(nodes)
    while stack:
        node = stack.pop()
        if node.category_name:
            categories.add(node.category_name)
        stack.extend(node.children)
    return sorted(categories)
