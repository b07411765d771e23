"""Traversal helpers for asset trees."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from models.app import ASSET_NODE_TYPES, AssetTreeNode


def flatten_tree(
    nodes: Iterable[AssetTreeNode], expanded_ids: set[str] | frozenset[str]
) -> list[AssetTreeNode]:
    """Flatten a tree into display order, descending only into expanded nodes."""
    result: list[AssetTreeNode] = []

    def _walk(level: Iterable[AssetTreeNode]) -> None:
        for node in level:
            result.append(node)
            if node.children and node.id in expanded_ids:
                _walk(node.children)

    _walk(nodes)
    return result


def get_all_node_ids(nodes: Iterable[AssetTreeNode]) -> list[str]:
    """IDs of every node that has children (for expand-all)."""
    result: list[str] = []
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        if node.children:
            result.append(node.id)
            stack.extend(reversed(node.children))
    return result


def collect_descendant_items(node: AssetTreeNode) -> list[AssetTreeNode]:
    """All asset-backed nodes below a node, including stacks and containers."""
    items: list[AssetTreeNode] = []
    stack = list(node.children)
    while stack:
        current = stack.pop()
        if current.node_type in ASSET_NODE_TYPES and current.item_ids:
            items.append(current)
        stack.extend(current.children)
    return items


def count_tree_items(nodes: Iterable[AssetTreeNode]) -> int:
    """Number of asset-backed nodes in a tree."""
    count = 0
    stack = list(nodes)
    while stack:
        node = stack.pop()
        if node.node_type in ASSET_NODE_TYPES and node.item_ids:
            count += 1
        stack.extend(node.children)
    return count


def sort_tree(
    nodes: list[AssetTreeNode],
    key: Callable[[AssetTreeNode], object] | None = None,
    reverse: bool = False,
) -> list[AssetTreeNode]:
    """Sort every level of a tree in place; defaults to case-insensitive name.

    Returns the sorted top-level list for convenience.
    """
    sort_key = key or (lambda n: n.name.lower())
    nodes.sort(key=sort_key, reverse=reverse)  # type: ignore[arg-type]
    for node in nodes:
        if node.children:
            sort_tree(node.children, key=sort_key, reverse=reverse)
    return nodes
