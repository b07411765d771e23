"""Asset tree node model for hierarchical asset organization."""

from __future__ import annotations

import copy
from enum import Enum
from typing import Literal

TreeNodeType = Literal[
    "region",
    "system",
    "station",
    "office",
    "division",
    "container",
    "ship",
    "item",
    "stack",
]

# Node types that carry an asset's own quantity and value
ASSET_NODE_TYPES = frozenset({"office", "container", "ship", "item", "stack"})


class TreeMode(str, Enum):
    """Named subsets of assets the tree can be built for."""

    ALL = "ALL"
    ACTIVE_SHIP = "ACTIVE_SHIP"
    ITEM_HANGAR = "ITEM_HANGAR"
    SHIP_HANGAR = "SHIP_HANGAR"
    DELIVERIES = "DELIVERIES"
    ASSET_SAFETY = "ASSET_SAFETY"
    OFFICE = "OFFICE"
    STRUCTURES = "STRUCTURES"
    CONTRACTS = "CONTRACTS"
    MARKET_ORDERS = "MARKET_ORDERS"
    INDUSTRY_JOBS = "INDUSTRY_JOBS"


class AssetTreeNode:
    """Represents a node in the asset tree hierarchy.

    Location nodes (region, system, station) group assets; asset nodes
    (office, container, ship, item, stack) stand for one asset or a stack of
    fungible assets. Totals include the node's own asset plus all descendants.
    """

    def __init__(
        self,
        node_id: str,
        node_type: TreeNodeType,
        name: str,
        *,
        region_name: str | None = None,
        location_id: int | None = None,
        system_id: int | None = None,
        region_id: int | None = None,
        type_id: int | None = None,
        category_id: int | None = None,
        category_name: str | None = None,
        is_blueprint_copy: bool | None = None,
        division_number: int | None = None,
        owner_key: str | None = None,
        location_flag: str | None = None,
        price: float = 0.0,
    ):
        """Initialize an asset tree node.

        Args:
            node_id: Stable composite key built from the path segments
            node_type: Kind of node
            name: Display name
            region_name: Region name inherited down the chain
            location_id: Root location of the assets below this node
            system_id: Solar system of the location
            region_id: Region of the location
            type_id: Type of the asset (asset nodes only)
            category_id: Category of the asset type
            category_name: Category name used by the category filter
            is_blueprint_copy: Blueprint copy status of the asset
            division_number: Hangar division (division nodes only)
            owner_key: Owner of the asset
            location_flag: Location flag of the asset
            price: Unit price of the asset
        """
        self.id = node_id
        self.node_type: TreeNodeType = node_type
        self.name = name
        self.children: list[AssetTreeNode] = []
        self.total_count = 0
        self.total_value = 0.0
        self.total_volume = 0.0
        self.region_name = region_name
        self.location_id = location_id
        self.system_id = system_id
        self.region_id = region_id
        self.type_id = type_id
        self.category_id = category_id
        self.category_name = category_name
        self.is_blueprint_copy = is_blueprint_copy
        self.division_number = division_number
        self.owner_key = owner_key
        self.location_flag = location_flag
        self.price = price
        self.quantity = 0
        self.item_ids: list[int] = []
        self.is_in_contract = False
        self.is_in_market_order = False
        self.is_in_industry_job = False
        self.is_owned_structure = False
        self.is_active_ship = False

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, child: AssetTreeNode) -> None:
        """Add a child node to this node.

        Args:
            child: Child node to add
        """
        self.children.append(child)

    def add_totals(self, count: int, value: float, volume: float) -> None:
        """Accumulate a contribution into this node's totals."""
        self.total_count += count
        self.total_value += value
        self.total_volume += volume

    def copy_with_children(self, children: list[AssetTreeNode]) -> AssetTreeNode:
        """Return a shallow copy of this node with a different child list.

        Totals and flags are carried over unchanged.
        """
        clone = copy.copy(self)
        clone.children = children
        clone.item_ids = list(self.item_ids)
        return clone

    def __repr__(self) -> str:
        return (
            f"AssetTreeNode(id='{self.id}', "
            f"type={self.node_type}, "
            f"name='{self.name}', "
            f"count={self.total_count}, "
            f"value={self.total_value:.2f}, "
            f"children={len(self.children)})"
        )
