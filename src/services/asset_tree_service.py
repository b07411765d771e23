"""Builds the hierarchical asset tree from resolved assets.

Path: region -> system -> station/structure -> (office -> division |
containers) -> item/ship/stack. Assets in open space hang directly under
their system. Totals are accumulated on every node along the path as each
asset is inserted, so a node's totals always equal its own contribution plus
the sum of its children.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from models.app import AssetTreeNode, ResolvedAsset, TreeMode, TreeNodeType
from models.app.asset_flags import (
    DIVISION_FLAG_NAMES,
    OFFICE_DIVISION_FLAGS,
    OFFICE_TYPE_ID,
    CategoryIds,
    get_division_number,
)
from models.eve import EveAsset
from services.asset_service import get_asset_display_names
from utils.config import AssetEngineConfig, get_config

if TYPE_CHECKING:
    from data import ReferenceSnapshot

logger = logging.getLogger(__name__)


def should_include_by_mode(resolved: ResolvedAsset, mode: TreeMode) -> bool:
    """Return True if a resolved asset belongs in the tree for a mode."""
    flags = resolved.mode_flags
    not_listed = not (
        flags.is_contract or flags.is_market_order or flags.is_industry_job
    )
    if mode == TreeMode.ALL:
        return True
    if mode == TreeMode.ACTIVE_SHIP:
        return flags.is_active_ship
    if mode == TreeMode.ITEM_HANGAR:
        return flags.in_item_hangar and not_listed
    if mode == TreeMode.SHIP_HANGAR:
        return flags.in_ship_hangar and not_listed
    if mode == TreeMode.DELIVERIES:
        return flags.in_deliveries
    if mode == TreeMode.ASSET_SAFETY:
        return flags.in_asset_safety
    if mode == TreeMode.OFFICE:
        return flags.in_office and not_listed
    if mode == TreeMode.STRUCTURES:
        return flags.is_owned_structure
    if mode == TreeMode.CONTRACTS:
        return flags.is_contract
    if mode == TreeMode.MARKET_ORDERS:
        return flags.is_market_order
    if mode == TreeMode.INDUSTRY_JOBS:
        return flags.is_industry_job
    return True


def _find_office(
    chain: list[EveAsset], asset: EveAsset
) -> tuple[int, str | None] | None:
    """Locate the first office in a chain and the division flag below it."""
    for index, parent in enumerate(chain):
        if parent.type_id != OFFICE_TYPE_ID:
            continue
        flag_source = asset if index == 0 else chain[index - 1]
        flag = flag_source.location_flag
        return index, flag if flag in OFFICE_DIVISION_FLAGS else None
    return None


class AssetTreeService:
    """Aggregates resolved assets into a tree for a given mode."""

    def __init__(
        self,
        snapshot: ReferenceSnapshot,
        config: AssetEngineConfig | None = None,
    ):
        self._snapshot = snapshot
        self._config = config or get_config().assets

    def build(
        self,
        resolved_assets: Iterable[ResolvedAsset],
        mode: TreeMode = TreeMode.ALL,
        division_names: Mapping[int, str] | None = None,
    ) -> list[AssetTreeNode]:
        """Build the asset tree.

        Args:
            resolved_assets: Output of a resolution pass
            mode: Which subset of assets to include
            division_names: Custom hangar division names keyed by division number

        Returns:
            Top-level region nodes in insertion order
        """
        assets = list(resolved_assets)
        by_item_id: dict[int, ResolvedAsset] = {}
        for ra in assets:
            by_item_id.setdefault(ra.item_id, ra)

        included: list[ResolvedAsset] = []
        seen: set[int] = set()
        for ra in assets:
            if ra.item_id in seen:
                continue
            if should_include_by_mode(ra, mode):
                included.append(ra)
                seen.add(ra.item_id)

        parent_ids = {p.item_id for ra in included for p in ra.parent_chain}

        roots: list[AssetTreeNode] = []
        index: dict[str, AssetTreeNode] = {}
        for ra in included:
            path = self._location_path(ra, roots, index)
            self._insert(ra, path, index, by_item_id, parent_ids, division_names or {})

        logger.debug(
            "Built %s tree: %d assets, %d nodes, %d regions",
            mode.value,
            len(included),
            len(index),
            len(roots),
        )
        return roots

    def _location_path(
        self,
        ra: ResolvedAsset,
        roots: list[AssetTreeNode],
        index: dict[str, AssetTreeNode],
    ) -> list[AssetTreeNode]:
        region_name = ra.region_name or self._config.unknown_region_name
        location = {
            "region_name": region_name,
            "region_id": ra.region_id,
        }

        region_part = ra.region_id if ra.region_id is not None else "unknown"
        region_key = f"region-{region_part}"
        region = index.get(region_key)
        if region is None:
            region = AssetTreeNode(region_key, "region", region_name, **location)
            index[region_key] = region
            roots.append(region)

        system_part = ra.system_id if ra.system_id is not None else "unknown"
        system_key = f"{region_key}/system-{system_part}"
        system = index.get(system_key)
        if system is None:
            system_name = ra.system_name or (
                f"System {ra.system_id}"
                if ra.system_id is not None
                else "Unknown System"
            )
            system = AssetTreeNode(
                system_key, "system", system_name, system_id=ra.system_id, **location
            )
            index[system_key] = system
            region.add_child(system)

        if ra.root_location_type == "solar_system":
            return [region, system]

        station_key = f"{system_key}/station-{ra.root_location_id}"
        station = index.get(station_key)
        if station is None:
            station = AssetTreeNode(
                station_key,
                "station",
                ra.location_name or f"Location {ra.root_location_id}",
                location_id=ra.root_location_id,
                system_id=ra.system_id,
                **location,
            )
            index[station_key] = station
            system.add_child(station)
        return [region, system, station]

    def _insert(
        self,
        ra: ResolvedAsset,
        path: list[AssetTreeNode],
        index: dict[str, AssetTreeNode],
        by_item_id: Mapping[int, ResolvedAsset],
        parent_ids: set[int],
        division_names: Mapping[int, str],
    ) -> None:
        location_node = path[-1]
        station_name = location_node.name
        # An owned structure is its own root location; skip it in the chain
        chain = [p for p in ra.parent_chain if p.item_id != ra.root_location_id]
        office = _find_office(chain, ra.asset)

        parent = location_node
        for i in range(len(chain) - 1, -1, -1):
            container = chain[i]
            node = self._get_or_create_container(
                container, parent, index, by_item_id, station_name, ra
            )
            path.append(node)
            parent = node

            if office is not None and i == office[0] and office[1] is not None:
                node = self._get_or_create_division(
                    container.item_id, office[1], parent, index, division_names
                )
                path.append(node)
                parent = node

        leaf = self._get_or_create_leaf(ra, parent, index, parent_ids, station_name)
        if not leaf.item_ids:
            leaf.price = ra.price
        leaf.quantity += ra.quantity
        leaf.item_ids.append(ra.item_id)
        flags = ra.mode_flags
        leaf.is_in_contract = leaf.is_in_contract or flags.is_contract
        leaf.is_in_market_order = leaf.is_in_market_order or flags.is_market_order
        leaf.is_in_industry_job = leaf.is_in_industry_job or flags.is_industry_job
        leaf.is_owned_structure = leaf.is_owned_structure or flags.is_owned_structure
        leaf.is_active_ship = leaf.is_active_ship or flags.is_active_ship
        path.append(leaf)

        for node in path:
            node.add_totals(ra.quantity, ra.total_value, ra.total_volume)

    def _asset_node_type(self, type_id: int, category_id: int | None) -> TreeNodeType:
        if type_id == OFFICE_TYPE_ID:
            return "office"
        if category_id == CategoryIds.SHIP:
            return "ship"
        return "container"

    def _get_or_create_container(
        self,
        container: EveAsset,
        parent: AssetTreeNode,
        index: dict[str, AssetTreeNode],
        by_item_id: Mapping[int, ResolvedAsset],
        station_name: str,
        child: ResolvedAsset,
    ) -> AssetTreeNode:
        node_id = f"{parent.id}/asset-{container.item_id}"
        node = index.get(node_id)
        if node is not None:
            return node

        resolved = by_item_id.get(container.item_id)
        if resolved is not None:
            name = get_asset_display_names(resolved).type_name
            category_id: int | None = resolved.category_id
            category_name = resolved.category_name
        else:
            cached_type = self._snapshot.get_type(container.type_id)
            name = cached_type.name if cached_type else f"Unknown Type {container.type_id}"
            category_id = cached_type.category_id if cached_type else None
            category_name = cached_type.category_name if cached_type else None

        node_type = self._asset_node_type(container.type_id, category_id)
        if node_type == "office":
            name = station_name
        node = AssetTreeNode(
            node_id,
            node_type,
            name,
            region_name=parent.region_name,
            location_id=child.root_location_id,
            system_id=child.system_id,
            region_id=child.region_id,
            type_id=container.type_id,
            category_id=category_id,
            category_name=category_name,
            is_blueprint_copy=bool(container.is_blueprint_copy),
            owner_key=resolved.owner.key if resolved else child.owner.key,
            location_flag=container.location_flag,
        )
        index[node_id] = node
        parent.add_child(node)
        return node

    def _get_or_create_division(
        self,
        office_item_id: int,
        flag: str,
        parent: AssetTreeNode,
        index: dict[str, AssetTreeNode],
        division_names: Mapping[int, str],
    ) -> AssetTreeNode:
        node_id = f"{parent.id}/division-{office_item_id}-{flag}"
        node = index.get(node_id)
        if node is not None:
            return node

        number = get_division_number(flag)
        name = (division_names.get(number) if number is not None else None) or (
            DIVISION_FLAG_NAMES.get(flag, flag)
        )
        node = AssetTreeNode(
            node_id,
            "division",
            name,
            region_name=parent.region_name,
            location_id=parent.location_id,
            system_id=parent.system_id,
            region_id=parent.region_id,
            division_number=number,
            location_flag=flag,
        )
        index[node_id] = node
        parent.add_child(node)
        return node

    def _get_or_create_leaf(
        self,
        ra: ResolvedAsset,
        parent: AssetTreeNode,
        index: dict[str, AssetTreeNode],
        parent_ids: set[int],
        station_name: str,
    ) -> AssetTreeNode:
        asset = ra.asset
        is_ship = ra.category_id == CategoryIds.SHIP
        if ra.item_id in parent_ids:
            node_type = self._asset_node_type(ra.type_id, ra.category_id)
            node_id = f"{parent.id}/asset-{ra.item_id}"
        elif asset.is_singleton or is_ship or ra.type_id == OFFICE_TYPE_ID:
            node_type = self._asset_node_type(ra.type_id, ra.category_id)
            if node_type == "container":
                node_type = "item"
            node_id = f"{parent.id}/asset-{ra.item_id}"
        else:
            node_type = "stack"
            node_id = (
                f"{parent.id}/stack-{ra.owner.key}-{ra.type_id}-"
                f"{asset.location_flag}-{'bpc' if ra.is_blueprint_copy else 'item'}"
            )

        node = index.get(node_id)
        if node is not None:
            return node

        names = get_asset_display_names(ra)
        node = AssetTreeNode(
            node_id,
            node_type,
            station_name if node_type == "office" else names.type_name,
            region_name=parent.region_name,
            location_id=ra.root_location_id,
            system_id=ra.system_id,
            region_id=ra.region_id,
            type_id=ra.type_id,
            category_id=ra.category_id,
            category_name=names.category_name,
            is_blueprint_copy=ra.is_blueprint_copy,
            owner_key=ra.owner.key,
            location_flag=asset.location_flag,
            price=ra.price,
        )
        index[node_id] = node
        parent.add_child(node)
        return node
