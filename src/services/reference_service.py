"""Collects the reference data IDs a resolution pass is still missing.

The fetch pipeline uses the result to decide which types, locations and
structures to load next. Structures are paired with a character whose token
can read them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from models.app import OwnerData
from models.app.asset_flags import CategoryIds
from models.eve import EveAsset
from utils.config import AssetEngineConfig, get_config

if TYPE_CHECKING:
    from data import ReferenceSnapshot

logger = logging.getLogger(__name__)


class ResolutionIds(BaseModel):
    """Reference IDs absent from a snapshot."""

    type_ids: set[int] = Field(default_factory=set)
    location_ids: set[int] = Field(default_factory=set)
    structure_to_character: dict[int, int] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.type_ids or self.location_ids or self.structure_to_character)


class ReferenceService:
    """Scans owner record sets for IDs missing from reference data."""

    def __init__(
        self,
        snapshot: ReferenceSnapshot,
        config: AssetEngineConfig | None = None,
    ):
        self._snapshot = snapshot
        self._threshold = (config or get_config().assets).structure_id_threshold

    def collect_resolution_ids(self, owners: Iterable[OwnerData]) -> ResolutionIds:
        """Collect missing type, location and structure IDs for every owner."""
        owner_list = list(owners)
        ids = ResolutionIds()
        self._collect_from_assets(owner_list, ids)
        for data in owner_list:
            character_id = data.owner.character_id
            self._collect_from_contracts(data, character_id, ids)
            for order in data.orders:
                self._add_type(order.type_id, ids)
                self._add_location(order.location_id, character_id, ids)
            for job in data.jobs:
                self._add_type(job.blueprint_type_id, ids)
                self._add_type(job.output_type_id, ids)
                self._add_location(job.job_location_id, character_id, ids)
            for structure in data.structures:
                self._add_type(structure.type_id, ids)
                self._add_location(structure.system_id, character_id, ids)
            for starbase in data.starbases:
                self._add_type(starbase.type_id, ids)
                self._add_location(starbase.system_id, character_id, ids)
                if starbase.moon_id:
                    self._add_location(starbase.moon_id, character_id, ids)
            if data.active_ship is not None:
                self._add_type(data.active_ship.ship_type_id, ids)

        logger.debug(
            "Missing reference data: %d types, %d locations, %d structures",
            len(ids.type_ids),
            len(ids.location_ids),
            len(ids.structure_to_character),
        )
        return ids

    def _add_type(self, type_id: int, ids: ResolutionIds) -> None:
        if not self._snapshot.has_type(type_id):
            ids.type_ids.add(type_id)

    def _add_location(
        self, location_id: int | None, character_id: int, ids: ResolutionIds
    ) -> None:
        if not location_id:
            return
        if location_id >= self._threshold:
            if not self._snapshot.has_structure(location_id):
                ids.structure_to_character.setdefault(location_id, character_id)
        elif not self._snapshot.has_location(location_id):
            ids.location_ids.add(location_id)

    def _collect_from_assets(
        self, owner_list: list[OwnerData], ids: ResolutionIds
    ) -> None:
        lookup: dict[int, EveAsset] = {}
        owner_of: dict[int, int] = {}
        for data in owner_list:
            for asset in data.assets:
                lookup[asset.item_id] = asset
                owner_of[asset.item_id] = data.owner.character_id

        for data in owner_list:
            character_id = data.owner.character_id
            for asset in data.assets:
                self._add_type(asset.type_id, ids)
                if asset.location_type != "item":
                    self._add_location(asset.location_id, character_id, ids)

                cached_type = self._snapshot.get_type(asset.type_id)
                if (
                    cached_type is not None
                    and cached_type.category_id == CategoryIds.STRUCTURE
                    and asset.location_type == "solar_system"
                    and not self._snapshot.has_structure(asset.item_id)
                ):
                    ids.structure_to_character.setdefault(asset.item_id, character_id)

                root, root_character = self._root_of(asset, lookup, owner_of)
                if root.location_id >= self._threshold:
                    self._add_location(
                        root.location_id, root_character or character_id, ids
                    )

    def _root_of(
        self,
        asset: EveAsset,
        lookup: dict[int, EveAsset],
        owner_of: dict[int, int],
    ) -> tuple[EveAsset, int | None]:
        current = asset
        visited = {asset.item_id}
        while current.location_type == "item":
            parent = lookup.get(current.location_id)
            if parent is None or parent.item_id in visited:
                break
            visited.add(parent.item_id)
            current = parent
        return current, owner_of.get(current.item_id)

    def _collect_from_contracts(
        self, data: OwnerData, character_id: int, ids: ResolutionIds
    ) -> None:
        for entry in data.contracts:
            contract = entry.contract
            self._add_location(contract.start_location_id, character_id, ids)
            self._add_location(contract.end_location_id, character_id, ids)
            for item in entry.items or ():
                self._add_type(item.type_id, ids)


def collect_resolution_ids(
    snapshot: ReferenceSnapshot,
    owners: Iterable[OwnerData],
    config: AssetEngineConfig | None = None,
) -> ResolutionIds:
    """Convenience wrapper around ``ReferenceService.collect_resolution_ids``."""
    return ReferenceService(snapshot, config).collect_resolution_ids(owners)
