"""Asset resolution service.

Handles asset-related business logic: walking container chains to the root
location, classifying where an asset is stored, and attaching type data and
market value from the reference and price snapshots.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Literal, NamedTuple

from pydantic import BaseModel, Field

from models.app import (
    AssetDisplayNames,
    AssetModeFlags,
    ContractInfo,
    LocationInfo,
    Owner,
    ResolvedAsset,
)
from models.app.asset_flags import (
    ACTIVE_SHIP_FLAG,
    ASSET_SAFETY_FLAGS,
    CONTRACT_FLAG,
    DELIVERY_FLAGS,
    HANGAR_FLAGS,
    INDUSTRY_JOB_FLAG,
    MARKET_ORDER_FLAGS,
    OFFICE_TYPE_ID,
    CategoryIds,
    is_fitted_or_content_flag,
)
from models.eve import EveAsset
from services.location_service import LocationService
from utils.config import AssetEngineConfig, get_config

if TYPE_CHECKING:
    from data import PriceSnapshot, ReferenceSnapshot

logger = logging.getLogger(__name__)

AssetLookupMap = dict[int, EveAsset]

StopReason = Literal["root", "missing_parent", "cycle", "depth"]

RootLocationType = Literal["station", "structure", "solar_system"]


class ParentChain(NamedTuple):
    """Result of walking an asset's container chain, nearest parent first."""

    chain: tuple[EveAsset, ...]
    stop_reason: StopReason
    unresolved_id: int | None = None


class ResolutionContext(BaseModel):
    """Per-pass owner data the resolver consults besides the snapshots."""

    asset_names: dict[int, str] = Field(default_factory=dict)
    owned_structure_ids: set[int] = Field(default_factory=set)
    starbase_moon_ids: dict[int, int] = Field(
        default_factory=dict, description="Starbase item ID -> anchoring moon ID"
    )
    structure_system_ids: dict[int, int] = Field(
        default_factory=dict, description="Owned structure ID -> solar system ID"
    )
    contract_info: dict[int, ContractInfo] = Field(default_factory=dict)


class AssetService:
    """Resolves raw asset records into ``ResolvedAsset`` entities.

    Every record except owner and station pseudo-items yields exactly one
    entity. Missing reference data produces placeholder names and zero
    price/volume rather than errors.
    """

    def __init__(
        self,
        snapshot: ReferenceSnapshot,
        prices: PriceSnapshot,
        config: AssetEngineConfig | None = None,
    ):
        """Initialize asset service.

        Args:
            snapshot: Reference data snapshot for this pass
            prices: Price snapshot for this pass
            config: Engine settings; defaults to the global configuration
        """
        self._config = config or get_config().assets
        self._snapshot = snapshot
        self._prices = prices
        self._locations = LocationService(
            snapshot,
            structure_id_threshold=self._config.structure_id_threshold,
            unknown_region_name=self._config.unknown_region_name,
        )

    @property
    def location_service(self) -> LocationService:
        return self._locations

    @staticmethod
    def build_lookup_map(
        assets_by_owner: Iterable[tuple[Owner, Iterable[EveAsset]]],
    ) -> AssetLookupMap:
        """Index every record of every owner by item ID.

        Containers may belong to a different owner than their contents
        (corporation hangars holding character items), so the map spans
        the whole owner set.
        """
        lookup: AssetLookupMap = {}
        for _owner, assets in assets_by_owner:
            for asset in assets:
                lookup[asset.item_id] = asset
        return lookup

    def build_parent_chain(
        self, asset: EveAsset, lookup: Mapping[int, EveAsset]
    ) -> ParentChain:
        """Walk from an asset up through its containers.

        Stops when a location is not an item, the parent is unknown, an item
        ID repeats, or ``max_parent_depth`` hops have been taken.
        """
        chain: list[EveAsset] = []
        visited = {asset.item_id}
        current = asset
        while current.location_type == "item":
            if len(chain) >= self._config.max_parent_depth:
                logger.debug(
                    "Parent chain for item %d exceeded %d hops",
                    asset.item_id,
                    self._config.max_parent_depth,
                )
                return ParentChain(tuple(chain), "depth", current.location_id)
            parent_id = current.location_id
            if parent_id in visited:
                logger.debug(
                    "Cycle in parent chain of item %d at %d", asset.item_id, parent_id
                )
                return ParentChain(tuple(chain), "cycle", parent_id)
            parent = lookup.get(parent_id)
            if parent is None:
                return ParentChain(tuple(chain), "missing_parent", parent_id)
            visited.add(parent_id)
            chain.append(parent)
            current = parent
        return ParentChain(tuple(chain), "root")

    @staticmethod
    def get_root_flag(asset: EveAsset, chain: tuple[EveAsset, ...]) -> str:
        """Location flag of the outermost container (or the asset itself)."""
        return chain[-1].location_flag if chain else asset.location_flag

    def is_orphaned(self, walk: ParentChain) -> bool:
        """Return True if the walk ended somewhere that is not a real location."""
        if walk.stop_reason in ("cycle", "depth"):
            return True
        if walk.stop_reason == "missing_parent" and walk.unresolved_id is not None:
            return not self._locations.is_resolvable(walk.unresolved_id)
        return False

    def resolve_root_location(
        self,
        asset: EveAsset,
        chain: tuple[EveAsset, ...],
        starbase_moon_ids: Mapping[int, int] | None = None,
        structure_system_ids: Mapping[int, int] | None = None,
    ) -> tuple[RootLocationType, LocationInfo]:
        """Resolve the root location of an asset.

        Args:
            asset: The asset being resolved
            chain: Its parent chain, nearest first
            starbase_moon_ids: Starbase item ID -> moon ID
            structure_system_ids: Owned structure ID -> system ID, used when
                the structure is missing from reference data

        Returns:
            Tuple of (root location type, location info)
        """
        root = chain[-1] if chain else asset
        location_id = root.location_id

        if self._locations.is_structure_id(location_id):
            info = self._locations.resolve_structure(location_id)
            system_id = (structure_system_ids or {}).get(location_id)
            if info.system_id is None and system_id:
                info = self._with_system(info, system_id)
            return "structure", info

        if root.location_type == "solar_system":
            category_id = self._category_id(root.type_id)
            if category_id == CategoryIds.STRUCTURE:
                info = self._locations.resolve_structure(root.item_id)
                if info.system_id is None:
                    info = self._with_system(info, location_id)
                return "structure", info
            if category_id == CategoryIds.STARBASE:
                moon_id = (starbase_moon_ids or {}).get(root.item_id)
                if moon_id:
                    return "structure", self._locations.resolve_moon(
                        moon_id, root.item_id
                    )
                system = self._locations.resolve_system(location_id)
                return "structure", system.model_copy(
                    update={"location_id": root.item_id, "kind": "structure"}
                )
            return "solar_system", self._locations.resolve_system(location_id)

        info = self._locations.resolve(location_id)
        if info.kind == "structure":
            return "structure", info
        if info.kind == "solar_system":
            return "solar_system", info
        return "station", info

    def compute_mode_flags(
        self,
        asset: EveAsset,
        chain: tuple[EveAsset, ...],
        root_flag: str,
        owned_structure_ids: set[int] | frozenset[int] = frozenset(),
    ) -> AssetModeFlags:
        """Classify where an asset is stored. Flags are not exclusive."""
        is_ship = self._category_id(asset.type_id) == CategoryIds.SHIP
        in_hangar = root_flag in HANGAR_FLAGS

        in_structure = False
        if chain:
            in_structure = (
                self._category_id(chain[-1].type_id) == CategoryIds.STRUCTURE
            )

        parent_is_owned = bool(chain) and chain[0].item_id in owned_structure_ids
        is_owned_structure = asset.item_id in owned_structure_ids or (
            parent_is_owned and is_fitted_or_content_flag(asset.location_flag)
        )

        return AssetModeFlags(
            in_hangar=in_hangar,
            in_ship_hangar=in_hangar and is_ship,
            in_item_hangar=in_hangar and not is_ship,
            in_deliveries=root_flag in DELIVERY_FLAGS,
            in_asset_safety=root_flag in ASSET_SAFETY_FLAGS,
            in_office=any(p.type_id == OFFICE_TYPE_ID for p in chain),
            in_structure=in_structure,
            is_contract=asset.location_flag == CONTRACT_FLAG,
            is_market_order=asset.location_flag in MARKET_ORDER_FLAGS,
            is_industry_job=asset.location_flag == INDUSTRY_JOB_FLAG,
            is_owned_structure=is_owned_structure,
            is_active_ship=root_flag == ACTIVE_SHIP_FLAG,
        )

    def resolve_asset(
        self,
        asset: EveAsset,
        owner: Owner,
        lookup: Mapping[int, EveAsset],
        context: ResolutionContext | None = None,
    ) -> ResolvedAsset:
        """Resolve a single asset record."""
        context = context or ResolutionContext()
        walk = self.build_parent_chain(asset, lookup)
        chain = walk.chain
        root_flag = self.get_root_flag(asset, chain)
        root_type, location = self.resolve_root_location(
            asset, chain, context.starbase_moon_ids, context.structure_system_ids
        )
        has_orphaned_parent = self.is_orphaned(walk)
        if has_orphaned_parent:
            logger.debug(
                "Item %d has an orphaned parent (%s at %s)",
                asset.item_id,
                walk.stop_reason,
                walk.unresolved_id,
            )

        cached_type = self._snapshot.get_type(asset.type_id)
        is_bpc = bool(asset.is_blueprint_copy)
        volume = 0.0
        if cached_type is not None:
            if cached_type.packaged_volume is not None:
                volume = cached_type.packaged_volume
            elif cached_type.volume is not None:
                volume = cached_type.volume

        return ResolvedAsset(
            asset=asset,
            owner=owner,
            type_id=asset.type_id,
            type_name=cached_type.name if cached_type else f"Unknown Type {asset.type_id}",
            category_id=(cached_type.category_id or 0) if cached_type else 0,
            category_name=cached_type.category_name if cached_type else "",
            group_id=(cached_type.group_id or 0) if cached_type else 0,
            group_name=cached_type.group_name if cached_type else "",
            root_location_id=location.location_id,
            root_location_type=root_type,
            location_name=location.name,
            system_id=location.system_id,
            system_name=location.system_name,
            region_id=location.region_id,
            region_name=location.region_name or self._locations.unknown_region_name,
            parent_chain=chain,
            root_flag=root_flag,
            has_orphaned_parent=has_orphaned_parent,
            price=self._prices.get_item_price(
                asset.type_id, item_id=asset.item_id, is_blueprint_copy=is_bpc
            ),
            volume=max(volume, 0.0),
            mode_flags=self.compute_mode_flags(
                asset, chain, root_flag, context.owned_structure_ids
            ),
            custom_name=context.asset_names.get(asset.item_id),
            is_blueprint_copy=is_bpc,
            contract_info=context.contract_info.get(asset.item_id),
        )

    def resolve_all_assets(
        self,
        assets_by_owner: Iterable[tuple[Owner, Iterable[EveAsset]]],
        context: ResolutionContext | None = None,
    ) -> list[ResolvedAsset]:
        """Resolve every record of every owner.

        Owner and station category pseudo-items are skipped.
        """
        owner_assets = [(owner, list(assets)) for owner, assets in assets_by_owner]
        lookup = self.build_lookup_map(owner_assets)
        context = context or ResolutionContext()

        results: list[ResolvedAsset] = []
        skipped = 0
        for owner, assets in owner_assets:
            for asset in assets:
                if self._category_id(asset.type_id) in (
                    CategoryIds.OWNER,
                    CategoryIds.STATION,
                ):
                    skipped += 1
                    continue
                results.append(self.resolve_asset(asset, owner, lookup, context))

        logger.debug(
            "Resolved %d assets for %d owners (%d pseudo-items skipped)",
            len(results),
            len(owner_assets),
            skipped,
        )
        return results

    def _category_id(self, type_id: int) -> int | None:
        cached_type = self._snapshot.get_type(type_id)
        return cached_type.category_id if cached_type else None

    def _with_system(self, info: LocationInfo, system_id: int) -> LocationInfo:
        system = self._locations.resolve_system(system_id)
        return info.model_copy(
            update={
                "system_id": system_id,
                "system_name": system.system_name,
                "region_id": system.region_id,
                "region_name": system.region_name,
            }
        )


def get_asset_display_names(resolved: ResolvedAsset) -> AssetDisplayNames:
    """Build display names for a resolved asset.

    Blueprints get an original/copy suffix, player-named items show their
    custom name, and assets in asset safety or under an orphaned parent
    show that instead of the resolved location name.
    """
    type_name = resolved.type_name
    if resolved.custom_name:
        type_name = f"{type_name} ({resolved.custom_name})"
    if resolved.category_id == CategoryIds.BLUEPRINT:
        suffix = "Copy" if resolved.is_blueprint_copy else "Original"
        type_name = f"{type_name} ({suffix})"

    if resolved.mode_flags.in_asset_safety:
        location_name = "Asset Safety"
    elif resolved.has_orphaned_parent:
        location_name = "Unknown Parent"
    else:
        location_name = resolved.location_name

    return AssetDisplayNames(
        type_name=type_name,
        category_name=resolved.category_name,
        group_name=resolved.group_name,
        location_name=location_name,
        system_name=resolved.system_name,
        region_name=resolved.region_name,
    )


def matches_search(
    resolved: ResolvedAsset, names: AssetDisplayNames, search: str
) -> bool:
    """Case-insensitive substring search over an asset's display fields."""
    if not search:
        return True
    needle = search.lower()
    fields = (
        names.type_name,
        names.group_name,
        names.category_name,
        names.location_name,
        names.system_name,
        names.region_name,
        resolved.owner.name,
    )
    return any(needle in field.lower() for field in fields if field)
