"""Synthetic asset injection.

Turns records that do not come from the asset endpoint (the ship being flown,
sell orders, outstanding contract items, industry job outputs, owned
structures) into ``EveAsset`` records so they flow through the same resolver
and tree aggregation as real assets. Synthetic records are always roots.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Literal

from pydantic import BaseModel, Field

from models.app import ContractInfo, Owner, OwnerData
from models.app.asset_flags import (
    ACTIVE_SHIP_FLAG,
    BUY_ORDER_FLAG,
    CONTRACT_FLAG,
    INDUSTRY_JOB_FLAG,
    OWNED_STRUCTURE_FLAG,
    SELL_ORDER_FLAG,
)
from models.eve import (
    EveAsset,
    EveCharacterShip,
    EveContractWithItems,
    EveIndustryJob,
    EveLocation,
    EveMarketOrder,
    EveStructure,
)
from utils.config import AssetEngineConfig, get_config

logger = logging.getLogger(__name__)

ScopeChecker = Callable[[str, str], bool]

ACTIVE_CONTRACT_STATUSES = frozenset({"outstanding", "in_progress"})
ACTIVE_JOB_STATUSES = frozenset({"active", "ready"})

# Record IDs are packed into the low bits of a negated contract ID
_CONTRACT_RECORD_BITS = 40


class ActiveShipResult(BaseModel):
    """Outcome of active ship detection for one owner."""

    synthetic_ship: EveAsset | None = None
    ship_name: str | None = None
    ship_item_id: int | None = None
    needs_reauth: bool = False


class SyntheticAssets(BaseModel):
    """Synthetic records for one owner plus the metadata the resolver needs."""

    records: list[EveAsset] = Field(default_factory=list)
    contract_info: dict[int, ContractInfo] = Field(default_factory=dict)
    custom_names: dict[int, str] = Field(default_factory=dict)
    needs_reauth: bool = False


def _location_type(
    location_id: int, threshold: int
) -> Literal["other", "station"]:
    return "other" if location_id >= threshold else "station"


def contract_item_id(contract_id: int, record_id: int) -> int:
    """Synthesize a unique item ID for a contract line.

    The result is negative, so it can never equal a real asset, order or job ID.
    """
    return -((contract_id << _CONTRACT_RECORD_BITS) | record_id)


def detect_active_ship(
    owner: Owner,
    assets: Iterable[EveAsset],
    ship: EveCharacterShip | None,
    location: EveLocation | None,
    scope_checker: ScopeChecker,
    required_scopes: Iterable[str],
    structure_id_threshold: int,
) -> ActiveShipResult:
    """Build a synthetic record for the ship a character is flying.

    A ship that is already listed among the owner's assets is not injected.
    Missing location scopes produce no record and set ``needs_reauth``.
    """
    if owner.owner_type != "character":
        return ActiveShipResult()

    missing = [s for s in required_scopes if not scope_checker(owner.key, s)]
    if missing:
        logger.info(
            "Missing location scopes for active ship detection (owner=%s, missing=%s)",
            owner.name,
            ", ".join(missing),
        )
        return ActiveShipResult(needs_reauth=True)

    if ship is None or location is None:
        return ActiveShipResult()

    if any(a.item_id == ship.ship_item_id for a in assets):
        return ActiveShipResult()

    location_type: Literal["other", "station", "solar_system"]
    if location.docked_at is not None:
        location_id = location.docked_at
        location_type = "other" if location.structure_id else "station"
    else:
        location_id = location.solar_system_id
        location_type = "solar_system"
    if location_id >= structure_id_threshold:
        location_type = "other"

    synthetic = EveAsset(
        item_id=ship.ship_item_id,
        type_id=ship.ship_type_id,
        quantity=1,
        location_id=location_id,
        location_type=location_type,
        location_flag=ACTIVE_SHIP_FLAG,
        is_singleton=True,
    )
    logger.info(
        "Injected active ship %d (type %d) for %s at %d",
        ship.ship_item_id,
        ship.ship_type_id,
        owner.name,
        location_id,
    )
    return ActiveShipResult(
        synthetic_ship=synthetic,
        ship_name=ship.ship_name or None,
        ship_item_id=ship.ship_item_id,
    )


def market_order_assets(
    orders: Iterable[EveMarketOrder],
    structure_id_threshold: int,
    include_buy_orders: bool = False,
) -> list[EveAsset]:
    """One synthetic record per open order with remaining volume."""
    records = []
    for order in orders:
        if not order.is_open:
            continue
        if order.is_buy_order and not include_buy_orders:
            continue
        records.append(
            EveAsset(
                item_id=order.order_id,
                type_id=order.type_id,
                quantity=order.volume_remain,
                location_id=order.location_id,
                location_type=_location_type(order.location_id, structure_id_threshold),
                location_flag=BUY_ORDER_FLAG if order.is_buy_order else SELL_ORDER_FLAG,
                is_singleton=False,
            )
        )
    return records


def is_contract_issuer(owner: Owner, contract_id_issuer: int, issuer_corp_id: int) -> bool:
    if owner.owner_type == "corporation":
        return issuer_corp_id == owner.id
    return contract_id_issuer == owner.character_id


def contract_item_assets(
    owner: Owner,
    contracts: Iterable[EveContractWithItems],
    structure_id_threshold: int,
) -> tuple[list[EveAsset], dict[int, ContractInfo]]:
    """Synthetic records for items the owner has put up in active contracts.

    Only included lines of outstanding or in-progress contracts issued by the
    owner are emitted; contracts whose items are not loaded yet are skipped.
    """
    records: list[EveAsset] = []
    info: dict[int, ContractInfo] = {}
    for entry in contracts:
        contract = entry.contract
        if contract.status not in ACTIVE_CONTRACT_STATUSES:
            continue
        if not is_contract_issuer(
            owner, contract.issuer_id, contract.issuer_corporation_id
        ):
            continue
        if entry.items is None:
            continue

        location_id = contract.start_location_id or 0
        contract_info = ContractInfo(
            contract_id=contract.contract_id,
            issuer_id=contract.issuer_id,
            issuer_corporation_id=contract.issuer_corporation_id,
        )
        for item in entry.items:
            if not item.is_included:
                continue
            item_id = contract_item_id(contract.contract_id, item.record_id)
            records.append(
                EveAsset(
                    item_id=item_id,
                    type_id=item.type_id,
                    quantity=item.quantity,
                    location_id=location_id,
                    location_type=_location_type(location_id, structure_id_threshold),
                    location_flag=CONTRACT_FLAG,
                    is_singleton=item.is_singleton,
                    is_blueprint_copy=item.is_blueprint_copy,
                )
            )
            info[item_id] = contract_info
    return records, info


def industry_job_assets(
    jobs: Iterable[EveIndustryJob], structure_id_threshold: int
) -> list[EveAsset]:
    """One synthetic record per active or ready job, typed by its product."""
    records = []
    for job in jobs:
        if job.status not in ACTIVE_JOB_STATUSES:
            continue
        location_id = job.job_location_id
        records.append(
            EveAsset(
                item_id=job.job_id,
                type_id=job.output_type_id,
                quantity=job.runs,
                location_id=location_id,
                location_type=_location_type(location_id, structure_id_threshold),
                location_flag=INDUSTRY_JOB_FLAG,
                is_singleton=False,
            )
        )
    return records


def owned_structure_assets(structures: Iterable[EveStructure]) -> list[EveAsset]:
    """One synthetic record per structure the owner has deployed."""
    return [
        EveAsset(
            item_id=s.structure_id,
            type_id=s.type_id,
            quantity=1,
            location_id=s.structure_id,
            location_type="other",
            location_flag=OWNED_STRUCTURE_FLAG,
            is_singleton=True,
        )
        for s in structures
    ]


class SyntheticAssetService:
    """Injects synthetic records for every owner of one resolution pass.

    Real asset IDs are reserved up front; a synthetic record whose ID is
    already taken is dropped, so IDs stay unique across the whole pass.
    """

    def __init__(
        self,
        scope_checker: ScopeChecker,
        real_item_ids: Iterable[int] = (),
        config: AssetEngineConfig | None = None,
    ):
        self._scope_checker = scope_checker
        self._config = config or get_config().assets
        self._used_ids: set[int] = set(real_item_ids)

    def inject(self, data: OwnerData) -> SyntheticAssets:
        """Build all synthetic records for one owner."""
        threshold = self._config.structure_id_threshold
        result = SyntheticAssets()

        ship = detect_active_ship(
            data.owner,
            data.assets,
            data.active_ship,
            data.character_location,
            self._scope_checker,
            self._config.active_ship_scopes,
            threshold,
        )
        result.needs_reauth = ship.needs_reauth
        candidates: list[EveAsset] = []
        if ship.synthetic_ship is not None:
            candidates.append(ship.synthetic_ship)
            if ship.ship_item_id is not None and ship.ship_name:
                result.custom_names[ship.ship_item_id] = ship.ship_name

        candidates.extend(
            market_order_assets(data.orders, threshold, self._config.include_buy_orders)
        )
        contract_records, contract_info = contract_item_assets(
            data.owner, data.contracts, threshold
        )
        candidates.extend(contract_records)
        candidates.extend(industry_job_assets(data.jobs, threshold))
        candidates.extend(owned_structure_assets(data.structures))

        for record in candidates:
            if record.item_id in self._used_ids:
                logger.warning(
                    "Dropping synthetic %s record %d for %s: item ID already in use",
                    record.location_flag,
                    record.item_id,
                    data.owner.name,
                )
                continue
            self._used_ids.add(record.item_id)
            result.records.append(record)
            if record.item_id in contract_info:
                result.contract_info[record.item_id] = contract_info[record.item_id]

        logger.debug(
            "Injected %d synthetic records for %s",
            len(result.records),
            data.owner.name,
        )
        return result
