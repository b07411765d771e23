"""Resolved asset model: the canonical output of one resolution pass."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from models.eve import EveAsset

from .owner import Owner


class AssetModeFlags(BaseModel):
    """Storage classification of a resolved asset. Flags are not exclusive."""

    model_config = ConfigDict(frozen=True)

    in_hangar: bool = False
    in_ship_hangar: bool = False
    in_item_hangar: bool = False
    in_deliveries: bool = False
    in_asset_safety: bool = False
    in_office: bool = False
    in_structure: bool = False
    is_contract: bool = False
    is_market_order: bool = False
    is_industry_job: bool = False
    is_owned_structure: bool = False
    is_active_ship: bool = False


class ContractInfo(BaseModel):
    """Contract a synthetic contract-item record was built from."""

    model_config = ConfigDict(frozen=True)

    contract_id: int
    issuer_id: int
    issuer_corporation_id: int


class ResolvedAsset(BaseModel):
    """Asset with location resolution, classification and value."""

    model_config = ConfigDict(frozen=True)

    asset: EveAsset
    owner: Owner

    # Identity
    type_id: int
    type_name: str = ""
    category_id: int = 0
    category_name: str = ""
    group_id: int = 0
    group_name: str = ""

    # Location
    root_location_id: int
    root_location_type: Literal["station", "structure", "solar_system"]
    location_name: str = ""
    system_id: int | None = None
    system_name: str = ""
    region_id: int | None = None
    region_name: str = ""
    parent_chain: tuple[EveAsset, ...] = ()
    root_flag: str
    has_orphaned_parent: bool = False

    # Economics
    price: float = Field(0.0, ge=0)
    volume: float = Field(0.0, ge=0)

    mode_flags: AssetModeFlags = Field(default_factory=AssetModeFlags)

    # Presentation
    custom_name: str | None = None
    is_blueprint_copy: bool = False
    contract_info: ContractInfo | None = None

    @property
    def item_id(self) -> int:
        """Item ID of the underlying record."""
        return self.asset.item_id

    @property
    def quantity(self) -> int:
        """Quantity of the underlying record."""
        return self.asset.quantity

    @computed_field  # type: ignore[misc]
    @property
    def total_value(self) -> float:
        """Total estimated value for this stack."""
        return self.price * self.asset.quantity

    @computed_field  # type: ignore[misc]
    @property
    def total_volume(self) -> float:
        """Total volume for this stack."""
        return self.volume * self.asset.quantity


class AssetDisplayNames(BaseModel):
    """Human-readable names for a resolved asset."""

    type_name: str
    category_name: str = ""
    group_name: str = ""
    location_name: str = ""
    system_name: str = ""
    region_name: str = ""


def matches_asset_type_filter(mode_flags: AssetModeFlags, filter_value: str) -> bool:
    """Check a flat-table asset type filter value against mode flags.

    An empty or unknown filter value matches everything.
    """
    if not filter_value:
        return True
    checks = {
        "ACTIVE_SHIP": mode_flags.is_active_ship,
        "CONTRACTS": mode_flags.is_contract,
        "MARKET_ORDERS": mode_flags.is_market_order,
        "DELIVERIES": mode_flags.in_deliveries,
        "ASSET_SAFETY": mode_flags.in_asset_safety,
        "ITEM_HANGAR": mode_flags.in_item_hangar,
        "SHIP_HANGAR": mode_flags.in_ship_hangar,
        "OFFICE": mode_flags.in_office,
        "STRUCTURES": mode_flags.is_owned_structure,
        "INDUSTRY_JOBS": mode_flags.is_industry_job,
    }
    return checks.get(filter_value, True)
