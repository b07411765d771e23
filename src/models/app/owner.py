"""Asset owner model."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models.eve import (
    EveAsset,
    EveCharacterShip,
    EveContractWithItems,
    EveIndustryJob,
    EveLocation,
    EveMarketOrder,
    EveStarbase,
    EveStructure,
)


class Owner(BaseModel):
    """A character or corporation whose assets are being resolved."""

    model_config = ConfigDict(frozen=True)

    owner_type: Literal["character", "corporation"] = "character"
    id: int = Field(..., description="Character or corporation ID")
    character_id: int = Field(
        ..., description="Character whose token is used for this owner"
    )
    corporation_id: int | None = None
    name: str = ""

    @property
    def key(self) -> str:
        """Stable owner key used for scope checks and node grouping."""
        return f"{self.owner_type}-{self.id}"


class OwnerData(BaseModel):
    """Every raw record set the engine consumes for one owner."""

    owner: Owner
    assets: list[EveAsset] = Field(default_factory=list)
    orders: list[EveMarketOrder] = Field(default_factory=list)
    contracts: list[EveContractWithItems] = Field(default_factory=list)
    jobs: list[EveIndustryJob] = Field(default_factory=list)
    structures: list[EveStructure] = Field(default_factory=list)
    starbases: list[EveStarbase] = Field(default_factory=list)
    active_ship: EveCharacterShip | None = None
    character_location: EveLocation | None = None
    asset_names: dict[int, str] = Field(
        default_factory=dict, description="Player-given names keyed by item ID"
    )
