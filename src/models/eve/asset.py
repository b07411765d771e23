"""EVE Online asset data models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class EveAsset(BaseModel):
    """Represents a character or corporation asset record.

    Records produced by the synthetic asset injector share this shape so the
    resolver never has to know which source a record came from.
    """

    model_config = ConfigDict(frozen=True)

    item_id: int = Field(..., description="Unique ID for this asset")
    type_id: int = Field(..., description="Type ID of the item")
    quantity: int = Field(..., ge=1, description="Quantity of items")
    location_id: int = Field(..., description="Location ID where asset is stored")
    location_type: Literal["station", "solar_system", "item", "other"] = Field(
        ..., description="Type of location (station, solar_system, item, other)"
    )
    location_flag: str = Field(
        ..., description="Specific location flag (Hangar, Cargo, etc)"
    )
    is_singleton: bool = Field(..., description="Whether this is a unique item")
    is_blueprint_copy: bool | None = Field(
        None, description="If blueprint, whether it's a copy"
    )
