"""Reference data entries held in the reference cache.

These are the shapes returned by ``ReferenceSnapshot.get_*``. Every field
except the identifier and name is optional because entries are populated
progressively by the fetch pipeline.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CachedType(BaseModel):
    """Type information needed for classification, naming and volume."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    category_id: int | None = None
    category_name: str = ""
    group_id: int | None = None
    group_name: str = ""
    volume: float | None = Field(None, ge=0)
    packaged_volume: float | None = Field(None, ge=0)


class CachedLocation(BaseModel):
    """A public location: region, solar system, moon or NPC station."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    location_type: Literal["region", "solar_system", "moon", "station", "other"] = (
        "station"
    )
    solar_system_id: int | None = None
    solar_system_name: str = ""
    region_id: int | None = None
    region_name: str = ""


class CachedStructure(BaseModel):
    """A player structure (Upwell structure or starbase) resolved by name."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    solar_system_id: int | None = None
    type_id: int | None = None
    owner_id: int | None = None
