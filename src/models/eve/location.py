"""Character location and active ship models."""

from pydantic import BaseModel, Field


class EveLocation(BaseModel):
    """Where a character currently is, from ESI."""

    solar_system_id: int = Field(..., description="Solar system the character is in")
    station_id: int | None = Field(None, description="NPC station if docked")
    structure_id: int | None = Field(None, description="Player structure if docked")

    @property
    def docked_at(self) -> int | None:
        """Structure or station the character is docked in; None in space."""
        return self.structure_id or self.station_id or None


class EveCharacterShip(BaseModel):
    """The ship a character is currently flying."""

    ship_item_id: int = Field(..., description="Item ID of the active ship")
    ship_type_id: int = Field(..., description="Type ID of the active ship")
    ship_name: str = Field("", description="Player-given ship name")
