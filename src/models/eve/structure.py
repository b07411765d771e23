"""EVE Online owned structure and starbase data models."""

from pydantic import BaseModel, Field


class EveStructure(BaseModel):
    """Represents a player-owned Upwell structure from the corporation listing."""

    structure_id: int = Field(..., description="Item ID of the structure")
    type_id: int = Field(..., description="Type ID of the structure")
    system_id: int = Field(..., description="Solar system where structure is located")
    name: str | None = Field(None, description="Name of the structure")
    state: str | None = Field(None, description="Structure state (shield_vulnerable, ...)")


class EveStarbase(BaseModel):
    """Represents a player-owned starbase (POS) anchored at a moon."""

    starbase_id: int = Field(..., description="Item ID of the starbase")
    type_id: int = Field(..., description="Type ID of the control tower")
    system_id: int = Field(..., description="Solar system of the starbase")
    moon_id: int | None = Field(None, description="Moon the starbase is anchored at")
    state: str | None = Field(None, description="online, offline, reinforced, ...")
