"""Location information models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class LocationInfo(BaseModel):
    """Result of resolving a location identifier against reference data."""

    model_config = ConfigDict(frozen=True)

    location_id: int = Field(...)
    kind: Literal["station", "structure", "solar_system"] = Field(
        ..., description="station, structure or solar_system"
    )
    name: str = Field(...)
    system_id: int | None = Field(
        default=None,
        description="Solar system this location is in (itself for systems)",
    )
    system_name: str = ""
    region_id: int | None = None
    region_name: str = ""
    is_placeholder: bool = Field(
        default=False,
        description="True if name couldn't be resolved and is a placeholder",
    )
