"""Service for resolving location identifiers to names, systems and regions.

Resolution Strategy:
- Player Structures (>= structure ID threshold): structure reference entries
- Solar Systems (30000000-39999999): location reference entries
- NPC Stations and everything else: location reference entries

Missing reference data is an expected state while the fetch pipeline is still
loading; it yields deterministic placeholder names instead of errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.app import LocationInfo
from utils.config import get_config

if TYPE_CHECKING:
    from data import ReferenceSnapshot

logger = logging.getLogger(__name__)


class LocationService:
    """Resolves location IDs against a reference snapshot."""

    SOLAR_SYSTEM_ID_RANGE = (30_000_000, 40_000_000)

    def __init__(
        self,
        snapshot: ReferenceSnapshot,
        structure_id_threshold: int | None = None,
        unknown_region_name: str | None = None,
    ):
        """Initialize location service.

        Args:
            snapshot: Reference data snapshot for this pass
            structure_id_threshold: First ID treated as a player structure
            unknown_region_name: Region name used when none can be resolved
        """
        config = get_config().assets
        self._snapshot = snapshot
        self._threshold = (
            structure_id_threshold
            if structure_id_threshold is not None
            else config.structure_id_threshold
        )
        self._unknown_region_name = (
            unknown_region_name
            if unknown_region_name is not None
            else config.unknown_region_name
        )

    @property
    def structure_id_threshold(self) -> int:
        return self._threshold

    @property
    def unknown_region_name(self) -> str:
        return self._unknown_region_name

    def is_structure_id(self, location_id: int) -> bool:
        return location_id >= self._threshold

    def is_solar_system_id(self, location_id: int) -> bool:
        low, high = self.SOLAR_SYSTEM_ID_RANGE
        return low <= location_id < high

    def is_known_location(self, location_id: int) -> bool:
        """Return True if reference data holds an entry for this ID."""
        return self._snapshot.has_structure(
            location_id
        ) or self._snapshot.has_location(location_id)

    def is_resolvable(self, location_id: int) -> bool:
        """Return True if the ID can stand as a root location on its own."""
        return self.is_structure_id(location_id) or self.is_known_location(
            location_id
        )

    def resolve(self, location_id: int) -> LocationInfo:
        """Resolve any location ID.

        Args:
            location_id: Station, structure or solar system ID

        Returns:
            LocationInfo; placeholders are flagged with is_placeholder
        """
        if self.is_structure_id(location_id):
            return self.resolve_structure(location_id)
        location = self._snapshot.get_location(location_id)
        if location is None:
            logger.debug("Location %d not in reference data", location_id)
            is_system = self.is_solar_system_id(location_id)
            return LocationInfo(
                location_id=location_id,
                kind="solar_system" if is_system else "station",
                name=f"Location {location_id}",
                system_id=location_id if is_system else None,
                is_placeholder=True,
            )
        if location.location_type == "solar_system":
            return self.resolve_system(location_id)
        return self.resolve_station(location_id)

    def resolve_structure(self, structure_id: int) -> LocationInfo:
        """Resolve a player structure by its ID."""
        structure = self._snapshot.get_structure(structure_id)
        if structure is None:
            logger.debug("Structure %d not in reference data", structure_id)
            return LocationInfo(
                location_id=structure_id,
                kind="structure",
                name=f"Structure {structure_id}",
                is_placeholder=True,
            )

        system_name = ""
        region_id = None
        region_name = ""
        if structure.solar_system_id:
            system_name, region_id, region_name = self._system_context(
                structure.solar_system_id
            )
        return LocationInfo(
            location_id=structure_id,
            kind="structure",
            name=structure.name,
            system_id=structure.solar_system_id,
            system_name=system_name,
            region_id=region_id,
            region_name=region_name,
        )

    def resolve_system(self, system_id: int) -> LocationInfo:
        """Resolve a solar system by its ID."""
        system = self._snapshot.get_location(system_id)
        system_name, region_id, region_name = self._system_context(system_id)
        return LocationInfo(
            location_id=system_id,
            kind="solar_system",
            name=system.name if system else f"System {system_id}",
            system_id=system_id,
            system_name=system_name,
            region_id=region_id,
            region_name=region_name,
            is_placeholder=system is None,
        )

    def resolve_station(self, location_id: int) -> LocationInfo:
        """Resolve an NPC station (or any other non-structure location)."""
        location = self._snapshot.get_location(location_id)
        if location is None:
            logger.debug("Location %d not in reference data", location_id)
            return LocationInfo(
                location_id=location_id,
                kind="station",
                name=f"Location {location_id}",
                is_placeholder=True,
            )

        system_id = location.solar_system_id
        system_name = location.solar_system_name
        region_id = location.region_id
        region_name = location.region_name
        if system_id is not None:
            ctx_name, ctx_region_id, ctx_region_name = self._system_context(system_id)
            system_name = system_name or ctx_name
            region_id = region_id if region_id is not None else ctx_region_id
            region_name = region_name or ctx_region_name
        if region_id is not None and not region_name:
            region_name = self.region_name(region_id) or ""

        return LocationInfo(
            location_id=location_id,
            kind="station",
            name=location.name,
            system_id=system_id,
            system_name=system_name,
            region_id=region_id,
            region_name=region_name,
        )

    def resolve_moon(self, moon_id: int, starbase_id: int) -> LocationInfo:
        """Resolve a starbase anchored at a moon; the moon names the location."""
        moon = self._snapshot.get_location(moon_id)
        if moon is None:
            return LocationInfo(
                location_id=starbase_id,
                kind="structure",
                name=f"Moon {moon_id}",
                is_placeholder=True,
            )

        system_name = moon.solar_system_name
        region_id = moon.region_id
        region_name = moon.region_name
        if moon.solar_system_id is not None:
            ctx_name, ctx_region_id, ctx_region_name = self._system_context(
                moon.solar_system_id
            )
            system_name = system_name or ctx_name
            region_id = region_id if region_id is not None else ctx_region_id
            region_name = region_name or ctx_region_name
        return LocationInfo(
            location_id=starbase_id,
            kind="structure",
            name=moon.name,
            system_id=moon.solar_system_id,
            system_name=system_name,
            region_id=region_id,
            region_name=region_name,
        )

    def region_name(self, region_id: int) -> str | None:
        region = self._snapshot.get_location(region_id)
        return region.name if region else None

    def location_name(self, location_id: int) -> str:
        """Display name for a root location ID."""
        return self.resolve(location_id).name

    def _system_context(self, system_id: int) -> tuple[str, int | None, str]:
        """Return (system name, region ID, region name) for a system."""
        system = self._snapshot.get_location(system_id)
        if system is None:
            return f"System {system_id}", None, ""
        region_name = system.region_name
        if system.region_id is not None and not region_name:
            region_name = self.region_name(system.region_id) or ""
        return system.name, system.region_id, region_name
