"""Reference data cache and immutable per-pass snapshots.

The fetch pipeline writes types, locations and structures into a
``ReferenceCache`` as they arrive. Every resolution pass works against a
``ReferenceSnapshot`` taken at the start of the pass, so writes that land
mid-pass never change what that pass sees.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TypeVar

from pydantic import BaseModel

from models.app import CachedLocation, CachedStructure, CachedType
from utils.exceptions import ReferenceDataError

logger = logging.getLogger(__name__)

_Entry = TypeVar("_Entry", bound=BaseModel)


class ReferenceSnapshot:
    """Read-only view of reference data at one instant.

    All lookups come in has/get pairs; ``get_*`` returns None for unknown IDs.
    """

    def __init__(
        self,
        types: Mapping[int, CachedType] | None = None,
        locations: Mapping[int, CachedLocation] | None = None,
        structures: Mapping[int, CachedStructure] | None = None,
        version: int = 0,
    ):
        self._types = MappingProxyType(dict(types or {}))
        self._locations = MappingProxyType(dict(locations or {}))
        self._structures = MappingProxyType(dict(structures or {}))
        self.version = version

    @classmethod
    def from_entries(
        cls,
        types: Iterable[CachedType] = (),
        locations: Iterable[CachedLocation] = (),
        structures: Iterable[CachedStructure] = (),
        version: int = 0,
    ) -> ReferenceSnapshot:
        """Build a snapshot directly from entry lists."""
        return cls(
            types={t.id: t for t in types},
            locations={loc.id: loc for loc in locations},
            structures={s.id: s for s in structures},
            version=version,
        )

    def has_type(self, type_id: int) -> bool:
        return type_id in self._types

    def get_type(self, type_id: int) -> CachedType | None:
        return self._types.get(type_id)

    def has_location(self, location_id: int) -> bool:
        return location_id in self._locations

    def get_location(self, location_id: int) -> CachedLocation | None:
        return self._locations.get(location_id)

    def has_structure(self, structure_id: int) -> bool:
        return structure_id in self._structures

    def get_structure(self, structure_id: int) -> CachedStructure | None:
        return self._structures.get(structure_id)

    def __repr__(self) -> str:
        return (
            f"ReferenceSnapshot(version={self.version}, types={len(self._types)}, "
            f"locations={len(self._locations)}, structures={len(self._structures)})"
        )


class ReferenceCache:
    """Mutable, versioned store of reference data.

    Each save bumps ``version``; consumers compare versions to decide when a
    new resolution pass is needed.
    """

    def __init__(self) -> None:
        self._types: dict[int, CachedType] = {}
        self._locations: dict[int, CachedLocation] = {}
        self._structures: dict[int, CachedStructure] = {}
        self._version = 0
        self._lock = threading.Lock()

    @property
    def version(self) -> int:
        return self._version

    def save_types(self, types: Iterable[CachedType]) -> int:
        """Store type entries. Returns the number of entries written."""
        return self._save(self._types, types, CachedType)

    def save_locations(self, locations: Iterable[CachedLocation]) -> int:
        """Store location entries. Returns the number of entries written."""
        return self._save(self._locations, locations, CachedLocation)

    def save_structures(self, structures: Iterable[CachedStructure]) -> int:
        """Store structure entries. Returns the number of entries written."""
        return self._save(self._structures, structures, CachedStructure)

    def _save(
        self,
        target: dict[int, _Entry],
        entries: Iterable[_Entry],
        expected: type[_Entry],
    ) -> int:
        batch = list(entries)
        for entry in batch:
            if not isinstance(entry, expected):
                raise ReferenceDataError(
                    f"Expected {expected.__name__}, got {type(entry).__name__}"
                )
        if not batch:
            return 0
        with self._lock:
            for entry in batch:
                target[entry.id] = entry  # type: ignore[attr-defined]
            self._version += 1
        logger.debug(
            "Saved %d %s entries (cache version %d)",
            len(batch),
            expected.__name__,
            self._version,
        )
        return len(batch)

    def snapshot(self) -> ReferenceSnapshot:
        """Take a consistent, immutable snapshot of the current contents."""
        with self._lock:
            return ReferenceSnapshot(
                types=self._types,
                locations=self._locations,
                structures=self._structures,
                version=self._version,
            )
