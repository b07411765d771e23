"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add src to Python path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from data import PriceSnapshot, ReferenceSnapshot  # noqa: E402
from models.app import (  # noqa: E402
    CachedLocation,
    CachedStructure,
    CachedType,
    Owner,
)
from models.eve import EveAsset  # noqa: E402
from utils.config import AssetEngineConfig, reset_config  # noqa: E402

THE_FORGE = 10000002
JITA = 30000142
JITA_4_4 = 60003760
JITA_MOON = 40009077
KEEPSTAR = 1035466617946

TRITANIUM = 34
RIFTER = 587
OFFICE = 27
CONTAINER = 3293
ASTRAHUS = 35832
CONTROL_TOWER = 16213
RIFTER_BLUEPRINT = 691


@pytest.fixture(autouse=True)
def _reset_global_config():
    """Keep the global config singleton from leaking between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def engine_config() -> AssetEngineConfig:
    return AssetEngineConfig(
        structure_id_threshold=1_000_000_000_000,
        max_parent_depth=64,
        include_buy_orders=False,
        active_ship_scopes=[
            "esi-location.read_location.v1",
            "esi-location.read_ship_type.v1",
        ],
        unknown_region_name="Unknown Region",
    )


@pytest.fixture
def cached_types() -> list[CachedType]:
    return [
        CachedType(
            id=TRITANIUM,
            name="Tritanium",
            category_id=4,
            category_name="Material",
            group_id=18,
            group_name="Mineral",
            volume=0.01,
        ),
        CachedType(
            id=RIFTER,
            name="Rifter",
            category_id=6,
            category_name="Ship",
            group_id=25,
            group_name="Frigate",
            volume=27289.0,
            packaged_volume=2500.0,
        ),
        CachedType(
            id=OFFICE,
            name="Office",
            category_id=2,
            category_name="Celestial",
            group_id=16,
            group_name="Station Services",
        ),
        CachedType(
            id=CONTAINER,
            name="Medium Standard Container",
            category_id=2,
            category_name="Celestial",
            group_id=12,
            group_name="Cargo Container",
            volume=65.0,
            packaged_volume=33.0,
        ),
        CachedType(
            id=ASTRAHUS,
            name="Astrahus",
            category_id=65,
            category_name="Structure",
            group_id=1657,
            group_name="Citadel",
            volume=8000.0,
        ),
        CachedType(
            id=CONTROL_TOWER,
            name="Caldari Control Tower",
            category_id=23,
            category_name="Starbase",
            group_id=365,
            group_name="Control Tower",
            volume=8000.0,
        ),
        CachedType(
            id=RIFTER_BLUEPRINT,
            name="Rifter Blueprint",
            category_id=9,
            category_name="Blueprint",
            group_id=105,
            group_name="Frigate Blueprint",
            volume=0.01,
        ),
    ]


@pytest.fixture
def cached_locations() -> list[CachedLocation]:
    return [
        CachedLocation(id=THE_FORGE, name="The Forge", location_type="region"),
        CachedLocation(
            id=JITA,
            name="Jita",
            location_type="solar_system",
            solar_system_id=JITA,
            solar_system_name="Jita",
            region_id=THE_FORGE,
            region_name="The Forge",
        ),
        CachedLocation(
            id=JITA_4_4,
            name="Jita IV - Moon 4 - Caldari Navy Assembly Plant",
            location_type="station",
            solar_system_id=JITA,
            solar_system_name="Jita",
            region_id=THE_FORGE,
            region_name="The Forge",
        ),
        CachedLocation(
            id=JITA_MOON,
            name="Jita IV - Moon 4",
            location_type="moon",
            solar_system_id=JITA,
            solar_system_name="Jita",
            region_id=THE_FORGE,
            region_name="The Forge",
        ),
    ]


@pytest.fixture
def cached_structures() -> list[CachedStructure]:
    return [
        CachedStructure(
            id=KEEPSTAR, name="Jita - Trade Hub", solar_system_id=JITA, type_id=35834
        )
    ]


@pytest.fixture
def snapshot(cached_types, cached_locations, cached_structures) -> ReferenceSnapshot:
    return ReferenceSnapshot.from_entries(
        types=cached_types,
        locations=cached_locations,
        structures=cached_structures,
        version=1,
    )


@pytest.fixture
def empty_snapshot() -> ReferenceSnapshot:
    return ReferenceSnapshot()


@pytest.fixture
def prices() -> PriceSnapshot:
    return PriceSnapshot(
        type_prices={TRITANIUM: 5.0, RIFTER: 400_000.0, RIFTER_BLUEPRINT: 1_000_000.0}
    )


@pytest.fixture
def character() -> Owner:
    return Owner(
        owner_type="character",
        id=90000001,
        character_id=90000001,
        corporation_id=98000001,
        name="Test Pilot",
    )


@pytest.fixture
def corporation() -> Owner:
    return Owner(
        owner_type="corporation",
        id=98000001,
        character_id=90000001,
        name="Test Corp",
    )


def make_asset(
    item_id: int,
    type_id: int = TRITANIUM,
    location_id: int = JITA_4_4,
    location_type: str = "station",
    location_flag: str = "Hangar",
    quantity: int = 1,
    is_singleton: bool = False,
    is_blueprint_copy: bool | None = None,
) -> EveAsset:
    """Build an asset record with sensible defaults."""
    return EveAsset(
        item_id=item_id,
        type_id=type_id,
        quantity=quantity,
        location_id=location_id,
        location_type=location_type,  # type: ignore[arg-type]
        location_flag=location_flag,
        is_singleton=is_singleton,
        is_blueprint_copy=is_blueprint_copy,
    )
