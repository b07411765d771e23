"""Tests for asset resolution: parent chains, root locations, flags and value."""

import pytest
from conftest import (
    ASTRAHUS,
    CONTAINER,
    CONTROL_TOWER,
    JITA,
    JITA_4_4,
    JITA_MOON,
    KEEPSTAR,
    OFFICE,
    RIFTER,
    RIFTER_BLUEPRINT,
    THE_FORGE,
    TRITANIUM,
    make_asset,
)

from data import PriceSnapshot
from models.app import CachedType, ContractInfo, matches_asset_type_filter
from services.asset_service import (
    AssetService,
    ResolutionContext,
    get_asset_display_names,
    matches_search,
)


@pytest.fixture
def service(snapshot, prices, engine_config):
    return AssetService(snapshot, prices, engine_config)


def _resolve(service, character, asset, *others, context=None):
    lookup = service.build_lookup_map([(character, [asset, *others])])
    return service.resolve_asset(asset, character, lookup, context)


class TestParentChain:
    def test_chain_runs_nearest_first(self, service):
        outer = make_asset(1, type_id=CONTAINER, is_singleton=True)
        inner = make_asset(
            2, type_id=CONTAINER, location_id=1, location_type="item",
            location_flag="Unlocked", is_singleton=True,
        )
        item = make_asset(3, location_id=2, location_type="item", location_flag="Unlocked")
        lookup = {a.item_id: a for a in (outer, inner, item)}

        walk = service.build_parent_chain(item, lookup)

        assert [p.item_id for p in walk.chain] == [2, 1]
        assert walk.stop_reason == "root"
        assert service.get_root_flag(item, walk.chain) == "Hangar"

    def test_cycle_terminates_and_flags_orphan(self, service, character):
        a = make_asset(1, type_id=CONTAINER, location_id=2, location_type="item", is_singleton=True)
        b = make_asset(2, type_id=CONTAINER, location_id=1, location_type="item", is_singleton=True)

        walk = service.build_parent_chain(a, {1: a, 2: b})
        resolved = _resolve(service, character, a, b)

        assert walk.stop_reason == "cycle"
        assert [p.item_id for p in walk.chain] == [2]
        assert resolved.has_orphaned_parent
        assert len({p.item_id for p in resolved.parent_chain}) == len(resolved.parent_chain)

    def test_depth_bound(self, snapshot, prices, engine_config, character):
        config = engine_config.model_copy(update={"max_parent_depth": 3})
        service = AssetService(snapshot, prices, config)
        assets = [make_asset(1, type_id=CONTAINER, is_singleton=True)]
        for i in range(2, 8):
            assets.append(
                make_asset(i, type_id=CONTAINER, location_id=i - 1, location_type="item",
                           is_singleton=True)
            )
        lookup = {a.item_id: a for a in assets}

        walk = service.build_parent_chain(assets[-1], lookup)

        assert walk.stop_reason == "depth"
        assert len(walk.chain) == 3

    def test_missing_parent_at_known_station_is_not_orphan(self, service, character):
        item = make_asset(3, location_id=JITA_4_4, location_type="item")

        resolved = _resolve(service, character, item)

        assert not resolved.has_orphaned_parent
        assert resolved.root_location_id == JITA_4_4
        assert resolved.root_location_type == "station"

    def test_missing_parent_above_threshold_is_not_orphan(self, service, character):
        item = make_asset(3, location_id=1_050_000_000_000, location_type="item")

        resolved = _resolve(service, character, item)

        assert not resolved.has_orphaned_parent
        assert resolved.root_location_type == "structure"
        assert resolved.location_name == "Structure 1050000000000"

    def test_missing_unknown_parent_is_orphan(self, service, character):
        item = make_asset(3, location_id=777, location_type="item")

        resolved = _resolve(service, character, item)

        assert resolved.has_orphaned_parent
        assert get_asset_display_names(resolved).location_name == "Unknown Parent"


class TestRootLocation:
    def test_structure_root(self, service, character):
        resolved = _resolve(
            service, character, make_asset(1, location_id=KEEPSTAR, location_type="other")
        )

        assert resolved.root_location_type == "structure"
        assert resolved.root_location_id == KEEPSTAR
        assert resolved.location_name == "Jita - Trade Hub"
        assert resolved.system_id == JITA
        assert resolved.region_id == THE_FORGE

    def test_threshold_boundary(self, service, character, engine_config):
        threshold = engine_config.structure_id_threshold
        at = _resolve(service, character, make_asset(1, location_id=threshold, location_type="other"))
        below = _resolve(
            service, character, make_asset(2, location_id=threshold - 1, location_type="other")
        )

        assert at.root_location_type == "structure"
        assert below.root_location_type == "station"

    def test_deployed_structure_keyed_by_own_item_id(self, service, character):
        structure = make_asset(
            1_040_000_000_001, type_id=ASTRAHUS, location_id=JITA,
            location_type="solar_system", location_flag="AutoFit", is_singleton=True,
        )

        resolved = _resolve(service, character, structure)

        assert resolved.root_location_type == "structure"
        assert resolved.root_location_id == 1_040_000_000_001
        assert resolved.system_id == JITA
        assert resolved.region_name == "The Forge"

    def test_starbase_uses_moon_when_known(self, service, character):
        tower = make_asset(
            5001, type_id=CONTROL_TOWER, location_id=JITA,
            location_type="solar_system", location_flag="AutoFit", is_singleton=True,
        )
        context = ResolutionContext(starbase_moon_ids={5001: JITA_MOON})

        with_moon = _resolve(service, character, tower, context=context)
        without_moon = _resolve(service, character, tower)

        assert with_moon.root_location_type == "structure"
        assert with_moon.root_location_id == 5001
        assert with_moon.location_name == "Jita IV - Moon 4"
        assert without_moon.root_location_type == "structure"
        assert without_moon.location_name == "Jita"
        assert without_moon.system_id == JITA

    def test_unknown_owned_structure_takes_system_from_context(self, service, character):
        structure_id = 1_045_000_000_000
        record = make_asset(
            structure_id, type_id=ASTRAHUS, location_id=structure_id,
            location_type="other", location_flag="Structure", is_singleton=True,
        )
        context = ResolutionContext(structure_system_ids={structure_id: JITA})

        with_system = _resolve(service, character, record, context=context)
        without_system = _resolve(service, character, record)

        assert with_system.root_location_type == "structure"
        assert with_system.location_name == f"Structure {structure_id}"
        assert with_system.system_id == JITA
        assert with_system.region_id == THE_FORGE
        assert without_system.system_id is None

    def test_ship_in_space_resolves_to_system(self, service, character):
        ship = make_asset(
            9, type_id=RIFTER, location_id=JITA, location_type="solar_system",
            location_flag="AutoFit", is_singleton=True,
        )

        resolved = _resolve(service, character, ship)

        assert resolved.root_location_type == "solar_system"
        assert resolved.root_location_id == JITA
        assert resolved.location_name == "Jita"

    def test_unknown_region_falls_back(self, empty_snapshot, prices, engine_config, character):
        service = AssetService(empty_snapshot, prices, engine_config)

        resolved = _resolve(service, character, make_asset(1, location_id=60_000_004))

        assert resolved.location_name == "Location 60000004"
        assert resolved.region_name == "Unknown Region"
        assert resolved.type_name == f"Unknown Type {TRITANIUM}"
        assert resolved.price == 5.0
        assert resolved.volume == 0.0


class TestModeFlags:
    def test_hangar_item_and_ship(self, service, character):
        item = _resolve(service, character, make_asset(1))
        ship = _resolve(service, character, make_asset(2, type_id=RIFTER, is_singleton=True))

        assert item.mode_flags.in_hangar and item.mode_flags.in_item_hangar
        assert not item.mode_flags.in_ship_hangar
        assert ship.mode_flags.in_ship_hangar
        assert not ship.mode_flags.in_item_hangar

    def test_root_flag_drives_hangar_for_contents(self, service, character):
        ship = make_asset(1, type_id=RIFTER, is_singleton=True)
        cargo = make_asset(2, location_id=1, location_type="item", location_flag="Cargo")

        resolved = _resolve(service, character, cargo, ship)

        assert resolved.root_flag == "Hangar"
        assert resolved.mode_flags.in_item_hangar

    def test_deliveries_and_asset_safety(self, service, character):
        delivery = _resolve(service, character, make_asset(1, location_flag="Deliveries"))
        safety = _resolve(service, character, make_asset(2, location_flag="AssetSafety"))

        assert delivery.mode_flags.in_deliveries
        assert not delivery.mode_flags.in_hangar
        assert safety.mode_flags.in_asset_safety
        assert get_asset_display_names(safety).location_name == "Asset Safety"

    def test_office_and_structure_ancestry(self, service, character):
        office = make_asset(
            1, type_id=OFFICE, location_id=KEEPSTAR, location_type="other",
            location_flag="OfficeFolder", is_singleton=True,
        )
        item = make_asset(2, location_id=1, location_type="item", location_flag="CorpSAG1")
        citadel = make_asset(
            3, type_id=ASTRAHUS, location_id=JITA, location_type="solar_system",
            location_flag="AutoFit", is_singleton=True,
        )
        fuel = make_asset(4, location_id=3, location_type="item", location_flag="StructureFuel")

        in_office = _resolve(service, character, item, office)
        in_structure = _resolve(service, character, fuel, citadel)

        assert in_office.mode_flags.in_office
        assert in_structure.mode_flags.in_structure

    def test_owned_structure_contents(self, service, character):
        citadel = make_asset(
            3, type_id=ASTRAHUS, location_id=JITA, location_type="solar_system",
            location_flag="AutoFit", is_singleton=True,
        )
        fuel = make_asset(4, location_id=3, location_type="item", location_flag="StructureFuel")
        docked = make_asset(5, location_id=3, location_type="item", location_flag="Hangar")
        context = ResolutionContext(owned_structure_ids={3})

        structure = _resolve(service, character, citadel, context=context)
        installed = _resolve(service, character, fuel, citadel, context=context)
        stored = _resolve(service, character, docked, citadel, context=context)

        assert structure.mode_flags.is_owned_structure
        assert installed.mode_flags.is_owned_structure
        assert not stored.mode_flags.is_owned_structure

    @pytest.mark.parametrize(
        ("flag", "attribute"),
        [
            ("InContract", "is_contract"),
            ("SellOrder", "is_market_order"),
            ("BuyOrder", "is_market_order"),
            ("IndustryJob", "is_industry_job"),
            ("ActiveShip", "is_active_ship"),
        ],
    )
    def test_synthetic_flags(self, service, character, flag, attribute):
        resolved = _resolve(service, character, make_asset(-1, location_flag=flag))

        assert getattr(resolved.mode_flags, attribute)


class TestEconomics:
    def test_value_and_packaged_volume(self, service, character):
        resolved = _resolve(service, character, make_asset(1, type_id=RIFTER, quantity=2))

        assert resolved.price == 400_000.0
        assert resolved.total_value == 800_000.0
        assert resolved.volume == 2500.0
        assert resolved.total_volume == 5000.0

    def test_blueprint_copy_is_worthless(self, service, character):
        bpc = _resolve(
            service, character,
            make_asset(1, type_id=RIFTER_BLUEPRINT, is_singleton=True, is_blueprint_copy=True),
        )
        bpo = _resolve(
            service, character,
            make_asset(2, type_id=RIFTER_BLUEPRINT, is_singleton=True, is_blueprint_copy=False),
        )

        assert bpc.price == 0.0
        assert bpc.is_blueprint_copy
        assert bpo.price == 1_000_000.0
        assert get_asset_display_names(bpc).type_name == "Rifter Blueprint (Copy)"
        assert get_asset_display_names(bpo).type_name == "Rifter Blueprint (Original)"

    def test_item_price_overrides_type_price(self, snapshot, engine_config, character):
        prices = PriceSnapshot(type_prices={TRITANIUM: 5.0}, item_prices={42: 99.0})
        service = AssetService(snapshot, prices, engine_config)

        resolved = _resolve(service, character, make_asset(42))

        assert resolved.price == 99.0

    def test_missing_volume_is_zero(self, cached_locations, prices, engine_config, character):
        from data import ReferenceSnapshot

        snap = ReferenceSnapshot.from_entries(
            types=[CachedType(id=TRITANIUM, name="Tritanium")], locations=cached_locations
        )
        service = AssetService(snap, prices, engine_config)

        assert _resolve(service, character, make_asset(1)).volume == 0.0


class TestResolveAll:
    def test_skips_owner_and_station_pseudo_items(
        self, cached_locations, prices, engine_config, character
    ):
        from data import ReferenceSnapshot

        snap = ReferenceSnapshot.from_entries(
            types=[
                CachedType(id=TRITANIUM, name="Tritanium", category_id=4),
                CachedType(id=1373, name="Character", category_id=1),
                CachedType(id=1529, name="Station", category_id=3),
            ],
            locations=cached_locations,
        )
        service = AssetService(snap, prices, engine_config)

        resolved = service.resolve_all_assets(
            [(character, [make_asset(1), make_asset(2, type_id=1373), make_asset(3, type_id=1529)])]
        )

        assert [r.item_id for r in resolved] == [1]

    def test_lookup_spans_owners(self, service, character, corporation):
        office = make_asset(
            1, type_id=OFFICE, location_id=JITA_4_4, location_flag="OfficeFolder",
            is_singleton=True,
        )
        item = make_asset(2, location_id=1, location_type="item", location_flag="CorpSAG2")

        resolved = service.resolve_all_assets([(corporation, [office]), (character, [item])])

        by_id = {r.item_id: r for r in resolved}
        assert by_id[2].root_location_id == JITA_4_4
        assert by_id[2].mode_flags.in_office
        assert by_id[2].owner == character

    def test_idempotent(self, service, character):
        ship = make_asset(1, type_id=RIFTER, is_singleton=True)
        cargo = make_asset(2, location_id=1, location_type="item", location_flag="Cargo", quantity=5)
        owners = [(character, [ship, cargo])]

        assert service.resolve_all_assets(owners) == service.resolve_all_assets(owners)

    def test_context_metadata_attached(self, service, character):
        info = ContractInfo(contract_id=1, issuer_id=character.character_id, issuer_corporation_id=1)
        context = ResolutionContext(asset_names={1: "Bob"}, contract_info={-5: info})

        named = _resolve(
            service, character, make_asset(1, type_id=RIFTER, is_singleton=True), context=context
        )
        listed = _resolve(
            service, character, make_asset(-5, location_flag="InContract"), context=context
        )

        assert named.custom_name == "Bob"
        assert get_asset_display_names(named).type_name == "Rifter (Bob)"
        assert listed.contract_info == info


def test_matches_search(service, character):
    resolved = _resolve(service, character, make_asset(1))
    names = get_asset_display_names(resolved)

    assert matches_search(resolved, names, "")
    assert matches_search(resolved, names, "trit")
    assert matches_search(resolved, names, "FORGE")
    assert matches_search(resolved, names, "test pilot")
    assert not matches_search(resolved, names, "veldspar")


@pytest.mark.parametrize(
    ("filter_value", "expected"),
    [("", True), ("ITEM_HANGAR", True), ("SHIP_HANGAR", False), ("CONTRACTS", False), ("BOGUS", True)],
)
def test_asset_type_filter(service, character, filter_value, expected):
    resolved = _resolve(service, character, make_asset(1))

    assert matches_asset_type_filter(resolved.mode_flags, filter_value) is expected
