"""Location flag sets, category IDs and reserved type IDs used for classification."""


class CategoryIds:
    """SDE category IDs the resolver branches on."""

    OWNER = 1
    STATION = 3
    SHIP = 6
    MODULE = 7
    CHARGE = 8
    BLUEPRINT = 9
    SKILL = 16
    DRONE = 18
    IMPLANT = 20
    STARBASE = 23
    STRUCTURE = 65
    STRUCTURE_MODULE = 66
    SKIN = 91


# Office container type ID
OFFICE_TYPE_ID = 27

# Sentinel flags carried by synthetic records
ACTIVE_SHIP_FLAG = "ActiveShip"
SELL_ORDER_FLAG = "SellOrder"
BUY_ORDER_FLAG = "BuyOrder"
CONTRACT_FLAG = "InContract"
INDUSTRY_JOB_FLAG = "IndustryJob"
OWNED_STRUCTURE_FLAG = "Structure"

MARKET_ORDER_FLAGS = frozenset({SELL_ORDER_FLAG, BUY_ORDER_FLAG})

HANGAR_FLAGS = frozenset(
    {
        "Hangar",
        "CorpSAG1",
        "CorpSAG2",
        "CorpSAG3",
        "CorpSAG4",
        "CorpSAG5",
        "CorpSAG6",
        "CorpSAG7",
    }
)

DELIVERY_FLAGS = frozenset({"Deliveries", "CorpDeliveries"})

ASSET_SAFETY_FLAGS = frozenset({"AssetSafety"})

_SLOTS = [f"{slot}{i}" for slot in ("LoSlot", "MedSlot", "HiSlot", "RigSlot") for i in range(8)]

# Items fitted to or carried inside ships and containers
SHIP_CONTENT_FLAGS = frozenset(
    {
        "AutoFit",
        "Cargo",
        "DroneBay",
        "ShipHangar",
        "FleetHangar",
        "FighterBay",
        "SpecializedFuelBay",
        "SpecializedOreHold",
        "SpecializedGasHold",
        "SpecializedMineralHold",
        "SpecializedSalvageHold",
        "SpecializedShipHold",
        "SpecializedSmallShipHold",
        "SpecializedMediumShipHold",
        "SpecializedLargeShipHold",
        "SpecializedIndustrialShipHold",
        "SpecializedAmmoHold",
        "SpecializedCommandCenterHold",
        "SpecializedPlanetaryCommoditiesHold",
        "SpecializedMaterialBay",
        "Locked",
        "Unlocked",
        *(f"FighterTube{i}" for i in range(5)),
        *(f"SubSystemSlot{i}" for i in range(8)),
        *_SLOTS,
    }
)

# Fuel, service modules and fighters installed in a structure
STRUCTURE_CONTENT_FLAGS = frozenset(
    {
        "StructureActive",
        "StructureInactive",
        "StructureOffline",
        "StructureFuel",
        "StructureDeedBay",
        "FighterBay",
        "QuantumCoreRoom",
        "SecondaryStorage",
        *(f"FighterTube{i}" for i in range(5)),
        *(f"StructureServiceSlot{i}" for i in range(8)),
        *(f"ServiceSlot{i}" for i in range(8)),
    }
)

# Corporation office divisions
DIVISION_FLAG_NAMES: dict[str, str] = {
    "CorpSAG1": "1st Division",
    "CorpSAG2": "2nd Division",
    "CorpSAG3": "3rd Division",
    "CorpSAG4": "4th Division",
    "CorpSAG5": "5th Division",
    "CorpSAG6": "6th Division",
    "CorpSAG7": "7th Division",
    "OfficeFolder": "Office Folder",
    "OfficeImpound": "Impounded",
}

OFFICE_DIVISION_FLAGS = frozenset(DIVISION_FLAG_NAMES)


def is_fitted_or_content_flag(flag: str) -> bool:
    """Return True if the flag places an item inside a ship, container or structure."""
    return flag in SHIP_CONTENT_FLAGS or flag in STRUCTURE_CONTENT_FLAGS


def get_division_number(flag: str) -> int | None:
    """Return the hangar division number (1-7) for a CorpSAG flag."""
    if flag.startswith("CorpSAG") and flag[7:].isdigit():
        number = int(flag[7:])
        if 1 <= number <= 7:
            return number
    return None
