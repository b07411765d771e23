"""Data models: raw EVE records (eve) and resolved application models (app)."""

from .eve import (
    EveAsset,
    EveCharacterShip,
    EveContract,
    EveContractItem,
    EveContractWithItems,
    EveIndustryJob,
    EveLocation,
    EveMarketOrder,
    EveStarbase,
    EveStructure,
)

__all__ = [
    "EveAsset",
    "EveCharacterShip",
    "EveContract",
    "EveContractItem",
    "EveContractWithItems",
    "EveIndustryJob",
    "EveLocation",
    "EveMarketOrder",
    "EveStarbase",
    "EveStructure",
]
