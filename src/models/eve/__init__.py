"""EVE Online data models (domain layer)."""

from .asset import EveAsset
from .contract import EveContract, EveContractItem, EveContractWithItems
from .industry_job import EveIndustryJob
from .location import EveCharacterShip, EveLocation
from .market_order import EveMarketOrder
from .structure import EveStarbase, EveStructure

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
