"""Application/business models (domain layer)."""

from .asset_tree import ASSET_NODE_TYPES, AssetTreeNode, TreeMode, TreeNodeType
from .location import LocationInfo
from .owner import Owner, OwnerData
from .reference import CachedLocation, CachedStructure, CachedType
from .resolved_asset import (
    AssetDisplayNames,
    AssetModeFlags,
    ContractInfo,
    ResolvedAsset,
    matches_asset_type_filter,
)

__all__ = [
    "ASSET_NODE_TYPES",
    "AssetDisplayNames",
    "AssetModeFlags",
    "AssetTreeNode",
    "CachedLocation",
    "CachedStructure",
    "CachedType",
    "ContractInfo",
    "LocationInfo",
    "Owner",
    "OwnerData",
    "ResolvedAsset",
    "TreeMode",
    "TreeNodeType",
    "matches_asset_type_filter",
]
