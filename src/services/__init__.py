"""Unified service layer for the asset resolution engine.

Domain-oriented submodules:
    asset_pipeline: per-pass orchestration & memoization
    asset_service : parent-chain walk, classification & valuation
    asset_tree_service: hierarchical aggregation
    location_service: location resolution & placeholders
    networth_service: order, job & contract value summaries
    reference_service: missing reference ID collection
    synthetic_assets: synthetic records for non-asset sources
    tree_filter / tree_traversal: display-time tree helpers

"""

from .asset_pipeline import AssetPipeline, PassResult
from .asset_service import AssetService, ResolutionContext
from .asset_tree_service import AssetTreeService, should_include_by_mode
from .location_service import LocationService
from .networth_service import SourceValueSummary, summarize_source_values
from .reference_service import ReferenceService, ResolutionIds, collect_resolution_ids
from .synthetic_assets import SyntheticAssetService
from .tree_filter import filter_tree, get_tree_categories, mark_source_flags

__all__ = [
    "AssetPipeline",
    "AssetService",
    "AssetTreeService",
    "LocationService",
    "PassResult",
    "ReferenceService",
    "ResolutionContext",
    "ResolutionIds",
    "SourceValueSummary",
    "SyntheticAssetService",
    "collect_resolution_ids",
    "filter_tree",
    "get_tree_categories",
    "mark_source_flags",
    "should_include_by_mode",
    "summarize_source_values",
]
