"""Resolution pass pipeline.

Ties the engine together: snapshot the reference cache, inject synthetic
records, resolve every record, and summarize non-asset values. A pass is only
recomputed when the caller's input version or the cache version changes.

Usage:
    pipeline = AssetPipeline(reference_cache, scope_checker)
    result = pipeline.recompute(owners, prices, inputs_version=3)
    tree = pipeline.build_tree(TreeMode.ALL)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from models.app import AssetTreeNode, OwnerData, ResolvedAsset, TreeMode
from models.app.asset_flags import MARKET_ORDER_FLAGS
from models.eve import EveAsset
from services.asset_service import AssetService, ResolutionContext
from services.asset_tree_service import AssetTreeService
from services.networth_service import SourceValueSummary, summarize_source_values
from services.reference_service import ResolutionIds, collect_resolution_ids
from services.synthetic_assets import (
    ACTIVE_CONTRACT_STATUSES,
    ScopeChecker,
    SyntheticAssetService,
)
from services.tree_filter import filter_tree, mark_source_flags
from utils.config import AssetEngineConfig, get_config
from utils.exceptions import ServiceError

if TYPE_CHECKING:
    from data import PriceSnapshot, ReferenceCache, ReferenceSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PassResult:
    """Output of one resolution pass.

    Attributes:
        inputs_version: Caller's input version the pass was computed for.
        cache_version: Reference cache version of the snapshot used.
        snapshot: The reference snapshot the pass was computed against.
        resolved_assets: One entity per real and synthetic record.
        reauth_owner_keys: Owners whose tokens lack active ship scopes.
        source_values: Value held in orders, jobs and contracts.
        contract_item_ids: Item IDs listed in active contracts.
        order_item_ids: Item IDs of market order records.
        missing_ids: Reference IDs the snapshot did not contain.
    """

    inputs_version: int
    cache_version: int
    snapshot: ReferenceSnapshot
    resolved_assets: list[ResolvedAsset]
    reauth_owner_keys: frozenset[str] = frozenset()
    source_values: SourceValueSummary = field(default_factory=SourceValueSummary)
    contract_item_ids: frozenset[int] = frozenset()
    order_item_ids: frozenset[int] = frozenset()
    missing_ids: ResolutionIds = field(default_factory=ResolutionIds)


class AssetPipeline:
    """Runs resolution passes and memoizes the latest result."""

    def __init__(
        self,
        reference_cache: ReferenceCache,
        scope_checker: ScopeChecker,
        config: AssetEngineConfig | None = None,
    ):
        """Initialize the pipeline.

        Args:
            reference_cache: Versioned reference data store
            scope_checker: Callable(owner_key, scope) -> bool
            config: Engine settings; defaults to the global configuration
        """
        self._cache = reference_cache
        self._scope_checker = scope_checker
        self._config = config or get_config().assets
        self._result: PassResult | None = None

    @property
    def result(self) -> PassResult | None:
        return self._result

    def recompute(
        self,
        owners: Iterable[OwnerData],
        prices: PriceSnapshot,
        inputs_version: int,
    ) -> PassResult:
        """Run a pass unless nothing changed since the previous one.

        Args:
            owners: Raw record sets for every owner
            prices: Price snapshot
            inputs_version: Caller's counter, bumped whenever owners or prices change

        Returns:
            The current PassResult
        """
        cache_version = self._cache.version
        previous = self._result
        if (
            previous is not None
            and previous.inputs_version == inputs_version
            and previous.cache_version == cache_version
        ):
            return previous

        snapshot = self._cache.snapshot()
        self._result = self._run_pass(list(owners), prices, inputs_version, snapshot)
        return self._result

    def build_tree(
        self,
        mode: TreeMode = TreeMode.ALL,
        search: str = "",
        category: str | None = None,
        division_names: Mapping[int, str] | None = None,
    ) -> list[AssetTreeNode]:
        """Build, flag and filter the tree for the latest pass.

        Raises:
            ServiceError: If no pass has been computed yet
        """
        if self._result is None:
            raise ServiceError("No resolution pass has been computed yet")
        result = self._result
        tree = AssetTreeService(result.snapshot, self._config).build(
            result.resolved_assets, mode, division_names
        )
        mark_source_flags(tree, result.contract_item_ids, result.order_item_ids)
        return filter_tree(tree, search, category)

    def _run_pass(
        self,
        owners: list[OwnerData],
        prices: PriceSnapshot,
        inputs_version: int,
        snapshot: ReferenceSnapshot,
    ) -> PassResult:
        real_ids = [a.item_id for data in owners for a in data.assets]
        injector = SyntheticAssetService(self._scope_checker, real_ids, self._config)

        context = ResolutionContext()
        records_by_owner: list[tuple[OwnerData, list[EveAsset]]] = []
        reauth: set[str] = set()
        contract_ids: set[int] = set()
        order_ids: set[int] = set()

        for data in owners:
            synthetic = injector.inject(data)
            if synthetic.needs_reauth:
                reauth.add(data.owner.key)
            records_by_owner.append((data, [*data.assets, *synthetic.records]))

            context.asset_names.update(data.asset_names)
            context.asset_names.update(synthetic.custom_names)
            context.contract_info.update(synthetic.contract_info)
            context.owned_structure_ids.update(s.structure_id for s in data.structures)
            context.starbase_moon_ids.update(
                {s.starbase_id: s.moon_id for s in data.starbases if s.moon_id}
            )
            context.structure_system_ids.update(
                {s.structure_id: s.system_id for s in data.structures}
            )

            contract_ids.update(synthetic.contract_info)
            for entry in data.contracts:
                if entry.contract.status not in ACTIVE_CONTRACT_STATUSES:
                    continue
                contract_ids.update(
                    item.item_id
                    for item in entry.items or ()
                    if item.item_id is not None
                )
            order_ids.update(
                r.item_id
                for r in synthetic.records
                if r.location_flag in MARKET_ORDER_FLAGS
            )

        service = AssetService(snapshot, prices, self._config)
        resolved = service.resolve_all_assets(
            ((data.owner, records) for data, records in records_by_owner), context
        )

        result = PassResult(
            inputs_version=inputs_version,
            cache_version=snapshot.version,
            snapshot=snapshot,
            resolved_assets=resolved,
            reauth_owner_keys=frozenset(reauth),
            source_values=summarize_source_values(owners, prices),
            contract_item_ids=frozenset(contract_ids),
            order_item_ids=frozenset(order_ids),
            missing_ids=collect_resolution_ids(snapshot, owners, self._config),
        )
        logger.info(
            "Resolution pass complete: %d assets for %d owners "
            "(inputs v%d, cache v%d, %d owners need re-auth)",
            len(resolved),
            len(owners),
            inputs_version,
            snapshot.version,
            len(reauth),
        )
        return result
