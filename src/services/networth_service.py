"""Value summaries across assets and non-asset sources.

Market orders, industry jobs and contracts carry value that is reported next
to the asset total rather than inside it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel

from models.app import OwnerData, ResolvedAsset
from services.synthetic_assets import ACTIVE_CONTRACT_STATUSES, ACTIVE_JOB_STATUSES

if TYPE_CHECKING:
    from data import PriceSnapshot

logger = logging.getLogger(__name__)


class SourceValueSummary(BaseModel):
    """Value held in market orders, industry jobs and contracts.

    Contract values are reported as positive amounts in both directions:
    ``contracts_in_value`` for items coming to an owner, ``contracts_out_value``
    for items an owner has put up.
    """

    market_orders_value: float = 0.0
    industry_jobs_value: float = 0.0
    contracts_in_value: float = 0.0
    contracts_out_value: float = 0.0


class AssetTotals(BaseModel):
    """Aggregate value, volume and quantity of a set of resolved assets."""

    total_value: float = 0.0
    total_volume: float = 0.0
    total_items: int = 0


def summarize_source_values(
    owners: Iterable[OwnerData], prices: PriceSnapshot
) -> SourceValueSummary:
    """Sum the value of open orders, running jobs and active contracts.

    Buy orders count their escrow, sell orders price times remaining volume.
    Contracts are counted once even when several owners see them, and courier
    contracts are skipped.

    Args:
        owners: Raw record sets for every owner
        prices: Price snapshot for this pass

    Returns:
        SourceValueSummary
    """
    owner_list = list(owners)
    character_ids = {d.owner.character_id for d in owner_list}
    corporation_ids = {
        d.owner.corporation_id for d in owner_list if d.owner.corporation_id
    }
    corporation_ids.update(
        d.owner.id for d in owner_list if d.owner.owner_type == "corporation"
    )

    summary = SourceValueSummary()
    seen_orders: set[int] = set()
    seen_jobs: set[int] = set()
    seen_contracts: set[int] = set()

    for data in owner_list:
        for order in data.orders:
            if order.order_id in seen_orders or order.state != "active":
                continue
            seen_orders.add(order.order_id)
            summary.market_orders_value += order.listed_value

        for job in data.jobs:
            if job.job_id in seen_jobs or job.status not in ACTIVE_JOB_STATUSES:
                continue
            seen_jobs.add(job.job_id)
            summary.industry_jobs_value += (
                prices.get_item_price(job.output_type_id) * job.runs
            )

        for entry in data.contracts:
            contract = entry.contract
            if contract.contract_id in seen_contracts:
                continue
            seen_contracts.add(contract.contract_id)
            if contract.status not in ACTIVE_CONTRACT_STATUSES:
                continue
            if contract.type == "courier":
                continue

            item_value = sum(
                prices.get_item_price(
                    item.type_id,
                    item_id=item.item_id,
                    is_blueprint_copy=bool(item.is_blueprint_copy),
                )
                * item.quantity
                for item in entry.items or ()
            )
            is_issuer = contract.issuer_id in character_ids
            is_assignee = (
                contract.assignee_id in character_ids
                or contract.assignee_id in corporation_ids
            )
            if is_assignee and not is_issuer:
                summary.contracts_in_value += item_value
            elif is_issuer:
                summary.contracts_out_value += item_value

    logger.debug("Source value summary: %s", summary)
    return summary


def summarize_assets(resolved_assets: Iterable[ResolvedAsset]) -> AssetTotals:
    """Totals over a flat list of resolved assets."""
    totals = AssetTotals()
    for ra in resolved_assets:
        totals.total_value += ra.total_value
        totals.total_volume += ra.total_volume
        totals.total_items += ra.quantity
    return totals
