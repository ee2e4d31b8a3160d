"""
Cross-carrier selection of the final assignment per order.

Candidates are ranked by ``(cost, carrier_rank)``. Ranks are unique per
carrier and a carrier offers at most one candidate per order, so the first
candidate of each order is a unique winner.
"""

import logging
from typing import Dict, Iterable

import pandas as pd

from shipmix.exceptions import UnknownCarrierPriority
from shipmix.models import CANDIDATE_COLUMNS, FINAL_COLUMNS

logger = logging.getLogger(__name__)


def check_carrier_ranks(carriers: Iterable[str], carrier_rank: Dict[str, int]) -> None:
    """Raise UnknownCarrierPriority for carriers without a configured rank."""
    unknown = {c for c in carriers if c not in carrier_rank}
    if unknown:
        raise UnknownCarrierPriority(unknown)


def select_best_services(
    candidates_df: pd.DataFrame,
    carrier_rank: Dict[str, int]
) -> pd.DataFrame:
    """
    Resolve all carrier candidates to a single final assignment per order.

    Args:
        candidates_df: Union of every carrier's candidates with columns
            ``order_id, delivery_service, service_type, cost``. Infeasibility
            markers must not be included.
        carrier_rank: Carrier to tie-break rank, lower wins.

    Returns:
        DataFrame with columns ``order_id, delivery_service, service_type,
        shipping_cost``, one row per order that has at least one candidate,
        sorted by ``order_id``. Orders without candidates are absent.

    Raises:
        UnknownCarrierPriority: a candidate's carrier has no rank.
        ValueError: a carrier offers more than one candidate for an order.
    """
    if candidates_df.empty:
        return pd.DataFrame(columns=FINAL_COLUMNS)

    check_carrier_ranks(candidates_df['delivery_service'].unique(), carrier_rank)

    duplicated = candidates_df.duplicated(['order_id', 'delivery_service'])
    if duplicated.any():
        pairs = candidates_df.loc[duplicated, ['order_id', 'delivery_service']]
        raise ValueError(
            f"Multiple candidates per (order, carrier): {pairs.to_records(index=False).tolist()}"
        )

    ranked = candidates_df[CANDIDATE_COLUMNS].assign(
        carrier_rank=candidates_df['delivery_service'].map(carrier_rank)
    )
    ranked = ranked.sort_values(['order_id', 'cost', 'carrier_rank'], kind='mergesort')
    winners = ranked.drop_duplicates('order_id', keep='first')

    final_df = (
        winners
        .drop(columns='carrier_rank')
        .rename(columns={'cost': 'shipping_cost'})
        .reset_index(drop=True)
    )

    ties = _count_cost_ties(ranked)
    if ties:
        logger.debug(f"Carrier rank decided {ties} cost ties")

    return final_df[FINAL_COLUMNS]


def _count_cost_ties(ranked: pd.DataFrame) -> int:
    """Number of orders whose two best candidates share the same cost."""
    best_two = ranked.groupby('order_id', sort=False).head(2)
    per_order = best_two.groupby('order_id', sort=False)['cost'].agg(['count', 'nunique'])
    return int(((per_order['count'] == 2) & (per_order['nunique'] == 1)).sum())
