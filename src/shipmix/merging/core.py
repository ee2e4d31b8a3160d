"""Attach final assignments back onto the order records."""

import pandas as pd

from shipmix.models import FINAL_COLUMNS, SHIPPING_FIELDS, AssignmentStatus


def merge_assignments(orders_df: pd.DataFrame, final_df: pd.DataFrame) -> pd.DataFrame:
    """
    Left-join final assignments onto orders by ``order_id``.

    Every order row is kept exactly once and in its input order. Unassigned
    orders carry null shipping fields and ``assignment_status='unassigned'``.
    Shipping columns already present on the orders are replaced.

    Raises:
        pandas.errors.MergeError: an order has more than one final assignment.
    """
    base = orders_df.drop(
        columns=[c for c in SHIPPING_FIELDS + ['assignment_status'] if c in orders_df.columns]
    )
    final = final_df[FINAL_COLUMNS]

    merged = base.merge(
        final,
        on='order_id',
        how='left',
        validate='many_to_one',
        indicator=True
    )

    merged['assignment_status'] = (
        (merged['_merge'] == 'both')
        .map({True: AssignmentStatus.ASSIGNED.value, False: AssignmentStatus.UNASSIGNED.value})
    )
    merged = merged.drop(columns='_merge')
    merged.index = orders_df.index
    return merged
