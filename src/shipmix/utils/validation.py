"""Record validation run at batch start.

Malformed orders are rejected one by one and reported; a malformed service
catalog stops the batch, since every order would be assigned against it.
"""
import logging
import math
from numbers import Number
from typing import List, Tuple

import pandas as pd

from shipmix.exceptions import InvalidOrderRecord, InvalidServiceRecord
from shipmix.models import ORDER_COLUMNS, SERVICE_COLUMNS
from shipmix.utils.logging import Colors, Symbols

logger = logging.getLogger(__name__)

REJECTED_COLUMNS = ['order_id', 'reason']


def validate_orders(orders_df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Split orders into valid records and rejected ones.

    Returns:
        (valid_df, rejected_df). ``valid_df`` keeps the input row order and
        index with ``order_id`` as str, ``distance_to_destination_mi`` as
        float and ``days_to_deliver`` as int. ``rejected_df`` has one row per
        rejected record with columns ``order_id, reason``, indexed like the
        rejected input rows.

    Raises:
        ValueError: the orders index is not unique.
    """
    if not orders_df.index.is_unique:
        raise ValueError("orders_df must have a unique index")

    missing = [col for col in ORDER_COLUMNS if col not in orders_df.columns]
    errors: List[InvalidOrderRecord] = []
    rejected_idx = []
    keep = []

    if 'order_id' in orders_df.columns:
        ids = orders_df['order_id'].map(_clean_id)
    else:
        ids = pd.Series(None, index=orders_df.index, dtype=object)
    duplicated = ids.notna() & ids.duplicated(keep=False)

    for idx, row in orders_df.iterrows():
        try:
            if missing:
                raise InvalidOrderRecord(
                    ids[idx], f"missing field(s): {', '.join(missing)}"
                )
            _check_order(ids[idx], row)
            if duplicated[idx]:
                raise InvalidOrderRecord(ids[idx], "duplicate order_id")
        except InvalidOrderRecord as e:
            errors.append(e)
            rejected_idx.append(idx)
            continue
        keep.append(idx)

    valid_df = orders_df.loc[keep].copy()
    valid_df['order_id'] = ids[keep].astype(object)
    if not valid_df.empty:
        valid_df['distance_to_destination_mi'] = valid_df['distance_to_destination_mi'].astype(float)
        valid_df['days_to_deliver'] = valid_df['days_to_deliver'].astype(float).astype(int)

    rejected_df = pd.DataFrame(
        [(e.order_id, e.reason) for e in errors],
        columns=REJECTED_COLUMNS,
        index=pd.Index(rejected_idx, dtype=orders_df.index.dtype)
    )

    if errors:
        logger.warning(
            f"{Symbols.CROSS} {len(errors)} order records rejected"
        )
        for e in errors:
            logger.warning(f"{Colors.YELLOW}  → {e}{Colors.RESET}")

    return valid_df, rejected_df


def _check_order(order_id, row: pd.Series) -> None:
    if order_id is None:
        raise InvalidOrderRecord(None, "missing order_id")

    distance = row['distance_to_destination_mi']
    if not _is_number(distance):
        raise InvalidOrderRecord(order_id, f"distance_to_destination_mi is not a number: {distance!r}")
    if distance <= 0:
        raise InvalidOrderRecord(order_id, f"distance_to_destination_mi must be positive: {distance}")

    days = row['days_to_deliver']
    if not _is_number(days):
        raise InvalidOrderRecord(order_id, f"days_to_deliver is not a number: {days!r}")
    if days < 0 or float(days) != int(days):
        raise InvalidOrderRecord(order_id, f"days_to_deliver must be a non-negative integer: {days}")


def validate_services(services_df: pd.DataFrame) -> pd.DataFrame:
    """
    Check the service catalog and return a normalised copy.

    Carrier names are stripped and lower-cased, ``service_type`` is a str.

    Raises:
        InvalidServiceRecord: on the first record breaking an invariant.
    """
    missing = [col for col in SERVICE_COLUMNS if col not in services_df.columns]
    if missing:
        raise InvalidServiceRecord(None, None, f"missing column(s): {', '.join(missing)}")

    services = services_df.copy()
    services['delivery_service'] = services['delivery_service'].map(_clean_id)
    services['service_type'] = services['service_type'].map(_clean_id)

    for _, row in services.iterrows():
        carrier, service_type = row['delivery_service'], row['service_type']
        if carrier is None or service_type is None:
            raise InvalidServiceRecord(carrier, service_type, "missing carrier or service_type")
        if not _is_number(row['cost_per_package']) or row['cost_per_package'] <= 0:
            raise InvalidServiceRecord(
                carrier, service_type,
                f"cost_per_package must be positive: {row['cost_per_package']!r}"
            )
        days = row['days_in_transit']
        if not _is_number(days) or days <= 0 or float(days) != int(days):
            raise InvalidServiceRecord(
                carrier, service_type, f"days_in_transit must be a positive integer: {days!r}"
            )
        if not _is_number(row['total_miles']) or row['total_miles'] < 0:
            raise InvalidServiceRecord(
                carrier, service_type,
                f"total_miles must be a non-negative number: {row['total_miles']!r}"
            )

    services['delivery_service'] = services['delivery_service'].str.lower()

    duplicated = services.duplicated(['delivery_service', 'service_type'])
    if duplicated.any():
        first = services[duplicated].iloc[0]
        raise InvalidServiceRecord(
            first['delivery_service'], first['service_type'],
            "service_type is not unique within its carrier"
        )

    return services


def _clean_id(value):
    """Identifier as a stripped str, None when missing or blank."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


def _is_number(value) -> bool:
    return (
        isinstance(value, Number)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
